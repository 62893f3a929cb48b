import os

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--e2e",
        action="store_true",
        default=False,
        help="uruchom testy e2e na żywym Sauce Demo",
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--e2e") or os.getenv("SAUCE_E2E") == "1":
        return
    skip_e2e = pytest.mark.skip(reason="testy e2e wymagają --e2e albo SAUCE_E2E=1")
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip_e2e)
