# Wszystkie modele w jednym miejscu: Base.metadata musi je znać przed create_all
from app.models.base import Base
from app.models.suite_run import SuiteRun, SuiteRunStatus
from app.models.run import ScenarioRun, RunStatus
from app.models.basket_snapshot import BasketSnapshot
from app.models.alert import Alert, AlertType
