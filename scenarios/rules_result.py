from dataclasses import dataclass, field


@dataclass
class AlertResult:
    business_rule: str
    description: str = ""
    alert_type: str = "bug"     # bug | verify


@dataclass
class RulesResult:
    alerts: list[AlertResult] = field(default_factory=list)
    should_stop: bool = False
    stop_reason: str = ""
    expected_stop: bool = True
    instructions: dict = field(default_factory=dict)
    # Instrukcje dla kolejnych etapów, np.:
    # {'remove_ids': ['sauce-labs-onesie']} : usuń z koszyka przed checkoutem
