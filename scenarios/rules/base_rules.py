from scenarios.context import ScenarioContext
from scenarios.run_data import RunData
from scenarios.rules_result import AlertResult, RulesResult


class BaseRules:
    def __init__(self, context: ScenarioContext):
        self.context = context

    def check(self, run_data: RunData) -> RulesResult:
        raise NotImplementedError

    def alert(self, business_rule: str, description: str = "", alert_type: str = "bug") -> AlertResult:
        return AlertResult(
            business_rule=business_rule,
            description=description,
            alert_type=alert_type,
        )

    def ok(self, alerts: list[AlertResult] | None = None, instructions: dict | None = None) -> RulesResult:
        """
        Brak stopu: scenariusz idzie dalej.
          - bez alertów:                  return self.ok()
          - alerty, ale jedziemy dalej:   return self.ok(alerts=alerts)
          - instrukcje dla kolejnego etapu: return self.ok(instructions={...})
        """
        return RulesResult(
            alerts=alerts or [],
            instructions=instructions or {},
        )

    def stop(self, alerts: list[AlertResult], reason: str, expected: bool = True) -> RulesResult:
        """
        Zatrzymanie: dalsze etapy nie mają sensu (np. pusty koszyk, brak logowania).
        expected=False gdy sam stop jest błędem, nie tylko skutkiem alertu.
        """
        return RulesResult(
            alerts=alerts,
            should_stop=True,
            stop_reason=reason,
            expected_stop=expected,
        )
