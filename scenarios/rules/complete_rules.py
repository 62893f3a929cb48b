from scenarios.run_data import RunData
from scenarios.rules_result import RulesResult
from scenarios.rules.base_rules import BaseRules


# ── Complete (potwierdzenie zamówienia) ───────────────────────────────────────

class CompleteRules(BaseRules):
    def check(self, run_data: RunData) -> RulesResult:
        complete = run_data.complete
        alerts = []

        if not complete or not complete.completed:
            alerts.append(self.alert('COMPLETE_NOT_SHOWN', 'Brak potwierdzenia zamówienia'))
            return self.ok(alerts=alerts)

        if complete.cart_count != 0:
            alerts.append(self.alert(
                'COMPLETE_CART_NOT_CLEARED',
                f'Po zamówieniu badge = {complete.cart_count}',
            ))

        return self.ok(alerts=alerts)
