from scenarios.constants import TOTAL_TOLERANCE
from scenarios.run_data import RunData
from scenarios.rules_result import RulesResult
from scenarios.rules.base_rules import BaseRules


# ── Overview (podsumowanie) ───────────────────────────────────────────────────

class OverviewRules(BaseRules):
    def check(self, run_data: RunData) -> RulesResult:
        overview = run_data.overview
        alerts = []

        if not overview or overview.summary is None:
            return self.stop(
                alerts=[self.alert('OVERVIEW_NO_SUMMARY', 'Brak kwot w podsumowaniu')],
                reason='Brak podsumowania',
                expected=False,
            )

        summary = overview.summary
        if not summary.is_consistent():
            alerts.append(self.alert(
                'OVERVIEW_TOTAL_MISMATCH',
                f'{summary.subtotal} + {summary.tax} != {summary.total}',
            ))

        if run_data.cart:
            expected_subtotal = sum(item.price_value for item in run_data.ordered_items)
            if abs(expected_subtotal - summary.subtotal) >= TOTAL_TOLERANCE:
                alerts.append(self.alert(
                    'OVERVIEW_SUBTOTAL_MISMATCH',
                    f'Koszyk {expected_subtotal:.2f} → podsumowanie {summary.subtotal:.2f}',
                ))

        if not overview.items:
            alerts.append(self.alert('OVERVIEW_NO_ITEMS', 'Podsumowanie bez pozycji'))

        return self.ok(alerts=alerts)
