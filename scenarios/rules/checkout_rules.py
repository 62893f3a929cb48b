from scenarios.run_data import RunData
from scenarios.rules_result import RulesResult
from scenarios.rules.base_rules import BaseRules


# ── Checkout (dane klienta) ───────────────────────────────────────────────────

class CheckoutRules(BaseRules):
    def check(self, run_data: RunData) -> RulesResult:
        checkout = run_data.checkout

        if checkout and checkout.reached_overview:
            return self.ok()

        # Niekompletne dane to scenariusz negatywny: błąd formularza jest oczekiwany
        if not self.context.checkout_info.is_complete:
            if checkout and checkout.error:
                return self.stop(alerts=[], reason=f'Walidacja formularza: {checkout.error}')
            return self.stop(
                alerts=[self.alert('CHECKOUT_NO_VALIDATION_ERROR', 'Niekompletne dane bez komunikatu błędu')],
                reason='Brak walidacji formularza',
            )

        return self.stop(
            alerts=[self.alert(
                'CHECKOUT_BLOCKED',
                checkout.error if checkout and checkout.error else 'Nie przeszło na checkout-step-two',
            )],
            reason='Checkout zablokowany',
            expected=False,
        )
