from scenarios.constants import ERROR_LOCKED_OUT, EXPECTED_PRODUCT_COUNT, LOCKED_OUT_USER
from scenarios.run_data import RunData
from scenarios.rules_result import RulesResult
from scenarios.rules.base_rules import BaseRules


# ── Login ─────────────────────────────────────────────────────────────────────

class LoginRules(BaseRules):
    def check(self, run_data: RunData) -> RulesResult:
        login = run_data.login

        # Zablokowany user ma nie wejść: to poprawny wynik, nie błąd
        if self.context.username == LOCKED_OUT_USER:
            if login and not login.logged_in and login.error == ERROR_LOCKED_OUT:
                return self.stop(alerts=[], reason='Użytkownik zablokowany (oczekiwane)')
            return self.stop(
                alerts=[self.alert('LOGIN_LOCKED_OUT_NOT_BLOCKED', f'Zablokowany użytkownik: url={login.url if login else None}')],
                reason='Zablokowany użytkownik nie został zatrzymany',
                expected=False,
            )

        if not login or not login.logged_in:
            return self.stop(
                alerts=[self.alert('LOGIN_FAILED', login.error if login else 'Brak danych logowania')],
                reason='Logowanie nieudane',
                expected=False,
            )

        alerts = []
        if login.product_count != EXPECTED_PRODUCT_COUNT:
            alerts.append(self.alert(
                'LOGIN_PRODUCT_COUNT',
                f'Listing po logowaniu: {login.product_count} produktów, oczekiwano {EXPECTED_PRODUCT_COUNT}',
                alert_type='verify',
            ))
        return self.ok(alerts=alerts)
