from scenarios.run_data import RunData
from scenarios.rules_result import RulesResult
from scenarios.rules.base_rules import BaseRules


# ── Global — dane ze wszystkich etapów ───────────────────────────────────────

class GlobalRules(BaseRules):
    def check(self, run_data: RunData) -> RulesResult:
        alerts = []

        # Cena na listingu vs cena w koszyku
        if run_data.inventory and run_data.cart:
            listing_prices = {p.id: p.price for p in run_data.inventory.products}
            for item in run_data.cart.items:
                listed = listing_prices.get(item.id)
                if listed is not None and listed != item.price:
                    alerts.append(self.alert(
                        'GLOBAL_PRICE_CHANGED',
                        f'{item.name}: listing {listed} → koszyk {item.price}',
                    ))

        # Nazwy w podsumowaniu vs koszyk
        if run_data.cart and run_data.overview:
            cart_names = sorted(item.name for item in run_data.ordered_items)
            overview_names = sorted(item.name for item in run_data.overview.items)
            if cart_names != overview_names:
                alerts.append(self.alert(
                    'GLOBAL_OVERVIEW_ITEMS_MISMATCH',
                    f'Koszyk {cart_names} → podsumowanie {overview_names}',
                ))

        return self.ok(alerts=alerts)
