from scenarios.run_data import RunData, is_sorted
from scenarios.rules_result import RulesResult
from scenarios.rules.base_rules import BaseRules


# ── Inventory ─────────────────────────────────────────────────────────────────

class InventoryRules(BaseRules):
    def check(self, run_data: RunData) -> RulesResult:
        inventory = run_data.inventory
        alerts = []

        if not inventory or not inventory.products:
            return self.stop(
                alerts=[self.alert('INVENTORY_EMPTY', 'Listing bez produktów')],
                reason='Pusty listing',
                expected=False,
            )

        no_id = [p.name for p in inventory.products if not p.id]
        if no_id:
            alerts.append(self.alert('INVENTORY_PRODUCT_WITHOUT_ID', f'Produkty bez id: {no_id}'))

        if inventory.sort_option:
            if inventory.sort_applied != inventory.sort_option:
                alerts.append(self.alert(
                    'INVENTORY_SORT_NOT_APPLIED',
                    f'Wybrano {inventory.sort_option}, kontrolka pokazuje {inventory.sort_applied}',
                ))
            elif not self._sorted(inventory.products, inventory.sort_option):
                alerts.append(self.alert(
                    'INVENTORY_SORT_ORDER',
                    f'Kolejność produktów niezgodna z {inventory.sort_option}',
                ))

        if inventory.missing:
            alerts.append(self.alert(
                'INVENTORY_ADD_FAILED',
                f'Nie udało się dodać: {inventory.missing}',
            ))

        if inventory.cart_count != len(inventory.added):
            alerts.append(self.alert(
                'INVENTORY_BADGE_MISMATCH',
                f'Badge = {inventory.cart_count}, dodano {len(inventory.added)}',
            ))

        if not inventory.added:
            return self.stop(alerts=alerts, reason='Pusty koszyk')

        return self.ok(alerts=alerts)

    @staticmethod
    def _sorted(products, option: str) -> bool:
        try:
            return is_sorted(products, option)
        except ValueError:
            # cena, której nie da się sparsować, to też zła kolejność
            return False
