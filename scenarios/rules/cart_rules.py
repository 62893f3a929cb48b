from scenarios.run_data import CartItem, RunData
from scenarios.rules_result import RulesResult
from scenarios.rules.base_rules import BaseRules


def _readable(item: CartItem) -> bool:
    try:
        item.price_value
    except ValueError:
        return False
    return True


# ── Cart ──────────────────────────────────────────────────────────────────────

class CartRules(BaseRules):
    def check(self, run_data: RunData) -> RulesResult:
        cart = run_data.cart
        alerts = []
        instructions = {}

        if not cart or not cart.items:
            return self.stop(
                alerts=[self.alert('CART_EMPTY', 'Koszyk pusty po dodaniu produktów')],
                reason='Pusty koszyk',
            )

        if cart.total is None:
            unreadable = [item.id for item in cart.items if not _readable(item)]
            return self.stop(
                alerts=[self.alert('CART_PRICE_UNREADABLE', f'Nieczytelna cena: {unreadable}')],
                reason='Nieczytelne ceny w koszyku',
                expected=False,
            )

        if cart.cart_count != len(cart.items):
            alerts.append(self.alert(
                'CART_BADGE_MISMATCH',
                f'Badge = {cart.cart_count}, pozycji w koszyku = {len(cart.items)}',
            ))

        added = set(run_data.inventory.added) if run_data.inventory else set()
        in_cart = {item.id for item in cart.items}

        missing = sorted(added - in_cart)
        if missing:
            alerts.append(self.alert('CART_ITEMS_MISSING', f'Brak w koszyku: {missing}'))

        extra = sorted(in_cart - added)
        if extra:
            alerts.append(self.alert(
                'CART_UNEXPECTED_ITEMS',
                f'Nieoczekiwane pozycje w koszyku: {extra}',
                alert_type='verify',
            ))
            # Do checkoutu idzie tylko to, co scenariusz dodał
            instructions['remove_ids'] = extra

        wrong_quantity = [item.id for item in cart.items if item.quantity != 1]
        if wrong_quantity:
            alerts.append(self.alert('CART_QUANTITY', f'Ilość różna od 1: {wrong_quantity}'))

        return self.ok(alerts=alerts, instructions=instructions)
