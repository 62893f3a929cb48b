from scenarios.rules.login_rules import LoginRules
from scenarios.rules.inventory_rules import InventoryRules
from scenarios.rules.cart_rules import CartRules
from scenarios.rules.checkout_rules import CheckoutRules
from scenarios.rules.overview_rules import OverviewRules
from scenarios.rules.complete_rules import CompleteRules
from scenarios.rules.global_rules import GlobalRules
