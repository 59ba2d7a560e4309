from shipweight.models.order import Order, OrderLine, OrderProperty
from shipweight.models.organization import Organization
from shipweight.models.shipping_method import ShippingMethod
from shipweight.models.shipping_rule_set import ShippingRuleSet

__all__ = [
    "Order",
    "OrderLine",
    "OrderProperty",
    "Organization",
    "ShippingMethod",
    "ShippingRuleSet",
]
