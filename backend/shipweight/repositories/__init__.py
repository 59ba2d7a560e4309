from shipweight.repositories.order_property_repository import OrderPropertyRepository
from shipweight.repositories.order_repository import OrderRepository
from shipweight.repositories.shipping_method_repository import ShippingMethodRepository
from shipweight.repositories.shipping_rule_set_repository import ShippingRuleSetRepository

__all__ = [
    "OrderPropertyRepository",
    "OrderRepository",
    "ShippingMethodRepository",
    "ShippingRuleSetRepository",
]
