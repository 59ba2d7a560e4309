from shipweight.schemas.order import (
    OrderCountryUpdate,
    OrderCreate,
    OrderCurrencyUpdate,
    OrderLineCreate,
    OrderLineResponse,
    OrderLineUpdate,
    OrderPropertyResponse,
    OrderResponse,
    OrderShippingMethodUpdate,
)
from shipweight.schemas.shipping_method import (
    ShippingMethodCreate,
    ShippingMethodResponse,
    ShippingMethodUpdate,
)
from shipweight.schemas.shipping_rule_set import (
    CountryRulesSchema,
    QuoteLine,
    ShippingQuoteRequest,
    ShippingQuoteResponse,
    ShippingRuleSetResponse,
    ShippingRuleSetUpsert,
    WeightTierSchema,
)

__all__ = [
    "CountryRulesSchema",
    "OrderCountryUpdate",
    "OrderCreate",
    "OrderCurrencyUpdate",
    "OrderLineCreate",
    "OrderLineResponse",
    "OrderLineUpdate",
    "OrderPropertyResponse",
    "OrderResponse",
    "OrderShippingMethodUpdate",
    "QuoteLine",
    "ShippingMethodCreate",
    "ShippingMethodResponse",
    "ShippingMethodUpdate",
    "ShippingQuoteRequest",
    "ShippingQuoteResponse",
    "ShippingRuleSetResponse",
    "ShippingRuleSetUpsert",
    "WeightTierSchema",
]
