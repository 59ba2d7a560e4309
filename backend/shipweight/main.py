from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shipweight.core.config import settings
from shipweight.routers import orders, shipping_methods, shipping_rules

OPENAPI_TAGS = [
    {"name": "Shipping Rules", "description": "Configure weight tiers per country."},
    {"name": "Shipping Methods", "description": "Manage shipping methods and their base fees."},
    {"name": "Orders", "description": "Manage orders; shipping is recalculated on every change."},
]

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.version,
    description=(
        "Shipping by weight API. "
        "Computes an order's shipping cost from its total weight, destination "
        "country and weight-tiered rules."
    ),
    openapi_tags=OPENAPI_TAGS,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Total-Count"],
)

app.include_router(
    shipping_rules.router, prefix="/v1/shipping_rules", tags=["Shipping Rules"]
)
app.include_router(
    shipping_methods.router, prefix="/v1/shipping_methods", tags=["Shipping Methods"]
)
app.include_router(orders.router, prefix="/v1/orders", tags=["Orders"])


@app.get("/health", tags=["Health"])
async def health() -> dict[str, str]:
    return {"status": "ok", "version": settings.version}
