MODULE_ID = "purchasing"
MODULE_VERSION = "1.0.0"
MODULE_DESCRIPTION = "Purchase orders with line items"

ROUTES = [
    "purchasing.routes",
]

TABLES = [
    "purchase_orders",
    "purchase_order_items",
]


def register(app) -> None:
    """Register the purchasing module routes."""
    from modules.purchasing import routes

    app.include_router(routes.router, prefix="/api")
