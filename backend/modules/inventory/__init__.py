MODULE_ID = "inventory"
MODULE_VERSION = "1.0.0"
MODULE_DESCRIPTION = "Spare-parts stock with movement log and low-stock report"

ROUTES = [
    "inventory.routes",
]

TABLES = [
    "parts",
    "part_movements",
]


def register(app) -> None:
    """Register the inventory module routes."""
    from modules.inventory import routes

    app.include_router(routes.router, prefix="/api")
