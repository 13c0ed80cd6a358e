MODULE_ID = "maintenance"
MODULE_VERSION = "1.0.0"
MODULE_DESCRIPTION = "Interval-based maintenance scheduling and the append-only maintenance history"

ROUTES = [
    "maintenance.routes",
]

TABLES = [
    "maintenance_tasks",
    "maintenance_history",
]


def register(app) -> None:
    """Register the maintenance module routes."""
    from modules.maintenance import routes

    app.include_router(routes.router, prefix="/api")
