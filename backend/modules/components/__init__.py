MODULE_ID = "components"
MODULE_VERSION = "1.0.0"
MODULE_DESCRIPTION = "Component hierarchy keyed by SFI code, attributes, and the SFI group catalogue"

ROUTES = [
    "components.routes",
]

TABLES = [
    "components",
    "component_attributes",
    "sfi_groups",
]


def register(app) -> None:
    """Register the components module routes."""
    from modules.components import routes

    app.include_router(routes.router, prefix="/api")
