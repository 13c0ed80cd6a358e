MODULE_ID = "crewing"
MODULE_VERSION = "1.0.0"
MODULE_DESCRIPTION = "Crew list and crew certificates with expiry tracking"

ROUTES = [
    "crewing.routes",
]

TABLES = [
    "crew_members",
    "crew_documents",
]


def register(app) -> None:
    """Register the crewing module routes."""
    from modules.crewing import routes

    app.include_router(routes.router, prefix="/api")
