MODULE_ID = "users"
MODULE_VERSION = "1.0.0"
MODULE_DESCRIPTION = "User accounts and plaintext credential check"

ROUTES = [
    "users.routes",
]

TABLES = [
    "users",
]


def register(app) -> None:
    """Register the users module routes."""
    from modules.users import routes

    app.include_router(routes.router, prefix="/api")
