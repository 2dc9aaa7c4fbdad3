"""FastAPI application for Folio API."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from folio import __version__
from folio.config import Settings
from folio.db import DocumentStore, build_store
from folio.errors import FolioError, ValidationFailed
from folio.models.content_kinds import POST, PROJECT
from folio.routes import charts, health, profile, users
from folio.routes.content import posts_router, projects_router
from folio.services.accounts import AccountService
from folio.services.charts import ChartService
from folio.services.content import ContentService
from folio.services.passwords import PasswordHasher
from folio.services.profiles import ProfileReconciler
from folio.services.token_codec import TokenCodec
from folio.utils.logging_helpers import configure_logging, log_requests

logger = logging.getLogger(__name__)

DESCRIPTION = """API for developer profiles, posts and projects.

## Features

* **Accounts**: register and sign in, receiving a bearer token
* **Profiles**: one profile per user with skills, social links, experience and education
* **Posts and projects**: create, like and comment on content items

Protected endpoints expect the token in the `x-auth-token` header."""


async def folio_error_handler(request: Request, exc: FolioError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Render request validation errors as a list of field/message pairs."""
    errors = []
    for error in exc.errors():
        location = [str(part) for part in error["loc"] if part != "body"]
        errors.append({"field": ".".join(location) or "body", "message": error["msg"]})
    failure = ValidationFailed(errors)
    return JSONResponse(status_code=failure.status_code, content=failure.to_body())


def create_app(settings: Optional[Settings] = None, store: Optional[DocumentStore] = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Configuration (read from the environment if None)
        store: Document store (built from the settings if None)

    Returns:
        FastAPI: Configured application
    """
    settings = settings or Settings()
    configure_logging(settings.log_level)
    if store is None:
        store = build_store(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await store.open()
        yield
        await store.close()

    app = FastAPI(
        title="Folio API",
        description=DESCRIPTION,
        version=__version__,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "health", "description": "Health check and status endpoints"},
            {"name": "auth", "description": "Registration and sign in"},
            {"name": "profile", "description": "User profiles"},
            {"name": "posts", "description": "Posts with likes and comments"},
            {"name": "projects", "description": "Projects with likes and comments"},
            {"name": "chart", "description": "Charts"},
        ],
    )

    # Initialize services
    token_codec = TokenCodec.from_settings(settings)
    app.state.settings = settings
    app.state.store = store
    app.state.token_codec = token_codec
    app.state.accounts = AccountService(store, token_codec, PasswordHasher(settings.bcrypt_rounds))
    app.state.profiles = ProfileReconciler(store)
    app.state.charts = ChartService(store)
    app.state.content = {kind.collection: ContentService(store, kind) for kind in (POST, PROJECT)}

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(log_requests)

    app.add_exception_handler(FolioError, folio_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(profile.router)
    app.include_router(posts_router)
    app.include_router(projects_router)
    app.include_router(charts.router)

    if settings.jwt_secret == Settings.model_fields["jwt_secret"].default:
        logger.warning("JWT_SECRET is not set, using the built-in development secret")
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
