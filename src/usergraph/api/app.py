"""
Main FastAPI application for the usergraph server
"""

from contextlib import asynccontextmanager
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .. import __version__
from ..config import Settings, get_settings
from ..graphql.schema import create_graphql_router, validate_schema
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware
from ..store import UserProvider, default_user_store
from .landing import LANDING_PAGE_HTML

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info(
        "Starting usergraph API...",
        users=len(app.state.users),
        graphiql=app.state.settings.graphiql,
    )

    yield

    logger.info("Shutting down usergraph API...")


def error_body(request: Request, status_code: int, detail: str | None = None) -> dict:
    """Build the JSON body returned for transport-level errors."""
    if status_code == HTTPStatus.NOT_FOUND:
        message = f"Route {request.method}:{request.url.path} not found"
    else:
        message = detail or HTTPStatus(status_code).phrase

    return {
        "message": message,
        "error": HTTPStatus(status_code).phrase,
        "statusCode": status_code,
    }


def create_app(settings: Settings | None = None, users: UserProvider | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings; defaults to the process-wide settings
        users: Read-only user provider handed to resolvers; defaults to the built-in demo users
    """
    settings = settings or get_settings()
    users = users if users is not None else default_user_store()

    app = FastAPI(
        title="usergraph",
        description="GraphQL server over a fixed in-memory user set",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.settings = settings
    app.state.users = users

    app.add_middleware(LoggingContextMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(  # pyright: ignore [reportUnusedFunction]
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(request, exc.status_code, exc.detail),
            headers=exc.headers,
        )

    @app.get("/", response_class=HTMLResponse, include_in_schema=False)
    async def landing_page():  # pyright: ignore [reportUnusedFunction]
        """Static landing page linking to the GraphiQL IDE."""
        return HTMLResponse(LANDING_PAGE_HTML)

    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    # Fail fast: the server should not start with a broken schema
    logger.info("Validating GraphQL schema...")
    validate_schema()

    app.include_router(create_graphql_router(users, path="/graphql"))
    logger.info("GraphQL endpoint initialized", endpoint="/graphql")

    if settings.graphiql:
        app.include_router(create_graphql_router(users, path="/graphiql", graphiql=True))
        logger.info("GraphiQL IDE enabled", endpoint="/graphiql")

    return app


configure_logging(debug=get_settings().debug, level=get_settings().log_level)

# Create the main application instance
app = create_app()
