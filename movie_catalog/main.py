"""
Movie catalog API: application factory, error handlers and entry point.
"""

import logging

import uvicorn
from fastapi import FastAPI
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from movie_catalog.config import Config
from movie_catalog.cors import install_cors
from movie_catalog.logging_config import setup_logging
from movie_catalog.movies import router as movies_router
from movie_catalog.movies.utils import MovieStore, load_movies

logger = logging.getLogger(__name__)

NOT_FOUND_TEXT = "Sorry cant find that!"
SERVER_ERROR_TEXT = "Something broke!"


async def log_requests(request, call_next):
    logger.info("A request has been received: %s %s", request.method, request.url.path)
    return await call_next(request)


async def not_found_handler(request, exc: StarletteHTTPException):
    # Starlette raises a bare "Not Found" when no route matches, and 405 when
    # the path exists under other methods; both are unmatched routes here.
    # Route-level 404s carry their own detail and keep the JSON body.
    if exc.status_code == 405 or (exc.status_code == 404 and exc.detail == "Not Found"):
        return PlainTextResponse(NOT_FOUND_TEXT, status_code=404)
    return await http_exception_handler(request, exc)


async def server_error_handler(request, exc: Exception):
    logger.error("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
    return PlainTextResponse(SERVER_ERROR_TEXT, status_code=500)


def create_app(store: MovieStore = None, config=Config) -> FastAPI:
    """Build the API around `store`, seeding one from MOVIES_FILE if none is given."""
    if store is None:
        store = MovieStore(load_movies(config.MOVIES_FILE))

    app = FastAPI(title="Movie Catalog API", version="1.0.0")
    app.state.store = store

    app.include_router(movies_router.router)

    @app.get("/")
    def root():
        return {"message": "Hola mundo"}

    app.add_exception_handler(StarletteHTTPException, not_found_handler)
    app.add_exception_handler(Exception, server_error_handler)

    install_cors(app, config.ALLOWED_ORIGINS)
    app.add_middleware(BaseHTTPMiddleware, dispatch=log_requests)
    return app


setup_logging(Config.LOG_LEVEL, Config.LOG_JSON)
app = create_app()


def run():
    logger.info("Server listening on http://localhost:%s", Config.PORT)
    uvicorn.run(app, host=Config.HOST, port=Config.PORT, log_config=None)


if __name__ == "__main__":
    run()
