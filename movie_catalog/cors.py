"""
Origin allow-list applied to every request before routing.

Requests without an Origin header (same-origin pages, curl, server-to-server)
always pass. Browser requests from an origin outside the allow-list are turned
away with 403 and never reach a route.
"""

import logging
from typing import Iterable, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

ALLOWED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD"]


def is_origin_allowed(origin: Optional[str], allowed: Iterable[str]) -> bool:
    if not origin:
        return True
    return origin in allowed


class OriginGateMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, allowed_origins: Iterable[str]):
        super().__init__(app)
        self.allowed_origins = frozenset(allowed_origins)

    async def dispatch(self, request, call_next):
        origin = request.headers.get("origin")
        if not is_origin_allowed(origin, self.allowed_origins):
            logger.warning("Rejected %s %s from origin %s", request.method, request.url.path, origin)
            return JSONResponse(status_code=403, content={"detail": "Not allowed by CORS"})
        return await call_next(request)


def install_cors(app: FastAPI, allowed_origins: Iterable[str]) -> None:
    """Add CORS headers for allowed origins, then the gate in front of them."""
    origins = list(allowed_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_methods=ALLOWED_METHODS,
        allow_headers=["*"],
    )
    # Added last so it runs first.
    app.add_middleware(OriginGateMiddleware, allowed_origins=origins)
