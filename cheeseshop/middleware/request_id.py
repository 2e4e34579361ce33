"""
Cheese Shop API — Request ID Middleware
========================================

What:  Assigns an ID to each incoming request and returns it in a header.
How:   Reuses the client's X-Request-ID when sent, otherwise generates a
       short UUID; stores it in a ContextVar and on request.state.
When:  Outermost custom middleware, so every later log line can read it.
"""

import logging
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = logging.getLogger(__name__)

# Coroutine-local storage for the current request ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that assigns a unique ID to each request for tracing.

    Behavior:
        1. Use the client's X-Request-ID header if present
        2. Otherwise generate the first 8 chars of a UUID4
        3. Store in ContextVar (loggers, exception handlers) and request.state
        4. Echo it back in the X-Request-ID response header
        5. Turn an unhandled exception into 500 {"error": "server error"}
           while the ID is still set, so it is logged and echoed too
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        token = request_id_var.set(rid)
        request.state.request_id = rid

        try:
            response = await call_next(request)
        except Exception as exc:
            # ServerErrorMiddleware sits outside this one; answer here while the ID is set
            logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
            response = JSONResponse(status_code=500, content={"error": "server error"})
        finally:
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = rid
        return response
