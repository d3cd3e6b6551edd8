"""
Noteful API — Request ID Middleware
===================================

What:  Assigns a correlation id to each request and echoes it back in the
       X-Request-ID response header.
How:   Reuses a client-supplied X-Request-ID when it is at most 64 word
       characters or hyphens, otherwise generates a short UUID prefix.
       The id lives in a ContextVar so the exception handlers and loggers
       can read it without a Request object.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Client ids end up in logs and response headers
_VALID_REQUEST_ID = re.compile(r"[\w-]{1,64}", re.ASCII)

# Coroutine-local: concurrent requests on one event loop each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER, "")
        if not _VALID_REQUEST_ID.fullmatch(rid):
            rid = uuid.uuid4().hex[:8]
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
