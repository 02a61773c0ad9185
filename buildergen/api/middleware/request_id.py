import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

log = logging.getLogger("buildergen.request")

REQUEST_ID_HEADER = "X-Request-Id"


class RequestIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        rid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = rid

        start = time.time()
        response: Response = await call_next(request)
        dur_ms = int((time.time() - start) * 1000)

        response.headers[REQUEST_ID_HEADER] = rid
        log.info(
            "request rid=%s method=%s path=%s status=%s duration_ms=%s",
            rid,
            request.method,
            request.url.path,
            response.status_code,
            dur_ms,
        )
        return response
