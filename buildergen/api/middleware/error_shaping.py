from __future__ import annotations

import logging
import traceback
from typing import Any, Callable, Dict, Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from buildergen.core.errors import GenerationError

log = logging.getLogger("buildergen.errors")


def _request_id(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None) or request.headers.get("x-request-id")


def _payload(detail: str, rid: Optional[str], **extra: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"detail": detail, **extra}
    if rid:
        payload["request_id"] = rid
    return payload


class SafeErrorMiddleware(BaseHTTPMiddleware):
    """
    Last line of defence for requests that escape the endpoints.

    A ``GenerationError`` is a broken invariant in the input or feature model:
    it becomes a 422 naming the error class, with the message kept. Anything
    else is a 500 whose body never carries the message or a traceback; the
    traceback is only logged.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except GenerationError as e:
            rid = _request_id(request)
            log.warning(
                "generation failed error=%s rid=%s path=%s msg=%s",
                type(e).__name__,
                rid,
                request.url.path,
                e,
            )
            return JSONResponse(
                status_code=422,
                content=_payload(str(e), rid, error=type(e).__name__),
            )
        except Exception as e:
            rid = _request_id(request)
            log.error(
                "Unhandled error: %s rid=%s path=%s\n%s",
                str(e),
                rid,
                request.url.path,
                traceback.format_exc(),
            )
            return JSONResponse(status_code=500, content=_payload("Internal Server Error", rid))
