from __future__ import annotations

from fastapi import FastAPI

from buildergen import __version__
from buildergen.api.endpoints import generate, health
from buildergen.api.endpoints import metrics as metrics_ep
from buildergen.api.middleware.error_shaping import SafeErrorMiddleware
from buildergen.api.middleware.request_id import RequestIdMiddleware
from buildergen.core.settings import configure_logging

configure_logging()

app = FastAPI(
    title="Builder Codegen API",
    version=__version__,
)

# ------------------------------------------------------------
# Middleware stack (ORDER MATTERS)
# Starlette reverses add_middleware order: the LAST call = OUTERMOST wrapper.
#   SafeErrorMiddleware -> RequestIdMiddleware -> handler
# ------------------------------------------------------------
app.add_middleware(RequestIdMiddleware)
app.add_middleware(SafeErrorMiddleware)

app.include_router(health.router)
app.include_router(metrics_ep.router)
app.include_router(generate.router)
