from __future__ import annotations

from fastapi import APIRouter
from starlette.responses import JSONResponse

from buildergen.core.generators.templates import TEMPLATES_DIR
from buildergen.core.observability.metrics import inc_named

router = APIRouter()

REQUIRED_TEMPLATES = ("immutable_list.java.j2", "checked_list.java.j2")


# ------------------------------------------------------------
# Unversioned health
# ------------------------------------------------------------
@router.get("/health/live")
async def live():
    inc_named("health_live")
    return {"status": "ok"}


@router.get("/health/ready")
async def ready():
    """
    Readiness reflects ability to render: the Java templates must be present.
    """
    inc_named("health_ready")
    problems: list[str] = []
    for name in REQUIRED_TEMPLATES:
        if not (TEMPLATES_DIR / "java" / name).is_file():
            problems.append(f"missing_template:{name}")

    if problems:
        return JSONResponse(status_code=503, content={"status": "not_ready", "problems": problems})
    return {"status": "ready"}


# ------------------------------------------------------------
# Versioned health
# ------------------------------------------------------------
@router.get("/api/v1/health/live")
def liveness():
    inc_named("health_live")
    return {"status": "alive"}
