from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from buildergen.api.schemas.generate import GenerateListPropertyRequest, GenerateListPropertyResponse
from buildergen.core.errors import GenerationError, InvalidFeatureModelError
from buildergen.core.generators.render import generate_list_property
from buildergen.core.observability.metrics import inc_named
from buildergen.core.settings import load_settings

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["generate"])


@router.get("/features/default")
def default_features():
    try:
        settings = load_settings()
        features = settings.default_features()
    except InvalidFeatureModelError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"env": settings.env, "features": features.describe()}


@router.post("/generate/list-property", response_model=GenerateListPropertyResponse)
def generate_list_property_endpoint(req: GenerateListPropertyRequest):
    inc_named("api.generate.list_property")
    try:
        settings = load_settings()
    except InvalidFeatureModelError as e:
        raise HTTPException(status_code=500, detail=f"Invalid server configuration: {e}")

    try:
        features = req.features.to_features() if req.features is not None else settings.default_features()
    except InvalidFeatureModelError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        metadata = req.metadata.to_metadata()
        prop = req.property.to_property()
        builder = req.to_builder()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid request: {e}")

    try:
        fragments = generate_list_property(
            metadata,
            prop,
            features,
            builder=builder,
            shorten_imports=settings.shorten_imports,
        )
    except GenerationError as e:
        log.warning("list property generation failed property=%s err=%s", prop.name, e)
        raise HTTPException(status_code=422, detail=str(e))

    if fragments is None:
        return GenerateListPropertyResponse(applicable=False, features=features.describe())

    return GenerateListPropertyResponse(
        applicable=True,
        features=features.describe(),
        fragments=fragments.to_dict(),
    )
