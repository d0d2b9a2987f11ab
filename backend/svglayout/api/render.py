"""POST /api/render, /api/bounds, /api/convert — document → SVG and canvas operations."""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Depends, HTTPException

from svglayout.config import Settings
from svglayout.dependencies import get_interpreter, get_settings, get_validator
from svglayout.engine.interpreter import UnifiedInterpreter
from svglayout.engine.validator import JSONSchemaValidator
from svglayout.models.document import UnifiedLayeredSVGDocument
from svglayout.models.requests import BoundsRequest, ConvertRequest, RenderRequest
from svglayout.models.responses import ConvertResponse, RenderResponse
from svglayout.models.results import SvgBounds, ValidationResult

logger = logging.getLogger(__name__)

router = APIRouter()


def _require_document(result: ValidationResult, *, require_success: bool) -> UnifiedLayeredSVGDocument:
    if result.data is None or (require_success and not result.success):
        raise HTTPException(
            status_code=422,
            detail={"errors": result.errors, "warnings": result.warnings},
        )
    return result.data


@router.post("/render", response_model=RenderResponse)
async def render(
    req: RenderRequest,
    validator: JSONSchemaValidator = Depends(get_validator),
    interpreter: UnifiedInterpreter = Depends(get_interpreter),
    config: Settings = Depends(get_settings),
) -> RenderResponse:
    start = time.perf_counter()
    result = validator.validate_document(req.document)
    document = _require_document(result, require_success=True)

    svg = interpreter.convert_to_svg(document)
    optimize = req.optimize if req.optimize is not None else config.optimize_output
    if optimize:
        svg = interpreter.optimize_svg(svg)

    elapsed = (time.perf_counter() - start) * 1000
    logger.info("Rendered document in %.1fms", elapsed)
    return RenderResponse(
        svg=svg,
        bounds=interpreter.get_svg_bounds(document),
        warnings=result.warnings,
        processing_time_ms=elapsed,
    )


@router.post("/bounds", response_model=SvgBounds)
async def bounds(
    req: BoundsRequest,
    validator: JSONSchemaValidator = Depends(get_validator),
    interpreter: UnifiedInterpreter = Depends(get_interpreter),
) -> SvgBounds:
    result = validator.with_options(sanitize=False).validate_document(req.document)
    return interpreter.get_svg_bounds(_require_document(result, require_success=False))


@router.post("/convert", response_model=ConvertResponse)
async def convert(
    req: ConvertRequest,
    validator: JSONSchemaValidator = Depends(get_validator),
    interpreter: UnifiedInterpreter = Depends(get_interpreter),
) -> ConvertResponse:
    result = validator.validate_document(req.document)
    document = _require_document(result, require_success=True)
    converted = interpreter.convert_to_aspect_ratio(
        document, req.aspect_ratio, rescale_coordinates=req.rescale_coordinates
    )
    return ConvertResponse(document=converted.to_wire(), warnings=result.warnings)
