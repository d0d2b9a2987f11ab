"""POST /api/debug — layout debug overlay and summary."""

from __future__ import annotations

from dataclasses import fields

from fastapi import APIRouter, Depends, HTTPException
from pydantic import TypeAdapter, ValidationError

from svglayout.dependencies import get_debugger
from svglayout.engine.config import DebugOptions
from svglayout.engine.debug import DebugVisualizationSystem
from svglayout.models.requests import DebugRequest
from svglayout.models.responses import DebugResponse
from svglayout.models.results import schema_errors

router = APIRouter()

_OPTION_NAMES = {f.name for f in fields(DebugOptions)}
_OPTIONS = TypeAdapter(DebugOptions)


@router.post("/debug", response_model=DebugResponse)
async def debug(
    req: DebugRequest,
    debugger: DebugVisualizationSystem = Depends(get_debugger),
) -> DebugResponse:
    unknown = sorted(set(req.options) - _OPTION_NAMES)
    if unknown:
        raise HTTPException(status_code=422, detail=f"Unknown debug options: {', '.join(unknown)}")
    try:
        options = _OPTIONS.validate_python(req.options)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail={"errors": schema_errors(exc)}) from exc

    checked = debugger.validator.validate_document(req.document)
    if checked.data is None:
        raise HTTPException(status_code=422, detail={"errors": checked.errors})

    result = debugger.generate_debug_visualization(checked.data, options)
    overlay = (
        debugger.create_debug_overlay_svg(checked.data, result, options)
        if req.include_overlay_svg
        else None
    )
    return DebugResponse(
        summary=debugger.get_debug_summary(result),
        statistics=result.statistics,
        total_elements=result.total_elements,
        render_time=result.render_time,
        warnings=result.warnings,
        validation_errors=result.validation_errors,
        overlay_svg=overlay,
    )
