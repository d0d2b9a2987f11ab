"""POST /api/validate — schema + semantic validation with optional sanitization."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from svglayout.dependencies import get_validator
from svglayout.engine.validator import JSONSchemaValidator
from svglayout.models.requests import ValidateRequest
from svglayout.models.responses import ValidateResponse
from svglayout.models.results import ValidationReport

router = APIRouter()


def _with_overrides(validator: JSONSchemaValidator, req: ValidateRequest) -> JSONSchemaValidator:
    changes = {}
    if req.strict is not None:
        changes["strict"] = req.strict
    if req.sanitize is not None:
        changes["sanitize"] = req.sanitize
    return validator.with_options(**changes) if changes else validator


@router.post("/validate", response_model=ValidateResponse)
async def validate(
    req: ValidateRequest,
    validator: JSONSchemaValidator = Depends(get_validator),
) -> ValidateResponse:
    result = _with_overrides(validator, req).validate_document(req.document)
    return ValidateResponse.from_result(result)


@router.post("/validate/report", response_model=ValidationReport)
async def validation_report(
    req: ValidateRequest,
    validator: JSONSchemaValidator = Depends(get_validator),
) -> ValidationReport:
    return _with_overrides(validator, req).create_validation_report(req.document)
