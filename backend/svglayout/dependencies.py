"""FastAPI dependency injection."""

from __future__ import annotations

from fastapi import Depends

from svglayout.config import Settings, settings
from svglayout.engine import (
    DebugVisualizationSystem,
    JSONSchemaValidator,
    UnifiedInterpreter,
    ValidationOptions,
)


def get_settings() -> Settings:
    return settings


def get_validator(config: Settings = Depends(get_settings)) -> JSONSchemaValidator:
    return JSONSchemaValidator(
        ValidationOptions(
            strict=config.strict_validation,
            sanitize=config.sanitize_output,
            round_precision=config.round_precision,
        )
    )


def get_interpreter() -> UnifiedInterpreter:
    return UnifiedInterpreter()


def get_debugger(validator: JSONSchemaValidator = Depends(get_validator)) -> DebugVisualizationSystem:
    return DebugVisualizationSystem(validator)
