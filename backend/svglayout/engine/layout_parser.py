"""LayoutLanguageParser — schema + semantic checks for layout blocks.

Every check appends to an error or warning list instead of raising; strict
mode turns recoverable problems (unknown names, out-of-range offsets) into
errors, lenient mode downgrades them to warnings and substitutes defaults.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any

from pydantic import ValidationError

from svglayout.engine.config import LayoutParseOptions
from svglayout.engine.regions import RegionManager, bounds_problem, to_rect
from svglayout.engine.thresholds import (
    LARGE_OFFSET,
    LARGE_RADIAL_RADIUS,
    LARGE_RELATIVE_SIZE,
    MAX_ASPECT,
    MAX_GRID_AXIS_COUNT,
    MAX_RADIAL_COUNT,
    MAX_SIZED_REPEAT_ELEMENTS,
    MAX_SUGGESTIONS,
    MIN_ASPECT,
    MIN_CUSTOM_REGION_SIZE,
    MIN_GRID_SPACING,
    RADIAL_OFFSET_LIMIT,
    SUGGESTION_SIMILARITY,
)
from svglayout.models.document import (
    ANCHOR_NAMES,
    STANDARD_REGION_NAMES,
    AbsoluteSize,
    Anchor,
    AspectConstrainedSize,
    CustomRegion,
    GridRepetition,
    LayoutSpecification,
    RadialRepetition,
    RelativeSize,
    ResolvedLayout,
    StandardRegion,
    UnifiedLayoutConfig,
)
from svglayout.models.results import ParseResult, schema_errors
from svglayout.utils.similarity import rank_similar

logger = logging.getLogger(__name__)

_DEFAULT_REGION = StandardRegion.CENTER.value


@dataclass(frozen=True)
class ParseContext:
    """Canvas the layout will be rendered onto, for size and radius checks."""

    canvas_width: float | None = None
    canvas_height: float | None = None

    @property
    def known(self) -> bool:
        return self.canvas_width is not None and self.canvas_height is not None


@dataclass
class Issues:
    strict: bool = True
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def blocking(self, message: str) -> None:
        """Error in strict mode, warning otherwise."""
        (self.errors if self.strict else self.warnings).append(message)

    def absorb(self, errors: list[str], warnings: list[str], prefix: str = "") -> None:
        self.errors.extend(f"{prefix}{e}" for e in errors)
        self.warnings.extend(f"{prefix}{w}" for w in warnings)


class LayoutLanguageParser:
    def __init__(
        self,
        region_manager: RegionManager | None = None,
        options: LayoutParseOptions | None = None,
    ) -> None:
        self.region_manager = region_manager or RegionManager()
        self.options = options or LayoutParseOptions()

    def with_options(self, **changes: Any) -> LayoutLanguageParser:
        return LayoutLanguageParser(self.region_manager, replace(self.options, **changes))

    # -- entry points -------------------------------------------------------

    def parse_layout_specification(
        self, data: Any, context: ParseContext | None = None
    ) -> ParseResult[ResolvedLayout]:
        try:
            layout = LayoutSpecification.model_validate(data)
        except ValidationError as exc:
            return ParseResult[ResolvedLayout](success=False, errors=schema_errors(exc))

        issues = Issues(strict=self.options.strict)
        region = _DEFAULT_REGION if layout.region is None else self._check_region(layout.region, issues)
        anchor = Anchor.CENTER if layout.anchor is None else self._check_anchor(layout.anchor, issues)
        offset = (0.0, 0.0) if layout.offset is None else self._check_offset(layout.offset, issues)
        if layout.size is not None:
            self._check_size(layout.size, issues, context)
        if layout.repeat is not None:
            self._check_repeat(layout.repeat, issues, context)
        self._cross_validate(layout, issues)

        if issues.errors:
            logger.debug("Layout rejected with %d errors", len(issues.errors))
            return ParseResult[ResolvedLayout](
                success=False, errors=issues.errors, warnings=issues.warnings
            )
        resolved = ResolvedLayout(
            region=region,
            anchor=anchor,
            offset=offset,
            size=layout.size,
            repeat=layout.repeat,
            z_index=layout.z_index,
        )
        return ParseResult[ResolvedLayout](success=True, data=resolved, warnings=issues.warnings)

    def parse_layout_config(
        self, data: Any, context: ParseContext | None = None
    ) -> ParseResult[UnifiedLayoutConfig]:
        try:
            config = UnifiedLayoutConfig.model_validate(data)
        except ValidationError as exc:
            return ParseResult[UnifiedLayoutConfig](success=False, errors=schema_errors(exc))

        issues = Issues(strict=self.options.strict)
        seen: set[str] = set()
        for index, region in enumerate(config.regions or ()):
            self._check_custom_region(index, region, seen, issues)
        if config.global_anchor is not None:
            self._check_anchor(config.global_anchor, issues)
        if config.global_offset is not None:
            self._check_offset(config.global_offset, issues)

        if issues.errors:
            return ParseResult[UnifiedLayoutConfig](
                success=False, errors=issues.errors, warnings=issues.warnings
            )
        return ParseResult[UnifiedLayoutConfig](success=True, data=config, warnings=issues.warnings)

    # -- names --------------------------------------------------------------

    def _region_candidates(self) -> list[str]:
        candidates = list(STANDARD_REGION_NAMES)
        if self.options.allow_custom_regions:
            candidates.extend(self.region_manager.get_custom_regions())
        return candidates

    def _check_region(self, name: str, issues: Issues) -> str:
        candidates = self._region_candidates()
        if name in candidates:
            return name

        if issues.strict:
            issues.errors.append(f"Unknown region '{name}'")
        else:
            issues.warnings.append(f"Unknown region '{name}', will default to '{_DEFAULT_REGION}'")
        if self.options.suggest_alternatives:
            suggestions = rank_similar(name, candidates, SUGGESTION_SIMILARITY, MAX_SUGGESTIONS)
            if suggestions:
                issues.blocking(f"Did you mean: {', '.join(suggestions)}?")
        return _DEFAULT_REGION

    def _check_anchor(self, name: str, issues: Issues) -> Anchor:
        try:
            return Anchor(name)
        except ValueError:
            pass
        if issues.strict:
            issues.errors.append(f"Invalid anchor point '{name}'")
        else:
            issues.warnings.append(f"Invalid anchor point '{name}', will default to 'center'")
        if self.options.suggest_alternatives:
            suggestions = rank_similar(name, ANCHOR_NAMES, SUGGESTION_SIMILARITY, MAX_SUGGESTIONS)
            if suggestions:
                issues.blocking(f"Did you mean: {', '.join(suggestions)}?")
        return Anchor.CENTER

    # -- geometry -----------------------------------------------------------

    def _check_offset(self, offset: tuple[float, float], issues: Issues) -> tuple[float, float]:
        clamped = []
        for axis, value in zip("XY", offset):
            if -1 <= value <= 1:
                clamped.append(value)
                continue
            if issues.strict:
                issues.errors.append(f"Offset {axis} value {value} is outside valid range [-1, 1]")
            else:
                issues.warnings.append(f"Offset {axis} value {value} will be clamped to [-1, 1] range")
            clamped.append(max(-1.0, min(1.0, value)))

        x, y = offset
        if abs(x) > LARGE_OFFSET or abs(y) > LARGE_OFFSET:
            issues.warnings.append(
                f"Large offset values ({x}, {y}) may position elements outside visible area"
            )
        return (clamped[0], clamped[1])

    def _check_size(
        self,
        size: AbsoluteSize | RelativeSize | AspectConstrainedSize,
        issues: Issues,
        context: ParseContext | None,
    ) -> None:
        if isinstance(size, AbsoluteSize):
            if size.width <= 0 or size.height <= 0:
                issues.errors.append(
                    "Absolute size dimensions must be positive, "
                    f"got width: {size.width}, height: {size.height}"
                )
            elif (
                self.options.validate_coordinates
                and context is not None
                and context.known
                and (size.width > context.canvas_width or size.height > context.canvas_height)
            ):
                issues.warnings.append(
                    f"Absolute size ({size.width}x{size.height}) may exceed canvas dimensions"
                )
        elif isinstance(size, RelativeSize):
            if not 0 < size.fraction <= 1:
                issues.errors.append(f"Relative size must be between 0 and 1, got {size.fraction}")
            elif size.fraction > LARGE_RELATIVE_SIZE:
                issues.warnings.append(
                    f"Large relative size ({size.fraction}) may cause elements to overlap"
                )
        else:
            if size.width <= 0:
                issues.errors.append(f"Aspect-constrained width must be positive, got {size.width}")
            if size.aspect <= 0:
                issues.errors.append(f"Aspect ratio must be positive, got {size.aspect}")
            elif not MIN_ASPECT <= size.aspect <= MAX_ASPECT:
                issues.warnings.append(
                    f"Extreme aspect ratio ({size.aspect}) may result in unusual proportions"
                )

    def _check_repeat(
        self,
        repeat: GridRepetition | RadialRepetition,
        issues: Issues,
        context: ParseContext | None,
    ) -> None:
        counts = repeat.count if isinstance(repeat.count, tuple) else (repeat.count,)
        if any(c <= 0 for c in counts):
            shown = list(repeat.count) if isinstance(repeat.count, tuple) else repeat.count
            issues.errors.append(f"Repetition count must be positive, got {shown}")
            return

        if isinstance(repeat, GridRepetition):
            if any(c > MAX_GRID_AXIS_COUNT for c in repeat.axis_counts):
                issues.warnings.append(
                    f"Large repetition count {_format_count(repeat.count)} may impact performance"
                )
            if repeat.spacing is not None:
                if not 0 < repeat.spacing <= 1:
                    issues.errors.append(f"Grid spacing must be between 0 and 1, got {repeat.spacing}")
                elif repeat.spacing < MIN_GRID_SPACING:
                    issues.warnings.append(
                        f"Very small grid spacing ({repeat.spacing}) may cause overlapping elements"
                    )
            return

        if repeat.total > MAX_RADIAL_COUNT:
            issues.warnings.append(
                f"Large repetition count {_format_count(repeat.count)} may impact performance"
            )
        if repeat.radius is not None:
            if repeat.radius <= 0:
                issues.errors.append(f"Radial radius must be positive, got {repeat.radius}")
            elif self.options.validate_coordinates and self._radius_too_large(repeat.radius, context):
                issues.warnings.append(
                    f"Large radial radius ({repeat.radius}) may position elements outside canvas"
                )

    @staticmethod
    def _radius_too_large(radius: float, context: ParseContext | None) -> bool:
        if radius > LARGE_RADIAL_RADIUS:
            return True
        if context is not None and context.known:
            return radius > min(context.canvas_width, context.canvas_height) / 2
        return False

    def _cross_validate(self, layout: LayoutSpecification, issues: Issues) -> None:
        if layout.size is not None and layout.repeat is not None:
            total = layout.repeat.total
            if total > MAX_SIZED_REPEAT_ELEMENTS:
                issues.warnings.append(
                    f"Large repetition count ({total}) with explicit size may cause overlapping"
                )
        if isinstance(layout.repeat, RadialRepetition) and layout.offset is not None:
            if any(abs(v) > RADIAL_OFFSET_LIMIT for v in layout.offset):
                issues.warnings.append(
                    "Large offset with radial repetition may position elements outside expected area"
                )

    # -- custom regions -----------------------------------------------------

    def _check_custom_region(
        self, index: int, region: CustomRegion, seen: set[str], issues: Issues
    ) -> None:
        name = region.name
        if not name.strip():
            issues.errors.append(f"Custom region {index} must have a non-empty name")
            return
        if RegionManager.is_standard(name):
            issues.errors.append(f"Custom region '{name}' conflicts with standard region")
        if name in seen:
            issues.errors.append(f"Custom region '{name}' is defined more than once")
        seen.add(name)

        rect = to_rect(region.bounds)
        problem = bounds_problem(rect)
        if problem:
            issues.errors.append(f"Custom region '{name}' {problem}")
        elif rect.width < MIN_CUSTOM_REGION_SIZE or rect.height < MIN_CUSTOM_REGION_SIZE:
            issues.warnings.append(
                f"Custom region '{name}' is very small ({rect.width}x{rect.height}) "
                "and may be difficult to use"
            )


def _format_count(count: int | tuple[int, int]) -> str:
    if isinstance(count, tuple):
        return f"[{count[0]}, {count[1]}]"
    return f"({count})"
