"""Exceptions raised by the programmatic layout APIs.

Parsing and validation never raise these; they report through result
objects. Direct calls on the aspect-ratio table and region manager do.
"""

from __future__ import annotations


class LayoutError(Exception):
    """Base for layout-engine failures."""


class UnknownAspectRatio(LayoutError, ValueError):
    pass


class RegionNotFound(LayoutError, LookupError):
    pass


class RegionConflict(LayoutError, ValueError):
    """A custom region name collides with a standard region."""


class InvalidRegionBounds(LayoutError, ValueError):
    pass
