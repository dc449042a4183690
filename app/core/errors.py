"""
Error kinds raised by the dungeon core.

Both are permanent: the caller has to fix the input or the configuration,
retrying the same call will fail the same way.
"""

from __future__ import annotations


class InvalidInputError(ValueError):
    """A grid or sequence is empty, ragged, or holds non-integer cells."""


class InvalidConfigurationError(ValueError):
    """A variant split cannot be turned into cumulative thresholds."""
