# -*- coding: utf-8 -*-
"""
SARVIZ Exception Hierarchy - Domain-specific exceptions for visualization.

Lets batch drivers catch SARVIZ failures distinctly from Python built-in
exceptions. Every SARVIZ exception subclasses both ``SarvizError`` and
the closest built-in exception so that plain ``except ValueError``
handlers keep working.

Numeric degeneracies (empty statistics, zero ranges, zero denominators)
are never reported through this hierarchy; those degrade to in-band
defaults so a single low-signal scene cannot abort a batch.

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-03-02

Modified
--------
2026-03-09
"""


class SarvizError(Exception):
    """Base exception for all SARVIZ errors."""


class ValidationError(SarvizError, ValueError):
    """Invalid input data, parameters, or configuration."""


class ShapeMismatchError(ValidationError):
    """Two grids handed to a binary operation differ in shape."""


class MissingBandError(ValidationError):
    """A required channel or second band is absent."""


class ProcessorError(SarvizError, RuntimeError):
    """Non-recoverable failure inside a processing stage."""


class ResampleError(ProcessorError):
    """The resampling backend reported an error."""


class CompositeModeNotImplementedError(SarvizError, NotImplementedError):
    """A placeholder synthetic RGB formula was invoked directly.

    The named composition modes resolve to the default algorithm through
    the mode dispatcher; only direct calls to the mode-specific builders
    raise this.
    """


class DependencyError(SarvizError, ImportError):
    """Missing optional dependency required for a specific module.

    Raised when a writer requires an optional package (rasterio) that
    is not installed.
    """
