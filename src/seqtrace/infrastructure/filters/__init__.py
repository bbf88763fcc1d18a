"""Trace filters.

Filters implement the TraceFilter port: True = exclude.

Usage:
    from seqtrace.infrastructure.filters import AccessorPairFilter, exclude_any, standard_noise_filter

    flt = exclude_any(standard_noise_filter(), AccessorPairFilter())
"""

from seqtrace.infrastructure.filters.accessor import AccessorPairFilter
from seqtrace.infrastructure.filters.composite import ExcludeAny, exclude_any
from seqtrace.infrastructure.filters.default import DefaultTraceFilter
from seqtrace.infrastructure.filters.noise import (
    OBJECT_METHOD_NAMES,
    STANDARD_LIBRARY_PREFIXES,
    standard_noise_filter,
)

__all__ = [
    "OBJECT_METHOD_NAMES",
    "STANDARD_LIBRARY_PREFIXES",
    "AccessorPairFilter",
    "DefaultTraceFilter",
    "ExcludeAny",
    "exclude_any",
    "standard_noise_filter",
]
