"""Standard-library and framework noise.

Calls into these types rarely explain an entry point and mostly clutter
the diagram.
"""

from seqtrace.infrastructure.filters.default import DefaultTraceFilter

STANDARD_LIBRARY_PREFIXES: frozenset[str] = frozenset(
    {
        "java.",
        "javax.",
        "jakarta.",
        "jdk.",
        "sun.",
        "com.sun.",
        "kotlin.",
        "scala.",
        "lombok.",
        "org.slf4j.",
        "org.apache.commons.",
        "org.apache.logging.",
        "org.springframework.",
    }
)

OBJECT_METHOD_NAMES: frozenset[str] = frozenset(
    {
        "toString",
        "hashCode",
        "equals",
        "getClass",
        "clone",
        "finalize",
        "notify",
        "notifyAll",
        "wait",
    }
)


def standard_noise_filter(
    extra_type_prefixes: frozenset[str] = frozenset(),
    extra_method_names: frozenset[str] = frozenset(),
) -> DefaultTraceFilter:
    """Filter excluding standard-library types and Object methods.

    Args:
        extra_type_prefixes: Additional type prefixes to exclude
        extra_method_names: Additional method names to exclude

    Returns:
        DefaultTraceFilter with the noise lists merged in
    """
    return DefaultTraceFilter(
        excluded_type_prefixes=STANDARD_LIBRARY_PREFIXES | frozenset(extra_type_prefixes),
        excluded_method_names=OBJECT_METHOD_NAMES | frozenset(extra_method_names),
    )
