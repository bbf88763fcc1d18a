"""Base exceptions for seqtrace domain."""


class SeqTraceError(Exception):
    """Root exception for all seqtrace errors.

    All domain exceptions inherit from this.
    Allows catching all seqtrace-specific errors.
    """
