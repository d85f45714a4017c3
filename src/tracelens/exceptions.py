"""Error taxonomy for the inspection pipeline."""


class TraceLensError(Exception):
    """Base error. `code` is a stable machine-readable tag for callers."""

    code: str = "TRACELENS_ERROR"

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        if code is not None:
            self.code = code


class TraceFormatError(TraceLensError):
    """The raw trace payload matches none of the known provider shapes."""

    code = "INVALID_TRACE_FORMAT"


class MalformedTraceError(TraceLensError):
    """The payload has a known shape but its call entries are not usable."""

    code = "MALFORMED_TRACE"


class NoTraceDataError(TraceLensError):
    """The trace has no top-level calls."""

    code = "NO_TRACE_DATA"


class ExternalServiceError(TraceLensError):
    """An HTTP/RPC collaborator failed. Retriable."""

    code = "EXTERNAL_SERVICE"
