from tracelens.parser.normalizer import normalize_trace
from tracelens.parser.trace_parser import TraceParser, extract_revert_reason

__all__ = ["TraceParser", "extract_revert_reason", "normalize_trace"]
