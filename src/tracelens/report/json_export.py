"""JSON export of an inspection: the camelCase wire shape."""

import json
from typing import Any

from tracelens.domain.models import DefiAnalysis, ParsedTrace


def to_wire(trace: ParsedTrace, analysis: DefiAnalysis | None = None) -> dict[str, Any]:
    payload = trace.model_dump(by_alias=True, mode="json", exclude_none=True)
    if analysis is not None:
        payload["defiAnalysis"] = analysis.model_dump(by_alias=True, mode="json", exclude_none=True)
    return payload


def render_json(trace: ParsedTrace, analysis: DefiAnalysis | None = None, indent: int | None = 2) -> str:
    return json.dumps(to_wire(trace, analysis), indent=indent, ensure_ascii=False)
