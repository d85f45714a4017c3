from tracelens.report.json_export import render_json, to_wire
from tracelens.report.text_tree import render_tree

__all__ = ["render_json", "render_tree", "to_wire"]
