"""
shapeview.report — Summarize resolved property values for display.

The report carries one row per PropertyValue (via PropertyValueView) and can
be rendered as a dict, JSON, or a human-readable table.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from shapeview.helpers import PropertyValueView
from shapeview.model import Node, PropertyValue, PropertyValueType, ViewConfig


# ─── Report types ────────────────────────────────────────────────────

@dataclass
class ReportRow:
    label: str
    path: list[str]
    type: str
    focus_node: Optional[str]
    min_count: Optional[int] = None
    max_count: Optional[int] = None
    order: Optional[int] = None
    values: list[str] = field(default_factory=list)

    @property
    def value_count(self) -> int:
        return len(self.values)

    @property
    def cardinality(self) -> str:
        if self.min_count is None and self.max_count is None:
            return ""
        min_str = str(self.min_count) if self.min_count is not None else "0"
        max_str = str(self.max_count) if self.max_count is not None else "*"
        return f"{min_str}..{max_str}"


@dataclass
class PropertyValueReport:
    generated_at: str
    focus_node: Optional[str]
    summary: dict
    rows: list[ReportRow]

    def to_dict(self) -> dict:
        return {
            "generated_at": self.generated_at,
            "focus_node": self.focus_node,
            "summary": self.summary,
            "rows": [
                {
                    "label": r.label,
                    "path": r.path,
                    "type": r.type,
                    "focus_node": r.focus_node,
                    "min_count": r.min_count,
                    "max_count": r.max_count,
                    "order": r.order,
                    "value_count": r.value_count,
                    "values": r.values,
                }
                for r in self.rows
            ],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def print_table(self) -> str:
        """Format report as a human-readable table."""
        lines = []

        lines.append("shapeview property values")
        lines.append(f"  focus node: {self.focus_node or '(none)'}")
        lines.append(f"  generated: {self.generated_at}")
        lines.append("")

        s = self.summary
        lines.append(
            f"  {s['properties']} properties  |  "
            f"{s['shape']} from shapes  {s['data']} data only  "
            f"{s['empty']} without values"
        )
        lines.append("")

        for r in self.rows:
            marker = "•" if r.type == PropertyValueType.SHAPE.value else "◦"
            card = f" [{r.cardinality}]" if r.cardinality else ""
            lines.append(f"  {marker} {r.label}{card}  {' / '.join(r.path)}")
            for value in r.values[:5]:  # show first 5
                lines.append(f"      → {value}")
            if r.value_count > 5:
                lines.append(f"      ... and {r.value_count - 5} more")

        return "\n".join(lines)


# ─── Build ───────────────────────────────────────────────────────────

def build_report(
    values: list[PropertyValue],
    focus_node: Optional[Node] = None,
    config: Optional[ViewConfig] = None,
) -> PropertyValueReport:
    """Turn ranked property values into a report, keeping their order."""
    if config is None:
        config = ViewConfig()

    rows: list[ReportRow] = []
    for value in values:
        view = PropertyValueView(value, config)
        rows.append(ReportRow(
            label=view.label,
            path=[str(term) for term in value.path],
            type=value.type.value,
            focus_node=None if value.focus_node is None else str(value.focus_node),
            min_count=view.min_count,
            max_count=view.max_count,
            order=value.order,
            values=[str(q.object) for q in value.value_nodes],
        ))

    shape_total = sum(1 for v in values if v.type == PropertyValueType.SHAPE)
    return PropertyValueReport(
        generated_at=datetime.now(timezone.utc).isoformat(),
        focus_node=None if focus_node is None else str(focus_node),
        summary={
            "properties": len(values),
            "shape": shape_total,
            "data": len(values) - shape_total,
            "empty": sum(1 for v in values if not v.value_nodes),
        },
        rows=rows,
    )
