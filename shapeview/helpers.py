"""
shapeview.helpers — Display-oriented accessors over a PropertyValue.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional

from rdflib import Literal

from shapeview.model import PropertyValue, ViewConfig


@dataclass
class PropertyValueView:
    value: PropertyValue
    config: ViewConfig = field(default_factory=ViewConfig)

    @property
    def label(self) -> str:
        labels = [
            term for shape in self.value.shapes for term in shape.labels
            if isinstance(term, Literal)
        ]
        for language in self.config.label_languages:
            for term in labels:
                if (term.language or "").lower() == language.lower():
                    return str(term)
        for term in labels:
            if not term.language:
                return str(term)

        if self.value.path:
            return re.split(r"[/#]", str(self.value.path[-1]))[-1]
        return self.config.fallback_label

    @property
    def min_count(self) -> Optional[int]:
        """Tightest lower bound: the largest sh:minCount of any shape."""
        counts = [s.min_count for s in self.value.shapes if s.min_count is not None]
        return max(counts) if counts else None

    @property
    def max_count(self) -> Optional[int]:
        """Tightest upper bound: the smallest sh:maxCount of any shape."""
        counts = [s.max_count for s in self.value.shapes if s.max_count is not None]
        return min(counts) if counts else None

    def to_dict(self) -> dict:
        d = self.value.to_dict()
        d["label"] = self.label
        d["min_count"] = self.min_count
        d["max_count"] = self.max_count
        return d
