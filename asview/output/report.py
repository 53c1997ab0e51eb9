# asview/output/report.py
"""
Reporters for view statistics and pairwise dissimilarities.

Views are always listed by name, and pairs in name order, so two runs over
the same inputs print the same report.
"""

from __future__ import annotations

import itertools
import json
import math
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from asview.engine.view import View
from .base import Reporter


def _format_number(value: float | None) -> str:
    if value is None:
        return "incomparable"
    return f"{value:.6f}"


def _json_number(value: float | None) -> float | None:
    # JSON has no NaN
    if value is None or math.isnan(value):
        return None
    return value


def view_pairs(views: Mapping[str, View]):
    names = sorted(views)
    return itertools.combinations(names, 2)


class TextReporter(Reporter):
    """Plain whitespace-separated lines, one record per line."""

    def render(self, views: Mapping[str, View]) -> list[str]:
        lines = [str(len(views))]
        for name in sorted(views):
            view = views[name]
            lines.append(
                f"{name} {_format_number(view.hard_core_mean())} "
                f"{_format_number(view.all_seen_mean())}"
            )
        for a_name, b_name in view_pairs(views):
            a_view, b_view = views[a_name], views[b_name]
            lines.append(
                f"{a_name} {b_name} "
                f"{_format_number(a_view.core_dissimilarity(b_view))} "
                f"{_format_number(a_view.jaccard_dissimilarity(b_view))}"
            )
        return lines


class JSONReporter(Reporter):
    """A single JSON document with a ``views`` list and a ``pairs`` list."""

    def render(self, views: Mapping[str, View]) -> dict[str, Any]:
        return {
            "views": [
                {
                    "name": name,
                    "vantages": [str(v) for v in views[name].vantages],
                    "prefixes": len(views[name].all_seen),
                    "hard_core_mean": _json_number(views[name].hard_core_mean()),
                    "all_seen_mean": _json_number(views[name].all_seen_mean()),
                }
                for name in sorted(views)
            ],
            "pairs": [
                {
                    "a": a_name,
                    "b": b_name,
                    "core_dissimilarity": _json_number(
                        views[a_name].core_dissimilarity(views[b_name])
                    ),
                    "jaccard_dissimilarity": _json_number(
                        views[a_name].jaccard_dissimilarity(views[b_name])
                    ),
                }
                for a_name, b_name in view_pairs(views)
            ],
        }

    def write(self, views: Mapping[str, View], output_file_path: Path | str) -> None:
        output_file = Path(output_file_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        document = self.render(views)
        with output_file.open("w", encoding="utf-8") as f:
            json.dump(document, f, indent=2)


def summary_lines(views: Mapping[str, View]) -> list[str]:
    return TextReporter().render(views)


def report_records(views: Mapping[str, View]) -> dict[str, Any]:
    return JSONReporter().render(views)
