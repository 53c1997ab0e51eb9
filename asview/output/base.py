# asview/output/base.py
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable

from asview.engine.view import View


class Reporter:
    """Base reporter for turning named views into output records."""

    def render(self, views: Mapping[str, View]) -> Iterable[Any]:
        """Override in subclasses."""
        return []
