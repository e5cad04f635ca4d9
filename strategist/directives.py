#!/usr/bin/env python3
from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

from strategist.models import Directive, Position


class DirectiveRegistry:
    """
    In-memory operation registry. One directive per (kind, position);
    repeated requests for the same target are ignored.
    New directives queue up until the worker drains them for publishing.
    """

    def __init__(self, existing: Iterable[Directive] = ()) -> None:
        self._directives: Dict[Tuple[str, Position], Directive] = {}
        self._unpublished: List[Directive] = []
        self.current_tick: Optional[int] = None
        for directive in existing:
            self._directives[(directive.kind, directive.position)] = directive

    def __len__(self) -> int:
        return len(self._directives)

    def __contains__(self, key: Tuple[str, Position]) -> bool:
        return key in self._directives

    def create_if_absent(self, position: Position, kind: str) -> bool:
        key = (kind, position)
        if key in self._directives:
            return False
        directive = Directive(kind=kind, position=position, created_tick=self.current_tick)
        self._directives[key] = directive
        self._unpublished.append(directive)
        return True

    def drain_new(self) -> List[Directive]:
        new, self._unpublished = self._unpublished, []
        return new
