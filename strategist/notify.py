#!/usr/bin/env python3
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from strategist.models import NotifyLevel


class ConsoleNotifier:
    def __init__(self, tag: str = "strategist") -> None:
        self.tag = tag

    def notify(self, level: NotifyLevel, message: str) -> None:
        if level == NotifyLevel.ALERT:
            print(f"[{self.tag}] ALERT: {message}")
        else:
            print(f"[{self.tag}] {message}")


@dataclass
class Notification:
    level: NotifyLevel
    message: str
    tick: Optional[int] = None


class BufferedNotifier(ConsoleNotifier):
    """Prints like ConsoleNotifier and keeps entries for publishing."""

    def __init__(self, tag: str = "strategist") -> None:
        super().__init__(tag)
        self.current_tick: Optional[int] = None
        self._pending: List[Notification] = []

    def notify(self, level: NotifyLevel, message: str) -> None:
        super().notify(level, message)
        self._pending.append(Notification(level=level, message=message, tick=self.current_tick))

    def drain(self) -> List[Notification]:
        out, self._pending = self._pending, []
        return out
