"""Placeholder view for the play queue."""

from __future__ import annotations

from typing import Any, Optional

from .messages import Cmd


class QueueView:
    """View of the play queue; it shows only its label."""

    def init(self) -> Optional[Cmd]:
        return None

    def update(self, msg: Any) -> Optional[Cmd]:
        return None

    def view(self) -> str:
        return "Queue View"