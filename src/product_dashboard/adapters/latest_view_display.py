from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from product_dashboard.domain.dashboard import DashboardView
from product_dashboard.ports.display import Display


class DisplayStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class DisplaySnapshot:
    status: DisplayStatus
    view: DashboardView | None = None
    error: str | None = None


class LatestViewDisplay(Display):
    """
    Display that keeps only the most recently published state.

    The HTTP entrypoint reads snapshot() to answer requests. A loading or
    error publication replaces the previous view so stale products are never
    shown next to a failure.
    """

    def __init__(self) -> None:
        self._snapshot = DisplaySnapshot(status=DisplayStatus.IDLE)

    def snapshot(self) -> DisplaySnapshot:
        return self._snapshot

    def show_loading(self) -> None:
        self._snapshot = DisplaySnapshot(status=DisplayStatus.LOADING)

    def show_page(self, view: DashboardView) -> None:
        self._snapshot = DisplaySnapshot(status=DisplayStatus.READY, view=view)

    def show_error(self, message: str) -> None:
        self._snapshot = DisplaySnapshot(status=DisplayStatus.ERROR, error=message)

    def clear_error(self) -> None:
        if self._snapshot.status == DisplayStatus.ERROR:
            self._snapshot = DisplaySnapshot(status=DisplayStatus.IDLE)
