"""UI events understood by the dashboard controller.

Each event maps 1:1 to a user interaction. The controller reducer decides
whether an event needs the full filter → sort → paginate chain or only a
new slice of the already sorted collection.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from product_dashboard.domain.dashboard import DashboardState, SortField


class Recompute(str, Enum):
    FULL = "full"
    SLICE = "slice"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class SearchChanged:
    text: str


@dataclass(frozen=True, slots=True)
class SortToggled:
    field: SortField


@dataclass(frozen=True, slots=True)
class PageSelected:
    page: int


@dataclass(frozen=True, slots=True)
class PageSizeChanged:
    page_size: int


DashboardEvent = SearchChanged | SortToggled | PageSelected | PageSizeChanged


@dataclass(frozen=True, slots=True)
class Transition:
    state: DashboardState
    recompute: Recompute
