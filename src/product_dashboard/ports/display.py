from __future__ import annotations

from abc import ABC, abstractmethod

from product_dashboard.domain.dashboard import DashboardView


class Display(ABC):
    """
    Port for the rendering collaborator.

    The controller publishes to it; implementations decide how (and whether)
    anything is drawn. No pipeline logic may live behind this port.
    """

    @abstractmethod
    def show_loading(self) -> None: ...

    @abstractmethod
    def show_page(self, view: DashboardView) -> None: ...

    @abstractmethod
    def show_error(self, message: str) -> None: ...

    @abstractmethod
    def clear_error(self) -> None: ...
