"""
Dependency injection for FastAPI routes.

Key principle: the dashboard is one owned aggregate built by build_app() and
stored on app.state. Routes reach it through these functions, never through
module globals, so tests can swap it with app.dependency_overrides.
"""

from __future__ import annotations

from fastapi import Request

from product_dashboard.adapters.latest_view_display import LatestViewDisplay
from product_dashboard.use_cases.dashboard_controller import DashboardController


def get_dashboard_controller(request: Request) -> DashboardController:
    """
    Returns the controller owned by the running application.

    Args:
        request: Incoming request (FastAPI injects it)

    Returns:
        DashboardController: The single controller for this app instance
    """
    return request.app.state.dashboard_controller


def get_display(request: Request) -> LatestViewDisplay:
    """Returns the display the controller publishes to."""
    return request.app.state.display
