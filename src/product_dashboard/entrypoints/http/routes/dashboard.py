from fastapi import APIRouter, Depends

from product_dashboard.adapters.latest_view_display import LatestViewDisplay
from product_dashboard.entrypoints.http.dependencies import (
    get_dashboard_controller,
    get_display,
)
from product_dashboard.entrypoints.http.dtos.dashboard import (
    DashboardResponseDTO,
    PageSelectDTO,
    PageSizeSelectDTO,
    SearchInputDTO,
    SortToggleDTO,
)
from product_dashboard.entrypoints.http.error_responses import ErrorResponse
from product_dashboard.entrypoints.http.mappers.dashboard_mapper import DashboardMapper
from product_dashboard.use_cases.dashboard_controller import DashboardController


router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get(
    "",
    response_model=DashboardResponseDTO,
    summary="Current dashboard view",
    description="""
    Returns the view most recently published by the dashboard.

    ## Status
    - idle: nothing loaded yet
    - loading: catalog fetch in progress
    - ready: products and pagination are present
    - error: the last fetch failed; `error` holds the message to show
    """,
)
async def get_dashboard(
    display: LatestViewDisplay = Depends(get_display),
) -> DashboardResponseDTO:
    return DashboardMapper.to_response(display.snapshot())


@router.post(
    "/reload",
    response_model=DashboardResponseDTO,
    summary="Fetch the catalog again",
    description="""
    Fetches the product catalog and re-runs the full pipeline with the
    current search, sort and page settings.

    A failed fetch is not an HTTP error: the response has status `error`
    and an empty product list. Only an overlapping reload is rejected.
    """,
    responses={
        409: {
            "model": ErrorResponse,
            "description": "A fetch is already in progress",
            "content": {
                "application/json": {
                    "example": {"detail": "A product fetch is already in progress", "code": "CONFLICT"}
                }
            },
        },
    },
)
async def reload_dashboard(
    controller: DashboardController = Depends(get_dashboard_controller),
    display: LatestViewDisplay = Depends(get_display),
) -> DashboardResponseDTO:
    await controller.init()
    return DashboardMapper.to_response(display.snapshot())


@router.post(
    "/search",
    response_model=DashboardResponseDTO,
    summary="Search input changed",
    description="Re-runs filter → sort → paginate with the new (trimmed) search text.",
)
async def search(
    payload: SearchInputDTO,
    controller: DashboardController = Depends(get_dashboard_controller),
    display: LatestViewDisplay = Depends(get_display),
) -> DashboardResponseDTO:
    """Parse → map to event → dispatch → map snapshot → return."""
    controller.dispatch(DashboardMapper.to_search_event(payload))
    return DashboardMapper.to_response(display.snapshot())


@router.post(
    "/sort",
    response_model=DashboardResponseDTO,
    summary="Sort button pressed",
    description="""
    Toggles sorting on a field and re-runs the full pipeline.

    - Same field as the active one: direction flips
    - Another field: sorting switches to it, ascending
    """,
    responses={422: {"model": ErrorResponse, "description": "Field is not price or title"}},
)
async def toggle_sort(
    payload: SortToggleDTO,
    controller: DashboardController = Depends(get_dashboard_controller),
    display: LatestViewDisplay = Depends(get_display),
) -> DashboardResponseDTO:
    controller.dispatch(DashboardMapper.to_sort_event(payload))
    return DashboardMapper.to_response(display.snapshot())


@router.post(
    "/page",
    response_model=DashboardResponseDTO,
    summary="Page selected",
    description="Re-slices the already sorted collection. Out-of-range pages are ignored.",
)
async def select_page(
    payload: PageSelectDTO,
    controller: DashboardController = Depends(get_dashboard_controller),
    display: LatestViewDisplay = Depends(get_display),
) -> DashboardResponseDTO:
    controller.dispatch(DashboardMapper.to_page_event(payload))
    return DashboardMapper.to_response(display.snapshot())


@router.post(
    "/page-size",
    response_model=DashboardResponseDTO,
    summary="Page size selected",
    description="""
    Changes the page size, restarts from page 1 and re-runs the full
    pipeline. Sizes other than 5, 10 and 20 are ignored.
    """,
)
async def select_page_size(
    payload: PageSizeSelectDTO,
    controller: DashboardController = Depends(get_dashboard_controller),
    display: LatestViewDisplay = Depends(get_display),
) -> DashboardResponseDTO:
    controller.dispatch(DashboardMapper.to_page_size_event(payload))
    return DashboardMapper.to_response(display.snapshot())
