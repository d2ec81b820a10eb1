"""Evolution chart API route.

Builds the chart bundle for one parameter (single mode) or several
(overlay mode). Repeat the ``parameter`` query argument to overlay.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from labtrend.dependencies import get_general_ref_ranges, get_store
from labtrend.repositories.measurements import MeasurementStore
from labtrend.schemas.chart import ChartBundle
from labtrend.services.annotation_builder import build_chart

router = APIRouter(prefix="/charts", tags=["charts"])


@router.get("", response_model=ChartBundle)
async def get_chart(
    parameter: list[str] | None = Query(default=None),
    store: MeasurementStore = Depends(get_store),
    general_ref_ranges: dict[str, str] = Depends(get_general_ref_ranges),
) -> ChartBundle:
    """Get the evolution chart for the requested parameters.

    Args:
        parameter: Parameter names, in overlay order. Duplicates are ignored.

    Raises:
        HTTPException: 422 if no parameter is given, 404 if any is unknown.
    """
    names = list(dict.fromkeys(parameter or []))
    if not names:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="At least one parameter is required",
        )

    missing = [name for name in names if name not in store]
    if missing:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Parameter not found: {', '.join(missing)}",
        )

    data_sets = {name: store.series(name) for name in names}
    return build_chart(data_sets, general_ref_ranges)
