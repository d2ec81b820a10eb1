"""Parameter API routes: selector flags, series, appends and descriptions.

Flags are recomputed from the store on every request, so an appended
measurement is reflected immediately.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from labtrend.dependencies import get_description_service, get_store
from labtrend.repositories.measurements import MeasurementStore
from labtrend.schemas.measurement import (
    Measurement,
    ParameterDescription,
    ParameterSeriesResponse,
    ParameterSummary,
    StatusFlag,
)
from labtrend.services.annotation_builder import representative_range
from labtrend.services.descriptions import (
    DescriptionService,
    DescriptionUnavailableError,
)
from labtrend.services.series_normalizer import normalize_series
from labtrend.services.status_classifier import (
    classify_parameters,
    classify_series,
    flag_marker,
)

router = APIRouter(prefix="/parameters", tags=["parameters"])


def _require_parameter(store: MeasurementStore, name: str) -> list[Measurement]:
    """Return a parameter's series or raise 404."""
    if name not in store:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Parameter not found: {name}",
        )
    return store.series(name)


def _summarize(name: str, series: list[Measurement], flag: StatusFlag) -> ParameterSummary:
    return ParameterSummary(
        name=name,
        label=f"{name}{flag_marker(flag)}",
        flag=flag,
        count=len(series),
    )


@router.get("", response_model=list[ParameterSummary])
async def list_parameters(
    store: MeasurementStore = Depends(get_store),
) -> list[ParameterSummary]:
    """List parameters with measurements, sorted by name, with their flags."""
    data = store.all()
    flags = classify_parameters(data)
    return [_summarize(name, data[name], flag) for name, flag in flags.items()]


@router.get("/{name}/measurements", response_model=ParameterSeriesResponse)
async def get_parameter_series(
    name: str,
    store: MeasurementStore = Depends(get_store),
) -> ParameterSeriesResponse:
    """Get a parameter's measurements in chronological order.

    Raises:
        HTTPException: 404 if the parameter is unknown.
    """
    series = _require_parameter(store, name)
    return ParameterSeriesResponse(
        name=name,
        measurements=normalize_series(series),
        flag=classify_series(series),
        reference=representative_range(series),
    )


@router.post(
    "/{name}/measurements",
    response_model=ParameterSummary,
    status_code=status.HTTP_201_CREATED,
)
async def add_measurement(
    name: str,
    measurement: Measurement,
    store: MeasurementStore = Depends(get_store),
) -> ParameterSummary:
    """Append a measurement (new parameters are created) and return the new flag."""
    store.append(name, measurement)
    series = store.series(name)
    return _summarize(name, series, classify_series(series))


@router.get("/{name}/description", response_model=ParameterDescription)
async def get_parameter_description(
    name: str,
    store: MeasurementStore = Depends(get_store),
    service: DescriptionService = Depends(get_description_service),
) -> ParameterDescription:
    """Get an explanatory description of a parameter.

    Raises:
        HTTPException: 404 if the parameter is unknown, 502 if the
            description provider fails.
    """
    _require_parameter(store, name)
    try:
        description = await service.get_description(name)
    except DescriptionUnavailableError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(exc),
        ) from exc
    return ParameterDescription(parameter=name, description=description)
