"""Chart endpoints."""

from fastapi import APIRouter, Depends

from folio.dependencies import get_charts
from folio.models.request_models import ChartCreateRequest
from folio.models.response_models import DataResponse
from folio.services.auth_gate import CurrentUser
from folio.services.charts import ChartService
from folio.utils.serialization import public

router = APIRouter(tags=["chart"])


@router.post("/api/chart", response_model=DataResponse, summary="Create a chart")
async def create_chart(
    payload: ChartCreateRequest,
    caller_id: CurrentUser,
    charts: ChartService = Depends(get_charts)
):
    chart = await charts.create(caller_id, payload.chartName, payload.chartType, payload.createdBy)
    return DataResponse(data=public(chart))
