from fastapi import APIRouter, Depends

from ...models import BatchLeadRequest, BatchResult, ErrorResponse, LeadResult, ProcessLeadRequest
from ...services.lead_service import LeadService

router = APIRouter(prefix="/api")
lead_service = LeadService()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


def get_lead_service() -> LeadService:
    return lead_service


@router.post("/process-leads", response_model=LeadResult, responses=ERROR_RESPONSES)
async def process_lead(
    payload: ProcessLeadRequest,
    service: LeadService = Depends(get_lead_service),
) -> LeadResult:
    return await service.process(payload)


@router.post("/process-leads/batch", response_model=BatchResult)
async def process_leads_batch(
    payload: BatchLeadRequest,
    service: LeadService = Depends(get_lead_service),
) -> BatchResult:
    return await service.process_batch(payload)
