# api/interfaces/api/routes/overlap_routes.py
from fastapi import APIRouter, HTTPException

from api.application.dtos.overlap_dto import OverlapRequestDTO, OverlapResultDTO
from api.application.services.overlap_service import check_overlap

router = APIRouter()


@router.post("/overlap", response_model=OverlapResultDTO)
def overlap(body: OverlapRequestDTO) -> OverlapResultDTO:
    try:
        existing = [p.to_domain() for p in body.existing]
        proposed = body.proposed.to_domain()
    except ValueError as err:
        raise HTTPException(status_code=422, detail=str(err)) from err
    return OverlapResultDTO.from_domain(check_overlap(existing, proposed))
