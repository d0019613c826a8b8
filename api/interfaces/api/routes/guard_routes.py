# api/interfaces/api/routes/guard_routes.py
from fastapi import APIRouter, Depends, HTTPException

from api.application.dtos.guard_dto import GuardRequestDTO, GuardResultDTO
from api.application.services.admission_service import AdmissionService
from api.domain.admission.exceptions import CompanyNotFoundError
from api.interfaces.api.dependencies import get_admission_service

router = APIRouter()


@router.post("/guards", response_model=GuardResultDTO)
def check_guards(
    body: GuardRequestDTO,
    service: AdmissionService = Depends(get_admission_service),  # noqa: B008
) -> GuardResultDTO:
    try:
        result = service.check_guards(
            body.user.to_domain(),
            body.company_id,
            body.selection.to_domain(),
            accepted_agreements=frozenset(body.accepted_agreements),
            whitelist_verified=body.whitelist_verified,
            now=body.now,
        )
    except CompanyNotFoundError as err:
        raise HTTPException(status_code=404, detail="Company not found") from err
    except ValueError as err:
        raise HTTPException(status_code=422, detail=str(err)) from err
    return GuardResultDTO.from_domain(result)
