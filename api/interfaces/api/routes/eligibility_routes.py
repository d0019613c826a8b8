# api/interfaces/api/routes/eligibility_routes.py
from fastapi import APIRouter, Depends, HTTPException

from api.application.dtos.eligibility_dto import EligibilityRequestDTO, EligibilityVerdictDTO
from api.application.services.admission_service import AdmissionService
from api.domain.admission.exceptions import CompanyNotFoundError
from api.interfaces.api.dependencies import get_admission_service

router = APIRouter()


@router.post("/eligibility", response_model=EligibilityVerdictDTO)
def evaluate(
    body: EligibilityRequestDTO,
    service: AdmissionService = Depends(get_admission_service),  # noqa: B008
) -> EligibilityVerdictDTO:
    try:
        user = body.user.to_domain()
        selection = body.selection.to_domain() if body.selection else None
        verdict = service.evaluate(user, body.company_id, selection)
    except CompanyNotFoundError as err:
        raise HTTPException(status_code=404, detail="Company not found") from err
    except ValueError as err:
        raise HTTPException(status_code=422, detail=str(err)) from err
    return EligibilityVerdictDTO.from_domain(verdict)
