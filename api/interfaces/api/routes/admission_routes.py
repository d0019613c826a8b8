# api/interfaces/api/routes/admission_routes.py
from fastapi import APIRouter, Depends, HTTPException, Response

from api.application.dtos.admission_dto import AdmissionOutcomeDTO, AdmissionRequestDTO, ReservationDTO
from api.application.services.admission_service import AdmissionService
from api.domain.admission.exceptions import CompanyNotFoundError, ReservationNotFoundError
from api.interfaces.api.dependencies import get_admission_service

router = APIRouter()


@router.post(
    "/admissions",
    response_model=AdmissionOutcomeDTO,
    status_code=201,
    responses={409: {"model": AdmissionOutcomeDTO}},
)
def admit(
    body: AdmissionRequestDTO,
    response: Response,
    service: AdmissionService = Depends(get_admission_service),  # noqa: B008
) -> AdmissionOutcomeDTO:
    try:
        outcome = service.admit(
            body.user.to_domain(),
            body.company_id,
            body.selection.to_domain(),
            accepted_agreements=frozenset(body.accepted_agreements),
            whitelist_verified=body.whitelist_verified,
        )
    except CompanyNotFoundError as err:
        raise HTTPException(status_code=404, detail="Company not found") from err
    except ValueError as err:
        raise HTTPException(status_code=422, detail=str(err)) from err

    if not outcome.admitted:
        response.status_code = 409
    return AdmissionOutcomeDTO.from_domain(outcome)


@router.delete("/admissions/{reservation_id}", response_model=ReservationDTO)
def cancel(
    reservation_id: str,
    service: AdmissionService = Depends(get_admission_service),  # noqa: B008
) -> ReservationDTO:
    try:
        reservation = service.cancel(reservation_id)
    except ReservationNotFoundError as err:
        raise HTTPException(status_code=404, detail="Reservation not found") from err
    return ReservationDTO.from_domain(reservation)


@router.post("/admissions/{reservation_id}/complete", response_model=ReservationDTO)
def complete(
    reservation_id: str,
    service: AdmissionService = Depends(get_admission_service),  # noqa: B008
) -> ReservationDTO:
    try:
        reservation = service.complete(reservation_id)
    except ReservationNotFoundError as err:
        raise HTTPException(status_code=404, detail="Reservation not found") from err
    return ReservationDTO.from_domain(reservation)
