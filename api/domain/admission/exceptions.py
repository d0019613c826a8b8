# api/domain/admission/exceptions.py
class AdmissionError(Exception):
    """Contract violation by the caller. Business refusals are ReasonCodes, not this."""


class CompanyNotFoundError(AdmissionError):
    def __init__(self, company_id: str) -> None:
        super().__init__(f"Company not found: {company_id}")
        self.company_id = company_id


class ReservationNotFoundError(AdmissionError):
    def __init__(self, reservation_id: str) -> None:
        super().__init__(f"Reservation not found or already closed: {reservation_id}")
        self.reservation_id = reservation_id
