# api/interfaces/api/routes/company_routes.py
from fastapi import APIRouter, Depends, HTTPException

from api.application.dtos.company_dto import CompanyDetailDTO, CompanyStatusDTO
from api.domain.admission.exceptions import CompanyNotFoundError
from api.infrastructure.repositories.duckdb_company_repo import DuckDBCompanyRepo
from api.interfaces.api.dependencies import get_company_repo

router = APIRouter()


@router.get("/companies", response_model=list[CompanyStatusDTO])
def list_companies(
    repo: DuckDBCompanyRepo = Depends(get_company_repo),  # noqa: B008
) -> list[CompanyStatusDTO]:
    return [CompanyStatusDTO.from_domain(c) for c in repo.list_companies()]


@router.get("/companies/{company_id}", response_model=CompanyDetailDTO)
def get_company(
    company_id: str,
    repo: DuckDBCompanyRepo = Depends(get_company_repo),  # noqa: B008
) -> CompanyDetailDTO:
    try:
        company = repo.get_company(company_id)
    except CompanyNotFoundError as err:
        raise HTTPException(status_code=404, detail="Company not found") from err
    return CompanyDetailDTO.from_domain(company)
