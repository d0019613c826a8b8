# api/interfaces/api/dependencies.py
from api.application.services.admission_service import AdmissionService
from api.infrastructure.config import get_admission_config
from api.infrastructure.duckdb_connection import get_cursor
from api.infrastructure.repositories.duckdb_admission_repo import DuckDBAdmissionRepo
from api.infrastructure.repositories.duckdb_company_repo import DuckDBCompanyRepo
from api.infrastructure.repositories.duckdb_whitelist_repo import DuckDBWhitelistRepo


def get_admission_service() -> AdmissionService:
    conn = get_cursor()
    return AdmissionService(
        company_repo=DuckDBCompanyRepo(conn),
        whitelist_repo=DuckDBWhitelistRepo(conn),
        admission_repo=DuckDBAdmissionRepo(conn),
        config=get_admission_config(),
    )


def get_company_repo() -> DuckDBCompanyRepo:
    return DuckDBCompanyRepo(get_cursor())
