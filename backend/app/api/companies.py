"""Company endpoints."""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.auth import require_employer
from app.database import get_db
from app.errors import CompanyNotFoundError
from app.models.user import User
from app.schemas.company import CompanyResponse, CompanyUpsert, CompanyWithListingsResponse
from app.services.companies import get_company_with_listings, get_featured_companies, upsert_company_for_owner

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/featured", response_model=List[CompanyResponse])
async def featured_companies(db: AsyncSession = Depends(get_db)):
    return await get_featured_companies(db)


@router.get("/{company_id}", response_model=CompanyWithListingsResponse)
async def get_company(company_id: int, db: AsyncSession = Depends(get_db)):
    try:
        return await get_company_with_listings(db, company_id)
    except CompanyNotFoundError:
        raise HTTPException(status_code=404, detail="Company not found")


@router.post("", response_model=CompanyResponse, status_code=201)
async def save_company(
    request: CompanyUpsert,
    current_user: User = Depends(require_employer),
    db: AsyncSession = Depends(get_db)
):
    """
    Create or update the employer's company (one company per employer).

    Returns 201 in both cases.
    """
    company, _ = await upsert_company_for_owner(db, current_user.id, request)
    return company
