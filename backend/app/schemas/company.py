"""Company-related Pydantic schemas."""
from typing import Optional
from pydantic import Field

from app.schemas.base import CamelModel
from app.schemas.listing import ListingResponse


class CompanyUpsert(CamelModel):
    """Create or update the employer's company profile."""
    name: str = Field(min_length=2)
    industry: str = Field(min_length=2)
    location: str = Field(min_length=2)
    logo: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None
    employee_count: Optional[str] = None
    founded: Optional[str] = None


class CompanyResponse(CompanyUpsert):
    id: int
    user_id: int


class CompanyWithListingsResponse(CompanyResponse):
    jobs: list[ListingResponse] = []
