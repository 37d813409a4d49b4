"""
Listing schemas: a tagged union with one variant per post type.

Every variant extends `ListingBase` (title, location, description,
category, owner fields) and declares `variant_fields`, the fields that
belong to that post type only. Those are stored together in the
listing's `additional_data` document under their API (camelCase) names.

Length rules per post type:

    job           description >= 50, requirements >= 30 (required)
    tender        description >= 20, requirements >= 10 (required)
    auction       description >= 20, requirements optional
    announcement  description non-empty, requirements optional
"""
from datetime import datetime
from typing import Annotated, Any, ClassVar, Literal, Optional, Union

from pydantic import Field, ValidationInfo, field_validator, model_validator

from app.models.listing import (
    AnnouncementType,
    Currency,
    ExperienceLevel,
    JobType,
    ListingStatus,
    OwnerType,
    PostType,
)
from app.schemas.base import CamelModel

POST_TYPE_TAGS = {post_type.value for post_type in PostType}

OWNER_REQUIRED_MESSAGE = "Please provide required owner information"


def _to_text(value: Any) -> Any:
    """Accept numbers for free-text money fields ("salary": 500000)."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class ListingBase(CamelModel):
    """Fields shared by every post type."""

    variant_fields: ClassVar[tuple[str, ...]] = ()

    title: str = Field(min_length=5)
    location: str = Field(min_length=2)
    description: str = Field(min_length=1)
    category: str = Field(min_length=2)
    requirements: Optional[str] = None
    deadline: Optional[datetime] = None

    # Ownership: a company, or an individual with a name (and contact)
    company_id: Optional[int] = None
    individual_name: Optional[str] = None
    individual_contact: Optional[str] = None
    owner_type: Optional[OwnerType] = Field(default=None, validate_default=True)

    @field_validator("title", "location", "description", "category", "individual_name", mode="before")
    @classmethod
    def strip_text(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("company_id", "deadline", mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("owner_type")
    @classmethod
    def check_owner(cls, value: Optional[OwnerType], info: ValidationInfo) -> OwnerType:
        company_id = info.data.get("company_id")
        individual_name = info.data.get("individual_name")
        if value is None:
            value = OwnerType.COMPANY if company_id is not None else OwnerType.INDIVIDUAL
        if value == OwnerType.COMPANY and company_id is None:
            raise ValueError(OWNER_REQUIRED_MESSAGE)
        if value == OwnerType.INDIVIDUAL and not individual_name:
            raise ValueError(OWNER_REQUIRED_MESSAGE)
        return value

    @model_validator(mode="after")
    def keep_single_owner(self):
        # Exactly one owner is kept; the other side is cleared
        if self.owner_type == OwnerType.COMPANY:
            self.individual_name = None
            self.individual_contact = None
        else:
            self.company_id = None
        return self

    @property
    def kind(self) -> PostType:
        return PostType(self.post_type)

    def variant_data(self) -> dict:
        """The variant-only fields as stored in `additional_data`."""
        return self.model_dump(
            mode="json",
            by_alias=True,
            include=set(self.variant_fields),
        )

    def common_data(self) -> dict:
        """Column values shared by every post type."""
        return {
            "post_type": self.kind,
            "title": self.title,
            "location": self.location,
            "description": self.description,
            "category": self.category,
            "requirements": self.requirements,
            "deadline": self.deadline,
            "company_id": self.company_id,
            "individual_name": self.individual_name,
            "individual_contact": self.individual_contact,
        }


class JobListingCreate(ListingBase):
    """Employment vacancy."""

    variant_fields: ClassVar[tuple[str, ...]] = (
        "employment_type",
        "experience_level",
        "salary",
        "currency",
        "responsibilities",
    )

    post_type: Literal["job"]
    description: str = Field(min_length=50)
    requirements: str = Field(min_length=30)
    employment_type: JobType = Field(alias="type")
    experience_level: ExperienceLevel
    salary: Optional[str] = None
    currency: Currency = Currency.RWF
    responsibilities: Optional[str] = None

    @field_validator("salary", mode="before")
    @classmethod
    def salary_as_text(cls, value: Any) -> Any:
        return _to_text(value)


class AuctionListingCreate(ListingBase):
    """Auction ("cyamunara") with a list of lots."""

    variant_fields: ClassVar[tuple[str, ...]] = (
        "auction_date",
        "auction_time",
        "viewing_dates",
        "auction_items",
        "auction_requirements",
        "auction_location",
        "starting_price",
        "currency",
        "item_condition",
    )

    post_type: Literal["auction"]
    description: str = Field(min_length=20)
    auction_date: Optional[str] = None
    auction_time: Optional[str] = None
    viewing_dates: Optional[str] = None
    auction_items: list[str] = Field(default_factory=list)
    auction_requirements: Optional[str] = None
    auction_location: Optional[str] = None
    starting_price: Optional[str] = None
    currency: Currency = Currency.RWF
    item_condition: Optional[str] = None

    @field_validator("auction_items", mode="before")
    @classmethod
    def split_items(cls, value: Any) -> Any:
        """Accept the textarea form (one lot per line) as well as a list."""
        if value is None:
            return []
        if isinstance(value, str):
            value = value.splitlines()
        if isinstance(value, list):
            return [item.strip() for item in value if isinstance(item, str) and item.strip()]
        return value

    @field_validator("starting_price", mode="before")
    @classmethod
    def price_as_text(cls, value: Any) -> Any:
        return _to_text(value)


class TenderListingCreate(ListingBase):
    """Call for tenders / bids."""

    variant_fields: ClassVar[tuple[str, ...]] = (
        "tender_deadline",
        "tender_requirements",
        "tender_documents",
        "budget",
        "currency",
        "evaluation_criteria",
        "contact_info",
    )

    post_type: Literal["tender"]
    description: str = Field(min_length=20)
    requirements: str = Field(min_length=10)
    tender_deadline: Optional[str] = None
    tender_requirements: Optional[str] = None
    tender_documents: Optional[str] = None
    budget: Optional[str] = None
    currency: Currency = Currency.RWF
    evaluation_criteria: Optional[str] = None
    contact_info: Optional[str] = None

    @field_validator("budget", mode="before")
    @classmethod
    def budget_as_text(cls, value: Any) -> Any:
        return _to_text(value)


class AnnouncementListingCreate(ListingBase):
    """Public announcement; no length rules beyond a non-empty description."""

    variant_fields: ClassVar[tuple[str, ...]] = (
        "announcement_type",
        "event_date",
        "contact_info",
    )

    post_type: Literal["announcement"]
    announcement_type: AnnouncementType = AnnouncementType.GENERAL
    event_date: Optional[str] = None
    contact_info: Optional[str] = None


ListingCreate = Annotated[
    Union[
        JobListingCreate,
        AuctionListingCreate,
        TenderListingCreate,
        AnnouncementListingCreate,
    ],
    Field(discriminator="post_type"),
]

LISTING_VARIANTS: dict[PostType, type[ListingBase]] = {
    PostType.JOB: JobListingCreate,
    PostType.AUCTION: AuctionListingCreate,
    PostType.TENDER: TenderListingCreate,
    PostType.ANNOUNCEMENT: AnnouncementListingCreate,
}


class AdminListingUpdate(CamelModel):
    """Moderation fields an admin may PATCH on any listing."""
    is_active: Optional[bool] = None
    is_featured: Optional[bool] = None
    status: Optional[ListingStatus] = None
    admin_notes: Optional[str] = None


class ListingResponse(CamelModel):
    """Listing as returned by the API."""
    id: int
    post_type: PostType
    title: str
    location: str
    description: str
    category: str
    requirements: Optional[str] = None
    deadline: Optional[datetime] = None

    owner_type: OwnerType
    company_id: Optional[int] = None
    company_name: Optional[str] = None
    individual_name: Optional[str] = None
    individual_contact: Optional[str] = None

    additional_data: dict = Field(default_factory=dict)

    status: ListingStatus
    is_active: bool
    is_featured: bool
    admin_notes: Optional[str] = None
    deleted_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
