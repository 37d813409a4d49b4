"""
Tests for listing payload validation (one schema per post type).
"""
import pytest

from app.errors import ListingValidationError
from app.schemas.listing import (
    AnnouncementListingCreate,
    AuctionListingCreate,
    JobListingCreate,
    OWNER_REQUIRED_MESSAGE,
    TenderListingCreate,
)
from app.models.listing import AnnouncementType, Currency, OwnerType, PostType
from app.services.validation import validate_listing


def error_fields(exc: ListingValidationError) -> set[str]:
    return {field for field, _ in exc.errors}


def base_payload(**overrides) -> dict:
    payload = {
        "title": "Office furniture",
        "location": "Kigali",
        "description": "Desks, chairs and cabinets from our old office.",
        "category": "Management & Admin",
        "individualName": "Jean Claude",
    }
    payload.update(overrides)
    return payload


# ============================================================
# TAGGED UNION
# ============================================================

def test_each_post_type_returns_its_variant(job_payload):
    """The postType value selects the schema variant."""
    assert isinstance(validate_listing(job_payload()), JobListingCreate)
    assert isinstance(validate_listing(base_payload(postType="auction")), AuctionListingCreate)
    assert isinstance(
        validate_listing(base_payload(postType="tender", requirements="Registered firms only")),
        TenderListingCreate,
    )
    assert isinstance(validate_listing(base_payload(postType="announcement")), AnnouncementListingCreate)


def test_unknown_post_type_is_rejected():
    with pytest.raises(ListingValidationError) as exc_info:
        validate_listing(base_payload(postType="raffle"))

    assert exc_info.value.errors[0][0] == "postType"


def test_missing_post_type_is_rejected():
    with pytest.raises(ListingValidationError) as exc_info:
        validate_listing(base_payload())

    assert error_fields(exc_info.value) == {"postType"}


def test_post_type_argument_overrides_payload():
    """An explicit post_type wins over the payload's own discriminant."""
    listing = validate_listing(base_payload(postType="job"), post_type=PostType.ANNOUNCEMENT)

    assert isinstance(listing, AnnouncementListingCreate)


def test_non_object_body_is_rejected():
    with pytest.raises(ListingValidationError) as exc_info:
        validate_listing(["not", "an", "object"])

    assert exc_info.value.errors == [("body", "Expected a JSON object")]


def test_errors_are_reported_together():
    """All failing fields are reported in one error, nothing is partially accepted."""
    with pytest.raises(ListingValidationError) as exc_info:
        validate_listing({"postType": "job", "title": "abc", "location": "K", "individualName": "Jean"})

    fields = error_fields(exc_info.value)
    assert {"title", "location", "description", "category", "requirements", "type", "experienceLevel"} <= fields


# ============================================================
# PER-TYPE LENGTH RULES
# ============================================================

def test_job_description_needs_fifty_characters(job_payload):
    with pytest.raises(ListingValidationError) as exc_info:
        validate_listing(job_payload(description="Too short for a job ad"))

    assert error_fields(exc_info.value) == {"description"}


def test_job_requires_requirements_of_thirty_characters(job_payload):
    payload = job_payload()
    del payload["requirements"]
    with pytest.raises(ListingValidationError) as exc_info:
        validate_listing(payload)
    assert error_fields(exc_info.value) == {"requirements"}

    with pytest.raises(ListingValidationError) as exc_info:
        validate_listing(job_payload(requirements="Python"))
    assert error_fields(exc_info.value) == {"requirements"}


def test_job_requires_type_and_experience_level(job_payload):
    payload = job_payload()
    del payload["type"]
    del payload["experienceLevel"]

    with pytest.raises(ListingValidationError) as exc_info:
        validate_listing(payload)

    assert error_fields(exc_info.value) == {"type", "experienceLevel"}


def test_job_salary_and_responsibilities_are_optional(job_payload):
    listing = validate_listing(job_payload())

    assert listing.salary is None
    assert listing.responsibilities is None
    assert listing.currency == Currency.RWF


def test_job_salary_accepts_numbers(job_payload):
    listing = validate_listing(job_payload(salary=850000, currency="USD"))

    assert listing.salary == "850000"
    assert listing.currency == Currency.USD


def test_tender_thresholds():
    """Tenders: description >= 20 and requirements >= 10, requirements required."""
    with pytest.raises(ListingValidationError) as exc_info:
        validate_listing(base_payload(postType="tender", description="Road works", requirements="Short"))
    assert error_fields(exc_info.value) == {"description", "requirements"}

    with pytest.raises(ListingValidationError) as exc_info:
        validate_listing(base_payload(postType="tender"))
    assert error_fields(exc_info.value) == {"requirements"}

    tender = validate_listing(base_payload(postType="tender", requirements="Registered with RDB"))
    assert tender.requirements == "Registered with RDB"


def test_auction_description_threshold_and_optional_requirements():
    with pytest.raises(ListingValidationError) as exc_info:
        validate_listing(base_payload(postType="auction", description="Old cars"))
    assert error_fields(exc_info.value) == {"description"}

    auction = validate_listing(base_payload(postType="auction"))
    assert auction.requirements is None


def test_announcement_only_needs_non_empty_description():
    announcement = validate_listing(base_payload(postType="announcement", description="Closed Monday"))

    assert announcement.announcement_type == AnnouncementType.GENERAL

    with pytest.raises(ListingValidationError) as exc_info:
        validate_listing(base_payload(postType="announcement", description="   "))
    assert error_fields(exc_info.value) == {"description"}


def test_common_field_minimums_apply_to_every_type():
    for post_type in ("auction", "announcement"):
        with pytest.raises(ListingValidationError) as exc_info:
            validate_listing(base_payload(postType=post_type, title="Car", location="K", category="X"))
        assert error_fields(exc_info.value) == {"title", "location", "category"}


def test_invalid_enum_values_are_rejected(job_payload):
    with pytest.raises(ListingValidationError) as exc_info:
        validate_listing(job_payload(type="gig", experienceLevel="wizard", currency="GBP"))

    assert error_fields(exc_info.value) == {"type", "experienceLevel", "currency"}


# ============================================================
# OWNER INVARIANT
# ============================================================

def test_owner_type_is_inferred_from_company_id(job_payload):
    listing = validate_listing(job_payload(companyId=1))

    assert listing.owner_type == OwnerType.COMPANY
    assert listing.company_id == 1


def test_owner_type_defaults_to_individual():
    listing = validate_listing(base_payload(postType="announcement", individualContact="0788000000"))

    assert listing.owner_type == OwnerType.INDIVIDUAL
    assert listing.individual_name == "Jean Claude"
    assert listing.company_id is None


def test_listing_without_owner_is_rejected():
    payload = base_payload(postType="announcement")
    del payload["individualName"]

    with pytest.raises(ListingValidationError) as exc_info:
        validate_listing(payload)

    assert exc_info.value.errors == [("ownerType", OWNER_REQUIRED_MESSAGE)]


def test_owner_error_uses_wire_name_when_owner_type_is_omitted():
    """The inferred ownerType is reported under its camelCase name next to other field errors."""
    payload = base_payload(postType="announcement", companyId="abc")
    del payload["individualName"]

    with pytest.raises(ListingValidationError) as exc_info:
        validate_listing(payload)

    assert error_fields(exc_info.value) == {"companyId", "ownerType"}
    assert ("ownerType", OWNER_REQUIRED_MESSAGE) in exc_info.value.errors


def test_company_owner_without_company_id_is_rejected():
    with pytest.raises(ListingValidationError) as exc_info:
        validate_listing(base_payload(postType="announcement", ownerType="company"))

    assert exc_info.value.errors == [("ownerType", OWNER_REQUIRED_MESSAGE)]


def test_exactly_one_owner_is_kept():
    """Sending both owners keeps only the selected one."""
    company_owned = validate_listing(
        base_payload(postType="announcement", ownerType="company", companyId=3, individualContact="0788")
    )
    assert company_owned.company_id == 3
    assert company_owned.individual_name is None
    assert company_owned.individual_contact is None

    individual = validate_listing(base_payload(postType="announcement", ownerType="individual", companyId=3))
    assert individual.company_id is None
    assert individual.individual_name == "Jean Claude"


def test_blank_company_id_counts_as_missing():
    listing = validate_listing(base_payload(postType="announcement", companyId=""))

    assert listing.owner_type == OwnerType.INDIVIDUAL


# ============================================================
# VARIANT DATA
# ============================================================

def test_auction_items_are_split_into_lines():
    auction = validate_listing(base_payload(postType="auction", auctionItems="Toyota RAV4\n  Desk \n\nGenerator"))

    assert auction.auction_items == ["Toyota RAV4", "Desk", "Generator"]


def test_auction_items_accept_a_list():
    auction = validate_listing(base_payload(postType="auction", auctionItems=["Laptop", " ", "Printer "]))

    assert auction.auction_items == ["Laptop", "Printer"]


def test_variant_data_holds_only_the_variant_fields(job_payload):
    """Variant data is keyed by API names and carries nothing from other post types."""
    listing = validate_listing(job_payload(salary="500000", auctionItems="ignored"))

    assert listing.variant_data() == {
        "type": "full_time",
        "experienceLevel": "entry",
        "salary": "500000",
        "currency": "RWF",
        "responsibilities": None,
    }


def test_submitted_status_is_not_part_of_the_listing(job_payload):
    listing = validate_listing(job_payload(status="approved"))

    assert "status" not in listing.common_data()
    assert not hasattr(listing, "status")
