"""
Pydantic response models for the constitutional amendments API

Attributes are snake_case in Python and serialize under camelCase aliases,
matching the field names consumers of the digest already rely on.

Usage:
    from api.lib.response_models import AmendmentDigest

    digest = AmendmentDigest(count=0, congress=119, last_updated="...", amendments=[])
    body = digest.model_dump(by_alias=True)
"""

from typing import List, Optional, Union
from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serializing field names as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Amendment Models
# ============================================================================


class Sponsor(CamelModel):
    """Primary sponsor of a joint resolution"""

    name: str = Field("Unknown", description="Sponsor full name")
    party: str = Field("Unknown", description="Party code (D, R, I, ...)")
    state: str = Field("Unknown", description="Two-letter state code")
    district: Optional[Union[int, str]] = Field(
        None, description="House district (null for senators)"
    )


class AmendmentRecord(CamelModel):
    """Proposed constitutional amendment with sponsor and status"""

    number: str = Field(..., description="Bill type and number (e.g., 'HJRES 1')")
    title: str = Field(..., description="Official bill title")
    introduced_date: Optional[str] = Field(
        None, description="Introduction date (YYYY-MM-DD)"
    )
    sponsor: Sponsor = Field(default_factory=Sponsor)
    status: str = Field("Introduced", description="Latest action text")
    status_date: Optional[str] = Field(
        None, description="Latest action date, or introduction date"
    )
    cosponsors_count: int = Field(0, ge=0, description="Number of cosponsors")
    congress_url: str = Field(..., description="Public congress.gov page")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "number": "HJRES 1",
                "title": "Proposing an amendment to the Constitution of the United States relative to term limits",
                "introducedDate": "2025-01-10",
                "sponsor": {"name": "Jane Doe", "party": "D", "state": "CA", "district": None},
                "status": "Introduced",
                "statusDate": "2025-01-10",
                "cosponsorsCount": 12,
                "congressUrl": "https://www.congress.gov/bill/119th-congress/hjres/1",
            }
        }
    )


class AmendmentDigest(CamelModel):
    """Response body listing proposed amendments, most recent first"""

    count: int = Field(..., ge=0, description="Number of amendments returned")
    congress: int = Field(..., description="Congress number queried")
    last_updated: str = Field(..., description="UTC timestamp of assembly")
    amendments: List[AmendmentRecord] = Field(default_factory=list)


class ErrorBody(BaseModel):
    """Error response body"""

    error: str = Field(..., description="Human-readable error message")
