"""Founder - a party seeking investment, plus the ingestion payload."""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from .enums import Geography, Industry, Stage
from .vector import parse_embedding


class FounderProfileInput(BaseModel):
    """Founder profile as submitted for ingestion (no identity, no embedding)."""

    name: str = Field(..., min_length=1, description="Founder full name")
    email: str = Field(..., min_length=1, description="Contact email, unique per founder")
    company_name: Optional[str] = Field(None, description="Company name")
    company_description: Optional[str] = Field(None, description="Free-text company pitch")
    industry: Industry = Field(..., description="Primary industry")
    stage: Stage = Field(..., description="Current fundraising stage")

    # Fundraising details, in thousands
    seeking_amount_min: Optional[float] = Field(None, ge=0, description="Lower bound of raise (k)")
    seeking_amount_max: Optional[float] = Field(None, ge=0, description="Upper bound of raise (k)")
    geography: Optional[Geography] = Field(None, description="Home region")

    @model_validator(mode="after")
    def seeking_range_ordered(self):
        if (
            self.seeking_amount_min is not None
            and self.seeking_amount_max is not None
            and self.seeking_amount_min > self.seeking_amount_max
        ):
            raise ValueError(
                f"seeking_amount_min ({self.seeking_amount_min}) must not exceed "
                f"seeking_amount_max ({self.seeking_amount_max})"
            )
        return self

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Ada Park",
                "email": "ada@ledgerline.io",
                "company_name": "Ledgerline",
                "company_description": "Real-time reconciliation API for SMB finance teams",
                "industry": "Fintech",
                "stage": "Seed",
                "seeking_amount_min": 500,
                "seeking_amount_max": 1500,
                "geography": "North America",
            }
        }


class Founder(FounderProfileInput):
    """Stored founder record.

    Inherits the profile fields and invariants of FounderProfileInput; name and
    email may be empty on legacy rows, which the completeness score penalises.
    """

    id: str = Field(..., description="Founder UUID")
    created_at: Optional[datetime] = Field(None, description="Row creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    name: str = Field("", description="Founder full name")
    email: str = Field("", description="Contact email")

    embedding: Optional[List[float]] = Field(None, description="1536-dim profile embedding")
    embedding_text: Optional[str] = Field(None, description="Text the embedding was generated from")

    profile_completeness: float = Field(0.0, ge=0, le=1, description="Share of checklist fields filled")
    is_active: bool = Field(default=True)

    @field_validator("embedding", mode="before")
    @classmethod
    def coerce_embedding(cls, v):
        return parse_embedding(v)
