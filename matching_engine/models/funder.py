"""Funder - an investing party with preference sets."""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from .enums import Geography, Industry, Stage
from .vector import parse_embedding


class Funder(BaseModel):
    """Stored funder record.

    List fields behave as sets for scoring; their order only affects which
    entry a reasoning string names first.
    """

    id: str = Field(..., description="Funder UUID")
    created_at: Optional[datetime] = Field(None, description="Row creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    # Profile
    name: str = Field(..., description="Partner name")
    firm_name: str = Field("", description="Firm the partner invests for")
    bio: Optional[str] = Field(None, description="Short biography")
    investment_thesis: Optional[str] = Field(None, description="Investment thesis text")

    # Investment criteria
    preferred_industries: List[Industry] = Field(..., min_length=1, description="Industries invested in")
    preferred_stages: List[Stage] = Field(default_factory=list, description="Stages invested in")
    check_size_min: Optional[float] = Field(None, ge=0, description="Smallest check (k)")
    check_size_max: Optional[float] = Field(None, ge=0, description="Largest check (k)")
    geography_focus: List[Geography] = Field(
        default_factory=list, description="Regions invested in; empty or Global means unrestricted"
    )

    # Embedding
    embedding: Optional[List[float]] = Field(None, description="1536-dim profile embedding")
    embedding_text: Optional[str] = Field(None, description="Text the embedding was generated from")

    # Metadata
    is_active: bool = Field(default=True)
    total_matches_generated: int = Field(default=0, ge=0)

    @field_validator("embedding", mode="before")
    @classmethod
    def coerce_embedding(cls, v):
        return parse_embedding(v)

    @field_validator("preferred_stages", "geography_focus", mode="before")
    @classmethod
    def null_as_empty(cls, v):
        return [] if v is None else v

    @model_validator(mode="after")
    def check_size_ordered(self):
        if (
            self.check_size_min is not None
            and self.check_size_max is not None
            and self.check_size_min > self.check_size_max
        ):
            raise ValueError(
                f"check_size_min ({self.check_size_min}) must not exceed "
                f"check_size_max ({self.check_size_max})"
            )
        return self

    class Config:
        json_schema_extra = {
            "example": {
                "id": "6f1c2a9e-0d4b-4f7e-9a51-3c2b8e7d1f00",
                "name": "Jordan Reyes",
                "firm_name": "Northbeam Ventures",
                "bio": "Former payments operator, now backing seed-stage fintech infrastructure.",
                "investment_thesis": "APIs that move money for businesses",
                "preferred_industries": ["Fintech", "Enterprise SaaS"],
                "preferred_stages": ["Seed", "Series A"],
                "check_size_min": 250,
                "check_size_max": 2000,
                "geography_focus": ["North America", "Europe"],
            }
        }
