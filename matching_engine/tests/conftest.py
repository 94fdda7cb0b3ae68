"""Pytest configuration and fixtures."""

import math
from typing import List, Optional

import pytest

from matching_engine.models import Founder, Funder

DIM = 8


def unit_vector(angle_cos: float, dim: int = DIM) -> List[float]:
    """Vector whose cosine with `base_vector()` is exactly `angle_cos`."""
    sin = math.sqrt(max(0.0, 1.0 - angle_cos ** 2))
    return [angle_cos, sin] + [0.0] * (dim - 2)


def base_vector(dim: int = DIM) -> List[float]:
    return [1.0] + [0.0] * (dim - 1)


def make_founder(
    founder_id: str = "founder-1",
    embedding: Optional[List[float]] = None,
    **overrides,
) -> Founder:
    """Complete Fintech/Seed founder unless overridden."""
    data = dict(
        id=founder_id,
        name="Ada Park",
        email="ada@ledgerline.io",
        company_name="Ledgerline",
        company_description="Real-time reconciliation API for SMB finance teams",
        industry="Fintech",
        stage="Seed",
        seeking_amount_min=100,
        seeking_amount_max=200,
        geography="North America",
        embedding=embedding,
    )
    data.update(overrides)
    return Founder(**data)


def make_funder(
    funder_id: str = "funder-1",
    embedding: Optional[List[float]] = None,
    **overrides,
) -> Funder:
    """Global Fintech/Seed funder writing 50k-300k checks unless overridden."""
    data = dict(
        id=funder_id,
        name="Jordan Reyes",
        firm_name="Northbeam Ventures",
        bio="Former payments operator",
        investment_thesis="APIs that move money for businesses",
        preferred_industries=["Fintech"],
        preferred_stages=["Seed"],
        check_size_min=50,
        check_size_max=300,
        geography_focus=["Global"],
        embedding=embedding,
    )
    data.update(overrides)
    return Funder(**data)


@pytest.fixture
def founder() -> Founder:
    return make_founder()


@pytest.fixture
def funder() -> Funder:
    return make_funder()


@pytest.fixture
def founder_profile_payload() -> dict:
    return {
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
