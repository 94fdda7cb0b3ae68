"""Builders for the text that profile embeddings are generated from."""

import math
from typing import Any, List, Optional

# text-embedding-ada-002 pricing, USD per 1k tokens
COST_PER_1K_TOKENS = 0.0001
CHARS_PER_TOKEN = 4


def _value(item: Any) -> str:
    return getattr(item, "value", str(item))


def _fmt_k(amount: float) -> str:
    if float(amount).is_integer():
        amount = int(amount)
    return f"${amount}k"


def _join_parts(parts: List[str]) -> str:
    return ". ".join(parts) + "."


def generate_founder_embedding_text(founder: Any) -> str:
    """Describe a founder as prose: pitch, industry, stage, raise.

    Accepts a Founder, a FounderProfileInput or anything with the same
    attributes.
    """
    parts: List[str] = []

    description: Optional[str] = getattr(founder, "company_description", None)
    company_name: Optional[str] = getattr(founder, "company_name", None)
    if description:
        parts.append(description)
    elif company_name:
        parts.append(company_name)

    industry = getattr(founder, "industry", None)
    if industry:
        parts.append(f"Industry: {_value(industry)}")

    stage = getattr(founder, "stage", None)
    if stage:
        parts.append(f"Stage: {_value(stage)}")

    seeking_min = getattr(founder, "seeking_amount_min", None)
    seeking_max = getattr(founder, "seeking_amount_max", None)
    if seeking_min is not None and seeking_max is not None:
        parts.append(f"Seeking: {_fmt_k(seeking_min)}-{_fmt_k(seeking_max)}")

    return _join_parts(parts)


def generate_funder_embedding_text(funder: Any) -> str:
    """Describe a funder as prose: thesis first, then bio and focus lists."""
    parts: List[str] = []

    if getattr(funder, "investment_thesis", None):
        parts.append(funder.investment_thesis)

    if getattr(funder, "bio", None):
        parts.append(funder.bio)

    industries = getattr(funder, "preferred_industries", None) or []
    if industries:
        parts.append("Focus: " + ", ".join(_value(i) for i in industries))

    stages = getattr(funder, "preferred_stages", None) or []
    if stages:
        parts.append("Stages: " + ", ".join(_value(s) for s in stages))

    return _join_parts(parts)


def estimate_token_count(text: str) -> int:
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def estimate_embedding_cost(token_count: int) -> float:
    """Estimated USD cost of embedding `token_count` tokens."""
    return (token_count / 1000) * COST_PER_1K_TOKENS
