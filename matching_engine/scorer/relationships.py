"""Fixed lookup tables consumed by the rule and stage scorers.

INDUSTRY_RELATIONSHIPS is deliberately asymmetric: lookups only ever start
from the founder's industry.
"""

from types import MappingProxyType
from typing import FrozenSet, Iterable, Mapping, Optional, Tuple, TypeVar

from ..models.enums import Industry, Stage

T = TypeVar("T")

INDUSTRY_RELATIONSHIPS: Mapping[Industry, FrozenSet[Industry]] = MappingProxyType({
    Industry.FINTECH: frozenset({Industry.ENTERPRISE_SAAS, Industry.DEEPTECH}),
    Industry.HEALTHTECH: frozenset({Industry.DEEPTECH, Industry.ENTERPRISE_SAAS}),
    Industry.EDTECH: frozenset({Industry.ENTERPRISE_SAAS, Industry.CONSUMER}),
    Industry.ENTERPRISE_SAAS: frozenset({Industry.FINTECH, Industry.HEALTHTECH, Industry.DEEPTECH}),
    Industry.CONSUMER: frozenset({Industry.EDTECH, Industry.PROPTECH}),
    Industry.DEEPTECH: frozenset({Industry.FINTECH, Industry.HEALTHTECH, Industry.CYBERSECURITY}),
    Industry.CLEANTECH: frozenset({Industry.ENTERPRISE_SAAS, Industry.LOGISTICS}),
    Industry.PROPTECH: frozenset({Industry.CONSUMER, Industry.FINTECH}),
    Industry.LOGISTICS: frozenset({Industry.CLEANTECH, Industry.ENTERPRISE_SAAS}),
    Industry.CYBERSECURITY: frozenset({Industry.DEEPTECH, Industry.ENTERPRISE_SAAS}),
})

# Linear chain: Pre-Seed <-> Seed <-> Series A <-> Series B+
ADJACENT_STAGES: Mapping[Stage, FrozenSet[Stage]] = MappingProxyType({
    Stage.PRE_SEED: frozenset({Stage.SEED}),
    Stage.SEED: frozenset({Stage.PRE_SEED, Stage.SERIES_A}),
    Stage.SERIES_A: frozenset({Stage.SEED, Stage.SERIES_B_PLUS}),
    Stage.SERIES_B_PLUS: frozenset({Stage.SERIES_A}),
})

COMPLETENESS_FIELDS: Tuple[str, ...] = (
    "name",
    "email",
    "industry",
    "stage",
    "company_name",
    "company_description",
    "seeking_amount_min",
    "seeking_amount_max",
    "geography",
)


def get_related_industries(
    industry: Industry,
    relationships: Mapping[Industry, FrozenSet[Industry]] = INDUSTRY_RELATIONSHIPS,
) -> FrozenSet[Industry]:
    """Industries that earn partial credit for a founder in `industry`."""
    return relationships.get(industry, frozenset())


def get_adjacent_stages(
    stage: Stage,
    adjacency: Mapping[Stage, FrozenSet[Stage]] = ADJACENT_STAGES,
) -> FrozenSet[Stage]:
    """Immediate chain neighbours of `stage`."""
    return adjacency.get(stage, frozenset())


def find_first_in(preferences: Iterable[T], allowed: FrozenSet[T]) -> Optional[T]:
    """First preference (in the funder's order) that appears in `allowed`."""
    for preference in preferences:
        if preference in allowed:
            return preference
    return None
