"""Categorical vocabularies shared by founders, funders and scores."""

from enum import Enum


class Industry(str, Enum):
    FINTECH = "Fintech"
    HEALTHTECH = "HealthTech"
    EDTECH = "EdTech"
    CLEANTECH = "CleanTech"
    ENTERPRISE_SAAS = "Enterprise SaaS"
    CONSUMER = "Consumer"
    DEEPTECH = "DeepTech"
    PROPTECH = "PropTech"
    LOGISTICS = "Logistics"
    CYBERSECURITY = "Cybersecurity"


class Stage(str, Enum):
    """Fundraising stages, declared in chain order."""

    PRE_SEED = "Pre-Seed"
    SEED = "Seed"
    SERIES_A = "Series A"
    SERIES_B_PLUS = "Series B+"


class Geography(str, Enum):
    NORTH_AMERICA = "North America"
    EUROPE = "Europe"
    ASIA = "Asia"
    LATIN_AMERICA = "Latin America"
    MIDDLE_EAST = "Middle East"
    AFRICA = "Africa"
    OCEANIA = "Oceania"
    GLOBAL = "Global"


class QualityTier(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"
