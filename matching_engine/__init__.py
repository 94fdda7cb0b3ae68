"""Founder/funder matching engine: hybrid semantic, rule and stage scoring."""

__version__ = "0.1.0"
