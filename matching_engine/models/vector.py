"""pgvector text form <-> Python list conversion for embedding columns."""

import json
import logging
from typing import Any, List, Optional

logger = logging.getLogger(__name__)


def format_embedding(embedding: List[float]) -> str:
    """Serialize an embedding to the '[x,y,...]' literal pgvector accepts."""
    return json.dumps([float(v) for v in embedding])


def parse_embedding(value: Any) -> Optional[List[float]]:
    """Parse an embedding column value as returned by PostgREST.

    Accepts a list, a pgvector string literal, or None. Unparseable
    strings are treated as a missing embedding.
    """
    if value is None or value == "":
        return None
    if isinstance(value, (list, tuple)):
        return [float(v) for v in value]
    if isinstance(value, str):
        try:
            parsed = json.loads(value)
        except json.JSONDecodeError:
            logger.warning("Could not parse embedding literal (%d chars)", len(value))
            return None
        if isinstance(parsed, list):
            return [float(v) for v in parsed]
        return None
    return [float(v) for v in value]
