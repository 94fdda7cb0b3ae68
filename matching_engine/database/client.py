"""Supabase database client for the founders, funders and matches tables."""

import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from pydantic import ValidationError
from supabase import Client, create_client

from ..models import (
    Founder,
    Funder,
    Match,
    MatchCandidate,
    MatchStats,
    QualityTier,
    SimilarFunder,
    format_embedding,
)
from ..scorer.semantic import search_distance

logger = logging.getLogger(__name__)


def _with_vector(record: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of `record` with a list embedding rewritten in pgvector text form."""
    row = dict(record)
    if isinstance(row.get("embedding"), (list, tuple)):
        row["embedding"] = format_embedding(row["embedding"])
    return row


def _parse_funders(rows: List[Dict[str, Any]]) -> List[Funder]:
    """Build Funder models, skipping rows that fail validation."""
    funders = []
    for row in rows:
        try:
            funders.append(Funder(**row))
        except ValidationError as exc:
            logger.warning(
                "Skipping invalid funder row %s: %d validation errors",
                row.get("id"), exc.error_count(),
            )
    return funders


class SupabaseClient:
    """Client for the matching tables and the vector search RPC."""

    def __init__(
        self,
        url: Optional[str] = None,
        key: Optional[str] = None,
    ) -> None:
        """Initialize Supabase client from explicit args or env vars.

        Args:
            url: Supabase project URL (falls back to SUPABASE_URL env var).
            key: Supabase anon/service key (falls back to SUPABASE_KEY env var).
        """
        self._url = url or os.environ["SUPABASE_URL"]
        self._key = key or os.environ["SUPABASE_KEY"]
        self._client: Client = create_client(self._url, self._key)

    # ------------------------------------------------------------------
    # Founders
    # ------------------------------------------------------------------

    def get_founder_by_id(self, founder_id: str) -> Optional[Founder]:
        """Fetch an active founder, or None if absent or inactive."""
        response = (
            self._client.table("founders")
            .select("*")
            .eq("id", founder_id)
            .eq("is_active", True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return Founder(**response.data[0])

    def create_founder(self, record: Dict[str, Any]) -> Founder:
        """Insert a founder row.

        Args:
            record: Column values; a list embedding is stored as a pgvector literal.

        Returns:
            The inserted founder.
        """
        response = (
            self._client.table("founders")
            .insert(_with_vector(record))
            .execute()
        )
        founder = Founder(**response.data[0])
        logger.info("Created founder %s", founder.id)
        return founder

    def update_founder(self, founder_id: str, updates: Dict[str, Any]) -> Founder:
        response = (
            self._client.table("founders")
            .update(_with_vector(updates))
            .eq("id", founder_id)
            .execute()
        )
        logger.info("Updated founder %s fields=%s", founder_id, sorted(updates))
        return Founder(**response.data[0])

    # ------------------------------------------------------------------
    # Funders
    # ------------------------------------------------------------------

    def get_active_funders(self) -> List[Funder]:
        response = (
            self._client.table("funders")
            .select("*")
            .eq("is_active", True)
            .execute()
        )
        return _parse_funders(response.data)

    def get_funder_by_id(self, funder_id: str) -> Optional[Funder]:
        response = (
            self._client.table("funders")
            .select("*")
            .eq("id", funder_id)
            .eq("is_active", True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return Funder(**response.data[0])

    def find_similar_funders(self, founder_id: str, limit: int = 10) -> List[SimilarFunder]:
        """Nearest funders to a founder's embedding, most similar first.

        Runs the `find_matching_funders` RPC, then hydrates full funder rows.
        RPC rows whose funder can no longer be loaded are skipped.

        Args:
            founder_id: Founder UUID whose stored embedding is the query vector.
            limit: Maximum number of neighbours to request.

        Returns:
            List of SimilarFunder in RPC order.
        """
        response = self._client.rpc(
            "find_matching_funders",
            {"founder_uuid": founder_id, "match_limit": limit},
        ).execute()
        rows = response.data or []
        if not rows:
            return []

        funder_ids = [row["funder_id"] for row in rows]
        funders_response = (
            self._client.table("funders")
            .select("*")
            .in_("id", funder_ids)
            .execute()
        )
        funders_by_id = {f.id: f for f in _parse_funders(funders_response.data)}

        results = []
        for row in rows:
            funder = funders_by_id.get(row["funder_id"])
            if funder is None:
                logger.warning("Similar funder %s not found, skipping", row["funder_id"])
                continue
            results.append(
                SimilarFunder(
                    funder=funder,
                    semantic_score=row["semantic_score"],
                    distance=row["distance"],
                )
            )
        logger.info(
            "similar_funders founder=%s requested=%d returned=%d",
            founder_id, limit, len(results),
        )
        return results

    def find_similar_funders_manual(
        self,
        founder_embedding: Sequence[float],
        limit: int = 10,
    ) -> List[SimilarFunder]:
        """In-memory nearest-neighbour search, used when the RPC is unavailable.

        Loads every active funder with an embedding and ranks them by cosine
        distance to `founder_embedding`.

        Args:
            founder_embedding: Query vector.
            limit: Maximum number of neighbours to return.

        Returns:
            List of SimilarFunder, closest first.
        """
        response = (
            self._client.table("funders")
            .select("*")
            .not_.is_("embedding", "null")
            .eq("is_active", True)
            .execute()
        )
        results = []
        for funder in _parse_funders(response.data):
            distance = search_distance(founder_embedding, funder.embedding)
            results.append(
                SimilarFunder(funder=funder, semantic_score=1.0 - distance, distance=distance)
            )
        results.sort(key=lambda s: s.distance)
        logger.info(
            "similar_funders_manual scanned=%d returned=%d",
            len(results), min(limit, len(results)),
        )
        return results[:limit]

    def get_funders_without_embeddings(self) -> List[Funder]:
        response = (
            self._client.table("funders")
            .select("*")
            .is_("embedding", "null")
            .eq("is_active", True)
            .execute()
        )
        return _parse_funders(response.data)

    def update_funder_embedding(
        self,
        funder_id: str,
        embedding: Sequence[float],
        embedding_text: str,
    ) -> None:
        (
            self._client.table("funders")
            .update({
                "embedding": format_embedding(embedding),
                "embedding_text": embedding_text,
            })
            .eq("id", funder_id)
            .execute()
        )
        logger.info("Stored embedding for funder %s", funder_id)

    # ------------------------------------------------------------------
    # Matches
    # ------------------------------------------------------------------

    def save_matches_batch(
        self,
        founder_id: str,
        candidates: Sequence[MatchCandidate],
    ) -> List[Dict[str, Any]]:
        """Upsert scored candidates keyed by (founder_id, funder_id).

        Returns:
            The upserted rows.
        """
        if not candidates:
            return []

        records = [Match.record_from_candidate(founder_id, c) for c in candidates]
        response = (
            self._client.table("matches")
            .upsert(records, on_conflict="founder_id,funder_id")
            .execute()
        )
        logger.info("Saved %d matches for founder %s", len(records), founder_id)
        return response.data or []

    def get_matches_for_founder(
        self,
        founder_id: str,
        min_score: float = 0.5,
        limit: int = 10,
    ) -> List[Match]:
        response = (
            self._client.table("matches")
            .select("*")
            .eq("founder_id", founder_id)
            .gte("total_score", min_score)
            .order("total_score", desc=True)
            .limit(limit)
            .execute()
        )
        return [Match(**row) for row in response.data]

    def mark_match_viewed(self, match_id: str) -> None:
        (
            self._client.table("matches")
            .update({
                "is_viewed": True,
                "viewed_at": datetime.now(timezone.utc).isoformat(),
            })
            .eq("id", match_id)
            .execute()
        )
        logger.info("Marked match %s viewed", match_id)

    def get_founder_match_stats(self, founder_id: str) -> MatchStats:
        """Tier counts and mean total score over a founder's stored matches."""
        response = (
            self._client.table("matches")
            .select("total_score, quality_tier")
            .eq("founder_id", founder_id)
            .execute()
        )
        rows = response.data or []
        if not rows:
            return MatchStats()

        tiers = [row["quality_tier"] for row in rows]
        return MatchStats(
            total_matches=len(rows),
            excellent_count=tiers.count(QualityTier.EXCELLENT.value),
            good_count=tiers.count(QualityTier.GOOD.value),
            fair_count=tiers.count(QualityTier.FAIR.value),
            poor_count=tiers.count(QualityTier.POOR.value),
            avg_score=round(sum(row["total_score"] for row in rows) / len(rows), 4),
        )

    def health_check(self) -> bool:
        """True when the founders table answers a trivial query."""
        try:
            self._client.table("founders").select("id").limit(1).execute()
            return True
        except Exception as exc:
            logger.warning("Supabase health check failed: %s", exc)
            return False
