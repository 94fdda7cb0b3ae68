"""Match orchestration: storage lookups, scoring, ranking and persistence."""

import logging
import time
from typing import List, Optional

from ..embeddings import EmbeddingClient, EmbeddingError, generate_funder_embedding_text
from ..models import (
    Founder,
    FounderProfileInput,
    FounderSummary,
    IngestFounderResponse,
    MatchCandidate,
    MatchResponse,
    MatchResult,
    QualityTier,
    SimilarFunder,
)
from ..scorer import (
    DEFAULT_CONFIG,
    ScoringConfig,
    calculate_profile_completeness,
    filter_by_quality_tier,
    rank_matches,
    score_candidates,
    validate_score_breakdown,
)

logger = logging.getLogger(__name__)

MAX_LIMIT = 50
CANDIDATE_MULTIPLIER = 2
RULES_ONLY_NOTE = (
    "Rule-based matching only (semantic score disabled). Max possible score: 0.60"
)


class MatchServiceError(Exception):
    """Base class for request-level matching failures."""


class InvalidQueryError(MatchServiceError):
    pass


class FounderNotFoundError(MatchServiceError):
    pass


class MissingEmbeddingError(MatchServiceError):
    pass


class DuplicateFounderError(MatchServiceError):
    pass


def _is_unique_violation(exc: Exception) -> bool:
    if getattr(exc, "code", None) == "23505":
        return True
    message = str(exc).lower()
    return "duplicate" in message or "unique" in message


class MatchService:
    """Runs a founder through retrieval, scoring and ranking.

    Args:
        db_client: Storage client (SupabaseClient or a compatible object).
        embedding_client: Optional EmbeddingClient; without one, ingestion
            stores founders without embeddings.
        config: Scoring constants passed through to the scorer.
    """

    def __init__(
        self,
        db_client,
        embedding_client: Optional[EmbeddingClient] = None,
        config: ScoringConfig = DEFAULT_CONFIG,
    ) -> None:
        self.db = db_client
        self.embeddings = embedding_client
        self.config = config

    @staticmethod
    def _validate_query(limit: int, min_score: float) -> None:
        if not 1 <= limit <= MAX_LIMIT:
            raise InvalidQueryError(f"Limit must be between 1 and {MAX_LIMIT}")
        if not 0.0 <= min_score <= 1.0:
            raise InvalidQueryError("min_score must be between 0.0 and 1.0")

    def _get_founder(self, founder_id: str):
        founder = self.db.get_founder_by_id(founder_id)
        if founder is None:
            raise FounderNotFoundError(f"Founder with ID {founder_id} not found")
        return founder

    @staticmethod
    def _build_response(founder, ranked: List[MatchCandidate], note: Optional[str] = None) -> MatchResponse:
        matches = [MatchResult.from_candidate(c) for c in ranked]
        return MatchResponse(
            founder=FounderSummary(
                id=founder.id,
                name=founder.name,
                company_name=founder.company_name,
            ),
            matches=matches,
            total_results=len(matches),
            note=note,
        )

    def _persist(self, founder_id: str, ranked: List[MatchCandidate]) -> None:
        valid = [c for c in ranked if validate_score_breakdown(c.breakdown)]
        if len(valid) < len(ranked):
            logger.warning(
                "Skipping %d inconsistent breakdowns for founder %s",
                len(ranked) - len(valid), founder_id,
            )
        try:
            self.db.save_matches_batch(founder_id, valid)
        except Exception as exc:
            # Results are still returned to the caller
            logger.error("Failed to save matches for founder %s: %s", founder_id, exc)

    def _find_similar(self, founder: Founder, candidate_limit: int) -> List[SimilarFunder]:
        try:
            return self.db.find_similar_funders(founder.id, candidate_limit)
        except Exception as exc:
            logger.warning(
                "find_matching_funders RPC failed for founder %s, using in-memory search: %s",
                founder.id, exc,
            )
        return self.db.find_similar_funders_manual(founder.embedding, candidate_limit)

    def match_founder(
        self,
        founder_id: str,
        limit: int = 10,
        min_score: float = 0.5,
        quality_tier: Optional[QualityTier] = None,
        persist: bool = True,
    ) -> MatchResponse:
        """Rank the funders nearest to a founder's embedding.

        Args:
            founder_id: Founder UUID.
            limit: Number of matches to return (1-50).
            min_score: Minimum total score (0-1).
            quality_tier: Keep only matches in this tier, applied after ranking.
            persist: Upsert the ranked matches into the matches table.

        Returns:
            MatchResponse with matches ordered by total score.

        Raises:
            InvalidQueryError: limit or min_score out of range
            FounderNotFoundError: no active founder with this id
            MissingEmbeddingError: founder has no stored embedding
        """
        self._validate_query(limit, min_score)
        founder = self._get_founder(founder_id)
        if not founder.embedding:
            raise MissingEmbeddingError(
                "Founder profile does not have an embedding. Please regenerate embedding."
            )

        start = time.monotonic()
        similar = self._find_similar(founder, limit * CANDIDATE_MULTIPLIER)
        if not similar:
            logger.info("match founder=%s candidates=0", founder_id)
            return self._build_response(founder, [])

        candidates = score_candidates(
            founder,
            [(s.funder, s.semantic_score) for s in similar],
            self.config,
        )
        ranked = rank_matches(candidates, min_score, limit)
        if quality_tier is not None:
            ranked = filter_by_quality_tier(ranked, quality_tier)

        if persist and ranked:
            self._persist(founder_id, ranked)

        logger.info(
            "match founder=%s candidates=%d returned=%d duration_ms=%.0f",
            founder_id, len(candidates), len(ranked), (time.monotonic() - start) * 1000,
        )
        return self._build_response(founder, ranked)

    def match_founder_rules_only(
        self,
        founder_id: str,
        limit: int = 10,
        min_score: float = 0.3,
    ) -> MatchResponse:
        """Rank every active funder with the semantic branch forced to 0.

        Works for founders without embeddings; results are not persisted.
        """
        self._validate_query(limit, min_score)
        founder = self._get_founder(founder_id)

        funders = self.db.get_active_funders()
        if not funders:
            return self._build_response(founder, [])

        candidates = score_candidates(founder, [(f, 0.0) for f in funders], self.config)
        ranked = rank_matches(candidates, min_score, limit)
        logger.info(
            "match_rules founder=%s candidates=%d returned=%d",
            founder_id, len(candidates), len(ranked),
        )
        return self._build_response(founder, ranked, note=RULES_ONLY_NOTE)

    def ingest_founder(self, profile: FounderProfileInput) -> IngestFounderResponse:
        """Store a new founder with completeness and, when possible, an embedding.

        Raises:
            DuplicateFounderError: a founder with this email already exists
        """
        completeness = calculate_profile_completeness(profile, self.config.completeness_fields)
        record = profile.model_dump(mode="json")
        record["profile_completeness"] = completeness
        record["is_active"] = True

        embedding_generated = False
        if self.embeddings is not None:
            try:
                result = self.embeddings.embed_founder_profile(profile)
                record["embedding"] = result.embedding
                record["embedding_text"] = result.embedding_text
                embedding_generated = True
            except (ValueError, EmbeddingError) as exc:
                # Embedding can be regenerated later
                logger.error("Failed to generate embedding for %s: %s", profile.email, exc)
        else:
            logger.warning("No embedding client configured; storing founder without embedding")

        try:
            founder = self.db.create_founder(record)
        except Exception as exc:
            if _is_unique_violation(exc):
                raise DuplicateFounderError(
                    f"Founder with email {profile.email} already exists"
                ) from exc
            raise

        return IngestFounderResponse(
            id=founder.id,
            embedding_generated=embedding_generated,
            profile_completeness=completeness,
            created_at=founder.created_at,
        )

    def backfill_funder_embeddings(self) -> int:
        """Embed every active funder that lacks a vector.

        Returns:
            Number of funders updated.
        """
        if self.embeddings is None:
            raise ValueError("An embedding client is required to backfill embeddings")

        funders = self.db.get_funders_without_embeddings()
        if not funders:
            logger.info("backfill funders=0 updated=0")
            return 0

        texts = [generate_funder_embedding_text(funder) for funder in funders]
        batch = self.embeddings.generate_embedding_batch(texts)

        for error in batch.errors:
            logger.error("Failed to embed funder %s: %s", funders[error.index].id, error.error)

        updated = 0
        for funder, text, embedding in zip(funders, batch.texts, batch.embeddings):
            # Failed items keep their slot with an empty vector
            if not embedding:
                continue
            self.db.update_funder_embedding(funder.id, embedding, text)
            updated += 1

        logger.info(
            "backfill funders=%d updated=%d tokens=%d",
            len(funders), updated, batch.total_tokens,
        )
        return updated
