"""Integration test fixtures and mock infrastructure."""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import pytest

from matching_engine.embeddings import BatchEmbeddingResult, EmbeddingError, ProfileEmbedding
from matching_engine.embeddings.client import BatchItemError
from matching_engine.embeddings.text import generate_founder_embedding_text
from matching_engine.models import Founder, Funder, MatchCandidate, SimilarFunder
from matching_engine.scorer.semantic import cosine_similarity, search_distance
from matching_engine.tests.conftest import base_vector, make_founder, make_funder, unit_vector


class UniqueViolation(Exception):
    """Stand-in for a PostgREST 23505 error."""

    code = "23505"


class MockDBClient:
    """In-memory replacement for SupabaseClient."""

    def __init__(self):
        self.founders: Dict[str, Founder] = {}
        self.funders: Dict[str, Funder] = {}
        self.saved_matches: List[Dict[str, Any]] = []
        self.save_error: Optional[Exception] = None
        self.rpc_error: Optional[Exception] = None
        self.manual_searches = 0

    def add_founder(self, founder: Founder) -> Founder:
        self.founders[founder.id] = founder
        return founder

    def add_funder(self, funder: Funder) -> Funder:
        self.funders[funder.id] = funder
        return funder

    def get_founder_by_id(self, founder_id: str) -> Optional[Founder]:
        founder = self.founders.get(founder_id)
        return founder if founder and founder.is_active else None

    def create_founder(self, record: Dict[str, Any]) -> Founder:
        if any(f.email == record["email"] for f in self.founders.values()):
            raise UniqueViolation('duplicate key value violates unique constraint "founders_email_key"')
        founder = Founder(
            id=str(uuid.uuid4()),
            created_at=datetime.now(timezone.utc),
            **record,
        )
        return self.add_founder(founder)

    def get_active_funders(self) -> List[Funder]:
        return [f for f in self.funders.values() if f.is_active]

    def find_similar_funders(self, founder_id: str, limit: int = 10) -> List[SimilarFunder]:
        if self.rpc_error is not None:
            raise self.rpc_error
        founder = self.founders[founder_id]
        scored = []
        for funder in self.get_active_funders():
            if not funder.embedding:
                continue
            similarity = cosine_similarity(founder.embedding, funder.embedding)
            scored.append(SimilarFunder(funder=funder, semantic_score=similarity, distance=1 - similarity))
        scored.sort(key=lambda s: s.distance)
        return scored[:limit]

    def find_similar_funders_manual(self, founder_embedding, limit: int = 10) -> List[SimilarFunder]:
        self.manual_searches += 1
        scored = []
        for funder in self.get_active_funders():
            if not funder.embedding:
                continue
            distance = search_distance(founder_embedding, funder.embedding)
            scored.append(SimilarFunder(funder=funder, semantic_score=1 - distance, distance=distance))
        scored.sort(key=lambda s: s.distance)
        return scored[:limit]

    def get_funders_without_embeddings(self) -> List[Funder]:
        return [f for f in self.get_active_funders() if not f.embedding]

    def update_funder_embedding(self, funder_id: str, embedding, embedding_text: str) -> None:
        funder = self.funders[funder_id]
        self.funders[funder_id] = funder.model_copy(
            update={"embedding": list(embedding), "embedding_text": embedding_text}
        )

    def save_matches_batch(self, founder_id: str, candidates: List[MatchCandidate]):
        if self.save_error is not None:
            raise self.save_error
        rows = [
            {"founder_id": founder_id, "funder_id": c.funder.id, "total_score": c.breakdown.total_score}
            for c in candidates
        ]
        self.saved_matches.extend(rows)
        return rows

    def health_check(self) -> bool:
        return True


class FakeEmbeddingClient:
    """Deterministic embeddings; fails every call, or only texts containing `fail_containing`."""

    def __init__(
        self,
        vector: Optional[List[float]] = None,
        fail: bool = False,
        fail_containing: Optional[str] = None,
    ):
        self.vector = vector or base_vector()
        self.fail = fail
        self.fail_containing = fail_containing
        self.calls = 0
        self.batches: List[List[str]] = []

    def _embed(self, text: str) -> ProfileEmbedding:
        self.calls += 1
        if self.fail or (self.fail_containing and self.fail_containing in text):
            raise EmbeddingError("OpenAI rate limit exceeded. Please try again later.")
        return ProfileEmbedding(embedding=list(self.vector), embedding_text=text, tokens_used=len(text) // 4)

    def generate_embedding_batch(self, texts: List[str]) -> BatchEmbeddingResult:
        self.batches.append(list(texts))
        result = BatchEmbeddingResult(texts=list(texts))
        for index, text in enumerate(texts):
            try:
                embedded = self._embed(text)
            except EmbeddingError as exc:
                result.error_count += 1
                result.errors.append(BatchItemError(index=index, text=text[:100] + "...", error=str(exc)))
                result.embeddings.append([])
                continue
            result.embeddings.append(embedded.embedding)
            result.total_tokens += embedded.tokens_used
            result.success_count += 1
        return result

    def embed_founder_profile(self, founder) -> ProfileEmbedding:
        return self._embed(generate_founder_embedding_text(founder))


@pytest.fixture
def mock_db():
    return MockDBClient()


@pytest.fixture
def seeded_db(mock_db):
    """One embedded founder and four funders at known similarities."""
    mock_db.add_founder(make_founder("founder-1", embedding=base_vector()))
    mock_db.add_funder(make_funder("close", embedding=unit_vector(0.95)))
    mock_db.add_funder(make_funder("medium", embedding=unit_vector(0.75)))
    mock_db.add_funder(make_funder(
        "far",
        embedding=unit_vector(0.2),
        preferred_industries=["Logistics"],
        preferred_stages=["Series B+"],
        check_size_min=5000,
        check_size_max=9000,
        geography_focus=["Asia"],
    ))
    mock_db.add_funder(make_funder("unembedded"))
    return mock_db
