"""OpenAI embedding client for founder and funder profiles."""

import logging
import os
import time
from typing import List, Optional

import httpx
import openai
from pydantic import BaseModel, Field
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
    before_sleep_log,
)

from .text import generate_founder_embedding_text, generate_funder_embedding_text

logger = logging.getLogger(__name__)

EMBEDDING_MODEL = "text-embedding-ada-002"
EMBEDDING_DIMENSION = 1536
MAX_INPUT_CHARS = 32000  # ~8k tokens

# 10s connect, 60s read
EMBEDDING_TIMEOUT = httpx.Timeout(connect=10.0, read=60.0, write=30.0, pool=30.0)

TRANSIENT_ERRORS = (
    openai.RateLimitError,
    openai.APIConnectionError,
    openai.InternalServerError,
)


class EmbeddingError(Exception):
    """Raised when an embedding cannot be produced."""


class EmbeddingResponse(BaseModel):
    embedding: List[float]
    tokens_used: int = 0


class ProfileEmbedding(BaseModel):
    embedding: List[float]
    embedding_text: str
    tokens_used: int = 0


class BatchItemError(BaseModel):
    index: int
    text: str = Field(..., description="First 100 characters of the failed input")
    error: str


class BatchEmbeddingResult(BaseModel):
    """Batch output; `embeddings[i]` is [] when input i failed."""

    embeddings: List[List[float]] = Field(default_factory=list)
    texts: List[str] = Field(default_factory=list)
    total_tokens: int = 0
    success_count: int = 0
    error_count: int = 0
    errors: List[BatchItemError] = Field(default_factory=list)


def embedding_retry():
    """Retry decorator for transient OpenAI failures: 3 attempts, exponential backoff."""
    return retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type(TRANSIENT_ERRORS),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )


class EmbeddingClient:
    """Thin wrapper over the OpenAI embeddings endpoint."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = EMBEDDING_MODEL,
        dimension: int = EMBEDDING_DIMENSION,
        base_url: Optional[str] = None,
    ) -> None:
        """Initialize from explicit args or env vars.

        Args:
            api_key: OpenAI key (falls back to OPENAI_API_KEY env var).
            model: Embedding model name.
            dimension: Expected vector length, checked on every response.
            base_url: Optional API base URL override.
        """
        self.model = model
        self.dimension = dimension
        # Retries are handled by tenacity, not the SDK
        self._client = openai.OpenAI(
            api_key=api_key or os.environ["OPENAI_API_KEY"],
            base_url=base_url,
            timeout=EMBEDDING_TIMEOUT,
            max_retries=0,
        )

    @embedding_retry()
    def _create(self, text: str):
        return self._client.embeddings.create(
            model=self.model,
            input=text,
            encoding_format="float",
        )

    def generate_embedding(self, text: str) -> EmbeddingResponse:
        """Embed a single text.

        Raises:
            ValueError: If text is empty or whitespace
            EmbeddingError: On API failure or a wrong-sized vector
        """
        if not text or not text.strip():
            raise ValueError("Embedding text cannot be empty")

        start = time.monotonic()
        try:
            response = self._create(text[:MAX_INPUT_CHARS])
        except openai.RateLimitError as exc:
            raise EmbeddingError("OpenAI rate limit exceeded. Please try again later.") from exc
        except openai.AuthenticationError as exc:
            raise EmbeddingError("Invalid OpenAI API key") from exc
        except openai.OpenAIError as exc:
            raise EmbeddingError(f"OpenAI embedding generation failed: {exc}") from exc

        embedding = list(response.data[0].embedding)
        if len(embedding) != self.dimension:
            raise EmbeddingError(
                f"Invalid embedding dimension: expected {self.dimension}, got {len(embedding)}"
            )

        tokens_used = response.usage.total_tokens if response.usage else 0
        logger.info(
            "embedding_complete model=%s tokens=%d duration_ms=%.0f",
            self.model,
            tokens_used,
            (time.monotonic() - start) * 1000,
        )
        return EmbeddingResponse(embedding=embedding, tokens_used=tokens_used)

    def generate_embedding_batch(
        self,
        texts: List[str],
        chunk_size: int = 10,
        delay: float = 0.1,
        chunk_delay: float = 0.5,
    ) -> BatchEmbeddingResult:
        """Embed texts sequentially in chunks, pausing between calls.

        Failures are recorded per item and never abort the batch.
        """
        result = BatchEmbeddingResult(texts=list(texts))

        for chunk_start in range(0, len(texts), chunk_size):
            chunk = texts[chunk_start:chunk_start + chunk_size]

            for offset, text in enumerate(chunk):
                index = chunk_start + offset
                try:
                    response = self.generate_embedding(text)
                    result.embeddings.append(response.embedding)
                    result.total_tokens += response.tokens_used
                    result.success_count += 1
                except (ValueError, EmbeddingError) as exc:
                    logger.warning("embedding_failed index=%d error=%s", index, exc)
                    result.error_count += 1
                    result.errors.append(
                        BatchItemError(index=index, text=text[:100] + "...", error=str(exc))
                    )
                    result.embeddings.append([])

                if offset < len(chunk) - 1 and delay:
                    time.sleep(delay)

            if chunk_start + chunk_size < len(texts) and chunk_delay:
                time.sleep(chunk_delay)

        return result

    def embed_founder_profile(self, founder) -> ProfileEmbedding:
        text = generate_founder_embedding_text(founder)
        response = self.generate_embedding(text)
        return ProfileEmbedding(
            embedding=response.embedding,
            embedding_text=text,
            tokens_used=response.tokens_used,
        )

    def embed_funder_profile(self, funder) -> ProfileEmbedding:
        text = generate_funder_embedding_text(funder)
        response = self.generate_embedding(text)
        return ProfileEmbedding(
            embedding=response.embedding,
            embedding_text=text,
            tokens_used=response.tokens_used,
        )
