"""Command-line entry point for the founder/funder matching engine.

Commands:
- match <founder_id>: rank funders for a founder (hybrid or rules-only)
- ingest <profile.json>: store a founder profile with its embedding
- backfill-embeddings: embed funders that have no vector yet
- health: check the Supabase connection
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from pydantic import ValidationError

from .config import load_config
from .database import SupabaseClient
from .embeddings import EmbeddingClient
from .matcher import MatchService, MatchServiceError
from .models import FounderProfileInput, QualityTier
from .scorer import load_scoring_config

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="matching-engine",
        description="Hybrid founder/funder matching engine",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    match = commands.add_parser("match", help="Rank funders for a founder")
    match.add_argument("founder_id")
    match.add_argument("--limit", type=int, default=10)
    match.add_argument("--min-score", type=float, default=None)
    match.add_argument(
        "--quality-tier",
        choices=[tier.value for tier in QualityTier],
        default=None,
    )
    match.add_argument("--rules-only", action="store_true", help="Skip the semantic branch")
    match.add_argument("--no-save", action="store_true", help="Do not persist matches")

    ingest = commands.add_parser("ingest", help="Ingest a founder profile from JSON")
    ingest.add_argument("profile", help="Path to a JSON founder profile")

    commands.add_parser("backfill-embeddings", help="Embed funders missing a vector")
    commands.add_parser("health", help="Check database connectivity")

    return parser


def build_service(config) -> MatchService:
    """Wire storage, embeddings and scoring constants from configuration."""
    embedding_client = None
    if config.openai_api_key:
        embedding_client = EmbeddingClient(
            api_key=config.openai_api_key,
            model=config.embedding_model,
        )
    else:
        logger.warning("OPENAI_API_KEY not set; embeddings disabled")

    return MatchService(
        SupabaseClient(url=config.supabase_url, key=config.supabase_key),
        embedding_client=embedding_client,
        config=load_scoring_config(config.scoring_config_path),
    )


def run_command(args: argparse.Namespace, service: MatchService) -> dict:
    if args.command == "match":
        if args.rules_only:
            response = service.match_founder_rules_only(
                args.founder_id,
                limit=args.limit,
                min_score=0.3 if args.min_score is None else args.min_score,
            )
        else:
            response = service.match_founder(
                args.founder_id,
                limit=args.limit,
                min_score=0.5 if args.min_score is None else args.min_score,
                quality_tier=QualityTier(args.quality_tier) if args.quality_tier else None,
                persist=not args.no_save,
            )
        return response.model_dump(mode="json")

    if args.command == "ingest":
        with open(args.profile, "r") as f:
            profile = FounderProfileInput(**json.load(f))
        return service.ingest_founder(profile).model_dump(mode="json")

    if args.command == "backfill-embeddings":
        return {"updated": service.backfill_funder_embeddings()}

    if args.command == "health":
        healthy = service.db.health_check()
        return {"status": "healthy" if healthy else "unhealthy", "database": healthy}

    raise ValueError(f"Unknown command: {args.command}")


def _print_error(exc: Exception) -> None:
    print(json.dumps({"error": type(exc).__name__, "message": str(exc)}, indent=2))


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config()

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        # stdout carries only the JSON result
        handlers=[logging.StreamHandler(sys.stderr)]
    )
    logger.info("Starting matching engine command=%s env=%s", args.command, config.environment)

    try:
        result = run_command(args, build_service(config))
    except (MatchServiceError, ValidationError, ValueError, FileNotFoundError) as e:
        logger.error(f"Command failed: {e}")
        _print_error(e)
        return 1
    except Exception as e:
        logger.error(f"Command failed with infrastructure error: {e}", exc_info=True)
        _print_error(e)
        return 1

    print(json.dumps(result, indent=2))
    if args.command == "health" and not result["database"]:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
