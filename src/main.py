# src/main.py - v2
"""CLI entry point: check, augment commands.

Usage:
    originality-guard check <generated> -r <reference> [-r <reference> ...] [options]
    originality-guard augment <result.json> <prompt>
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from originality_guard.version import __version__

if TYPE_CHECKING:
    from originality_guard.config.settings import Settings
    from originality_guard.core.models import OriginalityConfig, OriginalityResult

logger = logging.getLogger(__name__)

EXIT_ORIGINAL = 0
EXIT_NOT_ORIGINAL = 1
EXIT_ERROR = 2


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    _setup_logging(args.verbose)

    if not hasattr(args, "func"):
        parser.print_help()
        return EXIT_ERROR

    try:
        return asyncio.run(args.func(args))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return EXIT_ERROR


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="originality-guard",
        description=f"originality-guard v{__version__} - originality checks for generated text",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- check ---
    p_check = subparsers.add_parser(
        "check", help="Check a generated text against reference files",
    )
    p_check.add_argument("generated", type=Path, help="Path to generated text")
    p_check.add_argument(
        "-r", "--reference", dest="references", type=Path, action="append",
        default=[], help="Reference text file (repeatable)",
    )
    p_check.add_argument("--max-cosine", type=float, default=None)
    p_check.add_argument("--max-jaccard", type=float, default=None)
    p_check.add_argument("--min-score", type=float, default=None)
    p_check.add_argument(
        "--allow-sources", action="store_true",
        help="Do not fail on URLs, citations or quotes",
    )
    p_check.add_argument(
        "--no-semantic", action="store_true",
        help="Disable semantic (cosine) checks",
    )
    p_check.add_argument(
        "--embeddings", action="store_true",
        help="Use the configured embedding provider instead of term frequencies",
    )
    p_check.add_argument(
        "--json", dest="as_json", action="store_true",
        help="Print the full result as JSON",
    )
    p_check.set_defaults(func=_cmd_check)

    # --- augment ---
    p_augment = subparsers.add_parser(
        "augment", help="Rewrite a prompt from a failed check result",
    )
    p_augment.add_argument("result", type=Path, help="Result JSON from 'check --json'")
    p_augment.add_argument("prompt", type=Path, help="Original prompt file")
    p_augment.set_defaults(func=_cmd_augment)

    return parser


async def _cmd_check(args: argparse.Namespace) -> int:
    """Run an originality check on local files."""
    from originality_guard.config.settings import Settings
    from originality_guard.core.guard import OriginalityGuard
    from originality_guard.core.models import ReferenceContent

    for path in [args.generated, *args.references]:
        if not path.is_file():
            logger.error("File not found: %s", path)
            return EXIT_ERROR

    settings = Settings()
    if settings.log_file:
        _attach_log_file(settings, args.verbose)
    config = _build_config(args, settings)
    references = [
        ReferenceContent(
            id=path.stem,
            title=path.name,
            content=path.read_text(encoding="utf-8"),
        )
        for path in args.references
    ]
    generated = args.generated.read_text(encoding="utf-8")

    client = None
    if args.embeddings:
        from originality_guard.embeddings.client_factory import create_embedding_client

        client = create_embedding_client(settings)

    guard = OriginalityGuard(client=client, config=config, strict=args.embeddings)
    result = await guard.check(generated, references)

    if args.as_json:
        print(result.model_dump_json(indent=2))
    else:
        _print_result_summary(result)
    return EXIT_ORIGINAL if result.is_original else EXIT_NOT_ORIGINAL


async def _cmd_augment(args: argparse.Namespace) -> int:
    """Print the improvement prompt for a stored result."""
    from originality_guard.core.models import OriginalityResult
    from originality_guard.core.prompts import generate_improvement_prompt

    for path in (args.result, args.prompt):
        if not path.is_file():
            logger.error("File not found: %s", path)
            return EXIT_ERROR

    result = OriginalityResult.model_validate_json(args.result.read_text(encoding="utf-8"))
    prompt = args.prompt.read_text(encoding="utf-8")
    sys.stdout.write(generate_improvement_prompt(result, prompt))
    return EXIT_ORIGINAL


def _build_config(args: argparse.Namespace, settings: Settings) -> OriginalityConfig:
    """Merge CLI overrides into the settings-derived OriginalityConfig."""
    config = settings.originality_config()
    updates: dict[str, object] = {}
    if args.max_cosine is not None:
        updates["max_cosine_similarity"] = args.max_cosine
    if args.max_jaccard is not None:
        updates["max_jaccard_similarity"] = args.max_jaccard
    if args.min_score is not None:
        updates["min_originality_score"] = args.min_score
    if args.allow_sources:
        updates["block_source_disclosure"] = False
    if args.no_semantic:
        updates["enable_semantic_checks"] = False
    return config.model_copy(update=updates) if updates else config


def _print_result_summary(result: OriginalityResult) -> None:
    """Print a human-readable summary of an OriginalityResult."""
    verdict = "ORIGINAL" if result.is_original else "NOT ORIGINAL"
    print(f"\nOriginality check: {verdict}")
    print(f"  Score:           {result.overall_score}")
    print(f"  Max cosine:      {result.cosine_similarity:.3f}")
    print(f"  Max Jaccard:     {result.jaccard_similarity:.3f}")
    print(f"  Source leakage:  {'yes' if result.source_leakage_detected else 'no'}")
    for check in result.similarity_checks:
        print(
            f"  - {check.reference_title or check.reference_id}: "
            f"{check.risk_level} (cosine={check.cosine_similarity:.3f}, "
            f"jaccard={check.jaccard_similarity:.3f})"
        )
        for phrase in check.overlapping_phrases:
            print(f"      \"{phrase}\"")
    for recommendation in result.recommendations:
        print(f"  * {recommendation}")


def _attach_log_file(settings: Settings, verbose: bool) -> None:
    """Mirror package logs into the configured rotating log file."""
    from originality_guard.logging.logger import setup_logging

    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
        console=False,
    )


def _setup_logging(verbose: bool) -> None:
    """Configure logging for CLI usage."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
    # Quiet noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)


if __name__ == "__main__":
    sys.exit(main())
