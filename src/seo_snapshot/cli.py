"""Command-line interface for SEO snapshots."""

import asyncio
import json
import sys

from seo_snapshot.analyzer import SnapshotAnalyzer
from seo_snapshot.config import AnalysisThresholds, FetchConfig, settings
from seo_snapshot.exceptions import AcquisitionError, BlockedError, MissingInputError
from seo_snapshot.logging_config import setup_logging

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_BLOCKED = 2


def print_profile(profile):
    """Print a page profile in a formatted way.

    Args:
        profile: PageProfile object
    """
    seo = profile.seo

    print(f"\n{'=' * 60}")
    print(f"SEO Snapshot for: {profile.url}")
    print(f"{'=' * 60}")
    if profile.prerendered:
        print("(rendered through prerender proxy)")

    print(f"\nTitle: {profile.title or '-'} ({seo.title_length} chars)")
    print(f"Description: {profile.meta_description or '-'} ({seo.meta_description_length} chars)")
    print(f"Canonical: {profile.canonical or '-'} [{seo.canonical_status}]")
    print(f"Lang: {profile.lang or '-'}")
    print(f"Size: {profile.page_size_kb} KB, {profile.word_count} words, {profile.image_count} images")

    print(f"\nHeadings:")
    for tag, count in profile.heading_counts.items():
        print(f"  • {tag}: {count}")

    stats = profile.link_stats
    print(f"\nLinks:")
    print(f"  • Internal: {stats.internal_links}")
    print(f"  • External: {stats.external_links}")
    print(f"  • Nofollow: {stats.nofollow_count}")
    print(f"  • Broken (sampled): {stats.broken_count}")

    if profile.json_ld:
        print(f"\nStructured data:")
        for entity in profile.json_ld:
            print(f"  • {entity.type or '?'}: {entity.name or '-'}")

    if seo.robots_directives:
        print(f"\nRobots: {', '.join(seo.robots_directives)}")

    warnings = []
    if seo.title_too_long:
        warnings.append("Title is too long")
    if seo.meta_description_too_long:
        warnings.append("Meta description is too long")
    if seo.h1_count == 0:
        warnings.append("No H1 heading")
    if seo.images_missing_alt:
        warnings.append(f"{seo.images_missing_alt} images missing alt text")
    if not seo.has_og_tags:
        warnings.append("No Open Graph tags")

    if warnings:
        print(f"\n⚠️  Warnings:")
        for warning in warnings:
            print(f"  • {warning}")

    print(f"\n{'=' * 60}\n")


def load_thresholds(args) -> AnalysisThresholds:
    if args.thresholds:
        return AnalysisThresholds.from_file(args.thresholds)
    return AnalysisThresholds.from_env()


def thresholds_command(args) -> int:
    """Show the effective thresholds, or save them as a JSON file."""
    thresholds = load_thresholds(args)

    if args.save:
        thresholds.save_to_file(args.save)
        print(f"Thresholds written to {args.save}")
    else:
        print(json.dumps(thresholds.to_dict(), indent=2))

    return EXIT_OK


def snapshot_command(args) -> int:
    """Snapshot a single URL."""
    analyzer = SnapshotAnalyzer(config=FetchConfig.from_env(), thresholds=load_thresholds(args))

    try:
        profile = asyncio.run(analyzer.snapshot(args.url, force_prerender=args.prerender))
    except MissingInputError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_FAILURE
    except BlockedError as e:
        print(f"❌ {e.message} ({e.reason})", file=sys.stderr)
        return EXIT_BLOCKED
    except AcquisitionError as e:
        print(f"❌ {e.message}: {e.detail}", file=sys.stderr)
        return EXIT_FAILURE

    if args.output == "json":
        output = json.dumps(profile.to_dict(), indent=2, ensure_ascii=False)
        if args.output_file:
            with open(args.output_file, "w") as f:
                f.write(output)
            print(f"\nSnapshot written to {args.output_file}")
        else:
            print(output)
    else:
        print_profile(profile)

    return EXIT_OK


def serve_command(args) -> int:
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run("seo_snapshot.api:app", host=args.host, port=args.port)
    return EXIT_OK


def main(argv=None):
    """Main CLI entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="SEO Snapshot - Fetch a page and extract its SEO/content profile"
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=settings.LOG_LEVEL.upper(),
        help="Set logging verbosity (default: INFO)",
    )
    parser.add_argument(
        "--log-file",
        default=settings.LOG_FILE,
        help="Write logs to file in addition to console",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    snapshot_parser = subparsers.add_parser(
        "snapshot", help="Snapshot a single URL."
    )
    snapshot_parser.add_argument("url", help="URL to analyze")
    snapshot_parser.add_argument(
        "--prerender",
        action="store_true",
        help="Always fetch through the prerender proxy",
    )
    snapshot_parser.add_argument(
        "--output",
        "-o",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    snapshot_parser.add_argument(
        "--output-file",
        "-f",
        help="Write output to file (only for json format)",
    )
    snapshot_parser.add_argument(
        "--thresholds",
        help="JSON file with threshold overrides",
    )
    snapshot_parser.set_defaults(func=snapshot_command)

    thresholds_parser = subparsers.add_parser(
        "thresholds", help="Show or save the effective analysis thresholds."
    )
    thresholds_parser.add_argument(
        "--thresholds",
        help="JSON file with threshold overrides (default: environment)",
    )
    thresholds_parser.add_argument(
        "--save",
        metavar="PATH",
        help="Write the thresholds to a JSON file usable with --thresholds",
    )
    thresholds_parser.set_defaults(func=thresholds_command)

    serve_parser = subparsers.add_parser(
        "serve", help="Run the HTTP API."
    )
    serve_parser.add_argument("--host", default=settings.HOST)
    serve_parser.add_argument("--port", type=int, default=settings.PORT)
    serve_parser.set_defaults(func=serve_command)

    args = parser.parse_args(argv)

    setup_logging(
        level=args.log_level,
        log_file=getattr(args, 'log_file', None),
    )

    if hasattr(args, "func"):
        return args.func(args)

    parser.print_help()
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
