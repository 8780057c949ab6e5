"""Command-line interface for the schema intelligence engine."""

import json
import sys
from typing import Optional

from schema_intel.config import AnalysisConfig, EngineConfig, settings
from schema_intel.engine import SchemaIntelligenceEngine
from schema_intel.entity import load_entities
from schema_intel.logging_config import get_logger, setup_logging
from schema_intel.models import BusinessIntent, BusinessType
from schema_intel.rules import RuleCatalog, RuleCatalogError

logger = get_logger(__name__)

PRIORITY_ICONS = {"high": "🔴", "medium": "🟡", "low": "🟢"}


def _read_document(path: str):
    """Read a JSON document from a file path, or stdin for '-'."""
    if path == "-":
        return json.load(sys.stdin)
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _write_output(output: str, output_file: Optional[str]) -> None:
    if output_file:
        with open(output_file, "w", encoding="utf-8") as f:
            f.write(output)
        print(f"Results written to {output_file}")
    else:
        print(output)


def print_analysis(result) -> None:
    """Print an analysis result in a formatted way.

    Args:
        result: AnalysisResult object
    """
    breakdown = result.score_breakdown

    print(f"\n{'=' * 60}")
    print(f"Schema Analysis for: {result.url}")
    print(f"{'=' * 60}")
    print(f"\n📊 Opportunity Score: {result.opportunity_score}/100")
    print("\nScore Breakdown:")
    print(f"  • Entity Clarity: {breakdown.entity_clarity}/100")
    print(f"  • Relationship Depth: {breakdown.relationship_depth}/100")
    print(f"  • Rich Result Alignment: {breakdown.rich_result_alignment}/100")
    print(f"  • Business Intent Match: {breakdown.business_intent_match}/100")
    print(f"  • Content Consistency: {breakdown.content_consistency}/100")

    if result.entities:
        print(f"\n🧩 Entities ({len(result.entities)}):")
        for node in result.entities:
            print(f"  • {node.type} [{node.id}] confidence={node.confidence.value}")
            for child in node.children:
                print(f"      └ {child.type} [{child.id}]")

    if result.eligible_rich_results:
        print("\n✨ Rich Results:")
        for verdict in result.eligible_rich_results:
            mark = "✅" if verdict.eligible else "❌"
            print(f"  {mark} {verdict.name} ({verdict.confidence.value}): {verdict.reason}")

    if result.issues:
        print(f"\n⚠️  Issues ({len(result.issues)}):")
        for issue in result.issues:
            print(f"  • [{issue.severity.value}] {issue.message}")

    if result.recommendations:
        print("\n💡 Recommendations:")
        for rec in result.recommendations:
            icon = PRIORITY_ICONS.get(rec.priority.value, "•")
            print(f"  {icon} {rec.title} - {rec.impact}")

    print(f"\n{'=' * 60}\n")


def analyze_command(args):
    """Analyze a JSON-LD document of extracted entities."""
    try:
        engine_config = EngineConfig.from_env()
        engine_config.max_depth = args.max_depth
        engine_config.rules_file = args.rules
        engine = SchemaIntelligenceEngine.from_config(engine_config)

        document = _read_document(args.file)
        entities = load_entities(document)
        if not entities:
            print(f"No schema markup found in {args.file}")

        config = AnalysisConfig(business_type=args.business_type, intent=args.intent)
        result = engine.analyze(entities, args.url or args.file, config)

        if args.output == "json":
            _write_output(json.dumps(result.to_dict(), indent=2, default=str), args.output_file)
        else:
            print_analysis(result)

    except (OSError, json.JSONDecodeError, RuleCatalogError) as e:
        logger.debug("Analyze command failed", exc_info=True)
        print(f"Error: {e}")
        sys.exit(1)


def rules_command(args):
    """Print the rule catalog."""
    try:
        catalog = RuleCatalog.from_file(args.rules) if args.rules else RuleCatalog.default()
    except RuleCatalogError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if args.output == "json":
        print(json.dumps(catalog.to_dict(), indent=2))
        return

    for rule in catalog:
        print(f"{rule.key} ({rule.name})")
        print(f"  Triggers: {', '.join(rule.trigger_types)}")
        print(f"  Required: {', '.join(rule.required) or '-'}")
        print(f"  Recommended: {', '.join(rule.recommended) or '-'}")


def main(argv=None):
    """Main CLI entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Schema Intel - Evaluate structured data for rich result eligibility"
    )

    # Global flags (before subcommands)
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging verbosity (default: SCHEMA_INTEL_LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--log-file",
        default=settings.LOG_FILE,
        help="Write logs to file in addition to console",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Analyze command parser
    analyze_parser = subparsers.add_parser(
        "analyze", help="Analyze extracted structured data from a JSON file."
    )
    analyze_parser.add_argument(
        "file", help="JSON-LD document or entity list ('-' for stdin)"
    )
    analyze_parser.add_argument(
        "--url", help="Page URL to label the result with (default: file name)"
    )
    analyze_parser.add_argument(
        "--business-type",
        choices=[t.value for t in BusinessType],
        default=settings.BUSINESS_TYPE,
        help="Business context for intent scoring",
    )
    analyze_parser.add_argument(
        "--intent",
        choices=[i.value for i in BusinessIntent],
        default=settings.INTENT,
        help="Business intent",
    )
    analyze_parser.add_argument(
        "--rules",
        default=settings.RULES_FILE,
        help="Alternate rule catalog (YAML or JSON)",
    )
    analyze_parser.add_argument(
        "--max-depth",
        type=int,
        default=settings.MAX_DEPTH,
        help="Maximum entity nesting depth (default: %(default)s)",
    )
    analyze_parser.add_argument(
        "--output",
        "-o",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    analyze_parser.add_argument(
        "--output-file",
        "-f",
        help="Write output to file (only for json format)",
    )
    analyze_parser.set_defaults(func=analyze_command)

    # Rules command parser
    rules_parser = subparsers.add_parser(
        "rules", help="Show the rich result rule catalog."
    )
    rules_parser.add_argument(
        "--rules",
        default=settings.RULES_FILE,
        help="Alternate rule catalog (YAML or JSON)",
    )
    rules_parser.add_argument(
        "--output",
        "-o",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    rules_parser.set_defaults(func=rules_command)

    args = parser.parse_args(argv)

    # Configure logging based on flags, then environment
    setup_logging(
        level=args.log_level or EngineConfig.from_env().log_level,
        log_file=getattr(args, 'log_file', None),
    )

    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
