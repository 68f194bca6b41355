"""
Command-line interface for AIScout.

Subcommands:
- analyze: extract the component inventory of live pages or HTML files
- generate: ask a text generation model for test scenarios
- parse: turn raw generated text into structured scenarios
- script: translate scenarios into a Playwright test file
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any

import structlog
from dotenv import load_dotenv

from aiscout import __version__


def configure_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure structlog for CLI output."""
    import logging

    log_level = "DEBUG" if debug else "INFO" if verbose else "WARNING"

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, log_level),
    )

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="aiscout",
        description="AIScout - component discovery, AI test scenarios and Playwright script generation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  aiscout analyze https://example.com -o analysis.json
  aiscout analyze https://example.com --exclude ".cookie-banner" "#chat-widget"
  aiscout analyze --html page.html --url https://example.com -o analysis.json
  aiscout generate analysis.json --language en --max-scenarios 3 --json scenarios.json
  aiscout generate analysis.json --demo --json scenarios.json
  aiscout parse raw.txt -o scenarios.json
  aiscout script analysis.json scenarios.json --dialect python -o test_app.py
""",
    )

    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    parser.add_argument(
        "--config",
        default=None,
        help="YAML settings file (default: .aiscout.yaml or aiscout.yaml if present)",
    )
    parser.add_argument("--version", action="version", version=f"AIScout {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", help="Extract interactive components from pages")
    analyze.add_argument("urls", nargs="*", help="Page URLs (http://, https:// or file://)")
    analyze.add_argument("--html", default=None, help="Analyze a saved HTML file instead of a live page")
    analyze.add_argument("--url", default="", help="URL recorded for --html input")
    analyze.add_argument("--exclude", nargs="+", default=None, help="CSS selectors of elements to skip")
    analyze.add_argument("--include-hidden", action="store_true", help="Keep hidden elements")
    analyze.add_argument("--wait-for", default=None, dest="wait_for", help="Selector to wait for after load")
    analyze.add_argument("-t", "--timeout", type=int, default=None, help="Page load timeout in ms")
    analyze.add_argument("--headed", action="store_true", help="Show the browser window")
    analyze.add_argument("-o", "--output", default=None, help="Output JSON file (default: stdout)")

    generate = subparsers.add_parser("generate", help="Generate test scenarios from an analysis")
    generate.add_argument("analysis", help="Analysis JSON produced by 'analyze'")
    generate.add_argument("--max-scenarios", type=int, default=5, dest="max_scenarios")
    generate.add_argument("--language", choices=["en", "tr"], default=None)
    generate.add_argument("--complexity", choices=["simple", "moderate", "complex"], default="moderate")
    generate.add_argument("--edge-cases", action="store_true", dest="edge_cases", help="Include negative tests")
    generate.add_argument("--focus", nargs="+", default=[], help="Areas to focus on")
    generate.add_argument("--demo", action="store_true", help="Use built-in demo text instead of a model")
    generate.add_argument("--json", default=None, dest="json_output", help="Also write scenarios as JSON")
    generate.add_argument("-o", "--output", default=None, help="Text report path (default: output dir)")

    parse = subparsers.add_parser("parse", help="Parse raw generated text into scenarios")
    parse.add_argument("input", help="Text file, or - for stdin")
    parse.add_argument("-o", "--output", default=None, help="Output JSON file (default: stdout)")

    script = subparsers.add_parser("script", help="Generate a Playwright test file")
    script.add_argument("analysis", help="Analysis JSON produced by 'analyze'")
    script.add_argument("scenarios", help="Scenario JSON produced by 'generate --json' or 'parse'")
    script.add_argument("--dialect", choices=["typescript", "python"], default="typescript")
    script.add_argument("-o", "--output", default=None, help="Output file (default: stdout)")

    return parser


def _write_output(text: str, output: str | None) -> None:
    logger = structlog.get_logger(__name__)
    if output:
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text, encoding="utf-8")
        logger.info("output_saved", path=str(output_path.absolute()))
    else:
        print(text)


def _dump_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def _load_analysis(path: str) -> Any:
    from aiscout.models import AnalysisResult

    return AnalysisResult.model_validate_json(Path(path).read_text(encoding="utf-8"))


def _load_scenarios(path: str) -> list[Any]:
    from aiscout.models import ScenarioRecord

    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("scenarios", [])
    return [ScenarioRecord.model_validate(item) for item in data]


async def run_analyze(args: argparse.Namespace) -> int:
    """Analyze pages and print or save the inventory."""
    from aiscout.config import load_settings
    from aiscout.extractor import AnalysisOptions, PageAnalyzer, analyze_html

    logger = structlog.get_logger(__name__)
    settings = load_settings(args.config)
    exclude = tuple(args.exclude if args.exclude is not None else settings.exclude_selectors)
    include_hidden = args.include_hidden or settings.include_hidden

    if args.html:
        html = Path(args.html).read_text(encoding="utf-8")
        result = analyze_html(html, args.url, exclude, include_hidden)
        _write_output(_dump_json(result.to_json_dict()), args.output)
        return 0

    if not args.urls:
        logger.error("configuration_error", error="Provide at least one URL or --html")
        return 1

    try:
        options = AnalysisOptions(
            url=args.urls[0],
            wait_for_selector=args.wait_for,
            timeout_ms=args.timeout or settings.default_timeout_ms,
            exclude_selectors=exclude,
            include_hidden=include_hidden,
        )
    except ValueError as e:
        logger.error("configuration_error", error=str(e))
        return 1

    analyzer = PageAnalyzer(headless=not args.headed)
    if len(args.urls) == 1:
        result = await analyzer.analyze(options)
        _write_output(_dump_json(result.to_json_dict()), args.output)
        return 0

    batch = await analyzer.analyze_many(args.urls, options)
    _write_output(_dump_json(batch.to_json_dict()), args.output)
    logger.info("analysis_summary", succeeded=len(batch.results), failed=len(batch.errors))
    return 0 if not batch.errors else 1


async def run_generate(args: argparse.Namespace) -> int:
    """Generate scenarios for a saved analysis."""
    from aiscout.config import load_settings
    from aiscout.llm import TextGenerationClient
    from aiscout.scenarios import (
        DEMO_MODEL,
        ScenarioGenerator,
        ScenarioOptions,
        ScenarioRequest,
        StaticTextGenerator,
        format_scenarios_as_text,
        scenario_filename,
    )

    logger = structlog.get_logger(__name__)
    settings = load_settings(args.config)
    analysis = _load_analysis(args.analysis)

    request = ScenarioRequest(
        url=analysis.url,
        title=analysis.title,
        components=analysis.components,
        options=ScenarioOptions(
            max_scenarios=args.max_scenarios,
            focus_areas=tuple(args.focus),
            include_edge_cases=args.edge_cases,
            language=args.language or settings.language,
            complexity=args.complexity,
        ),
    )

    if args.demo:
        result = await ScenarioGenerator(StaticTextGenerator(), DEMO_MODEL).generate(request)
    else:
        if not settings.endpoint.has_api_key:
            logger.warning("api_key_missing", hint="Set AISCOUT_API_KEY or HUGGINGFACE_API_KEY, or use --demo")
        async with TextGenerationClient(settings.endpoint) as client:
            result = await ScenarioGenerator(client, settings.endpoint.model).generate(request)

    output = args.output or str(settings.output_dir / scenario_filename())
    _write_output(format_scenarios_as_text(result), output)
    if args.json_output:
        _write_output(_dump_json(result.to_json_dict()), args.json_output)

    logger.info(
        "generation_summary",
        scenarios=result.total_generated,
        generation_time_ms=result.generation_time_ms,
        model=result.model,
    )
    return 0


def run_parse(args: argparse.Namespace) -> int:
    """Parse raw text into scenario JSON."""
    from aiscout.scenarios import ScenarioTextParser

    text = sys.stdin.read() if args.input == "-" else Path(args.input).read_text(encoding="utf-8")
    scenarios = ScenarioTextParser().parse(text)
    _write_output(_dump_json([s.to_json_dict() for s in scenarios]), args.output)
    return 0


def run_script(args: argparse.Namespace) -> int:
    """Write a Playwright test file for saved scenarios."""
    from aiscout.translator import PlaywrightScriptWriter, get_dialect

    analysis = _load_analysis(args.analysis)
    scenarios = _load_scenarios(args.scenarios)
    writer = PlaywrightScriptWriter(get_dialect(args.dialect))
    _write_output(writer.write(scenarios, analysis), args.output)
    return 0


def dispatch(args: argparse.Namespace) -> int:
    """Run the selected subcommand and return its exit code."""
    match args.command:
        case "analyze":
            return asyncio.run(run_analyze(args))
        case "generate":
            return asyncio.run(run_generate(args))
        case "parse":
            return run_parse(args)
        case "script":
            return run_script(args)
        case _:
            raise ValueError(f"Unknown command: {args.command}")


def main() -> None:
    """Main entry point for CLI."""
    load_dotenv()
    parser = create_parser()
    args = parser.parse_args()

    configure_logging(verbose=args.verbose, debug=args.debug)

    try:
        sys.exit(dispatch(args))
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        logger = structlog.get_logger(__name__)
        logger.error("fatal_error", error=str(e))
        if args.debug:
            raise
        sys.exit(1)


if __name__ == "__main__":
    main()
