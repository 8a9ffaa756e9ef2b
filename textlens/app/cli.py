#!/usr/bin/env python3
"""TextLens CLI: analyze text, browse and search stored analyses."""
import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from textlens.config import Settings
from textlens.contracts.analysis import Analysis
from textlens.core.errors import TextLensError
from textlens.core.pipeline.orchestrator import AnalysisPipeline
from textlens.core.storage.port import DEFAULT_LIMIT
from textlens.infrastructure.llm.config import ModelConfigError
from textlens.prompts.registry import PromptNotFound


def _print_analysis(analysis: Analysis) -> None:
    print(f"id: {analysis.id}")
    print(f"created_at: {analysis.created_at.isoformat()}")
    print(f"title: {analysis.title or '-'}")
    print(f"summary: {analysis.summary}")
    print(f"topics: {', '.join(analysis.topics)}")
    print(f"sentiment: {analysis.sentiment.value}")
    print(f"keywords: {', '.join(analysis.keywords)}")


def _print_results(analyses: List[Analysis], as_json: bool) -> None:
    if as_json:
        print(json.dumps([a.to_dict() for a in analyses], ensure_ascii=False, indent=2))
        return

    print(f"=== {len(analyses)} RESULT(S) ===")
    for analysis in analyses:
        print()
        _print_analysis(analysis)


def cmd_analyze(args, settings: Settings) -> None:
    from textlens.app.factory import build_services

    text = args.file.read_text(encoding="utf-8") if args.file else args.text
    if text is None:
        raise TextLensError("Provide TEXT or --file")

    services = build_services(settings)
    analysis = AnalysisPipeline(services).analyze(text)

    if args.json:
        print(json.dumps(analysis.to_dict(), ensure_ascii=False, indent=2))
        return

    meta = services.llm.meta
    print("\n=== ANALYSIS RESULT ===")
    _print_analysis(analysis)
    print(f"model: {meta['backend']}/{meta['model']} (profile: {meta['profile']})")


def cmd_list(args, settings: Settings) -> None:
    from textlens.app.factory import build_store

    if not 1 <= args.limit <= 100:
        raise TextLensError("--limit must be between 1 and 100")

    _print_results(build_store(settings).list_recent(args.limit), args.json)


def cmd_search(args, settings: Settings) -> None:
    from textlens.app.factory import build_store

    store = build_store(settings)
    query = args.query.strip()
    results = store.search(query) if query else store.list_recent(DEFAULT_LIMIT)
    _print_results(results, args.json)


def cmd_init_db(args, settings: Settings) -> None:
    from textlens.infrastructure.storage.postgres import init_db

    init_db(settings.database_url)
    print("✅ Schema ready")


def cmd_serve(args, settings: Settings) -> None:
    import uvicorn

    uvicorn.run("textlens.api.server:app", host=args.host, port=args.port)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser("textlens", description="Text metadata extraction and search")
    sub = parser.add_subparsers(dest="command", required=True)

    analyze = sub.add_parser("analyze", help="Analyze text and store the result")
    analyze.add_argument("text", nargs="?")
    analyze.add_argument("--file", type=Path)
    analyze.add_argument("--json", action="store_true")
    analyze.set_defaults(handler=cmd_analyze)

    list_cmd = sub.add_parser("list", help="Most recent analyses")
    list_cmd.add_argument("--limit", type=int, default=DEFAULT_LIMIT)
    list_cmd.add_argument("--json", action="store_true")
    list_cmd.set_defaults(handler=cmd_list)

    search = sub.add_parser("search", help="Search by topic, keyword, title or summary")
    search.add_argument("query")
    search.add_argument("--json", action="store_true")
    search.set_defaults(handler=cmd_search)

    init_db = sub.add_parser("init-db", help="Create the database schema")
    init_db.set_defaults(handler=cmd_init_db)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    serve.set_defaults(handler=cmd_serve)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        args.handler(args, Settings.from_env())
    except (TextLensError, ModelConfigError, PromptNotFound, ValueError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
