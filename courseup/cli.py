"""
CLI (Command Line Interface).

    courseup serve [--host HOST] [--port PORT]
    courseup terms
    courseup courses <term> [--subject CSC] [--code 110] [--page N] [--limit N]
    courseup course <term> <subject> <code> [section]

The query commands go through the same validator and resolvers as the HTTP
API and print plain text.

Exit codes: 0 ok, 1 bad input / not found, 2 upstream failure.
"""

from __future__ import annotations

import argparse
import asyncio

from courseup.catalog import CatalogResolver
from courseup.config import Settings, get_settings
from courseup.detail import DetailResolver
from courseup.errors import NotFoundError, UpstreamError, ValidationError
from courseup.logging_config import configure_logging
from courseup.provider import CourseDataProvider, build_provider
from courseup.validate import validate_course_key, validate_course_query


def _cmd_serve(args: argparse.Namespace, settings: Settings) -> int:
    """
    Run the HTTP API with uvicorn.
    """
    import uvicorn

    from courseup.api import create_app

    app = create_app(settings)
    uvicorn.run(app, host=args.host or settings.api_host, port=args.port or settings.api_port)
    return 0


def _cmd_terms(args: argparse.Namespace, settings: Settings) -> int:
    for term in settings.terms:
        print(term)
    return 0


def _cmd_courses(args: argparse.Namespace, settings: Settings, provider: CourseDataProvider) -> int:
    """
    Print one page of course identities, one "SUBJ CODE" per line.
    """
    query = validate_course_query(
        args.term,
        args.subject,
        args.code,
        args.page,
        args.limit,
        terms=settings.terms,
        default_limit=settings.default_limit,
    )
    resolver = CatalogResolver(provider, strict=settings.strict_identifiers)
    courses = asyncio.run(resolver.list_courses(query))

    if not courses:
        print("No results.")
        return 0

    for c in courses:
        print(f"{c.subject} {c.code}")
    return 0


def _cmd_course(args: argparse.Namespace, settings: Settings, provider: CourseDataProvider) -> int:
    """
    Print a course with its sections, or a single section.
    """
    key = validate_course_key(args.term, args.subject, args.code, terms=settings.terms, section=args.section)
    resolver = DetailResolver(provider)

    if key.section is not None:
        s = asyncio.run(resolver.get_section(key))
        print(f"{s.crn} | {s.section} | {s.section_type}")
        return 0

    detail = asyncio.run(resolver.get_course_detail(key))
    title = str(detail.record.get("title", "") or "").strip()
    print(f"{key.subject} {key.code} | {title if title else '(no title)'}")

    if not detail.sections:
        print("No sections.")
    for s in detail.sections:
        print(f"  {s.crn} | {s.section} | {s.section_type}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="courseup", description="CourseUp catalog service")
    sub = parser.add_subparsers(dest="command", required=True)

    p_serve = sub.add_parser("serve", help="Run the HTTP API")
    p_serve.add_argument("--host", type=str, default=None, help="Bind address (default from settings)")
    p_serve.add_argument("--port", type=int, default=None, help="Port (default from settings)")

    sub.add_parser("terms", help="List known terms")

    p_courses = sub.add_parser("courses", help="List courses of a term")
    p_courses.add_argument("term", type=str, help="Term code (e.g. 202109)")
    p_courses.add_argument("--subject", type=str, default=None, help="Subject filter (e.g. CSC)")
    p_courses.add_argument("--code", type=str, default=None, help="Code filter (e.g. 110)")
    p_courses.add_argument("--page", type=str, default=None, help="Page number (starts at 1)")
    p_courses.add_argument("--limit", type=str, default=None, help="Page size")

    p_course = sub.add_parser("course", help="Show a course and its sections, or one section")
    p_course.add_argument("term", type=str, help="Term code (e.g. 202109)")
    p_course.add_argument("subject", type=str, help="Subject (e.g. CSC)")
    p_course.add_argument("code", type=str, help="Code (e.g. 225)")
    p_course.add_argument("section", type=str, nargs="?", default=None, help="Section (e.g. A01)")

    return parser


def main(argv: list[str] | None = None, provider: CourseDataProvider | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.log_level)

    if args.command == "serve":
        raise SystemExit(_cmd_serve(args, settings))
    if args.command == "terms":
        raise SystemExit(_cmd_terms(args, settings))

    if provider is None:
        provider = build_provider(settings)

    try:
        if args.command == "courses":
            raise SystemExit(_cmd_courses(args, settings, provider))
        raise SystemExit(_cmd_course(args, settings, provider))
    except (ValidationError, NotFoundError) as exc:
        print(f"Error: {exc}")
        raise SystemExit(1)
    except UpstreamError as exc:
        print(f"Upstream error: {exc}")
        raise SystemExit(2)
