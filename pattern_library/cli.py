#!/usr/bin/env python3
"""
Pattern Library CLI Entry Point

Handles:
- Server modes (stdio, http)
- Browsing profiles, resources and prompts from the terminal
- Verifying that every manifest entry resolves to content
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Dict, List, Optional

from pattern_library import __version__, __package_name__
from pattern_library.config import ConfigManager, available_profiles, load_profile
from pattern_library.registry import LoadError, NotFoundError, RegistryError


def print_json(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def parse_prompt_args(pairs: List[str]) -> Dict[str, str]:
    """Turn ["k=v", ...] into a dict. Values may contain '='."""
    values = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Expected key=value, got '{pair}'")
        values[key] = value
    return values


def cmd_serve(args, config) -> int:
    if args.http:
        from pattern_library.server import run_http
        asyncio.run(run_http(args.profile, args.port))
    else:
        from pattern_library.server import run_stdio
        asyncio.run(run_stdio(args.profile))
    return 0


def cmd_profiles(args, config) -> int:
    for name in available_profiles(config.content_root):
        profile = load_profile(name, config.content_root)
        print(f"{name:<12} {profile.uri_scheme + '://':<12} {profile.description}")
    return 0


def cmd_list(args, config) -> int:
    dispatcher = load_profile(args.profile, config.content_root).create_dispatcher()
    print_json(dispatcher.list_resources(category=args.category, query=args.query))
    return 0


def cmd_read(args, config) -> int:
    dispatcher = load_profile(args.profile, config.content_root).create_dispatcher()
    print_json(dispatcher.read_resource(args.uri))
    return 0


def cmd_prompts(args, config) -> int:
    dispatcher = load_profile(args.profile, config.content_root).create_dispatcher()
    print_json(dispatcher.list_prompts())
    return 0


def cmd_prompt(args, config) -> int:
    dispatcher = load_profile(args.profile, config.content_root).create_dispatcher()
    print_json(dispatcher.get_prompt(args.name, parse_prompt_args(args.arg)))
    return 0


def cmd_verify(args, config) -> int:
    names = available_profiles(config.content_root) if args.all else [args.profile]
    failed = 0
    for name in names:
        dispatcher = load_profile(name, config.content_root).create_dispatcher()
        result = dispatcher.verify()
        status = "ok" if result.ok else f"{len(result.failures)} failed"
        print(f"{name}: {len(result.contents)} loaded, {status}")
        for failure in result.failures:
            print(f"  ✗ {failure.uri}: {failure.message}")
        failed += len(result.failures)
    return 1 if failed else 0


def build_parser(default_profile: str, default_port: int) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pattern-library",
        description="Pattern Library - documentation snippets and prompt templates over MCP",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Examples:
  pattern-library serve                       Serve the default profile on stdio
  pattern-library serve --profile crm-base --http --port 3000
  pattern-library list --category templates
  pattern-library read agency://contracts/sow-template
  pattern-library prompt onboard_client --arg client_name=Acme
  pattern-library verify --all
""",
    )
    parser.add_argument("--version", "-v", action="version", version=f"{__package_name__} v{__version__}")
    parser.add_argument("--content-root", type=Path, help="Directory holding server profiles")

    sub = parser.add_subparsers(dest="command")

    def with_profile(p):
        p.add_argument("--profile", default=default_profile, help=f"Content profile (default: {default_profile})")
        return p

    serve = with_profile(sub.add_parser("serve", help="Run the MCP server"))
    serve.add_argument("--stdio", action="store_true", help="Run in stdio mode (default)")
    serve.add_argument("--http", action="store_true", help="Run in HTTP mode")
    serve.add_argument("--port", "-p", type=int, default=default_port, help=f"HTTP port (default: {default_port})")
    serve.set_defaults(func=cmd_serve)

    sub.add_parser("profiles", help="List available profiles").set_defaults(func=cmd_profiles)

    list_cmd = with_profile(sub.add_parser("list", help="List resources"))
    list_cmd.add_argument("--category", help="Only resources in this category")
    list_cmd.add_argument("--query", "-q", help="Search uri, name, description and category")
    list_cmd.set_defaults(func=cmd_list)

    read = with_profile(sub.add_parser("read", help="Print a resource envelope"))
    read.add_argument("uri")
    read.set_defaults(func=cmd_read)

    with_profile(sub.add_parser("prompts", help="List prompts")).set_defaults(func=cmd_prompts)

    prompt = with_profile(sub.add_parser("prompt", help="Render a prompt"))
    prompt.add_argument("name")
    prompt.add_argument("--arg", "-a", action="append", default=[], metavar="KEY=VALUE", help="Prompt argument")
    prompt.set_defaults(func=cmd_prompt)

    verify = with_profile(sub.add_parser("verify", help="Check every resource loads"))
    verify.add_argument("--all", action="store_true", help="Verify every profile")
    verify.set_defaults(func=cmd_verify)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    config = ConfigManager.get_instance().load()
    parser = build_parser(config.profile, config.http_port)
    args = parser.parse_args(argv)

    if args.content_root:
        config.content_root = args.content_root
    if not args.command:
        # Default to serving on stdio
        args = parser.parse_args(["serve"])

    try:
        return args.func(args, config)
    except NotFoundError as e:
        print(f"Not found: {e.message}", file=sys.stderr)
        return 1
    except LoadError as e:
        print(f"Load error: {e.message}", file=sys.stderr)
        return 1
    except (RegistryError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
