"""
querytree command-line entry point.

Run with: python -m querytree <command> [options]

Commands:
    select STATE.json   print the {q, h} selection as JSON
    tree STATE.json     print the id-annotated UI tree (or --api-tree)
    serve               run the MCP server over stdio
"""

import argparse
import json
import os
import sys
from pathlib import Path


def _read_state(path: str):
    if path == "-":
        return json.load(sys.stdin)
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="querytree", description="Query tree selectors")
    parser.add_argument("--project", "-p", type=Path, help="Project root holding querytree.json (default: current directory)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    parser.add_argument("--stdio", action="store_true", help="Run the MCP server (same as 'serve')")

    commands = parser.add_subparsers(dest="command")

    select = commands.add_parser("select", help="Print the {q, h} selection")
    select.add_argument("state", help="Application state JSON file ('-' for stdin)")

    tree = commands.add_parser("tree", help="Print the reified query tree")
    tree.add_argument("state", help="Application state JSON file ('-' for stdin)")
    tree.add_argument("--api-tree", action="store_true", help="Print the API shape instead of the UI shape")

    commands.add_parser("serve", help="Run the MCP server over stdio")
    return parser


def main(argv=None) -> int:
    """Main entry point for querytree."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Set env vars before loggers and config are rebuilt
    if args.project:
        os.environ["QUERYTREE_PROJECT_ROOT"] = str(args.project.resolve())
    if args.verbose:
        os.environ["QUERYTREE_LOG_LEVEL"] = "DEBUG"

    # querytree.json may set the log level and directory
    from .config_loader import load_config
    load_config(args.project)

    from .logging_config import reconfigure_log_directory
    reconfigure_log_directory()

    if args.stdio or args.command == "serve":
        from .mcp_server import create_server
        create_server().run()
        return 0

    if args.command is None:
        parser.print_help()
        return 2

    from .config import SelectorConfig
    from .exceptions import QueryTreeError
    from .selectors import select_query, select_tree_query, select_tree_query_for_api

    config = SelectorConfig()
    try:
        state = _read_state(args.state)
        if args.command == "select":
            output = select_query(state, config).model_dump()
        elif args.api_tree:
            output = select_tree_query_for_api(state, config)
        else:
            output = select_tree_query(state, config)
    except (OSError, json.JSONDecodeError, QueryTreeError) as e:
        print(f"querytree: {e}", file=sys.stderr)
        return 1

    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
