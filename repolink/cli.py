"""CLI entrypoints for repolink commands."""

from __future__ import annotations

import argparse
import ast
import os
import sys
from pathlib import Path
from typing import Optional, Sequence

from .config import ConfigError, load_config, merge_overrides
from .context import OverrideError, ResolutionContext, build_context, node_location
from .links import LinkStyle, code_href
from .logging import configure_logging, get_logger


def _logging_options() -> argparse.ArgumentParser:
    """Logging flags accepted both before and after the subcommand."""
    options = argparse.ArgumentParser(add_help=False)
    options.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Show debug output from repository detection.",
    )
    options.add_argument(
        "--log-file",
        type=Path,
        default=argparse.SUPPRESS,
        help="Also write debug-level logs to this file.",
    )
    return options


def _add_repository_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--work-dir",
        default=".",
        help="Directory that repository paths are computed from (defaults to current directory).",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a .repolink.yml file (defaults to the one in --work-dir).",
    )
    parser.add_argument(
        "--repository-url",
        default=None,
        help="Manual override for the repository's web URL.",
    )
    parser.add_argument(
        "--repository-default-branch",
        default=None,
        help="Manual override for the repository's default branch.",
    )
    parser.add_argument(
        "--repository-path",
        default=None,
        help="Manual override for the path from the repository root to --work-dir.",
    )


def _build_parser() -> argparse.ArgumentParser:
    logging_options = _logging_options()
    parser = argparse.ArgumentParser(
        prog="repolink",
        description="Resolve repository metadata used to link documentation to source.",
        parents=[logging_options],
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    resolve_parser = subparsers.add_parser(
        "resolve",
        help="Show the remote, default branch and path detected for a directory.",
        parents=[logging_options],
    )
    _add_repository_options(resolve_parser)
    resolve_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Directory being documented (defaults to current directory).",
    )

    link_parser = subparsers.add_parser(
        "link",
        help="Print source permalinks for top-level definitions in a Python file.",
        parents=[logging_options],
    )
    _add_repository_options(link_parser)
    link_parser.add_argument("file", help="Python source file.")
    link_parser.add_argument("names", nargs="+", help="Top-level function or class names.")
    link_parser.add_argument(
        "--style",
        choices=[style.value for style in LinkStyle],
        default=None,
        help="Link format (detected from the remote URL by default).",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for repolink commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=getattr(args, "verbose", False),
        log_file=getattr(args, "log_file", None),
    )
    log = get_logger("cli")

    config_path = Path(args.config) if args.config else Path(args.work_dir)
    try:
        config = load_config(config_path)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    overrides = merge_overrides(
        config.repository,
        remote=args.repository_url,
        default_branch=args.repository_default_branch,
        path_from_root=args.repository_path,
    )

    pkg_dir = args.path if args.command == "resolve" else os.path.dirname(os.path.abspath(args.file))
    try:
        context = build_context(log, args.work_dir, pkg_dir, overrides=overrides)
    except OverrideError as exc:
        parser.exit(1, f"{exc}\n")
    except OSError as exc:
        parser.exit(1, f"repolink {args.command} failed: {exc}\n")

    if args.command == "resolve":
        _print_repository(context)
    elif args.command == "link":
        style = args.style or (config.link_style.value if config.link_style else None)
        try:
            hrefs = _links_for_names(context, args.file, args.names, style)
        except (OSError, SyntaxError, LookupError) as exc:
            parser.exit(1, f"repolink link failed: {exc}\n")
        if hrefs is None:
            parser.exit(1, "No repository information found; cannot build source links\n")
        for name, href in zip(args.names, hrefs):
            print(f"{name}: {href}")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _print_repository(context: ResolutionContext) -> None:
    repo = context.repository
    if repo is None:
        print("No repository information found")
        return
    print(f"remote: {repo.remote}")
    print(f"default branch: {repo.default_branch}")
    print(f"path from root: {repo.path_from_root}")


def _links_for_names(
    context: ResolutionContext,
    file: str,
    names: Sequence[str],
    style: Optional[str],
) -> Optional[list[str]]:
    if context.repository is None:
        return None
    module = context.file_set.parse(file)
    definitions = {
        node.name: node
        for node in module.body
        if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef, ast.ClassDef))
    }
    hrefs: list[str] = []
    for name in names:
        node = definitions.get(name)
        if node is None:
            raise LookupError(f"{name} is not defined at the top level of {file}")
        href = code_href(node_location(context, node), style)
        if href is not None:
            hrefs.append(href)
    return hrefs


if __name__ == "__main__":
    main(sys.argv[1:])
