"""CLI entrypoints for versiondocs commands."""

from __future__ import annotations

import argparse
import platform
import sys
from pathlib import Path

from . import __version__
from .config import CONFIG_FILE_NAME, load_config, merge_config
from .errors import VersionDocsError
from .logging import configure_logging
from .models import MenuFiles
from .orchestrator import Orchestrator


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Debug mode: log every external command.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        "--debug",
        dest="verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="versiondocs",
        description="Manage multiple documentation versions with MkDocs.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Build the documentation of every version branch into ./site.",
    )
    _add_verbose_option(build_parser, suppress_default=True)
    build_parser.add_argument(
        "--config",
        default=CONFIG_FILE_NAME,
        help=f"Configuration file providing defaults (defaults to {CONFIG_FILE_NAME}).",
    )
    build_parser.add_argument("-o", "--owner", help="Repository owner. [required]")
    build_parser.add_argument(
        "-r", "--repo-name", dest="repository_name", help="Repository name. [required]"
    )
    build_parser.add_argument(
        "-d", "--dockerfile-url", help="Fallback Dockerfile URL or path. [required]"
    )
    build_parser.add_argument(
        "--exp-branch",
        dest="experimental_branch",
        help="Build a branch as experimental.",
    )
    build_parser.add_argument(
        "--exclude",
        dest="excluded_branches",
        action="append",
        default=[],
        help="Exclude a branch from the build (repeatable).",
    )
    build_parser.add_argument("--image-name", help="Docker image name.")
    build_parser.add_argument(
        "--dockerfile-name", help="Name of the version-specific Dockerfile to search for."
    )
    build_parser.add_argument(
        "--build-path", help="Docker build context, relative to the documentation root."
    )
    build_parser.add_argument(
        "--no-cache", action="store_true", help="Use 'docker build --no-cache=true'."
    )
    build_parser.add_argument(
        "--force-edit-url",
        action="store_true",
        help="Override the edit_uri already present in mkdocs.yml.",
    )
    build_parser.add_argument(
        "--rqts-url",
        dest="requirements",
        help="requirements.txt URL or path merged into every version's requirements.",
    )
    build_parser.add_argument("--menu.js-url", dest="menu_js_url", help="URL of the JS menu template.")
    build_parser.add_argument("--menu.js-file", dest="menu_js_file", help="Path of the JS menu template.")
    build_parser.add_argument("--menu.css-url", dest="menu_css_url", help="URL of the CSS menu template.")
    build_parser.add_argument("--menu.css-file", dest="menu_css_file", help="Path of the CSS menu template.")
    build_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Log docker commands instead of running them.",
    )

    version_parser = subparsers.add_parser("version", help="Display the version.")
    _add_verbose_option(version_parser, suppress_default=True)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for versiondocs commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    verbose = bool(getattr(args, "verbose", False))
    configure_logging(verbose=verbose)

    if args.command == "version":
        print(_version_text())
        return

    if args.command == "build":
        try:
            config = merge_config(load_config(Path(args.config)), _overrides_from_args(args, verbose))
            versions = Orchestrator().run(config)
        except VersionDocsError as exc:
            parser.exit(1, f"versiondocs build failed: {exc}\nRun with --verbose for more details.\n")
        except OSError as exc:
            parser.exit(1, f"versiondocs build failed: {exc}\n")
        print(f"Documentation built for {len(versions)} version(s) in ./site")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _overrides_from_args(args: argparse.Namespace, verbose: bool) -> dict[str, object]:
    return {
        "owner": args.owner,
        "repository_name": args.repository_name,
        "dockerfile_url": args.dockerfile_url,
        "experimental_branch": args.experimental_branch,
        "excluded_branches": list(args.excluded_branches),
        "image_name": args.image_name,
        "dockerfile_name": args.dockerfile_name,
        "build_path": args.build_path,
        "requirements": args.requirements,
        "menu": MenuFiles(
            js_url=args.menu_js_url or "",
            js_file=args.menu_js_file or "",
            css_url=args.menu_css_url or "",
            css_file=args.menu_css_file or "",
        ),
        "debug": verbose,
        "no_cache": args.no_cache,
        "force_edit_url": args.force_edit_url,
        "dry_run": args.dry_run,
    }


def _version_text() -> str:
    return (
        "versiondocs:\n"
        f" version     : {__version__}\n"
        f" python      : {platform.python_version()}\n"
        f" implementation: {platform.python_implementation()}\n"
        f" platform    : {sys.platform}/{platform.machine()}"
    )


if __name__ == "__main__":
    main(sys.argv[1:])
