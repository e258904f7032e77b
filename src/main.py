# src/main.py — v1
"""CLI entry point — version, link, script, compile-settings commands.

Usage:
    taghelpers version <path>... [--include PATTERNS] [--exclude PATTERNS]
    taghelpers link href=/css/site.css asp-file-version=true ...
    taghelpers script src=/js/app.js asp-file-version=true ...
    taghelpers compile-settings [--project NAME]
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from taghelpers.logging.logger import get_logger, setup_logging, setup_logging_from_settings
from taghelpers.version import __version__

logger = get_logger("main")


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    _setup_logging(args.verbose)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="taghelpers",
        description=f"taghelpers v{__version__} — asset versioning tag helpers",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--web-root", type=Path, default=None,
        help="Static asset root (default: WEB_ROOT setting)",
    )
    parser.add_argument(
        "--app-name", default=None,
        help="Application name segment stripped from paths",
    )
    parser.add_argument(
        "--path-base", default=None,
        help="Request path base prefixed to globbed URLs",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- version ---
    p_version = subparsers.add_parser(
        "version", help="Print versioned URLs for asset paths",
    )
    p_version.add_argument("paths", nargs="*", help="App-relative asset paths")
    p_version.add_argument(
        "--include", default=None, help="Comma-separated include globs",
    )
    p_version.add_argument(
        "--exclude", default=None, help="Comma-separated exclude globs",
    )
    p_version.set_defaults(func=_cmd_version)

    # --- link ---
    p_link = subparsers.add_parser(
        "link", help="Render a <link> element through the link tag helper",
    )
    p_link.add_argument("attributes", nargs="+", help="name=value pairs")
    p_link.set_defaults(func=_cmd_link)

    # --- script ---
    p_script = subparsers.add_parser(
        "script", help="Render a <script> element through the script tag helper",
    )
    p_script.add_argument("attributes", nargs="+", help="name=value pairs")
    p_script.set_defaults(func=_cmd_script)

    # --- compile-settings ---
    p_compile = subparsers.add_parser(
        "compile-settings", help="Show resolved view compilation settings",
    )
    p_compile.add_argument("--project", default=None, help="Project name")
    p_compile.add_argument("--framework", default=None, help="Target framework")
    p_compile.add_argument("--configuration", default=None, help="Debug or Release")
    p_compile.set_defaults(func=_cmd_compile_settings)

    return parser


def _setup_logging(verbose: bool) -> None:
    # Logs go to stderr; stdout carries command output
    setup_logging(level="DEBUG" if verbose else "WARNING", log_format="text", stream=sys.stderr)


def _load_settings(args: argparse.Namespace):
    from taghelpers.config.settings import load_settings

    overrides: dict[str, object] = {}
    if args.web_root is not None:
        overrides["web_root"] = args.web_root
    if args.app_name is not None:
        overrides["application_name"] = args.app_name
    if args.path_base is not None:
        overrides["request_path_base"] = args.path_base
    settings = load_settings(**overrides)
    if not args.verbose:
        setup_logging_from_settings(settings, stream=sys.stderr)
    return settings


def _parse_attributes(pairs: list[str]) -> dict[str, str]:
    """Parse name=value pairs; a bare name gets an empty value."""
    attributes: dict[str, str] = {}
    for pair in pairs:
        name, _, value = pair.partition("=")
        if not name:
            raise ValueError(f"Invalid attribute: {pair!r}")
        attributes[name] = value
    return attributes


def _cmd_version(args: argparse.Namespace) -> int:
    """Print one versioned URL per line."""
    from taghelpers.tag_helpers.globbing import GlobbingUrlBuilder
    from taghelpers.tag_helpers.models import TagHelperServices
    from taghelpers.versioning.file_version_provider import VersionedAssetResolver

    settings = _load_settings(args)
    services = TagHelperServices.from_settings(settings)
    resolver = VersionedAssetResolver(
        services.file_provider, services.application_name, services.cache,
    )
    builder = GlobbingUrlBuilder(
        services.file_provider, services.cache, settings.request_path_base,
    )

    urls = list(args.paths)
    if args.include:
        urls.extend(builder.build_url_list(None, args.include, args.exclude))
    if not urls:
        logger.error("No paths given and no include pattern matched")
        return 1

    for url in _dedupe(urls):
        print(resolver.resolve(url))
    return 0


def _dedupe(urls: list[str]) -> list[str]:
    return list(dict.fromkeys(urls))


def _cmd_link(args: argparse.Namespace) -> int:
    from taghelpers.tag_helpers.link import LinkTagHelper

    return _render_element(args, "link", LinkTagHelper, self_closing=True)


def _cmd_script(args: argparse.Namespace) -> int:
    from taghelpers.tag_helpers.script import ScriptTagHelper

    return _render_element(args, "script", ScriptTagHelper, self_closing=False)


def _render_element(
    args: argparse.Namespace, tag_name: str, helper_cls, self_closing: bool,
) -> int:
    from taghelpers.logging.context import set_render_context
    from taghelpers.tag_helpers.models import (
        TagHelperContext,
        TagHelperOutput,
        TagHelperServices,
        ViewContext,
    )

    settings = _load_settings(args)
    attributes = _parse_attributes(args.attributes)
    view_context = ViewContext(view_path="<cli>", request_path_base=settings.request_path_base)
    set_render_context(view_context.view_path)

    helper = helper_cls(TagHelperServices.from_settings(settings), view_context)
    context = TagHelperContext(all_attributes=attributes)
    output = TagHelperOutput(
        tag_name=tag_name, attributes=dict(attributes), self_closing=self_closing,
    )
    helper.run(context, output)
    print(output.render())
    return 0


def _cmd_compile_settings(args: argparse.Namespace) -> int:
    """Print resolved compilation settings as JSON."""
    from taghelpers.compilation.extensions import (
        application_environment_from_settings,
        get_compilation_settings,
        get_compilation_settings_for_project,
    )
    from taghelpers.compilation.models import ProjectContext
    from taghelpers.compilation.options_provider import SettingsCompilerOptionsProvider

    settings = _load_settings(args)
    provider = SettingsCompilerOptionsProvider(settings)

    if args.project:
        project = ProjectContext(
            name=args.project,
            target_framework=args.framework or settings.compiler_target_framework,
            configuration=args.configuration or settings.compiler_configuration,
        )
        result = get_compilation_settings_for_project(provider, project)
    else:
        result = get_compilation_settings(
            provider, application_environment_from_settings(settings),
        )

    print(json.dumps(result.model_dump(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
