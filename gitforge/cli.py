"""Command line entry point."""

import argparse
import logging
import sys

from gitforge import __version__
from gitforge.cache.manager import CacheManager
from gitforge.commands.cache import clear_caches, list_caches, show_cache_info
from gitforge.commands.gitignore import GitignoreCommand
from gitforge.commands.issue import IssueCommand
from gitforge.commands.license import LicenseCommand
from gitforge.commands.pr import PullRequestCommand
from gitforge.core.config import GitforgeConfig
from gitforge.core.exceptions import GitforgeError
from gitforge.remote.fetcher import Fetcher

logger = logging.getLogger(__name__)


def _update_cache_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--update-cache", action="store_true", help="Refresh the template index before running"
    )


def _add_gitignore(args, manager, fetcher, config):
    GitignoreCommand(manager, fetcher, config.cache_max_age).add(
        args.templates,
        all_templates=args.all,
        directory=args.dir,
        output=args.output,
        force=args.force,
        append=args.append,
        update_cache=args.update_cache,
    )


def _add_issue(args, manager, fetcher, config):
    IssueCommand(manager, fetcher, config.cache_max_age).add(
        args.templates,
        directory=args.dir,
        outputs=args.output,
        force=args.force,
        update_cache=args.update_cache,
    )


def _add_pr(args, manager, fetcher, config):
    PullRequestCommand(manager, fetcher, config.cache_max_age).add(
        args.templates,
        directory=args.dir,
        outputs=args.output,
        force=args.force,
        update_cache=args.update_cache,
    )


def _add_license(args, manager, fetcher, config):
    LicenseCommand(manager, fetcher, config.cache_max_age).add(
        args.licenses,
        outputs=args.output,
        directory=args.dir,
        params=args.param,
        interactive=args.interactive,
        force=args.force,
        update_cache=args.update_cache,
    )


def _list_gitignores(args, manager, fetcher, config):
    GitignoreCommand(manager, fetcher, config.cache_max_age).list_templates(
        popular=args.popular,
        global_only=args.global_only,
        community=args.community,
        update_cache=args.update_cache,
    )


def _list_issues(args, manager, fetcher, config):
    IssueCommand(manager, fetcher, config.cache_max_age).list_templates(update_cache=args.update_cache)


def _list_prs(args, manager, fetcher, config):
    PullRequestCommand(manager, fetcher, config.cache_max_age).list_templates(
        update_cache=args.update_cache
    )


def _list_licenses(args, manager, fetcher, config):
    LicenseCommand(manager, fetcher, config.cache_max_age).list_licenses(
        popular=args.popular,
        non_software=args.non_software,
        search=args.search,
        osi_approved=args.osi_approved,
        fsf_libre=args.fsf_libre,
        include_deprecated=args.include_deprecated,
        update_cache=args.update_cache,
    )


PREVIEW_COMMANDS = {
    "gitignore": GitignoreCommand,
    "issue": IssueCommand,
    "pr": PullRequestCommand,
    "license": LicenseCommand,
}


def _preview(args, manager, fetcher, config):
    command = PREVIEW_COMMANDS[args.kind](manager, fetcher, config.cache_max_age)
    command.preview(args.templates, update_cache=args.update_cache)


def _cache_list(args, manager, fetcher, config):
    list_caches(manager)


def _cache_info(args, manager, fetcher, config):
    show_cache_info(manager, args.name, config.cache_max_age)


def _cache_clear(args, manager, fetcher, config):
    clear_caches(manager, args.names, clear_all=args.all)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gitforge", description="📦 Scaffold GitHub templates easily")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command")

    # add
    add = commands.add_parser("add", help="Add templates to the current repository")
    add_kinds = add.add_subparsers(dest="kind", required=True)

    p = add_kinds.add_parser("gitignore", help="Add gitignore templates", description="Add gitignore templates")
    p.add_argument("templates", nargs="*", help="Template names, e.g. rust or Global/Windows")
    p.add_argument("--all", action="store_true", help="Download and merge every template")
    p.add_argument("--dir", default=".", help="Directory to write into")
    p.add_argument("-o", "--output", default=".gitignore", help="Output file name")
    p.add_argument("--force", action="store_true", help="Overwrite an existing file")
    p.add_argument("--append", action="store_true", help="Append to an existing file")
    _update_cache_flag(p)
    p.set_defaults(handler=_add_gitignore)

    p = add_kinds.add_parser(
        "issue", help="Add issue templates", description="Add one or more issue templates to the repository"
    )
    p.add_argument("templates", nargs="*", help="Template names, e.g. bug feature")
    p.add_argument("--dir", help="Directory to write into (default: .github/ISSUE_TEMPLATE)")
    p.add_argument("-o", "--output", nargs="+", help="Output file names, one per template")
    p.add_argument("--force", action="store_true", help="Overwrite existing files")
    _update_cache_flag(p)
    p.set_defaults(handler=_add_issue)

    p = add_kinds.add_parser(
        "pr",
        aliases=["pr-template"],
        help="Add a pull request template",
        description="Add a pull request template",
    )
    p.add_argument("templates", nargs="*", help="Template names, e.g. default")
    p.add_argument("--dir", help="Directory to write into (default: .github)")
    p.add_argument("-o", "--output", nargs="+", help="Output file names, one per template")
    p.add_argument("--force", action="store_true", help="Overwrite existing files")
    _update_cache_flag(p)
    p.set_defaults(handler=_add_pr)

    p = add_kinds.add_parser("license", help="Add a license", description="Add one or more licenses")
    p.add_argument("licenses", nargs="*", help="SPDX license ids, e.g. mit apache-2.0")
    p.add_argument("-o", "--output", nargs="+", help="Output file names, one per license")
    p.add_argument("--dir", default=".", help="Directory to write into")
    p.add_argument("--param", action="append", help="Placeholder value as KEY=VALUE, e.g. year=2025")
    p.add_argument("--interactive", action="store_true", help="Prompt for unfilled placeholders")
    p.add_argument("--force", action="store_true", help="Overwrite existing files")
    _update_cache_flag(p)
    p.set_defaults(handler=_add_license)

    # list
    list_cmd = commands.add_parser("list", help="List available templates")
    list_kinds = list_cmd.add_subparsers(dest="kind", required=True)

    p = list_kinds.add_parser(
        "gitignores",
        aliases=["gitignore"],
        help="List available gitignore templates",
        description="List available gitignore templates",
    )
    group = p.add_mutually_exclusive_group()
    group.add_argument("-p", "--popular", action="store_true", help="Only popular templates")
    group.add_argument("-g", "--global", dest="global_only", action="store_true", help="Only global templates")
    group.add_argument("-c", "--community", action="store_true", help="Only community templates")
    _update_cache_flag(p)
    p.set_defaults(handler=_list_gitignores)

    p = list_kinds.add_parser(
        "issues",
        aliases=["issue"],
        help="List available issue templates",
        description="List available issue templates",
    )
    _update_cache_flag(p)
    p.set_defaults(handler=_list_issues)

    p = list_kinds.add_parser(
        "prs",
        aliases=["pr"],
        help="List available pull request templates",
        description="List available pull request templates",
    )
    _update_cache_flag(p)
    p.set_defaults(handler=_list_prs)

    p = list_kinds.add_parser(
        "licenses", aliases=["license"], help="List available licenses", description="List available licenses"
    )
    p.add_argument("-p", "--popular", action="store_true", help="Only popular licenses")
    p.add_argument("--non-software", action="store_true", help="Licenses for fonts, hardware and media")
    p.add_argument("--search", help="Filter by id or name")
    p.add_argument("--osi-approved", action="store_true", help="Only OSI-approved licenses")
    p.add_argument("--fsf-libre", action="store_true", help="Only FSF free/libre licenses")
    p.add_argument("--include-deprecated", action="store_true", help="Include deprecated license ids")
    _update_cache_flag(p)
    p.set_defaults(handler=_list_licenses)

    # preview
    preview = commands.add_parser("preview", help="Print a template without writing it")
    preview_kinds = preview.add_subparsers(dest="kind", required=True)
    for kind, description in (
        ("gitignore", "Preview a gitignore template"),
        ("issue", "Preview an issue template"),
        ("pr", "Preview a pull request template"),
        ("license", "Preview a license"),
    ):
        p = preview_kinds.add_parser(kind, help=description, description=description)
        p.add_argument("templates", nargs="*", help="Template names")
        _update_cache_flag(p)
        p.set_defaults(handler=_preview)

    # cache
    cache = commands.add_parser("cache", help="Inspect or clear local caches")
    cache_actions = cache.add_subparsers(dest="action", required=True)

    p = cache_actions.add_parser("list", help="List cached indexes")
    p.set_defaults(handler=_cache_list)

    p = cache_actions.add_parser("info", help="Show details for one cache")
    p.add_argument("name", help="Cache name, e.g. gitignore_templates")
    p.set_defaults(handler=_cache_info)

    p = cache_actions.add_parser("clear", help="Delete caches")
    p.add_argument("names", nargs="*", help="Cache names")
    p.add_argument("--all", action="store_true", help="Remove the whole cache directory")
    p.set_defaults(handler=_cache_clear)

    return parser


def main(argv: list[str] | None = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if not getattr(args, "handler", None):
        parser.print_help()
        sys.exit(0)

    try:
        config = GitforgeConfig.from_env()
        manager = CacheManager.from_config(config)
        with Fetcher(config) as fetcher:
            args.handler(args, manager, fetcher, config)
    except GitforgeError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
