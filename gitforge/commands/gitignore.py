"""Gitignore template commands backed by github/gitignore."""

import logging
import sys
from pathlib import Path

from gitforge.commands.base import TemplateCommand, format_columns, write_template
from gitforge.core.exceptions import GitforgeError, TemplateNotFoundError, TemplateWriteError
from gitforge.core.models import Cache

logger = logging.getLogger(__name__)

GITHUB_API_BASE = "https://api.github.com/repos/github/gitignore"
GITHUB_RAW_BASE = "https://raw.githubusercontent.com/github/gitignore/main"
GITIGNORE_CACHE_NAME = "gitignore_templates"
GITIGNORE_SUFFIX = ".gitignore"

# (remote folder, category tag); the root folder has no prefix
FOLDERS = [
    ("", "root"),
    ("Global", "global"),
    ("community", "community"),
]

POPULAR_TEMPLATES = [
    "python",
    "node",
    "rust",
    "go",
    "java",
    "c++",
    "c",
    "swift",
    "kotlin",
    "visualstudio",
    "unity",
    "global/macos",
    "global/windows",
    "global/linux",
    "global/visualstudiocode",
    "global/jetbrains",
]


class GitignoreCommand(TemplateCommand):
    """Add, list and preview ``.gitignore`` templates."""

    cache_name = GITIGNORE_CACHE_NAME
    list_name = "gitignores"

    def build_cache(self) -> Cache[str]:
        """Index every ``*.gitignore`` file in the root, Global and community folders.

        Keys are lowercase template names, prefixed with ``<folder>-`` outside
        the root folder. Values are paths relative to the repository root.
        """
        cache = Cache[str]()

        for folder, category in FOLDERS:
            url = f"{GITHUB_API_BASE}/contents/{folder}" if folder else f"{GITHUB_API_BASE}/contents"
            listing = self.fetcher.fetch_json(url)
            if not isinstance(listing, list):
                logger.warning(f"Unexpected directory listing from {url}, skipping")
                continue

            for item in listing:
                name = item.get("name") if isinstance(item, dict) else None
                if not name or not name.endswith(GITIGNORE_SUFFIX):
                    continue

                template_name = name[: -len(GITIGNORE_SUFFIX)].lower()
                full_path = f"{folder}/{name}" if folder else name
                cache_key = f"{folder.lower()}-{template_name}" if folder else template_name
                cache.insert_with_metadata(cache_key, full_path, {"category": category})

        print(f"Gitignore template cache updated ({len(cache)} templates available).")
        return cache

    def fetch_template(self, path: str) -> str:
        return self.fetcher.fetch_content(f"{GITHUB_RAW_BASE}/{path}")

    def add(
        self,
        templates: list[str],
        all_templates: bool = False,
        directory: str = ".",
        output: str = ".gitignore",
        force: bool = False,
        append: bool = False,
        update_cache: bool = False,
    ) -> Path:
        """Merge one or more templates into a single gitignore file.

        Unknown template names are reported and skipped; the command only
        fails when none of the requested names resolve.

        Returns:
            Path of the written file
        """
        if not templates and not all_templates:
            raise TemplateWriteError(
                "No gitignore template specified. Pass one or more template names or use --all."
            )

        target = Path(directory) / output
        if target.exists() and not force and not append:
            raise TemplateWriteError(
                f"{target} already exists. Use --force to overwrite or --append to add to it."
            )

        cache = self.ensure_cache(update_cache)

        selected: list[tuple[str, str]] = []
        if all_templates:
            selected = sorted((key, entry.data) for key, entry in cache.entries.items())
        else:
            for template in templates:
                name = strip_gitignore_suffix(template)
                try:
                    selected.append((name, self.resolve(name, cache)))
                except TemplateNotFoundError as e:
                    print(f"Error: {e}", file=sys.stderr)

        if not selected:
            raise GitforgeError("None of the requested gitignore templates were found.")

        sections = []
        for name, path in selected:
            content = self.fetch_template(path)
            sections.append(f"# ===== {name} ({path}) =====\n{content.rstrip()}\n")
        merged = "\n".join(sections)

        if append and target.exists():
            existing = target.read_text(encoding="utf-8").rstrip("\n")
            merged = f"{existing}\n\n{merged}" if existing else merged
            write_template(target, merged, force=True)
        else:
            write_template(target, merged, force=force)

        if all_templates:
            print(f"✓ Downloaded and merged all gitignore templates into {target}")
        else:
            names = ", ".join(name for name, _ in selected)
            print(f"✓ Added gitignore templates: {names} to {target}")
        return target

    def list_templates(
        self,
        popular: bool = False,
        global_only: bool = False,
        community: bool = False,
        update_cache: bool = False,
    ) -> None:
        cache = self.ensure_cache(update_cache)
        show_all = not (popular or global_only or community)

        print("Available gitignore templates:")

        if popular or show_all:
            found = []
            for name in POPULAR_TEMPLATES:
                try:
                    self.resolve(name, cache)
                except TemplateNotFoundError:
                    continue
                found.append(name)
            self._print_section("POPULAR", found)

        if show_all:
            self._print_section("TEMPLATES", _keys_in_category(cache, "root"))

        if global_only or show_all:
            self._print_section("GLOBAL (e.g. global/windows)", _keys_in_category(cache, "global"))

        if community or show_all:
            self._print_section("COMMUNITY (e.g. community/<name>)", _keys_in_category(cache, "community"))

    def preview(self, templates: list[str], update_cache: bool = False) -> None:
        if not templates:
            raise TemplateWriteError("No gitignore template specified.")

        cache = self.ensure_cache(update_cache)
        for template in templates:
            name = strip_gitignore_suffix(template)
            path = self.resolve(name, cache)
            print(f"===== {name} ({path}) =====")
            print(self.fetch_template(path).rstrip())
            print()

    def _print_section(self, title: str, names: list[str]) -> None:
        print()
        print(f"{title} ({len(names)}):")
        if names:
            print(format_columns(names))


def strip_gitignore_suffix(name: str) -> str:
    if name.lower().endswith(GITIGNORE_SUFFIX):
        return name[: -len(GITIGNORE_SUFFIX)]
    return name


def _keys_in_category(cache: Cache[str], category: str) -> list[str]:
    return sorted(key for key, _ in cache.filter_by_metadata("category", category))
