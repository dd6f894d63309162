"""Issue and pull request templates hosted in the gitforge repository."""

import logging
import sys
from abc import abstractmethod
from pathlib import Path

from gitforge.commands.base import TemplateCommand, check_output_count, write_template
from gitforge.core.exceptions import FetchError, GitforgeError, TemplateNotFoundError, TemplateWriteError
from gitforge.core.models import Cache

logger = logging.getLogger(__name__)

GITHUB_API_BASE = "https://api.github.com/repos/rafaeljohn9/gitforge/contents/templates"
GITHUB_RAW_BASE = "https://raw.githubusercontent.com/rafaeljohn9/gitforge/main/templates"


class RepoTemplateCommand(TemplateCommand):
    """Templates stored as plain files in one folder of the gitforge repo.

    Keys are lowercase file stems; values are the file names.
    """

    folder: str
    extension: str
    label: str
    default_dir: str

    @abstractmethod
    def output_path(self, base_dir: Path, file_name: str, output: str | None, count: int) -> Path:
        """Destination for one template out of ``count`` being added."""
        pass

    def validate(self, file_name: str, content: str) -> None:
        """Hook to reject malformed template content before it is written."""
        pass

    def add(
        self,
        templates: list[str],
        directory: str | None = None,
        outputs: list[str] | None = None,
        force: bool = False,
        update_cache: bool = False,
    ) -> list[Path]:
        """Write each requested template into the repository.

        Failures are reported per template; the command fails only when
        nothing was written.

        Returns:
            Paths of the written files
        """
        if not templates:
            raise TemplateWriteError(f"No {self.label} template specified.")
        check_output_count(
            templates, outputs, "The number of templates and output file names must match."
        )

        cache = self.ensure_cache(update_cache)
        base_dir = Path(directory) if directory else Path(self.default_dir)

        written = []
        for index, template in enumerate(templates):
            output = outputs[index] if outputs else None
            try:
                file_name = self.resolve(template, cache)
                path = self.output_path(base_dir, file_name, output, len(templates))
                content = self.fetch_template(file_name)
                self.validate(file_name, content)
                write_template(path, content, force=force)
            except (TemplateNotFoundError, FetchError, TemplateWriteError) as e:
                print(f"Error: {e}", file=sys.stderr)
                continue
            written.append(path)
            print(f"✓ Added {self.label} template: {path} - has been added.")

        if not written:
            raise GitforgeError(f"No {self.label} templates were added.")
        return written

    def build_cache(self) -> Cache[str]:
        url = f"{GITHUB_API_BASE}/{self.folder}"
        listing = self.fetcher.fetch_json(url)
        cache = Cache[str]()

        if not isinstance(listing, list):
            logger.warning(f"Unexpected directory listing from {url}")
            return cache

        for item in listing:
            name = item.get("name") if isinstance(item, dict) else None
            if not name or not name.lower().endswith(self.extension):
                continue
            cache.insert(name[: -len(self.extension)].lower(), name)

        logger.info(f"Indexed {len(cache)} {self.label} templates")
        return cache

    def fetch_template(self, file_name: str) -> str:
        return self.fetcher.fetch_content(f"{GITHUB_RAW_BASE}/{self.folder}/{file_name}")

    def list_templates(self, update_cache: bool = False) -> None:
        cache = self.ensure_cache(update_cache)
        print(f"Available {self.label} templates:")
        for key in sorted(cache.keys()):
            print(f"  {key:<20} {cache.get(key)}")

    def preview(self, templates: list[str], update_cache: bool = False) -> None:
        if not templates:
            raise TemplateWriteError(f"No {self.label} template specified.")

        cache = self.ensure_cache(update_cache)
        for template in templates:
            file_name = self.resolve(template, cache)
            print(f"===== {file_name} =====")
            print(self.fetch_template(file_name).rstrip())
            print()
