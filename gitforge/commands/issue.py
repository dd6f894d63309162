"""Issue form templates."""

import logging
from pathlib import Path

import yaml

from gitforge.commands.base import with_extension
from gitforge.commands.repo_templates import RepoTemplateCommand
from gitforge.core.exceptions import TemplateWriteError

logger = logging.getLogger(__name__)

ISSUE_CACHE_NAME = "issue_templates"
ISSUE_TEMPLATE_DIR = ".github/ISSUE_TEMPLATE"


class IssueCommand(RepoTemplateCommand):
    """Add, list and preview GitHub issue forms."""

    cache_name = ISSUE_CACHE_NAME
    list_name = "issues"
    folder = "issue-templates"
    extension = ".yml"
    label = "issue"
    default_dir = ISSUE_TEMPLATE_DIR

    def output_path(self, base_dir: Path, file_name: str, output: str | None, count: int) -> Path:
        return base_dir / with_extension(output or file_name, self.extension)

    def validate(self, file_name: str, content: str) -> None:
        """Issue forms are YAML documents; refuse anything that does not parse."""
        try:
            form = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise TemplateWriteError(f"Issue template '{file_name}' is not valid YAML: {e}") from e

        if isinstance(form, dict) and form.get("name"):
            logger.debug(f"Issue form '{file_name}' is named '{form['name']}'")
