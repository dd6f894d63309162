"""Pull request templates."""

from pathlib import Path

from gitforge.commands.base import with_extension
from gitforge.commands.repo_templates import RepoTemplateCommand

PR_CACHE_NAME = "pr_templates"
PR_TEMPLATE_FILE = "pull_request_template.md"


class PullRequestCommand(RepoTemplateCommand):
    """Add, list and preview pull request templates.

    A single template becomes ``.github/pull_request_template.md``; several
    go under ``.github/PULL_REQUEST_TEMPLATE/`` where GitHub offers a choice.
    """

    cache_name = PR_CACHE_NAME
    list_name = "prs"
    folder = "pr-templates"
    extension = ".md"
    label = "pull request"
    default_dir = ".github"

    def output_path(self, base_dir: Path, file_name: str, output: str | None, count: int) -> Path:
        if output:
            return base_dir / with_extension(output, self.extension)
        if count == 1:
            return base_dir / PR_TEMPLATE_FILE
        return base_dir / "PULL_REQUEST_TEMPLATE" / file_name
