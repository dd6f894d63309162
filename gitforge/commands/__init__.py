"""Command implementations."""

from gitforge.commands.base import TemplateCommand
from gitforge.commands.gitignore import GitignoreCommand
from gitforge.commands.issue import IssueCommand
from gitforge.commands.license import LicenseCommand
from gitforge.commands.pr import PullRequestCommand

__all__ = [
    "TemplateCommand",
    "GitignoreCommand",
    "IssueCommand",
    "PullRequestCommand",
    "LicenseCommand",
]
