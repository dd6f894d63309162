"""Tests for issue and pull request template commands."""

from pathlib import Path

import pytest

from gitforge.commands.issue import IssueCommand
from gitforge.commands.pr import PullRequestCommand
from gitforge.commands.repo_templates import RepoTemplateCommand
from gitforge.core import GitforgeError, TemplateNotFoundError, TemplateWriteError

REPO_RAW = "https://raw.githubusercontent.com/rafaeljohn9/gitforge/main/templates"


@pytest.fixture
def issues(cache_manager, fake_fetcher):
    return IssueCommand(cache_manager, fake_fetcher)


@pytest.fixture
def prs(cache_manager, fake_fetcher):
    return PullRequestCommand(cache_manager, fake_fetcher)


def test_subclass_must_define_output_path(cache_manager, fake_fetcher):
    """Test a template family without an output layout cannot be created."""

    class NoLayout(RepoTemplateCommand):
        cache_name = "partial"
        list_name = "partials"
        folder = "partial-templates"
        extension = ".md"
        label = "partial"
        default_dir = "."

    with pytest.raises(TypeError, match="output_path"):
        NoLayout(cache_manager, fake_fetcher)


def test_issue_cache_keys(issues, clock):
    """Test issue templates are indexed by lowercase stem."""
    cache = issues.build_cache()

    assert cache.get("bug") == "bug.yml"
    assert cache.get("feature") == "feature.yml"


def test_add_issue(issues, workdir, clock, capsys):
    """Test an issue form lands in .github/ISSUE_TEMPLATE."""
    issues.add(["bug"])

    path = workdir / ".github" / "ISSUE_TEMPLATE" / "bug.yml"
    assert "Bug Report" in path.read_text()
    assert "Added issue template" in capsys.readouterr().out


def test_add_multiple_issues(issues, workdir, clock):
    issues.add(["Bug", "feature"])

    target = workdir / ".github" / "ISSUE_TEMPLATE"
    assert sorted(p.name for p in target.iterdir()) == ["bug.yml", "feature.yml"]


def test_add_issue_custom_dir(issues, workdir, clock):
    """Test --dir overrides the default location."""
    issues.add(["bug"], directory="custom")

    assert "Bug Report" in (workdir / "custom" / "bug.yml").read_text()


@pytest.mark.parametrize("output", ["feat", "feat.yml"])
def test_add_issue_output_name(issues, workdir, clock, output):
    """Test -o names the file, adding .yml when missing."""
    issues.add(["feature"], outputs=[output])

    assert "Feature Request" in (workdir / ".github" / "ISSUE_TEMPLATE" / "feat.yml").read_text()


def test_add_issue_output_count_mismatch(issues, workdir):
    """Test the number of outputs must match the number of templates."""
    with pytest.raises(TemplateWriteError, match="The number of templates and output file names must match."):
        issues.add(["feature", "bug"], outputs=["feat"])


def test_add_issue_requires_template(issues):
    with pytest.raises(TemplateWriteError, match="No issue template specified"):
        issues.add([])


def test_add_issue_existing_file(issues, workdir, clock, capsys):
    """Test an existing template is only replaced with force."""
    path = workdir / ".github" / "ISSUE_TEMPLATE" / "bug.yml"
    path.parent.mkdir(parents=True)
    path.write_text("old")

    with pytest.raises(GitforgeError):
        issues.add(["bug"])
    assert "already exists" in capsys.readouterr().err
    assert path.read_text() == "old"

    issues.add(["bug"], force=True)
    assert "Bug Report" in path.read_text()


def test_add_issue_partial_failure(issues, workdir, clock, capsys):
    """Test a bad name is reported while the good one is written."""
    issues.add(["bug", "not-a-template"])

    assert (workdir / ".github" / "ISSUE_TEMPLATE" / "bug.yml").exists()
    assert "not-a-template" in capsys.readouterr().err


def test_add_issue_rejects_invalid_yaml(issues, fake_fetcher, workdir, clock, capsys):
    """Test malformed issue forms are not written."""
    fake_fetcher.fetch_content.side_effect = lambda url: "name: [unclosed"

    with pytest.raises(GitforgeError):
        issues.add(["bug"])

    assert "not valid YAML" in capsys.readouterr().err
    assert not (workdir / ".github" / "ISSUE_TEMPLATE" / "bug.yml").exists()


def test_list_issues(issues, clock, capsys):
    issues.list_templates()

    out = capsys.readouterr().out
    assert "Available issue templates" in out
    assert "bug" in out
    assert "feature" in out


def test_preview_issue(issues, fake_fetcher, clock, capsys):
    issues.preview(["bug"])

    assert "Bug Report" in capsys.readouterr().out
    fake_fetcher.fetch_content.assert_called_with(f"{REPO_RAW}/issue-templates/bug.yml")


def test_preview_issue_unknown(issues, clock):
    with pytest.raises(TemplateNotFoundError, match="gitforge list issues"):
        issues.preview(["not-a-template"])


def test_add_single_pr(prs, workdir, clock):
    """Test a single PR template becomes .github/pull_request_template.md."""
    prs.add(["default"])

    assert "## Description" in (workdir / ".github" / "pull_request_template.md").read_text()


def test_add_multiple_prs(prs, workdir, clock):
    """Test several PR templates go under PULL_REQUEST_TEMPLATE."""
    written = prs.add(["default", "detailed"])

    target = Path(".github") / "PULL_REQUEST_TEMPLATE"
    assert written == [target / "default.md", target / "detailed.md"]
    assert (workdir / target / "detailed.md").exists()


@pytest.mark.parametrize("output", ["default", "default.md"])
def test_add_pr_output_name(prs, workdir, clock, capsys, output):
    prs.add(["default"], outputs=[output])

    assert (workdir / ".github" / "default.md").exists()
    assert "default.md - has been added." in capsys.readouterr().out


def test_add_pr_custom_dir(prs, workdir, clock):
    prs.add(["default"], directory="custom_dir")

    assert (workdir / "custom_dir" / "pull_request_template.md").exists()


def test_add_pr_unknown(prs, workdir, clock, capsys):
    with pytest.raises(GitforgeError):
        prs.add(["invalid-template"])

    assert "invalid-template" in capsys.readouterr().err


def test_list_prs(prs, clock, capsys):
    prs.list_templates()

    assert "default.md" in capsys.readouterr().out
