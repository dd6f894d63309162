"""Pytest configuration and fixtures."""

from unittest.mock import MagicMock

import pytest

from gitforge.cache.manager import CacheManager
from gitforge.core.exceptions import FetchError
from gitforge.remote.fetcher import Fetcher

GITIGNORE_API = "https://api.github.com/repos/github/gitignore"
GITIGNORE_RAW = "https://raw.githubusercontent.com/github/gitignore/main"
REPO_API = "https://api.github.com/repos/rafaeljohn9/gitforge/contents/templates"
REPO_RAW = "https://raw.githubusercontent.com/rafaeljohn9/gitforge/main/templates"
SPDX_RAW = "https://raw.githubusercontent.com/spdx/license-list-data/main"

BUG_FORM = """name: Bug Report
description: File a bug report
labels: ["bug"]
body:
  - type: textarea
    attributes:
      label: What happened?
"""

FEATURE_FORM = """name: Feature Request
description: Suggest an idea
body:
  - type: textarea
    attributes:
      label: Describe the feature
"""

MIT_TEXT = """MIT License

Copyright (c) <year> <copyright holders>

Permission is hereby granted, free of charge, to any person obtaining a copy
"""

APACHE_TEXT = """Apache License
Version 2.0, January 2004

Copyright [yyyy] [name of copyright owner]

Licensed under the Apache License, Version 2.0 (the "License");
"""

REMOTE_JSON = {
    f"{GITIGNORE_API}/contents": [
        {"name": "Rust.gitignore", "type": "file"},
        {"name": "Python.gitignore", "type": "file"},
        {"name": "Node.gitignore", "type": "file"},
        {"name": "README.md", "type": "file"},
        {"name": "Global", "type": "dir"},
    ],
    f"{GITIGNORE_API}/contents/Global": [
        {"name": "Windows.gitignore", "type": "file"},
        {"name": "macOS.gitignore", "type": "file"},
    ],
    f"{GITIGNORE_API}/contents/community": [
        {"name": "Terraform.gitignore", "type": "file"},
    ],
    f"{REPO_API}/issue-templates": [
        {"name": "bug.yml", "type": "file"},
        {"name": "feature.yml", "type": "file"},
    ],
    f"{REPO_API}/pr-templates": [
        {"name": "default.md", "type": "file"},
        {"name": "detailed.md", "type": "file"},
    ],
    f"{SPDX_RAW}/json/licenses.json": {
        "licenseListVersion": "3.24",
        "licenses": [
            {"licenseId": "MIT", "name": "MIT License", "isOsiApproved": True, "isFsfLibre": True},
            {
                "licenseId": "Apache-2.0",
                "name": "Apache License 2.0",
                "isOsiApproved": True,
                "isFsfLibre": True,
            },
            {"licenseId": "CC0-1.0", "name": "Creative Commons Zero v1.0 Universal", "isOsiApproved": False},
            {"licenseId": "OFL-1.1", "name": "SIL Open Font License 1.1", "isOsiApproved": True},
            {
                "licenseId": "GPL-2.0",
                "name": "GNU General Public License v2.0 only",
                "isOsiApproved": True,
                "isDeprecatedLicenseId": True,
            },
            {"licenseId": "JSON", "name": "JSON License", "isOsiApproved": False},
        ],
    },
}

REMOTE_CONTENT = {
    f"{GITIGNORE_RAW}/Rust.gitignore": "# Rust build output\n/target/\n",
    f"{GITIGNORE_RAW}/Python.gitignore": "# Python bytecode\n__pycache__/\n",
    f"{GITIGNORE_RAW}/Node.gitignore": "# Node dependencies\nnode_modules/\n",
    f"{GITIGNORE_RAW}/Global/Windows.gitignore": "# Windows thumbnails\nThumbs.db\n",
    f"{GITIGNORE_RAW}/Global/macOS.gitignore": "# macOS\n.DS_Store\n",
    f"{GITIGNORE_RAW}/community/Terraform.gitignore": "# Terraform\n.terraform/\n",
    f"{REPO_RAW}/issue-templates/bug.yml": BUG_FORM,
    f"{REPO_RAW}/issue-templates/feature.yml": FEATURE_FORM,
    f"{REPO_RAW}/pr-templates/default.md": "## Description\n\nWhat does this PR change?\n",
    f"{REPO_RAW}/pr-templates/detailed.md": "## Summary\n\n## Testing\n",
    f"{SPDX_RAW}/text/MIT.txt": MIT_TEXT,
    f"{SPDX_RAW}/text/Apache-2.0.txt": APACHE_TEXT,
    f"{SPDX_RAW}/text/CC0-1.0.txt": "Creative Commons Legal Code\n\nCC0 1.0 Universal\n",
}


class FakeClock:
    """Stand-in for the cache clock, advanced explicitly by tests."""

    def __init__(self, now: int = 1_700_000_000) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds


def _not_found(url: str) -> FetchError:
    return FetchError(f"Request failed with status 404 Not Found: {url}", url=url, status_code=404)


@pytest.fixture
def clock(monkeypatch):
    """Freeze cache timestamps at a known instant."""
    fake = FakeClock()
    monkeypatch.setattr("gitforge.core.models._now", fake)
    return fake


@pytest.fixture
def cache_manager(tmp_path):
    """CacheManager rooted in a temporary directory."""
    return CacheManager(cache_dir=tmp_path / "cache")


@pytest.fixture
def fake_fetcher():
    """Fetcher mock serving canned GitHub and SPDX responses."""
    fetcher = MagicMock(spec=Fetcher)

    def fetch_json(url):
        if url not in REMOTE_JSON:
            raise _not_found(url)
        return REMOTE_JSON[url]

    def fetch_content(url):
        if url not in REMOTE_CONTENT:
            raise _not_found(url)
        return REMOTE_CONTENT[url]

    fetcher.fetch_json.side_effect = fetch_json
    fetcher.fetch_content.side_effect = fetch_content
    return fetcher


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run the test from an empty project directory."""
    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.chdir(project)
    return project
