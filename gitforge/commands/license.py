"""License commands backed by the SPDX license list."""

import logging
import re
import sys
from collections.abc import Callable
from pathlib import Path

from gitforge.commands.base import TemplateCommand, check_output_count, write_template
from gitforge.core.exceptions import FetchError, GitforgeError, TemplateNotFoundError, TemplateWriteError
from gitforge.core.models import Cache

logger = logging.getLogger(__name__)

SPDX_RAW_BASE = "https://raw.githubusercontent.com/spdx/license-list-data/main"
LICENSES_URL = f"{SPDX_RAW_BASE}/json/licenses.json"
LICENSE_CACHE_NAME = "licenses"

POPULAR_LICENSES = [
    "mit",
    "apache-2.0",
    "gpl-3.0-only",
    "gpl-2.0-only",
    "lgpl-3.0-only",
    "agpl-3.0-only",
    "bsd-3-clause",
    "bsd-2-clause",
    "mpl-2.0",
    "isc",
    "unlicense",
    "bsl-1.0",
]

# Licenses meant for fonts, hardware, documentation and media
NON_SOFTWARE_LICENSES = [
    "cc0-1.0",
    "cc-by-4.0",
    "cc-by-sa-4.0",
    "ofl-1.1",
    "cern-ohl-p-2.0",
    "cern-ohl-w-2.0",
    "cern-ohl-s-2.0",
]

# <copyright holders>, [yyyy] and similar fill-in fields in SPDX texts
PLACEHOLDER_RE = re.compile(r"<([A-Za-z][A-Za-z \-]*)>|\[([A-Za-z][A-Za-z \-]*)\]")


def param_key(label: str) -> str:
    """Normalize a placeholder label or parameter name: ``Copyright Holders`` -> ``copyright-holders``."""
    return re.sub(r"[\s_]+", "-", label.strip().lower())


def parse_params(params: list[str] | None) -> dict[str, str]:
    """Parse ``KEY=VALUE`` strings.

    Raises:
        TemplateWriteError: If an item has no ``=``
    """
    parsed: dict[str, str] = {}
    for item in params or []:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise TemplateWriteError(f"Invalid parameter '{item}'. Expected KEY=VALUE.")
        parsed[param_key(key)] = value
    return parsed


def fill_placeholders(
    text: str,
    params: dict[str, str],
    prompt: Callable[[str], str] | None = None,
) -> tuple[str, list[str]]:
    """Replace placeholders whose normalized label has a parameter value.

    Args:
        text: License text
        params: Values keyed by normalized placeholder label
        prompt: Called once per unknown label to ask for a value; empty
            answers leave the placeholder in place

    Returns:
        The filled text and the parameter keys that were used
    """
    values = dict(params)
    used: list[str] = []

    def replace(match: re.Match) -> str:
        label = match.group(1) or match.group(2)
        key = param_key(label)
        if key not in values and prompt is not None:
            values[key] = prompt(label)
        value = values.get(key)
        if not value:
            return match.group(0)
        if key not in used:
            used.append(key)
        return value

    return PLACEHOLDER_RE.sub(replace, text), used


def _ask(label: str) -> str:
    return input(f"Enter value for {label}: ").strip()


def _flag(value: object) -> str:
    return "true" if value else "false"


class LicenseCommand(TemplateCommand):
    """Add, list and preview SPDX licenses."""

    cache_name = LICENSE_CACHE_NAME
    list_name = "licenses"

    def build_cache(self) -> Cache[str]:
        """Index the SPDX list by lowercase id.

        Values are canonical license ids; name and OSI/FSF/deprecation flags
        are stored as entry metadata for filtering.
        """
        data = self.fetcher.fetch_json(LICENSES_URL)
        if not isinstance(data, dict) or not isinstance(data.get("licenses"), list):
            raise FetchError(f"Unexpected license list format from {LICENSES_URL}", url=LICENSES_URL)

        cache = Cache[str]()
        for item in data["licenses"]:
            license_id = item.get("licenseId") if isinstance(item, dict) else None
            if not license_id:
                continue
            cache.insert_with_metadata(
                license_id.lower(),
                license_id,
                {
                    "name": item.get("name", license_id),
                    "osi_approved": _flag(item.get("isOsiApproved")),
                    "fsf_libre": _flag(item.get("isFsfLibre")),
                    "deprecated": _flag(item.get("isDeprecatedLicenseId")),
                },
            )

        print(f"License cache updated ({len(cache)} licenses available).")
        return cache

    def fetch_text(self, license_id: str) -> str:
        return self.fetcher.fetch_content(f"{SPDX_RAW_BASE}/text/{license_id}.txt")

    def add(
        self,
        licenses: list[str],
        outputs: list[str] | None = None,
        directory: str = ".",
        params: list[str] | None = None,
        interactive: bool = False,
        force: bool = False,
        update_cache: bool = False,
    ) -> list[Path]:
        """Write license texts, filling placeholders from ``--param`` values.

        Returns:
            Paths of the written files
        """
        if not licenses:
            raise TemplateWriteError("No license specified.")
        check_output_count(licenses, outputs, "Number of output files must match number of licenses.")
        values = parse_params(params)

        cache = self.ensure_cache(update_cache)
        prompt = _ask if interactive else None

        written = []
        used_keys: set[str] = set()
        for index, name in enumerate(licenses):
            output = outputs[index] if outputs else "LICENSE"
            path = Path(directory) / output
            try:
                license_id = self.resolve(name, cache)
                text, used = fill_placeholders(self.fetch_text(license_id), values, prompt)
                write_template(path, text, force=force)
            except (TemplateNotFoundError, FetchError, TemplateWriteError) as e:
                print(f"Error: {e}", file=sys.stderr)
                continue

            written.append(path)
            used_keys.update(used)
            print(f"✓ Successfully added license {license_id}: {path} has been added.")
            if used:
                print(f"  Filled {len(used)} parameter(s): {', '.join(used)}")

        for key in sorted(set(values) - used_keys):
            print(f"⚠ Warning: unused parameter '{key}'")

        if not written:
            raise GitforgeError("No licenses were added.")
        return written

    def list_licenses(
        self,
        popular: bool = False,
        non_software: bool = False,
        search: str | None = None,
        osi_approved: bool = False,
        fsf_libre: bool = False,
        include_deprecated: bool = False,
        update_cache: bool = False,
    ) -> None:
        cache = self.ensure_cache(update_cache)

        if non_software:
            print("Non-Software Licenses:")
            self._print_known(cache, NON_SOFTWARE_LICENSES)
            return

        filtering = search or osi_approved or fsf_libre or include_deprecated
        if popular or not filtering:
            print("Popular licenses:")
            self._print_known(cache, POPULAR_LICENSES)
            if not popular:
                print()
                print("Use --search, --osi-approved or --fsf-libre to browse all SPDX licenses.")
            return

        keys = set(cache.keys())
        if osi_approved:
            keys &= {key for key, _ in cache.filter_by_metadata("osi_approved", "true")}
        if fsf_libre:
            keys &= {key for key, _ in cache.filter_by_metadata("fsf_libre", "true")}
        if not include_deprecated:
            keys -= {key for key, _ in cache.filter_by_metadata("deprecated", "true")}
        if search:
            term = search.lower()
            keys = {
                key
                for key in keys
                if term in key or term in cache.get_entry(key).metadata.get("name", "").lower()
            }

        if search:
            print(f"Licenses matching '{search}':")
        elif include_deprecated:
            print("Available SPDX licenses (including deprecated):")
        else:
            print("Available SPDX licenses:")
        self._print_known(cache, sorted(keys))

    def preview(self, licenses: list[str], update_cache: bool = False) -> None:
        if not licenses:
            raise TemplateWriteError("No license specified.")

        cache = self.ensure_cache(update_cache)
        for name in licenses:
            license_id = self.resolve(name, cache)
            entry = cache.get_entry(license_id.lower())
            title = entry.metadata.get("name", license_id) if entry else license_id
            print(f"===== {license_id}: {title} =====")
            print(self.fetch_text(license_id).rstrip())
            print()

    def _print_known(self, cache: Cache[str], keys: list[str]) -> None:
        for key in keys:
            entry = cache.get_entry(key)
            if entry is None:
                continue
            marker = " (deprecated)" if entry.metadata.get("deprecated") == "true" else ""
            print(f"  {entry.data:<24} {entry.metadata.get('name', '')}{marker}")
