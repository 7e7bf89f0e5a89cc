from dataclasses import replace
from typing import Final

from .package_types import PackageRecord

_INSTALLED_MARKERS: Final[tuple[str, ...]] = ("[installed]", "(installed)")
_INDENT: Final[str] = " \t"


def _parse_header(line: str) -> PackageRecord | None:
    """Parses a `repo/name version [flags...]` header line.

    Returns:
        A candidate record with an empty description, or None if the line is not a
        well-formed header.
    """
    parts = line.split(None, 2)
    if len(parts) < 2:
        return None

    repo_name, version = parts[0], parts[1]
    repository, slash, name = repo_name.partition("/")
    if not slash or not repository or not name:
        return None

    rest = parts[2] if len(parts) == 3 else ""
    installed = any(marker in rest for marker in _INSTALLED_MARKERS)
    return PackageRecord(
        repository=repository,
        name=name,
        version=version,
        description="",
        installed=installed,
    )


def parse_search_output(text: str) -> list[PackageRecord]:
    """Parses `yay -Ss` / `pacman -Ss` output into records.

    The listing alternates header lines and indented description lines::

        core/foo 1.0-1
            A sample package
        extra/bar 2.0-1 [installed]
            Another package

    A record is emitted only once its description line has been read. A header that
    is followed by another header, or by the end of the input, is dropped. The
    `installed` flag comes from the tool's own annotation and is provisional.

    Args:
        text: Output text with control sequences already stripped.

    Returns:
        Records in listing order.
    """
    results: list[PackageRecord] = []
    current: PackageRecord | None = None
    expecting_description = False

    for line in text.replace("\r\n", "\n").split("\n"):
        if not line:
            expecting_description = False
            continue

        if line[0] in _INDENT:
            if expecting_description and current is not None:
                description = line.lstrip(_INDENT)
                results.append(replace(current, description=description))
                expecting_description = False
            continue

        candidate = _parse_header(line)
        if candidate is None:
            continue

        current = candidate
        expecting_description = True

    return results
