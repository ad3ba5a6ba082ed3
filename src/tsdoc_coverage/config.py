"""Settings for a coverage check.

The check has no configuration file: the source glob and the excluded path
segment are fixed. :class:`CheckConfig` carries them together with the
project root so the pipeline can be pointed at any directory.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

DEFAULT_SOURCE_GLOB = "**/*.{ts,tsx}"
"""Files to check, relative to the project root."""

DEFAULT_EXCLUDE_PATH = "node_modules"
"""Files whose resolved path contains this string are skipped."""

_BRACE_RE = re.compile(r"\{([^{}]*)\}")


def expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` alternatives into separate glob patterns."""
    match = _BRACE_RE.search(pattern)
    if match is None:
        return [pattern]
    head, tail = pattern[: match.start()], pattern[match.end() :]
    expanded: list[str] = []
    for option in match.group(1).split(","):
        expanded.extend(expand_braces(head + option + tail))
    return expanded


@dataclass(frozen=True)
class CheckConfig:
    """Where to look and what to skip."""

    root: Path = field(default_factory=Path.cwd)
    """Project root directory."""

    source_glob: str = DEFAULT_SOURCE_GLOB
    """Glob (with brace alternatives) selecting source files."""

    exclude_path: str = DEFAULT_EXCLUDE_PATH
    """Substring of a resolved path that excludes it."""

    @property
    def file_name_patterns(self) -> list[str]:
        """File-name patterns matched at any depth below :attr:`root`."""
        return [PurePosixPath(p).name for p in expand_braces(self.source_glob)]
