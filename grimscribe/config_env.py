"""Load ``GRIMSCRIBE_*`` defaults from dotenv files."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from grimscribe.logging import get_logger

log = get_logger(__name__)


def _nearest_dotenv(start: Path) -> Optional[Path]:
    for folder in (start, *start.parents):
        candidate = folder / ".env"
        if candidate.is_file():
            return candidate
    return None


def load_env(cwd: Optional[Path] = None) -> List[Path]:
    """Read the nearest ``.env`` and then ``cwd/.env.local``.

    Variables already set in the process win over both files.  Returns the
    files that were read, in order.
    """

    cwd = cwd or Path.cwd()
    files = [p for p in (_nearest_dotenv(cwd), cwd / ".env.local") if p is not None and p.is_file()]
    for path in files:
        log.debug("Loading environment from %s", path)
        load_dotenv(path, override=False)
    return files
