"""Batch plumbing around the tag engine.

Documents are JSON (or YAML) files.  One field of each document is pulled
out, run through :func:`grimscribe.tags.transform` and written under the
output directory with the source file name.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml

from grimscribe.logging import get_logger
from grimscribe.settings import ConvertOptions
from grimscribe.tags import transform

log = get_logger(__name__)


class DocumentError(Exception):
    def __init__(self, name: str, message: str):
        super().__init__(f"{name}: {message}")
        self.name = name


class NoDocumentsError(DocumentError):
    pass


@dataclass(frozen=True)
class SourceDocument:
    name: str
    value: Any


LoadResult = Union[SourceDocument, DocumentError]


@dataclass
class ConversionReport:
    written: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def _read_payload(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in {".yaml", ".yml"}:
        return yaml.safe_load(text)
    return json.loads(text)


def load_document(path: Path) -> SourceDocument:
    try:
        value = _read_payload(path)
    except (OSError, UnicodeDecodeError, ValueError, yaml.YAMLError) as exc:
        raise DocumentError(path.name, str(exc)) from exc
    return SourceDocument(name=path.name, value=value)


def load_documents(path: Path) -> List[LoadResult]:
    """Load ``path`` or, for a directory, every file directly inside it.

    A file that fails to decode yields a :class:`DocumentError` in its slot
    instead of stopping the rest.
    """

    if path.is_dir():
        files = sorted(p for p in path.iterdir() if not p.is_dir())
    else:
        files = [path]

    results: List[LoadResult] = []
    for file in files:
        log.debug("Reading path: %s", file)
        try:
            results.append(load_document(file))
        except DocumentError as exc:
            results.append(exc)
    if not results:
        raise NoDocumentsError(str(path), "no documents found in input")
    return results


def select_field(document: SourceDocument, key: str) -> Optional[str]:
    """Return the text of ``key`` or ``None`` when the document has nothing to convert.

    Strings are returned as is; any other non-null value is JSON encoded so
    tags inside nested lists and objects are still rewritten.
    """

    if not isinstance(document.value, dict):
        return None
    value = document.value.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def write_output(output_dir: Path, name: str, text: str) -> Path:
    path = output_dir / name
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise DocumentError(name, f"Unable to write file to {path}: {exc}") from exc
    return path


def convert_documents(options: ConvertOptions) -> ConversionReport:
    report = ConversionReport()
    results = load_documents(options.input)
    log.debug("%d files read", len(results))

    for result in results:
        if isinstance(result, DocumentError):
            log.warning("%s", result)
            report.failed.append(result.name)
            continue
        text = select_field(result, options.key)
        if text is None:
            log.info("Skipping %s", result.name)
            report.skipped.append(result.name)
            continue
        try:
            path = write_output(options.output, result.name, transform(text))
        except DocumentError as exc:
            log.warning("%s", exc)
            report.failed.append(result.name)
            continue
        log.info("Writing file to %s", path)
        report.written.append(result.name)
    return report


__all__ = [
    "ConversionReport",
    "DocumentError",
    "NoDocumentsError",
    "SourceDocument",
    "convert_documents",
    "load_document",
    "load_documents",
    "select_field",
    "write_output",
]
