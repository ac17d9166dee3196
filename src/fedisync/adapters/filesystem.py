"""Local JSON files: one record per file in export, import and download directories."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final

from fedisync.config.errors import ConfigurationError
from fedisync.domain.errors import MalformedRecordError
from fedisync.domain.records import SourcedRecord

from .mastodon.schema import parse_records
from .responses import decode_json

if TYPE_CHECKING:
    from pathlib import Path

    from fedisync.domain.records import Record, RecordKind

log = getLogger(__name__)

EXPORT_INDENT: Final[int] = 2
PRETTIFY_INDENT: Final[int] = 4
JSON_SUFFIX: Final[str] = ".json"


def safe_filename(name: str) -> str:
    """Turn a record name or URL into a file name: spaces to ``_``, slashes to ``-``."""

    return name.replace(" ", "_").replace("/", "-")


def dump_json(payload: object, *, indent: int = EXPORT_INDENT) -> str:
    return json.dumps(payload, indent=indent, ensure_ascii=False) + "\n"


def write_record(directory: Path, key: str, record: Record, *, indent: int = EXPORT_INDENT) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{safe_filename(key)}{JSON_SUFFIX}"
    path.write_text(dump_json(record, indent=indent), encoding="utf-8")
    return path


@dataclass(slots=True)
class DirectoryWriter:
    """Writes exported records into ``directory``, one file per record.

    Two keys that map to the same file name within one run get numbered names
    (``tv_spoilers.json``, ``tv_spoilers_2.json``) instead of overwriting each other.
    """

    directory: Path
    indent: int = EXPORT_INDENT
    _names: dict[str, str] = field(default_factory=dict, init=False, repr=False)

    def __call__(self, key: str, record: Record) -> Path:
        stem = safe_filename(key)
        name = stem
        counter = 1
        while name in self._names:
            counter += 1
            name = f"{stem}_{counter}"
        if name != stem:
            log.warning(
                "File name %s%s for %r is already used by %r; writing %s%s instead",
                stem,
                JSON_SUFFIX,
                key,
                self._names[stem],
                name,
                JSON_SUFFIX,
            )
        self._names[name] = key
        path = write_record(self.directory, name, record, indent=self.indent)
        log.debug("Wrote %s", path)
        return path


def json_files(directory: Path) -> list[Path]:
    """Return the ``*.json`` files of ``directory`` in sorted (deterministic) order."""

    if not directory.is_dir():
        raise ConfigurationError(f"Directory does not exist: {directory}")
    return sorted(
        path for path in directory.iterdir() if path.is_file() and path.suffix == JSON_SUFFIX
    )


def load_directory(kind: RecordKind, directory: Path) -> list[SourcedRecord]:
    """Read every JSON file in ``directory`` as one record (or a list of records).

    Files are read in sorted name order, so when two files share a record name the one
    that sorts last wins.
    """

    records: list[SourcedRecord] = []
    for path in json_files(directory):
        source = path.name
        try:
            content = path.read_bytes()
        except OSError as exc:
            raise ConfigurationError(f"Cannot read {path}: {exc}") from exc
        payload = decode_json(content, source=source)
        try:
            parsed = parse_records(kind, payload, source=source)
        except MalformedRecordError as exc:
            log.warning("Skipping %s: %s", kind.label, exc)
            continue
        records.extend(SourcedRecord(record=record, source=source) for record in parsed)
    log.info("Loaded %d %ss from %s", len(records), kind.label, directory)
    return records


def prettify_directory(directory: Path, *, indent: int = PRETTIFY_INDENT) -> int:
    """Re-indent every JSON file in ``directory`` in place and return how many changed."""

    rewritten = 0
    for path in json_files(directory):
        payload = decode_json(path.read_bytes(), source=path.name)
        pretty = dump_json(payload, indent=indent)
        if path.read_text(encoding="utf-8") == pretty:
            continue
        path.write_text(pretty, encoding="utf-8")
        rewritten += 1
    log.debug("Prettified %d files in %s", rewritten, directory)
    return rewritten


def save_download(directory: Path, url: str, payload: object) -> Path:
    """Keep a pretty-printed copy of a document fetched from ``url``."""

    directory.mkdir(parents=True, exist_ok=True)
    name = safe_filename(url)
    if not name.endswith(JSON_SUFFIX):
        name += JSON_SUFFIX
    path = directory / name
    path.write_text(dump_json(payload), encoding="utf-8")
    log.info("Saved download of %s to %s", url, path)
    return path
