"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from fedisync.adapters.filesystem import DirectoryWriter, load_directory, prettify_directory
from fedisync.adapters.mastodon import MastodonClient
from fedisync.adapters.shared_lists import SharedListFetcher
from fedisync.config.errors import MissingConfigurationError
from fedisync.domain.errors import MalformedRecordError
from fedisync.domain.records import RecordKind, SourcedRecord
from fedisync.domain.sync import ExportResult, ImportResult, export_records, import_records

if TYPE_CHECKING:
    from collections.abc import Callable

    from fedisync.config.instance import InstanceConfig
    from fedisync.domain.ports import Confirm, Display, RecordRemote

    SharedListSource = Callable[[RecordKind, str], list[SourcedRecord]]


log = getLogger(__name__)


def build_remote(config: InstanceConfig) -> RecordRemote:
    return MastodonClient(config=config)


def export_filters(config: InstanceConfig, *, remote: RecordRemote | None = None) -> ExportResult:
    """Write the user's filters to ``filters_export``."""

    return _export(RecordKind.FILTER, config, remote=remote)


def export_tags(config: InstanceConfig, *, remote: RecordRemote | None = None) -> ExportResult:
    """Write the user's followed tags to ``tags_export``."""

    return _export(RecordKind.TAG, config, remote=remote)


def import_filters(
    config: InstanceConfig,
    *,
    confirm: Confirm,
    display: Display,
    remote: RecordRemote | None = None,
    shared_lists: SharedListSource | None = None,
) -> ImportResult:
    """Create the filters from ``filters_import_url`` or ``filters_import`` that are missing."""

    return _import(
        RecordKind.FILTER,
        config,
        confirm=confirm,
        display=display,
        remote=remote,
        shared_lists=shared_lists,
    )


def import_tags(
    config: InstanceConfig,
    *,
    confirm: Confirm,
    display: Display,
    remote: RecordRemote | None = None,
    shared_lists: SharedListSource | None = None,
) -> ImportResult:
    """Follow the tags from ``tags_import_url`` or ``tags_import`` that are not followed yet."""

    return _import(
        RecordKind.TAG,
        config,
        confirm=confirm,
        display=display,
        remote=remote,
        shared_lists=shared_lists,
    )


def follow_tag(
    config: InstanceConfig,
    name: str,
    *,
    confirm: Confirm,
    display: Display,
    remote: RecordRemote | None = None,
) -> ImportResult:
    """Follow a single tag typed in by the user."""

    tag_name = name.strip().lstrip("#")
    if not tag_name:
        raise MalformedRecordError("tag without a name", source="prompt")
    candidate = SourcedRecord(record={"name": tag_name}, source="prompt")
    return import_records(
        RecordKind.TAG,
        remote=remote or build_remote(config),
        candidates=[candidate],
        confirm=confirm,
        display=display,
        confirm_each=True,
    )


def _export(
    kind: RecordKind,
    config: InstanceConfig,
    *,
    remote: RecordRemote | None,
) -> ExportResult:
    paths = config.paths_for(kind)
    if paths.export_dir is None:
        raise MissingConfigurationError(f"Missing {kind}_export in configuration")

    log.info("Starting %s export to %s", kind.label, paths.export_dir)
    result = export_records(
        kind,
        remote=remote or build_remote(config),
        writer=DirectoryWriter(paths.export_dir),
    )
    if config.prettify and result.written:
        prettify_directory(paths.export_dir)

    log.info(
        "Finished %s export: written=%d, skipped=%d",
        kind.label,
        len(result.written),
        result.skipped,
    )
    return result


def _import(
    kind: RecordKind,
    config: InstanceConfig,
    *,
    confirm: Confirm,
    display: Display,
    remote: RecordRemote | None,
    shared_lists: SharedListSource | None,
) -> ImportResult:
    paths = config.paths_for(kind)
    if paths.import_url is not None:
        fetch = shared_lists or SharedListFetcher(download_dir=paths.download_dir)
        candidates = fetch(kind, paths.import_url)
        # each tag from a shared list gets its own prompt
        confirm_each = kind is RecordKind.TAG
    elif paths.import_dir is not None:
        candidates = load_directory(kind, paths.import_dir)
        confirm_each = False
    else:
        raise MissingConfigurationError(
            f"Missing {kind}_import or {kind}_import_url in configuration"
        )

    log.info("Starting %s import: candidates=%d", kind.label, len(candidates))
    result = import_records(
        kind,
        remote=remote or build_remote(config),
        candidates=candidates,
        confirm=confirm,
        display=display,
        confirm_each=confirm_each,
    )
    log.info(
        "Finished %s import: new=%d, duplicate=%d, skipped=%d, uploaded=%d",
        kind.label,
        result.new,
        result.duplicate,
        result.skipped,
        result.uploaded,
    )
    return result
