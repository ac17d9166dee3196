"""Instance and directory configuration loaded from the JSON config file."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING, Final

from .env import read_env_overrides
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import DEFAULT_TIMEOUT_SECONDS

if TYPE_CHECKING:
    from collections.abc import Mapping

log = getLogger(__name__)

DEFAULT_CONFIG_PATH: Final[str] = "config.json"
PLACEHOLDER_TOKEN: Final[str] = "REPLACEME"

CONFIG_TEMPLATE: Final[dict[str, object]] = {
    "instance_url": "https://mastodon.social",
    "access_token": PLACEHOLDER_TOKEN,
    "filters_export": "export/filters/",
    "filters_import": "import/filters/",
    "filters_import_url": "",
    "filters_download": "downloads/filters/",
    "tags_export": "export/tags/",
    "tags_import": "import/tags/",
    "tags_import_url": "",
    "tags_download": "downloads/tags/",
    "prettify": False,
}


@dataclass(frozen=True, slots=True)
class SyncPaths:
    """Where one record kind is exported to, imported from and downloaded into."""

    export_dir: Path | None = None
    import_dir: Path | None = None
    import_url: str | None = None
    download_dir: Path | None = None


@dataclass(frozen=True, slots=True)
class InstanceConfig:
    """Holds the server connection and the local sync directories."""

    instance_url: str
    access_token: str
    filters: SyncPaths = field(default_factory=SyncPaths)
    tags: SyncPaths = field(default_factory=SyncPaths)
    prettify: bool = False
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    def paths_for(self, section: str) -> SyncPaths:
        """Return the paths for ``"filters"`` or ``"tags"``."""

        if section == "filters":
            return self.filters
        if section == "tags":
            return self.tags
        raise ValueError(f"Unknown config section: {section}")


def generate_config(path: Path) -> bool:
    """Write a config template to ``path`` unless it already exists.

    Returns ``True`` when a new file was written.
    """

    if path.exists():
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    body = "# fedisync configuration, full-line '#' comments are ignored\n"
    body += json.dumps(CONFIG_TEMPLATE, indent=2) + "\n"
    path.write_text(body, encoding="utf-8")
    log.info("Wrote config template to %s", path)
    return True


def load_instance_config(
    path: Path,
    *,
    overrides: Mapping[str, str] | None = None,
) -> InstanceConfig:
    """Read ``path`` and apply environment overrides.

    Raises ``MissingConfigurationError`` when ``instance_url`` or ``access_token`` is
    absent or blank after overrides (a token still set to the template placeholder counts
    as absent), and ``ConfigurationError`` for anything else that cannot be interpreted.
    """

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Cannot read config file {path}: {exc}") from exc
    values = parse_config_text(text, source=str(path))
    values.update(read_env_overrides() if overrides is None else overrides)
    return build_instance_config(values)


def parse_config_text(text: str, *, source: str = "<config>") -> dict[str, object]:
    stripped = "\n".join(
        "" if line.lstrip().startswith("#") else line for line in text.splitlines()
    )
    try:
        payload = json.loads(stripped)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(
            f"Invalid JSON in {source} at line {exc.lineno}, column {exc.colno}: {exc.msg}"
        ) from exc
    if not isinstance(payload, dict):
        raise ConfigurationError(f"Config file {source} must contain a JSON object")
    return dict(payload)


def build_instance_config(values: Mapping[str, object]) -> InstanceConfig:
    instance_url = _optional_str(values, "instance_url")
    access_token = _optional_str(values, "access_token")
    if access_token == PLACEHOLDER_TOKEN:
        access_token = None
    if instance_url is None or access_token is None:
        missing = [
            name
            for name, value in (("instance_url", instance_url), ("access_token", access_token))
            if value is None
        ]
        raise MissingConfigurationError(f"Missing configuration for: {', '.join(missing)}")

    prettify = values.get("prettify", False)
    if not isinstance(prettify, bool):
        raise ConfigurationError("Config option 'prettify' must be true or false")

    timeout = values.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)
    if isinstance(timeout, bool) or not isinstance(timeout, int | float) or timeout <= 0:
        raise ConfigurationError("Config option 'timeout_seconds' must be a positive number")

    return InstanceConfig(
        instance_url=instance_url.rstrip("/"),
        access_token=access_token,
        filters=_sync_paths(values, "filters"),
        tags=_sync_paths(values, "tags"),
        prettify=prettify,
        timeout_seconds=float(timeout),
    )


def _sync_paths(values: Mapping[str, object], section: str) -> SyncPaths:
    return SyncPaths(
        export_dir=_optional_path(values, f"{section}_export"),
        import_dir=_optional_path(values, f"{section}_import"),
        import_url=_optional_str(values, f"{section}_import_url"),
        download_dir=_optional_path(values, f"{section}_download"),
    )


def _optional_str(values: Mapping[str, object], name: str) -> str | None:
    value = values.get(name)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"Config option '{name}' must be a string")
    stripped = value.strip()
    return stripped or None


def _optional_path(values: Mapping[str, object], name: str) -> Path | None:
    value = _optional_str(values, name)
    return Path(value).expanduser() if value is not None else None
