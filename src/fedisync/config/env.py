"""Environment variable loaders for configuration."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

ENV_OVERRIDES: Mapping[str, str] = {
    "instance_url": "FEDISYNC_INSTANCE_URL",
    "access_token": "FEDISYNC_ACCESS_TOKEN",
}


def read_env_overrides(names: Mapping[str, str] = ENV_OVERRIDES) -> dict[str, str]:
    """Return config values set through the environment, keyed by config option.

    Blank variables are treated as unset so they never mask a value from the file.
    """

    values: dict[str, str] = {}
    for option, variable in names.items():
        value = os.getenv(variable)
        if value is None or not value.strip():
            continue
        values[option] = value.strip()
    return values
