"""Unified settings — CLI flags and env vars in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``TELEMCONF_*`` prefix
  3. Code defaults

The configuration file itself is located by
:func:`telemconf.config.discovery.find_config` unless given explicitly.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic_settings import BaseSettings, SettingsConfigDict

from telemconf.config.discovery import find_config


class TelemconfSettings(BaseSettings):
    """Settings for the telemconf CLI, frozen after construction.

    Attributes:
        config_path: Resolved configuration file, or None when neither an
            explicit path nor a discoverable file exists.
        load_plugins: Whether to load ``telemconf.plugins`` entry points.
    """

    model_config = SettingsConfigDict(frozen=True, env_prefix="TELEMCONF_")

    config_path: Path | None = None
    json_output: bool = False
    verbose: bool = False
    log_json: bool = False
    trace_binding: bool = False
    load_plugins: bool = True

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | Path | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> TelemconfSettings:
        """Construct settings from a CLI invocation.

        An explicit *config_path* wins; otherwise the file is discovered by
        walking up from *start*. Flags set to None are left to env vars
        and defaults.
        """
        resolved = Path(config_path) if config_path else find_config(start)
        overrides = {key: value for key, value in cli_flags.items() if value is not None}
        return cls(config_path=resolved, **overrides)
