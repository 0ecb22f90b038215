"""Pluggy hook specifications for telemconf.

One setup-time hook lets installed packages contribute the classes a
configuration document may name in ``Type`` attributes.
"""

from __future__ import annotations

import pluggy

PROJECT_NAME = "telemconf"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class TelemconfHookSpec:
    """Hook specifications for the telemconf plugin system."""

    @hookspec
    def register_config_types(self) -> dict[str, type] | None:
        """Return alias -> class mappings to add to the type registry.

        Each class is also registered under its fully-qualified name.
        """
