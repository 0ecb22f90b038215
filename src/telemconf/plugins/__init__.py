"""Extension layer — type contributions via pluggy.

INVARIANT: Plugin failures are warnings, never errors.
"""

from telemconf.plugins.hookspecs import hookimpl
from telemconf.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
