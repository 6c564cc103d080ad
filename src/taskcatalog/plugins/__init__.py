"""Extension layer — lifecycle hooks via pluggy.

Discovery: setuptools entry points in the ``taskcatalog.plugins`` group.
INVARIANT: Plugin failures are warnings, never errors.
"""

from taskcatalog.plugins.hookspecs import hookimpl
from taskcatalog.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
