"""BaseService — shared foundation for catalog services.

Every service receives a :class:`Catalog` at construction time and reads
paths, rules, and plugins from it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from taskcatalog.infrastructure.catalog import Catalog

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes."""

    def __init__(self, catalog: Catalog) -> None:
        self._catalog = catalog

    def _dispatch_event(
        self,
        hook_name: str,
        payload: dict[str, Any],
        warnings: list[str],
    ) -> None:
        """Call a plugin hook. No-op when plugins are disabled.

        INVARIANT: Plugin failures are warnings, never errors.
        """
        pm = self._catalog.plugin_manager
        if pm is None:
            return
        try:
            getattr(pm.hook, hook_name)(**payload)
        except Exception:
            logger.warning("Plugin hook %s failed", hook_name, exc_info=True)
            warnings.append(f"Plugin hook {hook_name} failed")
