from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol, Union
import logging
import os
import shutil
import tempfile

from platformdirs import user_cache_path

from .config import Settings

logger = logging.getLogger(__name__)


class StorageContext(Protocol):
    def is_external_storage_available(self) -> bool:
        ...

    def external_cache_dir(self) -> Optional[Path]:
        ...

    def internal_cache_dir(self) -> Optional[Path]:
        ...


class PlatformStorageContext:
    """
    Storage roots for a desktop host.

    The per-user cache directory from platformdirs plays the external medium:
    it counts as available when its nearest existing ancestor is writable. The
    internal root is a per-app directory under the system temp dir, created on
    first use.
    """

    def __init__(self, app_name: str = "dlkit", app_author: Optional[str] = None) -> None:
        self.app_name = app_name
        self.app_author = app_author

    def external_cache_dir(self) -> Optional[Path]:
        return user_cache_path(self.app_name, self.app_author)

    def is_external_storage_available(self) -> bool:
        root = self.external_cache_dir()
        if root is None:
            return False
        probe = root
        while not probe.exists():
            if probe.parent == probe:
                return False
            probe = probe.parent
        return probe.is_dir() and os.access(probe, os.W_OK)

    def internal_cache_dir(self) -> Optional[Path]:
        cache_dir = Path(tempfile.gettempdir()) / self.app_name
        try:
            cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Cannot create internal cache dir {cache_dir}: {e}")
            return None
        return cache_dir


def preferred_cache_dir(context: StorageContext, dir_name: str) -> str:
    """
    Return ``<cache root>/<dir_name>``, preferring the external cache root.

    Args:
        context: Storage roots to choose from
        dir_name: Only the folder name, not a full path

    Returns:
        The joined path. When neither root resolves the root renders as
        ``None``; callers must check the result before using it.
    """
    cache_path: Optional[str] = None
    if context.is_external_storage_available():
        external = context.external_cache_dir()
        if external is not None:
            cache_path = str(external)
    if cache_path is None:
        internal = context.internal_cache_dir()
        if internal is not None and Path(internal).exists():
            cache_path = str(internal)
    if cache_path is None:
        logger.warning(f"No cache root available for {dir_name!r}")
    return f"{cache_path}{os.sep}{dir_name}"


def settings_cache_dir(settings: Settings, context: Optional[StorageContext] = None) -> str:
    """Resolve ``settings.cache_dir_name`` under the cache roots of ``settings.app_name``."""
    if context is None:
        context = PlatformStorageContext(settings.app_name, settings.app_author)
    return preferred_cache_dir(context, settings.cache_dir_name)


def available_space(path: Union[str, Path]) -> int:
    """Free bytes on the volume holding ``path``, or -1 if it cannot be measured."""
    try:
        if hasattr(os, "statvfs"):
            stats = os.statvfs(path)
            return stats.f_frsize * stats.f_bavail
        return shutil.disk_usage(path).free
    except (OSError, TypeError, ValueError) as e:
        logger.error(f"Failed to stat filesystem for {path}: {e}", exc_info=True)
        return -1
