"""Process-wide opt-in to skip TLS certificate and hostname checks.

Calling ``trust_all_connections()`` makes every later HTTPS connection opened
through the standard library (``urllib``, ``http.client``) accept any
certificate and any hostname. httpx does not consult that global, so pass
``permissive_context()`` as ``verify=`` when building clients.
"""
from __future__ import annotations

from typing import Callable, Optional
import logging
import ssl
import threading

logger = logging.getLogger(__name__)


def _build_permissive_context() -> ssl.SSLContext:
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    # check_hostname must be off before verification can be disabled
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


class _PermissiveTls:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._context: Optional[ssl.SSLContext] = None
        self._factory: Optional[Callable[..., ssl.SSLContext]] = None
        self._default_factory = ssl._create_default_https_context

    @property
    def context(self) -> Optional[ssl.SSLContext]:
        return self._context

    @property
    def factory(self) -> Optional[Callable[..., ssl.SSLContext]]:
        return self._factory

    def _ensure_built(self) -> bool:
        if self._factory is not None:
            return True
        with self._lock:
            if self._factory is None:
                try:
                    context = _build_permissive_context()
                except Exception as e:
                    logger.error(f"Failed to build permissive TLS context: {e}", exc_info=True)
                    return False

                def factory(*args, **kwargs) -> ssl.SSLContext:
                    # http.client mutates what it gets (ALPN, post-handshake auth)
                    return _build_permissive_context()

                self._context = context
                self._factory = factory
        return True

    def install(self) -> Optional[ssl.SSLContext]:
        if not self._ensure_built():
            return None
        with self._lock:
            if ssl._create_default_https_context is not self._factory:
                ssl._create_default_https_context = self._factory
                logger.warning("TLS certificate and hostname verification disabled for this process")
        return self._context

    def restore(self) -> None:
        with self._lock:
            if self._factory is not None and ssl._create_default_https_context is self._factory:
                ssl._create_default_https_context = self._default_factory
                logger.info("TLS certificate verification restored")


_permissive_tls = _PermissiveTls()


def trust_all_connections() -> Optional[ssl.SSLContext]:
    """
    Install a trust-everything TLS context as the process default.

    The context is built once and reused by later calls. Returns the installed
    context, or None if it could not be built (nothing is installed then).
    """
    return _permissive_tls.install()


def permissive_context() -> Optional[ssl.SSLContext]:
    return _permissive_tls.context


def restore_default_verification() -> None:
    _permissive_tls.restore()
