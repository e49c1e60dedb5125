"""httpx client wiring from ``Settings``."""
from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from .config import Settings
from .tls import trust_all_connections
from .user_agent import PlatformInfo, StaticTemplateProvider, build_user_agent


def client_options(settings: Settings, platform_info: Optional[PlatformInfo] = None) -> Dict[str, Any]:
    """Keyword arguments for ``httpx.Client`` / ``httpx.AsyncClient``."""
    user_agent = build_user_agent(platform_info, StaticTemplateProvider(settings.user_agent_template))
    options: Dict[str, Any] = {
        "timeout": httpx.Timeout(settings.connect_timeout, read=settings.read_timeout),
        "headers": {"User-Agent": user_agent},
        "follow_redirects": True,
    }
    if settings.trust_all_certificates:
        context = trust_all_connections()
        if context is not None:
            options["verify"] = context
    return options


def open_client(settings: Settings, platform_info: Optional[PlatformInfo] = None, **overrides: Any) -> httpx.Client:
    options = client_options(settings, platform_info)
    options.update(overrides)
    return httpx.Client(**options)
