"""Browser-compatible User-Agent strings for download requests."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol
import locale
import logging
import platform

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT_TEMPLATE = (
    "Mozilla/5.0 (Linux; U; Android %s) AppleWebKit/533.1 "
    "(KHTML, like Gecko) Version/4.0 %sSafari/533.1"
)
MOBILE_TOKEN = "Mobile "


@dataclass(frozen=True)
class PlatformInfo:
    os_version: str = ""
    language: str = ""
    region: str = ""
    model: str = ""
    build_id: str = ""
    is_release: bool = False

    @classmethod
    def from_host(cls) -> "PlatformInfo":
        """Describe the machine this interpreter runs on."""
        language, region = "", ""
        try:
            tag = locale.getlocale()[0] or ""
        except ValueError:
            tag = ""
        if tag:
            language, _, region = tag.replace("-", "_").partition("_")
        return cls(
            os_version=platform.release(),
            language=language,
            region=region,
            model=platform.machine(),
            is_release=True,
        )


class UserAgentTemplateProvider(Protocol):
    def template(self) -> Optional[str]:
        ...


class FallbackTemplateProvider:
    def template(self) -> Optional[str]:
        return DEFAULT_USER_AGENT_TEMPLATE


class StaticTemplateProvider:
    """Serves a template supplied by the host, e.g. from settings."""

    def __init__(self, template: Optional[str]) -> None:
        self._template = template

    def template(self) -> Optional[str]:
        return self._template


def _resolve_template(provider: Optional[UserAgentTemplateProvider]) -> str:
    if provider is None:
        return DEFAULT_USER_AGENT_TEMPLATE
    try:
        template = provider.template()
    except Exception as e:
        logger.debug(f"User-Agent template provider failed, using default: {e}")
        return DEFAULT_USER_AGENT_TEMPLATE
    return template or DEFAULT_USER_AGENT_TEMPLATE


def build_platform_descriptor(info: PlatformInfo) -> str:
    parts = [info.os_version or "1.0", "; "]
    if info.language:
        parts.append(info.language.lower())
        if info.region:
            parts.append("-" + info.region.lower())
    else:
        parts.append("en")
    # The model is only reported for release builds
    if info.is_release and info.model:
        parts.append("; " + info.model)
    if info.build_id:
        parts.append(" Build/" + info.build_id)
    return "".join(parts)


def build_user_agent(
    platform_info: Optional[PlatformInfo] = None,
    provider: Optional[UserAgentTemplateProvider] = None,
) -> str:
    """
    Compose a User-Agent from a two-slot ``%s`` template.

    Args:
        platform_info: Platform descriptor; defaults to ``PlatformInfo.from_host()``
        provider: Source of a platform-native template; the built-in default is
            used when it is missing, fails, or returns an empty template

    Returns:
        The template with the platform descriptor and ``"Mobile "`` filled in
    """
    info = platform_info if platform_info is not None else PlatformInfo.from_host()
    descriptor = build_platform_descriptor(info)
    template = _resolve_template(provider)
    try:
        return template % (descriptor, MOBILE_TOKEN)
    except (TypeError, ValueError) as e:
        logger.warning(f"User-Agent template {template!r} is not a two-slot template: {e}")
        return DEFAULT_USER_AGENT_TEMPLATE % (descriptor, MOBILE_TOKEN)
