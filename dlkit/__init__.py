"""Helper routines for resumable download clients.

Header inference, filename sequencing, string sizing, User-Agent building,
cache-dir and free-space probing, and an opt-in permissive TLS mode.
"""
from .errors import (
    DownloadKitError,
    UnsupportedEncodingError,
    DecodingError,
    MissingExtensionError,
)
from .strings import (
    RepairResult,
    DecodeResult,
    size_of_string,
    lookup_charset,
    repair_charset,
    percent_decode,
)
from .filenames import (
    rename_increment_filename,
    sanitize_filename,
    next_available_path,
)
from .headers import (
    HeaderElement,
    ResponseMetadata,
    parse_header_elements,
    first_header,
    is_support_range,
    filename_from_response,
    charset_from_request,
    parse_total_from_content_range,
    inspect_response,
)
from .user_agent import (
    DEFAULT_USER_AGENT_TEMPLATE,
    PlatformInfo,
    UserAgentTemplateProvider,
    FallbackTemplateProvider,
    StaticTemplateProvider,
    build_user_agent,
)
from .storage import (
    StorageContext,
    PlatformStorageContext,
    preferred_cache_dir,
    settings_cache_dir,
    available_space,
)
from .tls import (
    trust_all_connections,
    permissive_context,
    restore_default_verification,
)
from .config import (
    Settings,
    default_settings_path,
    load_settings,
    save_settings,
    write_text_atomic,
)
from .session import client_options, open_client

__all__ = [
    "DownloadKitError",
    "UnsupportedEncodingError",
    "DecodingError",
    "MissingExtensionError",
    "RepairResult",
    "DecodeResult",
    "size_of_string",
    "lookup_charset",
    "repair_charset",
    "percent_decode",
    "rename_increment_filename",
    "sanitize_filename",
    "next_available_path",
    "HeaderElement",
    "ResponseMetadata",
    "parse_header_elements",
    "first_header",
    "is_support_range",
    "filename_from_response",
    "charset_from_request",
    "parse_total_from_content_range",
    "inspect_response",
    "DEFAULT_USER_AGENT_TEMPLATE",
    "PlatformInfo",
    "UserAgentTemplateProvider",
    "FallbackTemplateProvider",
    "StaticTemplateProvider",
    "build_user_agent",
    "StorageContext",
    "PlatformStorageContext",
    "preferred_cache_dir",
    "settings_cache_dir",
    "available_space",
    "trust_all_connections",
    "permissive_context",
    "restore_default_verification",
    "Settings",
    "default_settings_path",
    "load_settings",
    "save_settings",
    "write_text_atomic",
    "client_options",
    "open_client",
]
