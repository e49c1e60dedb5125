"""Persisted settings for dlkit-backed downloaders."""
from __future__ import annotations

from pathlib import Path
from typing import Optional
import logging
import os
import tempfile

from platformdirs import user_config_dir
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)


class Settings(BaseModel):
    """Downloader settings."""
    app_name: str = Field("dlkit", description="Application name used for platform directories")
    app_author: Optional[str] = Field(None, description="Application author used for platform directories")
    cache_dir_name: str = Field("downloads", description="Leaf folder created under the cache root")
    user_agent_template: Optional[str] = Field(None, description="Two-slot %s User-Agent template")
    trust_all_certificates: bool = Field(False, description="Skip TLS certificate and hostname checks")
    connect_timeout: float = Field(10.0, gt=0, description="Connect timeout in seconds")
    read_timeout: float = Field(15.0, gt=0, description="Read timeout in seconds")


def default_settings_path(app_name: str = "dlkit", app_author: Optional[str] = None) -> Path:
    return Path(user_config_dir(app_name, app_author)) / "settings.json"


def write_text_atomic(target: Path, text: str) -> None:
    """Replace ``target`` with ``text`` so readers never see a partial file."""
    target.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        "w", encoding="utf-8", dir=target.parent, prefix=f".{target.name}.", delete=False
    ) as tmp:
        staged = Path(tmp.name)
        try:
            tmp.write(text)
            tmp.flush()
            os.fsync(tmp.fileno())
        except OSError:
            tmp.close()
            staged.unlink()
            raise
    try:
        os.replace(staged, target)
    except OSError:
        staged.unlink()
        raise


def load_settings(path: Optional[Path] = None, app_name: str = "dlkit", app_author: Optional[str] = None) -> Settings:
    """Read settings, falling back to defaults when the file is missing or unusable."""
    settings_file = path or default_settings_path(app_name, app_author)
    if not settings_file.exists():
        return Settings(app_name=app_name, app_author=app_author)
    try:
        return Settings.model_validate_json(settings_file.read_text(encoding="utf-8"))
    except (OSError, ValidationError) as e:
        logger.warning(f"Ignoring unreadable settings file {settings_file}: {e}")
        return Settings(app_name=app_name, app_author=app_author)


def save_settings(settings: Settings, path: Optional[Path] = None) -> Path:
    """Persist ``settings``; the default location is derived from its app name and author."""
    settings_file = path or default_settings_path(settings.app_name, settings.app_author)
    write_text_atomic(settings_file, settings.model_dump_json(indent=2))
    return settings_file
