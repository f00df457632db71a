"""Configuration helpers for the Lakeshore content layer."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Mapping

from .utils import env_bool

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://api.notion.com/v1"
DEFAULT_NOTION_VERSION = "2022-06-28"
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class CollectionIds:
    """Content-store database ids for each collection; ``None`` means unconfigured."""

    cats: str | None = None
    kittens: str | None = None
    past_kittens: str | None = None
    blog: str | None = None
    faq: str | None = None
    pages: str | None = None


COLLECTION_ENV_VARS = {
    "cats": "NOTION_CATS_DATABASE_ID",
    "kittens": "NOTION_KITTENS_DATABASE_ID",
    "past_kittens": "NOTION_PAST_KITTENS_DATABASE_ID",
    "blog": "NOTION_BLOG_DATABASE_ID",
    "faq": "NOTION_FAQ_DATABASE_ID",
    "pages": "NOTION_PAGES_DATABASE_ID",
}


@dataclass(frozen=True)
class ContentSettings:
    """Connection settings for the content store."""

    api_key: str | None = None
    api_base_url: str = DEFAULT_API_BASE_URL
    notion_version: str = DEFAULT_NOTION_VERSION
    timeout: float = DEFAULT_TIMEOUT
    collections: CollectionIds = field(default_factory=CollectionIds)


@dataclass(frozen=True)
class SiteSettings:
    """Site level settings used when building page metadata."""

    site_name: str = "Lakeshore Ragdolls"
    base_url: str = "https://lakeshoreragdolls.com"
    description: str = (
        "Lakeshore Ragdolls is a small family cattery raising healthy, well-socialized Ragdoll kittens."
    )
    default_author: str = "Lakeshore Ragdolls"
    default_image: str | None = None
    noindex: bool = False


def _env(environ: Mapping[str, str], name: str, default: str | None = None) -> str | None:
    value = environ.get(name)
    if value is None:
        return default
    value = value.strip()
    return value or default


def _env_float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = _env(environ, name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s value %r; using %s", name, raw, default)
        return default


def load_collection_ids(environ: Mapping[str, str] | None = None) -> CollectionIds:
    environ = os.environ if environ is None else environ
    return CollectionIds(
        **{attr: _env(environ, name) for attr, name in COLLECTION_ENV_VARS.items()}
    )


def load_content_settings(environ: Mapping[str, str] | None = None) -> ContentSettings:
    """Read content-store settings from the environment."""

    environ = os.environ if environ is None else environ
    api_key = _env(environ, "NOTION_API_KEY")
    if not api_key:
        logger.warning("NOTION_API_KEY is not set; content-store requests will be rejected")
    return ContentSettings(
        api_key=api_key,
        api_base_url=(_env(environ, "NOTION_API_BASE_URL", DEFAULT_API_BASE_URL) or DEFAULT_API_BASE_URL).rstrip("/"),
        notion_version=_env(environ, "NOTION_VERSION", DEFAULT_NOTION_VERSION) or DEFAULT_NOTION_VERSION,
        timeout=_env_float(environ, "NOTION_TIMEOUT", DEFAULT_TIMEOUT),
        collections=load_collection_ids(environ),
    )


def load_site_settings(environ: Mapping[str, str] | None = None) -> SiteSettings:
    environ = os.environ if environ is None else environ
    defaults = SiteSettings()
    return SiteSettings(
        site_name=_env(environ, "SITE_NAME", defaults.site_name) or defaults.site_name,
        base_url=(_env(environ, "SITE_BASE_URL", defaults.base_url) or defaults.base_url).rstrip("/"),
        description=_env(environ, "SITE_DESCRIPTION", defaults.description) or defaults.description,
        default_author=_env(environ, "SITE_AUTHOR", defaults.default_author) or defaults.default_author,
        default_image=_env(environ, "SITE_DEFAULT_IMAGE"),
        noindex=env_bool("SITE_NOINDEX", False, environ),
    )
