"""Build head metadata for rendered pages."""
from __future__ import annotations

import html
import re
from typing import Optional

from .config import SiteSettings
from .models import BlogPost, Cat, Kitten, Page, SeoMetadata
from .utils import format_price, truncate_text

DESCRIPTION_LIMIT = 160

_TAG_PATTERN = re.compile(r"<[^>]+>")
_BREAK_PATTERN = re.compile(r"<br\s*/?>", re.IGNORECASE)


def html_to_text(markup: str) -> str:
    """Strip tags from generated HTML and collapse whitespace."""

    text = _BREAK_PATTERN.sub(" ", markup or "")
    text = _TAG_PATTERN.sub("", text)
    return " ".join(html.unescape(text).split())


def _title(title: str, settings: SiteSettings) -> str:
    cleaned = " ".join((title or "").split())
    if not cleaned or cleaned == settings.site_name:
        return settings.site_name
    return f"{cleaned} | {settings.site_name}"


def _description(settings: SiteSettings, *candidates: Optional[str]) -> str:
    for candidate in candidates:
        text = html_to_text(candidate or "")
        if text:
            return truncate_text(text, DESCRIPTION_LIMIT)
    return settings.description


def canonical_url(path: str, settings: SiteSettings) -> str:
    if path.startswith("http://") or path.startswith("https://"):
        return path
    return f"{settings.base_url}/{path.lstrip('/')}"


def default_seo(settings: SiteSettings, path: str = "/") -> SeoMetadata:
    return SeoMetadata(
        title=settings.site_name,
        description=settings.description,
        image=settings.default_image,
        canonical_url=canonical_url(path, settings),
        noindex=settings.noindex,
    )


def page_seo(page: Page, settings: SiteSettings) -> SeoMetadata:
    return SeoMetadata(
        title=_title(page.title, settings),
        description=_description(settings, page.seo_description, page.content),
        image=settings.default_image,
        canonical_url=canonical_url(page.slug, settings),
        noindex=settings.noindex,
    )


def blog_post_seo(post: BlogPost, settings: SiteSettings) -> SeoMetadata:
    return SeoMetadata(
        title=_title(post.title, settings),
        description=_description(settings, post.seo_description, post.excerpt, post.content),
        image=post.cover_image or settings.default_image,
        canonical_url=canonical_url(f"blog/{post.slug}", settings),
        type="article",
        published_date=post.published_date,
        author=post.author or settings.default_author,
        noindex=settings.noindex,
        keywords=post.tags,
    )


def cat_seo(cat: Cat, settings: SiteSettings) -> SeoMetadata:
    details = ", ".join(part for part in (cat.color, cat.pattern) if part)
    summary = f"Meet {cat.name}, a {details} Ragdoll {cat.gender.value.lower()}." if details else ""
    return SeoMetadata(
        title=_title(cat.name, settings),
        description=_description(settings, cat.personality, summary),
        image=cat.cover_photo or settings.default_image,
        canonical_url=canonical_url(f"cats/{cat.slug}", settings),
        noindex=settings.noindex,
    )


def kitten_seo(kitten: Kitten, settings: SiteSettings) -> SeoMetadata:
    color = f"{kitten.color} " if kitten.color else ""
    summary = (
        f"{kitten.name} is a {color}Ragdoll kitten ({kitten.status.value}). "
        f"Price: {format_price(kitten.price)}."
    )
    return SeoMetadata(
        title=_title(kitten.name, settings),
        description=_description(settings, kitten.personality, summary),
        image=kitten.cover_photo or settings.default_image,
        canonical_url=canonical_url(f"kittens/{kitten.slug}", settings),
        type="product",
        noindex=settings.noindex,
    )
