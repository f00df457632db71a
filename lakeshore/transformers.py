"""Map raw content-store records onto domain models."""
from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Any, Mapping, Optional, Type, TypeVar

from .models import FAQ, BlogPost, Cat, CatStatus, Gender, Kitten, KittenStatus, Page, PastKitten
from .properties import TEXT_KINDS, DateProperty, NumberProperty, get_property, get_rich_text_html
from .utils import slugify, timestamp

logger = logging.getLogger(__name__)

DEFAULT_AUTHOR = "Lakeshore Ragdolls"
DEFAULT_CATEGORY = "General"

E = TypeVar("E", bound=Enum)


def _coerce_enum(enum_type: Type[E], value: Any, default: E) -> E:
    try:
        return enum_type(value)
    except (TypeError, ValueError):
        logger.debug("Unknown %s value %r; using %s", enum_type.__name__, value, default.value)
        return default


def _unpack(record: Mapping[str, Any]) -> tuple[str, Mapping[str, Any]]:
    properties = record.get("properties")
    if not isinstance(properties, Mapping):
        properties = {}
    return str(record.get("id") or ""), properties


def _slug(properties: Mapping[str, Any], fallback: str) -> str:
    return get_property(properties, "Slug", "") or slugify(fallback)


def _first(values: list) -> Optional[str]:
    return values[0] if values else None


def _sort_order(properties: Mapping[str, Any]) -> int:
    value = get_property(properties, "Sort Order", 0)
    return int(value) if math.isfinite(value) else 0


def transform_cat(record: Mapping[str, Any]) -> Cat:
    record_id, properties = _unpack(record)
    name = get_property(properties, "Name", "Unnamed Cat")
    photos = tuple(get_property(properties, "Photos", []))
    return Cat(
        id=record_id,
        name=name,
        slug=_slug(properties, name),
        photos=photos,
        cover_photo=photos[0] if photos else "",
        dob=get_property(properties, "Date of Birth", None, kind=DateProperty),
        color=get_property(properties, "Color", ""),
        pattern=get_property(properties, "Pattern", ""),
        gender=_coerce_enum(Gender, get_property(properties, "Gender", "Female"), Gender.FEMALE),
        status=_coerce_enum(
            CatStatus, get_property(properties, "Status", "Active"), CatStatus.ACTIVE
        ),
        registration=get_property(properties, "Registration", ""),
        pedigree=get_property(properties, "Pedigree", ""),
        health_testing=get_rich_text_html(properties, "Health Testing"),
        personality=get_rich_text_html(properties, "Personality"),
        youtube_tag=get_property(properties, "YouTube Tag", ""),
        sort_order=_sort_order(properties),
    )


def transform_kitten(record: Mapping[str, Any]) -> Kitten:
    record_id, properties = _unpack(record)
    name = get_property(properties, "Name", "Unnamed Kitten")
    photos = tuple(get_property(properties, "Photos", []))
    return Kitten(
        id=record_id,
        name=name,
        slug=_slug(properties, name),
        photos=photos,
        cover_photo=photos[0] if photos else "",
        dob=get_property(properties, "Date of Birth", None, kind=DateProperty),
        color=get_property(properties, "Color", ""),
        pattern=get_property(properties, "Pattern", ""),
        gender=_coerce_enum(Gender, get_property(properties, "Gender", "Female"), Gender.FEMALE),
        status=_coerce_enum(
            KittenStatus, get_property(properties, "Status", "Available"), KittenStatus.AVAILABLE
        ),
        mother_id=_first(get_property(properties, "Mother", [])),
        father_id=_first(get_property(properties, "Father", [])),
        price=get_property(properties, "Price", None, kind=NumberProperty),
        reserved_by=get_property(properties, "Reserved By", None, kind=TEXT_KINDS),
        deposit_paid=get_property(properties, "Deposit Paid", False),
        personality=get_rich_text_html(properties, "Personality"),
        youtube_tag=get_property(properties, "YouTube Tag", ""),
        go_home_date=get_property(properties, "Go Home Date", None, kind=DateProperty),
        litter=get_property(properties, "Litter", ""),
    )


def transform_past_kitten(record: Mapping[str, Any]) -> PastKitten:
    record_id, properties = _unpack(record)
    photos = tuple(get_property(properties, "Photos", []))
    return PastKitten(
        id=record_id,
        name=get_property(properties, "Name", "Unnamed Kitten"),
        photos=photos,
        cover_photo=photos[0] if photos else "",
        dob=get_property(properties, "Date of Birth", None, kind=DateProperty),
        color=get_property(properties, "Color", ""),
        gender=_coerce_enum(Gender, get_property(properties, "Gender", "Female"), Gender.FEMALE),
        mother_id=_first(get_property(properties, "Mother", [])),
        father_id=_first(get_property(properties, "Father", [])),
        went_home=get_property(properties, "Went Home", None, kind=DateProperty),
    )


def transform_blog_post(record: Mapping[str, Any]) -> BlogPost:
    record_id, properties = _unpack(record)
    title = get_property(properties, "Title", "Untitled Post")
    cover_images = get_property(properties, "Cover Image", [])
    return BlogPost(
        id=record_id,
        title=title,
        slug=_slug(properties, title),
        cover_image=cover_images[0] if cover_images else "",
        content=get_rich_text_html(properties, "Content"),
        excerpt=get_property(properties, "Excerpt", ""),
        category=get_property(properties, "Category", DEFAULT_CATEGORY),
        tags=tuple(get_property(properties, "Tags", [])),
        author=get_property(properties, "Author", DEFAULT_AUTHOR),
        published_date=get_property(properties, "Published Date", timestamp()),
        seo_description=get_property(properties, "SEO Description", None, kind=TEXT_KINDS),
    )


def transform_faq(record: Mapping[str, Any]) -> FAQ:
    record_id, properties = _unpack(record)
    return FAQ(
        id=record_id,
        question=get_property(properties, "Question", ""),
        answer=get_rich_text_html(properties, "Answer"),
        category=get_property(properties, "Category", DEFAULT_CATEGORY),
        sort_order=_sort_order(properties),
    )


def transform_page(record: Mapping[str, Any]) -> Page:
    record_id, properties = _unpack(record)
    title = get_property(properties, "Title", "Untitled")
    return Page(
        id=record_id,
        title=title,
        slug=_slug(properties, title),
        content=get_rich_text_html(properties, "Content"),
        seo_description=get_property(properties, "SEO Description", None, kind=TEXT_KINDS),
    )
