"""Domain models handed to the presentation layer."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"


class CatStatus(str, Enum):
    ACTIVE = "Active"
    RETIRED = "Retired"
    GUARDIAN_HOME = "Guardian Home"


class KittenStatus(str, Enum):
    AVAILABLE = "Available"
    RESERVED = "Reserved"
    SOLD = "Sold"
    KEEPING = "Keeping"


@dataclass(frozen=True)
class Cat:
    """A breeding cat from the cattery's roster."""

    id: str
    name: str
    slug: str
    photos: Tuple[str, ...] = ()
    cover_photo: str = ""
    dob: Optional[str] = None
    color: str = ""
    pattern: str = ""
    gender: Gender = Gender.FEMALE
    status: CatStatus = CatStatus.ACTIVE
    registration: str = ""
    pedigree: str = ""
    health_testing: str = ""
    personality: str = ""
    youtube_tag: str = ""
    sort_order: int = 0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "photos": list(self.photos),
            "cover_photo": self.cover_photo,
            "dob": self.dob,
            "color": self.color,
            "pattern": self.pattern,
            "gender": self.gender.value,
            "status": self.status.value,
            "registration": self.registration,
            "pedigree": self.pedigree,
            "health_testing": self.health_testing,
            "personality": self.personality,
            "youtube_tag": self.youtube_tag,
            "sort_order": self.sort_order,
        }


def _parent_dict(parent: Optional[Cat]) -> Optional[dict]:
    return parent.to_dict() if parent is not None else None


@dataclass(frozen=True)
class Kitten:
    """A kitten listing.

    ``mother`` and ``father`` stay ``None`` until the parent ids are
    resolved explicitly with :mod:`lakeshore.relations`.
    """

    id: str
    name: str
    slug: str
    photos: Tuple[str, ...] = ()
    cover_photo: str = ""
    dob: Optional[str] = None
    color: str = ""
    pattern: str = ""
    gender: Gender = Gender.FEMALE
    status: KittenStatus = KittenStatus.AVAILABLE
    mother_id: Optional[str] = None
    mother: Optional[Cat] = None
    father_id: Optional[str] = None
    father: Optional[Cat] = None
    price: Optional[float] = None
    reserved_by: Optional[str] = None
    deposit_paid: bool = False
    personality: str = ""
    youtube_tag: str = ""
    go_home_date: Optional[str] = None
    litter: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "photos": list(self.photos),
            "cover_photo": self.cover_photo,
            "dob": self.dob,
            "color": self.color,
            "pattern": self.pattern,
            "gender": self.gender.value,
            "status": self.status.value,
            "mother_id": self.mother_id,
            "mother": _parent_dict(self.mother),
            "father_id": self.father_id,
            "father": _parent_dict(self.father),
            "price": self.price,
            "reserved_by": self.reserved_by,
            "deposit_paid": self.deposit_paid,
            "personality": self.personality,
            "youtube_tag": self.youtube_tag,
            "go_home_date": self.go_home_date,
            "litter": self.litter,
        }


@dataclass(frozen=True)
class PastKitten:
    """A kitten that has already gone to its new home."""

    id: str
    name: str
    photos: Tuple[str, ...] = ()
    cover_photo: str = ""
    dob: Optional[str] = None
    color: str = ""
    gender: Gender = Gender.FEMALE
    mother_id: Optional[str] = None
    mother: Optional[Cat] = None
    father_id: Optional[str] = None
    father: Optional[Cat] = None
    went_home: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "photos": list(self.photos),
            "cover_photo": self.cover_photo,
            "dob": self.dob,
            "color": self.color,
            "gender": self.gender.value,
            "mother_id": self.mother_id,
            "mother": _parent_dict(self.mother),
            "father_id": self.father_id,
            "father": _parent_dict(self.father),
            "went_home": self.went_home,
        }


@dataclass(frozen=True)
class BlogPost:
    id: str
    title: str
    slug: str
    published_date: str
    cover_image: str = ""
    content: str = ""
    excerpt: str = ""
    category: str = "General"
    tags: Tuple[str, ...] = ()
    author: str = ""
    seo_description: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "slug": self.slug,
            "cover_image": self.cover_image,
            "content": self.content,
            "excerpt": self.excerpt,
            "category": self.category,
            "tags": list(self.tags),
            "author": self.author,
            "published_date": self.published_date,
            "seo_description": self.seo_description,
        }


@dataclass(frozen=True)
class FAQ:
    id: str
    question: str
    answer: str = ""
    category: str = "General"
    sort_order: int = 0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "question": self.question,
            "answer": self.answer,
            "category": self.category,
            "sort_order": self.sort_order,
        }


@dataclass(frozen=True)
class Page:
    """A static page such as About or Health Guarantee."""

    id: str
    title: str
    slug: str
    content: str = ""
    seo_description: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "slug": self.slug,
            "content": self.content,
            "seo_description": self.seo_description,
        }


@dataclass(frozen=True)
class NavItem:
    label: str
    href: str
    children: Tuple["NavItem", ...] = ()


@dataclass(frozen=True)
class SeoMetadata:
    """Head metadata for a rendered page."""

    title: str
    description: str
    image: Optional[str] = None
    canonical_url: Optional[str] = None
    type: str = "website"
    published_date: Optional[str] = None
    modified_date: Optional[str] = None
    author: Optional[str] = None
    noindex: bool = False
    keywords: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "description": self.description,
            "image": self.image,
            "canonical_url": self.canonical_url,
            "type": self.type,
            "published_date": self.published_date,
            "modified_date": self.modified_date,
            "author": self.author,
            "noindex": self.noindex,
            "keywords": list(self.keywords),
        }
