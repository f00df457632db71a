"""Read-only queries against the content store.

Every list query implicitly requires the ``Published`` checkbox. Store
failures and unconfigured collections are logged and degrade to an empty
list (or ``None`` for single records), so a broken or unreachable store
looks the same to callers as an empty one.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, List, Mapping, Optional, TypeVar

from .config import CollectionIds
from .models import FAQ, BlogPost, Cat, Kitten, KittenStatus, Page, PastKitten
from .notion import (
    ContentStore,
    ContentStoreError,
    Filter,
    all_of,
    checkbox_equals,
    filter_pages,
    is_page_record,
    rich_text_equals,
    select_equals,
)
from .transformers import (
    transform_blog_post,
    transform_cat,
    transform_faq,
    transform_kitten,
    transform_page,
    transform_past_kitten,
)
from .utils import parse_datetime

logger = logging.getLogger(__name__)

T = TypeVar("T")
Transform = Callable[[Mapping[str, Any]], T]

PUBLISHED_FILTER = checkbox_equals("Published", True)

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def _published_key(post: BlogPost) -> datetime:
    return parse_datetime(post.published_date) or _OLDEST


def sort_newest_first(posts: List[BlogPost]) -> List[BlogPost]:
    return sorted(posts, key=_published_key, reverse=True)


class ContentRepository:
    """Fetch and transform cattery content from the content store."""

    def __init__(self, store: ContentStore, collections: CollectionIds) -> None:
        self.store = store
        self.collections = collections

    async def query_collection(
        self,
        database_id: Optional[str],
        transform: Transform[T],
        additional_filter: Optional[Filter] = None,
    ) -> List[T]:
        """Return every published record of a collection, transformed in store order."""

        if not database_id:
            logger.warning("Database ID not configured")
            return []
        query_filter = all_of(PUBLISHED_FILTER, additional_filter)
        try:
            results = await self.store.query_database(database_id, query_filter)
        except ContentStoreError as error:
            logger.error("Error querying database %s: %s", database_id, error)
            return []
        return [transform(page) for page in filter_pages(results)]

    async def get_by_slug(
        self, database_id: Optional[str], slug: str, transform: Transform[T]
    ) -> Optional[T]:
        if not database_id or not slug:
            return None
        query_filter = all_of(PUBLISHED_FILTER, rich_text_equals("Slug", slug))
        try:
            results = await self.store.query_database(database_id, query_filter)
        except ContentStoreError as error:
            logger.error('Error fetching by slug "%s": %s', slug, error)
            return None
        if not results or not is_page_record(results[0]):
            return None
        return transform(results[0])

    # ------------------------------------------------------------------
    # Cats

    async def get_cats(self) -> List[Cat]:
        cats = await self.query_collection(self.collections.cats, transform_cat)
        return sorted(cats, key=lambda cat: cat.sort_order)

    async def get_cat_by_slug(self, slug: str) -> Optional[Cat]:
        return await self.get_by_slug(self.collections.cats, slug, transform_cat)

    async def get_cat_by_id(self, cat_id: str) -> Optional[Cat]:
        if not cat_id:
            return None
        try:
            page = await self.store.retrieve_page(cat_id)
        except ContentStoreError as error:
            logger.error('Error fetching cat by ID "%s": %s', cat_id, error)
            return None
        if not is_page_record(page):
            return None
        return transform_cat(page)

    # ------------------------------------------------------------------
    # Kittens

    async def get_kittens(self, status: Optional[KittenStatus] = None) -> List[Kitten]:
        """List kittens, optionally only those in ``status``.

        A status outside :class:`KittenStatus` matches no kitten.
        """

        status_filter = None
        if status:
            try:
                status_filter = select_equals("Status", KittenStatus(status).value)
            except ValueError:
                logger.warning("Unknown kitten status %r", status)
                return []
        return await self.query_collection(
            self.collections.kittens, transform_kitten, status_filter
        )

    async def get_available_kittens(self) -> List[Kitten]:
        return await self.get_kittens(KittenStatus.AVAILABLE)

    async def get_kitten_by_slug(self, slug: str) -> Optional[Kitten]:
        return await self.get_by_slug(self.collections.kittens, slug, transform_kitten)

    async def get_past_kittens(self) -> List[PastKitten]:
        return await self.query_collection(self.collections.past_kittens, transform_past_kitten)

    # ------------------------------------------------------------------
    # Blog

    async def get_blog_posts(self) -> List[BlogPost]:
        posts = await self.query_collection(self.collections.blog, transform_blog_post)
        return sort_newest_first(posts)

    async def get_blog_post_by_slug(self, slug: str) -> Optional[BlogPost]:
        return await self.get_by_slug(self.collections.blog, slug, transform_blog_post)

    async def get_blog_posts_by_category(self, category: str) -> List[BlogPost]:
        posts = await self.query_collection(
            self.collections.blog, transform_blog_post, select_equals("Category", category)
        )
        return sort_newest_first(posts)

    # ------------------------------------------------------------------
    # FAQ

    async def get_faqs(self) -> List[FAQ]:
        faqs = await self.query_collection(self.collections.faq, transform_faq)
        return sorted(faqs, key=lambda faq: faq.sort_order)

    async def get_faqs_by_category(self, category: str) -> List[FAQ]:
        faqs = await self.query_collection(
            self.collections.faq, transform_faq, select_equals("Category", category)
        )
        return sorted(faqs, key=lambda faq: faq.sort_order)

    # ------------------------------------------------------------------
    # Pages

    async def get_pages(self) -> List[Page]:
        return await self.query_collection(self.collections.pages, transform_page)

    async def get_page(self, slug: str) -> Optional[Page]:
        return await self.get_by_slug(self.collections.pages, slug, transform_page)
