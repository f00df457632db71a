import logging

import pytest

from lakeshore.config import CollectionIds
from lakeshore.content import ContentRepository
from lakeshore.models import KittenStatus

from records import (
    FakeStore,
    cat_record,
    date,
    kitten_record,
    number,
    page,
    select,
    text,
    title,
)

COLLECTIONS = CollectionIds(
    cats="db-cats",
    kittens="db-kittens",
    past_kittens="db-past",
    blog="db-blog",
    faq="db-faq",
    pages="db-pages",
)

PUBLISHED = {"property": "Published", "checkbox": {"equals": True}}


def blog_record(post_id: str, name: str, published: str | None) -> dict:
    properties = {"Title": title(name)}
    if published:
        properties["Published Date"] = date(published)
    return page(post_id, **properties)


@pytest.mark.asyncio
async def test_list_query_requires_published_flag():
    store = FakeStore({"db-pages": [page("p1", Title=title("About"))]})
    repository = ContentRepository(store, COLLECTIONS)

    pages = await repository.get_pages()

    assert [item.slug for item in pages] == ["about"]
    assert store.queries == [("db-pages", PUBLISHED)]


@pytest.mark.asyncio
async def test_unconfigured_collection_returns_empty_and_warns(caplog):
    store = FakeStore()
    repository = ContentRepository(store, CollectionIds())

    with caplog.at_level(logging.WARNING, logger="lakeshore.content"):
        cats = await repository.get_cats()

    assert cats == []
    assert store.queries == []
    assert "not configured" in caplog.text
    assert any(record.levelno == logging.WARNING for record in caplog.records)


@pytest.mark.asyncio
async def test_store_failure_degrades_to_empty_and_none(caplog):
    store = FakeStore(fail=True)
    repository = ContentRepository(store, COLLECTIONS)

    with caplog.at_level(logging.ERROR, logger="lakeshore.content"):
        assert await repository.get_faqs() == []
        assert await repository.get_blog_post_by_slug("hello") is None
        assert await repository.get_cat_by_id("cat-1") is None

    assert "Error querying database db-faq" in caplog.text
    assert 'Error fetching by slug "hello"' in caplog.text


@pytest.mark.asyncio
async def test_cats_sorted_by_sort_order():
    store = FakeStore(
        {
            "db-cats": [
                cat_record("c3", "Third", 3),
                cat_record("c1", "First", 1),
                cat_record("c2", "Second", 2),
            ]
        }
    )
    cats = await ContentRepository(store, COLLECTIONS).get_cats()
    assert [cat.name for cat in cats] == ["First", "Second", "Third"]


@pytest.mark.asyncio
async def test_faqs_sorted_and_filtered_by_category():
    store = FakeStore(
        {
            "db-faq": [
                page("f2", Question=title("How much?"), **{"Sort Order": number(2)}, Category=select("Pricing")),
                page("f1", Question=title("Deposit?"), **{"Sort Order": number(1)}, Category=select("Pricing")),
            ]
        }
    )
    repository = ContentRepository(store, COLLECTIONS)

    faqs = await repository.get_faqs_by_category("Pricing")

    assert [faq.id for faq in faqs] == ["f1", "f2"]
    assert store.queries[-1] == (
        "db-faq",
        {"and": [PUBLISHED, {"property": "Category", "select": {"equals": "Pricing"}}]},
    )


@pytest.mark.asyncio
async def test_blog_posts_newest_first_with_stable_ties():
    store = FakeStore(
        {
            "db-blog": [
                blog_record("old", "Old", "2023-01-01"),
                blog_record("tie-a", "Tie A", "2024-05-01"),
                blog_record("undated-looking", "Bad Date", None),
                blog_record("tie-b", "Tie B", "2024-05-01"),
                blog_record("new", "New", "2025-02-01T09:30:00.000Z"),
            ]
        }
    )
    posts = await ContentRepository(store, COLLECTIONS).get_blog_posts()
    ordered = [post.id for post in posts]
    # the post without a date is stamped with "now" and therefore sorts first
    assert ordered == ["undated-looking", "new", "tie-a", "tie-b", "old"]


@pytest.mark.asyncio
async def test_blog_posts_with_unparseable_dates_sort_last():
    store = FakeStore(
        {
            "db-blog": [
                page("bad", Title=title("Bad"), **{"Published Date": text("someday")}),
                blog_record("good", "Good", "2024-01-01"),
            ]
        }
    )
    posts = await ContentRepository(store, COLLECTIONS).get_blog_posts_by_category("Care")
    assert [post.id for post in posts] == ["good", "bad"]
    assert store.queries[-1][1]["and"][1] == {"property": "Category", "select": {"equals": "Care"}}


@pytest.mark.asyncio
async def test_available_kittens_filter_by_status_before_transform():
    store = FakeStore({"db-kittens": [kitten_record("k1", "Pebble")]})
    repository = ContentRepository(store, COLLECTIONS)

    kittens = await repository.get_available_kittens()

    assert [kitten.name for kitten in kittens] == ["Pebble"]
    assert store.queries == [
        (
            "db-kittens",
            {"and": [PUBLISHED, {"property": "Status", "select": {"equals": "Available"}}]},
        )
    ]


@pytest.mark.asyncio
async def test_get_kittens_without_status_only_filters_published():
    store = FakeStore({"db-kittens": []})
    await ContentRepository(store, COLLECTIONS).get_kittens()
    assert store.queries == [("db-kittens", PUBLISHED)]


@pytest.mark.asyncio
async def test_get_kittens_with_unknown_status_matches_nothing(caplog):
    store = FakeStore({"db-kittens": [kitten_record("k1", "Pebble")]})

    with caplog.at_level(logging.WARNING, logger="lakeshore.content"):
        kittens = await ContentRepository(store, COLLECTIONS).get_kittens("Lost")

    assert kittens == []
    assert store.queries == []
    assert "Unknown kitten status 'Lost'" in caplog.text


@pytest.mark.asyncio
async def test_get_by_slug_filters_on_slug_and_returns_first_match():
    store = FakeStore(
        {"db-kittens": [kitten_record("k1", "Pebble"), kitten_record("k2", "Pebble Two")]}
    )
    repository = ContentRepository(store, COLLECTIONS)

    kitten = await repository.get_kitten_by_slug("pebble")

    assert kitten is not None and kitten.id == "k1"
    assert store.queries == [
        (
            "db-kittens",
            {"and": [PUBLISHED, {"property": "Slug", "rich_text": {"equals": "pebble"}}]},
        )
    ]


@pytest.mark.asyncio
async def test_get_by_slug_returns_none_for_empty_slug_or_missing_record():
    store = FakeStore({"db-cats": []})
    repository = ContentRepository(store, COLLECTIONS)

    assert await repository.get_cat_by_slug("") is None
    assert store.queries == []
    assert await repository.get_cat_by_slug("ghost") is None
    assert await ContentRepository(store, CollectionIds()).get_page("about") is None


@pytest.mark.asyncio
async def test_get_cat_by_id_transforms_retrieved_page():
    store = FakeStore(pages={"cat-1": cat_record("cat-1", "Luna")})
    repository = ContentRepository(store, COLLECTIONS)

    cat = await repository.get_cat_by_id("cat-1")

    assert cat is not None and cat.name == "Luna"
    assert await repository.get_cat_by_id("") is None
    assert await repository.get_cat_by_id("missing") is None


@pytest.mark.asyncio
async def test_past_kittens_and_status_values():
    store = FakeStore({"db-past": [kitten_record("p1", "Biscuit", mother="cat-1")]})
    past = await ContentRepository(store, COLLECTIONS).get_past_kittens()
    assert past[0].mother_id == "cat-1"
    assert KittenStatus("Sold") is KittenStatus.SOLD
