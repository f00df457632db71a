"""Command line entrypoints for inspecting cattery content."""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
from typing import Any, Iterable, Optional

from . import seo
from .config import ContentSettings, load_content_settings, load_site_settings
from .content import ContentRepository
from .models import KittenStatus
from .notion import NotionClient
from .relations import resolve_kitten_parents, resolve_kittens_parents, resolve_past_kittens_parents

LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Lakeshore Ragdolls content commands")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    cats_parser = subparsers.add_parser("cats", help="List published cats in display order")
    cats_parser.set_defaults(func=handle_cats)

    cat_parser = subparsers.add_parser("cat", help="Show one cat by slug")
    cat_parser.add_argument("slug")
    cat_parser.add_argument("--seo", action="store_true", help="Print page metadata instead")
    cat_parser.set_defaults(func=handle_cat)

    kittens_parser = subparsers.add_parser("kittens", help="List published kittens")
    kittens_parser.add_argument(
        "--status",
        choices=[status.value for status in KittenStatus],
        help="Only list kittens with this status",
    )
    kittens_parser.add_argument(
        "--with-parents", action="store_true", help="Resolve mother and father"
    )
    kittens_parser.set_defaults(func=handle_kittens)

    kitten_parser = subparsers.add_parser("kitten", help="Show one kitten by slug")
    kitten_parser.add_argument("slug")
    kitten_parser.add_argument(
        "--with-parents", action="store_true", help="Resolve mother and father"
    )
    kitten_parser.add_argument("--seo", action="store_true", help="Print page metadata instead")
    kitten_parser.set_defaults(func=handle_kitten)

    past_parser = subparsers.add_parser("past-kittens", help="List kittens that went home")
    past_parser.add_argument(
        "--with-parents", action="store_true", help="Resolve mother and father"
    )
    past_parser.set_defaults(func=handle_past_kittens)

    blog_parser = subparsers.add_parser("blog", help="List blog posts, newest first")
    blog_parser.add_argument("--category", help="Only list posts in this category")
    blog_parser.set_defaults(func=handle_blog)

    post_parser = subparsers.add_parser("post", help="Show one blog post by slug")
    post_parser.add_argument("slug")
    post_parser.add_argument("--seo", action="store_true", help="Print page metadata instead")
    post_parser.set_defaults(func=handle_post)

    faq_parser = subparsers.add_parser("faq", help="List FAQs in display order")
    faq_parser.add_argument("--category", help="Only list questions in this category")
    faq_parser.set_defaults(func=handle_faq)

    pages_parser = subparsers.add_parser("pages", help="List static pages")
    pages_parser.set_defaults(func=handle_pages)

    page_parser = subparsers.add_parser("page", help="Show one static page by slug")
    page_parser.add_argument("slug")
    page_parser.add_argument("--seo", action="store_true", help="Print page metadata instead")
    page_parser.set_defaults(func=handle_page)

    return parser


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def _print_items(items: Iterable[Any]) -> int:
    _print_json([item.to_dict() for item in items])
    return 0


def _print_single(item: Optional[Any], slug: str, kind: str, args: argparse.Namespace, builder=None) -> int:
    if item is None:
        LOGGER.error("No published %s found for slug %r", kind, slug)
        return 1
    if builder is not None and getattr(args, "seo", False):
        _print_json(builder(item, load_site_settings()).to_dict())
        return 0
    _print_json(item.to_dict())
    return 0


async def handle_cats(args: argparse.Namespace, repository: ContentRepository) -> int:
    return _print_items(await repository.get_cats())


async def handle_cat(args: argparse.Namespace, repository: ContentRepository) -> int:
    cat = await repository.get_cat_by_slug(args.slug)
    return _print_single(cat, args.slug, "cat", args, seo.cat_seo)


async def handle_kittens(args: argparse.Namespace, repository: ContentRepository) -> int:
    status = KittenStatus(args.status) if args.status else None
    kittens = await repository.get_kittens(status)
    if args.with_parents:
        kittens = await resolve_kittens_parents(kittens, repository.get_cat_by_id)
    return _print_items(kittens)


async def handle_kitten(args: argparse.Namespace, repository: ContentRepository) -> int:
    kitten = await repository.get_kitten_by_slug(args.slug)
    if kitten is not None and args.with_parents:
        kitten = await resolve_kitten_parents(kitten, repository.get_cat_by_id)
    return _print_single(kitten, args.slug, "kitten", args, seo.kitten_seo)


async def handle_past_kittens(args: argparse.Namespace, repository: ContentRepository) -> int:
    kittens = await repository.get_past_kittens()
    if args.with_parents:
        kittens = await resolve_past_kittens_parents(kittens, repository.get_cat_by_id)
    return _print_items(kittens)


async def handle_blog(args: argparse.Namespace, repository: ContentRepository) -> int:
    if args.category:
        posts = await repository.get_blog_posts_by_category(args.category)
    else:
        posts = await repository.get_blog_posts()
    return _print_items(posts)


async def handle_post(args: argparse.Namespace, repository: ContentRepository) -> int:
    post = await repository.get_blog_post_by_slug(args.slug)
    return _print_single(post, args.slug, "blog post", args, seo.blog_post_seo)


async def handle_faq(args: argparse.Namespace, repository: ContentRepository) -> int:
    if args.category:
        faqs = await repository.get_faqs_by_category(args.category)
    else:
        faqs = await repository.get_faqs()
    return _print_items(faqs)


async def handle_pages(args: argparse.Namespace, repository: ContentRepository) -> int:
    return _print_items(await repository.get_pages())


async def handle_page(args: argparse.Namespace, repository: ContentRepository) -> int:
    page = await repository.get_page(args.slug)
    return _print_single(page, args.slug, "page", args, seo.page_seo)


def open_store(settings: ContentSettings) -> NotionClient:
    return NotionClient(settings)


async def run(args: argparse.Namespace) -> int:
    settings = load_content_settings()
    async with open_store(settings) as store:
        repository = ContentRepository(store, settings.collections)
        return await args.func(args, repository)


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    status = asyncio.run(run(args))
    if status:
        raise SystemExit(status)


if __name__ == "__main__":
    main()
