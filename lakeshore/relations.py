"""Attach parent cats to kittens.

Kittens only carry parent ids after transformation. Resolution fetches
each distinct parent once, concurrently, and returns copies with
``mother``/``father`` filled in; the inputs are never modified.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from typing import Awaitable, Callable, Dict, Iterable, List, Optional, Sequence, TypeVar, Union

from .models import Cat, Kitten, PastKitten

logger = logging.getLogger(__name__)

Child = TypeVar("Child", Kitten, PastKitten)
FetchCat = Callable[[str], Awaitable[Optional[Cat]]]


def parent_ids(children: Iterable[Union[Kitten, PastKitten]]) -> List[str]:
    """Return the distinct non-empty parent ids in first-seen order."""

    seen: Dict[str, None] = {}
    for child in children:
        for parent_id in (child.mother_id, child.father_id):
            if parent_id:
                seen.setdefault(parent_id, None)
    return list(seen)


async def fetch_parents(ids: Sequence[str], fetch_cat: FetchCat) -> Dict[str, Cat]:
    """Fetch every id concurrently and index the cats that were found by requested id."""

    if not ids:
        return {}
    cats = await asyncio.gather(*(fetch_cat(parent_id) for parent_id in ids))
    return {parent_id: cat for parent_id, cat in zip(ids, cats) if cat is not None}


def _attach(child: Child, lookup: Dict[str, Cat]) -> Child:
    return replace(
        child,
        mother=lookup.get(child.mother_id) if child.mother_id else None,
        father=lookup.get(child.father_id) if child.father_id else None,
    )


async def resolve_parents(children: Sequence[Child], fetch_cat: FetchCat) -> List[Child]:
    """Resolve parents for a batch, fetching each referenced cat at most once."""

    ids = parent_ids(children)
    logger.debug("Resolving %s parent cats for %s kittens", len(ids), len(children))
    lookup = await fetch_parents(ids, fetch_cat)
    return [_attach(child, lookup) for child in children]


async def resolve_kitten_parents(kitten: Kitten, fetch_cat: FetchCat) -> Kitten:
    resolved = await resolve_parents([kitten], fetch_cat)
    return resolved[0]


async def resolve_kittens_parents(kittens: Sequence[Kitten], fetch_cat: FetchCat) -> List[Kitten]:
    return await resolve_parents(kittens, fetch_cat)


async def resolve_past_kittens_parents(
    kittens: Sequence[PastKitten], fetch_cat: FetchCat
) -> List[PastKitten]:
    return await resolve_parents(kittens, fetch_cat)
