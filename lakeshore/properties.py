"""Typed property values read from content-store records.

Each record carries a property bag keyed by field name where every value
is tagged with its field kind (``title``, ``select``, ``files``...).
:func:`parse_property` turns a raw payload into one of the value classes
below and :func:`extract` reads it back as an :class:`Extraction`, which
is either found or missing. Nothing in this module raises on bad input:
malformed payloads become :class:`UnsupportedProperty` and extract as
missing, so callers always fall back to their own default.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Mapping, Optional, Tuple, Type, TypeVar, Union

from .richtext import RichTextSpan, extract_file_urls, parse_spans, rich_text_to_html

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Extraction(Generic[T]):
    """Outcome of reading a property: a value, or the reason it is missing."""

    value: Optional[T] = None
    found: bool = False
    reason: str = ""

    @classmethod
    def of(cls, value: T) -> "Extraction[T]":
        return cls(value=value, found=True)

    @classmethod
    def missing(cls, reason: str) -> "Extraction[Any]":
        return cls(reason=reason)

    def or_default(self, default: T) -> T:
        return self.value if self.found else default  # type: ignore[return-value]


class PropertyValue:
    kind = ""

    def extract(self) -> Extraction[Any]:
        raise NotImplementedError


def _first_plain(spans: Tuple[RichTextSpan, ...]) -> Extraction[str]:
    if not spans:
        return Extraction.missing("empty")
    return Extraction.of(spans[0].plain)


@dataclass(frozen=True)
class TitleProperty(PropertyValue):
    spans: Tuple[RichTextSpan, ...] = ()
    kind = "title"

    def extract(self) -> Extraction[str]:
        return _first_plain(self.spans)


@dataclass(frozen=True)
class RichTextProperty(PropertyValue):
    spans: Tuple[RichTextSpan, ...] = ()
    kind = "rich_text"

    def extract(self) -> Extraction[str]:
        return _first_plain(self.spans)

    def to_html(self) -> str:
        return rich_text_to_html(self.spans)


@dataclass(frozen=True)
class SelectProperty(PropertyValue):
    name: Optional[str] = None
    kind = "select"

    def extract(self) -> Extraction[str]:
        if self.name is None:
            return Extraction.missing("empty")
        return Extraction.of(self.name)


@dataclass(frozen=True)
class MultiSelectProperty(PropertyValue):
    names: Tuple[str, ...] = ()
    kind = "multi_select"

    def extract(self) -> Extraction[list]:
        if not self.names:
            return Extraction.missing("empty")
        return Extraction.of(list(self.names))


@dataclass(frozen=True)
class NumberProperty(PropertyValue):
    number: Optional[float] = None
    kind = "number"

    def extract(self) -> Extraction[float]:
        if self.number is None:
            return Extraction.missing("empty")
        return Extraction.of(self.number)


@dataclass(frozen=True)
class CheckboxProperty(PropertyValue):
    checked: bool = False
    kind = "checkbox"

    def extract(self) -> Extraction[bool]:
        return Extraction.of(self.checked)


@dataclass(frozen=True)
class DateProperty(PropertyValue):
    start: Optional[str] = None
    end: Optional[str] = None
    kind = "date"

    def extract(self) -> Extraction[str]:
        if not self.start:
            return Extraction.missing("empty")
        return Extraction.of(self.start)


@dataclass(frozen=True)
class FilesProperty(PropertyValue):
    urls: Tuple[str, ...] = ()
    kind = "files"

    def extract(self) -> Extraction[list]:
        if not self.urls:
            return Extraction.missing("empty")
        return Extraction.of(list(self.urls))


@dataclass(frozen=True)
class RelationProperty(PropertyValue):
    ids: Tuple[str, ...] = ()
    kind = "relation"

    def extract(self) -> Extraction[list]:
        if not self.ids:
            return Extraction.missing("empty")
        return Extraction.of(list(self.ids))


@dataclass(frozen=True)
class UrlProperty(PropertyValue):
    url: Optional[str] = None
    kind = "url"

    def extract(self) -> Extraction[str]:
        if self.url is None:
            return Extraction.missing("empty")
        return Extraction.of(self.url)


@dataclass(frozen=True)
class UnsupportedProperty(PropertyValue):
    """A payload of an unknown kind, or one that did not have the expected shape."""

    raw_kind: str = ""
    kind = "unsupported"

    def extract(self) -> Extraction[Any]:
        return Extraction.missing(f"unsupported:{self.raw_kind}")


def _parse_title(payload: dict) -> PropertyValue:
    return TitleProperty(spans=tuple(parse_spans(payload.get("title"))))


def _parse_rich_text(payload: dict) -> PropertyValue:
    return RichTextProperty(spans=tuple(parse_spans(payload.get("rich_text"))))


def _parse_select(payload: dict) -> PropertyValue:
    option = payload.get("select")
    if option is None:
        return SelectProperty()
    name = option["name"]
    if not isinstance(name, str):
        raise TypeError("select name must be a string")
    return SelectProperty(name=name)


def _parse_multi_select(payload: dict) -> PropertyValue:
    options = payload.get("multi_select") or []
    names = (option.get("name") for option in options)
    return MultiSelectProperty(names=tuple(name for name in names if isinstance(name, str)))


def _parse_number(payload: dict) -> PropertyValue:
    number = payload.get("number")
    if number is not None and (isinstance(number, bool) or not isinstance(number, (int, float))):
        raise TypeError("number must be numeric")
    return NumberProperty(number=number)


def _parse_checkbox(payload: dict) -> PropertyValue:
    checked = payload.get("checkbox")
    if not isinstance(checked, bool):
        raise TypeError("checkbox must be a boolean")
    return CheckboxProperty(checked=checked)


def _parse_date(payload: dict) -> PropertyValue:
    info = payload.get("date")
    if info is None:
        return DateProperty()
    start = info.get("start")
    end = info.get("end")
    return DateProperty(
        start=start if isinstance(start, str) else None,
        end=end if isinstance(end, str) else None,
    )


def _parse_files(payload: dict) -> PropertyValue:
    return FilesProperty(urls=tuple(extract_file_urls(payload.get("files"))))


def _parse_relation(payload: dict) -> PropertyValue:
    relations = payload.get("relation") or []
    return RelationProperty(ids=tuple(str(entry["id"]) for entry in relations))


def _parse_url(payload: dict) -> PropertyValue:
    url = payload.get("url")
    return UrlProperty(url=url if isinstance(url, str) else None)


_PARSERS: Dict[str, Callable[[dict], PropertyValue]] = {
    "title": _parse_title,
    "rich_text": _parse_rich_text,
    "select": _parse_select,
    "multi_select": _parse_multi_select,
    "number": _parse_number,
    "checkbox": _parse_checkbox,
    "date": _parse_date,
    "files": _parse_files,
    "relation": _parse_relation,
    "url": _parse_url,
}


def parse_property(payload: Any) -> PropertyValue:
    """Convert one raw property payload into its typed value."""

    if isinstance(payload, PropertyValue):
        return payload
    if not isinstance(payload, dict):
        return UnsupportedProperty(raw_kind=type(payload).__name__)
    kind = str(payload.get("type") or "")
    parser = _PARSERS.get(kind)
    if parser is None:
        return UnsupportedProperty(raw_kind=kind)
    try:
        return parser(payload)
    except (AttributeError, KeyError, TypeError, ValueError) as error:
        logger.debug("Malformed %s property payload: %s", kind, error)
        return UnsupportedProperty(raw_kind=kind)


def extract(properties: Mapping[str, Any] | None, key: str) -> Extraction[Any]:
    """Read the property ``key`` from a property bag."""

    if not isinstance(properties, Mapping) or key not in properties:
        return Extraction.missing("absent")
    return parse_property(properties[key]).extract()


KindSpec = Union[Type[PropertyValue], Tuple[Type[PropertyValue], ...]]

TEXT_KINDS = (TitleProperty, RichTextProperty)


def _matches_default(value: Any, default: Any) -> bool:
    if default is None:
        return True
    if isinstance(default, bool):
        return isinstance(value, bool)
    if isinstance(default, (int, float)):
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if isinstance(default, (list, tuple)):
        return isinstance(value, (list, tuple))
    return isinstance(value, type(default))


def get_property(
    properties: Mapping[str, Any] | None,
    key: str,
    default: T,
    kind: KindSpec | None = None,
) -> T:
    """Return the value of ``key`` or ``default`` when absent, empty or mistyped.

    Without ``kind`` the value is checked against the type of ``default``.
    A ``None`` default carries no type, so nullable fields pass the value
    class (or a tuple of them) they accept as ``kind``; any other kind of
    property then reads as the default.
    """

    if kind is not None:
        if not isinstance(properties, Mapping) or key not in properties:
            return default
        parsed = parse_property(properties[key])
        if not isinstance(parsed, kind):
            logger.debug("Property %r has unexpected kind %s", key, parsed.kind)
            return default
        return parsed.extract().or_default(default)

    value = extract(properties, key).or_default(default)
    if not _matches_default(value, default):
        logger.debug("Property %r has unexpected type %s", key, type(value).__name__)
        return default
    return value


def get_rich_text_html(properties: Mapping[str, Any] | None, key: str) -> str:
    """Render a rich-text property as HTML; any other kind renders empty."""

    if not isinstance(properties, Mapping) or key not in properties:
        return ""
    value = parse_property(properties[key])
    if not isinstance(value, RichTextProperty):
        return ""
    return value.to_html()
