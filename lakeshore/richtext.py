"""Rich-text spans from the content store and their HTML/plain renderings."""
from __future__ import annotations

from dataclasses import dataclass
from html import escape as html_escape
from typing import Any, Iterable, List, Optional, Sequence


@dataclass(frozen=True)
class RichTextSpan:
    """One formatted run of text.

    Only ``text`` spans carry renderable content; mentions and equations
    are kept so their plain text is available but render as nothing.
    """

    text: str
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strikethrough: bool = False
    code: bool = False
    link: Optional[str] = None
    type: str = "text"
    plain_text: Optional[str] = None

    @property
    def plain(self) -> str:
        return self.plain_text if self.plain_text is not None else self.text

    @classmethod
    def from_dict(cls, payload: dict) -> "RichTextSpan":
        span_type = str(payload.get("type") or "text")
        body = payload.get(span_type) if isinstance(payload.get(span_type), dict) else {}
        annotations = payload.get("annotations")
        if not isinstance(annotations, dict):
            annotations = {}

        content = body.get("content")
        plain_text = payload.get("plain_text")
        if not isinstance(content, str):
            content = plain_text if isinstance(plain_text, str) else ""

        link_info = body.get("link")
        link = None
        if isinstance(link_info, dict) and isinstance(link_info.get("url"), str):
            link = link_info["url"]

        return cls(
            text=content,
            bold=bool(annotations.get("bold")),
            italic=bool(annotations.get("italic")),
            underline=bool(annotations.get("underline")),
            strikethrough=bool(annotations.get("strikethrough")),
            code=bool(annotations.get("code")),
            link=link,
            type=span_type,
            plain_text=plain_text if isinstance(plain_text, str) else None,
        )


def parse_spans(items: Any) -> List[RichTextSpan]:
    """Normalize raw API spans (or ready-made spans) into ``RichTextSpan`` objects."""

    if not isinstance(items, (list, tuple)):
        return []
    spans: List[RichTextSpan] = []
    for item in items:
        if isinstance(item, RichTextSpan):
            spans.append(item)
        elif isinstance(item, dict):
            spans.append(RichTextSpan.from_dict(item))
    return spans


def _span_to_html(span: RichTextSpan) -> str:
    if span.type != "text":
        return ""
    text = html_escape(span.text, quote=False)
    if span.bold:
        text = f"<strong>{text}</strong>"
    if span.italic:
        text = f"<em>{text}</em>"
    if span.underline:
        text = f"<u>{text}</u>"
    if span.strikethrough:
        text = f"<s>{text}</s>"
    if span.code:
        text = f"<code>{text}</code>"
    if span.link:
        text = f'<a href="{html_escape(span.link)}">{text}</a>'
    return text


def rich_text_to_html(items: Sequence[Any] | None) -> str:
    """Render spans as inline HTML; newlines become ``<br>``."""

    html = "".join(_span_to_html(span) for span in parse_spans(items))
    return html.replace("\n", "<br>")


def rich_text_to_plain(items: Sequence[Any] | None) -> str:
    return "".join(span.text for span in parse_spans(items) if span.type == "text")


def extract_file_urls(files: Iterable[Any] | None) -> List[str]:
    """Return URLs for both uploaded and externally hosted files, in order."""

    if not isinstance(files, (list, tuple)):
        return []
    urls: List[str] = []
    for entry in files:
        if not isinstance(entry, dict):
            continue
        kind = entry.get("type")
        if kind not in ("file", "external"):
            continue
        info = entry.get(kind)
        if isinstance(info, dict) and isinstance(info.get("url"), str) and info["url"]:
            urls.append(info["url"])
    return urls
