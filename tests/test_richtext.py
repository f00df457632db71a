from lakeshore.richtext import (
    RichTextSpan,
    extract_file_urls,
    parse_spans,
    rich_text_to_html,
    rich_text_to_plain,
)

from records import span


def test_bold_link_span_wraps_anchor_outside_formatting():
    html = rich_text_to_html([RichTextSpan(text="Hi", bold=True, link="https://x")])
    assert html == '<a href="https://x"><strong>Hi</strong></a>'


def test_annotations_nest_in_fixed_order():
    raw = span("all", bold=True, italic=True, underline=True, strikethrough=True, code=True)
    assert rich_text_to_html([raw]) == "<code><s><u><em><strong>all</strong></em></u></s></code>"


def test_spans_concatenate_and_newlines_become_breaks():
    raw = [span("Line one\n"), span("Line two", italic=True)]
    assert rich_text_to_html(raw) == "Line one<br><em>Line two</em>"


def test_text_is_escaped_for_html():
    assert rich_text_to_html([span("Fish & <chips>")]) == "Fish &amp; &lt;chips&gt;"


def test_non_text_spans_render_nothing():
    mention = {"type": "mention", "mention": {"type": "user"}, "plain_text": "@Jane", "annotations": {}}
    assert rich_text_to_html([mention, span("ok")]) == "ok"
    assert rich_text_to_plain([mention, span("ok")]) == "ok"


def test_plain_text_drops_formatting():
    raw = [span("Hello ", bold=True), span("world", link="https://example.com")]
    assert rich_text_to_plain(raw) == "Hello world"


def test_null_or_non_list_input_is_empty():
    assert rich_text_to_html(None) == ""
    assert rich_text_to_plain(None) == ""
    assert rich_text_to_html("not spans") == ""
    assert parse_spans({"type": "text"}) == []


def test_span_from_dict_reads_link_and_annotations():
    parsed = RichTextSpan.from_dict(span("Visit", underline=True, link="https://lakeshore.example"))
    assert parsed.text == "Visit"
    assert parsed.underline is True
    assert parsed.bold is False
    assert parsed.link == "https://lakeshore.example"


def test_extract_file_urls_handles_uploaded_and_external_files():
    payload = [
        {"type": "file", "name": "a.jpg", "file": {"url": "https://files.example/a.jpg", "expiry_time": "x"}},
        {"type": "external", "name": "b.jpg", "external": {"url": "https://cdn.example/b.jpg"}},
        {"type": "file", "name": "broken"},
        "garbage",
    ]
    assert extract_file_urls(payload) == ["https://files.example/a.jpg", "https://cdn.example/b.jpg"]
    assert extract_file_urls(None) == []
