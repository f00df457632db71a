import pytest

from lakeshore.properties import (
    TEXT_KINDS,
    CheckboxProperty,
    DateProperty,
    Extraction,
    FilesProperty,
    MultiSelectProperty,
    NumberProperty,
    RelationProperty,
    RichTextProperty,
    SelectProperty,
    TitleProperty,
    UnsupportedProperty,
    extract,
    get_property,
    get_rich_text_html,
    parse_property,
)

from records import (
    checkbox,
    date,
    files,
    multi_select,
    number,
    relation,
    rich_text,
    select,
    span,
    text,
    title,
    url,
)


@pytest.fixture
def properties():
    return {
        "Name": title("Luna"),
        "Notes": rich_text(span("First", bold=True), span(" second")),
        "Color": select("Seal"),
        "Tags": multi_select("care", "kittens"),
        "Price": number(2500),
        "Deposit Paid": checkbox(True),
        "Date of Birth": date("2024-04-01"),
        "Photos": files("https://cdn.example/1.jpg", "https://cdn.example/2.jpg"),
        "Mother": relation("cat-1", "cat-2"),
        "Video": url("https://youtube.example/watch"),
    }


def test_each_kind_is_coerced(properties):
    assert get_property(properties, "Name", "") == "Luna"
    assert get_property(properties, "Notes", "") == "First"
    assert get_property(properties, "Color", "") == "Seal"
    assert get_property(properties, "Tags", []) == ["care", "kittens"]
    assert get_property(properties, "Price", None) == 2500
    assert get_property(properties, "Deposit Paid", False) is True
    assert get_property(properties, "Date of Birth", None) == "2024-04-01"
    assert get_property(properties, "Photos", []) == [
        "https://cdn.example/1.jpg",
        "https://cdn.example/2.jpg",
    ]
    assert get_property(properties, "Mother", []) == ["cat-1", "cat-2"]
    assert get_property(properties, "Video", "") == "https://youtube.example/watch"


def test_absent_property_falls_back_to_default(properties):
    assert get_property(properties, "Missing", "fallback") == "fallback"
    assert get_property(None, "Name", "fallback") == "fallback"


@pytest.mark.parametrize(
    "payload, default",
    [
        ({"type": "title", "title": []}, "Unnamed"),
        (rich_text(), "blank"),
        (select(None), "General"),
        (multi_select(), ["none"]),
        (number(None), 0),
        (date(None), None),
        (files(), []),
        (relation(), []),
        (url(None), ""),
    ],
)
def test_empty_values_fall_back_to_default(payload, default):
    assert get_property({"Field": payload}, "Field", default) == default


def test_mistyped_value_falls_back_to_default():
    props = {"Sort Order": text("first"), "Photos": select("one")}
    assert get_property(props, "Sort Order", 0) == 0
    assert get_property(props, "Photos", []) == []


def test_nullable_field_of_wrong_kind_falls_back_to_default():
    props = {
        "Price": text("$2,500"),
        "SEO Description": multi_select("a", "b"),
        "Go Home Date": number(5),
        "Reserved By": rich_text(span("The Smiths")),
    }
    assert get_property(props, "Price", None, kind=NumberProperty) is None
    assert get_property(props, "SEO Description", None, kind=TEXT_KINDS) is None
    assert get_property(props, "Go Home Date", None, kind=DateProperty) is None
    assert get_property(props, "Missing", None, kind=DateProperty) is None
    assert get_property(props, "Reserved By", None, kind=TEXT_KINDS) == "The Smiths"
    assert get_property({"Price": number(2500)}, "Price", None, kind=NumberProperty) == 2500


def test_multi_select_skips_options_without_a_name():
    payload = {"type": "multi_select", "multi_select": [{"name": None}, {"name": "care"}, {}]}
    assert parse_property(payload) == MultiSelectProperty(names=("care",))


def test_malformed_payloads_never_raise():
    props = {
        "Broken Select": {"type": "select", "select": "oops"},
        "Broken Number": {"type": "number", "number": "12"},
        "Broken Relation": {"type": "relation", "relation": [{"no_id": True}]},
        "Broken Date": {"type": "date", "date": "2024-01-01"},
        "Unknown": {"type": "formula", "formula": {"string": "x"}},
        "Not A Dict": ["nope"],
    }
    for key in props:
        assert get_property(props, key, "default") == "default"


def test_parse_property_returns_tagged_values(properties):
    assert isinstance(parse_property(properties["Name"]), TitleProperty)
    assert isinstance(parse_property(properties["Notes"]), RichTextProperty)
    assert parse_property(properties["Color"]) == SelectProperty(name="Seal")
    assert parse_property(properties["Deposit Paid"]) == CheckboxProperty(checked=True)
    assert parse_property(properties["Mother"]) == RelationProperty(ids=("cat-1", "cat-2"))
    assert isinstance(parse_property(properties["Photos"]), FilesProperty)
    assert parse_property({"type": "rollup"}) == UnsupportedProperty(raw_kind="rollup")


def test_extract_reports_why_a_value_is_missing(properties):
    found = extract(properties, "Color")
    assert found == Extraction(value="Seal", found=True)
    assert extract(properties, "Nope").reason == "absent"
    assert extract({"Color": select(None)}, "Color").reason == "empty"
    assert extract({"Odd": {"type": "people"}}, "Odd").reason == "unsupported:people"
    assert extract(properties, "Nope").or_default("x") == "x"


def test_unchecked_checkbox_is_a_value_not_missing():
    assert get_property({"Published": checkbox(False)}, "Published", True) is False


def test_rich_text_html_only_for_rich_text_kind(properties):
    assert get_rich_text_html(properties, "Notes") == "<strong>First</strong> second"
    assert get_rich_text_html(properties, "Name") == ""
    assert get_rich_text_html(properties, "Missing") == ""
