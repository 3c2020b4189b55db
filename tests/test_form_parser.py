import pytest

from app.forms.form_parser import (
    MAX_FORM_INDEX,
    FormParseError,
    parse_form,
    split_field_name,
)
from app.services.quotations.quotation_submission import QUOTATION_NUMERIC_FIELDS


def test_split_field_name():
    assert split_field_name("items[0].attributes[1].key") == [
        "items", 0, "attributes", 1, "key",
    ]
    assert split_field_name("vessel") == ["vessel"]


@pytest.mark.parametrize("name", ["", "items[x]", "items[0]]", "a..b", "[0]x["])
def test_split_field_name_rejects_malformed(name):
    with pytest.raises(FormParseError):
        split_field_name(name)


def test_parse_form_builds_nested_quotation_state():
    items = [
        ("quotation_request_ref", "QR-1"),
        ("quotation_request_vessel", "MV Aegean Star"),
        ("quotation_request_line_items[0].product_id", "new"),
        ("quotation_request_line_items[0].new_product_name", "Deck Cleaner"),
        ("quotation_request_line_items[0].quotation_request_line_item_quantity", "3"),
        ("quotation_request_line_items[0].attributes[0].key", "Size"),
        ("quotation_request_line_items[0].attributes[0].value", "5L"),
        ("quotation_request_line_items[1].product_id", "abc"),
        ("quotation_request_line_items[1].quotation_request_line_item_quantity", " 12 "),
    ]

    parsed = parse_form(items, numeric_fields=QUOTATION_NUMERIC_FIELDS)

    assert parsed["quotation_request_ref"] == "QR-1"
    first, second = parsed["quotation_request_line_items"]
    assert first["product_id"] == "new"
    assert first["quotation_request_line_item_quantity"] == 3
    assert first["attributes"] == [{"key": "Size", "value": "5L"}]
    assert second["quotation_request_line_item_quantity"] == 12


def test_parse_form_blank_values_become_none():
    parsed = parse_form([("vessel", "   "), ("ref", "")])

    assert parsed == {"vessel": None, "ref": None}


def test_parse_form_fills_index_gaps_with_none():
    parsed = parse_form([("rows[2].key", "Size")])

    assert parsed == {"rows": [None, None, {"key": "Size"}]}


def test_parse_form_repeated_plain_keys_collect_into_list():
    parsed = parse_form([("tag", "a"), ("tag", "b"), ("tag", "c")])

    assert parsed == {"tag": ["a", "b", "c"]}


def test_parse_form_leaves_non_numeric_quantity_for_the_schema():
    parsed = parse_form([("qty", "lots")], numeric_fields=["qty"])

    assert parsed == {"qty": "lots"}


def test_parse_form_rejects_value_and_group_under_one_name():
    with pytest.raises(FormParseError):
        parse_form([("item", "x"), ("item.key", "Size")])


def test_parse_form_rejects_mixed_index_and_name():
    with pytest.raises(FormParseError):
        parse_form([("item[0]", "x"), ("item.key", "Size")])


def test_parse_form_rejects_index_at_ceiling():
    name = f"quotation_request_line_items[{MAX_FORM_INDEX}].product_id"

    with pytest.raises(FormParseError):
        parse_form([(name, "x")])


def test_parse_form_rejects_huge_index_without_building_list():
    with pytest.raises(FormParseError):
        parse_form([("quotation_request_line_items[5000000].product_id", "x")])


def test_parse_form_rejects_index_with_too_many_digits():
    with pytest.raises(FormParseError):
        parse_form([("rows[" + "9" * 5000 + "].key", "Size")])


def test_parse_form_accepts_last_index_below_ceiling():
    parsed = parse_form([(f"rows[{MAX_FORM_INDEX - 1}].key", "Size")])

    assert len(parsed["rows"]) == MAX_FORM_INDEX
    assert parsed["rows"][-1] == {"key": "Size"}


def test_parse_form_honours_explicit_max_index():
    with pytest.raises(FormParseError):
        parse_form([("rows[3].key", "Size")], max_index=3)
