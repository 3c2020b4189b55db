import pytest

from app.core.config import MAX_LINE_ITEMS
from app.utils.ids import generate_uuid
from app.validation.quotation_rules import (
    MSG_NAME_REPEATED,
    MSG_NAME_TAKEN,
    unique_attribute_keys_rule,
)
from app.validation.quotation_validator import build_quotation_validator
from app.validation.snapshot import ExistingProduct, QuotationSnapshot

COMPANY = generate_uuid()
OTHER_COMPANY = generate_uuid()
EMPLOYEE = generate_uuid()
OUTSIDER = generate_uuid()
CATEGORY = generate_uuid()
ROPE = generate_uuid()
PAINT = generate_uuid()


@pytest.fixture()
def snapshot():
    return QuotationSnapshot(
        existing_products=[
            ExistingProduct(id=ROPE, name="Mooring Rope", attributes={"Diameter": "24mm"}),
            ExistingProduct(id=PAINT, name="Marine Paint"),
        ],
        category_ids={CATEGORY},
        company_ids={COMPANY, OTHER_COMPANY},
        employee_companies={EMPLOYEE: COMPANY, OUTSIDER: OTHER_COMPANY},
    )


def item(product_id=ROPE, quantity=1, attributes=None, **extra):
    data = {
        "product_id": product_id,
        "quotation_request_line_item_quantity": quantity,
        "attributes": attributes or [],
    }
    data.update(extra)
    return data


def new_item(name, category_id=CATEGORY, **extra):
    return item(
        product_id="new",
        new_product_name=name,
        new_product_category_id=category_id,
        **extra,
    )


def form(*line_items, **overrides):
    data = {
        "quotation_request_ref": "QR-7",
        "quotation_request_date": "2024-05-02",
        "quotation_request_vessel": "MV Nordic Tern",
        "company_id": COMPANY,
        "employee_id": EMPLOYEE,
        "quotation_request_line_items": list(line_items) or [item()],
    }
    data.update(overrides)
    return data


def test_valid_form_passes(snapshot):
    result = build_quotation_validator(snapshot).validate(
        form(item(ROPE, 4), new_item("Deck Cleaner"))
    )

    assert result.ok
    assert result.field_errors == {}
    assert result.value.quotation_request_line_items[1].is_new_product
    assert str(result.value.quotation_request_date) == "2024-05-02"


def test_duplicate_attribute_key_reported_on_second_key(snapshot):
    attributes = [
        {"key": "Size", "value": "5L"},
        {"key": "Size", "value": "10L"},
    ]

    result = build_quotation_validator(snapshot).validate(
        form(item(ROPE, attributes=attributes))
    )

    assert not result.ok
    assert result.field_errors == {
        "quotation_request_line_items[0].attributes[1].key": ["Attribute keys must be unique."],
    }


def test_new_product_name_repeated_within_form(snapshot):
    result = build_quotation_validator(snapshot).validate(
        form(new_item("Deck Cleaner"), new_item(" deck cleaner "))
    )

    errors = result.field_errors["quotation_request_line_items[1].new_product_name"]
    assert errors == [MSG_NAME_REPEATED]
    assert "must be unique" in errors[0]
    assert "quotation_request_line_items[0].new_product_name" not in result.field_errors


def test_existing_product_selected_twice(snapshot):
    result = build_quotation_validator(snapshot).validate(form(item(PAINT), item(PAINT)))

    assert result.field_errors == {
        "quotation_request_line_items[1].product_id": [MSG_NAME_REPEATED],
    }


def test_new_product_clashing_with_selected_existing_product(snapshot):
    result = build_quotation_validator(snapshot).validate(
        form(item(ROPE), new_item("MOORING ROPE"))
    )

    errors = result.field_errors["quotation_request_line_items[1].new_product_name"]
    assert MSG_NAME_TAKEN in errors
    assert MSG_NAME_REPEATED in errors


def test_new_product_name_taken_in_storage(snapshot):
    result = build_quotation_validator(snapshot).validate(form(new_item("marine paint")))

    assert result.field_errors == {
        "quotation_request_line_items[0].new_product_name": [MSG_NAME_TAKEN],
    }


def test_new_product_requires_name_and_category(snapshot):
    result = build_quotation_validator(snapshot).validate(
        form(item(product_id="new", new_product_ref="7"))
    )

    assert set(result.field_errors) == {
        "quotation_request_line_items[0].new_product_name",
        "quotation_request_line_items[0].new_product_category_id",
        "quotation_request_line_items[0].new_product_ref",
    }


def test_name_uniqueness_only_checks_first_ten_items(snapshot):
    names = [f"Item {i}" for i in range(10)] + ["Item 0"]

    result = build_quotation_validator(snapshot).validate(
        form(*[new_item(name) for name in names])
    )

    assert result.ok


def test_static_shape_errors_skip_data_rules(snapshot):
    result = build_quotation_validator(snapshot).validate(
        form(
            item(product_id=None, quantity=0),
            quotation_request_ref="   ",
            quotation_request_vessel="X",
            company_id=generate_uuid(),
        )
    )

    assert result.field_errors == {
        "quotation_request_ref": ["Reference is required"],
        "quotation_request_vessel": ["Vessel name must be at least 2 characters"],
        "quotation_request_line_items[0].product_id": ["Please select a product"],
        "quotation_request_line_items[0].quotation_request_line_item_quantity": [
            "Quantity must be at least 1"
        ],
    }


def test_missing_line_items_and_bad_date(snapshot):
    result = build_quotation_validator(snapshot).validate(
        form(quotation_request_line_items=[], quotation_request_date="15/03/2024")
    )

    assert result.field_errors["quotation_request_line_items"] == [
        "At least one line item is required"
    ]
    assert result.field_errors["quotation_request_date"] == ["Please enter a valid date"]


def test_quantity_upper_bound(snapshot):
    result = build_quotation_validator(snapshot).validate(form(item(ROPE, 10001)))

    assert result.field_errors == {
        "quotation_request_line_items[0].quotation_request_line_item_quantity": [
            "Quantity cannot exceed 10,000"
        ],
    }


def test_line_item_ceiling(snapshot):
    at_limit = [new_item(f"Item {i}") for i in range(MAX_LINE_ITEMS)]
    over_limit = at_limit + [new_item("One Too Many")]

    assert build_quotation_validator(snapshot).validate(form(*at_limit)).ok

    result = build_quotation_validator(snapshot).validate(form(*over_limit))

    assert result.field_errors == {
        "quotation_request_line_items": [f"Cannot exceed {MAX_LINE_ITEMS} line items"]
    }


def test_references_must_exist_and_agree(snapshot):
    result = build_quotation_validator(snapshot).validate(
        form(
            item(generate_uuid()),
            new_item("Deck Cleaner", category_id=generate_uuid()),
            employee_id=OUTSIDER,
        )
    )

    assert result.field_errors == {
        "employee_id": ["Employee does not belong to the selected company"],
        "quotation_request_line_items[0].product_id": ["Please select a valid product"],
        "quotation_request_line_items[1].new_product_category_id": [
            "Selected product category does not exist"
        ],
    }


def test_validator_runs_only_the_rules_it_is_given(snapshot):
    attributes = [{"key": "Size", "value": "5L"}, {"key": "size", "value": "6L"}]
    validator = build_quotation_validator(snapshot, rules=[unique_attribute_keys_rule])

    result = validator.validate(
        form(item(generate_uuid(), attributes=attributes), employee_id=OUTSIDER)
    )

    assert list(result.field_errors) == [
        "quotation_request_line_items[0].attributes[1].key"
    ]
