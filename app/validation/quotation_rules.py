# app/validation/quotation_rules.py
#
# Cross-field and cross-record rules for the quotation request form. Each rule
# receives a shape-valid form, the persisted snapshot and the shared error
# collector. Duplicates are reported on the later occurrence.

from typing import Callable, List

from app.core.config import MAX_CROSS_CHECKED_ITEMS
from app.forms.field_errors import FieldErrors
from app.schemas.quotations.quotation_form_schemas import QuotationFormIn
from app.validation.attribute_rules import MSG_ATTRIBUTE_KEY_REPEATED, duplicate_key_indexes
from app.validation.snapshot import QuotationSnapshot, fold_name

LINE_ITEMS = "quotation_request_line_items"

QuotationRule = Callable[[QuotationFormIn, QuotationSnapshot, FieldErrors], None]

MSG_NAME_REQUIRED = "Product name is required for new products"
MSG_NAME_TOO_LONG = "Product name must be max 100 characters"
MSG_CATEGORY_REQUIRED = "Product category is required for new products"
MSG_REF_TOO_SHORT = "Reference number must be at least 2 characters"
MSG_NAME_TAKEN = (
    "Product names must be unique. "
    "This product name is already used in another product."
)
MSG_NAME_REPEATED = (
    "Product names must be unique. "
    "This product is already used in another line item."
)


def new_product_fields_rule(
    form: QuotationFormIn, snapshot: QuotationSnapshot, errors: FieldErrors
) -> None:
    for i, item in enumerate(form.quotation_request_line_items):
        if not item.is_new_product:
            continue

        if not item.new_product_name:
            errors.add([LINE_ITEMS, i, "new_product_name"], MSG_NAME_REQUIRED)
        elif len(item.new_product_name) > 100:
            errors.add([LINE_ITEMS, i, "new_product_name"], MSG_NAME_TOO_LONG)

        if not item.new_product_category_id:
            errors.add([LINE_ITEMS, i, "new_product_category_id"], MSG_CATEGORY_REQUIRED)

        if item.new_product_ref is not None and len(item.new_product_ref.strip()) < 2:
            errors.add([LINE_ITEMS, i, "new_product_ref"], MSG_REF_TOO_SHORT)


def new_product_name_available_rule(
    form: QuotationFormIn, snapshot: QuotationSnapshot, errors: FieldErrors
) -> None:
    taken = snapshot.existing_product_names
    for i, item in enumerate(form.quotation_request_line_items):
        if item.is_new_product and item.new_product_name:
            if fold_name(item.new_product_name) in taken:
                errors.add([LINE_ITEMS, i, "new_product_name"], MSG_NAME_TAKEN)


def unique_line_item_products_rule(
    form: QuotationFormIn, snapshot: QuotationSnapshot, errors: FieldErrors
) -> None:
    """Two line items may not resolve to the same product name.

    Only the first MAX_CROSS_CHECKED_ITEMS line items are compared.
    """
    names_by_id = snapshot.names_by_id()
    seen: set[str] = set()

    for i, item in enumerate(form.quotation_request_line_items[:MAX_CROSS_CHECKED_ITEMS]):
        if item.is_new_product:
            name, field = item.new_product_name, "new_product_name"
        else:
            name, field = names_by_id.get(item.product_id), "product_id"

        folded = fold_name(name)
        if not folded:
            continue
        if folded in seen:
            errors.add([LINE_ITEMS, i, field], MSG_NAME_REPEATED)
        seen.add(folded)


def unique_attribute_keys_rule(
    form: QuotationFormIn, snapshot: QuotationSnapshot, errors: FieldErrors
) -> None:
    for i, item in enumerate(form.quotation_request_line_items):
        for a in duplicate_key_indexes(item.attributes, MAX_CROSS_CHECKED_ITEMS):
            errors.add([LINE_ITEMS, i, "attributes", a, "key"], MSG_ATTRIBUTE_KEY_REPEATED)


def references_exist_rule(
    form: QuotationFormIn, snapshot: QuotationSnapshot, errors: FieldErrors
) -> None:
    if form.company_id not in snapshot.company_ids:
        errors.add(["company_id"], "Selected company does not exist")

    employee_company = snapshot.employee_companies.get(form.employee_id)
    if employee_company is None:
        errors.add(["employee_id"], "Selected employee does not exist")
    elif employee_company != form.company_id:
        errors.add(["employee_id"], "Employee does not belong to the selected company")

    names_by_id = snapshot.names_by_id()
    for i, item in enumerate(form.quotation_request_line_items):
        if item.is_new_product:
            category_id = item.new_product_category_id
            if category_id and category_id not in snapshot.category_ids:
                errors.add(
                    [LINE_ITEMS, i, "new_product_category_id"],
                    "Selected product category does not exist",
                )
        elif item.product_id not in names_by_id:
            errors.add([LINE_ITEMS, i, "product_id"], "Please select a valid product")


DEFAULT_RULES: List[QuotationRule] = [
    new_product_fields_rule,
    new_product_name_available_rule,
    unique_line_item_products_rule,
    unique_attribute_keys_rule,
    references_exist_rule,
]
