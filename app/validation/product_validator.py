# app/validation/product_validator.py

from typing import Any, Dict, Optional

from pydantic import ValidationError

from app.core.config import MAX_ATTRIBUTES_PER_PRODUCT
from app.forms.field_errors import FieldErrors
from app.schemas.masters.product_schemas import ProductFormIn
from app.validation.attribute_rules import MSG_ATTRIBUTE_KEY_REPEATED, duplicate_key_indexes
from app.validation.result import ValidationResult
from app.validation.snapshot import ProductSnapshot, fold_name

MSG_NAME_TAKEN = (
    "Product names must be unique. "
    "This product name is already used in another product."
)


class ProductValidator:
    def __init__(self, snapshot: ProductSnapshot, current_product_id: Optional[str] = None):
        self.snapshot = snapshot
        self.current_product_id = current_product_id

    def validate(self, payload: Dict[str, Any]) -> ValidationResult:
        errors = FieldErrors()

        try:
            form = ProductFormIn.model_validate(payload)
        except ValidationError as exc:
            errors.extend_from_pydantic(exc.errors())
            return ValidationResult(status="failure", field_errors=errors.as_dict())

        taken = {
            fold_name(p.name)
            for p in self.snapshot.existing_products
            if p.id != self.current_product_id
        }
        if fold_name(form.product_name) in taken:
            errors.add(["product_name"], MSG_NAME_TAKEN)

        if form.product_category_id not in self.snapshot.category_ids:
            errors.add(["product_category_id"], "Selected product category does not exist")

        for i in duplicate_key_indexes(form.product_attributes, MAX_ATTRIBUTES_PER_PRODUCT):
            errors.add(["product_attributes", i, "key"], MSG_ATTRIBUTE_KEY_REPEATED)

        if errors:
            return ValidationResult(status="failure", field_errors=errors.as_dict())
        return ValidationResult(status="success", value=form)


def build_product_validator(
    snapshot: ProductSnapshot,
    current_product_id: Optional[str] = None,
) -> ProductValidator:
    return ProductValidator(snapshot, current_product_id)
