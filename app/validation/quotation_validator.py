# app/validation/quotation_validator.py

from typing import Any, Dict, Iterable

from pydantic import ValidationError

from app.forms.field_errors import FieldErrors
from app.schemas.quotations.quotation_form_schemas import QuotationFormIn
from app.validation.quotation_rules import DEFAULT_RULES, QuotationRule
from app.validation.result import ValidationResult
from app.validation.snapshot import QuotationSnapshot


class QuotationValidator:
    """Static shape first; data-dependent rules only run on a valid shape."""

    def __init__(self, snapshot: QuotationSnapshot, rules: Iterable[QuotationRule]):
        self.snapshot = snapshot
        self.rules = list(rules)

    def validate(self, payload: Dict[str, Any]) -> ValidationResult:
        errors = FieldErrors()

        try:
            form = QuotationFormIn.model_validate(payload)
        except ValidationError as exc:
            errors.extend_from_pydantic(exc.errors())
            return ValidationResult(status="failure", field_errors=errors.as_dict())

        for rule in self.rules:
            rule(form, self.snapshot, errors)

        if errors:
            return ValidationResult(status="failure", field_errors=errors.as_dict())
        return ValidationResult(status="success", value=form)


def build_quotation_validator(
    snapshot: QuotationSnapshot,
    rules: Iterable[QuotationRule] = DEFAULT_RULES,
) -> QuotationValidator:
    return QuotationValidator(snapshot, rules)
