# app/services/quotations/quotation_persistence.py

import re

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import PersistenceError
from app.forms.attributes import to_mapping_or_none
from app.repositories import quotation_repository as repo
from app.schemas.quotations.quotation_form_schemas import QuotationFormIn
from app.utils.logger import get_logger

logger = get_logger(__name__)

SAVE_FAILED_MESSAGE = "Failed to save quotation. Please try again."

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_ref_number(raw: str | None) -> int:
    """Leading integer of a free-text reference; 0 when there is none."""
    if not raw:
        return 0
    match = _LEADING_INT.match(raw)
    return int(match.group(1)) if match else 0


async def commit_quotation(
    db: AsyncSession,
    quotation_id: str,
    form: QuotationFormIn,
    *,
    is_edit: bool,
) -> str:
    """Write the quotation, its new products and its line items atomically.

    On edit every previous line item is removed and the submitted set is
    inserted in submission order. Any failure rolls the whole unit back and
    surfaces as ``PersistenceError``.
    """

    async def _write(tx: AsyncSession) -> str:
        await repo.upsert_quotation(
            tx,
            quotation_id,
            {
                "ref": form.quotation_request_ref,
                "request_date": form.quotation_request_date,
                "vessel": form.quotation_request_vessel,
                "company_id": form.company_id,
                "employee_id": form.employee_id,
            },
        )

        if is_edit:
            removed = await repo.delete_line_items(tx, quotation_id)
            logger.debug("Removed %s previous line items from %s", removed, quotation_id)

        created_products = 0
        for position, item in enumerate(form.quotation_request_line_items):
            attributes = to_mapping_or_none(item.attributes)

            if item.is_new_product:
                product = await repo.create_product(
                    tx,
                    {
                        "name": item.new_product_name,
                        "ref_number": parse_ref_number(item.new_product_ref),
                        "description": item.new_product_description,
                        "category_id": item.new_product_category_id,
                        "attributes": attributes,
                    },
                )
                product_id = product.id
                created_products += 1
            else:
                product_id = item.product_id

            await repo.create_line_item(
                tx,
                {
                    "quotation_request_id": quotation_id,
                    "product_id": product_id,
                    "quantity": item.quotation_request_line_item_quantity,
                    "attributes": attributes,
                    "position": position,
                },
            )

        logger.info(
            "Quotation %s saved: %s line items, %s new products",
            quotation_id,
            len(form.quotation_request_line_items),
            created_products,
        )
        return quotation_id

    try:
        return await repo.run_in_transaction(db, _write)
    except Exception as exc:
        logger.exception("Failed to save quotation %s", quotation_id)
        raise PersistenceError(SAVE_FAILED_MESSAGE) from exc
