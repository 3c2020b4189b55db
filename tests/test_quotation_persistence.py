from decimal import Decimal

import pytest
from sqlalchemy import func, select

from app.core.exceptions import NotFoundError
from app.models.masters.product_models import Product
from app.models.quotations.quotation_request_models import (
    QuotationRequest,
    QuotationRequestLineItem,
)
from app.models.quotations.supplier_quotation_models import SupplierQuotation
from app.repositories import quotation_repository as repo
from app.services.quotations import quotation_submission
from app.services.quotations.quotation_persistence import (
    SAVE_FAILED_MESSAGE,
    parse_ref_number,
)
from app.services.quotations.quotation_submission import submit_quotation
from app.utils.ids import generate_uuid
from conftest import new_product_item


async def _line_items(database, quotation_id):
    async with database.session() as s:
        rows = await s.scalars(
            select(QuotationRequestLineItem)
            .where(QuotationRequestLineItem.quotation_request_id == quotation_id)
            .order_by(QuotationRequestLineItem.position)
        )
        return rows.all()


async def _product_count(database):
    async with database.session() as s:
        return await s.scalar(select(func.count(Product.id)))


@pytest.mark.parametrize(
    "raw, expected",
    [("12-A", 12), ("  7 crates", 7), ("REF", 0), (None, 0), ("", 0), ("-3", -3)],
)
def test_parse_ref_number(raw, expected):
    assert parse_ref_number(raw) == expected


async def test_create_with_existing_product(session, database, seeded, quotation_payload):
    reply = await submit_quotation(session, quotation_payload())

    assert reply.status == "success"
    assert reply.field_errors == {}

    async with database.session() as s:
        quotation = await s.get(QuotationRequest, reply.quotation_id)
        assert quotation.ref == "QR-2024-001"
        assert quotation.vessel == "MV Aegean Star"
        assert str(quotation.request_date) == "2024-03-15"

    (line_item,) = await _line_items(database, reply.quotation_id)
    assert line_item.product_id == seeded.rope_id
    assert line_item.quantity == 4
    assert line_item.attributes == {"Diameter": "24mm"}
    assert await _product_count(database) == 2


async def test_create_with_new_product(session, database, seeded, quotation_payload):
    payload = quotation_payload(
        line_items=[
            new_product_item(
                "Deck Cleaner",
                seeded.category_id,
                quantity=2,
                attributes=[{"key": "Size", "value": "5L"}],
            )
        ]
    )

    reply = await submit_quotation(session, payload)

    assert reply.status == "success"
    async with database.session() as s:
        product = await s.scalar(select(Product).where(Product.name == "Deck Cleaner"))
    assert product is not None
    assert product.attributes == {"Size": "5L"}
    assert product.ref_number == 12
    assert product.category_id == seeded.category_id

    (line_item,) = await _line_items(database, reply.quotation_id)
    assert line_item.product_id == product.id
    assert line_item.quantity == 2
    assert line_item.attributes == {"Size": "5L"}


async def test_invalid_submission_persists_nothing(session, database, seeded, quotation_payload):
    payload = quotation_payload(
        line_items=[
            new_product_item("Deck Cleaner", seeded.category_id),
            new_product_item("DECK CLEANER", seeded.category_id),
        ]
    )

    reply = await submit_quotation(session, payload)

    assert reply.status == "failure"
    assert "quotation_request_line_items[1].new_product_name" in reply.field_errors
    assert reply.values == payload
    assert await _product_count(database) == 2
    async with database.session() as s:
        assert await s.scalar(select(func.count(QuotationRequest.id))) == 0


async def test_edit_replaces_line_items_in_order(session, database, seeded, quotation_payload):
    created = await submit_quotation(session, quotation_payload())
    quotation_id = created.quotation_id

    edited = quotation_payload(
        line_items=[
            {"product_id": seeded.paint_id, "quotation_request_line_item_quantity": 9},
            {"product_id": seeded.rope_id, "quotation_request_line_item_quantity": 1},
        ],
        quotation_request_vessel="MV Aegean Dawn",
    )
    reply = await submit_quotation(session, edited, quotation_id)

    assert reply.status == "success"
    assert reply.quotation_id == quotation_id

    items = await _line_items(database, quotation_id)
    assert [(i.product_id, i.quantity, i.position) for i in items] == [
        (seeded.paint_id, 9, 0),
        (seeded.rope_id, 1, 1),
    ]
    async with database.session() as s:
        assert (await s.get(QuotationRequest, quotation_id)).vessel == "MV Aegean Dawn"


async def test_edit_drops_supplier_quotations_of_replaced_items(
    session, database, seeded, quotation_payload
):
    created = await submit_quotation(session, quotation_payload())
    (old_item,) = await _line_items(database, created.quotation_id)

    async with database.session() as s:
        s.add(
            SupplierQuotation(
                line_item_id=old_item.id,
                company_id=seeded.supplier_id,
                supplier_price=Decimal("100.00"),
                client_price=Decimal("125.00"),
            )
        )
        await s.commit()

    reply = await submit_quotation(session, quotation_payload(), created.quotation_id)

    assert reply.status == "success"
    async with database.session() as s:
        assert await s.scalar(select(func.count(SupplierQuotation.id))) == 0


async def test_edit_of_missing_quotation_is_not_found(session, seeded, quotation_payload):
    with pytest.raises(NotFoundError):
        await submit_quotation(session, quotation_payload(), generate_uuid())


async def test_failure_on_second_new_product_rolls_everything_back(
    session, database, seeded, quotation_payload, monkeypatch
):
    created = await submit_quotation(session, quotation_payload())
    quotation_id = created.quotation_id
    (original_item,) = await _line_items(database, quotation_id)

    real_create_product = repo.create_product
    calls = []

    async def failing_create_product(db, data):
        calls.append(data["name"])
        if len(calls) == 2:
            raise RuntimeError("disk I/O error")
        return await real_create_product(db, data)

    monkeypatch.setattr(repo, "create_product", failing_create_product)

    payload = quotation_payload(
        line_items=[
            new_product_item("Deck Cleaner", seeded.category_id),
            new_product_item("Rust Remover", seeded.category_id),
            new_product_item("Hull Wax", seeded.category_id),
        ],
        quotation_request_vessel="MV Changed",
    )
    reply = await submit_quotation(session, payload, quotation_id)

    assert calls == ["Deck Cleaner", "Rust Remover"]
    assert reply.status == "error"
    assert reply.form_errors == [SAVE_FAILED_MESSAGE]
    assert reply.values == payload

    assert await _product_count(database) == 2
    items = await _line_items(database, quotation_id)
    assert [i.id for i in items] == [original_item.id]
    async with database.session() as s:
        assert (await s.get(QuotationRequest, quotation_id)).vessel == "MV Aegean Star"


async def test_failed_create_leaves_no_quotation(
    session, database, seeded, quotation_payload, monkeypatch
):
    async def failing_create_line_item(db, data):
        raise RuntimeError("connection reset")

    monkeypatch.setattr(repo, "create_line_item", failing_create_line_item)

    reply = await submit_quotation(
        session,
        quotation_payload(line_items=[new_product_item("Deck Cleaner", seeded.category_id)]),
    )

    assert reply.status == "error"
    assert reply.quotation_id is None
    assert await _product_count(database) == 2
    async with database.session() as s:
        assert await s.scalar(select(func.count(QuotationRequest.id))) == 0


async def test_name_taken_after_snapshot_is_a_save_error(
    session, database, seeded, quotation_payload, monkeypatch
):
    real_load = quotation_submission.load_quotation_snapshot

    async def stale_snapshot(db):
        snapshot = await real_load(db)
        # Read before "Mooring Rope" was committed by a concurrent request.
        return snapshot.model_copy(update={"existing_products": []})

    monkeypatch.setattr(quotation_submission, "load_quotation_snapshot", stale_snapshot)

    payload = quotation_payload(
        line_items=[new_product_item("  mooring ROPE ", seeded.category_id)]
    )
    reply = await submit_quotation(session, payload)

    assert reply.status == "error"
    assert reply.form_errors == [SAVE_FAILED_MESSAGE]
    assert reply.field_errors == {}
    assert reply.values == payload
    assert await _product_count(database) == 2
    async with database.session() as s:
        assert await s.scalar(select(func.count(QuotationRequest.id))) == 0
