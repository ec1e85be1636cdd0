"""
Integration tests for purchase order persistence and numbering.
"""
from decimal import Decimal

import pytest

from kore.errors import NotFoundError, ValidationError
from kore.schemas.po import POCreate, POUpdate
from kore.services.purchase_order_service import purchase_order_service


def line(**overrides):
    data = {"item_name": "Runner-Black-6-10", "quantity": 3, "base_price": 1000, "tax_rate": 18}
    data.update(overrides)
    return data


@pytest.mark.integration
class TestPurchaseOrderCreate:

    def test_allocates_sequential_numbers(self, db_session, vendor):
        first = purchase_order_service.create(db_session, POCreate(vendor_id=vendor.id, items=[line()]))
        second = purchase_order_service.create(db_session, POCreate(vendor_id=vendor.id, items=[line()]))

        assert first.po_number == "PO-00001"
        assert second.po_number == "PO-00002"
        assert purchase_order_service.next_number(db_session) == "PO-00003"

    def test_next_number_follows_highest(self, db_session, vendor):
        purchase_order_service.create(db_session, POCreate(vendor_id=vendor.id, po_number="PO-00041"))
        purchase_order_service.create(db_session, POCreate(vendor_id=vendor.id, po_number="PO-00007"))

        po = purchase_order_service.create(db_session, POCreate(vendor_id=vendor.id))
        assert po.po_number == "PO-00042"

    def test_duplicate_explicit_number_rejected(self, db_session, vendor):
        purchase_order_service.create(db_session, POCreate(vendor_id=vendor.id, po_number="PO-00005"))

        with pytest.raises(ValidationError):
            purchase_order_service.create(db_session, POCreate(vendor_id=vendor.id, po_number="PO-00005"))

    def test_persists_computed_totals(self, db_session, vendor):
        data = POCreate(
            vendor_id=vendor.id,
            discount_percent=10,
            items=[
                line(quantity=4, base_price=1000, tax_rate=5),
                line(item_name="Loafer", quantity=1, base_price=1000, tax_rate=20, tax_type="IGST"),
            ],
        )
        po = purchase_order_service.create(db_session, data)

        assert po.vendor_name == "Bata Supplies"
        assert po.status == "DRAFT"
        assert po.order_date is not None
        assert po.sub_total == Decimal("5000.00")
        assert po.total_tax == Decimal("400.00")
        assert po.discount_amount == Decimal("500.00")
        assert po.total == Decimal("4900.00")
        assert [item.item_name for item in po.items] == ["Runner-Black-6-10", "Loafer"]
        assert po.items[0].tax_per_item == Decimal("50.00")
        assert po.items[0].unit_total == Decimal("4200.00")
        assert po.items[1].tax_type == "IGST"

    def test_unknown_vendor(self, db_session):
        with pytest.raises(NotFoundError):
            purchase_order_service.create(db_session, POCreate(vendor_id=404))

    @pytest.mark.parametrize("bad_line,message", [
        (line(quantity=0), "Line 1: quantity must be at least 1"),
        (line(tax_rate=120), "Line 1: tax_rate must be between 0 and 100"),
        (line(base_price=-1), "Line 1: base_price must not be negative"),
    ])
    def test_line_validation(self, db_session, vendor, bad_line, message):
        with pytest.raises(ValidationError) as exc_info:
            purchase_order_service.create(db_session, POCreate(vendor_id=vendor.id, items=[bad_line]))
        assert exc_info.value.message == message

    @pytest.mark.parametrize("discount", [-5, 100.5, 1000])
    def test_discount_out_of_range(self, db_session, vendor, discount):
        with pytest.raises(ValidationError) as exc_info:
            purchase_order_service.create(db_session, POCreate(
                vendor_id=vendor.id, discount_percent=discount, items=[line()],
            ))
        assert exc_info.value.message == "discount_percent must be between 0 and 100"

    def test_amounts_stored_at_two_decimals(self, db_session, vendor):
        po = purchase_order_service.create(db_session, POCreate(
            vendor_id=vendor.id,
            items=[line(quantity=2, base_price="10.125", tax_rate="12.345")],
        ))

        item = po.items[0]
        assert item.base_price == Decimal("10.13")
        assert item.tax_rate == Decimal("12.35")
        assert po.sub_total == item.base_price * item.quantity
        assert po.total_tax == item.tax_per_item * item.quantity
        assert item.unit_total == (item.base_price + item.tax_per_item) * item.quantity


@pytest.mark.integration
class TestPONumberAllocation:

    def test_retries_after_number_collision(self, db_session, vendor, monkeypatch):
        taken = purchase_order_service.create(db_session, POCreate(vendor_id=vendor.id))
        suggest = purchase_order_service.next_number
        calls = []

        def stale_first(db):
            calls.append(1)
            return taken.po_number if len(calls) == 1 else suggest(db)

        monkeypatch.setattr(purchase_order_service, "next_number", stale_first)

        po = purchase_order_service.create(db_session, POCreate(vendor_id=vendor.id, items=[line()]))

        assert po.po_number == "PO-00002"
        assert len(calls) == 2
        assert len(po.items) == 1

    def test_gives_up_after_max_attempts(self, db_session, vendor, monkeypatch):
        from kore.config import settings

        taken = purchase_order_service.create(db_session, POCreate(vendor_id=vendor.id))
        calls = []

        def always_taken(db):
            calls.append(1)
            return taken.po_number

        monkeypatch.setattr(purchase_order_service, "next_number", always_taken)

        with pytest.raises(ValidationError):
            purchase_order_service.create(db_session, POCreate(vendor_id=vendor.id))
        assert len(calls) == settings.po_number_max_attempts
        assert len(purchase_order_service.list(db_session)) == 1


@pytest.mark.integration
class TestPurchaseOrderLifecycle:

    @pytest.fixture
    def po(self, db_session, vendor):
        return purchase_order_service.create(db_session, POCreate(vendor_id=vendor.id, items=[line()]))

    def test_update_items_recomputes_totals(self, db_session, po):
        updated = purchase_order_service.update(db_session, po.id, POUpdate(items=[line(quantity=1)]))

        assert len(updated.items) == 1
        assert updated.sub_total == Decimal("1000.00")
        assert updated.total == Decimal("1180.00")

    def test_update_discount_only_keeps_items(self, db_session, po):
        updated = purchase_order_service.update(db_session, po.id, POUpdate(discount_percent=50))

        assert len(updated.items) == 1
        assert updated.discount_amount == Decimal("1500.00")
        assert updated.total == Decimal("2040.00")

    def test_discount_only_update_keeps_totals(self, db_session, vendor):
        po = purchase_order_service.create(db_session, POCreate(
            vendor_id=vendor.id,
            items=[line(quantity=2, base_price="10.125", tax_rate=0)],
        ))
        before = (po.sub_total, po.total_tax, po.total)

        updated = purchase_order_service.update(db_session, po.id, POUpdate(discount_percent=0))

        assert (updated.sub_total, updated.total_tax, updated.total) == before
        assert updated.sub_total == Decimal("20.26")
        assert updated.items[0].unit_total == updated.sub_total

    def test_update_rejects_discount_over_100(self, db_session, po):
        with pytest.raises(ValidationError):
            purchase_order_service.update(db_session, po.id, POUpdate(discount_percent=150))

        assert purchase_order_service.get(db_session, po.id).discount_percent == 0

    def test_update_vendor_refreshes_name(self, db_session, po):
        from kore.models.vendor import Vendor

        other = Vendor(display_name="Liberty Traders")
        db_session.add(other)
        db_session.commit()

        updated = purchase_order_service.update(db_session, po.id, POUpdate(vendor_id=other.id))
        assert updated.vendor_name == "Liberty Traders"

    def test_send_once(self, db_session, po):
        sent = purchase_order_service.send(db_session, po.id)
        assert sent.status == "SENT"

        with pytest.raises(ValidationError):
            purchase_order_service.send(db_session, po.id)

    def test_list_filters_by_status(self, db_session, vendor, po):
        purchase_order_service.create(db_session, POCreate(vendor_id=vendor.id, status="SENT"))

        assert len(purchase_order_service.list(db_session)) == 2
        assert [p.po_number for p in purchase_order_service.list(db_session, status="DRAFT")] == [po.po_number]

    def test_delete(self, db_session, po):
        purchase_order_service.delete(db_session, po.id)

        with pytest.raises(NotFoundError):
            purchase_order_service.get(db_session, po.id)
