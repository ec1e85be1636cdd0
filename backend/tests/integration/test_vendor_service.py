"""
Integration tests for vendor management.
"""
import pytest

from kore.errors import ConflictError, NotFoundError, ValidationError
from kore.schemas.po import POCreate
from kore.schemas.vendor import VendorCreate, VendorUpdate
from kore.services.purchase_order_service import purchase_order_service
from kore.services.vendor_service import vendor_service


@pytest.mark.integration
class TestVendorService:

    def test_create_with_nested_details(self, db_session):
        data = VendorCreate(
            display_name="  Agra Soles ",
            company_name="Agra Soles LLP",
            billing_address={"city": "Agra", "state": "UP", "pin_code": "282001"},
            contact_persons=[
                {"first_name": "Meera", "email": "meera@agrasoles.in"},
                {"first_name": "Arjun"},
            ],
        )
        vendor = vendor_service.create(db_session, data)

        assert vendor.display_name == "Agra Soles"
        assert vendor.currency == "INR"
        assert vendor.billing_address["city"] == "Agra"
        assert vendor.shipping_address is None
        assert [c["first_name"] for c in vendor.contact_persons] == ["Meera", "Arjun"]
        assert vendor.bank_details == []

    def test_list_sorted_and_searchable(self, db_session):
        for name in ["Zenith Rubber", "Agra Soles", "Metro Laces"]:
            vendor_service.create(db_session, VendorCreate(display_name=name))

        assert [v.display_name for v in vendor_service.list(db_session)] == [
            "Agra Soles", "Metro Laces", "Zenith Rubber",
        ]
        assert [v.display_name for v in vendor_service.list(db_session, q="LACES")] == ["Metro Laces"]

    def test_update_merges_fields(self, db_session, vendor):
        updated = vendor_service.update(db_session, vendor.id, VendorUpdate(email="orders@bata.in"))

        assert updated.email == "orders@bata.in"
        assert updated.display_name == "Bata Supplies"

    def test_update_rejects_blank_display_name(self, db_session, vendor):
        with pytest.raises(ValidationError) as exc_info:
            vendor_service.update(db_session, vendor.id, VendorUpdate(display_name="   "))
        assert exc_info.value.message == "Display Name is required."

    def test_delete_unused_vendor(self, db_session, vendor):
        vendor_service.delete(db_session, vendor.id)

        with pytest.raises(NotFoundError):
            vendor_service.get(db_session, vendor.id)

    def test_delete_vendor_with_purchase_orders(self, db_session, vendor):
        purchase_order_service.create(db_session, POCreate(vendor_id=vendor.id))

        with pytest.raises(ConflictError):
            vendor_service.delete(db_session, vendor.id)
