"""
API tests for purchase orders and vendors.
"""
import pytest

BASE = "/api/purchase-orders"


@pytest.mark.api
class TestPurchaseOrdersAPI:

    def test_compute_preview(self, client):
        response = client.post(f"{BASE}/compute", json={
            "items": [
                {"item_name": "Runner", "quantity": 3, "base_price": 1000, "tax_rate": 18},
                {"item_name": "Loafer", "quantity": "", "base_price": "abc", "tax_rate": 12},
            ],
            "discount_percent": "10",
        })

        assert response.status_code == 200
        body = response.json()
        assert body["items"][0]["tax_per_item"] == 180.0
        assert body["items"][0]["unit_total"] == 3540.0
        assert body["items"][1]["quantity"] == 0
        assert body["items"][1]["unit_total"] == 0.0
        assert body["sub_total"] == 3000.0
        assert body["discount_amount"] == 300.0
        assert body["total_tax"] == 540.0
        assert body["total"] == 3240.0

    def test_next_number_and_create(self, client, vendor):
        assert client.get(f"{BASE}/next-number").json() == {"po_number": "PO-00001"}

        response = client.post(BASE, json={
            "vendor_id": vendor.id,
            "items": [{"item_name": "Runner", "quantity": 2, "base_price": 500, "tax_rate": 5}],
        })

        assert response.status_code == 201
        po = response.json()
        assert po["po_number"] == "PO-00001"
        assert po["vendor_name"] == "Bata Supplies"
        assert po["total"] == 1050.0
        assert po["items"][0]["tax_per_item"] == 25.0
        assert client.get(f"{BASE}/next-number").json() == {"po_number": "PO-00002"}

    def test_send_and_list(self, client, vendor):
        po = client.post(BASE, json={"vendor_id": vendor.id}).json()

        response = client.post(f"{BASE}/{po['id']}/send")
        assert response.status_code == 200
        assert response.json()["status"] == "SENT"
        assert client.post(f"{BASE}/{po['id']}/send").status_code == 400

        listed = client.get(BASE, params={"status": "SENT"}).json()
        assert [p["po_number"] for p in listed] == [po["po_number"]]

    def test_validation_errors(self, client, vendor):
        response = client.post(BASE, json={"items": []})
        assert response.status_code == 400
        assert response.json() == {"message": "vendor_id: Field required"}

        response = client.post(BASE, json={"vendor_id": vendor.id, "items": [{"item_name": "X", "quantity": 0}]})
        assert response.status_code == 400
        assert response.json()["message"] == "Line 1: quantity must be at least 1"

    def test_unknown_vendor(self, client):
        response = client.post(BASE, json={"vendor_id": 77})
        assert response.status_code == 404
        assert response.json() == {"message": "Vendor with ID 77 not found"}


@pytest.mark.api
class TestVendorsAPI:

    def test_crud(self, client):
        response = client.post("/api/vendors", json={
            "display_name": "Metro Laces",
            "billing_address": {"city": "Chennai"},
            "bank_details": [{"bank_name": "SBI", "ifsc": "SBIN0000001"}],
        })
        assert response.status_code == 201
        vendor = response.json()
        assert vendor["billing_address"]["city"] == "Chennai"
        assert vendor["bank_details"][0]["bank_name"] == "SBI"

        response = client.put(f"/api/vendors/{vendor['id']}", json={"mobile": "9876543210"})
        assert response.json()["mobile"] == "9876543210"

        assert [v["display_name"] for v in client.get("/api/vendors", params={"q": "metro"}).json()] == ["Metro Laces"]

        assert client.delete(f"/api/vendors/{vendor['id']}").status_code == 200
        assert client.get(f"/api/vendors/{vendor['id']}").status_code == 404

    def test_vendor_in_use_cannot_be_deleted(self, client, vendor):
        client.post(BASE, json={"vendor_id": vendor.id})

        response = client.delete(f"/api/vendors/{vendor.id}")
        assert response.status_code == 409
