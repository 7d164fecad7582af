import pytest

from idv.models.product import Product


@pytest.fixture
def registration_id(client, auth_headers):
    payload = {
        "idNumber": "19750418/08/1",
        "fullName": "Peter Phiri",
        "dateOfBirth": "1975-04-18T00:00:00",
        "gender": "Male",
        "mobileNumber": "+260955654321",
        "email": "peter@example.com",
        "province": "Eastern",
        "district": "Chipata",
    }
    response = client.post("/api/clients/register", json=payload, headers=auth_headers)
    return response.json()["registrationId"]


def product_id(db, code):
    return db.query(Product).filter(Product.product_code == code).first().product_id


def test_catalogue_listing(client, auth_headers, seeded_db):
    products = client.get("/api/products", headers=auth_headers).json()
    assert len(products) == 15
    assert products[0]["currency"] == "ZMW"

    categories = client.get("/api/products/categories", headers=auth_headers).json()
    assert categories == ["Health & Protection", "Life Insurance", "Savings & Investment"]

    life = client.get("/api/products/category/Life Insurance", headers=auth_headers).json()
    assert [p["productCode"] for p in life] == ["LIFE001", "LIFE002", "LIFE003", "LIFE004", "LIFE005"]

    one = client.get(f"/api/products/{product_id(seeded_db, 'SAV001')}", headers=auth_headers)
    assert one.json()["premiumAmount"] == 2625.0
    assert client.get("/api/products/missing", headers=auth_headers).status_code == 404


def test_attach_with_custom_premium(client, auth_headers, seeded_db, registration_id):
    body = {
        "registrationId": registration_id,
        "productId": product_id(seeded_db, "HEALTH003"),
        "customPremiumAmount": 800,
        "startDate": "2024-01-01T00:00:00",
    }
    response = client.post("/api/products/attach", json=body, headers=auth_headers)

    assert response.status_code == 201
    enrollment = response.json()
    assert enrollment["premiumAmount"] == 800.0
    assert enrollment["status"] == "Active"
    assert enrollment["product"]["productCode"] == "HEALTH003"

    again = client.post("/api/products/attach", json=body, headers=auth_headers)
    assert again.status_code == 400

    held = client.get(f"/api/clients/{registration_id}/products", headers=auth_headers).json()
    assert [p["clientProductId"] for p in held] == [enrollment["clientProductId"]]


def test_attach_unknown_client_or_product(client, auth_headers, seeded_db, registration_id):
    unknown_client = {
        "registrationId": "missing",
        "productId": product_id(seeded_db, "LIFE001"),
        "startDate": "2024-01-01T00:00:00",
    }
    assert client.post("/api/products/attach", json=unknown_client, headers=auth_headers).status_code == 404

    unknown_product = {"registrationId": registration_id, "productId": "missing", "startDate": "2024-01-01T00:00:00"}
    assert client.post("/api/products/attach", json=unknown_product, headers=auth_headers).status_code == 404


def test_update_and_remove_client_product(client, auth_headers, seeded_db, registration_id):
    body = {
        "registrationId": registration_id,
        "productId": product_id(seeded_db, "LIFE002"),
        "startDate": "2024-01-01T00:00:00",
    }
    enrollment_id = client.post("/api/products/attach", json=body, headers=auth_headers).json()["clientProductId"]

    bad = client.put(f"/api/products/client-products/{enrollment_id}", json={"status": "Paused"}, headers=auth_headers)
    assert bad.status_code == 400

    lapsed = client.put(
        f"/api/products/client-products/{enrollment_id}",
        json={"status": "Lapsed", "notes": "missed payments"},
        headers=auth_headers,
    )
    assert lapsed.status_code == 200
    assert lapsed.json()["status"] == "Lapsed"
    assert lapsed.json()["premiumAmount"] == 850.0

    missing = client.put("/api/products/client-products/missing", json={"status": "Active"}, headers=auth_headers)
    assert missing.status_code == 404

    assert client.delete(f"/api/products/client-products/{enrollment_id}", headers=auth_headers).status_code == 204
    assert client.delete(f"/api/products/client-products/{enrollment_id}", headers=auth_headers).status_code == 404
    assert client.get(f"/api/clients/{registration_id}/products", headers=auth_headers).json() == []


def test_products_of_unknown_client(client, auth_headers):
    assert client.get("/api/clients/missing/products", headers=auth_headers).status_code == 404
