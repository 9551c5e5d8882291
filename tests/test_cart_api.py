import uuid

from fastapi.testclient import TestClient


def test_cart_requires_auth(client: TestClient) -> None:
    response = client.get("/api/cart")
    assert response.status_code == 401


def test_new_user_gets_initial_cart(client: TestClient, user_headers) -> None:
    response = client.get("/api/cart", headers=user_headers)
    assert response.status_code == 200

    data = response.json()
    assert data["items"] == []
    assert data["payment_method"] == "PayPal"
    assert data["grand_total"] == "0.00"


def test_add_uses_catalog_snapshot_and_totals(
    client: TestClient, user_headers, make_product
) -> None:
    product = make_product(price="60.00")

    response = client.post(
        "/api/cart",
        json={"product_id": str(product.id), "quantity": 2},
        headers=user_headers,
    )
    assert response.status_code == 200

    data = response.json()
    assert data["items"][0]["name"] == product.name
    assert data["items"][0]["unit_price"] == "60.00"
    assert data["items_total"] == "120.00"
    assert data["shipping_total"] == "0.00"
    assert data["tax_total"] == "18.00"
    assert data["grand_total"] == "138.00"


def test_readding_product_replaces_entry(
    client: TestClient, user_headers, make_product
) -> None:
    first = make_product(name="First", price="10.00")
    second = make_product(name="Second", price="5.00")
    for product in (first, second):
        client.post(
            "/api/cart",
            json={"product_id": str(product.id), "quantity": 1},
            headers=user_headers,
        )

    response = client.post(
        "/api/cart",
        json={"product_id": str(first.id), "quantity": 3},
        headers=user_headers,
    )

    items = response.json()["items"]
    assert [i["product_id"] for i in items] == [str(first.id), str(second.id)]
    assert items[0]["quantity"] == 3
    assert response.json()["items_total"] == "35.00"


def test_cart_is_persisted_between_requests(
    client: TestClient, user_headers, make_product
) -> None:
    product = make_product()
    client.post(
        "/api/cart",
        json={"product_id": str(product.id), "quantity": 1},
        headers=user_headers,
    )

    data = client.get("/api/cart", headers=user_headers).json()
    assert len(data["items"]) == 1
    assert data["grand_total"] == "79.00"


def test_cart_is_scoped_per_user(
    client: TestClient, user_headers, other_user_headers, make_product
) -> None:
    product = make_product()
    client.post(
        "/api/cart",
        json={"product_id": str(product.id), "quantity": 1},
        headers=user_headers,
    )

    data = client.get("/api/cart", headers=other_user_headers).json()
    assert data["items"] == []


def test_add_rejects_unknown_product_and_overstock(
    client: TestClient, user_headers, make_product
) -> None:
    product = make_product(count_in_stock=2)

    missing = client.post(
        "/api/cart",
        json={"product_id": str(uuid.uuid4()), "quantity": 1},
        headers=user_headers,
    )
    too_many = client.post(
        "/api/cart",
        json={"product_id": str(product.id), "quantity": 3},
        headers=user_headers,
    )

    assert missing.status_code == 404
    assert too_many.status_code == 400


def test_add_rejects_non_positive_quantity(
    client: TestClient, user_headers, make_product
) -> None:
    product = make_product()
    response = client.post(
        "/api/cart",
        json={"product_id": str(product.id), "quantity": 0},
        headers=user_headers,
    )
    assert response.status_code == 422


def test_add_rejects_oversized_quantity(
    client: TestClient, user_headers, make_product
) -> None:
    product = make_product()
    response = client.post(
        "/api/cart",
        json={"product_id": str(product.id), "quantity": 2**63},
        headers=user_headers,
    )
    assert response.status_code == 422


def test_remove_absent_product_is_noop(
    client: TestClient, user_headers, make_product
) -> None:
    product = make_product()
    client.post(
        "/api/cart",
        json={"product_id": str(product.id), "quantity": 1},
        headers=user_headers,
    )

    response = client.delete(f"/api/cart/{uuid.uuid4()}", headers=user_headers)
    assert response.status_code == 200
    assert len(response.json()["items"]) == 1

    response = client.delete(f"/api/cart/{product.id}", headers=user_headers)
    assert response.json()["items"] == []


def test_clear_prices_empty_cart(client: TestClient, user_headers, make_product) -> None:
    product = make_product()
    client.post(
        "/api/cart",
        json={"product_id": str(product.id), "quantity": 1},
        headers=user_headers,
    )

    data = client.delete("/api/cart", headers=user_headers).json()

    assert data["items"] == []
    assert data["items_total"] == "0.00"
    assert data["shipping_total"] == "10.00"
    assert data["tax_total"] == "0.00"
    assert data["grand_total"] == "10.00"


def test_shipping_address_and_payment_method_persist(
    client: TestClient, user_headers
) -> None:
    address = {
        "address": "1 Main St",
        "city": "Springfield",
        "postal_code": "12345",
        "country": "US",
    }
    client.put("/api/cart/shipping-address", json=address, headers=user_headers)
    client.put(
        "/api/cart/payment-method",
        json={"payment_method": "Stripe"},
        headers=user_headers,
    )

    data = client.get("/api/cart", headers=user_headers).json()
    assert data["shipping_address"] == address
    assert data["payment_method"] == "Stripe"


def test_reset_discards_stored_cart(client: TestClient, user_headers, make_product) -> None:
    product = make_product()
    client.post(
        "/api/cart",
        json={"product_id": str(product.id), "quantity": 1},
        headers=user_headers,
    )
    client.put(
        "/api/cart/payment-method",
        json={"payment_method": "Stripe"},
        headers=user_headers,
    )

    reset = client.post("/api/cart/reset", headers=user_headers).json()
    after = client.get("/api/cart", headers=user_headers).json()

    for data in (reset, after):
        assert data["items"] == []
        assert data["payment_method"] == "PayPal"
        assert data["grand_total"] == "0.00"


def test_favorites_add_list_remove(client: TestClient, user_headers, make_product) -> None:
    product = make_product()

    client.post("/api/favorites", json={"product_id": str(product.id)}, headers=user_headers)
    response = client.post(
        "/api/favorites", json={"product_id": str(product.id)}, headers=user_headers
    )
    assert response.status_code == 200
    assert len(response.json()["items"]) == 1
    assert response.json()["items"][0]["price"] == "60.00"

    listed = client.get("/api/favorites", headers=user_headers).json()
    assert [f["product_id"] for f in listed["items"]] == [str(product.id)]

    removed = client.delete(f"/api/favorites/{product.id}", headers=user_headers).json()
    assert removed["items"] == []


def test_favorite_unknown_product_is_404(client: TestClient, user_headers) -> None:
    response = client.post(
        "/api/favorites", json={"product_id": str(uuid.uuid4())}, headers=user_headers
    )
    assert response.status_code == 404
