import uuid

from fastapi.testclient import TestClient


def test_list_categories_is_public(client: TestClient, category) -> None:
    response = client.get("/api/category/categories")

    assert response.status_code == 200
    assert [c["name"] for c in response.json()] == ["Phones"]


def test_create_and_read_category(client: TestClient, admin_headers) -> None:
    created = client.post(
        "/api/category", json={"name": "  Laptops "}, headers=admin_headers
    )

    assert created.status_code == 201
    assert created.json()["name"] == "Laptops"

    read = client.get(f"/api/category/{created.json()['id']}")
    assert read.json()["name"] == "Laptops"


def test_duplicate_category_is_rejected(client: TestClient, admin_headers, category) -> None:
    response = client.post(
        "/api/category", json={"name": "Phones"}, headers=admin_headers
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Category already exists"


def test_create_category_requires_admin(client: TestClient, user_headers) -> None:
    response = client.post("/api/category", json={"name": "Tablets"}, headers=user_headers)
    assert response.status_code == 403


def test_rename_category(client: TestClient, admin_headers, category) -> None:
    response = client.put(
        f"/api/category/{category.id}",
        json={"name": "Smartphones"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["name"] == "Smartphones"


def test_category_in_use_cannot_be_deleted(
    client: TestClient, admin_headers, make_product, category
) -> None:
    make_product()

    response = client.delete(f"/api/category/{category.id}", headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Category still has products"


def test_delete_empty_category(client: TestClient, admin_headers, category) -> None:
    response = client.delete(f"/api/category/{category.id}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["name"] == "Phones"
    assert client.get(f"/api/category/{category.id}").status_code == 404


def test_unknown_category_is_404(client: TestClient) -> None:
    assert client.get(f"/api/category/{uuid.uuid4()}").status_code == 404
