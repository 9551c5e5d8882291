import uuid

from fastapi.testclient import TestClient

from conftest import make_token


def test_first_request_provisions_profile(client: TestClient, user_headers) -> None:
    response = client.get("/api/users/me", headers=user_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["email"] == "alice@storefront.dev"
    assert data["username"] == "alice"
    assert data["role"] == "user"


def test_profile_is_provisioned_once(client: TestClient, user_headers) -> None:
    first = client.get("/api/users/me", headers=user_headers).json()
    second = client.get("/api/users/me", headers=user_headers).json()
    assert first == second


def test_me_requires_token(client: TestClient) -> None:
    assert client.get("/api/users/me").status_code == 401


def test_invalid_token_is_rejected(client: TestClient) -> None:
    response = client.get(
        "/api/users/me", headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert response.status_code == 401


def test_expired_token_is_rejected(client: TestClient) -> None:
    token = make_token(uuid.uuid4(), "late@storefront.dev", expires_in=-60)
    response = client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_token_from_cookie(client: TestClient) -> None:
    client.cookies.set("jwt", make_token(uuid.uuid4(), "carol@storefront.dev"))

    response = client.get("/api/users/me")

    assert response.status_code == 200
    assert response.json()["username"] == "carol"


def test_logout_clears_cookie(client: TestClient) -> None:
    client.cookies.set("jwt", make_token(uuid.uuid4(), "carol@storefront.dev"))

    response = client.post("/api/users/logout")

    assert response.status_code == 200
    assert response.json() == {"message": "Logged out successfully"}
    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith("jwt=")
    assert "Max-Age=0" in set_cookie


def test_update_username(client: TestClient, user_headers) -> None:
    response = client.put(
        "/api/users/me", json={"username": "  Alice L "}, headers=user_headers
    )
    assert response.status_code == 200
    assert response.json()["username"] == "Alice L"

    blank = client.put("/api/users/me", json={"username": " "}, headers=user_headers)
    assert blank.status_code == 422

    email = client.put(
        "/api/users/me",
        json={"username": "a", "email": "x@storefront.dev"},
        headers=user_headers,
    )
    assert email.status_code == 422


def test_admin_promotes_user(client: TestClient, user_headers, admin_headers) -> None:
    user_id = client.get("/api/users/me", headers=user_headers).json()["id"]

    response = client.put(
        f"/api/users/{user_id}", json={"role": "admin"}, headers=admin_headers
    )

    assert response.status_code == 200
    assert response.json()["role"] == "admin"
    assert response.json()["username"] == "alice"
    assert client.get("/api/users", headers=user_headers).status_code == 200


def test_admin_cannot_change_own_role(client: TestClient, admin_headers) -> None:
    admin_id = client.get("/api/users/me", headers=admin_headers).json()["id"]

    response = client.put(
        f"/api/users/{admin_id}", json={"role": "user"}, headers=admin_headers
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Cannot change your own role"


def test_list_users_search(
    client: TestClient, user_headers, other_user_headers, admin_headers
) -> None:
    client.get("/api/users/me", headers=user_headers)
    client.get("/api/users/me", headers=other_user_headers)

    everyone = client.get("/api/users", headers=admin_headers).json()
    bobs = client.get("/api/users", params={"search": "BOB"}, headers=admin_headers).json()

    assert len(everyone) == 3
    assert [u["email"] for u in bobs] == ["bob@storefront.dev"]


def test_non_admin_cannot_manage_users(client: TestClient, user_headers) -> None:
    assert client.get("/api/users", headers=user_headers).status_code == 403
    assert (
        client.put(
            f"/api/users/{uuid.uuid4()}", json={"role": "admin"}, headers=user_headers
        ).status_code
        == 403
    )


def test_delete_user(client: TestClient, user_headers, admin_headers) -> None:
    user_id = client.get("/api/users/me", headers=user_headers).json()["id"]

    response = client.delete(f"/api/users/{user_id}", headers=admin_headers)

    assert response.status_code == 204
    assert client.get(f"/api/users/{user_id}", headers=admin_headers).status_code == 404


def test_admin_cannot_be_deleted(client: TestClient, admin_headers) -> None:
    admin_id = client.get("/api/users/me", headers=admin_headers).json()["id"]

    response = client.delete(f"/api/users/{admin_id}", headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["detail"] == "Cannot delete admin user"


def test_user_with_orders_cannot_be_deleted(
    client: TestClient, user_headers, admin_headers, make_product
) -> None:
    product = make_product()
    client.post(
        "/api/orders",
        json={
            "order_items": [{"product_id": str(product.id), "quantity": 1}],
            "shipping_address": {
                "address": "1 Main St",
                "city": "Springfield",
                "postal_code": "12345",
                "country": "US",
            },
            "payment_method": "PayPal",
        },
        headers=user_headers,
    )
    user_id = client.get("/api/users/me", headers=user_headers).json()["id"]

    response = client.delete(f"/api/users/{user_id}", headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["detail"] == "Cannot delete a user with orders"


def test_deleting_user_drops_reviews_and_state(
    client: TestClient, user_headers, other_user_headers, admin_headers, make_product
) -> None:
    product = make_product()
    url = f"/api/products/{product.id}/reviews"
    client.post(url, json={"rating": 1, "comment": "Bad"}, headers=user_headers)
    client.post(url, json={"rating": 5, "comment": "Good"}, headers=other_user_headers)
    client.post(
        "/api/favorites", json={"product_id": str(product.id)}, headers=user_headers
    )
    user_id = client.get("/api/users/me", headers=user_headers).json()["id"]

    assert client.delete(f"/api/users/{user_id}", headers=admin_headers).status_code == 204

    detail = client.get(f"/api/products/{product.id}").json()
    assert detail["num_reviews"] == 1
    assert detail["rating"] == 5.0


def test_email_owned_by_another_profile_conflicts(
    client: TestClient, user_headers
) -> None:
    client.get("/api/users/me", headers=user_headers)
    reused = {
        "Authorization": f"Bearer {make_token(uuid.uuid4(), 'alice@storefront.dev')}"
    }

    response = client.get("/api/users/me", headers=reused)

    assert response.status_code == 409
    assert "alice@storefront.dev" in response.json()["detail"]
    # the original profile is untouched and the session still usable
    assert client.get("/api/users/me", headers=user_headers).status_code == 200
