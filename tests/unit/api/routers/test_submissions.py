"""
Tests for the submissions router.

Covers:
- POST /api/submit: 201, 400 (validation, form type, JSON), 409, 413, 429
- Submit rate limit counts invalid requests and precedes validation
- Notification scheduled after a successful submit only
- GET/DELETE /api/customers|merchants with and without admin credentials
"""

from unittest.mock import MagicMock

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from src.api.main import create_app
from src.infrastructure.exceptions import UpstreamNotifyError
from src.shared.config import Settings


# ============================================================================
# POST /api/submit
# ============================================================================


def test_submit_customer_created(test_client, customer_payload):
    response = test_client.post("/api/submit", json=customer_payload)

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["success"] is True
    assert data["message"] == "Form submitted successfully"
    assert data["id"]


def test_submit_merchant_created(test_client, merchant_payload):
    response = test_client.post("/api/submit", json=merchant_payload)

    assert response.status_code == status.HTTP_201_CREATED


def test_submit_validation_errors(test_client):
    response = test_client.post(
        "/api/submit",
        json={"type": "customer", "name": "Jo", "email": "not-an-email", "style": "vintage", "budget": "cheap"},
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {
        "error": "Validation failed",
        "details": ["Valid email is required", "Invalid budget selection"],
    }


@pytest.mark.parametrize("body", [{"type": "admin"}, {}, {"name": "Jo"}])
def test_submit_invalid_form_type(test_client, body):
    response = test_client.post("/api/submit", json=body)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"] == "Invalid form type"


def test_submit_non_object_json_is_invalid_form_type(test_client):
    response = test_client.post("/api/submit", json=["customer"])

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"] == "Invalid form type"


def test_submit_malformed_json(test_client):
    response = test_client.post(
        "/api/submit", content=b"{type: customer", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": "Invalid JSON body"}


def test_submit_body_too_large(test_client, customer_payload):
    customer_payload["name"] = "x" * 11000

    response = test_client.post("/api/submit", json=customer_payload)

    assert response.status_code == status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    assert response.json() == {"error": "Request body too large"}


def test_submit_chunked_body_too_large(test_client):
    def chunks():
        for _ in range(20):
            yield b" " * 1024

    response = test_client.post(
        "/api/submit", content=chunks(), headers={"Content-Type": "application/json"}
    )

    assert response.status_code == status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    assert response.json() == {"error": "Request body too large"}


def test_submit_deeply_nested_json_is_bad_request(test_client):
    response = test_client.post(
        "/api/submit",
        content=b"[" * 5000 + b"]" * 5000,
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": "Invalid JSON body"}


def test_submit_long_name_is_truncated_not_rejected(test_client, customer_payload, admin_headers):
    customer_payload["name"] = "y" * 500

    assert test_client.post("/api/submit", json=customer_payload).status_code == 201

    stored = test_client.get("/api/customers", headers=admin_headers).json()
    assert stored[0]["name"] == "y" * 200


def test_submit_duplicate_email_conflict(test_client, customer_payload):
    test_client.post("/api/submit", json=customer_payload)
    customer_payload["email"] = "JO@EXAMPLE.COM"

    response = test_client.post("/api/submit", json=customer_payload)

    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json() == {
        "error": "This email has already been registered.",
        "message": "You have already signed up with this email address.",
    }


def test_same_email_allowed_in_other_collection(test_client, customer_payload, merchant_payload):
    merchant_payload["email"] = customer_payload["email"]

    assert test_client.post("/api/submit", json=customer_payload).status_code == 201
    assert test_client.post("/api/submit", json=merchant_payload).status_code == 201


def test_submit_rate_limit_sixth_request_rejected(test_client, customer_payload):
    statuses = []
    for i in range(6):
        customer_payload["email"] = f"user{i}@example.com"
        statuses.append(test_client.post("/api/submit", json=customer_payload).status_code)

    assert statuses == [201, 201, 201, 201, 201, 429]


def test_submit_rate_limit_counts_invalid_requests(test_client, customer_payload):
    for _ in range(5):
        assert test_client.post("/api/submit", json={"type": "nope"}).status_code == 400

    response = test_client.post("/api/submit", json=customer_payload)

    assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
    assert response.json() == {"error": "Too many submissions. Please try again in 15 minutes."}
    assert "retry-after" in response.headers


def test_submit_rate_limit_headers(test_client, customer_payload):
    response = test_client.post("/api/submit", json=customer_payload)

    assert response.headers["ratelimit-limit"] == "5"
    assert response.headers["ratelimit-remaining"] == "4"


def test_submit_schedules_notification(settings, customer_payload):
    notifier = MagicMock()
    background_settings = Settings(
        data_dir=settings.data_dir,
        admin_password=settings.admin_password,
        notifier_mode="background",
    )
    app = create_app(background_settings, notifier=notifier)

    with TestClient(app) as client:
        response = client.post("/api/submit", json=customer_payload)

    assert response.status_code == 201
    notifier.notify.assert_called_once()
    record = notifier.notify.call_args[0][0]
    assert record.id == response.json()["id"]


def test_failed_submit_sends_no_notification(settings, customer_payload):
    notifier = MagicMock()
    background_settings = Settings(data_dir=settings.data_dir, notifier_mode="background")
    app = create_app(background_settings, notifier=notifier)

    with TestClient(app) as client:
        client.post("/api/submit", json={"type": "customer"})

    notifier.notify.assert_not_called()


def test_notification_failure_does_not_affect_response(settings, customer_payload):
    notifier = MagicMock()
    notifier.notify.side_effect = UpstreamNotifyError("SMTP down")
    background_settings = Settings(data_dir=settings.data_dir, notifier_mode="background")

    with TestClient(create_app(background_settings, notifier=notifier)) as client:
        response = client.post("/api/submit", json=customer_payload)

    assert response.status_code == status.HTTP_201_CREATED
    notifier.notify.assert_called_once()


# ============================================================================
# GET /api/customers, /api/merchants
# ============================================================================


def test_list_requires_admin(test_client):
    response = test_client.get("/api/customers")

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"error": "Unauthorized"}


def test_list_rejects_wrong_secret(test_client):
    response = test_client.get("/api/merchants", headers={"Authorization": "Bearer nope"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_list_returns_newest_first(test_client, customer_payload, admin_headers):
    for name in ("First", "Second"):
        customer_payload["name"] = name
        customer_payload["email"] = f"{name.lower()}@example.com"
        test_client.post("/api/submit", json=customer_payload)

    response = test_client.get("/api/customers", headers=admin_headers)

    assert response.status_code == status.HTTP_200_OK
    assert [r["name"] for r in response.json()] == ["Second", "First"]
    assert set(response.json()[0]) == {"id", "name", "email", "style", "budget", "submittedAt"}


def test_list_open_when_admin_not_required(data_dir, customer_payload):
    settings = Settings(
        data_dir=str(data_dir), notifier_mode="disabled", require_admin_for_list=False
    )
    with TestClient(create_app(settings)) as client:
        client.post("/api/submit", json=customer_payload)
        response = client.get("/api/customers")

    assert response.status_code == status.HTTP_200_OK
    assert len(response.json()) == 1


def test_list_rejected_when_no_secret_configured(data_dir):
    settings = Settings(data_dir=str(data_dir), notifier_mode="disabled", admin_password=None)
    with TestClient(create_app(settings)) as client:
        response = client.get("/api/customers", headers={"Authorization": "Bearer "})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


# ============================================================================
# DELETE /api/customers/{id}, /api/merchants/{id}
# ============================================================================


def test_delete_customer(test_client, customer_payload, admin_headers):
    record_id = test_client.post("/api/submit", json=customer_payload).json()["id"]

    response = test_client.delete(f"/api/customers/{record_id}", headers=admin_headers)

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"success": True, "message": "Customer deleted"}
    assert test_client.get("/api/customers", headers=admin_headers).json() == []


def test_delete_unknown_merchant(test_client, admin_headers):
    response = test_client.delete("/api/merchants/does-not-exist", headers=admin_headers)

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "Merchant not found"}


def test_delete_requires_admin(test_client, customer_payload, admin_headers):
    record_id = test_client.post("/api/submit", json=customer_payload).json()["id"]

    response = test_client.delete(f"/api/customers/{record_id}")

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert len(test_client.get("/api/customers", headers=admin_headers).json()) == 1


def test_delete_twice_second_is_not_found(test_client, merchant_payload, admin_headers):
    record_id = test_client.post("/api/submit", json=merchant_payload).json()["id"]

    first = test_client.delete(f"/api/merchants/{record_id}", headers=admin_headers)
    second = test_client.delete(f"/api/merchants/{record_id}", headers=admin_headers)

    assert first.status_code == status.HTTP_200_OK
    assert second.status_code == status.HTTP_404_NOT_FOUND
