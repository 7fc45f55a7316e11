"""Tests for the studio HTTP endpoints."""

from fastapi.testclient import TestClient

from barber_studio.api.app import create_app
from barber_studio.domain.errors import CorruptRecordError
from barber_studio.services.styling import EMPTY_RESPONSE_MESSAGE, ResponsePart
from tests.conftest import (
    PNG_BYTES,
    STYLED_BYTES,
    FakeStylingClient,
    InMemoryKeyValueStore,
)


def _upload(client: TestClient) -> None:
    response = client.post(
        "/studio/image", content=PNG_BYTES, headers={"Content-Type": "image/png"}
    )
    assert response.status_code == 200


def test_health(container) -> None:
    with TestClient(create_app(container)) as client:
        response = client.get("/health")

    assert response.json() == {"status": "ok"}


def test_catalog_lists_options(container) -> None:
    with TestClient(create_app(container)) as client:
        data = client.get("/studio/catalog").json()

    assert len(data["hairstyles"]) == 12
    assert len(data["beardStyles"]) == 9
    assert data["defaults"] == {
        "hairstyle": "Quiff",
        "beardStyle": "Stubble",
        "color": "#3d2b1f",
    }


def test_initial_state_is_idle(container) -> None:
    with TestClient(create_app(container)) as client:
        data = client.get("/studio/state").json()

    assert data["phase"] == "idle"
    assert data["originalImage"] is None
    assert data["currentUser"] is None
    assert data["favorites"] == []


def test_upload_generate_save_and_export(container) -> None:
    with TestClient(create_app(container)) as client:
        client.post("/auth/sign-in", json={"email": "alex@example.com"})
        _upload(client)
        client.put(
            "/studio/options",
            json={
                "hairstyle": "Buzz Cut",
                "beardStyle": "Clean Shaven",
                "color": "#000",
            },
        )
        generated = client.post("/studio/generate").json()
        saved = client.post("/studio/favorites").json()
        export = client.get("/studio/export")

    assert generated["phase"] == "generated"
    assert generated["generatedImage"].startswith("data:image/png;base64,")
    assert saved["favorites"][0]["options"]["hairstyle"] == "Buzz Cut"
    assert export.status_code == 200
    assert export.content == STYLED_BYTES
    assert export.headers["content-type"] == "image/png"


def test_upload_rejects_non_image_content(container) -> None:
    with TestClient(create_app(container)) as client:
        response = client.post(
            "/studio/image", content=b"hello", headers={"Content-Type": "text/plain"}
        )

    assert response.status_code == 415


def test_generate_failure_is_reported_in_state(
    container, styling_client: FakeStylingClient
) -> None:
    styling_client.parts = [ResponsePart(text="nope")]
    with TestClient(create_app(container)) as client:
        _upload(client)
        response = client.post("/studio/generate")

    assert response.status_code == 200
    assert response.json()["phase"] == "failed"
    assert response.json()["error"] == EMPTY_RESPONSE_MESSAGE


def test_export_without_result_is_not_found(container) -> None:
    with TestClient(create_app(container)) as client:
        response = client.get("/studio/export")

    assert response.status_code == 404


def test_options_reject_unknown_hairstyle(container) -> None:
    with TestClient(create_app(container)) as client:
        response = client.put(
            "/studio/options",
            json={"hairstyle": "Mullet", "beardStyle": "Goatee", "color": "#fff"},
        )

    assert response.status_code == 422


def test_sign_in_requires_email(container) -> None:
    with TestClient(create_app(container)) as client:
        response = client.post("/auth/sign-in", json={"email": "", "name": "Alex"})

    assert response.status_code == 422


def test_sign_in_and_sign_out(
    container, key_value_store: InMemoryKeyValueStore
) -> None:
    with TestClient(create_app(container)) as client:
        signed_in = client.post(
            "/auth/sign-in", json={"email": "alex@example.com", "name": "Alex"}
        ).json()
        signed_out = client.post("/auth/sign-out").json()

    assert signed_in["currentUser"]["name"] == "Alex"
    assert signed_out["currentUser"] is None
    assert "barber_user" not in key_value_store.entries


def test_startup_restores_persisted_user(container) -> None:
    container.profile_store.store.set(
        "barber_user", '{"id": "42", "email": "sam@example.com", "name": "sam"}'
    )

    with TestClient(create_app(container)) as client:
        data = client.get("/studio/state").json()

    assert data["currentUser"] == {
        "id": "42",
        "email": "sam@example.com",
        "name": "sam",
    }


class _UnwritableStore(InMemoryKeyValueStore):
    def set(self, key: str, value: str) -> None:
        raise CorruptRecordError(key)


def test_store_failures_return_conflict(container) -> None:
    container.profile_store.store = _UnwritableStore()

    with TestClient(create_app(container)) as client:
        response = client.post("/auth/sign-in", json={"email": "alex@example.com"})

    assert response.status_code == 409
    assert "barber_user" in response.json()["detail"]


def test_options_accept_free_form_color(container) -> None:
    with TestClient(create_app(container)) as client:
        response = client.put(
            "/studio/options",
            json={
                "hairstyle": "Afro",
                "beardStyle": "Goatee",
                "color": "warm chestnut",
            },
        )

    assert response.status_code == 200
    assert response.json()["options"]["color"] == "warm chestnut"
