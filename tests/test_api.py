"""HTTP tests for the enrollment routes."""

import pytest
from fastapi.testclient import TestClient

from conftest import VIA_CEP_SE, make_cep_client
from enrollment_api.app.core.security import create_access_token
from enrollment_api.app.main import app


BODY = {
    "name": "Ana",
    "document_id": "529.982.247-25",
    "birth_date": "1990-04-21",
    "address": {
        "postal_code": "01001-000",
        "street": "Praça da Sé",
        "city": "São Paulo",
        "state_code": "SP",
        "neighborhood": "Sé",
    },
}


@pytest.fixture
def client(database):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth():
    return {"Authorization": f"Bearer {create_access_token({'sub': '7'})}"}


@pytest.fixture
def via_cep(monkeypatch):
    def install(payload):
        lookup = make_cep_client(payload)
        monkeypatch.setattr(
            "enrollment_api.app.services.enrollment_service.get_cep_client", lambda: lookup
        )
        return lookup

    return install


def test_requires_token(client) -> None:
    response = client.get("/api/v1/enrollments/")
    assert response.status_code == 401
    assert response.json()["name"] == "UnauthorizedError"


def test_missing_enrollment_is_404(client, auth) -> None:
    response = client.get("/api/v1/enrollments/", headers=auth)
    assert response.status_code == 404
    assert response.json() == {"name": "NotFoundError", "message": "No result for this search!"}


def test_post_then_get(client, auth, via_cep) -> None:
    via_cep(VIA_CEP_SE)

    response = client.post("/api/v1/enrollments/", json=BODY, headers=auth)
    assert response.status_code == 200
    assert response.content == b""

    body = client.get("/api/v1/enrollments/", headers=auth).json()
    assert body["name"] == "Ana"
    assert body["document_id"] == "52998224725"
    assert body["birth_date"] == "1990-04-21"
    assert body["address"]["postal_code"] == "01001-000"
    assert "user_id" not in body
    assert "created_at" not in body
    assert "enrollment_id" not in body["address"]


def test_post_with_unknown_cep_is_400(client, auth, via_cep) -> None:
    via_cep({"erro": "true"})

    response = client.post("/api/v1/enrollments/", json=BODY, headers=auth)

    assert response.status_code == 400
    assert response.json()["details"] == ["CEP inválido"]
    assert client.get("/api/v1/enrollments/", headers=auth).status_code == 404


def test_post_with_invalid_body_is_422(client, auth, via_cep) -> None:
    via_cep(VIA_CEP_SE)
    response = client.post(
        "/api/v1/enrollments/", json={**BODY, "document_id": "123"}, headers=auth
    )
    assert response.status_code == 422


def test_cep_lookup(client, via_cep) -> None:
    lookup = via_cep(VIA_CEP_SE)
    response = client.get("/api/v1/enrollments/cep", params={"cep": "01001-000"})
    assert response.status_code == 200
    assert response.json()["city"] == "São Paulo"
    lookup.session.get.assert_called_once()


def test_malformed_cep_lookup_is_204(client, via_cep) -> None:
    via_cep({**VIA_CEP_SE, "complemento": {"x": 1}})
    response = client.get("/api/v1/enrollments/cep", params={"cep": "01001-000"})
    assert response.status_code == 204


def test_unknown_cep_lookup_is_204(client, via_cep) -> None:
    via_cep({"erro": True})
    response = client.get("/api/v1/enrollments/cep", params={"cep": "99999-999"})
    assert response.status_code == 204
    assert response.content == b""
