"""
Pytest configuration and shared fixtures for the Enrollment API tests
"""
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from enrollment_api.app.core import db
from enrollment_api.app.core.config import settings
from enrollment_api.app.services.cep_client import ViaCepClient


VIA_CEP_SE = {
    "cep": "01001-000",
    "logradouro": "Praça da Sé",
    "complemento": "lado ímpar",
    "bairro": "Sé",
    "localidade": "São Paulo",
    "uf": "SP",
    "ibge": "3550308",
    "ddd": "11",
}


@pytest.fixture
def database(tmp_path, monkeypatch):
    """Point the app at a fresh SQLite file with migrations applied."""
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "enrollments.db"))
    db.init_db()
    return tmp_path / "enrollments.db"


def make_response(payload=None, status_code=200, content=None):
    """Build a stand-in for ``requests.Response``."""
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    if content is None:
        content = b"" if payload is None else b"{...}"
    response.content = content
    response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
    return response


def make_cep_client(payload=None, **kwargs):
    """ViaCepClient whose session answers every GET with ``payload``."""
    session = MagicMock(spec=requests.Session)
    session.get.return_value = make_response(payload, **kwargs)
    return ViaCepClient(base_url="https://viacep.test/ws", session=session)


@pytest.fixture
def cep_found():
    return make_cep_client(VIA_CEP_SE)


@pytest.fixture
def cep_not_found():
    return make_cep_client({"erro": True})


def fetch_all(table):
    conn = db.get_connection()
    try:
        return [db.row_to_dict(row) for row in conn.execute(f"SELECT * FROM {table} ORDER BY id")]
    finally:
        conn.close()
