"""ViaCEP postal code client.

Resolves a Brazilian postal code (CEP) to street, neighborhood, city
and state through the public ViaCEP API::

    GET {base_url}/{cep}/json/

ViaCEP answers unknown codes with ``200 {"erro": true}`` rather than a
404, so the body has to be inspected.  Both that case and an empty
body raise :class:`NotFoundError`.  Network failures, non‑2xx
responses, bodies that are not a JSON object and objects whose fields
have the wrong type raise
:class:`PostalCodeLookupError`, which is itself a ``NotFoundError``.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests
from pydantic import ValidationError

from ..core.config import settings
from ..core.errors import NotFoundError, PostalCodeLookupError
from ..schemas.enrollment import ViaCepAddress


logger = logging.getLogger(__name__)


class ViaCepClient:
    """Thin wrapper around the ViaCEP endpoint."""

    def __init__(
        self,
        *,
        base_url: str,
        timeout: float = 10,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialise the client.

        Args:
            base_url: ViaCEP base URL, e.g. ``https://viacep.com.br/ws``.
            timeout: Seconds to wait for the provider before giving up.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _url(self, cep: str) -> str:
        code = cep.strip().replace("-", "", 1)
        return f"{self.base_url}/{quote(code, safe='')}/json/"

    def _fetch(self, cep: str) -> Optional[Dict[str, Any]]:
        url = self._url(cep)
        try:
            logger.debug("Sending GET request to %s", url)
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            if not response.content:
                return None
            data = response.json()
        except requests.RequestException as exc:
            logger.warning("ViaCEP request for %s failed: %s", cep, exc)
            raise PostalCodeLookupError(f"ViaCEP request failed: {exc}") from exc
        except ValueError as exc:
            logger.warning("ViaCEP returned a malformed body for %s: %s", cep, exc)
            raise PostalCodeLookupError("ViaCEP returned a malformed body") from exc
        if data is not None and not isinstance(data, dict):
            logger.warning("ViaCEP returned an unexpected body for %s: %r", cep, data)
            raise PostalCodeLookupError("ViaCEP returned an unexpected body")
        return data

    def get_address(self, cep: str) -> ViaCepAddress:
        """Resolve ``cep`` to its address fields.

        Raises:
            NotFoundError: ViaCEP has no address for the code.
            PostalCodeLookupError: the provider could not be queried or
                answered with fields of the wrong type.
        """
        data = self._fetch(cep)
        if not data or _is_error_flag(data.get("erro")):
            logger.info("CEP %s not found", cep)
            raise NotFoundError()
        try:
            return ViaCepAddress(
                street=data.get("logradouro"),
                complement=data.get("complemento"),
                neighborhood=data.get("bairro"),
                city=data.get("localidade"),
                state_code=data.get("uf"),
            )
        except ValidationError as exc:
            logger.warning("ViaCEP returned unexpected field types for %s: %s", cep, exc)
            raise PostalCodeLookupError("ViaCEP returned a malformed body") from exc


def _is_error_flag(value: Any) -> bool:
    # Older responses send a boolean, newer ones the string "true".
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)


@lru_cache(maxsize=1)
def get_cep_client() -> ViaCepClient:
    """Return the process-wide client configured from settings."""
    return ViaCepClient(base_url=settings.via_cep_base_url, timeout=settings.via_cep_timeout)
