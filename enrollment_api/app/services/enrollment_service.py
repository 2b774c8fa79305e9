"""
Business logic for enrollments.

An enrollment is a user's registration record plus one postal
address.  ``EnrollmentService`` reads it back in its public shape and
writes it after confirming with ViaCEP that the postal code exists.
The enrollment and address writes share one transaction, so a failed
address write does not leave a half‑saved enrollment behind.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

from ..core.db import transaction
from ..core.errors import invalid_data_error, not_found_error
from ..repositories.address_repository import AddressRepository
from ..repositories.enrollment_repository import EnrollmentRepository
from ..schemas.enrollment import (
    AddressCreate,
    AddressRead,
    EnrollmentRead,
    EnrollmentWithAddressCreate,
    ViaCepAddress,
)
from .cep_client import ViaCepClient, get_cep_client


logger = logging.getLogger(__name__)

INVALID_CEP_MESSAGE = "CEP inválido"


class EnrollmentService:
    """Service for enrollments and their addresses."""

    @classmethod
    async def get_address_from_cep(cls, cep: str, cep_client: Optional[ViaCepClient] = None) -> ViaCepAddress:
        """Resolve a postal code through ViaCEP.

        ``NotFoundError`` (including its ``PostalCodeLookupError``
        subclass) propagates to the caller unchanged.
        """
        client = cep_client or get_cep_client()
        # requests blocks; keep the event loop free while ViaCEP answers.
        return await asyncio.to_thread(client.get_address, cep)

    @classmethod
    async def get_enrollment_with_address(cls, user_id: int) -> EnrollmentRead:
        """Return the user's enrollment with its first address.

        Raises ``NotFoundError`` if the user has no enrollment.  The
        ``address`` field is only set when an address is stored.
        """
        enrollment = EnrollmentRepository.find_with_address_by_user_id(user_id)
        if not enrollment:
            raise not_found_error()

        data = {key: value for key, value in enrollment.items() if key != "addresses"}
        addresses = enrollment["addresses"]
        if addresses:
            data["address"] = AddressRead.model_validate(addresses[0])
        return EnrollmentRead.model_validate(data)

    @classmethod
    async def upsert_enrollment_with_address(
        cls,
        params: EnrollmentWithAddressCreate,
        cep_client: Optional[ViaCepClient] = None,
    ) -> None:
        """Validate the postal code, then save the enrollment and its address.

        Any lookup failure becomes ``InvalidDataError(["CEP inválido"])``.
        Database errors propagate unchanged; if the address write fails
        the enrollment write is rolled back with it.
        """
        try:
            await cls.get_address_from_cep(params.address.postal_code, cep_client=cep_client)
        except Exception as exc:
            logger.info("Rejected enrollment for user %s: %s", params.user_id, exc)
            raise invalid_data_error([INVALID_CEP_MESSAGE]) from exc

        enrollment = params.model_dump(mode="json", exclude={"address"}, exclude_unset=True)
        enrollment["user_id"] = params.user_id
        enrollment_update = {key: value for key, value in enrollment.items() if key != "user_id"}
        address = _address_for_upsert(params.address)

        with transaction() as conn:
            stored = EnrollmentRepository.upsert(params.user_id, enrollment, enrollment_update, conn=conn)
            AddressRepository.upsert(stored["id"], address, address, conn=conn)
        logger.info("Saved enrollment %s for user %s", stored["id"], params.user_id)


def _address_for_upsert(address: AddressCreate) -> Dict[str, Any]:
    # Fields the client left out keep their stored value on update;
    # an empty address_detail is treated as left out.
    fields = address.model_dump(mode="json", exclude_unset=True)
    if not fields.get("address_detail"):
        fields.pop("address_detail", None)
    return fields
