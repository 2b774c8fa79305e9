"""
Pydantic models for enrollments and their postal address.

``EnrollmentWithAddressCreate`` is what the writer accepts;
``EnrollmentRead`` and ``AddressRead`` are the public projections
returned by the reader.  The read models list their fields
explicitly, so internal columns (``user_id``, ``enrollment_id`` and
the timestamps) never reach a response even if the tables grow.
"""

import re
from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, field_validator


BRAZILIAN_STATES = frozenset({
    "AC", "AL", "AP", "AM", "BA", "CE", "DF", "ES", "GO", "MA", "MT", "MS", "MG", "PA",
    "PB", "PR", "PE", "PI", "RJ", "RN", "RS", "RO", "RR", "SC", "SP", "SE", "TO",
})

POSTAL_CODE_PATTERN = r"^\d{5}-?\d{3}$"
PHONE_PATTERN = r"^\(\d{2}\) ?\d{4,5}-?\d{4}$"


def is_valid_cpf(value: str) -> bool:
    """Check a CPF's length and both check digits.

    Punctuation is ignored; sequences of a repeated digit
    (``111.111.111-11``) are rejected even though their digits check.
    """
    digits = re.sub(r"\D", "", value)
    if len(digits) != 11 or digits == digits[0] * 11:
        return False
    for size in (9, 10):
        total = sum(int(d) * weight for d, weight in zip(digits[:size], range(size + 1, 1, -1)))
        check = (total * 10) % 11 % 10
        if check != int(digits[size]):
            return False
    return True


class AddressBase(BaseModel):
    postal_code: str = Field(..., pattern=POSTAL_CODE_PATTERN, examples=["01001-000"])
    street: str = Field(..., min_length=1, examples=["Praça da Sé"])
    number: Optional[str] = Field(None, examples=["100"])
    complement: Optional[str] = Field(None, examples=["lado ímpar"])
    neighborhood: Optional[str] = Field(None, examples=["Sé"])
    city: str = Field(..., min_length=1, examples=["São Paulo"])
    state_code: str = Field(..., examples=["SP"])
    address_detail: Optional[str] = Field(None, examples=["Apto 12"])


class AddressCreate(AddressBase):
    """Address submitted together with an enrollment."""

    @field_validator("state_code")
    @classmethod
    def _known_state(cls, value: str) -> str:
        value = value.upper()
        if value not in BRAZILIAN_STATES:
            raise ValueError("state_code must be a Brazilian UF code")
        return value


class AddressRead(AddressBase):
    """Public view of a stored address."""

    id: int

    # Stored rows were validated on the way in.
    postal_code: str

    model_config = {
        "from_attributes": True,
    }


class EnrollmentBase(BaseModel):
    name: str = Field(..., min_length=1, examples=["Ana"])
    document_id: Optional[str] = Field(None, examples=["529.982.247-25"], description="CPF")
    birth_date: Optional[date] = Field(None, examples=["1990-04-21"])
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN, examples=["(11) 98765-4321"])


class EnrollmentBody(EnrollmentBase):
    """Enrollment payload as posted by an authenticated client.

    The user id is not part of the body; the route takes it from the
    bearer token.
    """

    address: AddressCreate

    @field_validator("document_id")
    @classmethod
    def _valid_cpf(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        if not is_valid_cpf(value):
            raise ValueError("document_id is not a valid CPF")
        return re.sub(r"\D", "", value)


class EnrollmentWithAddressCreate(EnrollmentBody):
    """Full writer input: the enrollment, its owner and its address."""

    user_id: int = Field(..., gt=0)


class EnrollmentRead(EnrollmentBase):
    """Public view of an enrollment.

    ``address`` is left unset when the enrollment has no address, so
    ``model_dump(exclude_unset=True)`` omits the key entirely.
    """

    id: int
    address: Optional[AddressRead] = None

    # Stored rows were validated on the way in.
    phone: Optional[str] = None

    model_config = {
        "from_attributes": True,
    }


class ViaCepAddress(BaseModel):
    """Address fields resolved by ViaCEP for a postal code."""

    street: Optional[str] = None
    complement: Optional[str] = None
    neighborhood: Optional[str] = None
    city: Optional[str] = None
    state_code: Optional[str] = None
