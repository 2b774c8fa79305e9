"""Tests for enrollment payload validation."""

import pytest
from pydantic import ValidationError

from enrollment_api.app.schemas.enrollment import (
    AddressCreate,
    EnrollmentBody,
    EnrollmentWithAddressCreate,
    is_valid_cpf,
)


ADDRESS = {
    "postal_code": "01001-000",
    "street": "Praça da Sé",
    "city": "São Paulo",
    "state_code": "SP",
}


class TestCpf:
    @pytest.mark.parametrize("value", ["529.982.247-25", "52998224725", "111.444.777-35"])
    def test_valid(self, value) -> None:
        assert is_valid_cpf(value)

    @pytest.mark.parametrize("value", ["529.982.247-24", "111.111.111-11", "1234567890", ""])
    def test_invalid(self, value) -> None:
        assert not is_valid_cpf(value)


class TestAddressCreate:
    def test_state_code_is_upper_cased(self) -> None:
        assert AddressCreate(**{**ADDRESS, "state_code": "rj"}).state_code == "RJ"

    def test_unknown_state_rejected(self) -> None:
        with pytest.raises(ValidationError):
            AddressCreate(**{**ADDRESS, "state_code": "XX"})

    @pytest.mark.parametrize("postal_code", ["0100-1000", "abcde-fgh", "010010000"])
    def test_malformed_postal_code_rejected(self, postal_code) -> None:
        with pytest.raises(ValidationError):
            AddressCreate(**{**ADDRESS, "postal_code": postal_code})

    def test_street_required(self) -> None:
        with pytest.raises(ValidationError):
            AddressCreate(**{k: v for k, v in ADDRESS.items() if k != "street"})


class TestEnrollmentBody:
    def test_document_id_is_normalised(self) -> None:
        body = EnrollmentBody(name="Ana", document_id="529.982.247-25", address=ADDRESS)
        assert body.document_id == "52998224725"

    def test_invalid_cpf_rejected(self) -> None:
        with pytest.raises(ValidationError):
            EnrollmentBody(name="Ana", document_id="529.982.247-24", address=ADDRESS)

    def test_bad_phone_rejected(self) -> None:
        with pytest.raises(ValidationError):
            EnrollmentBody(name="Ana", phone="11 9", address=ADDRESS)

    def test_user_id_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            EnrollmentWithAddressCreate(user_id=0, name="Ana", address=ADDRESS)
