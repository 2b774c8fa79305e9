"""
Enrollment endpoints for API v1.

Every route acts on the enrollment of the user identified by the
bearer token.
"""

from fastapi import APIRouter, Depends, Query, Response, status

from enrollment_api.app.core.errors import NotFoundError
from enrollment_api.app.core.security import get_current_user_id
from enrollment_api.app.schemas.enrollment import (
    EnrollmentBody,
    EnrollmentRead,
    EnrollmentWithAddressCreate,
    ViaCepAddress,
)
from enrollment_api.app.services.enrollment_service import EnrollmentService


router = APIRouter()


@router.get("/", response_model=EnrollmentRead, response_model_exclude_unset=True)
async def get_enrollment(user_id: int = Depends(get_current_user_id)) -> EnrollmentRead:
    """Return the caller's enrollment and, when present, its address."""
    return await EnrollmentService.get_enrollment_with_address(user_id)


@router.post("/", status_code=status.HTTP_200_OK, response_class=Response)
async def post_enrollment(body: EnrollmentBody, user_id: int = Depends(get_current_user_id)) -> Response:
    """Create or update the caller's enrollment.

    Responds 400 with ``["CEP inválido"]`` when ViaCEP does not know
    the postal code.
    """
    params = EnrollmentWithAddressCreate(user_id=user_id, **body.model_dump(exclude_unset=True))
    await EnrollmentService.upsert_enrollment_with_address(params)
    return Response(status_code=status.HTTP_200_OK)


@router.get("/cep", response_model=ViaCepAddress, responses={204: {"description": "Unknown CEP"}})
async def get_address_from_cep(cep: str = Query(..., examples=["01001-000"])):
    """Look up a postal code; 204 with an empty body when it cannot be resolved."""
    try:
        return await EnrollmentService.get_address_from_cep(cep)
    except NotFoundError:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
