"""
Registration, login and profile endpoints.
"""

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import JSONResponse

from user_service.api.deps import CurrentUserId, Identities
from user_service.kernel.identity.outcomes import Conflict, NotFound, WrongCredential
from user_service.kernel.identity.validation import (
    validate_profile_update,
    validate_registration,
)
from user_service.schemas.common import SuccessResponse, ValidationErrorResponse
from user_service.schemas.user import (
    LoginRequest,
    LoginResponse,
    ProfileResponse,
    ProfileUpdateRequest,
    RegistrationRequest,
    RegistrationResponse,
)

router = APIRouter()

PHONE_NUMBER_TAKEN = "Phone number already used"


def _validation_error(outcome: dict[str, str]) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ValidationErrorResponse.from_outcome(outcome).model_dump(),
    )


@router.post(
    "/registration",
    response_model=RegistrationResponse,
    responses={400: {"model": ValidationErrorResponse}},
)
async def register(data: RegistrationRequest, identities: Identities):
    """
    Register a new user account.
    
    All three fields are validated together and every violation is reported.
    """
    errors = validate_registration(data.phone_number, data.full_name, data.password)
    if errors:
        return _validation_error(errors)
    
    outcome = await identities.register_user(
        phone_number=data.phone_number,
        full_name=data.full_name,
        password=data.password,
    )
    
    if isinstance(outcome, Conflict):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=PHONE_NUMBER_TAKEN,
        )
    
    return RegistrationResponse(id=str(outcome.value))


@router.post("/login", response_model=LoginResponse)
async def login(data: LoginRequest, identities: Identities):
    """Authenticate with phone number and password and return a token."""
    outcome = await identities.authenticate(
        phone_number=data.phone_number,
        password=data.password,
    )
    
    if isinstance(outcome, NotFound):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Phone number not found",
        )
    
    if isinstance(outcome, WrongCredential):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Wrong password",
        )
    
    return LoginResponse(token=outcome.value.token)


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(user_id: CurrentUserId, identities: Identities):
    """Get the profile of the token's user."""
    identity = await identities.get_profile(user_id)
    return ProfileResponse(
        phone_number=identity.phone_number,
        full_name=identity.full_name,
    )


@router.put(
    "/profile",
    response_model=SuccessResponse,
    responses={400: {"model": ValidationErrorResponse}},
)
async def update_profile(
    data: ProfileUpdateRequest,
    user_id: CurrentUserId,
    identities: Identities,
):
    """Update phone number and/or full name of the token's user."""
    errors = validate_profile_update(
        phone_number=data.phone_number,
        full_name=data.full_name,
    )
    if errors:
        return _validation_error(errors)
    
    outcome = await identities.update_profile(
        user_id,
        phone_number=data.phone_number,
        full_name=data.full_name,
    )
    
    if isinstance(outcome, Conflict):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=PHONE_NUMBER_TAKEN,
        )
    
    return SuccessResponse(message="Update success")
