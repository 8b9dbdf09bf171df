"""
User endpoints - registration, sign-in/out and the current identity.
"""

from fastapi import APIRouter, status

from partmatch.core.dependencies import BearerCredentials, CurrentIdentity, Identities, OptionalIdentity
from partmatch.schemas.user import LoginRequest, MeResponse, RegisterRequest, TokenResponse, UserResponse

router = APIRouter()


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(identities: Identities, data: RegisterRequest):
    """Create new user. Returns user without password."""
    user = await identities.register(data.email, data.password)
    return UserResponse.model_validate(user)


@router.post("/login", response_model=TokenResponse)
async def login(identities: Identities, data: LoginRequest):
    """Authenticate, refresh the identity row and return a JWT."""
    token, identity = await identities.login(data.email, data.password)
    return TokenResponse(access_token=token, user_id=identity.id)


@router.post("/logout")
async def logout(identities: Identities, identity: CurrentIdentity, credentials: BearerCredentials):
    """Revoke the presented token."""
    revoked = await identities.logout(credentials.credentials)
    return {"status": "signed_out", "user_id": identity.id, "revoked": revoked}


@router.get("/me", response_model=MeResponse)
async def me(identity: OptionalIdentity):
    """The current identity; anonymous callers get anonymous=true instead of an error."""
    return MeResponse(**identity.model_dump(), anonymous=identity.is_anonymous)
