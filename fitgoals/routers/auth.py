"""Auth router - signup, login and the bearer-token gate."""
import logging

from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from pydantic import ValidationError
from pymongo.errors import PyMongoError

from fitgoals.database import get_database
from fitgoals.exceptions import InternalFailure, Unauthorized
from fitgoals.models.user import LoginRequest, TokenClaims, TokenResponse, User, UserCreate
from fitgoals.services.auth_service import AuthService
from fitgoals.utils.auth import verify_access_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])
security = HTTPBearer(auto_error=False)


@router.post("/signup", response_model=User, status_code=status.HTTP_201_CREATED)
async def signup(user: UserCreate, db=Depends(get_database)):
    """
    Register a new user.

    Returns 409 when the username or the email is already taken.
    """
    service = AuthService(db)

    try:
        return await service.register_user(
            username=user.username,
            email=user.email,
            password=user.password,
        )
    except PyMongoError as e:
        logger.error("Error creating user: %s", e)
        raise InternalFailure("Failed to create user", type(e).__name__)


@router.post("/login", response_model=TokenResponse)
async def login(login_req: LoginRequest, db=Depends(get_database)):
    """
    Login user and return a bearer token valid for one hour.

    Returns 401 for an unknown email or a wrong password.
    """
    service = AuthService(db)

    try:
        token = await service.login(email=login_req.email, password=login_req.password)
    except PyMongoError as e:
        logger.error("Error logging in user: %s", e)
        raise InternalFailure("Failed to login", type(e).__name__)

    return TokenResponse(token=token)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> TokenClaims:
    """
    Dependency returning the caller's identity from the bearer token.

    Missing header, wrong scheme, empty, malformed or expired tokens and
    tokens without a subject all raise the same Unauthorized error.
    """
    if credentials is None or not credentials.credentials:
        raise Unauthorized()

    try:
        payload = verify_access_token(credentials.credentials)
    except JWTError as e:
        logger.warning("Rejected bearer token: %s", type(e).__name__)
        raise Unauthorized()

    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        logger.warning("Rejected bearer token without subject")
        raise Unauthorized()

    try:
        return TokenClaims.model_validate(payload)
    except ValidationError:
        raise Unauthorized()
