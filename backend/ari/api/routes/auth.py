from typing import Optional
from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from pydantic import BaseModel, ConfigDict, Field
from ari.api.dependencies import get_auth_service, get_current_user
from ari.api.validation import LOGIN_RULES, REGISTER_RULES, validate
from ari.models.user import User
from ari.schemas.user import UserPublic
from ari.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


# Fields are optional here so missing values get the same 400 as empty ones
class LoginRequest(BaseModel):
    email: Optional[str] = Field(default=None, examples=["usuario@exemplo.com"])
    password: Optional[str] = Field(default=None, examples=["senha123"])


class RegisterRequest(BaseModel):
    email: Optional[str] = Field(default=None, examples=["usuario@exemplo.com"])
    password: Optional[str] = Field(default=None, examples=["senha123"])
    name: Optional[str] = Field(default=None, examples=["Usuario Exemplo"])


class AccessToken(BaseModel):
    access_token: str = Field(alias="accessToken")

    model_config = ConfigDict(populate_by_name=True)


class Token(BaseModel):
    access_token: str
    token_type: str


@router.post(
    "/login",
    response_model=AccessToken,
    responses={
        400: {"description": "Invalid input"},
        401: {"description": "Invalid credentials"},
        404: {"description": "User not found"},
    },
)
async def login(body: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    """Login with email and password and get an access token"""
    validate(body.model_dump(), LOGIN_RULES)
    access_token = await auth.login(body.email, body.password)
    return AccessToken(access_token=access_token)


@router.post(
    "/register",
    response_model=UserPublic,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Invalid input"},
        409: {"description": "Email already registered"},
    },
)
async def register(body: RegisterRequest, auth: AuthService = Depends(get_auth_service)):
    """Register a new user"""
    validate(body.model_dump(), REGISTER_RULES)
    return await auth.register(body.email, body.password, body.name)


@router.post("/token", response_model=Token)
async def token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    auth: AuthService = Depends(get_auth_service),
):
    """OAuth2 password flow login, used by the Swagger UI Authorize dialog"""
    # OAuth2 calls the identifier 'username'; here it is the email
    access_token = await auth.login(form_data.username, form_data.password)
    return {"access_token": access_token, "token_type": "bearer"}


@router.get("/me", response_model=UserPublic)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get current user information"""
    return current_user
