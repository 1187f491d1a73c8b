from typing import List, Optional
from fastapi import APIRouter, Depends, Path, Response, status
from pydantic import BaseModel, Field
from ari.api.dependencies import get_current_user, get_user_service
from ari.api.validation import MAX_ID, USER_CREATE_RULES, USER_UPDATE_RULES, validate
from ari.models.user import User
from ari.schemas.user import UserPublic
from ari.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


class UserCreate(BaseModel):
    email: Optional[str] = Field(default=None, examples=["joao.silva@example.com"])
    password: Optional[str] = Field(default=None, examples=["senhaSegura123"])
    name: Optional[str] = Field(default=None, examples=["joao_silva"])
    base_id: Optional[int] = None


class UserUpdate(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None
    is_active: Optional[bool] = None
    base_id: Optional[int] = None


@router.post(
    "/",
    response_model=UserPublic,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Invalid input"},
        409: {"description": "Email already registered"},
    },
)
async def create_user(body: UserCreate, users: UserService = Depends(get_user_service)):
    """Create a user"""
    data = body.model_dump()
    validate(data, USER_CREATE_RULES)
    return await users.create(data)


@router.get("/", response_model=List[UserPublic])
async def list_users(
    current_user: User = Depends(get_current_user),
    users: UserService = Depends(get_user_service),
):
    """List all users"""
    return users.list()


@router.get("/{user_id}", response_model=UserPublic)
async def get_user(
    user_id: int = Path(..., ge=0, le=MAX_ID),
    current_user: User = Depends(get_current_user),
    users: UserService = Depends(get_user_service),
):
    return users.get(user_id)


@router.patch("/{user_id}", response_model=UserPublic)
async def update_user(
    body: UserUpdate,
    user_id: int = Path(..., ge=0, le=MAX_ID),
    current_user: User = Depends(get_current_user),
    users: UserService = Depends(get_user_service),
):
    """Update a user; only the fields sent are changed"""
    changes = body.model_dump(exclude_unset=True)
    validate(changes, USER_UPDATE_RULES)
    return await users.update(user_id, changes)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int = Path(..., ge=0, le=MAX_ID),
    current_user: User = Depends(get_current_user),
    users: UserService = Depends(get_user_service),
):
    users.delete(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
