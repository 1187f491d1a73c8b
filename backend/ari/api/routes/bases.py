from datetime import datetime
from typing import List, Optional
from fastapi import APIRouter, Depends, Path, Response, status
from pydantic import BaseModel, ConfigDict
from ari.api.dependencies import get_base_service, get_current_user
from ari.api.validation import BASE_CREATE_RULES, BASE_UPDATE_RULES, MAX_ID, validate
from ari.services.base_service import BaseService

router = APIRouter(
    prefix="/bases",
    tags=["bases"],
    dependencies=[Depends(get_current_user)],
)


class BaseCreate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    is_active: bool = True


class BaseUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None


class BaseResponse(BaseModel):
    id: int
    name: str
    description: Optional[str]
    is_active: bool
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    model_config = ConfigDict(from_attributes=True)


@router.get("/", response_model=List[BaseResponse])
async def list_bases(bases: BaseService = Depends(get_base_service)):
    return bases.list()


@router.get("/{base_id}", response_model=BaseResponse)
async def get_base(
    base_id: int = Path(..., ge=0, le=MAX_ID),
    bases: BaseService = Depends(get_base_service),
):
    return bases.get(base_id)


@router.post("/", response_model=BaseResponse, status_code=status.HTTP_201_CREATED)
async def create_base(body: BaseCreate, bases: BaseService = Depends(get_base_service)):
    """Create a base; names are unique"""
    data = body.model_dump()
    validate(data, BASE_CREATE_RULES)
    return bases.create(data)


@router.patch("/{base_id}", response_model=BaseResponse)
async def update_base(
    body: BaseUpdate,
    base_id: int = Path(..., ge=0, le=MAX_ID),
    bases: BaseService = Depends(get_base_service),
):
    changes = body.model_dump(exclude_unset=True)
    validate(changes, BASE_UPDATE_RULES)
    return bases.update(base_id, changes)


@router.delete("/{base_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_base(
    base_id: int = Path(..., ge=0, le=MAX_ID),
    bases: BaseService = Depends(get_base_service),
):
    """Delete a base; fails with 400 while users or clients still belong to it"""
    bases.delete(base_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
