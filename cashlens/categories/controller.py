from fastapi import APIRouter, Query, status
from typing import List, Optional
from uuid import UUID

from ..database.core import DbSession
from ..cache.category_cache import CategoryCacheDep
from . import model
from . import service

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.post(
    "/", response_model=model.CategoryResponse, status_code=status.HTTP_201_CREATED
)
async def create_category(db: DbSession, category: model.CategoryCreate):
    return service.create_category(db, category)


@router.get("/", response_model=List[model.CategoryResponse])
async def get_categories(db: DbSession):
    return service.get_categories(db)


@router.delete("/", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category_by_params(
    db: DbSession,
    cache: CategoryCacheDep,
    category_id: Optional[UUID] = Query(default=None, alias="id"),
    name: Optional[str] = None,
):
    return service.delete_category(db, cache, category_id=category_id, name=name)


@router.get("/name/{name}", response_model=model.CategoryResponse)
async def get_category_by_name(db: DbSession, cache: CategoryCacheDep, name: str):
    return service.get_category_by_name(db, cache, name)


@router.get("/{category_id}", response_model=model.CategoryResponse)
async def get_category(db: DbSession, cache: CategoryCacheDep, category_id: UUID):
    return service.get_category_by_id(db, cache, category_id)


@router.get("/{category_id}/children", response_model=List[model.CategoryResponse])
async def get_child_categories(db: DbSession, category_id: UUID):
    return service.get_child_categories(db, category_id)


@router.get("/{category_id}/descendants", response_model=List[UUID])
async def get_category_descendants(db: DbSession, category_id: UUID):
    return service.get_category_descendants(db, category_id)


@router.put("/{category_id}", response_model=model.CategoryResponse)
async def update_category(
    db: DbSession,
    cache: CategoryCacheDep,
    category_id: UUID,
    category_update: model.CategoryUpdate,
):
    return service.update_category(db, cache, category_id, category_update)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(db: DbSession, cache: CategoryCacheDep, category_id: UUID):
    return service.delete_category(db, cache, category_id=category_id)
