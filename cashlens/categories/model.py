from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field


class CategoryBase(BaseModel):
    name: str = Field(min_length=1)
    parent_id: Optional[UUID] = None
    remark: Optional[str] = None


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    parent_id: Optional[UUID] = None
    remark: Optional[str] = None


class CategoryResponse(CategoryBase):
    id: UUID
    created_at: datetime
    updated_at: datetime

    # Imutável: a mesma instância é compartilhada pelo cache entre requisições
    model_config = ConfigDict(from_attributes=True, frozen=True)
