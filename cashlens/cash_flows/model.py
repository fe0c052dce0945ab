from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field, field_validator
from ..categories.model import CategoryResponse
from ..entities.cash_flow import FlowType


class FlowTypeSchema(BaseModel):
    value: str
    display_name: str


class SummaryPeriod(str, Enum):
    DAILY = "daily"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class CashFlowBase(BaseModel):
    belongs_date: date
    flow_type: FlowType = FlowType.OUTCOME
    amount: Decimal = Field(gt=0, decimal_places=2, max_digits=10)
    description: Optional[str] = None


class CashFlowCreate(CashFlowBase):
    category_name: str = Field(min_length=1)


class CashFlowUpdate(BaseModel):
    belongs_date: Optional[date] = None
    flow_type: Optional[FlowType] = None
    amount: Optional[Decimal] = Field(None, gt=0, decimal_places=2, max_digits=10)
    description: Optional[str] = None
    category_name: Optional[str] = Field(default=None, min_length=1)


class CashFlowResponse(CashFlowBase):
    id: UUID
    category_id: UUID
    category: CategoryResponse
    flow_type: FlowTypeSchema
    amount: Decimal
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("flow_type", mode="before")
    @classmethod
    def convert_flow_type(cls, v):
        if isinstance(v, FlowType):
            return FlowTypeSchema(value=v.value, display_name=v.display_name)
        return v


class CashFlowDeleteResponse(BaseModel):
    deleted: int


class CashFlowSummary(BaseModel):
    period: SummaryPeriod
    start_date: date
    end_date: date
    total_income: Decimal
    total_outcome: Decimal
    balance: Decimal
    count: int
    # Saldo líquido (receitas - despesas) por nome de categoria
    category_breakdown: dict[str, Decimal]
