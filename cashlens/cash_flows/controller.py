from fastapi import APIRouter, Query, status
from typing import List, Optional
from uuid import UUID
from datetime import date

from ..database.core import DbSession
from ..cache.category_cache import CategoryCacheDep
from ..entities.cash_flow import FlowType
from ..schemas.pagination import PaginatedResponse
from . import model
from . import service

router = APIRouter(prefix="/cash_flows", tags=["Cash Flows"])


@router.post(
    "/", response_model=model.CashFlowResponse, status_code=status.HTTP_201_CREATED
)
async def create_cash_flow(
    db: DbSession, cache: CategoryCacheDep, cash_flow: model.CashFlowCreate
):
    return service.create_cash_flow(db, cache, cash_flow)


@router.get("/", response_model=PaginatedResponse[model.CashFlowResponse])
async def list_cash_flows(
    db: DbSession,
    flow_type: Optional[FlowType] = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=12, ge=1, le=100),
):
    return service.list_cash_flows(db, flow_type, page, limit)


@router.get("/query", response_model=List[model.CashFlowResponse])
async def query_cash_flows(
    db: DbSession,
    cash_flow_id: Optional[UUID] = Query(default=None, alias="id"),
    belongs_date: Optional[date] = Query(default=None, alias="date"),
    exact_description: Optional[str] = None,
    fuzzy_description: Optional[str] = None,
):
    return service.query_cash_flows(
        db, cash_flow_id, belongs_date, exact_description, fuzzy_description
    )


@router.get("/range", response_model=List[model.CashFlowResponse])
async def get_cash_flows_by_range(
    db: DbSession,
    from_date: Optional[date] = Query(default=None, alias="from"),
    to_date: Optional[date] = Query(default=None, alias="to"),
):
    return service.get_cash_flows_by_range(db, from_date, to_date)


@router.get("/summary", response_model=model.CashFlowSummary)
async def get_summary(
    db: DbSession,
    period: model.SummaryPeriod,
    reference_date: date = Query(alias="date"),
):
    return service.get_summary(db, period, reference_date)


@router.delete("/", response_model=model.CashFlowDeleteResponse)
async def delete_cash_flows_by_params(
    db: DbSession,
    cash_flow_id: Optional[UUID] = Query(default=None, alias="id"),
    belongs_date: Optional[date] = Query(default=None, alias="date"),
):
    deleted = service.delete_cash_flow(
        db, cash_flow_id=cash_flow_id, belongs_date=belongs_date
    )
    return model.CashFlowDeleteResponse(deleted=deleted)


@router.get("/{cash_flow_id}", response_model=model.CashFlowResponse)
async def get_cash_flow(db: DbSession, cash_flow_id: UUID):
    return service.get_cash_flow_by_id(db, cash_flow_id)


@router.put("/{cash_flow_id}", response_model=model.CashFlowResponse)
async def update_cash_flow(
    db: DbSession,
    cache: CategoryCacheDep,
    cash_flow_id: UUID,
    cash_flow_update: model.CashFlowUpdate,
):
    return service.update_cash_flow(db, cache, cash_flow_id, cash_flow_update)


@router.delete("/{cash_flow_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_cash_flow(db: DbSession, cash_flow_id: UUID):
    service.delete_cash_flow(db, cash_flow_id=cash_flow_id)
