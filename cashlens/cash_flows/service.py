import calendar
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from logging import getLogger
from uuid import UUID
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from . import model
from ..cache.category_cache import CategoryCache
from ..categories.service import get_category_by_name
from ..entities.cash_flow import CashFlow, FlowType
from ..exceptions.cash_flows import (
    CashFlowCreationError,
    CashFlowDateRangeError,
    CashFlowDeleteParamsError,
    CashFlowNotFoundError,
    CashFlowQueryParamsError,
    CashFlowUpdateError,
)
from ..schemas.pagination import PaginatedResponse

logger = getLogger(__name__)

CENTS = Decimal("0.01")


def _round_amount(amount: Decimal) -> Decimal:
    return Decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP)


def _get_cash_flow_or_404(db: Session, cash_flow_id: UUID) -> CashFlow:
    cash_flow = db.query(CashFlow).filter(CashFlow.id == cash_flow_id).first()
    if not cash_flow:
        logger.warning(f"Fluxo de caixa de ID {cash_flow_id} não encontrado")
        raise CashFlowNotFoundError(cash_flow_id)
    return cash_flow


def create_cash_flow(
    db: Session, cache: CategoryCache, cash_flow: model.CashFlowCreate
) -> CashFlow:
    # A categoria é resolvida pelo nome através do cache (read-through)
    category = get_category_by_name(db, cache, cash_flow.category_name)

    try:
        new_cash_flow = CashFlow(
            category_id=category.id,
            belongs_date=cash_flow.belongs_date,
            flow_type=cash_flow.flow_type,
            amount=_round_amount(cash_flow.amount),
            description=cash_flow.description,
        )
        db.add(new_cash_flow)
        db.commit()
        db.refresh(new_cash_flow)
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Falha na criação do fluxo de caixa: {e.orig}")
        raise CashFlowCreationError(str(e.orig))

    logger.info(
        f"Novo fluxo de caixa registrado: {new_cash_flow.id} ({category.name})"
    )
    return new_cash_flow


def get_cash_flow_by_id(db: Session, cash_flow_id: UUID) -> CashFlow:
    cash_flow = _get_cash_flow_or_404(db, cash_flow_id)
    logger.info(f"Fluxo de caixa de ID {cash_flow_id} recuperado")
    return cash_flow


def query_cash_flows(
    db: Session,
    cash_flow_id: UUID | None = None,
    belongs_date: date | None = None,
    exact_description: str | None = None,
    fuzzy_description: str | None = None,
) -> list[CashFlow]:
    """
    Consulta fluxos de caixa por exatamente um critério: ID, data,
    descrição exata ou trecho da descrição (sem diferenciar maiúsculas).
    """
    provided = [
        cash_flow_id is not None,
        belongs_date is not None,
        bool(exact_description),
        bool(fuzzy_description),
    ]
    if sum(provided) != 1:
        raise CashFlowQueryParamsError()

    if cash_flow_id is not None:
        return [_get_cash_flow_or_404(db, cash_flow_id)]

    query = db.query(CashFlow)
    if belongs_date is not None:
        query = query.filter(CashFlow.belongs_date == belongs_date)
    elif exact_description:
        query = query.filter(CashFlow.description == exact_description)
    else:
        query = query.filter(CashFlow.description.ilike(f"%{fuzzy_description}%"))

    cash_flows = query.order_by(
        CashFlow.belongs_date.desc(), CashFlow.created_at.desc()
    ).all()
    logger.info(f"Consulta retornou {len(cash_flows)} fluxos de caixa")
    return cash_flows


def get_cash_flows_by_range(
    db: Session, from_date: date | None, to_date: date | None
) -> list[CashFlow]:
    if from_date is None or to_date is None:
        raise CashFlowDateRangeError("informe a data inicial e a data final")
    if from_date > to_date:
        raise CashFlowDateRangeError(
            "a data inicial deve ser anterior ou igual à data final"
        )

    cash_flows = (
        db.query(CashFlow)
        .filter(CashFlow.belongs_date >= from_date, CashFlow.belongs_date <= to_date)
        .order_by(CashFlow.belongs_date, CashFlow.created_at)
        .all()
    )
    logger.info(
        f"Recuperado {len(cash_flows)} fluxos de caixa entre {from_date} e {to_date}"
    )
    return cash_flows


def list_cash_flows(
    db: Session,
    flow_type: FlowType | None = None,
    page: int = 1,
    limit: int = 12,
) -> PaginatedResponse[model.CashFlowResponse]:
    query = db.query(CashFlow)
    if flow_type is not None:
        query = query.filter(CashFlow.flow_type == flow_type)

    total = query.count()
    items = (
        query.order_by(CashFlow.belongs_date.desc(), CashFlow.created_at.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )

    return PaginatedResponse[model.CashFlowResponse].create(
        items=[model.CashFlowResponse.model_validate(item) for item in items],
        total=total,
        page=page,
        size=limit,
    )


def update_cash_flow(
    db: Session,
    cache: CategoryCache,
    cash_flow_id: UUID,
    cash_flow_update: model.CashFlowUpdate,
) -> CashFlow:
    cash_flow = _get_cash_flow_or_404(db, cash_flow_id)

    # Somente valores informados e não nulos são aplicados
    update_data = {
        k: v
        for k, v in cash_flow_update.model_dump(exclude_unset=True).items()
        if v is not None
    }

    category_name = update_data.pop("category_name", None)
    if category_name is not None:
        update_data["category_id"] = get_category_by_name(db, cache, category_name).id
    if "amount" in update_data:
        update_data["amount"] = _round_amount(update_data["amount"])

    for field, value in update_data.items():
        setattr(cash_flow, field, value)

    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Falha na atualização do fluxo de caixa de ID {cash_flow_id}")
        raise CashFlowUpdateError(str(e.orig))
    db.refresh(cash_flow)

    logger.info(f"Fluxo de caixa de ID {cash_flow_id} atualizado com sucesso")
    return cash_flow


def delete_cash_flow(
    db: Session,
    cash_flow_id: UUID | None = None,
    belongs_date: date | None = None,
) -> int:
    """
    Exclui um fluxo de caixa pelo ID ou todos os de uma data. Retorna a
    quantidade de registros excluídos.
    """
    if (cash_flow_id is None) == (belongs_date is None):
        raise CashFlowDeleteParamsError()

    if cash_flow_id is not None:
        db.delete(_get_cash_flow_or_404(db, cash_flow_id))
        deleted = 1
    else:
        deleted = (
            db.query(CashFlow)
            .filter(CashFlow.belongs_date == belongs_date)
            .delete(synchronize_session=False)
        )
    db.commit()

    logger.info(f"{deleted} fluxo(s) de caixa excluído(s)")
    return deleted


def _period_bounds(period: model.SummaryPeriod, reference: date) -> tuple[date, date]:
    if period == model.SummaryPeriod.DAILY:
        return reference, reference
    if period == model.SummaryPeriod.MONTHLY:
        last_day = calendar.monthrange(reference.year, reference.month)[1]
        return reference.replace(day=1), reference.replace(day=last_day)
    return date(reference.year, 1, 1), date(reference.year, 12, 31)


def get_summary(
    db: Session, period: model.SummaryPeriod, reference_date: date
) -> model.CashFlowSummary:
    start_date, end_date = _period_bounds(period, reference_date)
    cash_flows = (
        db.query(CashFlow)
        .filter(CashFlow.belongs_date >= start_date, CashFlow.belongs_date <= end_date)
        .all()
    )

    total_income = Decimal("0")
    total_outcome = Decimal("0")
    breakdown: dict[str, Decimal] = {}
    for cash_flow in cash_flows:
        amount = Decimal(cash_flow.amount)
        signed = amount if cash_flow.flow_type == FlowType.INCOME else -amount
        if cash_flow.flow_type == FlowType.INCOME:
            total_income += amount
        else:
            total_outcome += amount
        name = cash_flow.category.name
        breakdown[name] = breakdown.get(name, Decimal("0")) + signed

    logger.info(
        f"Resumo {period.value} de {start_date} a {end_date}: {len(cash_flows)} fluxos"
    )
    return model.CashFlowSummary(
        period=period,
        start_date=start_date,
        end_date=end_date,
        total_income=_round_amount(total_income),
        total_outcome=_round_amount(total_outcome),
        balance=_round_amount(total_income - total_outcome),
        count=len(cash_flows),
        category_breakdown={k: _round_amount(v) for k, v in breakdown.items()},
    )
