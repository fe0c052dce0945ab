from sqlalchemy import (
    Column,
    String,
    Date,
    DateTime,
    ForeignKey,
    DECIMAL,
    Enum,
    Uuid,
)
from sqlalchemy.orm import relationship
import uuid
from datetime import datetime, timezone
from ..database.core import Base
import enum


class FlowType(enum.Enum):
    INCOME = "income"
    OUTCOME = "outcome"

    @property
    def display_name(self):
        return "Receita" if self == FlowType.INCOME else "Despesa"


class CashFlow(Base):
    __tablename__ = "cash_flows"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    category_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("categories.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    belongs_date = Column(Date, nullable=False, index=True)
    flow_type = Column(
        Enum(FlowType, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=FlowType.OUTCOME,
    )
    amount = Column(DECIMAL, nullable=False)
    description = Column(String, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    category = relationship("Category", lazy="joined")

    def __repr__(self):
        return f"<CashFlow(belongs_date='{self.belongs_date}', flow_type='{self.flow_type}', amount='{self.amount}', category_id='{self.category_id}')>"
