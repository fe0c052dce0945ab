from sqlalchemy import Column, String, DateTime, ForeignKey, Uuid
import uuid
from datetime import datetime, timezone
from ..database.core import Base


class Category(Base):
    __tablename__ = "categories"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    # Categoria raiz quando nulo
    parent_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("categories.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )
    name = Column(String, nullable=False, unique=True)
    remark = Column(String, nullable=True)
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

    def __repr__(self):
        return f"<Category(name='{self.name}', parent_id='{self.parent_id}')>"
