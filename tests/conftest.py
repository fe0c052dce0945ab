import pytest
import sys
import os
import uuid
from datetime import date
from decimal import Decimal
from typing import Generator

# Add project root to sys.path so we can import from main.py and cashlens
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool
from httpx import AsyncClient, ASGITransport
from main import app
from cashlens.database.core import get_db, Base
from cashlens.cache.category_cache import CategoryCache, get_category_cache
from cashlens.cache.hierarchy_cache import invalidate_category_hierarchy_cache
from cashlens.entities.category import Category
from cashlens.entities.cash_flow import CashFlow, FlowType

# Setup In-Memory SQLite Database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """
    Creates a fresh database session for a test.
    """
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def clean_hierarchy_cache():
    """
    The descendants cache is process-wide, so every test starts and ends empty.
    """
    invalidate_category_hierarchy_cache()
    yield
    invalidate_category_hierarchy_cache()


@pytest.fixture(scope="function")
def category_cache() -> CategoryCache:
    """
    Isolated cache instance, so tests never share hits/misses.
    """
    return CategoryCache()


@pytest.fixture(scope="function")
async def client(db_session, category_cache):
    """
    Dependency override for database, category cache and AsyncClient creation.
    """

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_category_cache] = lambda: category_cache

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def sample_category(db_session):
    category = Category(id=uuid.uuid4(), name="Food", remark="Comida em geral")
    db_session.add(category)
    db_session.commit()
    db_session.refresh(category)
    return category


@pytest.fixture(scope="function")
def sample_hierarchy(db_session):
    """
    Estrutura:
    - Alimentação (raiz)
      - Restaurantes
        - Fast Food
      - Supermercado
    """
    root = Category(name="Alimentação")
    db_session.add(root)
    db_session.flush()

    restaurants = Category(name="Restaurantes", parent_id=root.id)
    groceries = Category(name="Supermercado", parent_id=root.id)
    db_session.add_all([restaurants, groceries])
    db_session.flush()

    fast_food = Category(name="Fast Food", parent_id=restaurants.id)
    db_session.add(fast_food)
    db_session.commit()

    return {
        "root": root,
        "restaurants": restaurants,
        "groceries": groceries,
        "fast_food": fast_food,
    }


@pytest.fixture(scope="function")
def sample_cash_flows(db_session, sample_category):
    """
    Três fluxos em março/2024 e um em abril/2024, nas categorias
    Food (despesas) e Salary (receita).
    """
    salary = Category(name="Salary")
    db_session.add(salary)
    db_session.flush()

    flows = {
        "market": CashFlow(
            category_id=sample_category.id,
            belongs_date=date(2024, 3, 5),
            flow_type=FlowType.OUTCOME,
            amount=Decimal("50.00"),
            description="Mercado do bairro",
        ),
        "bakery_march": CashFlow(
            category_id=sample_category.id,
            belongs_date=date(2024, 3, 20),
            flow_type=FlowType.OUTCOME,
            amount=Decimal("30.25"),
            description="Padaria",
        ),
        "salary": CashFlow(
            category_id=salary.id,
            belongs_date=date(2024, 3, 10),
            flow_type=FlowType.INCOME,
            amount=Decimal("5000.00"),
            description="Salário de março",
        ),
        "bakery_april": CashFlow(
            category_id=sample_category.id,
            belongs_date=date(2024, 4, 2),
            flow_type=FlowType.OUTCOME,
            amount=Decimal("12.50"),
            description="Padaria",
        ),
    }
    db_session.add_all(flows.values())
    db_session.commit()
    return flows
