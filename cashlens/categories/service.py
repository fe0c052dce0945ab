from uuid import UUID
from cachetools import cached
from cachetools.keys import hashkey
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from psycopg2.errors import UniqueViolation
from . import model
from ..cache.category_cache import CategoryCache
from ..cache.hierarchy_cache import (
    category_descendants_cache,
    category_descendants_lock,
    invalidate_category_hierarchy_cache,
)
from ..entities.category import Category
from ..entities.cash_flow import CashFlow
from ..exceptions.categories import (
    CategoryAlreadyExistsError,
    CategoryCreationError,
    CategoryDeleteParamsError,
    CategoryInUseError,
    CategoryNotFoundError,
    CategoryParentNotFoundError,
    CategoryUpdateError,
)
import logging


def _get_category_or_404(db: Session, category_id: UUID) -> Category:
    category = db.query(Category).filter(Category.id == category_id).first()
    if not category:
        logging.warning(f"Categoria de ID {category_id} não encontrada")
        raise CategoryNotFoundError(category_id)
    return category


def _ensure_parent_exists(db: Session, parent_id: UUID | None) -> None:
    if parent_id is None:
        return
    if not db.query(Category.id).filter(Category.id == parent_id).first():
        logging.warning(f"Categoria pai de ID {parent_id} não encontrada")
        raise CategoryParentNotFoundError(parent_id)


def _ensure_name_available(
    db: Session, name: str, exclude_id: UUID | None = None
) -> None:
    query = db.query(Category.id).filter(Category.name == name)
    if exclude_id is not None:
        query = query.filter(Category.id != exclude_id)
    if query.first():
        raise CategoryAlreadyExistsError(name)


def _collect_descendants(db: Session, category_id: UUID) -> tuple[UUID, ...]:
    descendants = [category_id]
    seen = {category_id}
    frontier = [category_id]
    while frontier:
        rows = db.query(Category.id).filter(Category.parent_id.in_(frontier)).all()
        frontier = [row.id for row in rows if row.id not in seen]
        seen.update(frontier)
        descendants.extend(frontier)
    return tuple(descendants)


def create_category(db: Session, category: model.CategoryCreate) -> Category:
    _ensure_parent_exists(db, category.parent_id)
    _ensure_name_available(db, category.name)
    try:
        new_category = Category(**category.model_dump())
        db.add(new_category)
        db.commit()
        db.refresh(new_category)
    except IntegrityError as e:
        db.rollback()
        logging.error(f"Falha na criação da categoria: {category.name}")
        if isinstance(e.orig, UniqueViolation):
            raise CategoryAlreadyExistsError(category.name)
        raise CategoryCreationError(str(e.orig))

    # Uma nova subcategoria altera os descendentes do pai
    invalidate_category_hierarchy_cache()
    logging.info(f"Nova categoria registrada: {new_category.name}")
    return new_category


def get_categories(db: Session) -> list[Category]:
    categories = db.query(Category).order_by(Category.name).all()
    logging.info("Recuperado todas as categorias")
    return categories


def get_child_categories(db: Session, parent_id: UUID) -> list[Category]:
    _get_category_or_404(db, parent_id)
    children = (
        db.query(Category)
        .filter(Category.parent_id == parent_id)
        .order_by(Category.name)
        .all()
    )
    logging.info(f"Recuperado {len(children)} subcategorias da categoria {parent_id}")
    return children


def get_category_by_id(
    db: Session, cache: CategoryCache, category_id: UUID
) -> model.CategoryResponse:
    cached_category, found = cache.get_by_id(str(category_id))
    if found:
        logging.debug(f"Categoria de ID {category_id} recuperada do cache")
        return cached_category

    category = _get_category_or_404(db, category_id)
    response = model.CategoryResponse.model_validate(category)
    cache.set(response)
    logging.info(f"Categoria de ID {category_id} recuperada")
    return response


def get_category_by_name(
    db: Session, cache: CategoryCache, name: str
) -> model.CategoryResponse:
    cached_category, found = cache.get_by_name(name)
    if found:
        logging.debug(f"Categoria '{name}' recuperada do cache")
        return cached_category

    category = db.query(Category).filter(Category.name == name).first()
    if not category:
        logging.warning(f"Categoria '{name}' não encontrada")
        raise CategoryNotFoundError(name=name)

    response = model.CategoryResponse.model_validate(category)
    cache.set(response)
    logging.info(f"Categoria '{name}' recuperada")
    return response


@cached(
    category_descendants_cache,
    key=lambda db, category_id: hashkey(category_id),
    lock=category_descendants_lock,
)
def get_category_descendants(db: Session, category_id: UUID) -> tuple[UUID, ...]:
    """
    Retorna o ID da categoria e de todas as suas subcategorias (recursivo).
    O resultado fica no cache de hierarquia até a próxima alteração.
    """
    _get_category_or_404(db, category_id)
    return _collect_descendants(db, category_id)


def update_category(
    db: Session,
    cache: CategoryCache,
    category_id: UUID,
    category_update: model.CategoryUpdate,
) -> Category:
    category = _get_category_or_404(db, category_id)
    category_data = category_update.model_dump(exclude_unset=True)

    if "name" in category_data:
        if not category_data["name"]:
            raise CategoryUpdateError("o nome da categoria não pode ser vazio")
        _ensure_name_available(db, category_data["name"], exclude_id=category_id)

    parent_id = category_data.get("parent_id")
    if parent_id is not None:
        if parent_id == category_id:
            raise CategoryUpdateError("uma categoria não pode ser pai de si mesma")
        _ensure_parent_exists(db, parent_id)
        if parent_id in _collect_descendants(db, category_id):
            raise CategoryUpdateError(
                "a categoria pai não pode ser uma de suas subcategorias"
            )

    old_name, old_id = category.name, str(category.id)
    for field, value in category_data.items():
        setattr(category, field, value)

    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logging.error(f"Falha na atualização da categoria de ID {category_id}")
        if isinstance(e.orig, UniqueViolation):
            raise CategoryAlreadyExistsError(category_data.get("name", old_name))
        raise CategoryUpdateError(str(e.orig))
    db.refresh(category)

    cache.invalidate(old_name)
    cache.invalidate_by_id(old_id)
    if "parent_id" in category_data:
        invalidate_category_hierarchy_cache()

    logging.info(f"Categoria de ID {category_id} atualizada com sucesso")
    return category


def delete_category(
    db: Session,
    cache: CategoryCache,
    category_id: UUID | None = None,
    name: str | None = None,
) -> None:
    # Exatamente um dos dois deve ser informado
    if (category_id is not None) == bool(name):
        raise CategoryDeleteParamsError()

    if category_id is not None:
        category = _get_category_or_404(db, category_id)
    else:
        category = db.query(Category).filter(Category.name == name).first()
        if not category:
            logging.warning(f"Categoria '{name}' não encontrada")
            raise CategoryNotFoundError(name=name)

    if db.query(Category.id).filter(Category.parent_id == category.id).first():
        raise CategoryInUseError("existem subcategorias vinculadas a ela")

    if db.query(CashFlow.id).filter(CashFlow.category_id == category.id).count() != 0:
        raise CategoryInUseError("existem fluxos de caixa vinculados a ela")

    old_name, old_id = category.name, str(category.id)
    db.delete(category)
    db.commit()

    cache.invalidate(old_name)
    cache.invalidate_by_id(old_id)
    invalidate_category_hierarchy_cache()
    logging.info(f"Categoria de ID {old_id} foi excluída")
