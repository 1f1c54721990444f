"""Storage access for categories, products and SKUs.

Plain functions over a SQLAlchemy ``Session``. They never commit: the
service that owns the operation decides when the unit of work ends.
"""

from typing import Optional, TypeVar

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from catalog_api.core.db import Base
from catalog_api.models import Category, Product, Sku

ModelT = TypeVar("ModelT", bound=Base)


def save(db: Session, entity: ModelT) -> ModelT:
    db.add(entity)
    return entity


def delete(db: Session, entity: Base) -> None:
    db.delete(entity)


# -------------------------
# Categories
# -------------------------
def get_category(db: Session, category_id: int) -> Optional[Category]:
    return db.get(Category, category_id)


def list_categories(db: Session) -> list[Category]:
    return list(db.execute(select(Category).order_by(Category.id)).scalars().all())


def category_name_exists(db: Session, name: str, exclude_id: Optional[int] = None) -> bool:
    stmt = select(Category.id).where(Category.name == name)
    if exclude_id is not None:
        stmt = stmt.where(Category.id != exclude_id)
    return db.execute(stmt.limit(1)).first() is not None


def count_products_in_category(db: Session, category_id: int) -> int:
    stmt = select(func.count(Product.id)).where(Product.category_id == category_id)
    return db.execute(stmt).scalar_one()


def count_products_by_category(db: Session) -> dict[int, int]:
    stmt = select(Product.category_id, func.count(Product.id)).group_by(Product.category_id)
    return {category_id: count for category_id, count in db.execute(stmt).all()}


# -------------------------
# Products
# -------------------------
def get_product(db: Session, product_id: int) -> Optional[Product]:
    return db.get(Product, product_id)


def product_name_exists_in_category(
    db: Session, name: str, category_id: int, exclude_id: Optional[int] = None
) -> bool:
    stmt = select(Product.id).where(Product.name == name, Product.category_id == category_id)
    if exclude_id is not None:
        stmt = stmt.where(Product.id != exclude_id)
    return db.execute(stmt.limit(1)).first() is not None


def find_products(
    db: Session,
    *,
    name: Optional[str] = None,
    category_id: Optional[int] = None,
    offset: int = 0,
    limit: int = 10,
) -> tuple[list[Product], int]:
    """
    Return one page of products matching the filters, newest first, plus the total match count.

    ``name`` is a case-insensitive substring match, ``category_id`` an exact match.
    Either filter may be omitted.
    """
    conditions = []
    if name:
        conditions.append(Product.name.ilike(f"%{name}%"))
    if category_id is not None:
        conditions.append(Product.category_id == category_id)

    total = db.execute(select(func.count(Product.id)).where(*conditions)).scalar_one()

    stmt = (
        select(Product)
        .where(*conditions)
        .order_by(Product.created_at.desc(), Product.id.desc())
        .offset(offset)
        .limit(limit)
    )
    return list(db.execute(stmt).scalars().all()), total


def count_skus_for_product(db: Session, product_id: int) -> int:
    stmt = select(func.count(Sku.id)).where(Sku.product_id == product_id)
    return db.execute(stmt).scalar_one()


def count_skus_by_product(db: Session, product_ids: list[int]) -> dict[int, int]:
    if not product_ids:
        return {}
    stmt = (
        select(Sku.product_id, func.count(Sku.id))
        .where(Sku.product_id.in_(product_ids))
        .group_by(Sku.product_id)
    )
    return {product_id: count for product_id, count in db.execute(stmt).all()}


# -------------------------
# SKUs
# -------------------------
def list_skus_for_product(db: Session, product_id: int) -> list[Sku]:
    stmt = select(Sku).where(Sku.product_id == product_id).order_by(Sku.id)
    return list(db.execute(stmt).scalars().all())


def get_sku_for_product(db: Session, sku_id: int, product_id: int) -> Optional[Sku]:
    stmt = select(Sku).where(Sku.id == sku_id, Sku.product_id == product_id)
    return db.execute(stmt).scalars().first()


def sku_code_exists(db: Session, sku_code: str, exclude_id: Optional[int] = None) -> bool:
    stmt = select(Sku.id).where(Sku.sku_code == sku_code)
    if exclude_id is not None:
        stmt = stmt.where(Sku.id != exclude_id)
    return db.execute(stmt.limit(1)).first() is not None
