from fastapi import Depends
from sqlalchemy.orm import Session

from catalog_api.core.db import get_sessionmaker
from catalog_api.services import CategoryService, ProductService, SkuService


def get_db():
    SessionLocal = get_sessionmaker()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_category_service(db: Session = Depends(get_db)) -> CategoryService:
    return CategoryService(db)


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    return ProductService(db, CategoryService(db))


def get_sku_service(db: Session = Depends(get_db)) -> SkuService:
    return SkuService(db, ProductService(db, CategoryService(db)))
