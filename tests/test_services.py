from decimal import Decimal

import pytest

from catalog_api import repositories
from catalog_api.core.errors import DuplicateResourceError, InvalidOperationError, ResourceNotFoundError
from catalog_api.models import Sku
from catalog_api.schemas import (
    CategoryCreate,
    CategoryUpdate,
    ProductCreate,
    ProductUpdate,
    SkuCreate,
    SkuUpdate,
)
from catalog_api.services import CategoryService, ProductService, SkuService


@pytest.fixture()
def categories(db_session):
    return CategoryService(db_session)


@pytest.fixture()
def products(db_session, categories):
    return ProductService(db_session, categories)


@pytest.fixture()
def skus(db_session, products):
    return SkuService(db_session, products)


def _product(category_id: int, name: str = "Phone") -> ProductCreate:
    return ProductCreate(name=name, base_price=Decimal("10.00"), brand="Acme", category_id=category_id)


def _sku(code: str) -> SkuCreate:
    return SkuCreate(sku_code=code, name="Variant", price=Decimal("10.00"))


def test_catalog_lifecycle_scenario(db_session, categories, products, skus):
    electronics = categories.create_category(CategoryCreate(name="Electronics"))
    phone = products.create_product(_product(electronics.id, "Phone"))
    skus.create_sku(phone.id, _sku("SKU-1"))

    with pytest.raises(InvalidOperationError) as exc_info:
        categories.delete_category(electronics.id)
    assert "'Electronics'" in exc_info.value.message
    assert "1 associated products" in exc_info.value.message

    products.delete_product(phone.id)
    assert db_session.query(Sku).count() == 0

    categories.delete_category(electronics.id)
    with pytest.raises(ResourceNotFoundError):
        categories.get_category(electronics.id)


def test_category_name_uniqueness_on_create_and_update(categories):
    categories.create_category(CategoryCreate(name="Electronics"))
    books = categories.create_category(CategoryCreate(name="Books"))

    with pytest.raises(DuplicateResourceError) as exc_info:
        categories.create_category(CategoryCreate(name="Electronics"))
    assert exc_info.value.resource == "Category"
    assert exc_info.value.field == "name"
    assert exc_info.value.value == "Electronics"

    with pytest.raises(DuplicateResourceError):
        categories.update_category(books.id, CategoryUpdate(name="Electronics"))


def test_category_update_leaves_omitted_fields(categories):
    created = categories.create_category(CategoryCreate(name="Electronics", description="Devices"))

    updated = categories.update_category(created.id, CategoryUpdate(name="Gadgets"))
    assert updated.name == "Gadgets"
    assert updated.description == "Devices"


def test_product_count_is_derived(categories, products):
    category = categories.create_category(CategoryCreate(name="Electronics"))
    products.create_product(_product(category.id, "Phone"))
    products.create_product(_product(category.id, "Tablet"))

    assert categories.get_category(category.id).product_count == 2
    assert [c.product_count for c in categories.list_categories()] == [2]


def test_product_name_unique_per_category(categories, products):
    a = categories.create_category(CategoryCreate(name="Alpha"))
    b = categories.create_category(CategoryCreate(name="Beta"))

    products.create_product(_product(a.id, "Phone"))
    in_b = products.create_product(_product(b.id, "Phone"))
    assert in_b.category_name == "Beta"
    assert in_b.sku_count == 0

    with pytest.raises(DuplicateResourceError) as exc_info:
        products.create_product(_product(a.id, "Phone"))
    assert exc_info.value.message == "Product with name 'Phone' already exists in category 'Alpha'"


def test_product_create_propagates_category_not_found(products):
    with pytest.raises(ResourceNotFoundError) as exc_info:
        products.create_product(_product(404))
    assert exc_info.value.resource == "Category"


def test_product_update_resolves_category_before_name_check(categories, products):
    a = categories.create_category(CategoryCreate(name="Alpha"))
    product = products.create_product(_product(a.id, "Phone"))

    with pytest.raises(ResourceNotFoundError) as exc_info:
        products.update_product(product.id, ProductUpdate(name="Other", category_id=999))
    assert exc_info.value.resource == "Category"


def test_product_update_partial(categories, products):
    a = categories.create_category(CategoryCreate(name="Alpha"))
    created = products.create_product(
        ProductCreate(
            name="Phone", description="Nice", base_price=Decimal("10.00"), brand="Acme", category_id=a.id
        )
    )

    updated = products.update_product(created.id, ProductUpdate(brand="Globex"))
    assert updated.brand == "Globex"
    assert updated.name == "Phone"
    assert updated.description == "Nice"
    assert updated.base_price == Decimal("10.00")


def test_list_products_page_metadata(categories, products):
    a = categories.create_category(CategoryCreate(name="Alpha"))
    for i in range(3):
        products.create_product(_product(a.id, f"Phone {i}"))

    page = products.list_products(page=0, page_size=2)
    assert len(page.content) == 2
    assert page.total_elements == 3
    assert page.total_pages == 2
    assert page.first is True
    assert page.last is False


def test_sku_operations_resolve_product_first(skus):
    for call in (
        lambda: skus.list_skus(1),
        lambda: skus.get_sku(1, 1),
        lambda: skus.create_sku(1, _sku("SKU-1")),
        lambda: skus.update_sku(1, 1, SkuUpdate(quantity=1)),
        lambda: skus.delete_sku(1, 1),
    ):
        with pytest.raises(ResourceNotFoundError) as exc_info:
            call()
        assert exc_info.value.resource == "Product"


def test_sku_code_global_uniqueness(categories, products, skus):
    a = categories.create_category(CategoryCreate(name="Alpha"))
    p1 = products.create_product(_product(a.id, "Phone"))
    p2 = products.create_product(_product(a.id, "Tablet"))

    skus.create_sku(p1.id, _sku("SKU-1"))
    second = skus.create_sku(p2.id, _sku("SKU-2"))

    with pytest.raises(DuplicateResourceError):
        skus.create_sku(p2.id, _sku("SKU-1"))
    with pytest.raises(DuplicateResourceError):
        skus.update_sku(p2.id, second.id, SkuUpdate(sku_code="SKU-1"))

    assert products.get_product(p1.id).sku_count == 1


def test_sku_update_partial(categories, products, skus):
    a = categories.create_category(CategoryCreate(name="Alpha"))
    p = products.create_product(_product(a.id))
    sku = skus.create_sku(
        p.id,
        SkuCreate(sku_code="SKU-1", name="Black", attributes="color=black", price=Decimal("5.00"), quantity=4),
    )

    updated = skus.update_sku(p.id, sku.id, SkuUpdate(price=Decimal("6.50")))
    assert updated.price == Decimal("6.50")
    assert updated.quantity == 4
    assert updated.attributes == "color=black"
    assert updated.name == "Black"


def test_storage_constraint_backs_up_category_precheck(monkeypatch, categories):
    categories.create_category(CategoryCreate(name="Electronics"))
    # Simulate a concurrent writer slipping past the pre-check.
    monkeypatch.setattr(repositories, "category_name_exists", lambda *args, **kwargs: False)

    with pytest.raises(DuplicateResourceError):
        categories.create_category(CategoryCreate(name="Electronics"))

    # The session is usable again after the rollback.
    assert [c.name for c in categories.list_categories()] == ["Electronics"]


def test_storage_constraint_backs_up_sku_precheck(monkeypatch, categories, products, skus):
    a = categories.create_category(CategoryCreate(name="Alpha"))
    p = products.create_product(_product(a.id))
    skus.create_sku(p.id, _sku("SKU-1"))
    monkeypatch.setattr(repositories, "sku_code_exists", lambda *args, **kwargs: False)

    with pytest.raises(DuplicateResourceError):
        skus.create_sku(p.id, _sku("SKU-1"))


def test_refused_product_update_leaves_nothing_pending(db_session, categories, products):
    alpha = categories.create_category(CategoryCreate(name="Alpha"))
    beta = categories.create_category(CategoryCreate(name="Beta"))
    products.create_product(_product(beta.id, "Phone"))
    products.create_product(_product(beta.id, "Tablet"))
    tablet = products.create_product(_product(alpha.id, "Tablet"))

    with pytest.raises(DuplicateResourceError):
        products.update_product(tablet.id, ProductUpdate(name="Phone", category_id=beta.id))
    with pytest.raises(DuplicateResourceError):
        products.update_product(tablet.id, ProductUpdate(category_id=beta.id, brand="Globex"))

    # A later unit of work on the same session must not carry the refused changes.
    categories.create_category(CategoryCreate(name="Gamma"))
    db_session.expire_all()

    stored = products.get_product(tablet.id)
    assert stored.category_id == alpha.id
    assert stored.name == "Tablet"
    assert stored.brand == "Acme"
    assert categories.get_category(beta.id).product_count == 2
