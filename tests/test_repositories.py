import sqlite3
from datetime import date
from decimal import Decimal

import pytest

from agroquote.business_logic.entities import PrescriptionEntity, ProductEntity, QuoteEntity, StoreEntity

from conftest import QUOTE_DAY


def add_quote(repos, product_id, store_id, price, quote_date=QUOTE_DAY):
    return repos["quotes"].add(QuoteEntity(product_id=product_id, store_id=store_id, price=Decimal(price),
                                           packaging_size=Decimal("25"), packaging_unit="KG",
                                           quote_date=quote_date))


def test_create_tables_is_repeatable(db_manager):
    db_manager.create_tables()
    names = {row["name"] for row in db_manager.fetch_all("SELECT name FROM sqlite_master WHERE type = 'table'")}
    assert {"products", "stores", "quotes", "prescriptions"} <= names


def test_add_restores_types_on_read(repos):
    product = repos["products"].add(ProductEntity(name="Soybean", standard_unit="KG"))
    store = repos["stores"].add(StoreEntity(name="Farm1", address="Rua A, 1", phone="(51) 3333-0000"))
    quote = add_quote(repos, product.id, store.id, "50.00")

    stored = repos["quotes"].get_by_id(quote.id)
    assert isinstance(stored.price, Decimal) and stored.price == Decimal("50")
    assert stored.quote_date == QUOTE_DAY
    assert stored.store is None  # plain reads leave relations unresolved


def test_find_by_product_and_date_joins_store(repos):
    soybean = repos["products"].add(ProductEntity(name="Soybean", standard_unit="KG"))
    milho = repos["products"].add(ProductEntity(name="Milho", standard_unit="KG"))
    farm1 = repos["stores"].add(StoreEntity(name="Farm1", address="Rua A, 1", phone="123"))
    farm2 = repos["stores"].add(StoreEntity(name="Farm2", address="Rua B, 2"))
    first = add_quote(repos, soybean.id, farm2.id, "90.00")
    second = add_quote(repos, soybean.id, farm1.id, "50.00")
    add_quote(repos, soybean.id, farm1.id, "40.00", quote_date=date(2024, 3, 14))
    add_quote(repos, milho.id, farm1.id, "30.00")

    quotes = repos["quotes"].find_by_product_and_date(soybean.id, QUOTE_DAY)
    assert [q.id for q in quotes] == [first.id, second.id]
    assert quotes[0].store.name == "Farm2"
    assert quotes[1].store.phone == "123"
    assert quotes[0].product.name == "Soybean"


def test_get_all_with_relations_newest_first(repos):
    product = repos["products"].add(ProductEntity(name="Soybean", standard_unit="KG"))
    store = repos["stores"].add(StoreEntity(name="Farm1", address="Rua A, 1", phone="(51) 3333-0000"))
    add_quote(repos, product.id, store.id, "40.00", quote_date=date(2024, 3, 1))
    add_quote(repos, product.id, store.id, "50.00")
    quotes = repos["quotes"].get_all_with_relations()
    assert [q.quote_date for q in quotes] == [QUOTE_DAY, date(2024, 3, 1)]
    assert all(q.store.name == "Farm1" for q in quotes)


def test_prescriptions_come_with_products(repos):
    product = repos["products"].add(ProductEntity(name="Soybean", standard_unit="KG"))
    repos["prescriptions"].add(PrescriptionEntity(product_id=product.id, required_quantity=Decimal("100"),
                                                  required_unit="KG"))
    [prescription] = repos["prescriptions"].get_all_with_products()
    assert prescription.product == ProductEntity(id=product.id, name="Soybean", standard_unit="KG")
    assert prescription.required_quantity == Decimal("100")


def test_find_and_count_by_criteria(repos):
    product = repos["products"].add(ProductEntity(name="Soybean", standard_unit="KG"))
    store = repos["stores"].add(StoreEntity(name="Farm1", address="Rua A, 1", phone="(51) 3333-0000"))
    for day in (1, 10, 20):
        add_quote(repos, product.id, store.id, "50.00", quote_date=date(2024, 3, day))

    in_range = repos["quotes"].find_by_criteria(
        {"quote_date": ("BETWEEN", (date(2024, 3, 5), date(2024, 3, 25)))}, order_by="quote_date ASC")
    assert [q.quote_date.day for q in in_range] == [10, 20]
    assert repos["quotes"].count_by_criteria({"store_id": store.id}) == 3
    assert repos["quotes"].count_by_criteria({"price": (">", Decimal("60"))}) == 0


def test_add_violating_constraint_returns_none(repos):
    repos["products"].add(ProductEntity(name="Soybean", standard_unit="KG"))
    assert repos["products"].add(ProductEntity(name="Soybean", standard_unit="SC")) is None


def test_foreign_keys_are_enforced(repos):
    assert add_quote(repos, 999, 999, "50.00") is None


def test_delete_restricted_by_foreign_key(repos):
    product = repos["products"].add(ProductEntity(name="Soybean", standard_unit="KG"))
    store = repos["stores"].add(StoreEntity(name="Farm1", address="Rua A, 1", phone="(51) 3333-0000"))
    add_quote(repos, product.id, store.id, "50.00")
    assert repos["stores"].delete(store.id) is False


def test_store_lookups(repos):
    store = repos["stores"].add(StoreEntity(name="Farm1", address="Rua A, 1", phone="(51) 3333-0000"))
    assert repos["stores"].get_by_exact_name("Farm1").id == store.id
    assert repos["stores"].get_by_address("Rua A, 1").id == store.id
    assert repos["stores"].get_by_phone("(51) 3333-0000").id == store.id
    assert repos["stores"].add(StoreEntity(name="Farm2", address="Rua B, 2", phone="(51) 3333-0000")) is None
    assert repos["stores"].get_by_exact_name("farm1") is None


def test_product_search(repos):
    for name in ("Soja", "Soja Transgênica", "Milho"):
        repos["products"].add(ProductEntity(name=name, standard_unit="KG"))
    assert [p.name for p in repos["products"].search_by_name("Soja")] == ["Soja", "Soja Transgênica"]


def test_fetch_errors_propagate(db_manager):
    with pytest.raises(sqlite3.Error):
        db_manager.fetch_all("SELECT * FROM missing_table")


def test_unreadable_stored_quantity_loads_as_none(repos, db_manager):
    soybean = repos["products"].add(ProductEntity(name="Soybean", standard_unit="KG"))
    db_manager.execute_query(
        "INSERT INTO prescriptions (product_id, required_quantity, required_unit) VALUES (?, 'abc', 'KG')",
        (soybean.id,))
    [prescription] = repos["prescriptions"].get_all_with_products()
    assert prescription.required_quantity is None
    assert prescription.product.name == "Soybean"
