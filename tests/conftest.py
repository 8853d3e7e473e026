"""Shared fixtures: a throwaway SQLite database wired into repositories and managers."""

from datetime import date
from decimal import Decimal

import pytest

from agroquote.business_logic.entities import ProductEntity, QuoteEntity, StoreEntity
from agroquote.business_logic.prescription_manager import PrescriptionManager
from agroquote.business_logic.product_manager import ProductManager
from agroquote.business_logic.quote_manager import QuoteManager
from agroquote.business_logic.quote_report_manager import QuoteReportManager
from agroquote.business_logic.store_manager import StoreManager
from agroquote.data_access.database_manager import DatabaseManager
from agroquote.data_access.prescriptions_repository import PrescriptionsRepository
from agroquote.data_access.products_repository import ProductsRepository
from agroquote.data_access.quotes_repository import QuotesRepository
from agroquote.data_access.stores_repository import StoresRepository

QUOTE_DAY = date(2024, 3, 15)


@pytest.fixture
def db_manager(tmp_path):
    manager = DatabaseManager(str(tmp_path / "test_agroquote.db"))
    manager.create_tables()
    return manager


@pytest.fixture
def repos(db_manager):
    return {
        "products": ProductsRepository(db_manager),
        "stores": StoresRepository(db_manager),
        "quotes": QuotesRepository(db_manager),
        "prescriptions": PrescriptionsRepository(db_manager),
    }


@pytest.fixture
def product_manager(repos):
    return ProductManager(repos["products"], repos["quotes"], repos["prescriptions"])


@pytest.fixture
def store_manager(repos):
    return StoreManager(repos["stores"], repos["quotes"])


@pytest.fixture
def quote_manager(repos, product_manager, store_manager):
    return QuoteManager(repos["quotes"], product_manager, store_manager)


@pytest.fixture
def prescription_manager(repos, product_manager):
    return PrescriptionManager(repos["prescriptions"], product_manager)


@pytest.fixture
def report_manager(repos):
    return QuoteReportManager(repos["prescriptions"], repos["quotes"])


@pytest.fixture
def soybean_setup(product_manager, store_manager, quote_manager, prescription_manager):
    """Soybean (KG), 100 KG prescribed, Farm1 at 50.00/25 and Farm2 at 90.00/50."""
    soybean = product_manager.create_product("Soybean", "KG")
    farm1 = store_manager.add_store("Farm1", "Rua A, 1")
    farm2 = store_manager.add_store("Farm2", "Rua B, 2")
    quote_manager.create_quote(soybean.id, farm1.id, "50.00", "25", "KG", QUOTE_DAY)
    quote_manager.create_quote(soybean.id, farm2.id, "90.00", "50", "KG", QUOTE_DAY)
    prescription_manager.create_prescription(soybean.id, "100", "KG")
    return {"product": soybean, "farm1": farm1, "farm2": farm2}


def make_quote(quote_id, price, size, factor="1.0", store_name=None, product_id=1, store_id=None):
    """In-memory quote with its store attached, for engine tests."""
    quote = QuoteEntity(
        id=quote_id,
        product_id=product_id,
        store_id=store_id or quote_id,
        price=Decimal(str(price)),
        packaging_size=Decimal(str(size)),
        packaging_unit="KG",
        quote_date=QUOTE_DAY,
        conversion_factor=Decimal(str(factor)),
    )
    name = store_name or f"Loja{quote_id}"
    quote.store = StoreEntity(id=quote.store_id, name=name, address=f"Endereço {name}")
    quote.product = ProductEntity(id=product_id, name="Soybean", standard_unit="KG")
    return quote
