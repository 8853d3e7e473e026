from datetime import date
from decimal import Decimal

import pytest

from conftest import QUOTE_DAY


# --- ProductManager ---

def test_create_product_strips_and_persists(product_manager):
    product = product_manager.create_product("  Milho ", " SC ")
    assert product.id is not None
    stored = product_manager.get_product_by_id(product.id)
    assert (stored.name, stored.standard_unit) == ("Milho", "SC")


@pytest.mark.parametrize("name, unit", [("", "KG"), ("Milho", ""), (None, "KG")])
def test_create_product_requires_name_and_unit(product_manager, name, unit):
    with pytest.raises(ValueError):
        product_manager.create_product(name, unit)


def test_product_names_are_unique(product_manager):
    product_manager.create_product("Milho", "KG")
    with pytest.raises(ValueError, match="Já existe um produto"):
        product_manager.create_product("Milho", "SC")


def test_update_product_rejects_duplicate_name(product_manager):
    product_manager.create_product("Milho", "KG")
    trigo = product_manager.create_product("Trigo", "KG")
    with pytest.raises(ValueError):
        product_manager.update_product(trigo.id, {"name": "Milho"})
    updated = product_manager.update_product(trigo.id, {"standard_unit": "SC"})
    assert updated.standard_unit == "SC"


def test_get_all_products_is_sorted_by_name(product_manager):
    for name in ("Trigo", "Aveia", "Milho"):
        product_manager.create_product(name, "KG")
    assert [p.name for p in product_manager.get_all_products()] == ["Aveia", "Milho", "Trigo"]


def test_delete_product_refused_while_referenced(product_manager, soybean_setup):
    with pytest.raises(ValueError, match="não pode ser excluído"):
        product_manager.delete_product(soybean_setup["product"].id)


def test_delete_unreferenced_product(product_manager):
    product = product_manager.create_product("Aveia", "KG")
    assert product_manager.delete_product(product.id) is True
    assert product_manager.get_product_by_id(product.id) is None
    assert product_manager.delete_product(product.id) is False


# --- StoreManager ---

def test_add_store_with_optional_phone(store_manager):
    store = store_manager.add_store("Agro Sul", "Av. Brasil, 100", phone="  ")
    assert store.phone is None
    other = store_manager.add_store("Agro Norte", "Av. Norte, 5", phone="(51) 3333-0000")
    assert store_manager.get_store_by_id(other.id).phone == "(51) 3333-0000"


@pytest.mark.parametrize("name, address", [("", "Rua X"), ("Loja", "")])
def test_add_store_requires_name_and_address(store_manager, name, address):
    with pytest.raises(ValueError):
        store_manager.add_store(name, address)


def test_store_name_and_address_are_unique(store_manager):
    store_manager.add_store("Agro Sul", "Av. Brasil, 100")
    with pytest.raises(ValueError, match="nome"):
        store_manager.add_store("Agro Sul", "Outra Rua, 1")
    with pytest.raises(ValueError, match="endereço"):
        store_manager.add_store("Outra Loja", "Av. Brasil, 100")


def test_store_phone_is_unique(store_manager):
    store_manager.add_store("Agro Sul", "Av. Brasil, 100", phone="(51) 3333-0000")
    with pytest.raises(ValueError, match="telefone"):
        store_manager.add_store("Agro Norte", "Av. Norte, 5", phone="(51) 3333-0000")
    # Stores without a phone do not clash.
    store_manager.add_store("Sem Fone A", "Rua A, 1")
    store_manager.add_store("Sem Fone B", "Rua B, 2")
    other = store_manager.add_store("Agro Leste", "Rua C, 3", phone="(51) 4444-0000")
    with pytest.raises(ValueError, match="já pertence à loja 'Agro Sul'"):
        store_manager.update_store(other.id, {"phone": "(51) 3333-0000"})


def test_update_store_keeps_its_own_name(store_manager):
    store = store_manager.add_store("Agro Sul", "Av. Brasil, 100")
    updated = store_manager.update_store(store.id, {"address": "Av. Brasil, 200"})
    assert updated.name == "Agro Sul"
    assert store_manager.get_store_by_id(store.id).address == "Av. Brasil, 200"


def test_delete_store_refused_while_quoted(store_manager, soybean_setup):
    with pytest.raises(ValueError, match="não pode ser excluída"):
        store_manager.delete_store(soybean_setup["farm1"].id)


def test_get_store_by_invalid_id(store_manager):
    assert store_manager.get_store_by_id(0) is None
    assert store_manager.get_store_by_id("1") is None


# --- QuoteManager ---

@pytest.fixture
def milho_and_store(product_manager, store_manager):
    return (product_manager.create_product("Milho", "KG"),
            store_manager.add_store("Agro Sul", "Av. Brasil, 100"))


def test_create_quote_parses_comma_decimals_and_iso_date(quote_manager, milho_and_store):
    product, store = milho_and_store
    quote = quote_manager.create_quote(product.id, store.id, "1.234,50", "60", "SC", "2024-03-15",
                                       conversion_factor="60")
    stored = quote_manager.get_quote_by_id(quote.id)
    assert stored.price == Decimal("1234.5")
    assert stored.conversion_factor == Decimal("60")
    assert stored.quote_date == QUOTE_DAY


def test_create_quote_default_conversion_factor(quote_manager, milho_and_store):
    product, store = milho_and_store
    quote = quote_manager.create_quote(product.id, store.id, "50", "25", "KG", QUOTE_DAY)
    assert quote_manager.get_quote_by_id(quote.id).conversion_factor == Decimal("1")


@pytest.mark.parametrize("overrides, message", [
    ({"price": "0"}, "preço"),
    ({"packaging_size": "-1"}, "tamanho da embalagem"),
    ({"conversion_factor": "0"}, "fator de conversão"),
    ({"packaging_unit": "  "}, "unidade da embalagem"),
    ({"quote_date": "15/03/2024"}, "data"),
    ({"price": "abc"}, "numérico"),
])
def test_create_quote_validation(quote_manager, milho_and_store, overrides, message):
    product, store = milho_and_store
    values = {"product_id": product.id, "store_id": store.id, "price": "50", "packaging_size": "25",
              "packaging_unit": "KG", "quote_date": QUOTE_DAY, "conversion_factor": "1.0"}
    values.update(overrides)
    with pytest.raises(ValueError, match=message):
        quote_manager.create_quote(**values)


def test_create_quote_requires_existing_product_and_store(quote_manager, milho_and_store):
    product, store = milho_and_store
    with pytest.raises(ValueError, match="Produto com ID 999"):
        quote_manager.create_quote(999, store.id, "50", "25", "KG", QUOTE_DAY)
    with pytest.raises(ValueError, match="Loja com ID 999"):
        quote_manager.create_quote(product.id, 999, "50", "25", "KG", QUOTE_DAY)


def test_update_and_delete_quote(quote_manager, milho_and_store):
    product, store = milho_and_store
    quote = quote_manager.create_quote(product.id, store.id, "50", "25", "KG", QUOTE_DAY)
    updated = quote_manager.update_quote(quote.id, {"price": "45,00", "quote_date": date(2024, 3, 16)})
    assert updated.price == Decimal("45.00")
    assert quote_manager.get_quotes_for(product.id, QUOTE_DAY) == []
    assert len(quote_manager.get_quotes_for(product.id, date(2024, 3, 16))) == 1

    assert quote_manager.delete_quote(quote.id) is True
    assert quote_manager.get_all_quotes() == []


# --- PrescriptionManager ---

def test_create_prescription_attaches_product(prescription_manager, product_manager):
    soybean = product_manager.create_product("Soybean", "KG")
    prescription = prescription_manager.create_prescription(soybean.id, "2,5", "KG")
    assert prescription.required_quantity == Decimal("2.5")
    assert prescription.product.name == "Soybean"


def test_create_prescription_rejects_other_unit(prescription_manager, product_manager):
    soybean = product_manager.create_product("Soybean", "KG")
    with pytest.raises(ValueError, match="não compatível com unidade padrão 'KG'"):
        prescription_manager.create_prescription(soybean.id, "10", "L")
    assert prescription_manager.get_all_prescriptions() == []


def test_update_prescription_rejects_other_unit(prescription_manager, product_manager):
    soybean = product_manager.create_product("Soybean", "KG")
    prescription = prescription_manager.create_prescription(soybean.id, "10", "KG")
    with pytest.raises(ValueError, match="Unidade requerida 'L'"):
        prescription_manager.update_prescription(prescription.id, {"required_unit": "L"})
    assert prescription_manager.get_all_prescriptions()[0].required_unit == "KG"


@pytest.mark.parametrize("quantity, unit", [("0", "KG"), ("-3", "KG"), ("10", " ")])
def test_create_prescription_validation(prescription_manager, product_manager, quantity, unit):
    soybean = product_manager.create_product("Soybean", "KG")
    with pytest.raises(ValueError):
        prescription_manager.create_prescription(soybean.id, quantity, unit)


def test_prescription_for_unknown_product(prescription_manager):
    with pytest.raises(ValueError, match="não encontrado"):
        prescription_manager.create_prescription(123, "10", "KG")


def test_update_and_delete_prescription(prescription_manager, product_manager):
    soybean = product_manager.create_product("Soybean", "KG")
    prescription = prescription_manager.create_prescription(soybean.id, "10", "KG")
    updated = prescription_manager.update_prescription(prescription.id, {"required_quantity": "20"})
    assert updated.required_quantity == Decimal("20")
    assert prescription_manager.delete_prescription(prescription.id) is True
    assert prescription_manager.get_all_prescriptions() == []
