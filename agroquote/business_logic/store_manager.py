# agroquote/business_logic/store_manager.py

from typing import Optional, List, Any, Dict, TYPE_CHECKING
from agroquote.business_logic.entities.store_entity import StoreEntity

if TYPE_CHECKING:
    from ..data_access.stores_repository import StoresRepository
    from ..data_access.quotes_repository import QuotesRepository

import logging

logger = logging.getLogger(__name__)

class StoreManager:
    def __init__(self, stores_repository: 'StoresRepository', quotes_repository: 'QuotesRepository'):
        """
        :param stores_repository: An instance of StoresRepository.
        :param quotes_repository: Used to refuse deleting stores that still have quotes.
        """
        if stores_repository is None:
            raise ValueError("stores_repository cannot be None")
        self.stores_repository = stores_repository
        self.quotes_repository = quotes_repository

    def add_store(self, name: str, address: str, phone: Optional[str] = None) -> StoreEntity:
        """
        Adds a new store. Name and address are required; name, address and phone must be unique.
        """
        name = (name or "").strip()
        address = (address or "").strip()
        phone = (phone or "").strip() or None
        if not name:
            logger.error("Store name cannot be empty.")
            raise ValueError("O nome da loja não pode ser vazio.")
        if not address:
            logger.error("Store address cannot be empty.")
            raise ValueError("O endereço da loja não pode ser vazio.")

        self._check_unique(name, address, phone)

        created_store = self.stores_repository.add(StoreEntity(name=name, address=address, phone=phone))
        if not created_store:
            raise ValueError(f"Não foi possível salvar a loja '{name}'.")
        logger.info(f"Store '{created_store.name}' (ID: {created_store.id}) added successfully.")
        return created_store

    def _check_unique(self, name: str, address: str, phone: Optional[str], current_id: Optional[int] = None):
        same_name = self.stores_repository.get_by_exact_name(name)
        if same_name and same_name.id != current_id:
            logger.warning(f"Store '{name}' already exists with ID {same_name.id}.")
            raise ValueError(f"Já existe uma loja com o nome '{name}'.")
        same_address = self.stores_repository.get_by_address(address)
        if same_address and same_address.id != current_id:
            logger.warning(f"Address '{address}' already used by store ID {same_address.id}.")
            raise ValueError(f"O endereço '{address}' já pertence à loja '{same_address.name}'.")
        if phone:
            same_phone = self.stores_repository.get_by_phone(phone)
            if same_phone and same_phone.id != current_id:
                logger.warning(f"Phone '{phone}' already used by store ID {same_phone.id}.")
                raise ValueError(f"O telefone '{phone}' já pertence à loja '{same_phone.name}'.")

    def get_store_by_id(self, store_id: int) -> Optional[StoreEntity]:
        """Retrieves a store by its ID."""
        if not isinstance(store_id, int) or store_id <= 0:
            logger.error(f"Invalid store_id: {store_id}")
            return None

        store = self.stores_repository.get_by_id(store_id)
        if store:
            logger.debug(f"Store with ID {store_id} found: {store.name}")
        else:
            logger.debug(f"Store with ID {store_id} not found.")
        return store

    def get_all_stores(self) -> List[StoreEntity]:
        """Retrieves all stores ordered by name."""
        logger.debug("Fetching all stores.")
        return self.stores_repository.get_all(order_by="name ASC")

    def update_store(self, store_id: int, update_data: Dict[str, Any]) -> Optional[StoreEntity]:
        store = self.get_store_by_id(store_id)
        if not store:
            return None

        name = (update_data.get("name", store.name) or "").strip()
        address = (update_data.get("address", store.address) or "").strip()
        if not name or not address:
            raise ValueError("Nome e endereço da loja são obrigatórios.")
        phone = store.phone
        if "phone" in update_data:
            phone = (update_data["phone"] or "").strip() or None
        self._check_unique(name, address, phone, current_id=store_id)

        store.name = name
        store.address = address
        store.phone = phone
        return self.stores_repository.update(store)

    def delete_store(self, store_id: int) -> bool:
        store = self.get_store_by_id(store_id)
        if not store:
            return False
        quote_count = self.quotes_repository.count_by_criteria({"store_id": store_id})
        if quote_count:
            logger.warning(f"Refusing to delete store {store_id}: {quote_count} quotes reference it.")
            raise ValueError(f"A loja '{store.name}' possui {quote_count} cotação(ões) e não pode ser excluída.")
        deleted = self.stores_repository.delete(store_id)
        if deleted:
            logger.info(f"Store '{store.name}' (ID: {store_id}) deleted.")
        return deleted
