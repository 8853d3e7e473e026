# agroquote/data_access/__init__.py

from .database_manager import DatabaseManager
from .base_repository import BaseRepository

from .products_repository import ProductsRepository
from .stores_repository import StoresRepository
from .quotes_repository import QuotesRepository
from .prescriptions_repository import PrescriptionsRepository
