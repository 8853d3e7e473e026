# agroquote/business_logic/__init__.py
from .product_manager import ProductManager
from .store_manager import StoreManager
from .quote_manager import QuoteManager
from .prescription_manager import PrescriptionManager
from .quote_report_manager import QuoteReportManager
