# agroquote/main_app.py
import sys
import logging
import logging.config
from PyQt5.QtWidgets import QApplication, QMainWindow, QTabWidget, QMessageBox

# --- Configuration ---
from agroquote.config import APP_TITLE, DATABASE_PATH, LOGGING_CONFIG, ensure_app_dirs

# --- Data Access Layer (DAL) ---
from agroquote.data_access.database_manager import DatabaseManager
from agroquote.data_access.products_repository import ProductsRepository
from agroquote.data_access.stores_repository import StoresRepository
from agroquote.data_access.quotes_repository import QuotesRepository
from agroquote.data_access.prescriptions_repository import PrescriptionsRepository

# --- Business Logic Layer (BLL) ---
from agroquote.business_logic.cost_comparison import ExactUnitPolicy
from agroquote.business_logic.product_manager import ProductManager
from agroquote.business_logic.store_manager import StoreManager
from agroquote.business_logic.quote_manager import QuoteManager
from agroquote.business_logic.prescription_manager import PrescriptionManager
from agroquote.business_logic.quote_report_manager import QuoteReportManager

# --- Presentation Layer (UI Tabs) ---
from agroquote.presentation.products_ui import ProductsUI
from agroquote.presentation.stores_ui import StoresUI
from agroquote.presentation.quotes_ui import QuotesUI
from agroquote.presentation.prescriptions_ui import PrescriptionsUI
from agroquote.presentation.reports_ui import ReportsUI

logger = logging.getLogger(__name__)

class MainWindow(QMainWindow):
    def __init__(self, db_path: str = DATABASE_PATH, parent=None):
        super().__init__(parent)
        self.setWindowTitle(APP_TITLE)
        self.setGeometry(100, 100, 1100, 700)

        logger.info("Initializing Database Manager and creating tables...")
        self.db_manager = DatabaseManager(db_path)
        try:
            self.db_manager.create_tables()
            logger.info("Database tables checked/created successfully.")
        except Exception as e:
            logger.error(f"FATAL: Could not initialize database: {e}", exc_info=True)
            QMessageBox.critical(self, "Erro de banco de dados", f"Não foi possível criar ou abrir o banco de dados: {e}")
            sys.exit(1)

        logger.info("Initializing Repositories...")
        self.products_repo = ProductsRepository(self.db_manager)
        self.stores_repo = StoresRepository(self.db_manager)
        self.quotes_repo = QuotesRepository(self.db_manager)
        self.prescriptions_repo = PrescriptionsRepository(self.db_manager)

        logger.info("Initializing Managers...")
        self.product_manager = ProductManager(
            product_repository=self.products_repo,
            quotes_repository=self.quotes_repo,
            prescriptions_repository=self.prescriptions_repo
        )
        self.store_manager = StoreManager(self.stores_repo, self.quotes_repo)
        self.quote_manager = QuoteManager(
            quotes_repository=self.quotes_repo,
            product_manager=self.product_manager,
            store_manager=self.store_manager
        )
        self.prescription_manager = PrescriptionManager(self.prescriptions_repo, self.product_manager)
        self.report_manager = QuoteReportManager(
            prescriptions_repository=self.prescriptions_repo,
            quotes_repository=self.quotes_repo,
            unit_policy=ExactUnitPolicy()
        )

        logger.info("Setting up UI...")
        self._setup_ui()
        logger.info("MainWindow initialized and UI setup complete.")

    def _setup_ui(self):
        self.tabs = QTabWidget()

        self.products_tab = ProductsUI(self.product_manager, self)
        self.tabs.addTab(self.products_tab, "Produtos")

        self.stores_tab = StoresUI(self.store_manager, self)
        self.tabs.addTab(self.stores_tab, "Lojas")

        self.quotes_tab = QuotesUI(
            quote_manager=self.quote_manager,
            product_manager=self.product_manager,
            store_manager=self.store_manager,
            parent=self
        )
        self.tabs.addTab(self.quotes_tab, "Cotações")

        self.prescriptions_tab = PrescriptionsUI(
            prescription_manager=self.prescription_manager,
            product_manager=self.product_manager,
            parent=self
        )
        self.tabs.addTab(self.prescriptions_tab, "Prescrições")

        self.reports_tab = ReportsUI(report_manager=self.report_manager, parent=self)
        self.tabs.addTab(self.reports_tab, "Relatórios")

        # Lists in other tabs go stale after edits elsewhere; reload on switch.
        self.tabs.currentChanged.connect(self._on_tab_changed)
        self.setCentralWidget(self.tabs)

    def _on_tab_changed(self, index: int):
        widget = self.tabs.widget(index)
        for loader in ("load_quotes_data", "load_prescriptions_data"):
            if hasattr(widget, loader):
                getattr(widget, loader)()

def main():
    ensure_app_dirs()
    logging.config.dictConfig(LOGGING_CONFIG)
    logger.info("Application starting...")
    app = QApplication(sys.argv)

    main_window = MainWindow()
    main_window.show()
    logger.info("Application started successfully. Main window shown.")
    sys.exit(app.exec_())

if __name__ == '__main__':
    main()
