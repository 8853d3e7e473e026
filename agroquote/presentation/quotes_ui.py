# agroquote/presentation/quotes_ui.py

from PyQt5.QtWidgets import (QWidget, QVBoxLayout, QPushButton, QHBoxLayout, QMessageBox,
                             QDialog, QLineEdit, QFormLayout, QComboBox)
from typing import Optional, Dict, Any, List

from agroquote.business_logic.entities.quote_entity import QuoteEntity
from agroquote.business_logic.quote_manager import QuoteManager
from agroquote.business_logic.product_manager import ProductManager
from agroquote.business_logic.store_manager import StoreManager
from agroquote.config import CURRENCY_SYMBOL
from agroquote.constants import DEFAULT_CONVERSION_FACTOR
from agroquote.utils import date_converter
from .custom_widgets import EntityTableModel, IsoDateEdit, make_table_view, selected_entity, make_ok_cancel_buttons
import logging

logger = logging.getLogger(__name__)

QUOTE_COLUMNS = [
    ("ID", lambda q: str(q.id)),
    ("Produto", lambda q: q.product.name if q.product else f"#{q.product_id}"),
    ("Loja", lambda q: q.store.name if q.store else f"#{q.store_id}"),
    ("Preço", lambda q: f"{CURRENCY_SYMBOL} {q.price:,.2f}"),
    ("Embalagem", lambda q: f"{q.packaging_size:,.2f} {q.packaging_unit}"),
    ("Conv.", lambda q: f"{q.conversion_factor:.2f}"),
    ("Data", lambda q: date_converter.to_iso_str(q.quote_date)),
]

class QuoteDialog(QDialog):
    """Product and store choices are loaded fresh each time the dialog opens."""

    def __init__(self, products: List, stores: List, quote: Optional[QuoteEntity] = None, parent=None):
        super().__init__(parent)
        self.quote = quote
        self.setWindowTitle("Nova Cotação" if not quote else f"Editar Cotação #{quote.id}")
        self.setMinimumWidth(400)

        layout = QFormLayout(self)
        self.product_combo = QComboBox(self)
        for product in products:
            self.product_combo.addItem(f"{product.name} ({product.standard_unit})", product.id)
        self.store_combo = QComboBox(self)
        for store in stores:
            self.store_combo.addItem(store.name, store.id)

        self.price_edit = QLineEdit(self)
        self.packaging_size_edit = QLineEdit(self)
        self.packaging_unit_edit = QLineEdit(self)
        self.conversion_factor_edit = QLineEdit(self)
        self.conversion_factor_edit.setText(DEFAULT_CONVERSION_FACTOR)
        self.date_edit = IsoDateEdit(self)

        if self.quote:
            self.product_combo.setCurrentIndex(max(0, self.product_combo.findData(self.quote.product_id)))
            self.store_combo.setCurrentIndex(max(0, self.store_combo.findData(self.quote.store_id)))
            self.price_edit.setText(str(self.quote.price))
            self.packaging_size_edit.setText(str(self.quote.packaging_size))
            self.packaging_unit_edit.setText(self.quote.packaging_unit)
            self.conversion_factor_edit.setText(str(self.quote.conversion_factor))
            self.date_edit.set_py_date(self.quote.quote_date)

        layout.addRow("Produto:", self.product_combo)
        layout.addRow("Loja:", self.store_combo)
        layout.addRow(f"Preço ({CURRENCY_SYMBOL}):", self.price_edit)
        layout.addRow("Tamanho da embalagem:", self.packaging_size_edit)
        layout.addRow("Unidade da embalagem:", self.packaging_unit_edit)
        layout.addRow("Fator de conversão:", self.conversion_factor_edit)
        layout.addRow("Data:", self.date_edit)
        layout.addWidget(make_ok_cancel_buttons(self))

    def get_quote_data(self) -> Optional[Dict[str, Any]]:
        if self.product_combo.currentData() is None or self.store_combo.currentData() is None:
            QMessageBox.warning(self, "Entrada inválida", "Cadastre e selecione um produto e uma loja.")
            return None
        return {
            "product_id": self.product_combo.currentData(),
            "store_id": self.store_combo.currentData(),
            "price": self.price_edit.text(),
            "packaging_size": self.packaging_size_edit.text(),
            "packaging_unit": self.packaging_unit_edit.text(),
            "conversion_factor": self.conversion_factor_edit.text() or DEFAULT_CONVERSION_FACTOR,
            "quote_date": self.date_edit.py_date(),
        }


class QuotesUI(QWidget):
    def __init__(self, quote_manager: QuoteManager, product_manager: ProductManager,
                 store_manager: StoreManager, parent=None):
        super().__init__(parent)
        self.quote_manager = quote_manager
        self.product_manager = product_manager
        self.store_manager = store_manager
        self.table_model = EntityTableModel(QUOTE_COLUMNS, numeric_columns=(3, 4, 5))
        self._init_ui()

    def _init_ui(self):
        main_layout = QVBoxLayout(self)
        self.table_view = make_table_view(self.table_model, stretch_column=1, parent=self)
        main_layout.addWidget(self.table_view)

        button_layout = QHBoxLayout()
        self.add_button = QPushButton("Adicionar Cotação")
        self.edit_button = QPushButton("Editar Cotação")
        self.delete_button = QPushButton("Excluir Cotação")
        self.refresh_button = QPushButton("Recarregar")

        self.add_button.clicked.connect(self._open_add_quote_dialog)
        self.edit_button.clicked.connect(self._open_edit_quote_dialog)
        self.delete_button.clicked.connect(self._delete_selected_quote)
        self.refresh_button.clicked.connect(self.load_quotes_data)

        for button in (self.add_button, self.edit_button, self.delete_button):
            button_layout.addWidget(button)
        button_layout.addStretch()
        button_layout.addWidget(self.refresh_button)
        main_layout.addLayout(button_layout)
        logger.info("QuotesUI initialized.")
        self.load_quotes_data()

    def load_quotes_data(self):
        try:
            quotes = self.quote_manager.get_all_quotes()
            self.table_model.update_data(quotes)
            logger.info(f"{len(quotes)} quotes loaded into table.")
        except Exception as e:
            logger.error(f"Error loading quotes: {e}", exc_info=True)
            QMessageBox.critical(self, "Erro ao carregar", f"Erro ao carregar a lista de cotações: {e}")

    def _make_dialog(self, quote: Optional[QuoteEntity] = None) -> QuoteDialog:
        return QuoteDialog(self.product_manager.get_all_products(), self.store_manager.get_all_stores(),
                           quote=quote, parent=self)

    def _open_add_quote_dialog(self):
        dialog = self._make_dialog()
        if dialog.exec_() != QDialog.DialogCode.Accepted:
            return
        data = dialog.get_quote_data()
        if not data:
            return
        try:
            created = self.quote_manager.create_quote(**data)
            if created:
                self.load_quotes_data()
            else:
                QMessageBox.warning(self, "Erro", "Não foi possível cadastrar a cotação.")
        except ValueError as ve:
            QMessageBox.warning(self, "Erro de validação", str(ve))
        except Exception as e:
            logger.error(f"Error adding quote: {e}", exc_info=True)
            QMessageBox.critical(self, "Erro", f"Erro ao cadastrar cotação: {e}")

    def _open_edit_quote_dialog(self):
        quote = selected_entity(self.table_view, self.table_model)
        if not quote:
            QMessageBox.information(self, "Nenhuma selecionada", "Selecione uma cotação para editar.")
            return
        dialog = self._make_dialog(quote)
        if dialog.exec_() != QDialog.DialogCode.Accepted:
            return
        data = dialog.get_quote_data()
        if not data:
            return
        try:
            if self.quote_manager.update_quote(quote.id, data):
                self.load_quotes_data()
            else:
                QMessageBox.warning(self, "Aviso", f"A cotação #{quote.id} não foi atualizada.")
        except ValueError as ve:
            QMessageBox.warning(self, "Erro de validação", str(ve))
        except Exception as e:
            logger.error(f"Error editing quote: {e}", exc_info=True)
            QMessageBox.critical(self, "Erro", f"Erro ao editar cotação: {e}")

    def _delete_selected_quote(self):
        quote = selected_entity(self.table_view, self.table_model)
        if not quote:
            QMessageBox.information(self, "Nenhuma selecionada", "Selecione uma cotação para excluir.")
            return
        buttons_msg = QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No
        reply = QMessageBox.question(self, "Confirmar exclusão", f"Excluir a cotação #{quote.id}?",
                                     buttons_msg, # type: ignore
                                     QMessageBox.StandardButton.No)
        if reply == QMessageBox.StandardButton.Yes and self.quote_manager.delete_quote(quote.id):
            self.load_quotes_data()
