# agroquote/presentation/products_ui.py

from PyQt5.QtWidgets import (QWidget, QVBoxLayout, QPushButton, QHBoxLayout, QMessageBox,
                             QDialog, QLineEdit, QFormLayout)
from typing import Optional, Dict, Any

from agroquote.business_logic.entities.product_entity import ProductEntity
from agroquote.business_logic.product_manager import ProductManager
from .custom_widgets import EntityTableModel, make_table_view, selected_entity, make_ok_cancel_buttons
import logging

logger = logging.getLogger(__name__)

PRODUCT_COLUMNS = [
    ("ID", lambda p: str(p.id)),
    ("Nome", lambda p: p.name),
    ("Unidade Padrão", lambda p: p.standard_unit),
]

# --- Add/Edit Product Dialog ---
class ProductDialog(QDialog):
    def __init__(self, product: Optional[ProductEntity] = None, parent=None):
        super().__init__(parent)
        self.product = product
        self.setWindowTitle("Novo Produto" if not product else f"Editar: {product.name}")
        self.setMinimumWidth(360)

        layout = QFormLayout(self)
        self.name_edit = QLineEdit(self)
        self.unit_edit = QLineEdit(self)
        self.unit_edit.setPlaceholderText("ex.: KG")

        if self.product:
            self.name_edit.setText(self.product.name)
            self.unit_edit.setText(self.product.standard_unit)

        layout.addRow("Nome:", self.name_edit)
        layout.addRow("Unidade padrão:", self.unit_edit)
        layout.addWidget(make_ok_cancel_buttons(self))

    def get_product_data(self) -> Optional[Dict[str, Any]]:
        if not self.name_edit.text().strip():
            QMessageBox.warning(self, "Entrada inválida", "O nome do produto não pode ser vazio.")
            return None
        return {"name": self.name_edit.text().strip(), "standard_unit": self.unit_edit.text().strip()}


# --- Main Products UI Widget ---
class ProductsUI(QWidget):
    def __init__(self, product_manager: ProductManager, parent=None):
        super().__init__(parent)
        self.product_manager = product_manager
        self.table_model = EntityTableModel(PRODUCT_COLUMNS)
        self._init_ui()

    def _init_ui(self):
        main_layout = QVBoxLayout(self)
        self.table_view = make_table_view(self.table_model, stretch_column=1, parent=self)
        main_layout.addWidget(self.table_view)

        button_layout = QHBoxLayout()
        self.add_button = QPushButton("Adicionar Produto")
        self.edit_button = QPushButton("Editar Produto")
        self.delete_button = QPushButton("Excluir Produto")
        self.refresh_button = QPushButton("Recarregar")

        self.add_button.clicked.connect(self._open_add_product_dialog)
        self.edit_button.clicked.connect(self._open_edit_product_dialog)
        self.delete_button.clicked.connect(self._delete_selected_product)
        self.refresh_button.clicked.connect(self.load_products_data)

        button_layout.addWidget(self.add_button)
        button_layout.addWidget(self.edit_button)
        button_layout.addWidget(self.delete_button)
        button_layout.addStretch()
        button_layout.addWidget(self.refresh_button)
        main_layout.addLayout(button_layout)
        logger.info("ProductsUI initialized.")
        self.load_products_data()

    def load_products_data(self):
        try:
            products = self.product_manager.get_all_products()
            self.table_model.update_data(products)
            logger.info(f"{len(products)} products loaded into table.")
        except Exception as e:
            logger.error(f"Error loading products: {e}", exc_info=True)
            QMessageBox.critical(self, "Erro ao carregar", f"Erro ao carregar a lista de produtos: {e}")

    def _open_add_product_dialog(self):
        dialog = ProductDialog(parent=self)
        if dialog.exec_() != QDialog.DialogCode.Accepted:
            return
        data = dialog.get_product_data()
        if not data:
            return
        try:
            created = self.product_manager.create_product(name=data["name"], standard_unit=data["standard_unit"])
            if created:
                QMessageBox.information(self, "Sucesso", f"Produto '{created.name}' cadastrado com sucesso.")
                self.load_products_data()
            else:
                QMessageBox.warning(self, "Erro", "Não foi possível cadastrar o produto.")
        except ValueError as ve:
            QMessageBox.warning(self, "Erro de validação", str(ve))
        except Exception as e:
            logger.error(f"Error adding product: {e}", exc_info=True)
            QMessageBox.critical(self, "Erro", f"Erro ao cadastrar produto: {e}")

    def _open_edit_product_dialog(self):
        product = selected_entity(self.table_view, self.table_model)
        if not product:
            QMessageBox.information(self, "Nenhum selecionado", "Selecione um produto para editar.")
            return
        dialog = ProductDialog(product=product, parent=self)
        if dialog.exec_() != QDialog.DialogCode.Accepted:
            return
        data = dialog.get_product_data()
        if not data:
            return
        try:
            updated = self.product_manager.update_product(product.id, data)
            if updated:
                self.load_products_data()
            else:
                QMessageBox.warning(self, "Aviso", f"O produto '{data['name']}' não foi atualizado.")
        except ValueError as ve:
            QMessageBox.warning(self, "Erro de validação", str(ve))
        except Exception as e:
            logger.error(f"Error editing product: {e}", exc_info=True)
            QMessageBox.critical(self, "Erro", f"Erro ao editar produto: {e}")

    def _delete_selected_product(self):
        product = selected_entity(self.table_view, self.table_model)
        if not product:
            QMessageBox.information(self, "Nenhum selecionado", "Selecione um produto para excluir.")
            return
        buttons_msg = QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No
        reply = QMessageBox.question(self, "Confirmar exclusão",
                                     f"Excluir o produto '{product.name}'?",
                                     buttons_msg, # type: ignore
                                     QMessageBox.StandardButton.No)
        if reply != QMessageBox.StandardButton.Yes:
            return
        try:
            if self.product_manager.delete_product(product.id):
                self.load_products_data()
            else:
                QMessageBox.warning(self, "Falha", f"O produto '{product.name}' não foi excluído.")
        except ValueError as ve:
            QMessageBox.warning(self, "Exclusão não permitida", str(ve))
