# agroquote/presentation/stores_ui.py

from PyQt5.QtWidgets import (QWidget, QVBoxLayout, QPushButton, QHBoxLayout, QMessageBox,
                             QDialog, QLineEdit, QFormLayout)
from typing import Optional, Dict, Any

from agroquote.business_logic.entities.store_entity import StoreEntity
from agroquote.business_logic.store_manager import StoreManager
from .custom_widgets import EntityTableModel, make_table_view, selected_entity, make_ok_cancel_buttons
import logging

logger = logging.getLogger(__name__)

STORE_COLUMNS = [
    ("ID", lambda s: str(s.id)),
    ("Nome", lambda s: s.name),
    ("Endereço", lambda s: s.address),
    ("Telefone", lambda s: s.phone or ""),
]

class StoreDialog(QDialog):
    def __init__(self, store: Optional[StoreEntity] = None, parent=None):
        super().__init__(parent)
        self.store = store
        self.setWindowTitle("Nova Loja" if not store else f"Editar: {store.name}")
        self.setMinimumWidth(400)

        layout = QFormLayout(self)
        self.name_edit = QLineEdit(self)
        self.address_edit = QLineEdit(self)
        self.phone_edit = QLineEdit(self)

        if self.store:
            self.name_edit.setText(self.store.name)
            self.address_edit.setText(self.store.address)
            self.phone_edit.setText(self.store.phone or "")

        layout.addRow("Nome:", self.name_edit)
        layout.addRow("Endereço:", self.address_edit)
        layout.addRow("Telefone:", self.phone_edit)
        layout.addWidget(make_ok_cancel_buttons(self))

    def get_store_data(self) -> Dict[str, Any]:
        return {
            "name": self.name_edit.text().strip(),
            "address": self.address_edit.text().strip(),
            "phone": self.phone_edit.text().strip() or None,
        }


class StoresUI(QWidget):
    def __init__(self, store_manager: StoreManager, parent=None):
        super().__init__(parent)
        self.store_manager = store_manager
        self.table_model = EntityTableModel(STORE_COLUMNS)
        self._init_ui()

    def _init_ui(self):
        main_layout = QVBoxLayout(self)
        self.table_view = make_table_view(self.table_model, stretch_column=2, parent=self)
        main_layout.addWidget(self.table_view)

        button_layout = QHBoxLayout()
        self.add_button = QPushButton("Adicionar Loja")
        self.edit_button = QPushButton("Editar Loja")
        self.delete_button = QPushButton("Excluir Loja")
        self.refresh_button = QPushButton("Recarregar")

        self.add_button.clicked.connect(self._open_add_store_dialog)
        self.edit_button.clicked.connect(self._open_edit_store_dialog)
        self.delete_button.clicked.connect(self._delete_selected_store)
        self.refresh_button.clicked.connect(self.load_stores_data)

        for button in (self.add_button, self.edit_button, self.delete_button):
            button_layout.addWidget(button)
        button_layout.addStretch()
        button_layout.addWidget(self.refresh_button)
        main_layout.addLayout(button_layout)
        logger.info("StoresUI initialized.")
        self.load_stores_data()

    def load_stores_data(self):
        try:
            stores = self.store_manager.get_all_stores()
            self.table_model.update_data(stores)
            logger.info(f"{len(stores)} stores loaded into table.")
        except Exception as e:
            logger.error(f"Error loading stores: {e}", exc_info=True)
            QMessageBox.critical(self, "Erro ao carregar", f"Erro ao carregar a lista de lojas: {e}")

    def _open_add_store_dialog(self):
        dialog = StoreDialog(parent=self)
        if dialog.exec_() != QDialog.DialogCode.Accepted:
            return
        data = dialog.get_store_data()
        try:
            created = self.store_manager.add_store(**data)
            QMessageBox.information(self, "Sucesso", f"Loja '{created.name}' cadastrada com sucesso.")
            self.load_stores_data()
        except ValueError as ve:
            QMessageBox.warning(self, "Erro de validação", str(ve))
        except Exception as e:
            logger.error(f"Error adding store: {e}", exc_info=True)
            QMessageBox.critical(self, "Erro", f"Erro ao cadastrar loja: {e}")

    def _open_edit_store_dialog(self):
        store = selected_entity(self.table_view, self.table_model)
        if not store:
            QMessageBox.information(self, "Nenhuma selecionada", "Selecione uma loja para editar.")
            return
        dialog = StoreDialog(store=store, parent=self)
        if dialog.exec_() != QDialog.DialogCode.Accepted:
            return
        try:
            if self.store_manager.update_store(store.id, dialog.get_store_data()):
                self.load_stores_data()
            else:
                QMessageBox.warning(self, "Aviso", f"A loja '{store.name}' não foi atualizada.")
        except ValueError as ve:
            QMessageBox.warning(self, "Erro de validação", str(ve))
        except Exception as e:
            logger.error(f"Error editing store: {e}", exc_info=True)
            QMessageBox.critical(self, "Erro", f"Erro ao editar loja: {e}")

    def _delete_selected_store(self):
        store = selected_entity(self.table_view, self.table_model)
        if not store:
            QMessageBox.information(self, "Nenhuma selecionada", "Selecione uma loja para excluir.")
            return
        buttons_msg = QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No
        reply = QMessageBox.question(self, "Confirmar exclusão", f"Excluir a loja '{store.name}'?",
                                     buttons_msg, # type: ignore
                                     QMessageBox.StandardButton.No)
        if reply != QMessageBox.StandardButton.Yes:
            return
        try:
            if self.store_manager.delete_store(store.id):
                self.load_stores_data()
        except ValueError as ve:
            QMessageBox.warning(self, "Exclusão não permitida", str(ve))
