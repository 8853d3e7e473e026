# agroquote/presentation/prescriptions_ui.py

from PyQt5.QtWidgets import (QWidget, QVBoxLayout, QPushButton, QHBoxLayout, QMessageBox,
                             QDialog, QLineEdit, QFormLayout, QComboBox)
from typing import Optional, Dict, Any, List

from agroquote.business_logic.entities.prescription_entity import PrescriptionEntity
from agroquote.business_logic.prescription_manager import PrescriptionManager
from agroquote.business_logic.product_manager import ProductManager
from .custom_widgets import EntityTableModel, make_table_view, selected_entity, make_ok_cancel_buttons
import logging

logger = logging.getLogger(__name__)

PRESCRIPTION_COLUMNS = [
    ("ID", lambda p: str(p.id)),
    ("Produto", lambda p: p.product.name if p.product else f"#{p.product_id} (não encontrado)"),
    ("Quantidade", lambda p: f"{p.required_quantity:,.2f}"),
    ("Unidade", lambda p: p.required_unit),
]

class PrescriptionDialog(QDialog):
    def __init__(self, products: List, prescription: Optional[PrescriptionEntity] = None, parent=None):
        super().__init__(parent)
        self.prescription = prescription
        self._units = {product.id: product.standard_unit for product in products}
        self.setWindowTitle("Nova Prescrição" if not prescription else f"Editar Prescrição #{prescription.id}")
        self.setMinimumWidth(360)

        layout = QFormLayout(self)
        self.product_combo = QComboBox(self)
        for product in products:
            self.product_combo.addItem(product.name, product.id)
        self.quantity_edit = QLineEdit(self)
        self.unit_edit = QLineEdit(self)
        self.product_combo.currentIndexChanged.connect(self._on_product_changed)

        if self.prescription:
            self.product_combo.setCurrentIndex(max(0, self.product_combo.findData(self.prescription.product_id)))
            self.quantity_edit.setText(str(self.prescription.required_quantity))
            self.unit_edit.setText(self.prescription.required_unit)
        else:
            self._on_product_changed()

        layout.addRow("Produto:", self.product_combo)
        layout.addRow("Quantidade requerida:", self.quantity_edit)
        layout.addRow("Unidade requerida:", self.unit_edit)
        layout.addWidget(make_ok_cancel_buttons(self))

    def _on_product_changed(self):
        # Suggest the product's standard unit; the user may still type another.
        unit = self._units.get(self.product_combo.currentData())
        if unit:
            self.unit_edit.setText(unit)

    def get_prescription_data(self) -> Optional[Dict[str, Any]]:
        if self.product_combo.currentData() is None:
            QMessageBox.warning(self, "Entrada inválida", "Cadastre e selecione um produto.")
            return None
        return {
            "product_id": self.product_combo.currentData(),
            "required_quantity": self.quantity_edit.text(),
            "required_unit": self.unit_edit.text(),
        }


class PrescriptionsUI(QWidget):
    def __init__(self, prescription_manager: PrescriptionManager, product_manager: ProductManager, parent=None):
        super().__init__(parent)
        self.prescription_manager = prescription_manager
        self.product_manager = product_manager
        self.table_model = EntityTableModel(PRESCRIPTION_COLUMNS, numeric_columns=(2,))
        self._init_ui()

    def _init_ui(self):
        main_layout = QVBoxLayout(self)
        self.table_view = make_table_view(self.table_model, stretch_column=1, parent=self)
        main_layout.addWidget(self.table_view)

        button_layout = QHBoxLayout()
        self.add_button = QPushButton("Adicionar Prescrição")
        self.edit_button = QPushButton("Editar Prescrição")
        self.delete_button = QPushButton("Excluir Prescrição")
        self.refresh_button = QPushButton("Recarregar")

        self.add_button.clicked.connect(self._open_add_dialog)
        self.edit_button.clicked.connect(self._open_edit_dialog)
        self.delete_button.clicked.connect(self._delete_selected)
        self.refresh_button.clicked.connect(self.load_prescriptions_data)

        for button in (self.add_button, self.edit_button, self.delete_button):
            button_layout.addWidget(button)
        button_layout.addStretch()
        button_layout.addWidget(self.refresh_button)
        main_layout.addLayout(button_layout)
        logger.info("PrescriptionsUI initialized.")
        self.load_prescriptions_data()

    def load_prescriptions_data(self):
        try:
            prescriptions = self.prescription_manager.get_all_prescriptions()
            self.table_model.update_data(prescriptions)
            logger.info(f"{len(prescriptions)} prescriptions loaded into table.")
        except Exception as e:
            logger.error(f"Error loading prescriptions: {e}", exc_info=True)
            QMessageBox.critical(self, "Erro ao carregar", f"Erro ao carregar as prescrições: {e}")

    def _open_add_dialog(self):
        dialog = PrescriptionDialog(self.product_manager.get_all_products(), parent=self)
        if dialog.exec_() != QDialog.DialogCode.Accepted:
            return
        data = dialog.get_prescription_data()
        if not data:
            return
        try:
            if self.prescription_manager.create_prescription(**data):
                self.load_prescriptions_data()
            else:
                QMessageBox.warning(self, "Erro", "Não foi possível cadastrar a prescrição.")
        except ValueError as ve:
            QMessageBox.warning(self, "Erro de validação", str(ve))
        except Exception as e:
            logger.error(f"Error adding prescription: {e}", exc_info=True)
            QMessageBox.critical(self, "Erro", f"Erro ao cadastrar prescrição: {e}")

    def _open_edit_dialog(self):
        prescription = selected_entity(self.table_view, self.table_model)
        if not prescription:
            QMessageBox.information(self, "Nenhuma selecionada", "Selecione uma prescrição para editar.")
            return
        dialog = PrescriptionDialog(self.product_manager.get_all_products(), prescription=prescription, parent=self)
        if dialog.exec_() != QDialog.DialogCode.Accepted:
            return
        data = dialog.get_prescription_data()
        if not data:
            return
        try:
            if self.prescription_manager.update_prescription(prescription.id, data):
                self.load_prescriptions_data()
        except ValueError as ve:
            QMessageBox.warning(self, "Erro de validação", str(ve))

    def _delete_selected(self):
        prescription = selected_entity(self.table_view, self.table_model)
        if not prescription:
            QMessageBox.information(self, "Nenhuma selecionada", "Selecione uma prescrição para excluir.")
            return
        buttons_msg = QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No
        reply = QMessageBox.question(self, "Confirmar exclusão", f"Excluir a prescrição #{prescription.id}?",
                                     buttons_msg, # type: ignore
                                     QMessageBox.StandardButton.No)
        if reply == QMessageBox.StandardButton.Yes and self.prescription_manager.delete_prescription(prescription.id):
            self.load_prescriptions_data()
