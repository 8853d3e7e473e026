# agroquote/presentation/reports_ui.py

from PyQt5.QtWidgets import (
    QWidget, QVBoxLayout, QPushButton, QHBoxLayout, QMessageBox, QFormLayout, QGroupBox, QTextBrowser
)
from PyQt5.QtGui import QFont

from agroquote.business_logic.quote_report_manager import QuoteReportManager
from .custom_widgets import IsoDateEdit

import logging
logger = logging.getLogger(__name__)


class ReportsUI(QWidget):
    """Date picker plus the two quote reports, shown as plain text."""

    def __init__(self, report_manager: QuoteReportManager, parent=None):
        super().__init__(parent)
        self.report_manager = report_manager
        self._init_ui()

    def _init_ui(self):
        layout = QVBoxLayout(self)

        options_group = QGroupBox("Filtro do relatório de cotações")
        options_layout = QFormLayout(options_group)
        self.date_edit = IsoDateEdit(self)
        options_layout.addRow("Data da cotação:", self.date_edit)

        button_layout = QHBoxLayout()
        self.winners_button = QPushButton("Gerar Relatório por Data")
        self.full_button = QPushButton("Mostrar Vencedores e Perdedores")
        button_layout.addWidget(self.winners_button)
        button_layout.addWidget(self.full_button)
        button_layout.addStretch()
        options_layout.addRow(button_layout)
        layout.addWidget(options_group)

        self.report_display = QTextBrowser(self)
        self.report_display.setFont(QFont("Monospace", 10))
        layout.addWidget(self.report_display)

        self.winners_button.clicked.connect(self._generate_winner_report)
        self.full_button.clicked.connect(self._generate_full_report)

    def _generate_winner_report(self):
        self._show_report(self.report_manager.generate_winner_report)

    def _generate_full_report(self):
        self._show_report(self.report_manager.generate_full_report)

    def _show_report(self, generate):
        report_date = self.date_edit.py_date()
        try:
            self.report_display.setPlainText(generate(report_date))
        except Exception as e:
            logger.error(f"Error generating quote report for {report_date}: {e}", exc_info=True)
            QMessageBox.critical(self, "Erro", f"Erro ao gerar o relatório: {e}")
