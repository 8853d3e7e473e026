# agroquote/presentation/custom_widgets.py

from PyQt5.QtWidgets import QTableView, QAbstractItemView, QHeaderView, QDialogButtonBox, QDateEdit, QWidget
from PyQt5.QtCore import Qt, QAbstractTableModel, QVariant, QModelIndex
from typing import Any, Callable, List, Optional, Sequence, Tuple
import logging

from agroquote.utils import date_converter

logger = logging.getLogger(__name__)


# A column is a header plus a function that renders one entity's cell text.
Column = Tuple[str, Callable[[Any], str]]

class EntityTableModel(QAbstractTableModel):
    """Read-only table model over a list of entities, driven by column renderers."""

    def __init__(self, columns: Sequence[Column], numeric_columns: Sequence[int] = (), parent=None):
        super().__init__(parent)
        self._columns = list(columns)
        self._numeric_columns = set(numeric_columns)
        self._data: List[Any] = []

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return len(self._data)

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:
        return len(self._columns)

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if not index.isValid() or not (0 <= index.row() < len(self._data)):
            return QVariant()

        entity = self._data[index.row()]
        if role == Qt.ItemDataRole.DisplayRole:
            _, render = self._columns[index.column()]
            try:
                return render(entity)
            except (AttributeError, TypeError, ValueError) as e:
                logger.warning(f"Could not render column {index.column()} for {entity}: {e}")
                return ""
        if role == Qt.ItemDataRole.TextAlignmentRole and index.column() in self._numeric_columns:
            return Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter
        return QVariant()

    def headerData(self, section: int, orientation: Qt.Orientation, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if orientation == Qt.Orientation.Horizontal and role == Qt.ItemDataRole.DisplayRole:
            if 0 <= section < len(self._columns):
                return self._columns[section][0]
        return QVariant()

    def update_data(self, new_data: List[Any]):
        logger.debug(f"Updating table model with {len(new_data)} rows.")
        self.beginResetModel()
        self._data = list(new_data)
        self.endResetModel()

    def entity_at_row(self, row: int) -> Optional[Any]:
        if 0 <= row < len(self._data):
            return self._data[row]
        return None


def make_table_view(model: QAbstractTableModel, stretch_column: int = 1, parent: Optional[QWidget] = None) -> QTableView:
    table_view = QTableView(parent)
    table_view.setModel(model)
    table_view.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
    table_view.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
    table_view.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
    header = table_view.horizontalHeader()
    if header:
        header.setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
        header.setSectionResizeMode(stretch_column, QHeaderView.ResizeMode.Stretch)
    return table_view


def selected_entity(table_view: QTableView, model: EntityTableModel):
    selection_model = table_view.selectionModel()
    if not selection_model or not selection_model.hasSelection():
        return None
    selected_rows = selection_model.selectedRows()
    if not selected_rows:
        return None
    return model.entity_at_row(selected_rows[0].row())


def make_ok_cancel_buttons(parent) -> QDialogButtonBox:
    buttons_flags = QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel
    button_box = QDialogButtonBox(buttons_flags, Qt.Orientation.Horizontal, parent) # type: ignore
    ok_button = button_box.button(QDialogButtonBox.StandardButton.Ok)
    if ok_button: ok_button.setText("Confirmar")
    cancel_button = button_box.button(QDialogButtonBox.StandardButton.Cancel)
    if cancel_button: cancel_button.setText("Cancelar")
    button_box.accepted.connect(parent.accept)
    button_box.rejected.connect(parent.reject)
    return button_box


class IsoDateEdit(QDateEdit):
    """QDateEdit with a calendar popup that reads and writes Python dates as YYYY-MM-DD."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setCalendarPopup(True)
        self.setDisplayFormat("yyyy-MM-dd")
        self.setDate(date_converter.to_qdate(None))

    def py_date(self):
        return date_converter.from_qdate(self.date())

    def set_py_date(self, value):
        self.setDate(date_converter.to_qdate(value))
