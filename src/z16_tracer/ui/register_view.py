# src/z16_tracer/ui/register_view.py
"""
CPUのレジスタを表示する汎用ウィジェット。
AbstractCpuのメタデータを利用して動的にUIを構築し、表示形式（10進/2進/16進）を切り替えられます。
"""
from typing import Dict, Optional

from PySide6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QLabel, QComboBox, QTableWidget, QTableWidgetItem, QHeaderView
from PySide6.QtCore import Qt, Signal

from z16_tracer.core.cpu import AbstractCpu
from z16_tracer.common.formatting import DisplayFormat, format_value
from z16_tracer.ui.fonts import get_monospace_font

FORMAT_LABELS = [
    ("Decimal", DisplayFormat.DECIMAL),
    ("Binary", DisplayFormat.BINARY),
    ("Hexadecimal", DisplayFormat.HEX),
]

# @intent:responsibility CPUのレジスタ値を表形式で表示するUIウィジェットを提供します。
class RegisterView(QWidget):
    """
    CPUのレジスタ状態を表示するウィジェット。
    PCは常に10進で表示します（命令番号であり、ビットパターンではないため）。
    """
    display_format_changed = Signal(object)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setStyleSheet("background-color: #121212; color: #BBBBBB;")

        self.layout = QVBoxLayout(self)
        self.layout.setContentsMargins(5, 5, 5, 5)

        format_row = QHBoxLayout()
        format_row.addWidget(QLabel("Display Format:"))
        self.format_combo = QComboBox()
        for label, display_format in FORMAT_LABELS:
            self.format_combo.addItem(label, display_format)
        self.format_combo.currentIndexChanged.connect(self._on_format_changed)
        format_row.addWidget(self.format_combo)
        format_row.addStretch()
        self.layout.addLayout(format_row)

        self.table = QTableWidget()
        self.table.setColumnCount(2)
        self.table.setHorizontalHeaderLabels(["Register", "Value"])
        self.table.horizontalHeader().setSectionResizeMode(0, QHeaderView.ResizeMode.ResizeToContents)
        self.table.horizontalHeader().setSectionResizeMode(1, QHeaderView.ResizeMode.Stretch)
        self.table.verticalHeader().setVisible(False)
        self.table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self.table.setFont(get_monospace_font(10))
        self.layout.addWidget(self.table)

        self._cpu: Optional[AbstractCpu] = None
        self._rows: Dict[str, int] = {}
        self._display_format = DisplayFormat.DECIMAL

    # @intent:responsibility 表示対象のCPUを設定し、行を構築します。
    def set_cpu(self, cpu: AbstractCpu) -> None:
        self._cpu = cpu
        self._setup_rows()
        self.update_registers()

    def _setup_rows(self) -> None:
        self._rows.clear()
        names = [reg.name for group in self._cpu.get_register_layout() for reg in group.registers]
        self.table.setRowCount(len(names))
        for row, name in enumerate(names):
            name_item = QTableWidgetItem(name)
            name_item.setTextAlignment(Qt.AlignmentFlag.AlignCenter)
            value_item = QTableWidgetItem("")
            value_item.setTextAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
            self.table.setItem(row, 0, name_item)
            self.table.setItem(row, 1, value_item)
            self._rows[name] = row

    def display_format(self) -> DisplayFormat:
        return self._display_format

    def set_display_format(self, display_format: DisplayFormat) -> None:
        index = self.format_combo.findData(display_format)
        if index != -1:
            self.format_combo.setCurrentIndex(index)

    def _on_format_changed(self, index: int) -> None:
        self._display_format = self.format_combo.itemData(index)
        self.update_registers()
        self.display_format_changed.emit(self._display_format)

    # @intent:responsibility 現在のCPU状態を取得し、レジスタの表示値を更新します。
    def update_registers(self) -> None:
        if not self._cpu:
            return

        for name, value in self._cpu.get_register_map().items():
            row = self._rows.get(name)
            if row is None:
                continue
            text = str(value) if name == "PC" else format_value(value, self._display_format)
            self.table.item(row, 1).setText(text)

    def value_text(self, name: str) -> str:
        """
        指定レジスタの現在の表示文字列を返します（表示内容の確認用）。
        """
        row = self._rows[name]
        return self.table.item(row, 1).text()
