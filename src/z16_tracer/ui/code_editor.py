"""
アセンブリソースを編集するウィジェット。
"""
from typing import Optional

from PySide6.QtWidgets import QPlainTextEdit, QTextEdit
from PySide6.QtGui import QColor, QTextCursor, QTextFormat

from z16_tracer.arch.z16.decoder import source_line_numbers
from z16_tracer.ui.fonts import get_monospace_font
from z16_tracer.ui.highlighter import Z16Highlighter

DEFAULT_SOURCE = "ADDI x0, 10 # Continue from here\n"

# @intent:responsibility ソースの編集とハイライト、および現在のPCに対応する行のマーカー表示を提供します。
class CodeEditor(QPlainTextEdit):
    """
    Z16アセンブリのエディタ。
    PCは実行可能行のインデックスなので、空行・コメント行を飛ばしてソース行番号に変換してから表示します。
    """
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setFont(get_monospace_font(11))
        self.setStyleSheet("background-color: #2A313D; color: #DDDDDD;")
        self.setLineWrapMode(QPlainTextEdit.LineWrapMode.NoWrap)
        self._highlighter = Z16Highlighter(self.document())
        self._current_line: Optional[int] = None
        self.setPlainText(DEFAULT_SOURCE)

    def program_text(self) -> str:
        return self.toPlainText()

    def current_line(self) -> Optional[int]:
        """
        マーカーが付いているソース行番号（0始まり）を返します。PCが末尾を超えている場合はNone。
        """
        return self._current_line

    # @intent:responsibility PCに対応するソース行にマーカーを付けます。
    # @intent:rationale ソースは実行中も編集可能なため、毎回現在のテキストから対応表を作り直します。
    def set_current_pc(self, pc: int) -> None:
        line_numbers = source_line_numbers(self.toPlainText())
        if 0 <= pc < len(line_numbers):
            self._current_line = line_numbers[pc]
        else:
            self._current_line = None
        self._update_marker()

    def _update_marker(self) -> None:
        selections = []
        if self._current_line is not None:
            block = self.document().findBlockByNumber(self._current_line)
            selection = QTextEdit.ExtraSelection()
            selection.format.setBackground(QColor("#404000")) # Dark Yellow
            selection.format.setProperty(QTextFormat.Property.FullWidthSelection, True)
            selection.cursor = QTextCursor(block)
            selection.cursor.clearSelection()
            selections.append(selection)
            self.setTextCursor(QTextCursor(block))
            self.ensureCursorVisible()
        self.setExtraSelections(selections)
