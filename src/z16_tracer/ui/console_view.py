"""
トラップ出力（ECALL）とエラーを表示するコンソールウィジェット。
"""
from PySide6.QtWidgets import QPlainTextEdit
from PySide6.QtCore import Signal, Slot

from z16_tracer.core.trap_log import TrapLog
from z16_tracer.ui.fonts import get_monospace_font

# @intent:responsibility トラップログの内容を追記表示します。
# @intent:rationale TrapLogのリスナーはDebuggerThreadから呼ばれることがあるため、Signal経由でGUIスレッドに渡します。
class ConsoleView(QPlainTextEdit):
    message_received = Signal(str)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setReadOnly(True)
        self.setFont(get_monospace_font(10))
        self.setStyleSheet("background-color: #101010; color: #BBBBBB;")
        self.message_received.connect(self._append_line)

    def attach(self, trap_log: TrapLog) -> None:
        trap_log.subscribe(self.message_received.emit)

    # @intent:responsibility 表示内容をトラップログの内容で置き換えます。ステップバックやリセットの後に使用します。
    def set_messages(self, messages) -> None:
        self.setPlainText("\n".join(messages))

    def append_error(self, text: str) -> None:
        self._append_line(f"ERROR: {text}")

    @Slot(str)
    def _append_line(self, text: str) -> None:
        self.appendPlainText(text)

    def lines(self):
        """
        表示中の行のリストを返します（表示内容の確認用）。
        """
        text = self.toPlainText()
        return text.splitlines() if text else []
