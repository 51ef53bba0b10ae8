# src/z16_tracer/ui/main_window.py
"""
メインウィンドウの実装。
アプリケーションの主要なUIコンポーネントを保持し、レイアウトを管理します。
"""
import logging
from typing import Optional

from PySide6.QtWidgets import QMainWindow, QWidget, QHBoxLayout, QVBoxLayout, QLabel, QToolBar, QFileDialog, QMessageBox, QSplitter
from PySide6.QtGui import QAction
from PySide6.QtCore import Qt, QThread, Signal, Slot

from z16_tracer.config.builder import SystemBuilder
from z16_tracer.config.loader import ConfigLoader
from z16_tracer.config.models import SystemConfig
from z16_tracer.core.snapshot import Snapshot
from z16_tracer.debugger.debugger import Debugger, RunResult, StopReason
from z16_tracer.loader.loader import SourceLoader
from .code_editor import CodeEditor
from .console_view import ConsoleView
from .register_view import RegisterView

logger = logging.getLogger(__name__)

# @intent:responsibility デバッガのrunメソッドをバックグラウンドで実行します。
class DebuggerThread(QThread):
    """
    デバッガのrun()をノンブロッキングで実行するためのスレッド。
    ソーステキストは開始時点のものを使用します。
    """
    run_finished = Signal(object)

    def __init__(self, debugger: Debugger):
        super().__init__()
        self.debugger = debugger
        self.program_text = ""

    def run(self):
        result = self.debugger.run(self.program_text)
        self.run_finished.emit(result)


# @intent:responsibility アプリケーションのメインウィンドウを定義し、UIの主要なコンポーネントを組み立てます。
class MainWindow(QMainWindow):
    """
    アプリケーションのメインウィンドウクラス。
    左にエディタとコンソール、右にレジスタ表を配置します。
    """
    def __init__(self, config: Optional[SystemConfig] = None, parent=None):
        super(MainWindow, self).__init__(parent)
        self.setWindowTitle("Z16 Assembly Simulator")
        self.setGeometry(100, 100, 1100, 700)

        self.code_editor = CodeEditor()
        self.console_view = ConsoleView()
        self.register_view = RegisterView()
        self.status_label = QLabel("Ready")

        self._create_layout()
        self._create_toolbar()
        self._create_menus()
        self._apply_config(config or SystemConfig())

    def _create_layout(self):
        left = QSplitter(Qt.Orientation.Vertical)
        left.addWidget(self.code_editor)
        left.addWidget(self.console_view)
        left.setSizes([500, 200])

        right = QWidget()
        right_layout = QVBoxLayout(right)
        right_layout.setContentsMargins(0, 0, 0, 0)
        right_layout.addWidget(self.register_view)
        right_layout.addWidget(self.status_label)

        central_widget = QWidget()
        layout = QHBoxLayout(central_widget)
        layout.addWidget(left, 3)
        layout.addWidget(right, 2)
        self.setCentralWidget(central_widget)

    # @intent:responsibility 実行制御用のツールバーを作成します。
    def _create_toolbar(self):
        toolbar = QToolBar("Main Toolbar")
        self.addToolBar(toolbar)

        self.step_action = QAction("Step", self)
        self.step_action.triggered.connect(self._step)
        toolbar.addAction(self.step_action)

        # 「Run」はリセット後に1命令だけ実行する
        self.run_action = QAction("Run", self)
        self.run_action.triggered.connect(self._run_from_start)
        toolbar.addAction(self.run_action)

        self.run_to_end_action = QAction("Run to End", self)
        self.run_to_end_action.triggered.connect(self._run_to_end)
        toolbar.addAction(self.run_to_end_action)

        self.stop_action = QAction("Stop", self)
        self.stop_action.triggered.connect(self._stop)
        toolbar.addAction(self.stop_action)

        self.step_back_action = QAction("Step Back", self)
        self.step_back_action.triggered.connect(self._step_back)
        toolbar.addAction(self.step_back_action)

        self.reset_action = QAction("Reset", self)
        self.reset_action.triggered.connect(self._reset)
        toolbar.addAction(self.reset_action)

    # @intent:responsibility メニューバーを作成し、ファイル操作アクションを追加します。
    def _create_menus(self):
        file_menu = self.menuBar().addMenu("File")

        self.open_action = QAction("Open Source...", self)
        self.open_action.setShortcut("Ctrl+O")
        self.open_action.triggered.connect(self._open_source)
        file_menu.addAction(self.open_action)

        self.save_action = QAction("Save Source...", self)
        self.save_action.setShortcut("Ctrl+S")
        self.save_action.triggered.connect(self._save_source)
        file_menu.addAction(self.save_action)

        self.load_config_action = QAction("Load System Config...", self)
        self.load_config_action.triggered.connect(self._load_system_config)
        file_menu.addAction(self.load_config_action)

    # @intent:responsibility 設定からバックエンドを構築し、各ビューに接続します。
    def _apply_config(self, config: SystemConfig):
        self.cpu, self.debugger, self.trap_log = SystemBuilder().build_system(config)
        self.console_view.clear()
        self.console_view.attach(self.trap_log)
        self.register_view.set_cpu(self.cpu)
        self.register_view.set_display_format(config.display.format)

        self.debugger_thread = DebuggerThread(self.debugger)
        self.debugger_thread.run_finished.connect(self._on_run_finished)

        if config.program:
            try:
                self.code_editor.setPlainText(SourceLoader().load_source(config.program))
            except OSError as e:
                self.console_view.append_error(f"Failed to open source file: {e}")
        self._refresh()
        self._update_ui_state(False)

    # @intent:responsibility 実行状態に応じてUIコンポーネントの有効/無効を切り替えます。
    def _update_ui_state(self, is_running: bool):
        for action in (self.step_action, self.run_action, self.run_to_end_action,
                       self.step_back_action, self.reset_action, self.open_action, self.load_config_action):
            action.setEnabled(not is_running)
        self.stop_action.setEnabled(is_running)
        self.code_editor.setReadOnly(is_running)

    def _refresh(self):
        self.register_view.update_registers()
        self.code_editor.set_current_pc(self.cpu.get_state().pc)

    # @intent:responsibility スナップショットの情報に基づいてUIを更新します。
    def _show_snapshot(self, snapshot: Optional[Snapshot]):
        self._refresh()
        if snapshot is None:
            self.status_label.setText("Ready")
        elif snapshot.error is not None:
            self.console_view.append_error(str(snapshot.error))
            self.status_label.setText("Error")
        elif snapshot.operation is None:
            self.status_label.setText("End of program")
        else:
            text = snapshot.metadata.symbol_info or ""
            line = self.code_editor.current_line()
            if line is not None:
                text += f"  (next: line {line + 1})"
            self.status_label.setText(text)

    @Slot()
    def _step(self):
        self._show_snapshot(self.debugger.step_instruction(self.code_editor.program_text()))

    @Slot()
    def _run_from_start(self):
        snapshot = self.debugger.run_from_start(self.code_editor.program_text())
        self.console_view.set_messages(self.trap_log.messages())
        self._show_snapshot(snapshot)

    @Slot()
    def _run_to_end(self):
        self._update_ui_state(True)
        self.status_label.setText("Running...")
        self.debugger_thread.program_text = self.code_editor.program_text()
        # スレッド開始前に押されたStopも有効にするため、GUIスレッドで実行を予約する
        self.debugger.prepare_run()
        self.debugger_thread.start()

    @Slot()
    def _stop(self):
        self.status_label.setText("Stopping...")
        self.debugger.stop()

    @Slot()
    def _step_back(self):
        snapshot = self.debugger.step_back()
        self.console_view.set_messages(self.trap_log.messages())
        self._show_snapshot(snapshot)

    @Slot()
    def _reset(self):
        self.debugger.reset()
        self.console_view.clear()
        self._show_snapshot(None)

    @Slot(object)
    def _on_run_finished(self, result: RunResult):
        self._update_ui_state(False)
        self._show_snapshot(result.snapshot)
        if result.reason != StopReason.ERROR:
            self.status_label.setText(f"{result.reason.value} after {result.steps} steps")

    def _load_source_file(self, file_name: str):
        try:
            self.code_editor.setPlainText(SourceLoader().load_source(file_name))
        except OSError as e:
            QMessageBox.critical(self, "Error", f"Failed to open source file:\n{e}")
            return
        self._reset()

    @Slot()
    def _open_source(self):
        file_name, _ = QFileDialog.getOpenFileName(self, "Open Z16 Source", "", "Assembly Files (*.s *.asm);;All Files (*)")
        if file_name:
            self._load_source_file(file_name)

    @Slot()
    def _save_source(self):
        file_name, _ = QFileDialog.getSaveFileName(self, "Save Z16 Source", "", "Assembly Files (*.s *.asm);;All Files (*)")
        if file_name:
            try:
                SourceLoader().save_source(file_name, self.code_editor.program_text())
            except OSError as e:
                QMessageBox.critical(self, "Error", f"Failed to save source file:\n{e}")

    @Slot()
    def _load_system_config(self):
        file_name, _ = QFileDialog.getOpenFileName(self, "Open System Config", "", "YAML Files (*.yaml *.yml);;All Files (*)")
        if file_name:
            try:
                config = ConfigLoader().load_from_file(file_name)
            except (OSError, ValueError) as e:
                QMessageBox.critical(self, "Error", f"Failed to load config:\n{e}")
                return
            logger.info("Loaded system config from %s", file_name)
            self._apply_config(config)

    def closeEvent(self, event):
        if self.debugger_thread.isRunning():
            self.debugger.stop()
            self.debugger_thread.wait()
        super().closeEvent(event)
