import os
import sys
import unittest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication

from z16_tracer.common.formatting import DisplayFormat
from z16_tracer.config.models import SystemConfig, DisplayConfig, InitialState
from z16_tracer.ui.main_window import MainWindow

PROGRAM = "LI x1, 3\n# print\nECALL x1\nFOO x1"

class TestMainWindowLogic(unittest.TestCase):
    """
    ツールバー操作に対応するスロットが、エディタ・レジスタ表・コンソールを同期させることを検証します。
    """
    @classmethod
    def setUpClass(cls):
        if not QApplication.instance():
            cls.app = QApplication(sys.argv)
        else:
            cls.app = QApplication.instance()

    def setUp(self):
        self.window = MainWindow()
        self.window.code_editor.setPlainText(PROGRAM)

    def tearDown(self):
        self.window.close()

    def test_step_updates_views(self):
        self.window._step()
        self.assertEqual(self.window.register_view.value_text("x1"), "3")
        self.assertEqual(self.window.code_editor.current_line(), 2)
        self.assertTrue(self.window.status_label.text().endswith("(next: line 3)"))

        self.window._step()
        self.assertEqual(self.window.console_view.lines(), ["3"])

    def test_error_is_reported_in_console(self):
        for _ in range(3):
            self.window._step()
        lines = self.window.console_view.lines()
        self.assertEqual(lines[0], "3")
        self.assertTrue(lines[1].startswith("ERROR: PC 2: Unknown instruction: FOO"))
        self.assertEqual(self.window.cpu.get_state().pc, 2)

    def test_run_from_start_and_step_back(self):
        self.window._step()
        self.window._step()
        self.window._run_from_start()
        self.assertEqual(self.window.cpu.get_state().pc, 1)
        self.assertEqual(self.window.console_view.lines(), [])

        self.window._step()
        self.assertEqual(self.window.console_view.lines(), ["3"])
        self.window._step_back()
        self.assertEqual(self.window.console_view.lines(), [])
        self.assertEqual(self.window.cpu.get_state().pc, 1)

    def test_reset(self):
        self.window._step()
        self.window._step()
        self.window._reset()
        self.assertEqual(self.window.console_view.lines(), [])
        self.assertEqual(self.window.register_view.value_text("x1"), "0")
        self.assertEqual(self.window.code_editor.current_line(), 0)

    def test_config_is_applied(self):
        config = SystemConfig(display=DisplayConfig(format=DisplayFormat.HEX),
                              initial_state=InitialState(registers={"x2": 255}))
        window = MainWindow(config)
        self.assertEqual(window.register_view.value_text("x2"), "0xFF")
        window.close()

if __name__ == '__main__':
    unittest.main()
