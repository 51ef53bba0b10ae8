import os
import sys
import unittest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication

from z16_tracer.arch.z16.cpu import Z16Cpu
from z16_tracer.common.formatting import DisplayFormat
from z16_tracer.ui.register_view import RegisterView

class TestRegisterView(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        if not QApplication.instance():
            cls.app = QApplication(sys.argv)
        else:
            cls.app = QApplication.instance()

    def setUp(self):
        self.cpu = Z16Cpu()
        self.view = RegisterView()
        self.view.set_cpu(self.cpu)

    def test_rows_follow_layout(self):
        self.assertEqual(self.view.table.rowCount(), 9)
        self.assertEqual(self.view.value_text("x0"), "0")
        self.assertEqual(self.view.value_text("PC"), "0")

    def test_format_switching(self):
        """
        表示形式を切り替えると、同じ値が10進・2進・16進で再表示されることを検証します。
        """
        self.cpu.step("LI x1, -1")
        self.view.update_registers()
        self.assertEqual(self.view.value_text("x1"), "-1")

        received = []
        self.view.display_format_changed.connect(received.append)

        self.view.set_display_format(DisplayFormat.HEX)
        self.assertEqual(self.view.value_text("x1"), "0xFFFFFFFF")
        self.assertEqual(self.view.display_format(), DisplayFormat.HEX)

        self.view.set_display_format(DisplayFormat.BINARY)
        self.assertEqual(self.view.value_text("x1"), "0b" + "1" * 32)
        self.assertEqual(self.view.value_text("x2"), "0b00000000")

        self.assertEqual(received, [DisplayFormat.HEX, DisplayFormat.BINARY])

    def test_pc_is_always_decimal(self):
        self.cpu.step("LI x1, 1\nLI x2, 2")
        self.view.set_display_format(DisplayFormat.HEX)
        self.assertEqual(self.view.value_text("PC"), "1")

if __name__ == '__main__':
    unittest.main()
