# src/z16_tracer/ui/app.py
"""
Qtアプリケーションのエントリポイント。
アプリケーションを初期化し、メインウィンドウを起動します。
"""
import logging
import sys

from PySide6.QtWidgets import QApplication

from z16_tracer.config.loader import ConfigLoader
from .main_window import MainWindow

# @intent:responsibility アプリケーションを起動し、メインウィンドウを表示します。
def main():
    """
    アプリケーションのメイン関数。
    第1引数にYAML設定ファイルのパスを渡すと、その構成で起動します。
    """
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = QApplication(sys.argv)

    config = None
    args = app.arguments()[1:]
    if args:
        config = ConfigLoader().load_from_file(args[0])

    main_win = MainWindow(config)
    main_win.show()
    sys.exit(app.exec())

if __name__ == '__main__':
    main()
