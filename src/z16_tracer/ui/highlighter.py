# src/z16_tracer/ui/highlighter.py
"""
Z16アセンブリのシンタックスハイライタ。
"""
import re
from typing import List, Tuple

from PySide6.QtGui import QSyntaxHighlighter, QTextCharFormat, QColor, QFont

from z16_tracer.arch.z16.decoder import COMMENT_MARKER
from z16_tracer.arch.z16.opcodes import Opcode

# エディタ上ではロード/ストア系も強調する（実行はされない）
EXTRA_KEYWORDS = ["LB", "LW", "LBU"]

def _format(color: str, bold: bool = False, italic: bool = False) -> QTextCharFormat:
    fmt = QTextCharFormat()
    fmt.setForeground(QColor(color))
    if bold:
        fmt.setFontWeight(QFont.Weight.Bold)
    fmt.setFontItalic(italic)
    return fmt

# @intent:responsibility ニーモニック、レジスタ、即値、コメントを色分けします。
class Z16Highlighter(QSyntaxHighlighter):
    def __init__(self, document=None):
        super().__init__(document)
        keywords = sorted([op.value for op in Opcode] + EXTRA_KEYWORDS, key=len, reverse=True)
        self._rules: List[Tuple[re.Pattern, QTextCharFormat]] = [
            (re.compile(r"\b(" + "|".join(keywords) + r")\b", re.IGNORECASE), _format("#FF9800", bold=True)),
            (re.compile(r"\bx[0-7]\b", re.IGNORECASE), _format("#2196F3", bold=True)),
            (re.compile(r"\b(0x[0-9A-Fa-f]+|0b[01]+|\d+)\b"), _format("#4CAF50")),
        ]
        self._comment = (re.compile(re.escape(COMMENT_MARKER) + r".*"), _format("#9E9E9E", italic=True))

    # @intent:responsibility 1ブロック（1行）分のハイライトを適用します。コメントは最後に上書きします。
    def highlightBlock(self, text: str) -> None:
        for pattern, fmt in self._rules:
            for match in pattern.finditer(text):
                self.setFormat(match.start(), match.end() - match.start(), fmt)

        pattern, fmt = self._comment
        match = pattern.search(text)
        if match:
            self.setFormat(match.start(), len(text) - match.start(), fmt)
