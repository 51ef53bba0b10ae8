# tests/arch/z16/test_decoder.py
"""
z16_tracer.arch.z16.decoderモジュールの単体テスト。
行のトークン分割と、実行可能行の番号付けを検証します。
"""
import pytest

from z16_tracer.arch.z16.decoder import strip_comment, tokenize, executable_lines, source_line_numbers, split_lines

# @intent:test_suite 行デコーダ（テキスト -> トークン列）の検証。

class TestTokenize:
    # @intent:test_case_separators 空白とカンマの連続がひとつの区切りとして扱われることを検証します。
    @pytest.mark.parametrize("line, expected", [
        ("ADD x2, x0", ["ADD", "x2", "x0"]),
        ("LI 0x0,5", ["LI", "0x0", "5"]),
        ("  beq   x1 ,, x2 ,  -3  ", ["beq", "x1", "x2", "-3"]),
        ("ECALL\tx1", ["ECALL", "x1"]),
        ("J 1", ["J", "1"]),
    ])
    def test_separators(self, line, expected):
        assert tokenize(line) == expected

    # @intent:test_case_comment コメントマーカー以降が無視されることを検証します。
    def test_comment_is_discarded(self):
        assert tokenize("ADDI x0, 10 # Continue from here") == ["ADDI", "x0", "10"]
        assert strip_comment("LI x1, 2 # a, b") == "LI x1, 2 "

    # @intent:test_case_empty 空行・コメントのみの行が空リストになることを検証します。
    @pytest.mark.parametrize("line", ["", "   ", "# only a comment", "   # indented comment", ",,,"])
    def test_empty_lines(self, line):
        assert tokenize(line) == []

class TestExecutableLines:
    SOURCE = "\n".join([
        "# header",
        "LI x0, 5",
        "",
        "   ",
        "LI x1, 10   # second",
        "# middle",
        "ADD x0, x1",
    ])

    # @intent:test_case_filtering 空行・コメント行が除外され、PCが実行可能行のみを数えることを検証します。
    def test_blank_and_comment_lines_are_filtered(self):
        assert executable_lines(self.SOURCE) == ["LI x0, 5", "LI x1, 10", "ADD x0, x1"]

    # @intent:test_case_line_numbers 実行可能行からソース行番号への対応を検証します。
    def test_source_line_numbers(self):
        assert source_line_numbers(self.SOURCE) == [1, 4, 6]

    def test_empty_program(self):
        assert executable_lines("") == []
        assert source_line_numbers("\n\n# nothing\n") == []

class TestLineSplitting:
    # @intent:test_case_newline_only 改行（LF/CRLF/CR）以外の区切り文字では行が分かれず、エディタの行番号と一致することを検証します。
    @pytest.mark.parametrize("separator", ["\x0c", "\x0b", "\x1c", "\x1d", "\x1e", "\x85", " "])
    def test_only_newlines_split_lines(self, separator):
        source = f"LI x1, 1{separator}LI x2, 2\nECALL x1"
        assert len(executable_lines(source)) == 2
        assert source_line_numbers(source) == [0, 1]

    @pytest.mark.parametrize("newline", ["\n", "\r\n", "\r"])
    def test_newline_variants(self, newline):
        source = newline.join(["LI x1, 1", "", "ECALL x1"])
        assert split_lines(source) == ["LI x1, 1", "", "ECALL x1"]
        assert source_line_numbers(source) == [0, 2]
