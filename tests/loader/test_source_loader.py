# tests/loader/test_source_loader.py
"""
z16_tracer.loader.loaderモジュールの単体テスト。
"""
from z16_tracer.loader.loader import SourceLoader

# @intent:test_suite アセンブリソースファイルの読み書きの検証。

class TestSourceLoader:
    # @intent:test_case_round_trip 保存したテキストがそのまま読み戻せることを検証します。
    def test_save_and_load(self, tmp_path):
        path = tmp_path / "prog.s"
        loader = SourceLoader()
        text = "LI x0, 5 # 初期値\nECALL x0\n"
        loader.save_source(str(path), text)
        assert loader.load_source(str(path)) == text

    # @intent:test_case_newlines CRLFやCRの改行がLFに正規化されることを検証します。
    def test_newlines_are_normalized(self, tmp_path):
        path = tmp_path / "crlf.s"
        path.write_bytes(b"LI x0, 1\r\nLI x1, 2\rECALL x1\r\n")
        assert SourceLoader().load_source(str(path)) == "LI x0, 1\nLI x1, 2\nECALL x1\n"

    # @intent:test_case_bom 先頭のBOMが取り除かれ、最初の命令が正しく解釈されることを検証します。
    def test_bom_is_stripped(self, tmp_path):
        path = tmp_path / "bom.s"
        path.write_bytes("LI x0, 1\n".encode("utf-8-sig"))
        assert SourceLoader().load_source(str(path)) == "LI x0, 1\n"
