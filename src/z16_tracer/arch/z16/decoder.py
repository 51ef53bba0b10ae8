# src/z16_tracer/arch/z16/decoder.py
"""
Z16 行デコーダ。

ソーステキストを1行ずつトークンに分割します。オペランドの意味（レジスタか即値か）は解釈しません。
"""
import re
from typing import List

COMMENT_MARKER = "#"

# 空白とカンマの連続をひとつの区切りとして扱う
_SEPARATOR = re.compile(r"[\s,]+")

# @intent:responsibility コメントマーカー以降のテキストを取り除きます。
def strip_comment(line: str) -> str:
    index = line.find(COMMENT_MARKER)
    if index != -1:
        return line[:index]
    return line

# @intent:responsibility 1行を空でないトークンの列に分割します。
# @intent:post-condition 空行・コメントのみの行は空リストになります。
def tokenize(line: str) -> List[str]:
    text = strip_comment(line).strip()
    if not text:
        return []
    return [token for token in _SEPARATOR.split(text) if token]

# @intent:responsibility ソーステキストを行に分割します。
# @intent:note 改行はLF、CRLF、CRのみ。エディタのブロックと1対1に対応させるため、str.splitlines()は使わない
#              （フォームフィードやU+2028などで行が分かれてしまう）。
def split_lines(program_text: str) -> List[str]:
    return program_text.replace("\r\n", "\n").replace("\r", "\n").split("\n")

# @intent:responsibility ソーステキストから実行可能行（空行・コメント行を除外したもの）を抽出します。
# @intent:rationale PCはこのリストのインデックスであり、分岐オフセットもこの番号付けで計算されます。
def executable_lines(program_text: str) -> List[str]:
    """
    実行可能行のリストを返します。各行はコメント除去・前後の空白除去済みです。
    """
    return [strip_comment(line).strip() for line in split_lines(program_text) if tokenize(line)]

# @intent:responsibility 各実行可能行が元のソースの何行目（0始まり）にあるかを返します。
def source_line_numbers(program_text: str) -> List[int]:
    """
    エディタ上で現在行をハイライトするために、PCからソース行番号への対応表を作ります。
    """
    return [number for number, line in enumerate(split_lines(program_text)) if tokenize(line)]
