# z16_tracer/loader/loader.py
"""
ソースローダーモジュール。
Z16アセンブリのソースファイルを読み書きします。ソースは機械語に変換せず、テキストのまま扱います。
"""

class SourceLoader:
    """
    アセンブリソースファイルをUTF-8テキストとして読み書きするローダー。
    """
    def load_source(self, file_path: str) -> str:
        # newline=None で CRLF / CR を LF に正規化する
        with open(file_path, 'r', encoding='utf-8', newline=None) as f:
            text = f.read()
        if text.startswith('\ufeff'):
            text = text[1:]
        return text

    def save_source(self, file_path: str, text: str) -> None:
        with open(file_path, 'w', encoding='utf-8', newline='\n') as f:
            f.write(text)
