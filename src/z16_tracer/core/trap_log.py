# src/z16_tracer/core/trap_log.py
"""
トラップ出力ログ

ECALL命令が出力するメッセージを保持する、追記専用のログです。
ログの所有者はCPUではなくホスト（Debugger/UI）であり、クリアはホストのリセット時にのみ行われます。
"""
import threading
from typing import Callable, List

TrapListener = Callable[[str], None]

# @intent:responsibility トラップメッセージを追記専用で保持し、購読者に通知します。
# @intent:rationale UIはDebuggerの連続実行をQThread上で行うため、追記と読み出しをロックで保護します。
class TrapLog:
    def __init__(self):
        self._messages: List[str] = []
        self._listeners: List[TrapListener] = []
        self._lock = threading.Lock()

    def append(self, message: str) -> None:
        with self._lock:
            self._messages.append(message)
            listeners = list(self._listeners)
        for listener in listeners:
            listener(message)

    def messages(self) -> List[str]:
        with self._lock:
            return list(self._messages)

    def truncate(self, length: int) -> None:
        """
        ログを指定件数まで切り詰めます。ステップバックで直前の出力を取り消すために使用します。
        """
        with self._lock:
            del self._messages[length:]

    def clear(self) -> None:
        with self._lock:
            self._messages.clear()

    def subscribe(self, listener: TrapListener) -> None:
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def __len__(self) -> int:
        with self._lock:
            return len(self._messages)
