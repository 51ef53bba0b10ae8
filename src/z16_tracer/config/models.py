from dataclasses import dataclass, field
from typing import Dict, List, Optional

from z16_tracer.common.formatting import DisplayFormat
from z16_tracer.debugger.debugger import DEFAULT_MAX_RUN_STEPS, DEFAULT_HISTORY_LIMIT

@dataclass
class EngineConfig:
    register_prefixes: List[str] = field(default_factory=lambda: ["x", "0x"])

@dataclass
class DisplayConfig:
    format: DisplayFormat = DisplayFormat.DECIMAL

@dataclass
class DebuggerConfig:
    max_run_steps: int = DEFAULT_MAX_RUN_STEPS
    history_limit: int = DEFAULT_HISTORY_LIMIT  # ステップバックで戻れる最大命令数

@dataclass
class InitialState:
    pc: int = 0
    registers: Dict[str, int] = field(default_factory=dict)  # {"x1": 5}

@dataclass
class SystemConfig:
    engine: EngineConfig = field(default_factory=EngineConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    debugger: DebuggerConfig = field(default_factory=DebuggerConfig)
    initial_state: InitialState = field(default_factory=InitialState)
    program: Optional[str] = None  # ソースファイルのパス（設定ファイルからの相対パスは解決済み）
