import os
import yaml
from typing import Dict, Any, Optional

from z16_tracer.common.formatting import parse_display_format
from z16_tracer.core.state import REGISTER_COUNT
from .models import SystemConfig, EngineConfig, DisplayConfig, DebuggerConfig, InitialState

class ConfigLoader:
    def load_from_file(self, path: str) -> SystemConfig:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
        data = self._safe_load(text)
        return self._parse_config(data or {}, base_dir=os.path.dirname(os.path.abspath(path)))

    def load_from_string(self, text: str) -> SystemConfig:
        return self._parse_config(self._safe_load(text) or {})

    def _safe_load(self, text: str) -> Any:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML config: {e}") from e

    def _parse_config(self, data: Dict[str, Any], base_dir: Optional[str] = None) -> SystemConfig:
        if not isinstance(data, dict):
            raise ValueError(f"Config root must be a mapping, got {type(data).__name__}")

        # Engine
        engine_data = self._get_mapping(data, "engine", "engine")
        prefixes = engine_data.get("register_prefixes", ["x", "0x"])
        if isinstance(prefixes, str):
            prefixes = [prefixes]
        if not isinstance(prefixes, list) or not all(isinstance(p, str) for p in prefixes):
            raise ValueError(f"engine.register_prefixes must be a string or a list of strings, got {prefixes!r}")
        if not prefixes:
            raise ValueError("engine.register_prefixes must not be empty")
        engine = EngineConfig(register_prefixes=list(prefixes))

        # Display
        display_data = self._get_mapping(data, "display", "display")
        display = DisplayConfig(format=parse_display_format(str(display_data.get("format", "decimal"))))

        # Debugger
        debugger_data = self._get_mapping(data, "debugger", "debugger")
        debugger = DebuggerConfig(
            max_run_steps=self._parse_int(debugger_data.get("max_run_steps", DebuggerConfig.max_run_steps)),
            history_limit=self._parse_int(debugger_data.get("history_limit", DebuggerConfig.history_limit))
        )
        if debugger.max_run_steps <= 0:
            raise ValueError(f"debugger.max_run_steps must be positive: {debugger.max_run_steps}")
        if debugger.history_limit <= 0:
            raise ValueError(f"debugger.history_limit must be positive: {debugger.history_limit}")

        # Initial State
        initial_state_data = self._get_mapping(data, "initial_state", "initial_state")
        registers = {}
        for name, value in self._get_mapping(initial_state_data, "registers", "initial_state.registers").items():
            registers[self._parse_register_name(str(name))] = self._parse_int(value)
        initial_state = InitialState(
            pc=self._parse_int(initial_state_data.get("pc", 0)),
            registers=registers
        )
        if initial_state.pc < 0:
            raise ValueError(f"initial_state.pc must not be negative: {initial_state.pc}")

        program = data.get("program")
        if program is not None and not isinstance(program, str):
            raise ValueError(f"program must be a file path string, got {program!r}")
        if program is not None and base_dir is not None and not os.path.isabs(program):
            program = os.path.join(base_dir, program)

        return SystemConfig(
            engine=engine,
            display=display,
            debugger=debugger,
            initial_state=initial_state,
            program=program
        )

    # @intent:responsibility 指定キーの値をマッピングとして取り出します。未指定・nullは空として扱います。
    def _get_mapping(self, data: Dict[str, Any], key: str, path: str) -> Dict[str, Any]:
        value = data.get(key)
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise ValueError(f"{path} must be a mapping, got {type(value).__name__}")
        return value

    def _parse_register_name(self, name: str) -> str:
        key = name.strip().lower()
        if key.startswith("x") and key[1:].isdigit() and int(key[1:]) < REGISTER_COUNT:
            return key
        raise ValueError(f"Invalid register name in initial_state: {name}")

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            text = value.strip().lower()
            sign = -1 if text.startswith("-") else 1
            text = text.lstrip("+-")
            if text.startswith("0x"):
                return sign * int(text, 16)
            if text.startswith("0b"):
                return sign * int(text, 2)
            return sign * int(text)
        raise ValueError(f"Invalid integer format: {value}")
