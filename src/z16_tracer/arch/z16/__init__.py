# src/z16_tracer/arch/z16/__init__.py
"""
Z16 Architecture Package
"""
from .cpu import Z16Cpu
from .opcodes import Opcode
