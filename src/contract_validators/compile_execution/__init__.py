"""Compile execution domain exports."""

from .compile_contracts import CompileOutcome, CompileRequest
from .compile_run_use_case import CompilationError, execute_compile_run

__all__ = [
    "CompileRequest",
    "CompileOutcome",
    "CompilationError",
    "execute_compile_run",
]
