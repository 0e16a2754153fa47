"""
Bamya host-level errors

Language-level failures never raise: the lexer emits ILLEGAL tokens, the
parser collects messages, and the evaluator returns Error objects. The
exception below is reserved for the Python-facing facade.
"""

from typing import List, Optional


E_PARSE_ERROR = "E_PARSE_ERROR"
E_RUNTIME_ERROR = "E_RUNTIME_ERROR"
E_NAME_ERROR = "E_NAME_ERROR"


class BamyaError(Exception):
    """Base exception for Bamya host errors"""
    def __init__(self, code: str, message: str, details: Optional[List[str]] = None):
        self.code = code
        self.message = message
        self.details = list(details or [])
        super().__init__(f"[{code}] {message}")


__all__ = ['BamyaError', 'E_PARSE_ERROR', 'E_RUNTIME_ERROR', 'E_NAME_ERROR']
