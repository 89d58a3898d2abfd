#!/usr/bin/env python3

from enum import Enum
from typing import Optional

class ErrorKind(Enum):
    STACK_UNDERFLOW = 'stack underflow'
    STACK_OVERFLOW = 'stack overflow'
    UNKNOWN_VARIABLE = 'unknown variable'
    INVALID_POINTER_ADDRESS = 'invalid pointer address'
    DIVISION_BY_ZERO = 'division by zero'

class InterpreterError(RuntimeError):
    def __init__(self, kind: ErrorKind, identifier: Optional[str] = None):
        self.kind = kind
        self.identifier = identifier
        if identifier is None:
            super().__init__(f'error: {kind.value}')
        else:
            super().__init__(f'error: {kind.value} `{identifier}`')

    def __eq__(self, other) -> bool:
        if not isinstance(other, InterpreterError):
            return NotImplemented
        return (self.kind, self.identifier) == (other.kind, other.identifier)

    def __hash__(self) -> int:
        return hash((self.kind, self.identifier))

    def __repr__(self) -> str:
        if self.identifier is None:
            return f'InterpreterError({self.kind.name})'
        return f'InterpreterError({self.kind.name}, {self.identifier!r})'
