#!/usr/bin/env python3

from dataclasses import dataclass
from enum import IntEnum, auto, unique
from typing import Optional, Union

INT32_MIN = -2**31
INT32_MAX = 2**31 - 1
UINT32_MAX = 2**32 - 1

@unique
class Opcode(IntEnum):
    CONST = 0           # push arg
    STORE = auto()      # vars[arg] <- pop()
    LOAD = auto()       # push vars[arg]
    ADD = auto()        # a, b <- pop(), pop(); push a + b
    SUB = auto()        # a, b <- pop(), pop(); push a - b
    MUL = auto()        # a, b <- pop(), pop(); push a * b
    DIV = auto()        # a, b <- pop(), pop(); push a / b
    GT = auto()         # a, b <- pop(), pop(); push a > b
    LT = auto()         # a, b <- pop(), pop(); push a < b
    EQ = auto()         # a, b <- pop(), pop(); push a == b
    GE = auto()         # a, b <- pop(), pop(); push a >= b
    LE = auto()         # a, b <- pop(), pop(); push a <= b
    JMP = auto()        # goto arg
    JMP_IF = auto()     # if pop() == 1 goto arg
    RET = auto()        # return pop()

_int_operand = { Opcode.CONST, Opcode.JMP, Opcode.JMP_IF }
_var_operand = { Opcode.STORE, Opcode.LOAD }

def wrap_i32(value: int) -> int:
    value &= 0xffffffff
    return value - 2**32 if value > INT32_MAX else value

@dataclass(frozen=True)
class Inst:
    op: Opcode
    arg: Union[int, str, None] = None

    def __post_init__(self):
        op = Opcode(self.op)
        object.__setattr__(self, 'op', op)
        arg = self.arg
        if op in _var_operand:
            if not isinstance(arg, str) or len(arg) != 1:
                raise TypeError(f'{op.name} expects a one-character identifier, got {arg!r}')
        elif op in _int_operand:
            if not isinstance(arg, int) or isinstance(arg, bool):
                raise TypeError(f'{op.name} expects an integer operand, got {arg!r}')
            if op == Opcode.CONST and not INT32_MIN <= arg <= INT32_MAX:
                raise ValueError(f'constant {arg} does not fit in 32 bits')
            if op != Opcode.CONST and not 0 <= arg <= UINT32_MAX:
                raise ValueError(f'jump target {arg} is not an unsigned 32-bit index')
        elif arg is not None:
            raise TypeError(f'{op.name} takes no operand, got {arg!r}')

def const(value: int) -> Inst:
    return Inst(Opcode.CONST, value)

def store(identifier: str) -> Inst:
    return Inst(Opcode.STORE, identifier)

def load(identifier: str) -> Inst:
    return Inst(Opcode.LOAD, identifier)

def jmp(target: int) -> Inst:
    return Inst(Opcode.JMP, target)

def jmp_if(target: int) -> Inst:
    return Inst(Opcode.JMP_IF, target)

ADD = Inst(Opcode.ADD)
SUB = Inst(Opcode.SUB)
MUL = Inst(Opcode.MUL)
DIV = Inst(Opcode.DIV)
GT = Inst(Opcode.GT)
LT = Inst(Opcode.LT)
EQ = Inst(Opcode.EQ)
GE = Inst(Opcode.GE)
LE = Inst(Opcode.LE)
RET = Inst(Opcode.RET)

def operand(inst: Inst) -> Optional[str]:
    """Render the operand of `inst` the way listings show it."""
    if inst.op in _var_operand:
        return repr(inst.arg)
    elif inst.op == Opcode.CONST:
        return str(inst.arg)
    elif inst.op in _int_operand:
        return f'{inst.arg:04x}'
    return None
