#!/usr/bin/env python3

import operator

from typing import Callable, Optional, Sequence, TextIO

from bcvmcell import Cell
from bcvmdis import format_inst
from bcvmerrors import ErrorKind, InterpreterError
from bcvminstr import Inst, Opcode, wrap_i32

def _div(a: int, b: int) -> int:
    if b == 0:
        raise InterpreterError(ErrorKind.DIVISION_BY_ZERO)
    q = abs(a) // abs(b)
    return wrap_i32(-q if (a < 0) != (b < 0) else q)

_arith_ops: dict[Opcode, Callable[[int, int], int]] = {
    Opcode.ADD: lambda a, b: wrap_i32(a + b),
    Opcode.SUB: lambda a, b: wrap_i32(a - b),
    Opcode.MUL: lambda a, b: wrap_i32(a * b),
    Opcode.DIV: _div,
}
_rel_ops: dict[Opcode, Callable[[int, int], bool]] = {
    Opcode.GT: operator.gt,
    Opcode.LT: operator.lt,
    Opcode.EQ: operator.eq,
    Opcode.GE: operator.ge,
    Opcode.LE: operator.le,
}

class Vm:
    """Stack machine executing a list of `Inst` down to a single int32.

    Operands and named variables share one stack of `Cell`s. Writing a
    variable updates every cell carrying its identifier; reading one takes
    the first match from the bottom of the stack. Every failure raises
    `InterpreterError` and aborts the run.
    """

    def __init__(self, max_stack: Optional[int] = None, trace: Optional[TextIO] = None):
        if max_stack is not None and max_stack < 1:
            raise ValueError(f'max_stack must be positive, got {max_stack}')
        self.max_stack = max_stack
        self.trace = trace
        self.ip = 0
        self.stack: list[Cell] = []

    def clear_stack(self):
        self.stack = []

    def push_to_stack(self, identifier: Optional[str], value: int):
        if identifier is not None:
            found = False
            for cell in self.stack:
                if cell.identifier == identifier:
                    cell.value = value
                    found = True
            if found:
                return
        if self.max_stack is not None and len(self.stack) >= self.max_stack:
            raise InterpreterError(ErrorKind.STACK_OVERFLOW)
        self.stack.append(Cell(identifier, value))

    def get_from_stack(self, nb_items: int) -> list[Cell]:
        """Pop `nb_items` cells, top of the stack first.

        Cells popped before an underflow are not put back.
        """
        values: list[Cell] = []
        for _ in range(nb_items):
            try:
                values.append(self.stack.pop())
            except IndexError:
                raise InterpreterError(ErrorKind.STACK_UNDERFLOW) from None
        return values

    def advance_ip(self, length: int):
        self.ip += 1
        if self.ip >= length:
            raise InterpreterError(ErrorKind.INVALID_POINTER_ADDRESS)

    def set_ip(self, target: int, length: int):
        self.ip = target
        if self.ip >= length:
            raise InterpreterError(ErrorKind.INVALID_POINTER_ADDRESS)

    def fetch(self, prog: Sequence[Inst]) -> Inst:
        if not 0 <= self.ip < len(prog):
            raise InterpreterError(ErrorKind.INVALID_POINTER_ADDRESS)
        return prog[self.ip]

    def run(self, prog: Sequence[Inst]) -> int:
        self.ip = 0
        self.clear_stack()
        length = len(prog)
        running = True
        jumped = False
        inst: Inst
        def const():
            self.push_to_stack(None, inst.arg)
        def store():
            cell, = self.get_from_stack(1)
            self.push_to_stack(inst.arg, cell.value)
        def load():
            for cell in self.stack:
                if cell.identifier == inst.arg:
                    self.push_to_stack(None, cell.value)
                    return
            raise InterpreterError(ErrorKind.UNKNOWN_VARIABLE, inst.arg)
        def arith(f: Callable[[int, int], int]):
            def binop():
                a, b = self.get_from_stack(2)
                self.push_to_stack(None, f(a.value, b.value))
            return binop
        def rel(f: Callable[[int, int], bool]):
            def cmp():
                a, b = self.get_from_stack(2)
                self.push_to_stack(None, int(f(a.value, b.value)))
            return cmp
        def jmp():
            nonlocal jumped
            self.set_ip(inst.arg, length)
            jumped = True
        def jmp_if():
            nonlocal jumped
            cond, = self.get_from_stack(1)
            if cond.value == 1:
                self.set_ip(inst.arg, length)
                jumped = True
        def ret():
            nonlocal running
            running = False
        code: list = [None] * len(Opcode)
        code[Opcode.CONST] = const
        code[Opcode.STORE] = store
        code[Opcode.LOAD] = load
        for opcode, f in _arith_ops.items():
            code[opcode] = arith(f)
        for opcode, f in _rel_ops.items():
            code[opcode] = rel(f)
        code[Opcode.JMP] = jmp
        code[Opcode.JMP_IF] = jmp_if
        code[Opcode.RET] = ret
        missing = [opcode.name for opcode in Opcode if code[opcode] is None]
        if missing:
            raise NotImplementedError(f'no handler for {", ".join(missing)}')
        while running:
            inst = self.fetch(prog)
            if self.trace is not None:
                print(format_inst(self.ip, inst), file=self.trace)
            jumped = False
            code[inst.op]()
            if running and not jumped:
                self.advance_ip(length)
        result, = self.get_from_stack(1)
        return result.value
