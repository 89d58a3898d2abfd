#!/usr/bin/env python3

from typing import Sequence

from bcvminstr import Inst, operand

def format_inst(index: int, inst: Inst) -> str:
    arg = operand(inst)
    if arg is None:
        return f'{index:04x} {inst.op.name}'
    return f'{index:04x} {inst.op.name} {arg}'

def dis(prog: Sequence[Inst]) -> list[str]:
    return [format_inst(i, inst) for i, inst in enumerate(prog)]
