"""Stack machine that runs generated programs.

Each call to :func:`simulate` builds its own :class:`MachineState`, so one
program can be executed any number of times, from any number of threads.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from .arith import apply, wrap
from .codegen import Instruction, Opcode
from .errors import IndexOutOfRange, StackUnderflow

logger = logging.getLogger(__name__)

_OPERATORS = {
    Opcode.AD: '+',
    Opcode.SU: '-',
    Opcode.MU: '*',
    Opcode.DI: '/',
}


@dataclass
class MachineState:
    r0: int = 0
    r1: int = 0
    stack: List[int] = field(default_factory=list)


def step(state: MachineState, ins: Instruction, arguments: Sequence[int]) -> MachineState:
    """Execute one instruction against *state* and return it."""
    op = ins.opcode
    if op is Opcode.IM:
        state.r0 = wrap(ins.operand)
    elif op is Opcode.AR:
        slot = ins.operand
        if not 0 <= slot < len(arguments):
            raise IndexOutOfRange(
                f'Argument {slot} requested but only {len(arguments)} supplied')
        state.r0 = wrap(arguments[slot])
    elif op is Opcode.SW:
        state.r0, state.r1 = state.r1, state.r0
    elif op is Opcode.PU:
        state.stack.append(state.r0)
    elif op is Opcode.PO:
        if not state.stack:
            raise StackUnderflow('PO executed on an empty stack')
        state.r0 = state.stack.pop()
    elif op in _OPERATORS:
        state.r0 = apply(_OPERATORS[op], state.r0, state.r1)
    else:
        raise ValueError(f'Unknown opcode {op!r}')
    return state


def simulate(program: Sequence[Instruction], arguments: Sequence[int] = (), trace: bool = False) -> int:
    """Run *program* with *arguments* and return the final value of R0."""
    arguments = tuple(arguments)
    state = MachineState()
    for pc, ins in enumerate(program):
        state = step(state, ins, arguments)
        if trace:
            logger.debug('%3d  %-6s r0=%d r1=%d stack=%s', pc, ins, state.r0, state.r1, state.stack)
    return state.r0
