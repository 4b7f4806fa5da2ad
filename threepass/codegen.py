"""Code generation for the two-register, one-stack machine.

Registers are R0 (primary) and R1 (secondary).  Every node leaves its value
on top of the stack, so a binary operation pops the right operand, swaps it
into R1, pops the left operand into R0 and applies the operator.
"""

import logging
from enum import Enum
from typing import List, NamedTuple, Optional, Tuple

from .nodes import Argument, Immediate, Node, postorder

logger = logging.getLogger(__name__)


class Opcode(Enum):
    IM = 'IM'  # R0 <- n
    AR = 'AR'  # R0 <- argument n
    SW = 'SW'  # swap R0 and R1
    PU = 'PU'  # push R0
    PO = 'PO'  # pop into R0
    AD = 'AD'  # R0 <- R0 + R1
    SU = 'SU'
    MU = 'MU'
    DI = 'DI'


OPERAND_OPCODES = {Opcode.IM, Opcode.AR}

ARITHMETIC = {
    '+': Opcode.AD,
    '-': Opcode.SU,
    '*': Opcode.MU,
    '/': Opcode.DI,
}


class Instruction(NamedTuple):
    opcode: Opcode
    operand: Optional[int] = None

    def __str__(self):
        if self.opcode in OPERAND_OPCODES:
            return f'{self.opcode.value} {self.operand}'
        return self.opcode.value


Program = Tuple[Instruction, ...]


class Emitter:
    def __init__(self):
        self.code: List[Instruction] = []

    def emit(self, opcode, operand=None):
        if (operand is not None) != (opcode in OPERAND_OPCODES):
            raise ValueError(f'{opcode.value} takes {"an" if opcode in OPERAND_OPCODES else "no"} operand')
        self.code.append(Instruction(opcode, operand))

    def get_output(self) -> Program:
        return tuple(self.code)


class CodeGen:
    def __init__(self):
        self.em = Emitter()

    def gen_node(self, node: Node):
        """Emit code that pushes the value of *node*.

        Children come first (left, then right), so operands are already on
        the stack when their operator is emitted.
        """
        for n in postorder(node):
            if isinstance(n, Immediate):
                self.em.emit(Opcode.IM, n.value)
            elif isinstance(n, Argument):
                self.em.emit(Opcode.AR, n.slot)
            else:
                self.em.emit(Opcode.PO)
                self.em.emit(Opcode.SW)
                self.em.emit(Opcode.PO)
                self.em.emit(ARITHMETIC[n.op])
            self.em.emit(Opcode.PU)

    def generate(self, node: Node) -> Program:
        self.gen_node(node)
        program = self.em.get_output()
        logger.debug('generated %d instruction(s)', len(program))
        return program


def generate(node: Node) -> Program:
    return CodeGen().generate(node)


def format_program(program) -> str:
    return '\n'.join(str(ins) for ins in program)
