"""Exceptions raised by the compiler pipeline and the stack machine."""


class ThreePassError(Exception):
    """Base class for every error raised by this package."""


# --------- compile time ---------
class CompileError(ThreePassError):
    """Raised when source text cannot be turned into a program."""


class LexError(CompileError):
    def __init__(self, message, index=None):
        super().__init__(message)
        self.index = index


class ParseError(CompileError):
    """Raised for malformed headers, expressions and unresolved names."""


class MalformedBracket(ParseError):
    pass


class MalformedExpression(ParseError):
    pass


class UnknownIdentifier(ParseError):
    def __init__(self, name, arguments=()):
        declared = ', '.join(arguments) or 'none'
        super().__init__(f"Unknown identifier '{name}' (declared: {declared})")
        self.name = name


class DivisionByZero(ThreePassError, ZeroDivisionError):
    """Integer division by zero, either while folding or while running."""


# --------- run time ---------
class SimulationError(ThreePassError):
    """Raised when the stack machine traps."""


class IndexOutOfRange(SimulationError, IndexError):
    pass


class StackUnderflow(SimulationError):
    pass
