import logging
from typing import NamedTuple, Optional, Tuple, Union

from sly import Lexer

from .errors import LexError

logger = logging.getLogger(__name__)

END = '$'


class Token(NamedTuple):
    type: str
    value: Union[str, int, None]
    offset: int


# --------- Lexer ---------
class ExprLexer(Lexer):
    tokens = {'IDENT', 'NUMBER'}
    literals = {'+', '-', '*', '/', '(', ')', '[', ']'}
    ignore = ' \t\r'

    IDENT = r'[a-zA-Z]+'

    @_(r'[0-9]+')
    def NUMBER(self, t):
        t.value = int(t.value)
        return t

    @_(r'\n+')
    def ignore_newline(self, t):
        self.lineno += t.value.count('\n')

    def __init__(self, strict=False):
        self.strict = strict

    def error(self, t):
        char = t.value[0]
        if self.strict:
            raise LexError(
                f"Illegal character {char!r} at line {self.lineno}, index {self.index}",
                index=self.index)
        logger.debug("Skipping unrecognized character %r at index %d", char, self.index)
        self.index += 1


def tokenize(source: str, strict: bool = False) -> Tuple[Token, ...]:
    """Split *source* into tokens, terminated by a single END token."""
    lexer = ExprLexer(strict=strict)
    tokens = [Token(t.type, t.value, t.index) for t in lexer.tokenize(source)]
    tokens.append(Token(END, None, len(source)))
    return tuple(tokens)


def describe(token: Optional[Token]) -> str:
    if token is None or token.type == END:
        return 'end of input'
    return f"'{token.value}' at offset {token.offset}"
