import enum
import re
from dataclasses import dataclass
from typing import Iterator
from typing import Optional
from typing import Pattern
from typing import Sequence
from typing import Tuple

__all__ = ["AnnotationSyntaxError", "Token", "TokenKind", "TOKEN_PATTERNS", "tokenize"]


class AnnotationSyntaxError(SyntaxError):
    """
    Raised when an annotation string cannot be tokenized or parsed.

    The standard `SyntaxError` fields are filled in (with a 1-based `offset`), so the error prints with a caret under
    the offending character. `token` and `position` are the raw lexeme and its 0-based offset in the annotation.
    """

    FILENAME = "<annotation>"

    token: str
    position: int

    def __init__(self, message: str, text: str, position: int, token: str = "") -> None:
        super().__init__(message, (self.FILENAME, 1, position + 1, text))
        self.token = token
        self.position = position


class TokenKind(enum.Enum):
    COLLECTION_START = "collection_start"
    COLLECTION_END = "collection_end"
    FIXED_COLLECTION_START = "fixed_collection_start"
    FIXED_COLLECTION_END = "fixed_collection_end"
    TYPE_NAME = "type_name"
    TYPE_NEXT = "type_next"
    WHITESPACE = "whitespace"
    HASH_COLLECTION_START = "hash_collection_start"
    HASH_COLLECTION_NEXT = "hash_collection_next"
    HASH_COLLECTION_END = "hash_collection_end"
    PARSE_END = "parse_end"


TOKEN_PATTERNS: Sequence[Tuple[TokenKind, Optional[Pattern[str]]]] = (
    (TokenKind.COLLECTION_START, re.compile(r"<")),
    (TokenKind.COLLECTION_END, re.compile(r">")),
    (TokenKind.FIXED_COLLECTION_START, re.compile(r"\(")),
    (TokenKind.FIXED_COLLECTION_END, re.compile(r"\)")),
    (TokenKind.TYPE_NAME, re.compile(r"#\w+|(?:(?:::)?\w+)+")),
    (TokenKind.TYPE_NEXT, re.compile(r"[,;]")),
    (TokenKind.WHITESPACE, re.compile(r"\s+")),
    (TokenKind.HASH_COLLECTION_START, re.compile(r"\{")),
    (TokenKind.HASH_COLLECTION_NEXT, re.compile(r"=>")),
    (TokenKind.HASH_COLLECTION_END, re.compile(r"\}")),
    (TokenKind.PARSE_END, None),
)
"""
Patterns are tried in this order at every scan position and the first one to match wins. The order matters: it is
what keeps bracket tokens from being read as part of a type name. `None` stands for "matches at end of input".
"""


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    lexeme: str
    position: int
    # 0-based offset of the lexeme in the scanned string


def tokenize(text: str) -> Iterator[Token]:
    """
    Lazily scan `text` into tokens. Whitespace is consumed but never yielded. The last token is always exactly one
    PARSE_END token.
    """
    pos = 0
    while True:
        for kind, pattern in TOKEN_PATTERNS:
            if pattern is None:
                if pos >= len(text):
                    yield Token(kind, "", pos)
                    return
                continue

            match = pattern.match(text, pos)
            if match:
                if kind is not TokenKind.WHITESPACE:
                    yield Token(kind, match.group(), pos)
                pos = match.end()
                break
        else:
            raise AnnotationSyntaxError(f"invalid character at '{text[pos]}'", text, pos, text[pos])
