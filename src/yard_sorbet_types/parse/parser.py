from typing import Iterator
from typing import List
from typing import NoReturn
from typing import Optional

from yard_sorbet_types.parse.nodes import CollectionType
from yard_sorbet_types.parse.nodes import FixedCollectionType
from yard_sorbet_types.parse.nodes import HashCollectionType
from yard_sorbet_types.parse.nodes import SimpleType
from yard_sorbet_types.parse.nodes import TypeNode
from yard_sorbet_types.parse.tokens import AnnotationSyntaxError
from yard_sorbet_types.parse.tokens import Token
from yard_sorbet_types.parse.tokens import TokenKind
from yard_sorbet_types.parse.tokens import tokenize

__all__ = ["TypesParser", "parse"]

_DESCRIBE_TERMINATOR = {
    TokenKind.COLLECTION_END: "'>'",
    TokenKind.FIXED_COLLECTION_END: "')'",
    TokenKind.HASH_COLLECTION_NEXT: "'=>'",
    TokenKind.HASH_COLLECTION_END: "'}'",
    TokenKind.PARSE_END: "end of input",
}


def parse(text: str) -> List[TypeNode]:
    """Parse one annotation string into its list of top-level type nodes (more than one for `"Foo, Bar"`)"""
    return TypesParser(text).parse()


class TypesParser:
    """
    Recursive parser for YARD type annotations such as `Array<String, nil>`, `Hash{Symbol => Object}` or
    `(Integer, Integer)`.

    Every call to `parse()` is one recursion frame. A frame collects nodes until it meets its own terminator token,
    which is consumed. Nested frames share the token stream, so a nested call picks up exactly where its caller
    stopped and returns control just past its closing bracket.
    """

    text: str
    """The annotation being parsed"""

    _tokens: Iterator[Token]

    def __init__(self, text: str) -> None:
        self.text = text
        self._tokens = tokenize(text)

    def parse(self, until: TokenKind = TokenKind.PARSE_END) -> List[TypeNode]:
        """
        Consume tokens up to and including the `until` token and return the nodes found. The default consumes the
        whole annotation.
        """
        types: List[TypeNode] = []
        node: Optional[TypeNode] = None
        name: Optional[str] = None

        for token in self._tokens:
            kind = token.kind
            if kind is TokenKind.TYPE_NAME:
                if name is not None:
                    self.raise_error(f"expecting END, got name '{token.lexeme}'", token)
                name = token.lexeme
            elif kind is TokenKind.TYPE_NEXT:
                types.append(self._finish_node(name, node, token))
                name = None
                node = None
            elif kind is TokenKind.COLLECTION_START:
                name = name or "Array"
                node = CollectionType(name, tuple(self.parse(until=TokenKind.COLLECTION_END)))
            elif kind is TokenKind.FIXED_COLLECTION_START:
                name = name or "Array"
                node = FixedCollectionType(name, tuple(self.parse(until=TokenKind.FIXED_COLLECTION_END)))
            elif kind is TokenKind.HASH_COLLECTION_START:
                name = name or "Hash"
                key_types = self.parse(until=TokenKind.HASH_COLLECTION_NEXT)
                value_types = self.parse(until=TokenKind.HASH_COLLECTION_END)
                node = HashCollectionType(name, tuple(key_types), tuple(value_types))
            else:
                if kind is not until:
                    self.raise_error(
                        f"expecting {_DESCRIBE_TERMINATOR[until]}, got {_DESCRIBE_TERMINATOR[kind]}", token
                    )
                types.append(self._finish_node(name, node, token))
                return types

        # tokenize() always finishes with PARSE_END, which either returns above or raises
        raise AssertionError("token stream ended without a PARSE_END token")

    def _finish_node(self, name: Optional[str], node: Optional[TypeNode], token: Token) -> TypeNode:
        if name is None:
            self.raise_error(f"expecting name, got '{token.lexeme}' at {token.position}", token)
        return node if node is not None else SimpleType(name)

    def raise_error(self, message: str, token: Token) -> NoReturn:
        raise AnnotationSyntaxError(message, self.text, token.position, token.lexeme)
