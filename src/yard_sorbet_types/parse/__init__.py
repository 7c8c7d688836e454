"""
In this subpackage, free-text YARD type annotations (the `[Array<String>, nil]` part of a `@param` tag) are scanned
into tokens and parsed into a small tree of type nodes. Nothing here knows about the target annotation language; that
is the job of the `conversion` subpackage.
"""

from .tokens import AnnotationSyntaxError, Token, TokenKind, tokenize
from .nodes import CollectionType, FixedCollectionType, HashCollectionType, SimpleType, TypeNode
from .parser import TypesParser, parse

__all__ = [
    "AnnotationSyntaxError",
    "CollectionType",
    "FixedCollectionType",
    "HashCollectionType",
    "SimpleType",
    "Token",
    "TokenKind",
    "TypeNode",
    "TypesParser",
    "parse",
    "tokenize",
]
