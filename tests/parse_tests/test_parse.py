import re

import pytest

from yard_sorbet_types.parse import AnnotationSyntaxError
from yard_sorbet_types.parse import CollectionType
from yard_sorbet_types.parse import FixedCollectionType
from yard_sorbet_types.parse import HashCollectionType
from yard_sorbet_types.parse import SimpleType
from yard_sorbet_types.parse import TypesParser
from yard_sorbet_types.parse import parse


@pytest.mark.parametrize(
    ("annotation", "expected"),
    [
        ("Foo", [SimpleType("Foo")]),
        ("Foo, Bar", [SimpleType("Foo"), SimpleType("Bar")]),
        ("Foo; Bar", [SimpleType("Foo"), SimpleType("Bar")]),
        ("Foo, nil", [SimpleType("Foo"), SimpleType("nil")]),
        ("::Foo::Bar", [SimpleType("::Foo::Bar")]),
        ("#to_s", [SimpleType("#to_s")]),
        ("Array<Foo, Bar>", [CollectionType("Array", (SimpleType("Foo"), SimpleType("Bar")))]),
        ("Set<Integer>", [CollectionType("Set", (SimpleType("Integer"),))]),
        ("(Foo, Bar)", [FixedCollectionType("Array", (SimpleType("Foo"), SimpleType("Bar")))]),
        ("Pair(Foo)", [FixedCollectionType("Pair", (SimpleType("Foo"),))]),
        ("Hash{Symbol => String}", [HashCollectionType("Hash", (SimpleType("Symbol"),), (SimpleType("String"),))]),
        (
            "Hash{Symbol, String => Integer, nil}",
            [
                HashCollectionType(
                    "Hash",
                    (SimpleType("Symbol"), SimpleType("String")),
                    (SimpleType("Integer"), SimpleType("nil")),
                )
            ],
        ),
        # Missing collection names get a default
        ("<Foo>", [CollectionType("Array", (SimpleType("Foo"),))]),
        ("{Symbol => Foo}", [HashCollectionType("Hash", (SimpleType("Symbol"),), (SimpleType("Foo"),))]),
        # Unions and generics mix freely
        ("Array<Foo>, nil", [CollectionType("Array", (SimpleType("Foo"),)), SimpleType("nil")]),
        (
            "Array<Hash{Symbol => Array<String>}>",
            [
                CollectionType(
                    "Array",
                    (
                        HashCollectionType(
                            "Hash",
                            (SimpleType("Symbol"),),
                            (CollectionType("Array", (SimpleType("String"),)),),
                        ),
                    ),
                )
            ],
        ),
        (
            "(Array<Foo>, (Bar, Baz))",
            [
                FixedCollectionType(
                    "Array",
                    (
                        CollectionType("Array", (SimpleType("Foo"),)),
                        FixedCollectionType("Array", (SimpleType("Bar"), SimpleType("Baz"))),
                    ),
                )
            ],
        ),
    ],
)
def test_parse(annotation: str, expected) -> None:
    assert parse(annotation) == expected


def test_parser_class_matches_function() -> None:
    assert TypesParser("Array<Foo>, Bar").parse() == parse("Array<Foo>, Bar")


def test_nodes_of_different_variants_are_not_equal() -> None:
    assert parse("Array<Foo>") != parse("(Foo)")
    assert SimpleType("Array") != CollectionType("Array")


def test_nodes_are_immutable() -> None:
    (node,) = parse("Array<Foo>")
    assert isinstance(node.types, tuple)
    with pytest.raises(AttributeError):
        node.name = "Set"  # type: ignore[misc]


def test_node_requires_name() -> None:
    with pytest.raises(ValueError, match="non-empty name"):
        SimpleType("")
    with pytest.raises(ValueError, match="non-empty name"):
        HashCollectionType("")


@pytest.mark.parametrize(
    ("annotation", "expected_message", "position"),
    [
        # Two names with no separator
        ("Foo Bar", "expecting END, got name 'Bar'", 4),
        ("Array<Foo> Bar", "expecting END, got name 'Bar'", 11),
        # Nothing to finish
        ("", "expecting name, got '' at 0", 0),
        (", Foo", "expecting name, got ',' at 0", 0),
        ("Foo,", "expecting name, got '' at 4", 4),
        ("Array<>", "expecting name, got '>' at 6", 6),
        ("Hash{ => String}", "expecting name, got '=>' at 6", 6),
        # Unbalanced or mismatched brackets
        ("Foo<Bar", "expecting '>', got end of input", 7),
        ("Foo<Bar)", "expecting '>', got ')'", 7),
        ("(Foo", "expecting ')', got end of input", 4),
        ("Foo>", "expecting end of input, got '>'", 3),
        ("Hash{Symbol}", "expecting '=>', got '}'", 11),
        ("Hash{Symbol => String", "expecting '}', got end of input", 21),
        ("Array<Foo => Bar>", "expecting '>', got '=>'", 10),
        # Bad characters
        ("Foo | Bar", "invalid character at '|'", 4),
    ],
)
def test_parse_errors(annotation: str, expected_message: str, position: int) -> None:
    with pytest.raises(AnnotationSyntaxError, match=re.escape(expected_message)) as exc_info:
        parse(annotation)

    assert exc_info.value.position == position
    assert exc_info.value.text == annotation


def test_parse_error_is_a_syntax_error() -> None:
    with pytest.raises(SyntaxError):
        parse("Foo Bar")
