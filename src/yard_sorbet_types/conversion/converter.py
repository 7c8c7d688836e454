"""
In this module, parsed type trees are projected into Sorbet's annotation syntax. e.g:

    ["Array<String>", "nil"]  ->  "T.nilable(T::Array[String])"
    ["String", "Integer"]     ->  "T.any(String, Integer)"
"""
import logging
from typing import ClassVar
from typing import Iterable
from typing import List
from typing import Mapping

from more_itertools import flatten
from typing_extensions import assert_never

from yard_sorbet_types.parse import parse
from yard_sorbet_types.parse.nodes import CollectionType
from yard_sorbet_types.parse.nodes import FixedCollectionType
from yard_sorbet_types.parse.nodes import HashCollectionType
from yard_sorbet_types.parse.nodes import SimpleType
from yard_sorbet_types.parse.nodes import TypeNode

__all__ = ["TypeConverter", "convert_type_list", "convert_type_node"]

logger = logging.getLogger(__name__)


class TypeConverter:
    """
    Converts YARD type annotations to Sorbet type expressions.

    The target syntax is controlled entirely by class attributes, so a dialect is selected by subclassing:

    >>> class RbsishConverter(TypeConverter):
    >>>     NILABLE_TEMPLATE = "{}?"
    >>>     UNION_TEMPLATE = "({})"
    """

    NAME_TRANSLATIONS: ClassVar[Mapping[str, str]] = {
        "Array": "T::Array",
        "Hash": "T::Hash",
        "Boolean": "T::Boolean",
        "nil": "NilClass",
    }
    """Case-sensitive. Names missing from this table are assumed to be valid in the target syntax already"""

    NIL_TYPE: ClassVar[str] = "NilClass"
    """The converted name that marks a type as nilable"""

    NILABLE_TEMPLATE: ClassVar[str] = "T.nilable({})"
    UNION_TEMPLATE: ClassVar[str] = "T.any({})"
    COLLECTION_TEMPLATE: ClassVar[str] = "{name}[{types}]"

    def __init_subclass__(cls) -> None:
        super().__init_subclass__()
        if not cls.NIL_TYPE:
            raise TypeError(f"Class '{cls}' must define a non-empty NIL_TYPE")
        for attr in ("NILABLE_TEMPLATE", "UNION_TEMPLATE"):
            if "{}" not in getattr(cls, attr):
                raise TypeError(f"Class '{cls}' defines {attr} without a '{{}}' placeholder")

    def convert_types(self, type_strs: Iterable[str]) -> str:
        """
        Parse every annotation string and fold all the resulting types into one type expression. More than one type
        makes a union, or a nilable type when one of them is nil. An empty input gives an empty string.

        Raises AnnotationSyntaxError if any of the strings is malformed; there is no partial result.
        """
        type_strs = list(type_strs)
        converted = [self.convert_type_node(node) for node in flatten(parse(s) for s in type_strs)]

        if len(converted) > 1:
            if self.NIL_TYPE in converted:
                converted.remove(self.NIL_TYPE)
                result = self.NILABLE_TEMPLATE.format(", ".join(converted))
            else:
                result = self.UNION_TEMPLATE.format(", ".join(converted))
        else:
            result = ", ".join(converted)

        logger.debug("converted %r to %r", type_strs, result)
        return result

    def convert_type_node(self, node: TypeNode) -> str:
        if isinstance(node, (CollectionType, FixedCollectionType)):
            children = self._convert_children(node.types)
            name = self.convert_type_name(node.name)
            if not children:
                return name
            return self.COLLECTION_TEMPLATE.format(name=name, types=", ".join(children))
        elif isinstance(node, (SimpleType, HashCollectionType)):
            # Key and value types of a hash are not projected
            return self.convert_type_name(node.name)
        else:
            assert_never(node)

    def _convert_children(self, types: Iterable[TypeNode]) -> List[str]:
        # A nil element collapses to the non-nil element type: Array<String, nil> becomes T::Array[String].
        # When every child is dropped the caller renders the bare name (T::Array) instead of the bracketed form
        return [c for c in (self.convert_type_node(child) for child in types) if c != self.NIL_TYPE]

    def convert_type_name(self, name: str) -> str:
        return self.NAME_TRANSLATIONS.get(name, name)


_default_converter = TypeConverter()


def convert_type_list(type_strs: Iterable[str]) -> str:
    """Convert with the default (Sorbet) converter. See `TypeConverter.convert_types`"""
    return _default_converter.convert_types(type_strs)


def convert_type_node(node: TypeNode) -> str:
    return _default_converter.convert_type_node(node)
