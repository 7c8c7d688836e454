"""
Conversion takes the type trees produced by the `parse` subpackage and writes them out in the syntax of the target
type-annotation language (Sorbet, by default).

Several annotation strings usually describe a single value (`@param value [String, nil]`), so the unit of conversion
is a *list* of strings which is folded into one type expression: a single type, a union, or a nilable type.
"""
from .converter import TypeConverter, convert_type_list, convert_type_node  # noreorder

__all__ = ["TypeConverter", "convert_type_list", "convert_type_node"]
