from importlib import metadata

try:
    __version__ = metadata.version("yard-sorbet-types")
except metadata.PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "__version__",
    "AnnotationSyntaxError",
    "DocumentedParam",
    "MethodSignature",
    "ParameterKind",
    "SignatureBuilder",
    "SlotInfo",
    "TypeConverter",
    "TypesParser",
    "convert_type_list",
    "convert_type_node",
]

from .parse import AnnotationSyntaxError, TypesParser
from .conversion import TypeConverter, convert_type_list, convert_type_node
from .signatures import DocumentedParam, MethodSignature, ParameterKind, SignatureBuilder, SlotInfo
