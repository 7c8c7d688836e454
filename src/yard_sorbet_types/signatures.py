"""
Build typed method stubs (RBI `sig` + `def`) from documented parameters and the parameter list reported by runtime
reflection. This is a consumer of the converter: every documented parameter's annotation strings are converted to a
single Sorbet type.

An annotation that cannot be parsed never fails the whole stub. The parameter is typed with the fallback
(unconstrained) type instead and a warning is logged.
"""
import enum
import logging
from dataclasses import dataclass
from dataclasses import field
from typing import ClassVar
from typing import FrozenSet
from typing import Iterable
from typing import List
from typing import Mapping
from typing import Optional
from typing import Protocol
from typing import Sequence
from typing import Tuple
from typing import Union

import inflection
from more_itertools import partition

from yard_sorbet_types.conversion import TypeConverter
from yard_sorbet_types.parse import AnnotationSyntaxError

__all__ = [
    "DocEntry",
    "DocumentationSource",
    "DocumentedParam",
    "MethodSignature",
    "ParameterKind",
    "SignatureBuilder",
    "SlotInfo",
    "TypedParameter",
]

logger = logging.getLogger(__name__)

RuntimeParameters = Sequence[Tuple[Union["ParameterKind", str], str]]
"""`(kind, name)` pairs in declaration order, e.g. `[("key", "title"), ("block", "blk")]`"""


class ParameterKind(enum.Enum):
    """Parameter kinds, named the way runtime reflection names them"""

    REQ = "req"
    OPT = "opt"
    REST = "rest"
    KEYREQ = "keyreq"
    KEY = "key"
    KEYREST = "keyrest"
    BLOCK = "block"
    # `**nil`: the method accepts no keywords. Never part of a stub
    NOKEY = "nokey"


@dataclass(frozen=True)
class DocumentedParam:
    """One `@param` entry as handed over by a documentation source"""

    name: str
    types: Sequence[str] = field(default_factory=tuple)


@dataclass(frozen=True)
class SlotInfo:
    """One slot registered on a component, e.g. `renders_many :items` is `SlotInfo("items", collection=True)`"""

    name: str
    collection: bool = False


class DocEntry(Protocol):
    @property
    def params(self) -> Sequence[DocumentedParam]:
        ...


class DocumentationSource(Protocol):
    """
    Where documentation for a constant is looked up. Callers build one and pass it in; nothing in this package keeps
    a registry of its own.
    """

    def find(self, constant_name: str) -> Optional[DocEntry]:
        ...


@dataclass(frozen=True)
class TypedParameter:
    name: str
    kind: ParameterKind
    type: str

    def render_sig(self) -> str:
        return f"{self.name}: {self.type}"

    def render_def(self) -> str:
        kind = self.kind
        if kind is ParameterKind.REQ:
            return self.name
        elif kind is ParameterKind.OPT:
            return f"{self.name} = T.unsafe(nil)"
        elif kind is ParameterKind.REST:
            return f"*{self.name}"
        elif kind is ParameterKind.KEYREQ:
            return f"{self.name}:"
        elif kind is ParameterKind.KEY:
            return f"{self.name}: T.unsafe(nil)"
        elif kind is ParameterKind.KEYREST:
            return f"**{self.name}"
        elif kind is ParameterKind.BLOCK:
            return f"&{self.name}"
        else:
            return "**nil"


@dataclass(frozen=True)
class MethodSignature:
    name: str
    parameters: Sequence[TypedParameter] = field(default_factory=tuple)
    return_type: str = "void"

    def render_sig(self) -> str:
        parts = []
        if self.parameters:
            parts.append(f"params({', '.join(p.render_sig() for p in self.parameters)})")
        parts.append("void" if self.return_type == "void" else f"returns({self.return_type})")
        return f"sig {{ {'.'.join(parts)} }}"

    def render_def(self) -> str:
        if not self.parameters:
            return f"def {self.name}; end"
        return f"def {self.name}({', '.join(p.render_def() for p in self.parameters)}); end"

    def render(self) -> str:
        return f"{self.render_sig()}\n{self.render_def()}"


class SignatureBuilder:
    """
    Combines documentation and reflection into typed method signatures. e.g:

    >>> builder = SignatureBuilder()
    >>> sig = builder.build_method(
    >>>     "initialize",
    >>>     [DocumentedParam("title", ["String", "nil"])],
    >>>     [("key", "title")],
    >>> )
    >>> print(sig.render())
    sig { params(title: T.nilable(String)).void }
    def initialize(title: T.unsafe(nil)); end
    """

    STUB_KINDS: ClassVar[FrozenSet[ParameterKind]] = frozenset(
        {ParameterKind.KEYREQ, ParameterKind.KEY, ParameterKind.KEYREST, ParameterKind.BLOCK}
    )
    """Only documented parameters of these kinds make it into a stub"""

    converter: TypeConverter
    fallback_type: str

    def __init__(self, converter: Optional[TypeConverter] = None, fallback_type: str = "T.untyped") -> None:
        self.converter = converter or TypeConverter()
        self.fallback_type = fallback_type

    def param_type(self, param: DocumentedParam) -> str:
        """The converted type of one parameter, or the fallback type if its annotation is unusable"""
        try:
            converted = self.converter.convert_types(param.types)
        except AnnotationSyntaxError as e:
            logger.warning(
                "Unparseable type annotation %r for parameter '%s' (%s), using %s",
                e.text,
                param.name,
                e.msg,
                self.fallback_type,
            )
            return self.fallback_type

        if not converted:
            logger.debug("No type documented for parameter '%s', using %s", param.name, self.fallback_type)
            return self.fallback_type
        return converted

    def build_parameters(
        self, documented: Iterable[DocumentedParam], runtime_parameters: RuntimeParameters
    ) -> List[TypedParameter]:
        """
        Type each documented parameter that the method really accepts with one of the `STUB_KINDS`. The result is in
        the method's declaration order, whatever order the documentation listed them in.
        """
        kinds: Mapping[str, ParameterKind] = {name: ParameterKind(kind) for kind, name in runtime_parameters}
        order = {name: index for index, (_, name) in enumerate(runtime_parameters)}

        skipped, kept = partition(lambda p: kinds.get(p.name) in self.STUB_KINDS, documented)
        for param in skipped:
            logger.debug("Skipping parameter '%s' (kind: %s)", param.name, kinds.get(param.name))

        typed = [TypedParameter(p.name, kinds[p.name], self.param_type(p)) for p in kept]
        typed.sort(key=lambda p: order[p.name])
        return typed

    def build_method(
        self,
        name: str,
        documented: Iterable[DocumentedParam],
        runtime_parameters: RuntimeParameters,
        return_type: str = "void",
    ) -> MethodSignature:
        return MethodSignature(name, tuple(self.build_parameters(documented, runtime_parameters)), return_type)

    def build_initializer(
        self, source: DocumentationSource, constant_name: str, runtime_parameters: RuntimeParameters
    ) -> Optional[MethodSignature]:
        """Signature for `initialize` of a documented constant. None if `source` has no entry for it"""
        entry = source.find(constant_name)
        if entry is None:
            logger.debug("No documentation found for %s", constant_name)
            return None
        return self.build_method("initialize", entry.params, runtime_parameters)

    def build_slot_methods(self, slots: Iterable[SlotInfo]) -> List[MethodSignature]:
        """
        Stubs for the methods a component defines for each of its slots. e.g. for `SlotInfo("items", collection=True)`:

            sig { params(args: T.nilable(T::Array[T.untyped]), _arg1: T.untyped, block: T.untyped).returns(T.untyped) }
            def with_item(*args, **_arg1, &block); end
            sig { returns(T.untyped) }
            def items; end
            sig { returns(T::Boolean) }
            def items?; end

        The setter of a collection slot is named after the singular form of the slot.
        """
        untyped = self.fallback_type
        setter_parameters = (
            TypedParameter("args", ParameterKind.REST, f"T.nilable(T::Array[{untyped}])"),
            TypedParameter("_arg1", ParameterKind.KEYREST, untyped),
            TypedParameter("block", ParameterKind.BLOCK, untyped),
        )

        methods: List[MethodSignature] = []
        for slot in slots:
            setter_name = inflection.singularize(slot.name) if slot.collection else slot.name
            methods.append(MethodSignature(f"with_{setter_name}", setter_parameters, untyped))
            methods.append(MethodSignature(slot.name, (), untyped))
            methods.append(MethodSignature(f"{slot.name}?", (), "T::Boolean"))

        logger.debug("Built %d slot methods", len(methods))
        return methods
