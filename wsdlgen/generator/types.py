"""Type definitions for service metadata and WSDL generation."""

from dataclasses import dataclass, field
from enum import Enum, StrEnum, auto

from dataclasses_json import DataClassJsonMixin

MAGIC_PREFIX = "__"

NS_SOAP_ENC = "http://schemas.xmlsoap.org/soap/encoding/"
NS_SOAP_ENV = "http://schemas.xmlsoap.org/wsdl/soap/"
NS_WSDL = "http://schemas.xmlsoap.org/wsdl/"
NS_XSD = "http://www.w3.org/2001/XMLSchema"
SOAP_HTTP_TRANSPORT = "http://schemas.xmlsoap.org/soap/http"


class WSDLError(RuntimeError):
    """Base class for errors raised while building a WSDL document."""


@dataclass
class ParameterDescriptor(DataClassJsonMixin):
    """A declared method parameter. Its type comes from the docs only."""

    name: str


@dataclass
class MethodDescriptor(DataClassJsonMixin):
    """Represents a candidate service method."""

    name: str
    parameters: list[ParameterDescriptor] = field(default_factory=list)
    doc: str | None = None
    is_public: bool = True
    is_static: bool = False
    is_constructor: bool = False

    @property
    def is_magic(self) -> bool:
        return self.name.startswith(MAGIC_PREFIX)

    def is_eligible(self, ignored: bool = False) -> bool:
        """Check whether the method is exported as an operation."""
        return (
            self.is_public
            and not self.is_static
            and not self.is_constructor
            and not ignored
            and not self.is_magic
        )


@dataclass
class FieldDescriptor(DataClassJsonMixin):
    """Represents a field of a structure type."""

    name: str
    doc: str | None = None
    is_public: bool = True
    is_static: bool = False


@dataclass
class StructDescriptor(DataClassJsonMixin):
    """Represents a user-defined structure referenced from annotations."""

    name: str
    fields: list[FieldDescriptor] = field(default_factory=list)

    def exported_fields(self) -> list[FieldDescriptor]:
        return [f for f in self.fields if f.is_public and not f.is_static]


@dataclass
class ServiceDescriptor(DataClassJsonMixin):
    """Snapshot of the class under description."""

    name: str
    methods: list[MethodDescriptor] = field(default_factory=list)
    doc: str | None = None


class Namespace(StrEnum):
    """Namespace prefix a resolved type name lives in."""

    SOAP_ENC = "soap-enc"
    XSD = "xsd"
    TNS = "tns"


TYPE_ALIASES: dict[str, str] = {
    "array": "array",
    "struct": "array",
    "boolean": "boolean",
    "bool": "boolean",
    "double": "float",
    "float": "float",
    "real": "float",
    "integer": "int",
    "int": "int",
    "string": "string",
    "str": "string",
}

SCALAR_TYPES = frozenset(["boolean", "float", "int", "string"])

ARRAY_SUFFIX = "Array"


def canonical_name(name: str) -> str:
    """Map a type alias to its canonical name. Unknown names pass through."""
    return TYPE_ALIASES.get(name, name)


def namespace_of(name: str) -> Namespace:
    """Return the namespace a (possibly aliased) type name belongs to."""
    name = canonical_name(name)
    if name == "array":
        return Namespace.SOAP_ENC
    if name in SCALAR_TYPES:
        return Namespace.XSD
    return Namespace.TNS


def is_scalar(name: str) -> bool:
    return canonical_name(name) in SCALAR_TYPES


def array_type_name(name: str) -> str:
    """Name of the wrapper type generated for an array of ``name``."""
    return name + ARRAY_SUFFIX


@dataclass(frozen=True)
class TypeReference:
    """Canonical form of a type token.

    ``name`` and ``namespace`` describe the base type. Array references
    always qualify into ``tns`` since every depth is backed by a
    generated wrapper type.
    """

    name: str
    array_depth: int
    namespace: Namespace

    @property
    def is_array(self) -> bool:
        return self.array_depth > 0

    @property
    def type_name(self) -> str:
        name = self.name
        for _ in range(self.array_depth):
            name = array_type_name(name)
        return name

    @property
    def qualified_name(self) -> str:
        namespace = Namespace.TNS if self.is_array else self.namespace
        return f"{namespace}:{self.type_name}"


class RegistryState(Enum):
    """Definition state of a schema type within one build."""

    ABSENT = auto()
    IN_PROGRESS = auto()
    COMPLETE = auto()


class TypeKind(StrEnum):
    """What produced a schema type definition."""

    COMPLEX = auto()
    ARRAY = auto()


class TypeConflictError(WSDLError):
    """Raised when a structure and an array wrapper claim the same type name."""


class TypeRegistry:
    """Tracks schema types that were emitted or are being emitted.

    A name that is in progress counts as known, which is what stops
    self- and mutually-referencing structures from recursing forever.
    """

    def __init__(self) -> None:
        self._states: dict[str, RegistryState] = {}
        self._kinds: dict[str, TypeKind] = {}

    def state(self, name: str) -> RegistryState:
        return self._states.get(name, RegistryState.ABSENT)

    def kind(self, name: str) -> TypeKind | None:
        return self._kinds.get(name)

    def is_known(self, name: str, kind: TypeKind = TypeKind.COMPLEX) -> bool:
        """Check whether ``name`` was registered, as a type of ``kind``.

        Raises TypeConflictError when it was registered as another kind.
        """
        known = self._kinds.get(name)
        if known is not None and known != kind:
            raise TypeConflictError(
                f"Type name {name} is used by both a {known} type and a {kind} type"
            )
        return name in self._states

    def begin(self, name: str, kind: TypeKind = TypeKind.COMPLEX) -> None:
        self._states[name] = RegistryState.IN_PROGRESS
        self._kinds[name] = kind

    def finish(self, name: str) -> None:
        self._states[name] = RegistryState.COMPLETE

    def names(self) -> list[str]:
        return list(self._states)

    def __contains__(self, name: object) -> bool:
        return name in self._states

    def __len__(self) -> int:
        return len(self._states)
