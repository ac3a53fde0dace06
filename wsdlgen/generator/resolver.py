"""Type annotation resolution using Lark."""

import logging
import os
from typing import Any

from lark import Lark
from lark.exceptions import LarkError
from lark.visitors import Transformer
from lxml import etree

from .docblock import TagValue
from .metadata import MetadataProvider
from .schema import SchemaBuilder
from .types import (
    Namespace,
    TypeReference,
    TypeRegistry,
    WSDLError,
    canonical_name,
    namespace_of,
)

logger = logging.getLogger(__name__)

_g_parser: Lark | None = None


class InvalidTypeError(WSDLError):
    """Raised when a type annotation is empty or malformed."""


class TypeTransformer(Transformer):
    """Transform a type token parse tree into ``(name, array_depth)``."""

    def array(self, args: list[Any]) -> int:
        return 1

    def start(self, args: list[Any]) -> tuple[str, int]:
        return str(args[0]), sum(args[1:])


def _parser() -> Lark:
    global _g_parser

    if not _g_parser:
        with open(f"{os.path.dirname(__file__)}/typeexpr.lark", encoding="utf-8") as f:
            grammar = f.read()
        _g_parser = Lark(grammar, parser="lalr")
    return _g_parser


def normalize(token: TagValue) -> tuple[str, int]:
    """Split a raw type token into its base name and array depth."""
    if not isinstance(token, str):
        raise InvalidTypeError("Invalid type: annotation has no type value")

    text = token.strip()
    if not text:
        raise InvalidTypeError("Invalid type: empty type annotation")

    try:
        tree = _parser().parse(text)
    except LarkError as exc:
        raise InvalidTypeError(f"Invalid type: {text!r}") from exc
    return TypeTransformer().transform(tree)


def parse_type(token: TagValue) -> TypeReference:
    """Parse a raw type token into its canonical reference."""
    base, depth = normalize(token)
    name = canonical_name(base)
    return TypeReference(name=name, array_depth=depth, namespace=namespace_of(name))


class TypeResolver:
    """Resolve annotation tokens to WSDL-qualified type names.

    Resolving a structure or array type emits the schema definitions it
    needs into ``schema`` as a side effect.
    """

    def __init__(
        self,
        schema: etree._Element,
        metadata: MetadataProvider,
        registry: TypeRegistry | None = None,
    ) -> None:
        self.registry = registry if registry is not None else TypeRegistry()
        self.builder = SchemaBuilder(schema, metadata, self.registry, self.resolve)

    def resolve_reference(self, token: TagValue) -> TypeReference:
        return parse_type(token)

    def resolve(self, token: TagValue) -> str:
        ref = parse_type(token)
        if ref.namespace == Namespace.TNS:
            self.builder.build_complex_type(ref.name)

        # Each depth wraps the previous level's wrapper type
        name = ref.name
        for _ in range(ref.array_depth):
            name = self.builder.build_array_type(name)

        logger.debug("Resolved %r to %s", token, ref.qualified_name)
        return ref.qualified_name
