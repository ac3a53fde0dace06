"""Metadata providers that feed service and structure descriptors."""

from __future__ import annotations

import ast
import dataclasses
import importlib
import inspect
import json
import logging
import sys
import textwrap
import typing
from collections.abc import Iterable
from typing import Any, Protocol

from .types import (
    FieldDescriptor,
    MethodDescriptor,
    ParameterDescriptor,
    ServiceDescriptor,
    StructDescriptor,
    WSDLError,
)

logger = logging.getLogger(__name__)

CONSTRUCTORS = frozenset(["__init__", "__new__"])


class UnknownStructError(WSDLError):
    """Raised when a referenced structure type cannot be found."""


class MetadataProvider(Protocol):
    """Supplies descriptors for the service class and referenced structures."""

    def describe_service(self, service: Any) -> ServiceDescriptor: ...

    def describe_struct(self, name: str) -> StructDescriptor: ...


def load_object(path: str) -> Any:
    """Import an object from ``package.module:Name`` or ``package.module.Name``."""
    if ":" in path:
        module_name, _, attr_path = path.partition(":")
    else:
        module_name, _, attr_path = path.rpartition(".")
    if not module_name or not attr_path:
        raise ImportError(f"Not an importable object path: {path}")

    obj: Any = importlib.import_module(module_name)
    for attr in attr_path.split("."):
        obj = getattr(obj, attr)
    return obj


def _is_class_var(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return annotation is typing.ClassVar or typing.get_origin(annotation) is typing.ClassVar


def _attribute_docs(cls: type) -> dict[str, str]:
    """Collect attribute docstrings (a string right after an assignment)."""
    try:
        source = textwrap.dedent(inspect.getsource(cls))
    except (OSError, TypeError):
        return {}

    try:
        module = ast.parse(source)
    except SyntaxError:
        return {}
    class_def = next((n for n in module.body if isinstance(n, ast.ClassDef)), None)
    if class_def is None:
        return {}

    docs: dict[str, str] = {}
    body = class_def.body
    for stmt, following in zip(body, body[1:]):
        if not (
            isinstance(following, ast.Expr)
            and isinstance(following.value, ast.Constant)
            and isinstance(following.value.value, str)
        ):
            continue
        if isinstance(stmt, ast.AnnAssign) and isinstance(stmt.target, ast.Name):
            docs[stmt.target.id] = following.value.value
        elif isinstance(stmt, ast.Assign):
            for target in stmt.targets:
                if isinstance(target, ast.Name):
                    docs[target.id] = following.value.value
    return docs


class ClassMetadataProvider:
    """Describe live Python classes using ``inspect``.

    Structure names are looked up among explicitly registered classes,
    then in the modules of the described services and structures, then as dotted
    import paths.
    """

    def __init__(self, structs: Iterable[type] = ()) -> None:
        self._structs: dict[str, type] = {cls.__name__: cls for cls in structs}
        self._modules: list[str] = []

    def register(self, cls: type, name: str | None = None) -> None:
        self._structs[name or cls.__name__] = cls

    def describe_service(self, service: type | str) -> ServiceDescriptor:
        cls = load_object(service) if isinstance(service, str) else service
        if not inspect.isclass(cls):
            raise TypeError(f"{service!r} is not a class")
        if cls.__module__ not in self._modules:
            self._modules.append(cls.__module__)

        return ServiceDescriptor(
            name=cls.__name__,
            methods=list(self._methods(cls)),
            doc=cls.__doc__,
        )

    def _methods(self, cls: type) -> Iterable[MethodDescriptor]:
        seen: set[str] = set()
        for klass in cls.__mro__:
            if klass is object:
                continue
            for name, attr in vars(klass).items():
                if name in seen:
                    continue
                seen.add(name)

                is_static = isinstance(attr, (staticmethod, classmethod))
                func = attr.__func__ if is_static else attr
                if not inspect.isfunction(func):
                    continue

                yield MethodDescriptor(
                    name=name,
                    parameters=self._parameters(func, bound=not isinstance(attr, staticmethod)),
                    doc=func.__doc__,
                    is_public=not name.startswith("_"),
                    is_static=is_static,
                    is_constructor=name in CONSTRUCTORS,
                )

    @staticmethod
    def _parameters(func: Any, bound: bool) -> list[ParameterDescriptor]:
        params = list(inspect.signature(func).parameters.values())
        if bound and params:
            params = params[1:]
        return [
            ParameterDescriptor(name=p.name)
            for p in params
            if p.kind not in (p.VAR_POSITIONAL, p.VAR_KEYWORD)
        ]

    def find_struct(self, name: str) -> type:
        if name in self._structs:
            return self._structs[name]

        for module_name in self._modules:
            module = sys.modules.get(module_name)
            candidate = getattr(module, name, None)
            if inspect.isclass(candidate):
                return candidate

        if "." in name or ":" in name:
            try:
                candidate = load_object(name)
            except (ImportError, AttributeError) as exc:
                raise UnknownStructError(f"Unknown structure type: {name}") from exc
            if inspect.isclass(candidate):
                return candidate

        raise UnknownStructError(f"Unknown structure type: {name}")

    def describe_struct(self, name: str) -> StructDescriptor:
        cls = self.find_struct(name)
        if cls.__module__ not in self._modules:
            self._modules.append(cls.__module__)
        logger.debug("Describing structure %s from %s", name, cls.__qualname__)
        return StructDescriptor(name=name, fields=list(self._fields(cls)))

    def _fields(self, cls: type) -> Iterable[FieldDescriptor]:
        seen: set[str] = set()
        for klass in reversed(cls.__mro__):
            if klass is object:
                continue

            attr_docs = _attribute_docs(klass)
            dataclass_docs = {}
            if dataclasses.is_dataclass(klass):
                dataclass_docs = {
                    f.name: f.metadata["doc"] for f in dataclasses.fields(klass) if "doc" in f.metadata
                }

            for name, annotation in inspect.get_annotations(klass).items():
                if name in seen:
                    continue
                seen.add(name)
                yield FieldDescriptor(
                    name=name,
                    doc=dataclass_docs.get(name, attr_docs.get(name)),
                    is_public=not name.startswith("_"),
                    is_static=_is_class_var(annotation),
                )

            for name, attr in vars(klass).items():
                if name in seen or not isinstance(attr, property):
                    continue
                seen.add(name)
                yield FieldDescriptor(
                    name=name,
                    doc=attr.__doc__,
                    is_public=not name.startswith("_"),
                )


class StaticMetadataProvider:
    """Serve hand-built descriptors, e.g. from a JSON metadata dump."""

    def __init__(
        self,
        service: ServiceDescriptor,
        structs: Iterable[StructDescriptor] = (),
    ) -> None:
        self.service = service
        self.structs = {s.name: s for s in structs}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StaticMetadataProvider:
        return cls(
            ServiceDescriptor.from_dict(data["service"]),
            [StructDescriptor.from_dict(s) for s in data.get("structs", [])],
        )

    @classmethod
    def from_json(cls, text: str) -> StaticMetadataProvider:
        return cls.from_dict(json.loads(text))

    def to_dict(self) -> dict[str, Any]:
        return {
            "service": self.service.to_dict(),
            "structs": [s.to_dict() for s in self.structs.values()],
        }

    def describe_service(self, service: Any = None) -> ServiceDescriptor:
        if isinstance(service, ServiceDescriptor):
            return service
        if service is not None and service != self.service.name:
            raise WSDLError(f"No metadata for service {service}")
        return self.service

    def describe_struct(self, name: str) -> StructDescriptor:
        try:
            return self.structs[name]
        except KeyError:
            raise UnknownStructError(f"Unknown structure type: {name}") from None
