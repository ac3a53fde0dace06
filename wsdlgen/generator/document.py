"""WSDL 1.1 document assembly."""

import dataclasses
import logging
from pathlib import Path
from typing import Any

from lxml import etree

from .docblock import extract_summary
from .metadata import ClassMetadataProvider, MetadataProvider
from .operations import OperationAssembler
from .options import EndpointDefaults, GeneratorOptions
from .resolver import TypeResolver
from .types import (
    NS_SOAP_ENC,
    NS_SOAP_ENV,
    NS_WSDL,
    NS_XSD,
    SOAP_HTTP_TRANSPORT,
    ServiceDescriptor,
    TypeRegistry,
)

logger = logging.getLogger(__name__)

# Attributes that refer to other definitions by qualified name
_REFERENCE_ATTRIBUTES = ("message", "type", "binding", f"{{{NS_WSDL}}}arrayType")


def _wsdl(tag: str) -> str:
    return f"{{{NS_WSDL}}}{tag}"


def _soap(tag: str) -> str:
    return f"{{{NS_SOAP_ENV}}}{tag}"


def _xsd(tag: str) -> str:
    return f"{{{NS_XSD}}}{tag}"


class WSDLDocument:
    """WSDL description of a service class, built on construction.

    Example:
        doc = WSDLDocument(Calculator, "http://example.com/calc", "example.com")
        doc.write("calculator.wsdl")

    Each instance owns its type registry and element tree; a document is
    never shared between builds.
    """

    def __init__(
        self,
        service: Any,
        url: str | None = None,
        target_namespace: str | None = None,
        *,
        metadata: MetadataProvider | None = None,
        defaults: EndpointDefaults | None = None,
        options: GeneratorOptions | None = None,
    ) -> None:
        options = options or GeneratorOptions()
        if url:
            options = dataclasses.replace(options, url=url)
        if target_namespace:
            options = dataclasses.replace(options, target_namespace=target_namespace)

        self.options = options
        self.url, self.target_namespace = options.endpoint(defaults)
        self.metadata = metadata if metadata is not None else ClassMetadataProvider()
        self.service: ServiceDescriptor = self.metadata.describe_service(service)
        self.registry = TypeRegistry()
        self.operations: list[str] = []

        self._run()

    @property
    def nsmap(self) -> dict[str, str]:
        return {
            "soap-enc": NS_SOAP_ENC,
            "soap-env": NS_SOAP_ENV,
            "tns": self.target_namespace,
            "wsdl": NS_WSDL,
            "xsd": NS_XSD,
        }

    def _run(self) -> None:
        self._create_major_elements()

        resolver = TypeResolver(self.schema, self.metadata, self.registry)
        assembler = OperationAssembler(
            self.service.name,
            self.url,
            self.root,
            self.port_type,
            self.binding,
            resolver,
        )
        for method in self.service.methods:
            assembler.add(method)
        self.operations = assembler.operations

        self.root.append(self.port_type)
        self.root.append(self.binding)
        self._create_service()

        logger.info(
            "Built WSDL for %s: %d operations, %d schema types",
            self.service.name,
            len(self.operations),
            len(self.registry),
        )

    def _create_major_elements(self) -> None:
        """Create the root, the schema and the detached port type and binding."""
        name = self.service.name
        nsmap = self.nsmap

        self.root = etree.Element(_wsdl("definitions"), nsmap=nsmap)
        self.root.set("targetNamespace", self.target_namespace)

        types = etree.SubElement(self.root, _wsdl("types"))
        self.schema = etree.SubElement(types, _xsd("schema"), targetNamespace=self.target_namespace)

        # Attached to the root once all operations are in place
        self.port_type = etree.Element(_wsdl("portType"), nsmap=nsmap, name=f"{name}PortType")
        self.binding = etree.Element(
            _wsdl("binding"), nsmap=nsmap, name=f"{name}Binding", type=f"tns:{name}PortType"
        )
        etree.SubElement(self.binding, _soap("binding"), style="rpc", transport=SOAP_HTTP_TRANSPORT)

    def _create_service(self) -> None:
        name = self.service.name
        service = etree.SubElement(self.root, _wsdl("service"), name=name)
        documentation = etree.SubElement(service, _wsdl("documentation"))
        documentation.text = extract_summary(self.service.doc)
        port = etree.SubElement(service, _wsdl("port"), name=f"{name}Port", binding=f"tns:{name}Binding")
        etree.SubElement(port, _soap("address"), location=self.url)

    def schema_types(self) -> list[str]:
        """Names of the complex types defined in the schema, in order."""
        return [el.get("name") for el in self.schema.iterchildren(_xsd("complexType"))]

    def to_bytes(self) -> bytes:
        return etree.tostring(
            self.root,
            xml_declaration=self.options.xml_declaration,
            encoding=self.options.encoding,
            pretty_print=self.options.pretty_print,
        )

    def to_string(self) -> str:
        return self.to_bytes().decode(self.options.encoding)

    def write(self, path: str | Path) -> None:
        Path(path).write_bytes(self.to_bytes())

    def __str__(self) -> str:
        return self.to_string()


def defined_names(root: etree._Element) -> set[str]:
    """Return ``tns:``-qualified names of every named definition."""
    names = set()
    for tag in ("message", "portType", "binding"):
        names.update(f"tns:{el.get('name')}" for el in root.iter(_wsdl(tag)))
    names.update(f"tns:{el.get('name')}" for el in root.iter(_xsd("complexType")))
    return names


def unresolved_references(root: etree._Element) -> list[str]:
    """List ``tns:`` references that do not name a definition in the document."""
    defined = defined_names(root)
    missing = []
    for el in root.iter():
        for attribute in _REFERENCE_ATTRIBUTES:
            value = el.get(attribute)
            if not value or not value.startswith("tns:"):
                continue
            while value.endswith("[]"):
                value = value[:-2]
            if value not in defined:
                missing.append(value)
    return missing


def generate_wsdl(
    service: Any,
    url: str | None = None,
    target_namespace: str | None = None,
    **kwargs: Any,
) -> str:
    """Build the WSDL for ``service`` and return it serialized."""
    return WSDLDocument(service, url, target_namespace, **kwargs).to_string()
