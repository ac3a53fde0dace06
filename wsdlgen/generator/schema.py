"""Schema type emission for structures and SOAP-encoded arrays."""

import logging
from collections.abc import Callable

from lxml import etree

from .docblock import TagValue, first_tag
from .metadata import MetadataProvider
from .types import NS_WSDL, NS_XSD, TypeKind, TypeRegistry, array_type_name, namespace_of

logger = logging.getLogger(__name__)


def _xsd(tag: str) -> str:
    return f"{{{NS_XSD}}}{tag}"


class SchemaBuilder:
    """Append complex type definitions to a ``xsd:schema`` element.

    Each type name is emitted at most once per registry. A structure is
    registered before its fields are resolved so that structures which
    reference themselves (directly or through other structures) resolve
    to their name instead of recursing.
    """

    def __init__(
        self,
        schema: etree._Element,
        metadata: MetadataProvider,
        registry: TypeRegistry,
        resolve: Callable[[TagValue], str],
    ) -> None:
        self.schema = schema
        self.metadata = metadata
        self.registry = registry
        self.resolve = resolve

    def build_complex_type(self, name: str) -> None:
        """Emit the complex type for structure ``name`` unless already known."""
        if self.registry.is_known(name):
            return
        self.registry.begin(name)

        struct = self.metadata.describe_struct(name)
        complex_type = etree.SubElement(self.schema, _xsd("complexType"), name=name)
        group = etree.SubElement(complex_type, _xsd("all"))

        for field in struct.exported_fields():
            token = first_tag(field.doc, "var")
            try:
                field_type = self.resolve(token if token is not None else "")
            except Exception as exc:
                exc.add_note(f"while resolving field {name}.{field.name}")
                raise
            etree.SubElement(
                group,
                _xsd("element"),
                name=field.name,
                type=field_type,
                minOccurs="0",
                maxOccurs="1",
            )

        self.registry.finish(name)
        logger.debug("Emitted complex type %s", name)

    def build_array_type(self, element_name: str) -> str:
        """Emit the wrapper type for an array of ``element_name``.

        Returns the wrapper name, whether or not it was emitted now.
        """
        name = array_type_name(element_name)
        if self.registry.is_known(name, TypeKind.ARRAY):
            return name
        self.registry.begin(name, TypeKind.ARRAY)

        complex_type = etree.SubElement(self.schema, _xsd("complexType"), name=name)
        content = etree.SubElement(complex_type, _xsd("complexContent"))
        restriction = etree.SubElement(content, _xsd("restriction"), base="soap-enc:Array")
        attribute = etree.SubElement(restriction, _xsd("attribute"), ref="soap-enc:arrayType")
        attribute.set(f"{{{NS_WSDL}}}arrayType", f"{namespace_of(element_name)}:{element_name}[]")

        self.registry.finish(name)
        logger.debug("Emitted array type %s", name)
        return name
