"""Port type, binding and message generation for service methods."""

import logging
from urllib.parse import urlsplit

from lxml import etree

from .docblock import DocBlock
from .resolver import TypeResolver
from .types import NS_SOAP_ENC, NS_SOAP_ENV, NS_WSDL, MethodDescriptor, WSDLError

logger = logging.getLogger(__name__)

IGNORE_TAG = "ignoreInWsdl"
VOID = "void"


class ParameterMismatchError(WSDLError):
    """Raised when documented and declared parameter counts differ."""

    def __init__(self, class_name: str, method_name: str, documented: int, declared: int):
        super().__init__(
            f"Declared and documented arguments do not match in {class_name}::{method_name}() "
            f"({documented} documented, {declared} declared)"
        )
        self.class_name = class_name
        self.method_name = method_name
        self.documented = documented
        self.declared = declared


def _wsdl(tag: str) -> str:
    return f"{{{NS_WSDL}}}{tag}"


def _soap(tag: str) -> str:
    return f"{{{NS_SOAP_ENV}}}{tag}"


def soap_action(url: str, method_name: str) -> str:
    """Append the ``method`` query argument to the endpoint URL."""
    separator = "&" if urlsplit(url).query else "?"
    return f"{url}{separator}method={method_name}"


class OperationAssembler:
    """Emit the WSDL fragments describing each exported method.

    Messages are appended to ``definitions`` right away; operations go
    into ``port_type`` and ``binding``, which the caller attaches to the
    root once every method has been processed.
    """

    def __init__(
        self,
        class_name: str,
        url: str,
        definitions: etree._Element,
        port_type: etree._Element,
        binding: etree._Element,
        resolver: TypeResolver,
    ) -> None:
        self.class_name = class_name
        self.url = url
        self.definitions = definitions
        self.port_type = port_type
        self.binding = binding
        self.resolver = resolver
        self.operations: list[str] = []

    def is_exported(self, method: MethodDescriptor, doc: DocBlock) -> bool:
        return method.is_eligible(ignored=doc.has(IGNORE_TAG))

    def add(self, method: MethodDescriptor) -> bool:
        """Emit the operation for ``method`` if it is exported."""
        doc = DocBlock.parse(method.doc)
        if not self.is_exported(method, doc):
            logger.debug("Skipping method %s.%s", self.class_name, method.name)
            return False

        self.add_port_type_operation(method, doc)
        self.add_binding_operation(method)
        self.add_messages(method, doc)
        self.operations.append(method.name)
        logger.debug("Exported operation %s.%s", self.class_name, method.name)
        return True

    def add_port_type_operation(self, method: MethodDescriptor, doc: DocBlock) -> None:
        operation = etree.SubElement(self.port_type, _wsdl("operation"), name=method.name)
        documentation = etree.SubElement(operation, _wsdl("documentation"))
        documentation.text = doc.summary
        etree.SubElement(operation, _wsdl("input"), message=f"tns:{method.name}Request")
        etree.SubElement(operation, _wsdl("output"), message=f"tns:{method.name}Response")

    def add_binding_operation(self, method: MethodDescriptor) -> None:
        operation = etree.SubElement(self.binding, _wsdl("operation"), name=method.name)
        etree.SubElement(
            operation,
            _soap("operation"),
            soapAction=soap_action(self.url, method.name),
            style="rpc",
        )
        for tag in ("input", "output"):
            direction = etree.SubElement(operation, _wsdl(tag))
            etree.SubElement(direction, _soap("body"), use="encoded", encodingStyle=NS_SOAP_ENC)

    def add_messages(self, method: MethodDescriptor, doc: DocBlock) -> None:
        param_types = doc.get("param")
        if len(param_types) != len(method.parameters):
            raise ParameterMismatchError(
                self.class_name, method.name, len(param_types), len(method.parameters)
            )

        request = etree.SubElement(self.definitions, _wsdl("message"), name=f"{method.name}Request")
        for param, token in zip(method.parameters, param_types):
            etree.SubElement(
                request, _wsdl("part"), name=param.name, type=self.resolver.resolve(token)
            )

        response = etree.SubElement(
            self.definitions, _wsdl("message"), name=f"{method.name}Response"
        )
        return_type = doc.first("return")
        # A bare @return carries no type and reads as void
        if isinstance(return_type, str) and return_type != VOID:
            etree.SubElement(
                response,
                _wsdl("part"),
                name=f"{method.name}Return",
                type=self.resolver.resolve(return_type),
            )
