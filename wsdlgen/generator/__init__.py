"""WSDL document generator."""

from .docblock import DocBlock as DocBlock
from .docblock import extract_summary as extract_summary
from .docblock import extract_tag as extract_tag
from .document import WSDLDocument as WSDLDocument
from .document import generate_wsdl as generate_wsdl
from .document import unresolved_references as unresolved_references
from .metadata import ClassMetadataProvider as ClassMetadataProvider
from .metadata import MetadataProvider as MetadataProvider
from .metadata import StaticMetadataProvider as StaticMetadataProvider
from .metadata import UnknownStructError as UnknownStructError
from .operations import ParameterMismatchError as ParameterMismatchError
from .options import ConfigurationError as ConfigurationError
from .options import EndpointDefaults as EndpointDefaults
from .options import GeneratorOptions as GeneratorOptions
from .resolver import InvalidTypeError as InvalidTypeError
from .resolver import TypeResolver as TypeResolver
from .resolver import parse_type as parse_type
from .types import *
