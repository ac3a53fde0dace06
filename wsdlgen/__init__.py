"""wsdlgen - WSDL generator for documented service classes."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("wsdlgen")
except PackageNotFoundError:
    __version__ = "(local)"
