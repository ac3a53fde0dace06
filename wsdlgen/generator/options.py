"""Generator configuration."""

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from dataclasses_json import DataClassJsonMixin

from .types import WSDLError


class ConfigurationError(WSDLError):
    """Raised when the endpoint URL or target namespace cannot be determined."""


class EndpointDefaults(Protocol):
    """Supplies the endpoint URL and target namespace when not given.

    Implementations typically inspect the current request; that lives
    with the service host, not here.
    """

    def default_url(self) -> str: ...

    def default_namespace(self) -> str: ...


@dataclass
class GeneratorOptions(DataClassJsonMixin):
    """Options for building and serializing a WSDL document."""

    url: str | None = None
    target_namespace: str | None = None
    encoding: str = "utf-8"
    pretty_print: bool = True
    xml_declaration: bool = True

    @classmethod
    def from_file(cls, path: str | Path) -> "GeneratorOptions":
        return cls.from_json(Path(path).read_text(encoding="utf-8"))

    def endpoint(self, defaults: EndpointDefaults | None = None) -> tuple[str, str]:
        """Return ``(url, target_namespace)``, falling back to ``defaults``."""
        url = self.url
        if not url:
            if defaults is None:
                raise ConfigurationError("No endpoint URL given and no defaults available")
            url = defaults.default_url()

        tns = self.target_namespace
        if not tns:
            if defaults is None:
                raise ConfigurationError("No target namespace given and no defaults available")
            tns = defaults.default_namespace()

        return url, tns
