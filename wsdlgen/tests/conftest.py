"""Unit tests configuration file."""

import pytest

from wsdlgen.generator.types import NS_SOAP_ENV, NS_WSDL, NS_XSD

URL = "http://example.com/soap/server.py"
TNS = "example.com"


def pytest_configure(config):
    """Disable verbose output when running tests."""
    terminal = config.pluginmanager.getplugin("terminal")
    if terminal:
        terminal.TerminalReporter.showfspath = False


@pytest.fixture
def ns():
    """Prefixes for XPath queries against generated documents."""
    return {"wsdl": NS_WSDL, "xsd": NS_XSD, "soap": NS_SOAP_ENV}


@pytest.fixture
def endpoint():
    return URL, TNS
