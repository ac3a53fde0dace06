"""Service and structure classes used by the generator tests."""

from dataclasses import dataclass, field
from typing import ClassVar

from sample_models import Product


class Calculator:
    """Simple arithmetic service.

    @author nobody
    """

    def __init__(self, precision=2):
        """Constructors are never exported.

        @param int
        """
        self.precision = precision

    def add(self, a, b):
        """Add two numbers.

        @param int
        @param int
        @return int
        """
        return a + b

    def reset(self):
        """Forget everything.

        @return void
        """

    def debug(self, value):
        """Internal helper.

        @ignoreInWsdl
        @param string
        """

    @staticmethod
    def version():
        """@return string"""
        return "1.0"

    @classmethod
    def create(cls):
        """@return Calculator"""
        return cls()

    def _round(self, value):
        """@param float"""
        return round(value, self.precision)

    def __repr__(self):
        return "Calculator()"


class Widget:
    name: str
    """@var string"""

    price: float
    """@var double"""

    registry: ClassVar[dict] = {}
    """@var Widget[]"""

    _secret: int = 0
    """@var int"""

    @property
    def label(self):
        """@var str"""
        return self.name.title()


class Catalog:
    """Widget catalog."""

    items: list
    """@var Widget[]"""

    def list_widgets(self):
        """All widgets.

        @return Widget[]
        """
        return []

    def find(self, name):
        """Find widgets by name.

        @param string
        @return Widget[]
        """
        return []

    def matrix(self):
        """@return Widget[][]"""
        return [[]]


@dataclass
class Node:
    value: int = field(metadata={"doc": "@var int"})
    next: "Node | None" = field(default=None, metadata={"doc": "@var Node"})
    children: list = field(default_factory=list, metadata={"doc": "@var Node[]"})


class Person:
    employer: object
    """@var Company"""


class Company:
    ceo: object
    """@var Person"""

    staff: list
    """@var Person[]"""


class Graph:
    """Graph service."""

    def root(self):
        """@return Node"""

    def org(self):
        """@return Company"""


class Undocumented:
    value: int


class Broken:
    """Service with undocumented parameters."""

    def move(self, x, y, z):
        """Move somewhere.

        @param int
        @param int
        """


class Loose:
    def load(self):
        """@return Undocumented"""


class BaseService:
    def ping(self):
        """Base ping.

        @return bool
        """

    def status(self):
        """@return string"""


class DerivedService(BaseService):
    def status(self):
        """Overridden status.

        @return integer
        """


class Shelf:
    items: list
    """@var Widget[]"""


class Warehouse:
    def shelf(self):
        """@return Shelf"""

    def widgets(self):
        """@return Widget[]"""


class Shop:
    def product(self):
        """@return Product"""
        return Product()


class Outer:
    class Inner:
        value: int
        """@var
int"""
