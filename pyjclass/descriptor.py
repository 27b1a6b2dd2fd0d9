"""
Field and method descriptor parser using Lark.

Descriptors are the type strings referenced by name-and-type constants,
e.g. "I", "[Ljava/lang/String;" or "(IJ)V".
"""

from abc import ABC
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from lark import Lark, Transformer, v_args
from lark.exceptions import LarkError

from .errors import DescriptorError


GRAMMAR_FILE = Path(__file__).parent / "descriptor.lark"


class FieldType(ABC):
    """Base class for descriptor types."""
    pass


@dataclass(frozen=True)
class BaseType(FieldType):
    """Primitive type (B, C, D, F, I, J, S, Z)."""
    descriptor: str

    @property
    def name(self) -> str:
        names = {
            "B": "byte", "C": "char", "D": "double", "F": "float",
            "I": "int", "J": "long", "S": "short", "Z": "boolean",
        }
        return names[self.descriptor]

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class ObjectType(FieldType):
    """Class type (L<internal name>;)."""
    class_name: str  # e.g., "java/lang/String"

    def __str__(self) -> str:
        return self.class_name.replace("/", ".")


@dataclass(frozen=True)
class ArrayType(FieldType):
    """Array type ([<component>)."""
    component: FieldType

    @property
    def dimensions(self) -> int:
        if isinstance(self.component, ArrayType):
            return self.component.dimensions + 1
        return 1

    def __str__(self) -> str:
        return f"{self.component}[]"


@dataclass(frozen=True)
class VoidType:
    """Method return type V."""

    def __str__(self) -> str:
        return "void"


@dataclass(frozen=True)
class MethodDescriptor:
    parameters: tuple[FieldType, ...]
    return_type: FieldType | VoidType

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"({params}) -> {self.return_type}"


@v_args(inline=True)
class DescriptorTransformer(Transformer):
    """Transforms the Lark parse tree into descriptor types."""

    def field_descriptor(self, field_type):
        return field_type

    def method_descriptor(self, *items):
        return MethodDescriptor(parameters=tuple(items[:-1]), return_type=items[-1])

    def base_type(self, token):
        return BaseType(str(token))

    def object_type(self, token):
        return ObjectType(str(token)[1:-1])

    def array_type(self, component):
        return ArrayType(component)

    def void_type(self):
        return VoidType()


class DescriptorParser:
    """Parser for field and method descriptors."""

    def __init__(self):
        with open(GRAMMAR_FILE, "r") as f:
            grammar = f.read()

        self._parser = Lark(
            grammar,
            parser="lalr",
            start=["field_descriptor", "method_descriptor"],
        )
        self._transformer = DescriptorTransformer()

    def _parse(self, text: str, start: str):
        try:
            tree = self._parser.parse(text, start=start)
        except LarkError as e:
            raise DescriptorError(text, type(e).__name__) from e
        return self._transformer.transform(tree)

    def parse_field(self, text: str) -> FieldType:
        return self._parse(text, "field_descriptor")

    def parse_method(self, text: str) -> MethodDescriptor:
        return self._parse(text, "method_descriptor")


_default_parser: Optional[DescriptorParser] = None


def _get_parser() -> DescriptorParser:
    global _default_parser
    if _default_parser is None:
        _default_parser = DescriptorParser()
    return _default_parser


def parse_field_descriptor(text: str) -> FieldType:
    """Parse a field descriptor such as "[Ljava/lang/String;"."""
    return _get_parser().parse_field(text)


def parse_method_descriptor(text: str) -> MethodDescriptor:
    """Parse a method descriptor such as "(IJ)V"."""
    return _get_parser().parse_method(text)


def parse_descriptor(text: str) -> FieldType | MethodDescriptor:
    """Parse either kind, deciding by the leading character."""
    if text.startswith("("):
        return parse_method_descriptor(text)
    return parse_field_descriptor(text)
