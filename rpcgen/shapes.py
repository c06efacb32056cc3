# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Shape descriptions are the input of the generator: they describe the type of a parameter (or a struct field, or a list
element) independently of where the description came from, be it Python annotations (see `rpcgen.introspection`) or a
schema document (see `rpcgen.schema`).

The set of shapes is closed, `Shape` is the union of all of them and code that dispatches on a shape is expected to
`match` on every member of the union.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from typing_extensions import assert_never

INT_BIT_SIZES = (0, 8, 16, 32, 64)


@dataclass(slots=True, frozen=True)
class IntShape:
    # 0 means the natural machine width
    bits: int = 0
    unsigned: bool = False

    def __post_init__(self) -> None:
        if self.bits not in INT_BIT_SIZES:
            raise ValueError(f'invalid int bit size: {self.bits}')


@dataclass(slots=True, frozen=True)
class StringShape:
    pass


@dataclass(slots=True, frozen=True)
class BoolShape:
    pass


@dataclass(slots=True, frozen=True)
class Field:
    name: str
    shape: Shape


@dataclass(slots=True, frozen=True)
class StructShape:
    fields: tuple[Field, ...]
    # inline struct declarations have no type name
    type_name: str | None = None


@dataclass(slots=True, frozen=True)
class ListShape:
    elem: Shape


@dataclass(slots=True, frozen=True)
class ArrayShape:
    """A raw array with a fixed number of elements, there is no codec for it."""
    elem: Shape
    length: int


@dataclass(slots=True, frozen=True)
class NamedShape:
    """Any named or opaque type, only the failure sentinel below is supported."""
    type_name: str


ERROR_SHAPE = NamedShape('error')

Shape: TypeAlias = IntShape | StringShape | BoolShape | StructShape | ListShape | ArrayShape | NamedShape


def shape_depth(shape: Shape) -> int:
    """ Nesting depth of a shape, leaves have depth 1.

    >>> shape_depth(IntShape())
    1
    >>> shape_depth(ListShape(StructShape((Field('A', ListShape(BoolShape())),))))
    4
    >>> shape_depth(StructShape(()))
    1
    """
    match shape:
        case IntShape() | StringShape() | BoolShape() | NamedShape():
            return 1
        case StructShape(fields=fields):
            return 1 + max((shape_depth(field.shape) for field in fields), default=0)
        case ListShape(elem=elem) | ArrayShape(elem=elem):
            return 1 + shape_depth(elem)
        case _:
            assert_never(shape)


def pretty_shape(shape: Shape) -> str:
    """ Shows a compact description of a shape, used for diagnostics.

    >>> pretty_shape(ListShape(IntShape(32, unsigned=True)))
    'list[uint32]'
    >>> pretty_shape(StructShape((Field('A', StringShape()), Field('B', BoolShape()))))
    'struct{A string; B bool}'
    >>> pretty_shape(ArrayShape(IntShape(), 4))
    'array[4]int'
    """
    match shape:
        case IntShape(bits=bits, unsigned=unsigned):
            return ('uint' if unsigned else 'int') + (str(bits) if bits else '')
        case StringShape():
            return 'string'
        case BoolShape():
            return 'bool'
        case StructShape(fields=fields, type_name=type_name):
            if type_name is not None:
                return type_name
            return 'struct{' + '; '.join(f'{f.name} {pretty_shape(f.shape)}' for f in fields) + '}'
        case ListShape(elem=elem):
            return f'list[{pretty_shape(elem)}]'
        case ArrayShape(elem=elem, length=length):
            return f'array[{length}]{pretty_shape(elem)}'
        case NamedShape(type_name=type_name):
            return type_name
        case _:
            assert_never(shape)
