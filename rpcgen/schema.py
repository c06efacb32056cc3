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
Build shapes out of YAML schema documents.

A schema document lists named top-level shapes:

    shapes:
      - name: Widgets
        type: {kind: list, elem: {kind: struct, type_name: Widget, fields: [{name: ID, type: int32}]}}
      - name: Ok
        type: bool

A type is either a shorthand string (`int`, `int8`..`int64`, `uint`, `uint8`..`uint64`, `string`, `bool`, `error`,
any other identifier being a named type) or a mapping with a `kind`.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Literal, Optional, Union

from pydantic import field_validator, model_validator
from structlog import get_logger
from typing_extensions import Self, assert_never

from rpcgen.exception import SchemaError
from rpcgen.shapes import (
    ERROR_SHAPE,
    INT_BIT_SIZES,
    ArrayShape,
    BoolShape,
    Field,
    IntShape,
    ListShape,
    NamedShape,
    Shape,
    StringShape,
    StructShape,
)
from rpcgen.utils.pydantic import BaseModel
from rpcgen.utils.yaml import model_from_extended_yaml

logger = get_logger()

_INT_SHORTHAND_RE = re.compile(r'(?P<kind>u?int)(?P<bits>8|16|32|64)?')

Kind = Literal['int', 'uint', 'string', 'bool', 'struct', 'list', 'array', 'named', 'error']

# arguments each kind accepts besides `kind` itself
_KIND_ARGUMENTS: dict[str, frozenset[str]] = {
    'int': frozenset({'bits'}),
    'uint': frozenset({'bits'}),
    'string': frozenset(),
    'bool': frozenset(),
    'struct': frozenset({'fields', 'type_name'}),
    'list': frozenset({'elem'}),
    'array': frozenset({'elem', 'length'}),
    'named': frozenset({'type_name'}),
    'error': frozenset(),
}

# names that cannot be used as identifiers in generated code
GO_KEYWORDS = frozenset({
    'break', 'case', 'chan', 'const', 'continue', 'default', 'defer', 'else', 'fallthrough', 'for',
    'func', 'go', 'goto', 'if', 'import', 'interface', 'map', 'package', 'range', 'return',
    'select', 'struct', 'switch', 'type', 'var',
})


def _check_identifier(name: str, what: str) -> None:
    if not name.isidentifier() or name in GO_KEYWORDS:
        raise ValueError(f'{what} {name!r} is not a valid identifier')


def _check_unique_names(names: list[str], what: str) -> None:
    seen: set[str] = set()
    for name in names:
        if name in seen:
            raise ValueError(f'duplicate {what} {name!r}')
        seen.add(name)


class TypeSpec(BaseModel):
    kind: Kind
    bits: int = 0
    type_name: Optional[str] = None
    fields: list[FieldSpec] = []
    elem: Optional[TypeSpec] = None
    length: Optional[int] = None

    @model_validator(mode='before')
    @classmethod
    def expand_shorthand(cls, data: Any) -> Any:
        if not isinstance(data, str):
            return data
        if data in ('string', 'bool', 'error'):
            return {'kind': data}
        if (match := _INT_SHORTHAND_RE.fullmatch(data)) is not None:
            return {'kind': match['kind'], 'bits': int(match['bits'] or 0)}
        return {'kind': 'named', 'type_name': data}

    @model_validator(mode='after')
    def check_kind_arguments(self) -> Self:
        if self.bits not in INT_BIT_SIZES:
            raise ValueError(f'bits must be one of {INT_BIT_SIZES}, got {self.bits}')
        unexpected = self.model_fields_set - {'kind'} - _KIND_ARGUMENTS[self.kind]
        if unexpected:
            raise ValueError(f'{self.kind} does not take {", ".join(sorted(unexpected))}')
        if self.kind in ('list', 'array') and self.elem is None:
            raise ValueError(f'{self.kind} requires elem')
        if self.kind == 'array' and (self.length is None or self.length < 0):
            raise ValueError('array requires a non-negative length')
        if self.kind == 'named' and not self.type_name:
            raise ValueError('named requires type_name')
        if self.kind == 'struct':
            if self.type_name is not None:
                _check_identifier(self.type_name, 'type name')
            _check_unique_names([field.name for field in self.fields], 'field')
        return self

    def to_shape(self) -> Shape:
        match self.kind:
            case 'int' | 'uint':
                return IntShape(self.bits, unsigned=self.kind == 'uint')
            case 'string':
                return StringShape()
            case 'bool':
                return BoolShape()
            case 'struct':
                return StructShape(tuple(field.to_field() for field in self.fields), type_name=self.type_name)
            case 'list':
                assert self.elem is not None
                return ListShape(self.elem.to_shape())
            case 'array':
                assert self.elem is not None and self.length is not None
                return ArrayShape(self.elem.to_shape(), self.length)
            case 'named':
                assert self.type_name is not None
                return NamedShape(self.type_name)
            case 'error':
                return ERROR_SHAPE
            case _:
                assert_never(self.kind)


class FieldSpec(BaseModel):
    name: str
    type: TypeSpec

    @field_validator('name')
    @classmethod
    def validate_name(cls, name: str) -> str:
        _check_identifier(name, 'name')
        return name

    def to_field(self) -> Field:
        return Field(self.name, self.type.to_shape())


class SchemaDocument(BaseModel):
    shapes: list[FieldSpec]

    @model_validator(mode='after')
    def check_unique_shapes(self) -> Self:
        _check_unique_names([spec.name for spec in self.shapes], 'shape')
        return self

    def to_fields(self) -> tuple[Field, ...]:
        return tuple(spec.to_field() for spec in self.shapes)


TypeSpec.model_rebuild()


def load_schema(filepath: Union[Path, str]) -> tuple[Field, ...]:
    """ Load a schema document from a yaml file (`extends` is supported) and return its top-level fields in order.
    """
    try:
        document = model_from_extended_yaml(SchemaDocument, filepath=str(filepath))
    except ValueError as e:
        # XXX: pydantic's ValidationError is also a ValueError
        raise SchemaError(f'invalid schema {str(filepath)!r}: {e}') from e
    fields = document.to_fields()
    logger.debug('schema loaded', filepath=str(filepath), shapes=len(fields))
    return fields
