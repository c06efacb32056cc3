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

from pathlib import Path

import pytest
from pydantic import ValidationError

from rpcgen.exception import SchemaError
from rpcgen.schema import TypeSpec, load_schema
from rpcgen.shapes import (
    ERROR_SHAPE,
    ArrayShape,
    BoolShape,
    Field,
    IntShape,
    ListShape,
    NamedShape,
    StringShape,
    StructShape,
)

FIXTURES_DIR = Path(__file__).parent.parent / 'fixtures'

WIDGETS_FIELDS = (
    Field('Widgets', ListShape(StructShape(
        (
            Field('ID', IntShape(32)),
            Field('Name', StringShape()),
            Field('Tags', ListShape(StringShape())),
        ),
        type_name='Widget',
    ))),
    Field('Ok', BoolShape()),
    Field('Count', IntShape(64, unsigned=True)),
    Field('Failure', ERROR_SHAPE),
)


@pytest.mark.parametrize(
    ['spec', 'shape'],
    [
        ('int', IntShape()),
        ('int16', IntShape(16)),
        ('uint', IntShape(0, unsigned=True)),
        ('uint8', IntShape(8, unsigned=True)),
        ('string', StringShape()),
        ('bool', BoolShape()),
        ('error', ERROR_SHAPE),
        ('Widget', NamedShape('Widget')),
        ('int12', NamedShape('int12')),
        ({'kind': 'uint', 'bits': 32}, IntShape(32, unsigned=True)),
        ({'kind': 'list', 'elem': 'bool'}, ListShape(BoolShape())),
        ({'kind': 'array', 'elem': 'string', 'length': 3}, ArrayShape(StringShape(), 3)),
        (
            {'kind': 'struct', 'fields': [{'name': 'A', 'type': 'int'}, {'name': 'B', 'type': {'kind': 'bool'}}]},
            StructShape((Field('A', IntShape()), Field('B', BoolShape()))),
        ),
        ({'kind': 'struct'}, StructShape(())),
    ]
)
def test_type_spec(spec, shape) -> None:
    assert TypeSpec.model_validate(spec).to_shape() == shape


@pytest.mark.parametrize(
    ['spec', 'error'],
    [
        ({'kind': 'list'}, 'list requires elem'),
        ({'kind': 'array', 'elem': 'int'}, 'array requires a non-negative length'),
        ({'kind': 'named'}, 'named requires type_name'),
        ({'kind': 'int', 'bits': 24}, 'bits must be one of (0, 8, 16, 32, 64), got 24'),
        ({'kind': 'bool', 'bits': 8}, 'bool does not take bits'),
        ({'kind': 'int', 'fields': []}, 'int does not take fields'),
        ({'kind': 'struct', 'elem': 'int', 'length': 2}, 'struct does not take elem, length'),
        ({'kind': 'list', 'elem': 'int', 'type_name': 'Ints'}, 'list does not take type_name'),
        ({'kind': 'struct', 'type_name': 'my thing'}, "type name 'my thing' is not a valid identifier"),
        (
            {'kind': 'struct', 'fields': [{'name': 'A', 'type': 'int'}, {'name': 'A', 'type': 'bool'}]},
            "duplicate field 'A'",
        ),
    ]
)
def test_invalid_type_spec(spec, error) -> None:
    with pytest.raises(ValidationError) as e:
        TypeSpec.model_validate(spec)
    assert e.value.errors()[0]['msg'] == f'Value error, {error}'


def test_load_schema() -> None:
    assert load_schema(FIXTURES_DIR / 'widgets_schema.yml') == WIDGETS_FIELDS


def test_load_schema_extends() -> None:
    assert load_schema(FIXTURES_DIR / 'extends_schema.yml') == WIDGETS_FIELDS
    assert load_schema(FIXTURES_DIR / 'override_schema.yml') == (Field('Total', IntShape(16)),)


def test_load_schema_keeps_unsupported_shapes() -> None:
    assert load_schema(FIXTURES_DIR / 'unsupported_schema.yml') == (
        Field('Matrix', ArrayShape(IntShape(), 4)),
        Field('Owner', NamedShape('Widget')),
        Field('Ok', BoolShape()),
    )


@pytest.mark.parametrize(
    ['filename', 'error'],
    [
        ('missing_elem_schema.yml', 'list requires elem'),
        ('invalid_bits_schema.yml', 'string does not take bits'),
        ('duplicate_field_schema.yml', "duplicate field 'A'"),
        ('invalid_field_name_schema.yml', "name 'my field' is not a valid identifier"),
        ('duplicate_shape_schema.yml', "duplicate shape 'Ok'"),
        ('invalid_shape_name_schema.yml', "name 'type' is not a valid identifier"),
        ('irrelevant_key_schema.yml', 'int does not take fields'),
        ('unknown_key_schema.yml', 'methods'),
        ('unknown_file.yml', 'is not a file'),
    ]
)
def test_invalid_schema(filename, error) -> None:
    with pytest.raises(SchemaError) as e:
        load_schema(FIXTURES_DIR / filename)
    assert error in str(e.value)
    assert filename in str(e.value)
