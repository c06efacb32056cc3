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

from typing import Optional

from structlog import get_logger
from typing_extensions import assert_never

from rpcgen.codecs.bool_codec import BoolCodec
from rpcgen.codecs.codec import Codec, LeafCodec
from rpcgen.codecs.error_codec import ErrorCodec
from rpcgen.codecs.int_codec import IntCodec
from rpcgen.codecs.slice_codec import SliceCodec
from rpcgen.codecs.str_codec import StrCodec
from rpcgen.codecs.struct_codec import StructCodec
from rpcgen.conf.get_settings import get_global_settings
from rpcgen.conf.settings import GeneratorSettings
from rpcgen.exception import UnsupportedShapeError
from rpcgen.shapes import (
    ERROR_SHAPE,
    ArrayShape,
    BoolShape,
    IntShape,
    ListShape,
    NamedShape,
    Shape,
    StringShape,
    StructShape,
    pretty_shape,
)
from rpcgen.utils.result import as_result

__all__ = [
    'BoolCodec',
    'Codec',
    'ErrorCodec',
    'IntCodec',
    'LeafCodec',
    'SliceCodec',
    'StrCodec',
    'StructCodec',
    'make_codec',
    'resolve',
]

logger = get_logger()


def make_codec(shape: Shape, name: str, /, *, settings: Optional[GeneratorSettings] = None) -> Codec:
    """ Build the codec tree for a shape, raising UnsupportedShapeError if any part of it has no codec.

    Every occurrence of a shape gets its own codec, struct fields get one child each (in declaration order) and lists
    get a single child for their elements, which reuses the list's name.
    """
    if settings is None:
        settings = get_global_settings()

    codec: Codec
    match shape:
        case IntShape(bits=bits, unsigned=unsigned):
            codec = IntCodec(name, bits=bits, unsigned=unsigned, settings=settings)
        case StringShape():
            codec = StrCodec(name, settings=settings)
        case BoolShape():
            codec = BoolCodec(name, settings=settings)
        case StructShape(fields=fields, type_name=type_name):
            children = [make_codec(field.shape, field.name, settings=settings) for field in fields]
            codec = StructCodec(name, children, type_name=type_name, settings=settings)
        case ListShape(elem=elem):
            codec = SliceCodec(name, make_codec(elem, name, settings=settings), settings=settings)
        case ArrayShape():
            raise UnsupportedShapeError(
                f'fixed-size arrays are not supported, use a list instead: {pretty_shape(shape)}',
                shape=shape,
                name=name,
            )
        case NamedShape():
            if shape != ERROR_SHAPE:
                raise UnsupportedShapeError(
                    f'no support for named types, use inline definitions: {pretty_shape(shape)}',
                    shape=shape,
                    name=name,
                )
            codec = ErrorCodec(name or settings.FAILURE_NAME, settings=settings)
        case _:
            assert_never(shape)

    logger.debug('codec resolved', name=name, type=codec.type_label(), codec=type(codec).__name__)
    return codec


@as_result(UnsupportedShapeError)
def resolve(shape: Shape, name: str, /, *, settings: Optional[GeneratorSettings] = None) -> Codec:
    """ Like `make_codec`, but returns `Err(UnsupportedShapeError)` instead of raising.

    It is up to the caller to decide whether an unsupported shape aborts the whole run or only skips one declaration.
    """
    return make_codec(shape, name, settings=settings)
