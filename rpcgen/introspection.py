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
Build shapes out of Python type annotations.

This is the annotation-based front end of the generator: a declaration written with Python types (function parameters
or dataclass fields) is turned into the `Shape` that the resolver consumes. It never rejects a type for being
unsupported by the wire format, such types become `ArrayShape` or `NamedShape` and the resolver reports them.
"""

import importlib
import inspect
from dataclasses import fields, is_dataclass
from typing import Any, Callable, Mapping, get_type_hints

from structlog import get_logger

from rpcgen.exception import IntrospectionError
from rpcgen.shapes import (
    ERROR_SHAPE,
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
from rpcgen.types import Int8, Int16, Int32, Int64, Uint, Uint8, Uint16, Uint32, Uint64
from rpcgen.utils.typing import get_args, get_origin

logger = get_logger()

# Mapping between scalar types and shapes, checked by identity before anything else.
SCALAR_TYPE_TO_SHAPE_MAP: Mapping[Any, Shape] = {
    # XXX: bool must be matched by identity, it is a subclass of int
    bool: BoolShape(),
    str: StringShape(),
    int: IntShape(),
    Int8: IntShape(8),
    Int16: IntShape(16),
    Int32: IntShape(32),
    Int64: IntShape(64),
    Uint: IntShape(0, unsigned=True),
    Uint8: IntShape(8, unsigned=True),
    Uint16: IntShape(16, unsigned=True),
    Uint32: IntShape(32, unsigned=True),
    Uint64: IntShape(64, unsigned=True),
}


def shape_from_type(type_: Any, /) -> Shape:
    """ Build the shape that describes the given type annotation.

    >>> shape_from_type(list[Int32])
    ListShape(elem=IntShape(bits=32, unsigned=False))
    >>> shape_from_type(tuple[str, ...])
    ListShape(elem=StringShape())
    >>> shape_from_type(tuple[bool, bool])
    ArrayShape(elem=BoolShape(), length=2)
    >>> shape_from_type(Exception)
    NamedShape(type_name='error')
    >>> shape_from_type(float)
    NamedShape(type_name='float')
    """
    return _shape_from_type(type_, frozenset())


def _shape_from_type(type_: Any, resolving: frozenset[type]) -> Shape:
    # `resolving` holds the dataclasses being expanded on the current path, to cut self references
    if isinstance(type_, str):
        raise NotImplementedError('string annotations are not currently supported')

    if type_ in SCALAR_TYPE_TO_SHAPE_MAP:
        return SCALAR_TYPE_TO_SHAPE_MAP[type_]

    # XXX: other NewTypes are used as their base type, so `UserId = NewType('UserId', int)` is an int
    supertype = getattr(type_, '__supertype__', None)
    if supertype is not None:
        logger.debug('newtype replaced', old=type_.__name__, new=getattr(supertype, '__name__', str(supertype)))
        return _shape_from_type(supertype, resolving)

    origin = get_origin(type_) or type_

    if origin is list:
        return ListShape(_get_single_arg(type_, resolving))

    if origin is tuple:
        args = get_args(type_)
        if len(args) == 2 and args[1] is Ellipsis:
            return ListShape(_shape_from_type(args[0], resolving))
        if not args:
            raise TypeError('expected tuple[<type>, ...] or tuple[<type>, <type>, ...]')
        if len(set(args)) != 1:
            return NamedShape(str(type_))
        return ArrayShape(_shape_from_type(args[0], resolving), len(args))

    if isinstance(origin, type) and is_dataclass(origin):
        if origin in resolving:
            # XXX: recursive types have no inline definition, leave it as a named type for the resolver to reject
            logger.debug('recursive dataclass', name=origin.__name__)
            return NamedShape(origin.__name__)
        resolving = resolving | {origin}
        # XXX: get_type_hints resolves string annotations, `fields` gives the declaration order
        hints = get_type_hints(origin)
        return StructShape(
            tuple(Field(field.name, _shape_from_type(hints[field.name], resolving)) for field in fields(origin)),
            type_name=origin.__name__,
        )

    # XXX: only `Exception` itself is the failure marker, its subclasses are named types like any other class
    if origin is Exception:
        return ERROR_SHAPE

    if isinstance(origin, type):
        return NamedShape(origin.__name__)

    return NamedShape(str(type_))


def _get_single_arg(type_: Any, resolving: frozenset[type]) -> Shape:
    args = get_args(type_)
    if len(args) != 1:
        raise TypeError(f'expected {getattr(type_, "__name__", type_)}[<type>]')
    arg, = args
    return _shape_from_type(arg, resolving)


def signature_fields(func: Callable[..., Any], /) -> tuple[Field, ...]:
    """ The fields of a function's parameters, in declaration order.

    Every parameter must be annotated, `self` and `cls` are skipped for methods accessed through the class.

    >>> def add(a: int, b: Int32) -> int: ...
    >>> signature_fields(add)
    (Field(name='a', shape=IntShape(bits=0, unsigned=False)), Field(name='b', shape=IntShape(bits=32, unsigned=False)))
    """
    signature = inspect.signature(func, eval_str=True)
    result: list[Field] = []
    for param in signature.parameters.values():
        if param.name in ('self', 'cls'):
            continue
        if param.annotation is inspect.Parameter.empty:
            raise TypeError(f'missing annotation for parameter {param.name!r}')
        result.append(Field(param.name, shape_from_type(param.annotation)))
    return tuple(result)


def load_callable(path: str, /) -> Callable[..., Any]:
    """ Import a callable given as `<module>:<qualified name>`, for instance `myapi.service:Service.get_widget`.
    """
    module_name, sep, qualname = path.partition(':')
    if not sep or not module_name or not qualname:
        raise IntrospectionError(f'expected <module>:<callable>, got {path!r}')

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise IntrospectionError(f'cannot import {module_name!r}: {e}') from e

    for attr in qualname.split('.'):
        try:
            obj = getattr(obj, attr)
        except AttributeError as e:
            raise IntrospectionError(f'{module_name!r} has no attribute {qualname!r}') from e

    if not callable(obj):
        raise IntrospectionError(f'{path!r} is not callable')
    return obj


def callable_fields(path: str, /) -> tuple[Field, ...]:
    """ The fields of the parameters of the callable at `path` (see `load_callable`)."""
    func = load_callable(path)
    try:
        result = signature_fields(func)
    except (TypeError, ValueError, NameError, NotImplementedError) as e:
        raise IntrospectionError(f'cannot describe {path!r}: {e}') from e
    logger.debug('callable loaded', path=path, shapes=len(result))
    return result
