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

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, final

from rpcgen.conf.settings import GeneratorSettings
from rpcgen.naming import NameAllocator, get_global_allocator
from rpcgen.render import render


class Codec(ABC):
    """ This class models how one occurrence of a shape is decoded from and encoded to a wire document.

    Each codec emits two fragments of generated code: `decode` reads a value out of a wire element, `encode` appends
    the wire representation of a value to a wire element. Composite codecs (structs and slices) own child codecs and
    build their fragments by calling their children's `decode`/`encode` and splicing the result into their own
    template.

    Codecs are immutable once built by the resolver, the same tree can be used for any number of emissions.
    """

    # XXX: subclasses must extend this if they need any properties
    __slots__ = ('_name', '_settings')

    _name: str
    _settings: GeneratorSettings

    def __init__(self, name: str, /, *, settings: GeneratorSettings) -> None:
        self._name = name
        self._settings = settings

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self._name!r}, {self.type_label()!r})'

    @final
    def name(self) -> str:
        """ The parameter or field name this codec stands for.

        Struct codecs use it to match members by name, leaf codecs pass it to the runtime extraction helpers.
        """
        return self._name

    @abstractmethod
    def type_label(self) -> str:
        """ The type as it is written in generated declarations, for instance `int32` or `[]Widget`."""
        raise NotImplementedError

    @property
    def children(self) -> tuple[Codec, ...]:
        """ Child codecs, in emission order. Leaves have none."""
        return ()

    @final
    def depth(self) -> int:
        """ Depth of the codec tree rooted at this codec, a leaf has depth 1."""
        return 1 + max((child.depth() for child in self.children), default=0)

    @final
    def decode(self, element: str, result_var: str, error_var: str, /, *, names: Optional[NameAllocator] = None) -> str:
        """ Emit a fragment that declares `result_var` with the value read from the wire element `element`.

        On failure the fragment assigns `error_var` (which must already be declared) and returns from the enclosing
        generated function.
        """
        # XXX: subclasses must implement Codec._decode, not Codec.decode
        return self._decode(element, result_var, error_var, names=names or get_global_allocator())

    @final
    def encode(self, element: str, value_var: str, error_var: str, /, *, names: Optional[NameAllocator] = None) -> str:
        """ Emit a fragment that appends the wire representation of `value_var` as a child of `element`.
        """
        # XXX: subclasses must implement Codec._encode, not Codec.encode
        return self._encode(element, value_var, error_var, names=names or get_global_allocator())

    @abstractmethod
    def _decode(self, element: str, result_var: str, error_var: str, /, *, names: NameAllocator) -> str:
        raise NotImplementedError

    @abstractmethod
    def _encode(self, element: str, value_var: str, error_var: str, /, *, names: NameAllocator) -> str:
        raise NotImplementedError

    def _runtime(self, symbol: str) -> str:
        """ Qualified name of a symbol from the runtime package used by generated code."""
        return f'{self._settings.RUNTIME_PACKAGE}.{symbol}'


class LeafCodec(Codec, ABC):
    """ Base class for scalar codecs, they all decode through a typed runtime extraction helper.
    """

    __slots__ = ()

    @abstractmethod
    def _extract_func(self) -> str:
        """ Name of the runtime helper that extracts this scalar, e.g. `XPathValueGetString`."""
        raise NotImplementedError

    def _decode(self, element: str, result_var: str, error_var: str, /, *, names: NameAllocator) -> str:
        return render(
            '''
            var ${result} ${type}
            if ${result}, ${err} = ${extract}(${element}, ${name}); ${err} != nil {
                return
            }
            ''',
            result=result_var,
            type=self.type_label(),
            err=error_var,
            extract=self._runtime(self._extract_func()),
            element=element,
            name=go_string(self._name),
        )


def go_string(text: str) -> str:
    """ Quote text as a Go interpreted string literal.

    >>> go_string('faultCode')
    '"faultCode"'
    >>> go_string('a "b"')
    '"a \\\\"b\\\\""'
    """
    return '"' + ''.join(_go_escape(char) for char in text) + '"'


# escapes with a dedicated sequence in Go interpreted string literals
_GO_ESCAPES = {
    '\\': '\\\\',
    '"': '\\"',
    '\a': '\\a',
    '\b': '\\b',
    '\f': '\\f',
    '\n': '\\n',
    '\r': '\\r',
    '\t': '\\t',
    '\v': '\\v',
}


def _go_escape(char: str) -> str:
    if char in _GO_ESCAPES:
        return _GO_ESCAPES[char]
    if char.isprintable():
        return char
    code = ord(char)
    if code < 0x80:
        return f'\\x{code:02x}'
    if code <= 0xffff:
        return f'\\u{code:04x}'
    return f'\\U{code:08x}'
