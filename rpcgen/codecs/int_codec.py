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

from typing_extensions import override

from rpcgen.codecs.codec import LeafCodec
from rpcgen.conf.settings import GeneratorSettings
from rpcgen.naming import NameAllocator
from rpcgen.render import render
from rpcgen.shapes import INT_BIT_SIZES


class IntCodec(LeafCodec):
    """ Represents integers of every width and signedness, carried as decimal text in an `int` element.

    The width only affects the declared type and the extraction helper, `bits=0` stands for the natural machine width
    and has no suffix in the type label.
    """

    __slots__ = ('_bits', '_unsigned')

    _bits: int
    _unsigned: bool

    def __init__(self, name: str, /, *, bits: int, unsigned: bool, settings: GeneratorSettings) -> None:
        if bits not in INT_BIT_SIZES:
            raise ValueError(f'invalid int bit size: {bits}')
        super().__init__(name, settings=settings)
        self._bits = bits
        self._unsigned = unsigned

    @override
    def type_label(self) -> str:
        result = 'int'

        if self._unsigned:
            result = 'u' + result

        if self._bits > 0:
            result += str(self._bits)

        return result

    @override
    def _extract_func(self) -> str:
        # XPathValueGetInt, XPathValueGetInt8, ..., XPathValueGetUint64
        label = self.type_label()
        return 'XPathValueGet' + label[0].upper() + label[1:]

    @override
    def _encode(self, element: str, value_var: str, error_var: str, /, *, names: NameAllocator) -> str:
        if self._unsigned:
            text = f'strconv.FormatUint(uint64({value_var}), 10)'
        else:
            text = f'strconv.FormatInt(int64({value_var}), 10)'
        return render('${element}.CreateElement("int").SetText(${text})', element=element, text=text)
