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

import re

from typing_extensions import override

from rpcgen.codecs.codec import Codec
from rpcgen.conf.settings import GeneratorSettings
from rpcgen.naming import NameAllocator
from rpcgen.render import render


class SliceCodec(Codec):
    """ Represents homogeneous lists, carried as `array/data` with one `value` element per item.

    The element codec shares the slice's name, since list elements have no name of their own. Items are decoded and
    encoded in document order.
    """

    __slots__ = ('_item',)

    _item: Codec

    def __init__(self, name: str, item_codec: Codec, /, *, settings: GeneratorSettings) -> None:
        super().__init__(name, settings=settings)
        self._item = item_codec

    @property
    @override
    def children(self) -> tuple[Codec, ...]:
        return (self._item,)

    @override
    def type_label(self) -> str:
        return '[]' + self._item.type_label()

    @override
    def _decode(self, element: str, result_var: str, error_var: str, /, *, names: NameAllocator) -> str:
        value_elem = names.new_name('value_elem')
        item = names.new_name('item')
        decode_item = self._item.decode(value_elem, item, error_var, names=names)
        if not decode_item:
            # items that cannot be decoded (errors) always produce an empty slice
            return render('${result} := ${type}{}', result=result_var, type=self.type_label())
        return render(
            '''
            ${result} := ${type}{}
            for _, ${value_elem} := range ${element}.FindElements("array/data/value") {
                ${decode_item}
                ${result} = append(${result}, ${item})
            }
            ''',
            result=result_var,
            type=self.type_label(),
            value_elem=value_elem,
            element=element,
            decode_item=decode_item,
            item=item,
        )

    @override
    def _encode(self, element: str, value_var: str, error_var: str, /, *, names: NameAllocator) -> str:
        data = names.new_name('array_data')
        item = names.new_name('item')
        value_elem = names.new_name('value_elem')
        encode_item = self._item.encode(value_elem, item, error_var, names=names)
        # items whose encoding ignores the value (empty structs) must not declare the loop variable
        loop = f'for _, {item} := range' if re.search(rf'\b{item}\b', encode_item) else 'for range'
        return render(
            '''
            ${data} := ${element}.CreateElement("array").CreateElement("data")
            ${loop} ${value} {
                ${value_elem} := ${data}.CreateElement("value")
                ${encode_item}
            }
            ''',
            data=data,
            element=element,
            loop=loop,
            value=value_var,
            value_elem=value_elem,
            encode_item=encode_item,
        )
