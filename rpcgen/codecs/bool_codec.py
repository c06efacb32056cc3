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
from rpcgen.naming import NameAllocator
from rpcgen.render import render


class BoolCodec(LeafCodec):
    """ Represents `bool` values, carried as "0"/"1" text in a `boolean` element.
    """

    __slots__ = ()

    @override
    def type_label(self) -> str:
        return 'bool'

    @override
    def _extract_func(self) -> str:
        return 'XPathValueGetBool'

    @override
    def _encode(self, element: str, value_var: str, error_var: str, /, *, names: NameAllocator) -> str:
        return render(
            '''
            ${temp} := "0"
            if ${value} {
                ${temp} = "1"
            }
            ${element}.CreateElement("boolean").SetText(${temp})
            ''',
            temp=names.new_name('boolstr'),
            value=value_var,
            element=element,
        )
