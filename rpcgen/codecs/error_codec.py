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

from rpcgen.codecs.codec import Codec
from rpcgen.naming import NameAllocator
from rpcgen.render import render


class ErrorCodec(Codec):
    """ Represents the `error` failure marker.

    Errors only ever flow outwards: there is nothing to decode, and encoding produces a fault envelope, a `fault`
    element holding a struct with a `faultCode` member followed by a `faultString` member.
    """

    __slots__ = ()

    @override
    def type_label(self) -> str:
        return 'error'

    @override
    def _decode(self, element: str, result_var: str, error_var: str, /, *, names: NameAllocator) -> str:
        return ''

    @override
    def _encode(self, element: str, value_var: str, error_var: str, /, *, names: NameAllocator) -> str:
        return render(
            '''
            ${fault} := ${element}.CreateElement("fault")
            ${code} := ${default_code}
            if ${cast}, ${ok} := ${value}.(${error_interface}); ${ok} {
                ${code} = ${cast}.Code()
            }
            ${struct} := ${fault}.CreateElement("value").CreateElement("struct")
            ${code_member} := ${struct}.CreateElement("member")
            ${code_member}.CreateElement("name").SetText("faultCode")
            ${code_member}.CreateElement("value").CreateElement("int").SetText(strconv.Itoa(${code}))
            ${string_member} := ${struct}.CreateElement("member")
            ${string_member}.CreateElement("name").SetText("faultString")
            ${string_member}.CreateElement("value").CreateElement("string").SetText(${value}.Error())
            ''',
            fault=names.new_name('fault'),
            element=element,
            code=names.new_name('code'),
            default_code=self._settings.DEFAULT_FAULT_CODE,
            cast=names.new_name('coded'),
            ok=names.new_name('ok'),
            value=value_var,
            error_interface=self._runtime(self._settings.ERROR_INTERFACE),
            struct=names.new_name('struct'),
            code_member=names.new_name('member'),
            string_member=names.new_name('member'),
        )
