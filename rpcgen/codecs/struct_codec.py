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

from typing import Iterable, Optional

from typing_extensions import override

from rpcgen.codecs.codec import Codec, go_string
from rpcgen.conf.settings import GeneratorSettings
from rpcgen.naming import NameAllocator
from rpcgen.render import render


class StructCodec(Codec):
    """ Represents structs, carried as a `struct` element with one `member` (`name` + `value`) per field.

    Fields are kept in declaration order, which is the order members are encoded in and the order of the `case`
    clauses when decoding. Decoding dispatches on the member name with a `switch`, members whose name matches no field
    are skipped.
    """

    __slots__ = ('_type_name', '_fields')

    _type_name: Optional[str]
    _fields: tuple[Codec, ...]

    def __init__(
        self,
        name: str,
        fields: Iterable[Codec],
        /,
        *,
        type_name: Optional[str] = None,
        settings: GeneratorSettings,
    ) -> None:
        super().__init__(name, settings=settings)
        self._type_name = type_name
        # XXX: always a tuple, an empty struct has an empty tuple of fields
        self._fields = tuple(fields)

    @property
    @override
    def children(self) -> tuple[Codec, ...]:
        return self._fields

    @override
    def type_label(self) -> str:
        if self._type_name is not None:
            return self._type_name
        # inline declaration, as in `struct{A int; B string}`
        return 'struct{' + '; '.join(f'{field.name()} {field.type_label()}' for field in self._fields) + '}'

    @override
    def _decode(self, element: str, result_var: str, error_var: str, /, *, names: NameAllocator) -> str:
        value_elem = names.new_name('value_elem')
        cases = '\n'.join(filter(None, (
            self._decode_case(field, result_var, value_elem, error_var, names) for field in self._fields
        )))
        return render(
            '''
            ${result} := ${type}{}
            for _, ${member} := range ${element}.FindElements("struct/member") {
                var ${name_elem} *etree.Element
                if ${name_elem} = ${member}.FindElement("name"); ${name_elem} == nil {
                    ${err} = errors.New("struct member without name")
                    return
                }
                ${member_name} := ${name_elem}.Text()
                var ${value_elem} *etree.Element
                if ${value_elem} = ${member}.FindElement("value"); ${value_elem} == nil {
                    ${err} = errors.New("struct member without value")
                    return
                }
                switch ${member_name} {
                ${cases}
                }
            }
            ''',
            result=result_var,
            type=self.type_label(),
            member=names.new_name('member'),
            element=element,
            name_elem=names.new_name('name_elem'),
            err=error_var,
            member_name=names.new_name('name'),
            value_elem=value_elem,
            cases=cases,
        )

    def _decode_case(self, field: Codec, result_var: str, value_elem: str, error_var: str,
                     names: NameAllocator) -> str:
        temp = names.new_name('field')
        decode = field.decode(value_elem, temp, error_var, names=names)
        if not decode:
            # fields that cannot be decoded (errors) are left out, their members are skipped like unknown ones
            return ''
        return render(
            '''
            case ${name}:
                ${decode}
                ${result}.${field} = ${temp}
            ''',
            name=go_string(field.name()),
            decode=decode,
            result=result_var,
            field=field.name(),
            temp=temp,
        )

    @override
    def _encode(self, element: str, value_var: str, error_var: str, /, *, names: NameAllocator) -> str:
        if not self._fields:
            return render('${element}.CreateElement("struct")', element=element)
        struct_elem = names.new_name('struct')
        members = '\n'.join(self._encode_member(field, struct_elem, value_var, error_var, names)
                            for field in self._fields)
        return render(
            '''
            ${struct} := ${element}.CreateElement("struct")
            ${members}
            ''',
            struct=struct_elem,
            element=element,
            members=members,
        )

    def _encode_member(self, field: Codec, struct_elem: str, value_var: str, error_var: str,
                       names: NameAllocator) -> str:
        member = names.new_name('member')
        member_value = names.new_name('member_value')
        return render(
            '''
            ${member} := ${struct}.CreateElement("member")
            ${member}.CreateElement("name").SetText(${name})
            ${member_value} := ${member}.CreateElement("value")
            ${encode}
            ''',
            member=member,
            struct=struct_elem,
            name=go_string(field.name()),
            member_value=member_value,
            encode=field.encode(member_value, f'{value_var}.{field.name()}', error_var, names=names),
        )
