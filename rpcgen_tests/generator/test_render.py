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

import pytest

from rpcgen.exception import RenderError
from rpcgen.render import render


def test_inline_substitution() -> None:
    assert render('${a} := ${b}', a='x', b='y') == 'x := y'


def test_dedent_and_strip() -> None:
    result = render(
        '''
        if ok {
            return
        }
        '''
    )
    assert result == 'if ok {\n    return\n}'


def test_standalone_fragment_is_indented() -> None:
    result = render(
        '''
        for {
            ${body}
        }
        ''',
        body='a := 1\nif a {\n    b()\n}',
    )
    assert result.splitlines() == [
        'for {',
        '    a := 1',
        '    if a {',
        '        b()',
        '    }',
        '}',
    ]


def test_empty_fragment_removes_line() -> None:
    assert render('a\n    ${body}\nb', body='') == 'a\nb'


def test_blank_lines_are_not_indented() -> None:
    assert render('x\n  ${body}', body='a\n\nb') == 'x\n  a\n\n  b'


def test_fragment_is_not_substituted_again() -> None:
    # dollar signs inside bound values are left alone
    assert render('${a}', a='${b}') == '${b}'
    assert render('x = ${a}', a='$y') == 'x = $y'


def test_missing_binding() -> None:
    with pytest.raises(RenderError) as e:
        render('${a} := ${b}', a='x')
    assert "missing binding 'b'" in str(e.value)

    with pytest.raises(RenderError):
        render('    ${body}')


def test_invalid_placeholder() -> None:
    with pytest.raises(RenderError) as e:
        render('cost := $5')
    assert 'invalid placeholder' in str(e.value)
