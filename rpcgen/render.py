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

import re
from string import Template
from textwrap import dedent

from rpcgen.exception import RenderError

# a placeholder that is alone on its line, it receives a whole sub-fragment
_STANDALONE_RE = re.compile(r'^(?P<indent>[ \t]*)\$\{(?P<name>[_a-zA-Z][_a-zA-Z0-9]*)\}[ \t]*$')


def render(template: str, /, **bindings: object) -> str:
    """ Render a fragment template, substituting `${name}` placeholders with the given bindings.

    The template is dedented and stripped of surrounding blank lines. A placeholder that is alone on its line is
    treated as a sub-fragment: every line of the bound text is indented to the placeholder's column, and an empty
    sub-fragment removes the line altogether. Any other placeholder is substituted inline.

    >>> print(render('''
    ...     for _, v := range ${items} {
    ...         ${body}
    ...     }
    ... ''', items='xs', body='a := v\\nb := a'))
    for _, v := range xs {
        a := v
        b := a
    }
    >>> render('x\\n    ${empty}\\ny', empty='')
    'x\\ny'
    """
    lines: list[str] = []
    for line in dedent(template).strip('\n').splitlines():
        match = _STANDALONE_RE.match(line)
        if match is not None:
            fragment = str(_lookup(bindings, match['name']))
            indent = match['indent']
            lines.extend(indent + sub_line if sub_line.strip() else '' for sub_line in fragment.splitlines())
            continue
        try:
            lines.append(Template(line).substitute(bindings))
        except KeyError as e:
            raise RenderError(f'missing binding {e.args[0]!r} in template line {line.strip()!r}') from e
        except ValueError as e:
            raise RenderError(f'invalid placeholder in template line {line.strip()!r}') from e
    return '\n'.join(lines)


def _lookup(bindings: dict[str, object], name: str) -> object:
    try:
        return bindings[name]
    except KeyError as e:
        raise RenderError(f'missing binding {name!r}') from e
