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

import sys
from argparse import ArgumentParser, Namespace
from typing import Iterable, Optional

from structlog import get_logger

from rpcgen.naming import NameAllocator
from rpcgen.shapes import Field

logger = get_logger()


def create_parser() -> ArgumentParser:
    from rpcgen_cli.util import add_shapes_arguments, create_parser
    parser = create_parser()
    add_shapes_arguments(parser)
    parser.add_argument('--element', default='element', help='Name of the element variable in generated code')
    parser.add_argument('--error-var', default='err', help='Name of the error variable in generated code')
    parser.add_argument('--only', choices=['decode', 'encode'], help='Only generate one direction')
    parser.add_argument('--output', help='Write the generated code to this file instead of stdout')
    return parser


def generate(fields: Iterable[Field], *, element: str = 'element', error_var: str = 'err',
             only: Optional[str] = None, names: Optional[NameAllocator] = None) -> str:
    """ Generate the decode and encode fragments of every field, in order.

    Raises `UnsupportedShapeError` on the first field that cannot be generated.
    """
    from rpcgen.codecs import resolve

    if names is None:
        names = NameAllocator()

    chunks: list[str] = []
    for field in fields:
        codec = resolve(field.shape, field.name).unwrap_or_raise()
        if only in (None, 'decode'):
            decode = codec.decode(element, field.name, error_var, names=names)
            # errors have nothing to decode
            if decode:
                chunks.append(f'// decode {field.name} ({codec.type_label()})\n{decode}')
        if only in (None, 'encode'):
            encode = codec.encode(element, field.name, error_var, names=names)
            chunks.append(f'// encode {field.name} ({codec.type_label()})\n{encode}')
    return '\n'.join(chunks) + '\n'


def execute(args: Namespace) -> int:
    from rpcgen.exception import RpcgenError
    from rpcgen_cli.util import load_shapes

    log = logger.new(source=args.schema or args.function)
    try:
        fields = load_shapes(args)
        code = generate(fields, element=args.element, error_var=args.error_var, only=args.only)
    except RpcgenError as e:
        log.error('generation failed', error=str(e))
        return 1

    # XXX: the output file is only opened once generation succeeded, a failed run leaves it untouched
    if args.output is None:
        sys.stdout.write(code)
        sys.stdout.flush()
    else:
        with open(args.output, 'w', encoding='UTF-8') as fp:
            fp.write(code)
    log.info('code generated', shapes=len(fields), output=args.output or '<stdout>')
    return 0


def main() -> int:
    parser = create_parser()
    args = parser.parse_args()
    return execute(args)
