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

from argparse import ArgumentParser, Namespace

from structlog import get_logger

logger = get_logger()


def create_parser() -> ArgumentParser:
    from rpcgen_cli.util import add_shapes_arguments, create_parser
    parser = create_parser()
    add_shapes_arguments(parser)
    return parser


def execute(args: Namespace) -> int:
    from rpcgen.codecs import resolve
    from rpcgen.exception import RpcgenError
    from rpcgen.shapes import pretty_shape
    from rpcgen_cli.util import load_shapes

    log = logger.new(source=args.schema or args.function)
    try:
        fields = load_shapes(args)
    except RpcgenError as e:
        log.error('invalid source', error=str(e))
        return 1

    failures = 0
    for field in fields:
        result = resolve(field.shape, field.name)
        if result.is_err():
            failures += 1
            log.error('unsupported shape', name=field.name, shape=pretty_shape(field.shape),
                      error=str(result.unwrap_err()))
        else:
            log.debug('shape ok', name=field.name, type=result.unwrap().type_label())

    if failures:
        log.error('schema check failed', failures=failures, shapes=len(fields))
        return 1

    log.info('schema ok', shapes=len(fields))
    return 0


def main() -> int:
    parser = create_parser()
    args = parser.parse_args()
    return execute(args)
