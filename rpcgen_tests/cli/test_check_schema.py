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

from pathlib import Path

from structlog.testing import capture_logs

from rpcgen_cli.check_schema import create_parser, execute

FIXTURES_DIR = Path(__file__).parent.parent / 'fixtures'


def _check(filename: str) -> tuple[int, list]:
    return _run('--schema', str(FIXTURES_DIR / filename))


def _run(*params: str) -> tuple[int, list]:
    args = create_parser().parse_args(list(params))
    with capture_logs() as logs:
        code = execute(args)
    return code, logs


def test_check_valid_schema() -> None:
    code, logs = _check('widgets_schema.yml')
    assert code == 0
    assert logs[-1]['event'] == 'schema ok'
    assert logs[-1]['shapes'] == 4


def test_check_unsupported_schema() -> None:
    code, logs = _check('unsupported_schema.yml')
    assert code == 1
    unsupported = [log for log in logs if log['event'] == 'unsupported shape']
    assert [(log['name'], log['shape']) for log in unsupported] == [('Matrix', 'array[4]int'), ('Owner', 'Widget')]
    assert logs[-1]['event'] == 'schema check failed'
    assert logs[-1]['failures'] == 2


def test_check_invalid_schema() -> None:
    code, logs = _check('invalid_bits_schema.yml')
    assert code == 1
    assert logs[-1]['event'] == 'invalid source'


def test_check_function() -> None:
    code, logs = _run('--function', 'rpcgen.naming:NameAllocator.new_name')
    assert code == 0
    assert logs[-1]['event'] == 'schema ok'
    assert logs[-1]['shapes'] == 1


def test_check_unsupported_function() -> None:
    # `default_prefix: Optional[str]` has no wire representation
    code, logs = _run('--function', 'rpcgen.naming:NameAllocator')
    assert code == 1
    unsupported = [log for log in logs if log['event'] == 'unsupported shape']
    assert [log['name'] for log in unsupported] == ['default_prefix']
    assert logs[-1]['event'] == 'schema check failed'
    assert logs[-1]['shapes'] == 2


def test_check_bad_function() -> None:
    code, logs = _run('--function', 'rpcgen.naming')
    assert code == 1
    assert logs[-1]['event'] == 'invalid source'
    assert 'expected <module>:<callable>' in logs[-1]['error']
