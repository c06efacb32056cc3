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

from rpcgen_cli.util import LoggingOptions, LoggingOutput, process_logging_options, process_logging_output


@pytest.mark.parametrize(
    ['argv', 'expected', 'remaining'],
    [
        (['rpcgen-cli generate', '--schema', 'a.yml'], LoggingOutput.PRETTY,
         ['rpcgen-cli generate', '--schema', 'a.yml']),
        (['rpcgen-cli generate', '--json-logs', '--schema', 'a.yml'], LoggingOutput.JSON,
         ['rpcgen-cli generate', '--schema', 'a.yml']),
        (['rpcgen-cli generate', '--disable-logs'], LoggingOutput.NULL, ['rpcgen-cli generate']),
    ]
)
def test_process_logging_output(argv: list[str], expected: LoggingOutput, remaining: list[str]) -> None:
    assert process_logging_output(argv) == expected
    assert argv == remaining


def test_process_logging_output_exclusive() -> None:
    with pytest.raises(SystemExit):
        process_logging_output(['rpcgen-cli generate', '--json-logs', '--disable-logs'])


def test_process_logging_options() -> None:
    argv = ['rpcgen-cli generate', '--debug', '--schema', 'a.yml']
    assert process_logging_options(argv) == LoggingOptions(debug=True)
    assert argv == ['rpcgen-cli generate', '--schema', 'a.yml']

    assert process_logging_options(argv) == LoggingOptions(debug=False)
