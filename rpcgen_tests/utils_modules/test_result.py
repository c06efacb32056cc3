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

from rpcgen.utils.result import Err, Ok, UnwrapError, as_result


def test_ok() -> None:
    result = Ok(1)
    assert result.is_ok() and not result.is_err()
    assert result.unwrap() == 1
    assert result.unwrap_or_raise() == 1
    assert result == Ok(1)
    assert repr(result) == 'Ok(1)'

    with pytest.raises(UnwrapError):
        result.unwrap_err()


def test_err() -> None:
    error = ValueError('bad')
    result = Err(error)
    assert result.is_err() and not result.is_ok()
    assert result.unwrap_err() is error

    with pytest.raises(UnwrapError) as e:
        result.unwrap()
    assert e.value.__cause__ is error

    with pytest.raises(ValueError) as e2:
        result.unwrap_or_raise()
    assert e2.value is error


def test_as_result() -> None:
    @as_result(ValueError)
    def parse(text: str) -> int:
        return int(text)

    assert parse('12') == Ok(12)
    result = parse('twelve')
    assert result.is_err()
    assert isinstance(result.unwrap_err(), ValueError)

    # other exceptions are not captured
    with pytest.raises(TypeError):
        parse(None)  # type: ignore[arg-type]

    with pytest.raises(TypeError):
        as_result()
