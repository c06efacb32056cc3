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

from types import UnionType
from typing import get_args as _typing_get_args, get_origin as _typing_get_origin


def get_origin(t: type | UnionType, /) -> type | None:
    """Like typing.get_origin, but also unwraps NewType aliases of generic types."""
    while (super_type := getattr(t, '__supertype__', None)) is not None:
        t = super_type
    return _typing_get_origin(t)


def get_args(t: type | UnionType, /) -> tuple[type, ...]:
    """Like typing.get_args, but also unwraps NewType aliases of generic types."""
    while (super_type := getattr(t, '__supertype__', None)) is not None:
        t = super_type
    return _typing_get_args(t)
