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

from itertools import count
from threading import Lock
from typing import Optional

from rpcgen.conf.get_settings import get_global_settings


class NameAllocator:
    """ Hands out fresh identifiers for generated code.

    Fragments are spliced into a shared enclosing scope, so every scratch variable a fragment declares must come from
    an allocator to avoid collisions between sibling and nested fragments. Names are `<prefix>_<n>`, with `n` taken
    from a monotonic counter shared by all prefixes, so no two calls on the same allocator ever return the same name.

    >>> names = NameAllocator()
    >>> names.new_name('member'), names.new_name('member'), names.new_name()
    ('member_1', 'member_2', 'var_3')
    """

    __slots__ = ('_counter', '_lock', '_default_prefix')

    def __init__(self, *, start: int = 1, default_prefix: Optional[str] = None) -> None:
        self._counter = count(start)
        self._lock = Lock()
        if default_prefix is None:
            default_prefix = get_global_settings().DEFAULT_NAME_PREFIX
        self._default_prefix = default_prefix

    def new_name(self, prefix: str = '') -> str:
        with self._lock:
            n = next(self._counter)
        return f'{prefix or self._default_prefix}_{n}'


_global_allocator: Optional[NameAllocator] = None
_global_allocator_lock = Lock()


def get_global_allocator() -> NameAllocator:
    """Returns the process-wide allocator, used when an emission call is not given one."""
    global _global_allocator
    with _global_allocator_lock:
        if _global_allocator is None:
            _global_allocator = NameAllocator()
        return _global_allocator
