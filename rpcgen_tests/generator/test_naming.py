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

import threading

from rpcgen.conf.get_settings import get_global_settings
from rpcgen.naming import NameAllocator, get_global_allocator


def test_prefix_and_counter() -> None:
    names = NameAllocator()
    assert names.new_name('member') == 'member_1'
    assert names.new_name('member') == 'member_2'
    assert names.new_name('value') == 'value_3'


def test_default_prefix() -> None:
    names = NameAllocator()
    assert names.new_name() == f'{get_global_settings().DEFAULT_NAME_PREFIX}_1'

    names = NameAllocator(start=10, default_prefix='tmp')
    assert names.new_name() == 'tmp_10'
    assert names.new_name('') == 'tmp_11'


def test_independent_allocators() -> None:
    first = NameAllocator()
    second = NameAllocator()
    assert first.new_name('a') == second.new_name('a') == 'a_1'


def test_global_allocator() -> None:
    names = get_global_allocator()
    assert get_global_allocator() is names
    assert names.new_name('g') != names.new_name('g')


def test_unique_across_threads() -> None:
    names = NameAllocator()
    results: list[list[str]] = [[] for _ in range(8)]

    def allocate(out: list[str]) -> None:
        for _ in range(500):
            out.append(names.new_name('t'))

    threads = [threading.Thread(target=allocate, args=(out,)) for out in results]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    allocated = [name for out in results for name in out]
    assert len(allocated) == 8 * 500
    assert len(set(allocated)) == len(allocated)
