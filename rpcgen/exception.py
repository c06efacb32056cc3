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

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rpcgen.shapes import Shape


class RpcgenError(Exception):
    """Base class for exceptions in rpcgen."""
    pass


class UnsupportedShapeError(RpcgenError):
    """Raised when a shape has no codec that can represent it.

    This is a configuration error on the caller's side (the declaration uses a type that the wire format cannot carry),
    it is never recovered from during generation of the offending shape.
    """

    def __init__(self, message: str, *, shape: 'Shape', name: str) -> None:
        super().__init__(message)
        self.shape = shape
        self.name = name


class RenderError(RpcgenError):
    """Raised when a fragment template cannot be rendered with the given bindings."""
    pass


class SchemaError(RpcgenError):
    """Raised when a schema document cannot be turned into shapes."""
    pass


class IntrospectionError(RpcgenError):
    """Raised when a callable cannot be loaded or described through its annotations."""
    pass
