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

from pydantic import field_validator

from rpcgen.utils.pydantic import BaseModel
from rpcgen.utils.yaml import model_from_extended_yaml


class GeneratorSettings(BaseModel):
    # Go package that provides the XPathValueGet* helpers and the Error interface used by generated code
    RUNTIME_PACKAGE: str = 'xmlrpc'

    # Interface (inside RUNTIME_PACKAGE) that errors implement to carry their own fault code
    ERROR_INTERFACE: str = 'Error'

    # faultCode used when an error does not implement ERROR_INTERFACE
    DEFAULT_FAULT_CODE: int = 500

    # Prefix of scratch identifiers allocated without an explicit prefix
    DEFAULT_NAME_PREFIX: str = 'var'

    # Name given to a failure codec that has no declared name
    FAILURE_NAME: str = 'err'

    @field_validator('RUNTIME_PACKAGE', 'ERROR_INTERFACE', 'DEFAULT_NAME_PREFIX', 'FAILURE_NAME')
    @classmethod
    def validate_identifier(cls, value: str) -> str:
        if not value.isidentifier():
            raise ValueError(f'{value!r} is not a valid identifier')
        return value

    @classmethod
    def from_yaml(cls, *, filepath: str) -> 'GeneratorSettings':
        """Takes a filepath to a yaml file and returns a validated GeneratorSettings instance."""
        return model_from_extended_yaml(cls, filepath=filepath)
