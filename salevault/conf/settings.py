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

from pydantic import BaseModel, ConfigDict, Field, field_validator

U256_MAX = 2**256 - 1


class VaultSettings(BaseModel):
    """Network-wide constants used by the vault runtime and its API."""

    model_config = ConfigDict(frozen=True)

    # Name reported by the state API.
    NETWORK_NAME: str = 'localnet'

    # Uid of the native token contributions are paid in.
    NATIVE_TOKEN_UID: bytes = b'\x00'

    # Upper bound for every amount handled by the checked arithmetic helpers.
    MAX_AMOUNT: int = Field(default=U256_MAX, gt=0)

    # Number of decimal places used when formatting amounts for humans.
    DECIMAL_PLACES: int = Field(default=2, ge=0)

    @field_validator('NATIVE_TOKEN_UID')
    @classmethod
    def _native_uid_not_empty(cls, value: bytes) -> bytes:
        if not value:
            raise ValueError('NATIVE_TOKEN_UID must not be empty')
        return value
