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

from __future__ import annotations

from typing import TYPE_CHECKING, Union

from pydantic import BaseModel, ConfigDict, ValidationError

if TYPE_CHECKING:
    from twisted.web.http import Request


class Response(BaseModel):
    """Base class for API responses."""

    def json_dumpb(self) -> bytes:
        return self.model_dump_json().encode('utf-8')


class ErrorResponse(Response):
    success: bool = False
    error: str


class QueryParams(BaseModel):
    """Base class for query string parameters of GET endpoints."""

    model_config = ConfigDict(extra='forbid')

    @classmethod
    def from_request(cls, request: 'Request') -> Union['QueryParams', ErrorResponse]:
        """Parse the request arguments, keeping the first value of each key."""
        args = request.args or {}
        raw = {}
        for key, values in args.items():
            name = key.decode('utf-8') if isinstance(key, bytes) else key
            if not values:
                continue
            value = values[0]
            raw[name] = value.decode('utf-8') if isinstance(value, bytes) else value

        try:
            return cls.model_validate(raw)
        except ValidationError as error:
            return ErrorResponse(error=str(error))


def set_cors(request: 'Request', method: str) -> None:
    request.setHeader(b'Access-Control-Allow-Origin', b'*')
    request.setHeader(b'Access-Control-Allow-Methods', method.encode('ascii'))
    request.setHeader(b'Access-Control-Allow-Headers', b'x-prototype-version,x-requested-with,content-type')
    request.setHeader(b'Access-Control-Max-Age', b'604800')
