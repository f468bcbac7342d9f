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

from typing import TYPE_CHECKING, Any, Optional

from twisted.web.resource import Resource

from salevault.nanocontracts.exception import NCFail
from salevault.nanocontracts.types import Address, ContractId
from salevault.utils.api import ErrorResponse, QueryParams, Response, set_cors

if TYPE_CHECKING:
    from twisted.web.http import Request

    from salevault.nanocontracts.runner import Runner


class VaultStateResource(Resource):
    """ Implements a web server GET API to get the state of a phased vault.

    `GET ?id=<contract hex>` returns the vault information and its phases. With `&address=<hex>` it also returns
    what the vault knows about that participant.
    """
    isLeaf = True

    def __init__(self, runner: 'Runner') -> None:
        super().__init__()
        self.runner = runner

    def render_GET(self, request: 'Request') -> bytes:
        request.setHeader(b'content-type', b'application/json; charset=utf-8')
        set_cors(request, 'GET')

        params = VaultStateParams.from_request(request)
        if isinstance(params, ErrorResponse):
            request.setResponseCode(400)
            return params.json_dumpb()

        try:
            contract_id = ContractId(bytes.fromhex(params.id))
        except ValueError:
            request.setResponseCode(400)
            error_response = ErrorResponse(success=False, error=f'Invalid id: {params.id}')
            return error_response.json_dumpb()

        address: Optional[Address] = None
        if params.address is not None:
            try:
                address = Address(bytes.fromhex(params.address))
            except ValueError:
                request.setResponseCode(400)
                error_response = ErrorResponse(success=False, error=f'Invalid address: {params.address}')
                return error_response.json_dumpb()

        try:
            vault = self.runner.call_view_method(contract_id, 'get_vault_info')
            phase_count = self.runner.call_view_method(contract_id, 'get_phase_count')
            phases = [
                self.runner.call_view_method(contract_id, 'get_phase_info', index)._asdict()
                for index in range(phase_count)
            ]
            participant: Optional[dict[str, Any]] = None
            if address is not None:
                participant = self.runner.call_view_method(contract_id, 'get_participant_info', address)._asdict()
        except NCFail as e:
            request.setResponseCode(400)
            error_response = ErrorResponse(success=False, error=str(e))
            return error_response.json_dumpb()

        response = VaultStateResponse(
            network=self.runner.settings.NETWORK_NAME,
            decimal_places=self.runner.settings.DECIMAL_PLACES,
            vault=vault._asdict(),
            phases=phases,
            participant=participant,
        )
        return response.json_dumpb()


class VaultStateParams(QueryParams):
    id: str
    address: Optional[str] = None


class VaultStateResponse(Response):
    success: bool = True
    network: str
    decimal_places: int
    vault: dict[str, Any]
    phases: list[dict[str, Any]]
    participant: Optional[dict[str, Any]] = None
