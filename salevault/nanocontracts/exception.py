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


class NCFail(Exception):
    """Raised by a blueprint method to abort the call.

    The runner rolls back every change made during the call before re-raising it.
    """
    pass


class NCInvalidAction(NCFail):
    """Raised when the actions attached to a call don't match what the method expects."""
    pass


class NCMethodNotFound(NCFail):
    """Raised when the requested method doesn't exist or isn't exposed with the expected decorator."""
    pass


class NCContractDoesNotExist(NCFail):
    pass


class NCContractAlreadyExists(NCFail):
    pass


class NCUnknownField(NCFail):
    """Raised when a blueprint writes to an attribute that is not a declared field."""
    pass


class ArithmeticFault(NCFail):
    """Raised when checked arithmetic would overflow, underflow or divide by zero."""
    pass


class CollaboratorFailure(NCFail):
    """Raised when an external transfer (native value or token) reports failure."""
    pass
