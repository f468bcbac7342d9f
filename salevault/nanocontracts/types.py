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

from typing import Any, Callable, NamedTuple, NewType, TypeVar, overload

Address = NewType('Address', bytes)
ContractId = NewType('ContractId', bytes)
BlueprintId = NewType('BlueprintId', bytes)
TokenUid = NewType('TokenUid', bytes)
Amount = NewType('Amount', int)
Timestamp = NewType('Timestamp', int)

# Either a user address or a contract id.
CallerId = bytes

NC_PUBLIC_ATTR = '_nc_public'
NC_VIEW_ATTR = '_nc_view'
NC_ALLOW_DEPOSIT_ATTR = '_nc_allow_deposit'
NC_EXPORT_ATTR = '_nc_export'

T = TypeVar('T', bound=Callable[..., Any])
C = TypeVar('C', bound=type)


class NCDepositAction(NamedTuple):
    """Value sent by the caller to the contract along with the call."""

    token_uid: TokenUid
    amount: int

    def __repr__(self) -> str:
        return f'NCDepositAction(token_uid={self.token_uid.hex()}, amount={self.amount})'


class NCEvent(NamedTuple):
    """An event emitted by a contract, kept by the runner for indexers and tests."""

    contract_id: ContractId
    name: str
    data: dict[str, Any]


@overload
def public(fn: T) -> T: ...


@overload
def public(*, allow_deposit: bool = False) -> Callable[[T], T]: ...


def public(fn: Any = None, *, allow_deposit: bool = False) -> Any:
    """Mark a blueprint method as callable through `Runner.call_public_method`.

    Public methods receive a `Context` as first argument. Calls carrying deposit actions are rejected unless the
    method is declared with `allow_deposit=True`.
    """
    def decorator(method: T) -> T:
        setattr(method, NC_PUBLIC_ATTR, True)
        setattr(method, NC_ALLOW_DEPOSIT_ATTR, allow_deposit)
        return method

    if fn is not None:
        return decorator(fn)
    return decorator


def view(fn: T) -> T:
    """Mark a blueprint method as a read-only method callable through `Runner.call_view_method`."""
    setattr(fn, NC_VIEW_ATTR, True)
    return fn


def export(cls: C) -> C:
    """Mark a blueprint class as deployable. `Runner.register_blueprint_class` refuses unmarked classes."""
    setattr(cls, NC_EXPORT_ATTR, True)
    return cls


def is_exported(cls: Any) -> bool:
    return bool(cls.__dict__.get(NC_EXPORT_ATTR, False))


def is_public(fn: Any) -> bool:
    return bool(getattr(fn, NC_PUBLIC_ATTR, False))


def is_view(fn: Any) -> bool:
    return bool(getattr(fn, NC_VIEW_ATTR, False))


def allows_deposit(fn: Any) -> bool:
    return bool(getattr(fn, NC_ALLOW_DEPOSIT_ATTR, False))
