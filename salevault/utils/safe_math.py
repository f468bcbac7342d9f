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

"""Checked unsigned arithmetic for amounts.

Every helper validates its operands against `[0, MAX_AMOUNT]` and raises `ArithmeticFault` instead of wrapping,
saturating or going negative. Raising inside a public method aborts the call and the runner rolls back every change
the call made so far.

`u256_div` completes the checked set even though the vault itself never divides: rates are tokens per unit of
value, so allocation only multiplies.
"""

from salevault.conf import settings
from salevault.nanocontracts.exception import ArithmeticFault

MAX_AMOUNT = settings.MAX_AMOUNT

ERR_OOB = 'UINT:OOB'
ERR_OVER = 'UINT:OVERFLOW'
ERR_UNDER = 'UINT:UNDERFLOW'
ERR_DIV0 = 'UINT:DIV0'


def require_uint(*values: int) -> None:
    """Raise if any value is not an integer in [0, MAX_AMOUNT]."""
    for value in values:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ArithmeticFault(f'{ERR_OOB}: {value!r} is not an integer')
        if value < 0 or value > MAX_AMOUNT:
            raise ArithmeticFault(f'{ERR_OOB}: {value}')


def u256_add(x: int, y: int) -> int:
    """Checked add: raise on overflow."""
    require_uint(x, y)
    result = x + y
    if result > MAX_AMOUNT:
        raise ArithmeticFault(ERR_OVER)
    return result


def u256_sub(x: int, y: int) -> int:
    """Checked sub: raise on underflow (y > x)."""
    require_uint(x, y)
    if y > x:
        raise ArithmeticFault(ERR_UNDER)
    return x - y


def u256_mul(x: int, y: int) -> int:
    """Checked multiply: raise on overflow."""
    require_uint(x, y)
    result = x * y
    if result > MAX_AMOUNT:
        raise ArithmeticFault(ERR_OVER)
    return result


def u256_div(x: int, y: int) -> int:
    """Checked floor division: raise on division by zero."""
    require_uint(x, y)
    if y == 0:
        raise ArithmeticFault(ERR_DIV0)
    return x // y
