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

import time
from typing import Protocol


class Clock(Protocol):
    """Source of the current time, in seconds since the epoch.

    `twisted.internet.task.Clock` and the twisted reactor satisfy this protocol, so tests can drive time
    deterministically with `Clock.advance`.
    """

    def seconds(self) -> float: ...


class SystemClock:
    """Wall clock time."""

    def seconds(self) -> float:
        return time.time()
