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

import inspect
from typing import Any, ClassVar

from salevault.nanocontracts.blueprint_env import BlueprintEnvironment
from salevault.nanocontracts.exception import NCUnknownField
from salevault.nanocontracts.storage import NCContractStorage


class Blueprint:
    """Base class for contracts.

    Storage fields are declared as class annotations. Reading a field fetches it from the contract storage and
    assigning to it writes it back; assigning to anything that isn't declared is an error. Fields starting with an
    underscore are ignored.

        class Counter(Blueprint):
            count: int

            @public
            def initialize(self, ctx: Context) -> None:
                self.count = 0
    """

    _nc_fields: ClassVar[dict[str, Any]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        fields: dict[str, Any] = {}
        for klass in reversed(cls.__mro__):
            if klass is object or klass is Blueprint:
                continue
            for name, annotation in inspect.get_annotations(klass).items():
                if name.startswith('_'):
                    continue
                fields[name] = annotation
        cls._nc_fields = fields

    def __init__(self, storage: NCContractStorage, env: BlueprintEnvironment) -> None:
        object.__setattr__(self, '_storage', storage)
        object.__setattr__(self, 'syscall', env)

    def __getattr__(self, name: str) -> Any:
        fields = type(self)._nc_fields
        if name in fields:
            storage: NCContractStorage = object.__getattribute__(self, '_storage')
            if not storage.has(name):
                raise AttributeError(f'field {name} has not been initialized')
            return storage.get(name)
        raise AttributeError(f'{type(self).__name__} has no attribute {name}')

    def __setattr__(self, name: str, value: Any) -> None:
        if name not in type(self)._nc_fields:
            raise NCUnknownField(f'{name} is not a field of {type(self).__name__}')
        self._storage.put(name, value)
