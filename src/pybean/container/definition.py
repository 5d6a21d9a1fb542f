# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Bean registration metadata: definitions, references and property values."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from pybean.container.types import Scope


@dataclass(frozen=True)
class BeanReference:
    """Symbolic pointer to another bean, resolved by name at build time."""

    name: str


@dataclass(frozen=True)
class PropertyValue:
    """A field assignment applied after construction.

    ``value`` is either a literal or a :class:`BeanReference`.
    """

    name: str
    value: Any


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


@dataclass(eq=False)
class BeanDefinition:
    """Metadata describing how to build and configure one bean.

    Exactly one build strategy applies:

    * ``factory_bean_name`` and ``factory_method_name`` set: call a method on
      another bean.
    * ``bean_class`` and ``factory_method_name`` set: call a static (or class)
      method on ``bean_class``.
    * ``bean_class`` only: call the constructor.

    ``constructor`` and ``factory_method`` cache the resolved handles after the
    first build so prototype beans skip the lookup on every request.
    """

    bean_class: type | None = None
    return_type: Any = None
    scope: Scope = Scope.SINGLETON
    factory_bean_name: str | None = None
    factory_method_name: str | None = None
    argument_values: list[Any] = field(default_factory=list)
    property_values: list[PropertyValue] = field(default_factory=list)
    init_method_name: str | None = None
    destroy_method_name: str | None = None
    constructor: Callable[..., Any] | None = field(default=None, repr=False)
    factory_method: Callable[..., Any] | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.return_type is None and self.bean_class is not None:
            self.return_type = self.bean_class

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BeanDefinition):
            return NotImplemented
        return (
            self.bean_class is other.bean_class
            and self.return_type == other.return_type
            and self.scope is other.scope
            and self.factory_bean_name == other.factory_bean_name
            and self.factory_method_name == other.factory_method_name
            and self.argument_values == other.argument_values
            and self.property_values == other.property_values
            and self.init_method_name == other.init_method_name
            and self.destroy_method_name == other.destroy_method_name
        )

    __hash__ = None  # type: ignore[assignment]

    @property
    def is_singleton(self) -> bool:
        return self.scope is Scope.SINGLETON

    @property
    def is_prototype(self) -> bool:
        return self.scope is Scope.PROTOTYPE

    @property
    def build_strategy(self) -> str:
        """Name of the instantiation strategy this definition selects."""
        if not _is_blank(self.factory_bean_name):
            return "factory_bean_method"
        if not _is_blank(self.factory_method_name):
            return "static_factory_method"
        return "constructor"

    def add_property_value(self, property_value: PropertyValue) -> None:
        """Add a property value, replacing any earlier value for the same field."""
        self.property_values = [
            pv for pv in self.property_values if pv.name != property_value.name
        ]
        self.property_values.append(property_value)

    def validate(self) -> bool:
        """Return True when the definition describes exactly one buildable strategy."""
        if self.return_type is None:
            return False
        if self.bean_class is None and (
            _is_blank(self.factory_bean_name) or _is_blank(self.factory_method_name)
        ):
            return False
        return self.bean_class is None or _is_blank(self.factory_bean_name)
