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
"""Component metadata and type-resolution results produced by the context."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ComponentProperty:
    """What the context derived from one discovered component class.

    Attributes:
        name: The component's bean name.
        component_class: The discovered class.
        stereotype: Marker that made it a component (``service``, ``aspect``...).
        produced_beans: Bean name -> name of the ``@bean`` method producing it.
        dependencies: Injection point -> target bean name. Fields are keyed by
            field name, parameters as ``"method(param)"``.
    """

    name: str
    component_class: type
    stereotype: str = "component"
    produced_beans: dict[str, str] = field(default_factory=dict)
    dependencies: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Unique:
    """Exactly one bean implements the type."""

    name: str


@dataclass(frozen=True)
class Ambiguous:
    """Several beans implement the type; the caller must name one."""

    candidates: tuple[str, ...]


@dataclass(frozen=True)
class NoCandidate:
    """No discovered component implements the type."""


TypeResolution = Unique | Ambiguous | NoCandidate
