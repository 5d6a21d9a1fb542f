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
"""Stereotype decorators that mark classes as container-managed components.

Each stereotype marks a class for discovery by the ApplicationContext:
- @component: generic managed bean
- @service: business logic layer
- @repository: data access layer
- @controller: entry-point layer
- @configuration: class whose @bean methods produce further beans
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar, overload

from pybean.container.types import Scope

T = TypeVar("T", bound=type)


def _make_stereotype(stereotype_name: str) -> Callable[..., Any]:
    """Factory that creates a stereotype decorator with the given name."""

    @overload
    def stereotype(cls: T) -> T: ...

    @overload
    def stereotype(
        *,
        name: str = "",
        scope: Scope = Scope.SINGLETON,
    ) -> Callable[[T], T]: ...

    def stereotype(
        cls: T | None = None,
        *,
        name: str = "",
        scope: Scope = Scope.SINGLETON,
    ) -> T | Callable[[T], T]:
        def decorator(cls: T) -> T:
            # Stored in the class __dict__ so subclasses are not marked implicitly.
            cls.__pybean_component__ = True  # type: ignore[attr-defined]
            cls.__pybean_stereotype__ = stereotype_name  # type: ignore[attr-defined]
            cls.__pybean_scope__ = scope  # type: ignore[attr-defined]
            cls.__pybean_bean_name__ = name  # type: ignore[attr-defined]
            return cls

        if cls is not None:
            return decorator(cls)
        return decorator

    stereotype.__name__ = stereotype_name
    stereotype.__qualname__ = stereotype_name
    return stereotype


component = _make_stereotype("component")
service = _make_stereotype("service")
repository = _make_stereotype("repository")
controller = _make_stereotype("controller")
configuration = _make_stereotype("configuration")


def is_component(cls: type) -> bool:
    """True if *cls* itself (not only a base class) carries a stereotype marker."""
    return bool(vars(cls).get("__pybean_component__", False))
