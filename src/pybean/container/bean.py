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
"""@bean factory methods and Qualifier for disambiguation."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar, overload

from pybean.container.types import Scope

F = TypeVar("F")


@overload
def bean(func: F) -> F: ...


@overload
def bean(
    *,
    name: str = "",
    scope: Scope = Scope.SINGLETON,
) -> Callable[[F], F]: ...


def bean(
    func: F | None = None,
    *,
    name: str = "",
    scope: Scope = Scope.SINGLETON,
) -> F | Callable[[F], F]:
    """Mark a method of a component class as a bean factory.

    Works on instance methods (the declaring component becomes the factory
    bean) and on ``staticmethod``/``classmethod`` members (called without a
    receiver). Stack it above or below ``@staticmethod``.

    Without *name*, the produced bean is named after the return annotation's
    simple type name (``OrderRepository`` -> ``orderRepository``).
    """

    def decorator(func: F) -> F:
        target: Any = getattr(func, "__func__", func)
        target.__pybean_bean__ = True
        target.__pybean_bean_scope__ = scope
        target.__pybean_bean_name__ = name
        return func

    if func is not None:
        return decorator(func)
    return decorator


def is_bean_method(member: Any) -> bool:
    """True if a class-dict member (function, staticmethod or classmethod) is marked with @bean."""
    target = getattr(member, "__func__", member)
    return bool(getattr(target, "__pybean_bean__", False))


class Qualifier:
    """Used with typing.Annotated to select a specific named bean.

    Usage::

        def __init__(self, db: Annotated[DataSource, Qualifier("primaryDb")]):
            ...
    """

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"Qualifier({self.name!r})"
