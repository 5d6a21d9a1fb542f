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
"""AOP decorators — @aspect and advice annotations."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from pybean.aop.types import AFTER, AFTER_RETURNING, AFTER_THROWING, AROUND, BEFORE
from pybean.container.types import Scope

T = TypeVar("T", bound=type)
F = TypeVar("F", bound=Callable[..., Any])


def aspect(cls: T) -> T:
    """Mark a class as an aspect.

    Aspects are singleton components: the ApplicationContext registers them
    like any other bean and turns their advice methods into advisors. Aspect
    beans are never proxied themselves.
    """
    cls.__pybean_aspect__ = True  # type: ignore[attr-defined]
    cls.__pybean_component__ = True  # type: ignore[attr-defined]
    cls.__pybean_stereotype__ = "aspect"  # type: ignore[attr-defined]
    cls.__pybean_scope__ = Scope.SINGLETON  # type: ignore[attr-defined]
    cls.__pybean_bean_name__ = ""  # type: ignore[attr-defined]
    return cls


def is_aspect(cls: type) -> bool:
    return bool(getattr(cls, "__pybean_aspect__", False))


def _make_advice(advice_type: str) -> Callable[[str], Callable[[F], F]]:
    """Create an advice decorator factory for the given *advice_type*.

    The returned factory takes a pointcut expression and returns a decorator
    that annotates the wrapped method with ``__pybean_advice_type__`` and
    ``__pybean_pointcut__``.
    """

    def factory(pointcut: str) -> Callable[[F], F]:
        def decorator(fn: F) -> F:
            fn.__pybean_advice_type__ = advice_type  # type: ignore[attr-defined]
            fn.__pybean_pointcut__ = pointcut  # type: ignore[attr-defined]
            return fn

        return decorator

    return factory


before = _make_advice(BEFORE)
after_returning = _make_advice(AFTER_RETURNING)
after_throwing = _make_advice(AFTER_THROWING)
after = _make_advice(AFTER)
around = _make_advice(AROUND)
