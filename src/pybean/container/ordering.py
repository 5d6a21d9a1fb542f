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
"""Aspect ordering — @order and the precedence bounds.

Only aspect classes are ordered: the advisors collected from an aspect take
its order, and advisors with a lower order wrap those with a higher one.
Components themselves are never ordered; their build order follows
dependencies.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

T = TypeVar("T", bound=type)

HIGHEST_PRECEDENCE: int = -(2**31)
LOWEST_PRECEDENCE: int = 2**31 - 1


def order(value: int) -> Callable[[T], T]:
    """Set the order of an aspect class; unordered aspects default to 0.

    Raises:
        TypeError: *value* is not an int.
        ValueError: *value* lies outside ``HIGHEST_PRECEDENCE..LOWEST_PRECEDENCE``.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"Aspect order must be an int, got {type(value).__name__}")
    if not HIGHEST_PRECEDENCE <= value <= LOWEST_PRECEDENCE:
        raise ValueError(
            f"Aspect order {value} is outside {HIGHEST_PRECEDENCE}..{LOWEST_PRECEDENCE}"
        )

    def decorator(cls: T) -> T:
        cls.__pybean_order__ = value  # type: ignore[attr-defined]
        return cls

    return decorator


def get_order(cls: type) -> int:
    """Order of an aspect class; subclasses inherit it unless re-decorated."""
    return getattr(cls, "__pybean_order__", 0)
