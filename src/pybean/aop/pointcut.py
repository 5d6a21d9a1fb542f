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
"""Pointcuts — class and method predicates selecting interception targets."""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Pointcut(Protocol):
    """Predicate over (class, method) pairs.

    ``matches_class`` is a cheap pre-filter: returning False must guarantee
    that ``matches_method`` is False for every method of that class.
    """

    def matches_class(self, cls: type) -> bool: ...

    def matches_method(self, method: Callable[..., Any], target_class: type) -> bool: ...


def qualified_class_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


class ExpressionPointcut:
    """Pointcut backed by a dotted glob expression over ``module.Class.method``.

    >>> pc = ExpressionPointcut("**.OrderService.create_*")
    >>> pc.expression
    '**.OrderService.create_*'
    """

    def __init__(self, expression: str) -> None:
        self._expression = expression
        self._regex = _pattern_to_regex(expression)
        segments = expression.split(".")
        # A trailing ``**`` segment may span class and method names, so no
        # class can be ruled out up front. A single plain segment never matches
        # a dotted method name.
        self._all_classes = segments[-1] == "**"
        self._class_regex = (
            _pattern_to_regex(".".join(segments[:-1])) if len(segments) > 1 else None
        )

    @property
    def expression(self) -> str:
        return self._expression

    def matches_class(self, cls: type) -> bool:
        if self._all_classes:
            return True
        if self._class_regex is None:
            return False
        return self._class_regex.fullmatch(qualified_class_name(cls)) is not None

    def matches_method(self, method: Callable[..., Any], target_class: type) -> bool:
        name = getattr(method, "__name__", "")
        qualified = f"{qualified_class_name(target_class)}.{name}"
        return self._regex.fullmatch(qualified) is not None

    def __repr__(self) -> str:
        return f"ExpressionPointcut({self._expression!r})"


def matches_pointcut(pattern: str, qualified_name: str) -> bool:
    """Check whether *qualified_name* matches a pointcut *pattern*.

    Pattern syntax
    --------------
    * ``*``  — matches exactly one dot-separated segment.
    * ``**`` — matches one or more segments (crosses dots).
    * Partial globs in a segment use fnmatch rules,
      e.g. ``get_*`` matches ``get_order``.

    Examples
    --------
    >>> matches_pointcut("app.service.*.*", "app.service.OrderService.create")
    True
    >>> matches_pointcut("**.*Service.*", "a.b.c.OrderService.create")
    True
    >>> matches_pointcut("mymod.MyClass.get_*", "mymod.MyClass.get_order")
    True
    >>> matches_pointcut("*.my_method", "a.b.MyClass.my_method")
    False
    """
    return _pattern_to_regex(pattern).fullmatch(qualified_name) is not None


def _segment_to_regex(seg: str) -> str:
    """Convert a single pattern segment to a regex fragment.

    Handles literal text, ``*`` (single segment), ``**`` (any depth),
    and partial globs like ``get_*`` or ``*Service``.
    """
    if seg == "**":
        return r"(?:[^.]+\.)*[^.]+"
    if seg == "*":
        return r"[^.]+"

    parts: list[str] = []
    for ch in seg:
        if ch == "*":
            parts.append("[^.]*")
        elif ch == "?":
            parts.append("[^.]")
        else:
            parts.append(re.escape(ch))
    return "".join(parts)


def _pattern_to_regex(pattern: str) -> re.Pattern[str]:
    """Convert a pointcut pattern string into a compiled regex."""
    segments = pattern.split(".")
    return re.compile(r"\.".join(_segment_to_regex(seg) for seg in segments))
