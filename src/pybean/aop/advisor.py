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
"""Advice and Advisor — interception behaviour bound to a pointcut."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pybean.aop.pointcut import ExpressionPointcut, Pointcut
from pybean.aop.types import ADVICE_TYPES


@dataclass(frozen=True)
class Advice:
    """Interception behaviour.

    Attributes:
        advice_type: One of ``"before"``, ``"after_returning"``,
            ``"after_throwing"``, ``"after"``, ``"around"``.
        handler: Callable receiving the :class:`~pybean.aop.types.JoinPoint`.
            Around handlers call ``jp.proceed()`` and return its result.
        advice_bean_name: Name of a callable bean used as the handler instead,
            fetched from the bean factory when a call is intercepted.
    """

    advice_type: str
    handler: Callable[..., Any] | None = None
    advice_bean_name: str | None = None

    def __post_init__(self) -> None:
        if self.advice_type not in ADVICE_TYPES:
            raise ValueError(
                f"Unknown advice type {self.advice_type!r}; expected one of {ADVICE_TYPES}"
            )
        if (self.handler is None) == (not self.advice_bean_name):
            raise ValueError("Advice needs exactly one of handler or advice_bean_name")


@dataclass(frozen=True)
class Advisor:
    """A pointcut bound to an advice. Lower ``order`` runs outermost."""

    pointcut: Pointcut
    advice: Advice
    order: int = 0

    @classmethod
    def of(
        cls,
        expression: str,
        advice_type: str,
        handler: Callable[..., Any] | None = None,
        order: int = 0,
        *,
        advice_bean_name: str | None = None,
    ) -> Advisor:
        """Build an advisor from a pointcut expression string.

        Pass *advice_bean_name* instead of *handler* to use a registered
        callable bean as the advice.
        """
        return cls(
            ExpressionPointcut(expression),
            Advice(advice_type, handler, advice_bean_name),
            order,
        )
