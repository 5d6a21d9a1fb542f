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
"""AdvisorRegistry — the ordered list of advisors a context applies."""

from __future__ import annotations

import inspect
import logging
import threading
from typing import Any

from pybean.aop.advisor import Advice, Advisor
from pybean.aop.pointcut import ExpressionPointcut
from pybean.container.ordering import get_order

logger = logging.getLogger(__name__)


class AdvisorRegistry:
    """Collects advisors, kept sorted by ``order`` (stable for equal orders).

    Usage::

        registry = AdvisorRegistry()
        registry.register(Advisor.of("**.OrderService.create", "before", audit))
        registry.register_aspect(logging_aspect_instance)
    """

    def __init__(self) -> None:
        self._advisors: list[Advisor] = []
        self._lock = threading.Lock()

    def register(self, advisor: Advisor) -> None:
        with self._lock:
            self._advisors.append(advisor)
            self._advisors.sort(key=lambda a: a.order)

    def register_aspect(self, aspect_instance: Any) -> int:
        """Turn every advice method of *aspect_instance* into an advisor.

        A method is an advice method if its function carries the
        ``__pybean_advice_type__`` attribute set by the advice decorators.

        Returns:
            Number of advisors registered.
        """
        aspect_cls = type(aspect_instance)
        order = get_order(aspect_cls)
        count = 0

        for name, method in inspect.getmembers(aspect_instance, predicate=inspect.ismethod):
            func = getattr(method, "__func__", method)
            advice_type = getattr(func, "__pybean_advice_type__", None)
            pointcut = getattr(func, "__pybean_pointcut__", None)
            if advice_type is None or pointcut is None:
                continue
            self.register(
                Advisor(ExpressionPointcut(pointcut), Advice(advice_type, method), order)
            )
            logger.debug(
                "Registered %s advice %s.%s for '%s'",
                advice_type,
                aspect_cls.__name__,
                name,
                pointcut,
            )
            count += 1
        return count

    @property
    def advisors(self) -> list[Advisor]:
        """All registered advisors, sorted by ``order``."""
        return list(self._advisors)

    def __len__(self) -> int:
        return len(self._advisors)
