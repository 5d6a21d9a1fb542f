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
"""AdvisorAutoProxyCreator — replaces advised beans with intercepting proxies."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

from pybean.aop.advisor import Advisor
from pybean.aop.decorators import is_aspect
from pybean.aop.pointcut import Pointcut
from pybean.aop.proxy import DefaultProxyFactory, ProxyFactory, is_proxy, public_methods
from pybean.aop.registry import AdvisorRegistry

if TYPE_CHECKING:
    from pybean.container.factory import BeanFactory

logger = logging.getLogger(__name__)


class AdvisorAutoProxyCreator:
    """BeanPostProcessor that wraps beans matched by any registered advisor.

    For each freshly built bean, every advisor's pointcut is tested against
    the bean's class first; only if that passes are the bean's methods tested,
    stopping at the first match. Beans with no matching advisor pass through
    unchanged. Otherwise the proxy factory's result replaces the bean, so the
    proxy is what the factory caches and returns.

    Aspect beans and objects that are already proxies are never wrapped.
    """

    def __init__(
        self,
        registry: AdvisorRegistry | None = None,
        bean_factory: BeanFactory | None = None,
        proxy_factory: ProxyFactory | None = None,
    ) -> None:
        self._registry = registry if registry is not None else AdvisorRegistry()
        self._bean_factory = bean_factory
        self._proxy_factory = proxy_factory if proxy_factory is not None else DefaultProxyFactory()

    @property
    def registry(self) -> AdvisorRegistry:
        return self._registry

    def before_init(self, bean: Any, bean_name: str) -> Any:
        return bean

    def after_init(self, bean: Any, bean_name: str) -> Any:
        matched = self.get_matched_advisors(bean)
        if not matched:
            return bean
        logger.debug("Proxying bean '%s' with %d advisor(s)", bean_name, len(matched))
        return self._proxy_factory.create_proxy(bean, matched, self._bean_factory)

    def get_matched_advisors(self, bean: Any) -> list[Advisor]:
        """Return every advisor with at least one method of *bean* in its pointcut."""
        advisors = self._registry.advisors
        if not advisors or bean is None:
            return []
        bean_cls = type(bean)
        if is_aspect(bean_cls) or is_proxy(bean):
            return []

        methods = [func for _name, func in public_methods(bean_cls)]
        return [a for a in advisors if _matches_bean(a.pointcut, bean_cls, methods)]


def _matches_bean(
    pointcut: Pointcut,
    bean_cls: type,
    methods: Sequence[Callable[..., Any]],
) -> bool:
    if not pointcut.matches_class(bean_cls):
        return False
    return any(pointcut.matches_method(method, bean_cls) for method in methods)
