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
"""AOP weaver — wraps a bean method with its matching advice chain."""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

from pybean.aop.advisor import Advice, Advisor
from pybean.aop.types import AFTER, AFTER_RETURNING, AFTER_THROWING, AROUND, BEFORE, JoinPoint

if TYPE_CHECKING:
    from pybean.container.factory import BeanFactory


def build_interceptor(
    target: Any,
    method_name: str,
    original: Callable[..., Any],
    advisors: Sequence[Advisor],
    bean_factory: BeanFactory | None = None,
) -> Callable[..., Any]:
    """Wrap *original* (a bound method of *target*) with the advice of *advisors*.

    Advice runs in this order for each call:

    1. ``before`` advice
    2. ``around`` advice, outermost first, the innermost link calling the method
    3. ``after_returning`` on success, ``after_throwing`` on error (re-raised)
    4. ``after`` advice, always

    Coroutine methods get an async wrapper; around handlers may then be sync
    or async. Advice that names a bean is looked up in *bean_factory* on
    every intercepted call.
    """
    chain = _AdviceChain(advisors, bean_factory)
    if inspect.iscoroutinefunction(original):
        return _build_async_wrapper(target, method_name, original, chain)
    return _build_sync_wrapper(target, method_name, original, chain)


class _AdviceChain:
    """Advice handlers grouped by advice type, in advisor order."""

    __slots__ = ("before", "after_returning", "after_throwing", "after", "around")

    def __init__(self, advisors: Sequence[Advisor], bean_factory: BeanFactory | None) -> None:
        ordered = sorted(advisors, key=lambda a: a.order)

        def handlers(advice_type: str) -> list[Callable[..., Any]]:
            return [
                _handler_for(a.advice, bean_factory)
                for a in ordered
                if a.advice.advice_type == advice_type
            ]

        self.before = handlers(BEFORE)
        self.after_returning = handlers(AFTER_RETURNING)
        self.after_throwing = handlers(AFTER_THROWING)
        self.after = handlers(AFTER)
        self.around = handlers(AROUND)


def _handler_for(advice: Advice, bean_factory: BeanFactory | None) -> Callable[..., Any]:
    if advice.handler is not None:
        return advice.handler
    bean_name = advice.advice_bean_name
    if bean_factory is None:
        raise ValueError(f"Advice bean '{bean_name}' needs a bean factory to be resolved")

    def from_bean(jp: JoinPoint) -> Any:
        handler = bean_factory.get_bean(bean_name)
        if not callable(handler):
            raise TypeError(
                f"Advice bean '{bean_name}' is a {type(handler).__qualname__}, not a callable"
            )
        return handler(jp)

    return from_bean


def _build_sync_wrapper(
    target: Any,
    method_name: str,
    original: Callable[..., Any],
    chain: _AdviceChain,
) -> Callable[..., Any]:
    @functools.wraps(original)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        jp = JoinPoint(target=target, method_name=method_name, args=args, kwargs=kwargs)

        for handler in chain.before:
            handler(jp)

        try:
            if chain.around:

                def _invoke_original(*_a: Any, **_kw: Any) -> Any:
                    return original(*args, **kwargs)

                proceed: Callable[..., Any] = _invoke_original
                for handler in reversed(chain.around):
                    proceed = _make_sync_around_link(handler, jp, proceed)
                result = proceed()
            else:
                result = original(*args, **kwargs)

            jp.return_value = result
            for handler in chain.after_returning:
                handler(jp)

            return result

        except Exception as exc:
            jp.exception = exc
            for handler in chain.after_throwing:
                handler(jp)
            raise

        finally:
            for handler in chain.after:
                handler(jp)

    return wrapper


def _make_sync_around_link(
    handler: Callable[..., Any], jp: JoinPoint, next_proceed: Callable[..., Any]
) -> Callable[..., Any]:
    """Build one link of a sync around chain.

    ``jp.proceed`` points at the next link while *handler* runs and is restored
    afterwards, so an outer handler that proceeds again re-enters the inner links.
    """

    def chained(*_a: Any, **_kw: Any) -> Any:
        previous = jp.proceed
        jp.proceed = next_proceed
        try:
            return handler(jp)
        finally:
            jp.proceed = previous

    return chained


def _build_async_wrapper(
    target: Any,
    method_name: str,
    original: Callable[..., Any],
    chain: _AdviceChain,
) -> Callable[..., Any]:
    @functools.wraps(original)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        jp = JoinPoint(target=target, method_name=method_name, args=args, kwargs=kwargs)

        for handler in chain.before:
            handler(jp)

        try:
            if chain.around:

                async def _invoke_original(*_a: Any, **_kw: Any) -> Any:
                    return await original(*args, **kwargs)

                proceed: Callable[..., Any] = _invoke_original
                for handler in reversed(chain.around):
                    proceed = _make_async_around_link(handler, jp, proceed)
                result = await proceed()
            else:
                result = await original(*args, **kwargs)

            jp.return_value = result
            for handler in chain.after_returning:
                handler(jp)

            return result

        except Exception as exc:
            jp.exception = exc
            for handler in chain.after_throwing:
                handler(jp)
            raise

        finally:
            for handler in chain.after:
                handler(jp)

    return wrapper


def _make_async_around_link(
    handler: Callable[..., Any], jp: JoinPoint, next_proceed: Callable[..., Any]
) -> Callable[..., Any]:
    """Build one link of an async around chain; *handler* may return an awaitable."""

    async def chained(*_a: Any, **_kw: Any) -> Any:
        previous = jp.proceed
        jp.proceed = next_proceed
        try:
            result = handler(jp)
            if inspect.isawaitable(result):
                result = await result
            return result
        finally:
            jp.proceed = previous

    return chained
