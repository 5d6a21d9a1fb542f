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
"""AOP proxies — objects substituted for a bean to intercept its method calls.

:class:`DefaultProxyFactory` builds, once per target class, a dynamic
subclass of that class whose attribute access is forwarded to the target
instance. Methods matched by an advisor are returned as advice-chain
wrappers; everything else resolves on the target. Because the proxy is an
instance of a subclass, ``isinstance(proxy, TargetClass)`` still holds.
Classes that cannot be subclassed or allocated that way (e.g. builtin
value types) get a plain delegating :class:`AopProxy` instead.
"""

from __future__ import annotations

import inspect
import logging
import threading
import types
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from pybean.aop.advisor import Advisor
from pybean.aop.weaver import build_interceptor

if TYPE_CHECKING:
    from pybean.container.factory import BeanFactory

logger = logging.getLogger(__name__)

_TARGET = "_pybean_target"
_INTERCEPTORS = "_pybean_interceptors"


@runtime_checkable
class ProxyFactory(Protocol):
    """Creates the object that replaces *target* once advisors matched it."""

    def create_proxy(
        self,
        target: Any,
        advisors: Sequence[Advisor],
        bean_factory: BeanFactory | None,
    ) -> Any: ...


def public_methods(cls: type) -> list[tuple[str, Callable[..., Any]]]:
    """Return ``(name, function)`` for every public method of *cls*, subclass first.

    Instance, static and class methods are included; properties and
    ``object``'s own members are not.
    """
    seen: set[str] = set()
    methods: list[tuple[str, Callable[..., Any]]] = []
    for klass in cls.__mro__:
        if klass is object:
            continue
        for name, member in vars(klass).items():
            if name.startswith("_") or name in seen:
                continue
            seen.add(name)
            func = member.__func__ if isinstance(member, (staticmethod, classmethod)) else member
            if inspect.isfunction(func):
                methods.append((name, func))
    return methods


def is_proxy(obj: Any) -> bool:
    """True if *obj* was created by a pybean proxy factory."""
    return bool(type(obj).__dict__.get("__pybean_proxy__", False))


def get_proxy_target(obj: Any) -> Any:
    """Return the object behind a proxy, or *obj* itself when it is not one."""
    if not is_proxy(obj):
        return obj
    return object.__getattribute__(obj, _TARGET)


# ---------------------------------------------------------------------------
# Attribute forwarding shared by both proxy flavours
# ---------------------------------------------------------------------------


def _proxy_getattribute(self: Any, name: str) -> Any:
    if name in (_TARGET, _INTERCEPTORS):
        return object.__getattribute__(self, name)
    interceptors = object.__getattribute__(self, _INTERCEPTORS)
    if name in interceptors:
        return interceptors[name]
    return getattr(object.__getattribute__(self, _TARGET), name)


def _proxy_setattr(self: Any, name: str, value: Any) -> None:
    setattr(object.__getattribute__(self, _TARGET), name, value)


def _proxy_delattr(self: Any, name: str) -> None:
    delattr(object.__getattribute__(self, _TARGET), name)


def _proxy_repr(self: Any) -> str:
    return f"<proxy of {object.__getattribute__(self, _TARGET)!r}>"


class AopProxy:
    """Plain delegating proxy used when the target class cannot be subclassed."""

    __pybean_proxy__ = True
    __getattribute__ = _proxy_getattribute
    __setattr__ = _proxy_setattr
    __delattr__ = _proxy_delattr
    __repr__ = _proxy_repr


class DefaultProxyFactory:
    """Creates subclass-based proxies, falling back to :class:`AopProxy`."""

    def __init__(self) -> None:
        self._proxy_classes: dict[type, type | None] = {}
        self._lock = threading.Lock()

    def create_proxy(
        self,
        target: Any,
        advisors: Sequence[Advisor],
        bean_factory: BeanFactory | None = None,
    ) -> Any:
        target_cls = type(target)
        interceptors: dict[str, Callable[..., Any]] = {}
        for name, func in public_methods(target_cls):
            matched = [a for a in advisors if a.pointcut.matches_method(func, target_cls)]
            if matched:
                interceptors[name] = build_interceptor(
                    target, name, getattr(target, name), matched, bean_factory
                )

        proxy = self._allocate(target_cls)
        object.__setattr__(proxy, _TARGET, target)
        object.__setattr__(proxy, _INTERCEPTORS, interceptors)
        logger.debug(
            "Created %s for %s intercepting %s",
            type(proxy).__name__,
            target_cls.__qualname__,
            sorted(interceptors),
        )
        return proxy

    def _allocate(self, target_cls: type) -> Any:
        proxy_cls = self._proxy_class_for(target_cls)
        if proxy_cls is not None:
            try:
                return object.__new__(proxy_cls)
            except TypeError:
                # e.g. builtin layouts: object.__new__ refuses them
                with self._lock:
                    self._proxy_classes[target_cls] = None
        return object.__new__(AopProxy)

    def _proxy_class_for(self, target_cls: type) -> type | None:
        with self._lock:
            if target_cls in self._proxy_classes:
                return self._proxy_classes[target_cls]

            def exec_body(ns: dict[str, Any]) -> None:
                ns["__module__"] = target_cls.__module__
                ns["__qualname__"] = f"{target_cls.__qualname__}Proxy"
                ns["__pybean_proxy__"] = True
                ns["__getattribute__"] = _proxy_getattribute
                ns["__setattr__"] = _proxy_setattr
                ns["__delattr__"] = _proxy_delattr
                ns["__repr__"] = _proxy_repr

            try:
                proxy_cls: type | None = types.new_class(
                    f"{target_cls.__name__}Proxy", (target_cls,), exec_body=exec_body
                )
            except TypeError:
                proxy_cls = None
            self._proxy_classes[target_cls] = proxy_cls
            return proxy_cls
