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
"""Instantiation strategies — turn a BeanDefinition into a raw object.

Three strategies share one capability, ``instantiate(bean_name, definition,
factory)``:

* :class:`ConstructorInstantiationStrategy` calls ``bean_class(*args)``.
* :class:`StaticFactoryMethodStrategy` calls a static or class method of
  ``bean_class`` without a receiver.
* :class:`FactoryBeanMethodStrategy` resolves ``factory_bean_name`` through
  the factory and calls the named method on that bean.

Only single-constructor classes are supported, and among overloaded factory
methods the first declared signature whose arity accepts the arguments wins.
Neither rule attempts full overload resolution.
"""

from __future__ import annotations

import inspect
import typing
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from pybean.container.definition import BeanDefinition
from pybean.container.exceptions import (
    MultipleConstructorsError,
    NoMatchingConstructorError,
    NoMatchingFactoryMethodError,
)

if TYPE_CHECKING:
    from pybean.container.factory import BeanFactory


@runtime_checkable
class InstantiationStrategy(Protocol):
    """Builds the raw object described by a definition."""

    def instantiate(self, bean_name: str, definition: BeanDefinition, factory: BeanFactory) -> Any: ...


# ---------------------------------------------------------------------------
# Signature helpers
# ---------------------------------------------------------------------------


def declared_constructors(cls: type) -> list[Callable[..., Any]]:
    """Return the constructors a class declares: its ``@overload`` variants, else ``__init__``."""
    init = cls.__init__  # type: ignore[misc]
    if init is object.__init__:
        return [init]
    return list(typing.get_overloads(init)) or [init]


def _signature(func: Callable[..., Any], *, drop_first: bool) -> inspect.Signature | None:
    try:
        sig = inspect.signature(func)
    except (TypeError, ValueError):
        return None
    if drop_first:
        params = list(sig.parameters.values())[1:]
        sig = sig.replace(parameters=params)
    return sig


def _type_hints(func: Callable[..., Any]) -> dict[str, Any]:
    try:
        return typing.get_type_hints(func)
    except Exception:
        # Unresolvable forward references: fall back to arity-only matching.
        return {}


def argument_mismatch(
    func: Callable[..., Any],
    args: list[Any],
    *,
    drop_first: bool = False,
) -> str | None:
    """Return why *args* cannot be passed positionally to *func*, or None if they fit.

    Arity is checked with ``Signature.bind``; parameters annotated with a plain
    class are also checked with ``isinstance``. ``None`` is accepted for any
    class-typed parameter.
    """
    sig = _signature(func, drop_first=drop_first)
    if sig is None:
        return None
    try:
        bound = sig.bind(*args)
    except TypeError as exc:
        return f"expected signature {sig}, got {len(args)} argument(s): {exc}"

    hints = _type_hints(func)
    for name, value in bound.arguments.items():
        if sig.parameters[name].kind is inspect.Parameter.VAR_POSITIONAL:
            continue
        hint = hints.get(name)
        if value is None or not isinstance(hint, type) or typing.get_args(hint):
            continue
        try:
            compatible = isinstance(value, hint)
        except TypeError:
            continue
        if not compatible:
            return (
                f"parameter '{name}' expects {hint.__qualname__}, "
                f"got {type(value).__qualname__}"
            )
    return None


def resolve_method(
    owner: Any,
    method_name: str,
    args: list[Any],
    bean_name: str,
) -> Callable[..., Any]:
    """Find *method_name* on *owner* whose first declared overload fits *args*."""
    method = getattr(owner, method_name, None)
    if method is None or not callable(method):
        raise NoMatchingFactoryMethodError(
            owner=owner if isinstance(owner, type) else type(owner),
            method_name=method_name,
            bean_name=bean_name,
            reason="no such method",
        )

    overloads = list(typing.get_overloads(method))
    candidates = overloads or [method]
    # Overload stubs are unbound; drop ``self``/``cls`` when the target is a bound method.
    drop_first = bool(overloads) and inspect.ismethod(method)
    reasons: list[str] = []
    for candidate in candidates:
        mismatch = argument_mismatch(candidate, args, drop_first=drop_first)
        if mismatch is None:
            return method
        reasons.append(mismatch)
    raise NoMatchingFactoryMethodError(
        owner=owner if isinstance(owner, type) else type(owner),
        method_name=method_name,
        bean_name=bean_name,
        reason="; ".join(reasons),
    )


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------


class ConstructorInstantiationStrategy:
    """Build a bean by calling its class."""

    def instantiate(self, bean_name: str, definition: BeanDefinition, factory: BeanFactory) -> Any:
        cls = definition.bean_class
        assert cls is not None
        args = factory.resolve_argument_values(definition)

        if definition.constructor is None:
            constructors = declared_constructors(cls)
            if len(constructors) > 1:
                raise MultipleConstructorsError(bean_class=cls, count=len(constructors))
            init = constructors[0]
            if init is object.__init__:
                if args:
                    raise NoMatchingConstructorError(
                        bean_class=cls,
                        bean_name=bean_name,
                        reason=f"{cls.__qualname__} takes no arguments, got {len(args)}",
                    )
            else:
                mismatch = argument_mismatch(init, args, drop_first=True)
                if mismatch is not None:
                    raise NoMatchingConstructorError(
                        bean_class=cls, bean_name=bean_name, reason=mismatch
                    )
            definition.constructor = cls

        return definition.constructor(*args)


class StaticFactoryMethodStrategy:
    """Build a bean by calling a static or class method of ``bean_class``."""

    def instantiate(self, bean_name: str, definition: BeanDefinition, factory: BeanFactory) -> Any:
        cls = definition.bean_class
        method_name = definition.factory_method_name
        assert cls is not None and method_name
        args = factory.resolve_argument_values(definition)

        if definition.factory_method is None:
            raw = inspect.getattr_static(cls, method_name, None)
            if raw is not None and not isinstance(raw, (staticmethod, classmethod)):
                raise NoMatchingFactoryMethodError(
                    owner=cls,
                    method_name=method_name,
                    bean_name=bean_name,
                    reason="method is not a staticmethod or classmethod",
                )
            definition.factory_method = resolve_method(cls, method_name, args, bean_name)

        return definition.factory_method(*args)


class FactoryBeanMethodStrategy:
    """Build a bean by calling a method on another bean."""

    def instantiate(self, bean_name: str, definition: BeanDefinition, factory: BeanFactory) -> Any:
        factory_bean_name = definition.factory_bean_name
        method_name = definition.factory_method_name
        assert factory_bean_name and method_name
        factory_bean = factory.get_bean(factory_bean_name)
        args = factory.resolve_argument_values(definition)

        method = definition.factory_method
        if method is None or getattr(method, "__self__", None) is not factory_bean:
            method = resolve_method(factory_bean, method_name, args, bean_name)
            definition.factory_method = method

        return method(*args)


CONSTRUCTOR = ConstructorInstantiationStrategy()
STATIC_FACTORY_METHOD = StaticFactoryMethodStrategy()
FACTORY_BEAN_METHOD = FactoryBeanMethodStrategy()


def strategy_for(definition: BeanDefinition) -> InstantiationStrategy:
    """Select the strategy matching the definition's shape."""
    return {
        "factory_bean_method": FACTORY_BEAN_METHOD,
        "static_factory_method": STATIC_FACTORY_METHOD,
        "constructor": CONSTRUCTOR,
    }[definition.build_strategy]
