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
"""BeanFactory — the bean-definition registry and instantiation engine."""

from __future__ import annotations

import difflib
import logging
import threading
from typing import Any, TypeVar, cast

from pybean.container.definition import BeanDefinition, BeanReference
from pybean.container.exceptions import (
    BeanCurrentlyInCreationError,
    BeanInitializationError,
    DuplicateBeanDefinitionError,
    InvalidBeanDefinitionError,
    NoSuchBeanError,
    NoUniqueBeanError,
)
from pybean.container.instantiation import strategy_for
from pybean.container.post_processor import BeanPostProcessor
from pybean.container.types import canonical_bean_name

T = TypeVar("T")

logger = logging.getLogger(__name__)

_MISSING = object()


class BeanFactory:
    """Owns bean definitions and the singleton cache, and builds beans on request.

    ``get_bean`` resolves the definition, picks an instantiation strategy,
    injects property values, runs post-processors around the init method and
    caches the final object when the bean is singleton-scoped.

    Singleton creation uses double-checked locking on a single re-entrant
    lock, so concurrent first requests for the same name build the bean once.
    Prototype beans are built without taking the lock.
    """

    def __init__(self) -> None:
        self._definitions: dict[str, BeanDefinition] = {}
        self._singletons: dict[str, Any] = {}
        self._singleton_order: list[str] = []
        self._post_processors: list[BeanPostProcessor] = []
        self._registry_lock = threading.Lock()
        self._creation_lock = threading.RLock()
        self._local = threading.local()

    # ------------------------------------------------------------------
    # Definitions
    # ------------------------------------------------------------------

    def register_bean_definition(self, name: str, definition: BeanDefinition) -> None:
        """Register *definition* under *name*.

        Raises:
            InvalidBeanDefinitionError: blank name or ``definition.validate()`` fails.
            DuplicateBeanDefinitionError: *name* is already registered.
        """
        if not name or not name.strip():
            raise InvalidBeanDefinitionError(bean_name=name, reason="bean name is blank")
        if not definition.validate():
            raise InvalidBeanDefinitionError(bean_name=name, reason=_invalid_reason(definition))
        with self._registry_lock:
            if name in self._definitions:
                raise DuplicateBeanDefinitionError(bean_name=name)
            self._definitions[name] = definition
        logger.debug("Registered bean definition '%s' (%s)", name, definition.build_strategy)

    def get_bean_definition(self, name: str) -> BeanDefinition | None:
        return self._definitions.get(name)

    def contains_bean_definition(self, name: str) -> bool:
        return name in self._definitions

    @property
    def bean_definition_names(self) -> list[str]:
        """Registered bean names in registration order."""
        return list(self._definitions)

    # ------------------------------------------------------------------
    # Post-processors
    # ------------------------------------------------------------------

    def register_post_processor(self, processor: BeanPostProcessor) -> None:
        """Append *processor*; processors run in registration order after every build."""
        self._post_processors.append(processor)

    @property
    def post_processors(self) -> list[BeanPostProcessor]:
        return list(self._post_processors)

    # ------------------------------------------------------------------
    # Bean access
    # ------------------------------------------------------------------

    def get_bean(self, name: str) -> Any:
        """Return the bean registered under *name*, building it if needed."""
        instance = self._singletons.get(name, _MISSING)
        if instance is not _MISSING:
            return instance

        definition = self._definitions.get(name)
        if definition is None:
            raise NoSuchBeanError(
                bean_name=name,
                required_by=self._current_creation(),
                suggestions=difflib.get_close_matches(name, list(self._definitions), n=5, cutoff=0.6),
            )

        if not definition.is_singleton:
            return self._create_bean(name, definition)

        with self._creation_lock:
            instance = self._singletons.get(name, _MISSING)
            if instance is not _MISSING:
                return instance
            instance = self._create_bean(name, definition)
            self._singletons[name] = instance
            self._singleton_order.append(name)
        return instance

    def get_bean_by_type(self, bean_type: type[T]) -> T:
        """Resolve a bean by type.

        When more than one bean name implements *bean_type* the lookup fails
        with :class:`NoUniqueBeanError`; exactly one candidate is returned
        directly. Otherwise the lower-camel-case simple name of *bean_type* is
        used as the bean name.
        """
        candidates = self._candidate_names_for_type(bean_type)
        if len(candidates) > 1:
            raise NoUniqueBeanError(bean_type=bean_type, candidates=candidates)
        if len(candidates) == 1:
            return cast(T, self.get_bean(candidates[0]))

        name = canonical_bean_name(bean_type.__name__)
        if name not in self._definitions and name not in self._singletons:
            raise NoSuchBeanError(
                bean_type=bean_type,
                bean_name=name,
                suggestions=difflib.get_close_matches(name, list(self._definitions), n=5, cutoff=0.6),
            )
        return cast(T, self.get_bean(name))

    def contains_singleton(self, name: str) -> bool:
        return name in self._singletons

    @property
    def singleton_count(self) -> int:
        return len(self._singletons)

    # ------------------------------------------------------------------
    # Value resolution
    # ------------------------------------------------------------------

    def resolve_value(self, value: Any) -> Any:
        """Resolve a literal or :class:`BeanReference` into a concrete value."""
        if isinstance(value, BeanReference):
            return self.get_bean(value.name)
        return value

    def resolve_argument_values(self, definition: BeanDefinition) -> list[Any]:
        return [self.resolve_value(value) for value in definition.argument_values]

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    def destroy_singletons(self) -> None:
        """Run destroy methods of cached singletons in reverse creation order and clear the cache.

        A failing destroy method is logged; the remaining singletons are still destroyed.
        """
        with self._creation_lock:
            names = list(reversed(self._singleton_order))
            for name in names:
                definition = self._definitions.get(name)
                instance = self._singletons.get(name)
                method_name = definition.destroy_method_name if definition else None
                if not method_name:
                    continue
                method = getattr(instance, method_name, None)
                if method is None or not callable(method):
                    logger.warning("Destroy method '%s' not found on bean '%s'", method_name, name)
                    continue
                try:
                    method()
                except Exception:
                    logger.exception("Destroy method '%s' of bean '%s' failed", method_name, name)
            self._singletons.clear()
            self._singleton_order.clear()

    # ------------------------------------------------------------------
    # Hooks for subclasses
    # ------------------------------------------------------------------

    def _candidate_names_for_type(self, bean_type: type) -> list[str]:
        """Bean names known to implement *bean_type*; the plain factory knows none."""
        return []

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _creation_stack(self) -> list[str]:
        stack = getattr(self._local, "stack", None)
        if stack is None:
            stack = []
            self._local.stack = stack
        return stack

    def _current_creation(self) -> str | None:
        stack = self._creation_stack()
        return stack[-1] if stack else None

    def _create_bean(self, name: str, definition: BeanDefinition) -> Any:
        stack = self._creation_stack()
        if name in stack:
            raise BeanCurrentlyInCreationError(chain=list(stack), current=name)
        stack.append(name)
        try:
            bean = strategy_for(definition).instantiate(name, definition, self)
            self._apply_property_values(bean, definition)

            for processor in self._post_processors:
                bean = processor.before_init(bean, name)

            self._invoke_init_method(bean, name, definition)

            for processor in self._post_processors:
                bean = processor.after_init(bean, name)

            logger.debug("Created bean '%s' via %s", name, definition.build_strategy)
            return bean
        finally:
            stack.pop()

    def _apply_property_values(self, bean: Any, definition: BeanDefinition) -> None:
        for property_value in definition.property_values:
            setattr(bean, property_value.name, self.resolve_value(property_value.value))

    @staticmethod
    def _invoke_init_method(bean: Any, name: str, definition: BeanDefinition) -> None:
        method_name = definition.init_method_name
        if not method_name:
            return
        method = getattr(bean, method_name, None)
        if method is None or not callable(method):
            raise BeanInitializationError(
                bean_name=name, method_name=method_name, reason="no such method"
            )
        try:
            method()
        except Exception as exc:
            raise BeanInitializationError(
                bean_name=name,
                method_name=method_name,
                reason=f"{type(exc).__name__}: {exc}",
            ) from exc


def _invalid_reason(definition: BeanDefinition) -> str:
    if definition.return_type is None:
        return "return type is missing"
    if definition.bean_class is None:
        return "without bean_class both factory_bean_name and factory_method_name are required"
    return "bean_class and factory_bean_name are mutually exclusive"
