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
"""ApplicationContext — discovers annotated classes and turns them into bean definitions."""

from __future__ import annotations

import abc
import inspect
import logging
import threading
import types
import typing
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Annotated, Any

from pybean.aop.advisor import Advisor
from pybean.aop.decorators import is_aspect
from pybean.aop.post_processor import AdvisorAutoProxyCreator
from pybean.aop.registry import AdvisorRegistry
from pybean.container.autowired import Autowired
from pybean.container.bean import Qualifier, is_bean_method
from pybean.container.definition import BeanDefinition, BeanReference, PropertyValue
from pybean.container.exceptions import (
    BeanCreationException,
    InvalidBeanDefinitionError,
    MultipleConstructorsError,
    NoSuchBeanError,
    NoUniqueBeanError,
)
from pybean.container.factory import BeanFactory
from pybean.container.instantiation import declared_constructors
from pybean.container.stereotypes import is_component
from pybean.container.types import Scope, canonical_bean_name
from pybean.context.component import Ambiguous, ComponentProperty, NoCandidate, TypeResolution, Unique
from pybean.context.scanner import ClassScanner, PackageScanner
from pybean.core.config import Config
from pybean.core.value import Value
from pybean.logging.port import LoggingPort
from pybean.logging.structlog_adapter import StructlogAdapter

logger = logging.getLogger(__name__)


def component_name(cls: type) -> str:
    """Bean name of a marked class: the explicit name, else its lower-camel-case class name.

    Returns an empty string for classes that carry no stereotype marker.
    """
    if not is_component(cls):
        return ""
    explicit = vars(cls).get("__pybean_bean_name__", "") or ""
    return explicit.strip() or canonical_bean_name(cls.__name__)


def is_interface(tp: Any) -> bool:
    """True for Protocol classes and abstract classes."""
    if not isinstance(tp, type) or tp in (object, typing.Protocol, typing.Generic):
        return False
    if getattr(tp, "_is_protocol", False):
        return True
    return inspect.isabstract(tp) or abc.ABC in tp.__bases__


class ApplicationContext(BeanFactory):
    """Bean factory populated from decorated classes.

    :meth:`initialize` runs two passes over the discovered classes. The first
    registers one definition per component plus one per ``@bean`` method, so
    every name exists before anything is wired. The second records the
    dependencies of each component: ``Autowired``/``Value`` fields become
    property values, constructor and ``@bean`` parameters become argument
    values. Advisors are then collected from ``@aspect`` beans and, when
    ``pybean.context.eager-init`` is set, every singleton is built.

    Usage::

        context = ApplicationContext(classes=[OrderRepository, OrderService])
        context.initialize()
        service = context.get_bean("orderService")
    """

    def __init__(
        self,
        config: Config | None = None,
        *,
        classes: Iterable[type] | None = None,
        scanner: ClassScanner | None = None,
    ) -> None:
        super().__init__()
        self._config = config if config is not None else Config()
        self._classes = list(classes) if classes is not None else None
        self._scanner = scanner if scanner is not None else PackageScanner()
        self._scanned_classes: list[type] = []
        self._component_properties: dict[type, ComponentProperty] = {}
        self._type_to_bean_names: dict[type, list[str]] | None = None
        self._type_map_lock = threading.Lock()
        self._initialized = False

        self._advisor_registry = AdvisorRegistry()
        self._proxy_creator = AdvisorAutoProxyCreator(self._advisor_registry, self)
        self.register_post_processor(self._proxy_creator)

    @classmethod
    def from_config_file(
        cls,
        path: str | Path,
        *,
        active_profiles: list[str] | None = None,
        scanner: ClassScanner | None = None,
        logging_port: LoggingPort | None = None,
    ) -> ApplicationContext:
        """Load configuration from *path*, configure logging and return an uninitialized context."""
        config = Config.from_file(path, active_profiles=active_profiles)
        port = logging_port if logging_port is not None else StructlogAdapter()
        port.configure(config)
        return cls(config, scanner=scanner)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def config(self) -> Config:
        return self._config

    @property
    def advisor_registry(self) -> AdvisorRegistry:
        return self._advisor_registry

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def scanned_classes(self) -> list[type]:
        """Discovered classes in processing order."""
        return list(self._scanned_classes)

    @property
    def component_properties(self) -> list[ComponentProperty]:
        return list(self._component_properties.values())

    def get_component_property(self, component_class: type) -> ComponentProperty | None:
        return self._component_properties.get(component_class)

    def process_scanned_classes(self, consumer: Callable[[type], None]) -> None:
        for cls in self._scanned_classes:
            consumer(cls)

    def process_component_properties(self, consumer: Callable[[ComponentProperty], None]) -> None:
        for component in self._component_properties.values():
            consumer(component)

    def process_component_property(
        self, consumer: Callable[[ComponentProperty], None], component_class: type
    ) -> None:
        """Pass the metadata of *component_class* to *consumer*.

        Raises:
            NoSuchBeanError: *component_class* is not a discovered component.
        """
        component = self._component_properties.get(component_class)
        if component is None:
            raise NoSuchBeanError(bean_type=component_class)
        consumer(component)

    def register_advisor(self, advisor: Advisor) -> None:
        """Add an advisor; it applies to beans built from now on."""
        self._advisor_registry.register(advisor)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self) -> None:
        """Discover classes, register and wire their definitions, collect advisors.

        Any error aborts initialization and propagates unchanged.
        """
        if self._initialized:
            raise BeanCreationException(
                subsystem="context",
                provider=type(self).__name__,
                reason="the context is already initialized",
            )

        self._scanned_classes = self._discover_classes()
        self._type_to_bean_names = None
        logger.info("Discovered %d candidate class(es)", len(self._scanned_classes))

        for cls in self._scanned_classes:
            self._register_structure(cls)
        for cls in self._scanned_classes:
            self._register_dependencies(cls)

        self._register_aspects()
        self._initialized = True

        if self._config.get_bool("pybean.context.eager-init"):
            self.pre_instantiate_singletons()

        logger.info(
            "Application context initialized with %d bean definition(s)",
            len(self.bean_definition_names),
        )

    def pre_instantiate_singletons(self) -> None:
        """Build every singleton that is not cached yet, in registration order."""
        for name in self.bean_definition_names:
            definition = self.get_bean_definition(name)
            if definition is not None and definition.is_singleton:
                self.get_bean(name)

    def close(self) -> None:
        """Run destroy methods of all cached singletons and clear the cache."""
        self.destroy_singletons()
        logger.info("Application context closed")

    # ------------------------------------------------------------------
    # Type lookup
    # ------------------------------------------------------------------

    def resolve_bean_name_for_type(self, bean_type: type) -> TypeResolution:
        """Classify the component beans implementing the interface *bean_type*."""
        names = self._interface_map().get(bean_type, [])
        if len(names) == 1:
            return Unique(names[0])
        if names:
            return Ambiguous(tuple(names))
        return NoCandidate()

    def get_bean_names_by_type(self, bean_type: type, *, required_by: str | None = None) -> list[str]:
        """Names of the component beans implementing the interface *bean_type*.

        Raises:
            NoSuchBeanError: no component implements it.
            NoUniqueBeanError: more than one does.
        """
        resolution = self.resolve_bean_name_for_type(bean_type)
        if isinstance(resolution, Unique):
            return [resolution.name]
        if isinstance(resolution, Ambiguous):
            raise NoUniqueBeanError(
                bean_type=bean_type, candidates=list(resolution.candidates), required_by=required_by
            )
        raise NoSuchBeanError(bean_type=bean_type, required_by=required_by)

    def _candidate_names_for_type(self, bean_type: type) -> list[str]:
        return list(self._interface_map().get(bean_type, []))

    def _interface_map(self) -> dict[type, list[str]]:
        mapping = self._type_to_bean_names
        if mapping is not None:
            return mapping
        with self._type_map_lock:
            if self._type_to_bean_names is None:
                built: dict[type, list[str]] = {}
                for cls in self._scanned_classes:
                    name = component_name(cls)
                    if not name:
                        continue
                    for base in cls.__mro__:
                        if is_interface(base):
                            built.setdefault(base, []).append(name)
                self._type_to_bean_names = built
            return self._type_to_bean_names

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    def _discover_classes(self) -> list[type]:
        if self._classes is not None:
            return list(dict.fromkeys(self._classes))
        packages = self._config.get_list("pybean.scan.packages")
        if not packages:
            logger.warning("No classes given and pybean.scan.packages is empty")
            return []
        found = self._scanner.scan(packages)
        return sorted(found, key=lambda c: (c.__module__, c.__qualname__))

    # ------------------------------------------------------------------
    # Pass 1: structure
    # ------------------------------------------------------------------

    def _register_structure(self, cls: type) -> None:
        name = component_name(cls)
        if not name:
            return

        constructors = declared_constructors(cls)
        if len(constructors) > 1:
            raise MultipleConstructorsError(bean_class=cls, count=len(constructors))

        definition = BeanDefinition(
            bean_class=cls,
            scope=vars(cls).get("__pybean_scope__", Scope.SINGLETON),
            init_method_name=_lifecycle_method(cls, name, "__pybean_post_construct__"),
            destroy_method_name=_lifecycle_method(cls, name, "__pybean_pre_destroy__"),
        )
        self.register_bean_definition(name, definition)

        component = ComponentProperty(
            name=name,
            component_class=cls,
            stereotype=vars(cls).get("__pybean_stereotype__", "component"),
        )
        self._component_properties[cls] = component

        for attr_name, member in vars(cls).items():
            if not is_bean_method(member):
                continue
            produced_name, produced = _bean_method_definition(cls, name, attr_name, member)
            self.register_bean_definition(produced_name, produced)
            component.produced_beans[produced_name] = attr_name

    # ------------------------------------------------------------------
    # Pass 2: wiring
    # ------------------------------------------------------------------

    def _register_dependencies(self, cls: type) -> None:
        component = self._component_properties.get(cls)
        if component is None:
            return
        definition = self.get_bean_definition(component.name)
        assert definition is not None

        hints = _type_hints(cls)
        for field_name, marker in _field_markers(cls).items():
            if isinstance(marker, Value):
                definition.add_property_value(PropertyValue(field_name, marker.resolve(self._config)))
                continue
            target = self._dependency_name(
                component.name,
                _plain_type(hints.get(field_name)),
                marker.qualifier,
                required_by=f"{cls.__qualname__}.{field_name}",
            )
            definition.add_property_value(PropertyValue(field_name, BeanReference(target)))
            component.dependencies[field_name] = target

        if cls.__init__ is not object.__init__:
            definition.argument_values = self._parameter_values(
                component, cls.__init__, drop_first=True, label="__init__"
            )

        for produced_name, attr_name in component.produced_beans.items():
            member = vars(cls)[attr_name]
            produced = self.get_bean_definition(produced_name)
            assert produced is not None
            produced.argument_values = self._parameter_values(
                component,
                getattr(member, "__func__", member),
                drop_first=not isinstance(member, staticmethod),
                label=attr_name,
            )

    def _parameter_values(
        self,
        component: ComponentProperty,
        func: Callable[..., Any],
        *,
        drop_first: bool,
        label: str,
    ) -> list[Any]:
        """Positional argument values for *func*, one per injectable parameter.

        Wiring stops at the first parameter that has a default and neither a
        ``Qualifier`` nor a ``Value``, leaving it and the rest to their defaults.
        """
        params = list(inspect.signature(func).parameters.values())
        if drop_first:
            params = params[1:]
        hints = _type_hints(func)

        values: list[Any] = []
        for param in params:
            if param.kind not in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD):
                break
            base, qualifier, value = _unpack_annotation(hints.get(param.name))
            if value is not None:
                values.append(value.resolve(self._config))
                continue
            if param.default is not param.empty and qualifier is None:
                break
            target = self._dependency_name(
                component.name,
                base,
                qualifier,
                required_by=f"{component.component_class.__qualname__}.{label}() parameter '{param.name}'",
            )
            values.append(BeanReference(target))
            component.dependencies[f"{label}({param.name})"] = target
        return values

    def _dependency_name(
        self,
        bean_name: str,
        declared_type: Any,
        qualifier: str | None,
        *,
        required_by: str,
    ) -> str:
        if qualifier:
            return qualifier
        if not isinstance(declared_type, type):
            raise InvalidBeanDefinitionError(
                bean_name=bean_name,
                reason=f"{required_by} needs a class annotation or an explicit qualifier",
            )
        if is_interface(declared_type):
            return self.get_bean_names_by_type(declared_type, required_by=required_by)[0]
        return canonical_bean_name(declared_type.__name__)

    def _register_aspects(self) -> None:
        for cls in self._scanned_classes:
            name = component_name(cls)
            if not name or not is_aspect(cls):
                continue
            count = self._advisor_registry.register_aspect(self.get_bean(name))
            logger.info("Registered %d advisor(s) from aspect '%s'", count, name)


# ----------------------------------------------------------------------
# Module helpers
# ----------------------------------------------------------------------


def _bean_method_definition(
    cls: type, component: str, attr_name: str, member: Any
) -> tuple[str, BeanDefinition]:
    func = getattr(member, "__func__", member)
    return_type = _plain_type(_type_hints(func).get("return"))
    if not isinstance(return_type, type) or return_type is type(None):
        return_type = None

    explicit = (getattr(func, "__pybean_bean_name__", "") or "").strip()
    if explicit:
        name = explicit
    elif return_type is not None:
        name = canonical_bean_name(return_type.__name__)
    else:
        name = attr_name

    scope = getattr(func, "__pybean_bean_scope__", Scope.SINGLETON)
    if isinstance(member, (staticmethod, classmethod)):
        definition = BeanDefinition(
            bean_class=cls,
            return_type=return_type or object,
            scope=scope,
            factory_method_name=attr_name,
        )
    else:
        definition = BeanDefinition(
            return_type=return_type or object,
            scope=scope,
            factory_bean_name=component,
            factory_method_name=attr_name,
        )
    return name, definition


def _lifecycle_method(cls: type, bean_name: str, marker: str) -> str | None:
    names = [
        attr_name
        for attr_name, member in inspect.getmembers(cls, callable)
        if getattr(member, marker, False)
    ]
    if len(names) > 1:
        raise InvalidBeanDefinitionError(
            bean_name=bean_name,
            reason=f"more than one method is marked as {marker.strip('_').removeprefix('pybean_')}: {names}",
        )
    return names[0] if names else None


def _field_markers(cls: type) -> dict[str, Autowired | Value]:
    """Autowired and Value class attributes, base classes first so subclasses override."""
    markers: dict[str, Autowired | Value] = {}
    for klass in reversed(cls.__mro__):
        for attr_name, member in vars(klass).items():
            if isinstance(member, (Autowired, Value)):
                markers[attr_name] = member
            else:
                markers.pop(attr_name, None)
    return markers


def _type_hints(obj: Any) -> dict[str, Any]:
    try:
        return typing.get_type_hints(obj, include_extras=True)
    except Exception:
        logger.debug("Could not resolve type hints of %r", obj, exc_info=True)
        return {}


def _unpack_annotation(annotation: Any) -> tuple[Any, str | None, Value | None]:
    """Split ``Annotated[T, Qualifier(...), Value(...)]`` into the plain type and its markers."""
    qualifier: str | None = None
    value: Value | None = None
    if typing.get_origin(annotation) is Annotated:
        for meta in annotation.__metadata__:
            if isinstance(meta, Qualifier):
                qualifier = meta.name
            elif isinstance(meta, Value):
                value = meta
        annotation = typing.get_args(annotation)[0]
    return _plain_type(annotation), qualifier, value


def _plain_type(annotation: Any) -> Any:
    """Strip ``Annotated`` and ``Optional`` wrappers and type arguments.

    ``Repository[str]`` becomes ``Repository`` so generic interfaces resolve
    through the interface map like plain ones.
    """
    if typing.get_origin(annotation) is Annotated:
        annotation = typing.get_args(annotation)[0]
    if typing.get_origin(annotation) in (typing.Union, types.UnionType):
        args = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(args) != 1:
            return annotation
        annotation = args[0]
    origin = typing.get_origin(annotation)
    if isinstance(origin, type):
        return origin
    return annotation
