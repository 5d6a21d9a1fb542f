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
"""Tests for the constructor, static-factory and factory-bean instantiation strategies."""

from __future__ import annotations

from typing import overload

import pytest

from pybean.container.definition import BeanDefinition, BeanReference
from pybean.container.exceptions import (
    MultipleConstructorsError,
    NoMatchingConstructorError,
    NoMatchingFactoryMethodError,
    NoSuchBeanError,
)
from pybean.container.factory import BeanFactory
from pybean.container.instantiation import (
    CONSTRUCTOR,
    FACTORY_BEAN_METHOD,
    STATIC_FACTORY_METHOD,
    argument_mismatch,
    declared_constructors,
    strategy_for,
)
from pybean.container.types import Scope


class Engine:
    pass


class Car:
    def __init__(self, engine: Engine, wheels: int = 4) -> None:
        self.engine = engine
        self.wheels = wheels


class Overloaded:
    @overload
    def __init__(self, a: int) -> None: ...

    @overload
    def __init__(self, a: int, b: int) -> None: ...

    def __init__(self, a: int, b: int = 0) -> None:
        self.total = a + b


class Plain:
    pass


class Factories:
    def __init__(self) -> None:
        self.prefix = "made"

    @staticmethod
    def make_engine() -> Engine:
        return Engine()

    @classmethod
    def make_car(cls, engine: Engine) -> Car:
        return Car(engine)

    @overload
    @staticmethod
    def pick(a: str) -> str: ...

    @overload
    @staticmethod
    def pick(a: str, b: str) -> str: ...

    @staticmethod
    def pick(*parts: str) -> str:
        return "-".join(parts)

    def label(self, suffix: str) -> str:
        return f"{self.prefix}:{suffix}"

    def not_static(self) -> str:
        return "nope"


class TestStrategySelection:
    def test_constructor(self):
        assert strategy_for(BeanDefinition(bean_class=Car)) is CONSTRUCTOR

    def test_static_factory(self):
        definition = BeanDefinition(bean_class=Factories, factory_method_name="make_engine")
        assert strategy_for(definition) is STATIC_FACTORY_METHOD

    def test_factory_bean(self):
        definition = BeanDefinition(
            return_type=str, factory_bean_name="factories", factory_method_name="label"
        )
        assert strategy_for(definition) is FACTORY_BEAN_METHOD


class TestConstructorStrategy:
    def test_builds_with_resolved_arguments(self):
        factory = BeanFactory()
        factory.register_bean_definition("engine", BeanDefinition(bean_class=Engine))
        factory.register_bean_definition(
            "car", BeanDefinition(bean_class=Car, argument_values=[BeanReference("engine"), 6])
        )
        car = factory.get_bean("car")
        assert car.engine is factory.get_bean("engine")
        assert car.wheels == 6

    def test_too_many_arguments_raise(self):
        factory = BeanFactory()
        factory.register_bean_definition(
            "plain", BeanDefinition(bean_class=Plain, argument_values=[1])
        )
        with pytest.raises(NoMatchingConstructorError):
            factory.get_bean("plain")

    def test_missing_argument_raises(self):
        factory = BeanFactory()
        factory.register_bean_definition("car", BeanDefinition(bean_class=Car))
        with pytest.raises(NoMatchingConstructorError) as exc_info:
            factory.get_bean("car")
        assert exc_info.value.bean_class is Car

    def test_wrong_argument_type_raises(self):
        factory = BeanFactory()
        factory.register_bean_definition(
            "car", BeanDefinition(bean_class=Car, argument_values=["not an engine"])
        )
        with pytest.raises(NoMatchingConstructorError) as exc_info:
            factory.get_bean("car")
        assert "engine" in str(exc_info.value)

    def test_multiple_constructors_are_rejected(self):
        assert len(declared_constructors(Overloaded)) == 2
        factory = BeanFactory()
        factory.register_bean_definition(
            "overloaded", BeanDefinition(bean_class=Overloaded, argument_values=[1])
        )
        with pytest.raises(MultipleConstructorsError) as exc_info:
            factory.get_bean("overloaded")
        assert exc_info.value.count == 2


class TestStaticFactoryMethodStrategy:
    def test_static_method(self):
        factory = BeanFactory()
        factory.register_bean_definition(
            "engine",
            BeanDefinition(bean_class=Factories, return_type=Engine, factory_method_name="make_engine"),
        )
        assert isinstance(factory.get_bean("engine"), Engine)

    def test_class_method_with_reference_argument(self):
        factory = BeanFactory()
        factory.register_bean_definition("engine", BeanDefinition(bean_class=Engine))
        factory.register_bean_definition(
            "car",
            BeanDefinition(
                bean_class=Factories,
                return_type=Car,
                factory_method_name="make_car",
                argument_values=[BeanReference("engine")],
            ),
        )
        assert factory.get_bean("car").engine is factory.get_bean("engine")

    def test_first_fitting_overload_is_used(self):
        factory = BeanFactory()
        factory.register_bean_definition(
            "picked",
            BeanDefinition(
                bean_class=Factories,
                return_type=str,
                factory_method_name="pick",
                argument_values=["a", "b"],
            ),
        )
        assert factory.get_bean("picked") == "a-b"

    def test_no_overload_fits(self):
        factory = BeanFactory()
        factory.register_bean_definition(
            "picked",
            BeanDefinition(
                bean_class=Factories,
                return_type=str,
                factory_method_name="pick",
                argument_values=["a", "b", "c"],
            ),
        )
        with pytest.raises(NoMatchingFactoryMethodError):
            factory.get_bean("picked")

    def test_unknown_method(self):
        factory = BeanFactory()
        factory.register_bean_definition(
            "x", BeanDefinition(bean_class=Factories, factory_method_name="missing")
        )
        with pytest.raises(NoMatchingFactoryMethodError) as exc_info:
            factory.get_bean("x")
        assert exc_info.value.method_name == "missing"

    def test_instance_method_is_not_a_static_factory(self):
        factory = BeanFactory()
        factory.register_bean_definition(
            "x", BeanDefinition(bean_class=Factories, factory_method_name="not_static")
        )
        with pytest.raises(NoMatchingFactoryMethodError):
            factory.get_bean("x")

    def test_prototype_caches_resolved_method(self):
        factory = BeanFactory()
        definition = BeanDefinition(
            bean_class=Factories,
            return_type=Engine,
            factory_method_name="make_engine",
            scope=Scope.PROTOTYPE,
        )
        factory.register_bean_definition("engine", definition)
        first = factory.get_bean("engine")
        assert definition.factory_method is not None
        assert factory.get_bean("engine") is not first


class TestFactoryBeanMethodStrategy:
    def test_calls_method_on_factory_bean(self):
        factory = BeanFactory()
        factory.register_bean_definition("factories", BeanDefinition(bean_class=Factories))
        factory.register_bean_definition(
            "label",
            BeanDefinition(
                return_type=str,
                factory_bean_name="factories",
                factory_method_name="label",
                argument_values=["x"],
            ),
        )
        assert factory.get_bean("label") == "made:x"

    def test_factory_bean_is_built_on_demand(self):
        factory = BeanFactory()
        factory.register_bean_definition("factories", BeanDefinition(bean_class=Factories))
        factory.register_bean_definition(
            "label",
            BeanDefinition(
                return_type=str,
                factory_bean_name="factories",
                factory_method_name="label",
                argument_values=["x"],
            ),
        )
        assert not factory.contains_singleton("factories")
        factory.get_bean("label")
        assert factory.contains_singleton("factories")

    def test_unknown_factory_bean(self):
        factory = BeanFactory()
        factory.register_bean_definition(
            "label",
            BeanDefinition(return_type=str, factory_bean_name="nobody", factory_method_name="label"),
        )
        with pytest.raises(NoSuchBeanError):
            factory.get_bean("label")

    def test_arity_mismatch(self):
        factory = BeanFactory()
        factory.register_bean_definition("factories", BeanDefinition(bean_class=Factories))
        factory.register_bean_definition(
            "label",
            BeanDefinition(return_type=str, factory_bean_name="factories", factory_method_name="label"),
        )
        with pytest.raises(NoMatchingFactoryMethodError):
            factory.get_bean("label")


class TestArgumentMismatch:
    def test_fits(self):
        assert argument_mismatch(Car.__init__, [Engine()], drop_first=True) is None

    def test_none_is_accepted_for_class_parameters(self):
        assert argument_mismatch(Car.__init__, [None], drop_first=True) is None

    def test_reports_type_mismatch(self):
        reason = argument_mismatch(Car.__init__, [Engine(), "four"], drop_first=True)
        assert reason is not None
        assert "wheels" in reason
