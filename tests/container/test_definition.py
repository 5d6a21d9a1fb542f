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
"""Tests for BeanDefinition validation, defaults and build-strategy selection."""

from __future__ import annotations

from pybean.container.definition import BeanDefinition, BeanReference, PropertyValue
from pybean.container.types import Scope, canonical_bean_name


class Greeter:
    def shout(self) -> str:
        return "HELLO"


class TestDefaults:
    def test_return_type_defaults_to_bean_class(self):
        definition = BeanDefinition(bean_class=Greeter)
        assert definition.return_type is Greeter

    def test_explicit_return_type_is_kept(self):
        definition = BeanDefinition(bean_class=Greeter, return_type=object)
        assert definition.return_type is object

    def test_singleton_is_default_scope(self):
        definition = BeanDefinition(bean_class=Greeter)
        assert definition.is_singleton
        assert not definition.is_prototype

    def test_prototype_scope(self):
        definition = BeanDefinition(bean_class=Greeter, scope=Scope.PROTOTYPE)
        assert definition.is_prototype
        assert not definition.is_singleton


class TestValidate:
    def test_constructor_definition_is_valid(self):
        assert BeanDefinition(bean_class=Greeter).validate()

    def test_static_factory_definition_is_valid(self):
        assert BeanDefinition(bean_class=Greeter, factory_method_name="create").validate()

    def test_factory_bean_definition_is_valid(self):
        definition = BeanDefinition(
            return_type=str, factory_bean_name="greeter", factory_method_name="shout"
        )
        assert definition.validate()

    def test_missing_return_type_is_invalid(self):
        definition = BeanDefinition(factory_bean_name="greeter", factory_method_name="shout")
        assert not definition.validate()

    def test_factory_bean_without_method_is_invalid(self):
        definition = BeanDefinition(return_type=str, factory_bean_name="greeter")
        assert not definition.validate()

    def test_bean_class_and_factory_bean_are_exclusive(self):
        definition = BeanDefinition(
            bean_class=Greeter, factory_bean_name="greeter", factory_method_name="shout"
        )
        assert not definition.validate()

    def test_no_bean_class_and_no_factory_bean_is_invalid(self):
        assert not BeanDefinition(return_type=str).validate()

    def test_blank_factory_bean_name_counts_as_missing(self):
        definition = BeanDefinition(return_type=str, factory_bean_name="  ", factory_method_name="shout")
        assert not definition.validate()


class TestBuildStrategy:
    def test_constructor(self):
        assert BeanDefinition(bean_class=Greeter).build_strategy == "constructor"

    def test_static_factory_method(self):
        definition = BeanDefinition(bean_class=Greeter, factory_method_name="create")
        assert definition.build_strategy == "static_factory_method"

    def test_factory_bean_method_wins_when_factory_bean_is_set(self):
        definition = BeanDefinition(
            return_type=str, factory_bean_name="greeter", factory_method_name="shout"
        )
        assert definition.build_strategy == "factory_bean_method"


class TestPropertyValues:
    def test_add_property_value_appends(self):
        definition = BeanDefinition(bean_class=Greeter)
        definition.add_property_value(PropertyValue("a", 1))
        definition.add_property_value(PropertyValue("b", BeanReference("other")))
        assert [pv.name for pv in definition.property_values] == ["a", "b"]

    def test_add_property_value_replaces_same_name(self):
        definition = BeanDefinition(bean_class=Greeter)
        definition.add_property_value(PropertyValue("a", 1))
        definition.add_property_value(PropertyValue("a", 2))
        assert definition.property_values == [PropertyValue("a", 2)]


class TestEquality:
    def test_equal_definitions_compare_equal(self):
        first = BeanDefinition(bean_class=Greeter, argument_values=[BeanReference("x")])
        second = BeanDefinition(bean_class=Greeter, argument_values=[BeanReference("x")])
        assert first == second

    def test_cached_handles_do_not_affect_equality(self):
        first = BeanDefinition(bean_class=Greeter)
        second = BeanDefinition(bean_class=Greeter)
        first.constructor = Greeter
        assert first == second

    def test_different_scope_is_not_equal(self):
        assert BeanDefinition(bean_class=Greeter) != BeanDefinition(
            bean_class=Greeter, scope=Scope.PROTOTYPE
        )


class TestCanonicalBeanName:
    def test_lowercases_first_letter(self):
        assert canonical_bean_name("OrderService") == "orderService"

    def test_empty_name(self):
        assert canonical_bean_name("") == ""

    def test_already_lower(self):
        assert canonical_bean_name("greeter") == "greeter"
