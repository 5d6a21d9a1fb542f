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
"""Tests for aspects discovered by the context and applied to other beans."""

from __future__ import annotations

from typing import Any

import pytest

from pybean.aop.advisor import Advisor
from pybean.aop.decorators import after_returning, around, aspect, before
from pybean.aop.proxy import get_proxy_target, is_proxy
from pybean.aop.types import AROUND, BEFORE, JoinPoint
from pybean.container.autowired import Autowired
from pybean.container.bean import bean
from pybean.container.exceptions import NoSuchBeanError
from pybean.container.ordering import order
from pybean.container.stereotypes import component, configuration, service
from pybean.context.application_context import ApplicationContext


@service
class Inventory:
    def __init__(self) -> None:
        self.stock = {"apple": 3}

    def reserve(self, item: str) -> int:
        self.stock[item] -= 1
        return self.stock[item]

    def count(self, item: str) -> int:
        return self.stock[item]


@component
class Checkout:
    inventory: Inventory = Autowired()

    def buy(self, item: str) -> int:
        return self.inventory.reserve(item)


@aspect
@order(1)
class AuditAspect:
    calls: list[str] = []

    @before("**.Inventory.reserve")
    def log_before(self, jp: JoinPoint) -> None:
        AuditAspect.calls.append(f"before:{jp.method_name}:{jp.args[0]}")

    @after_returning("**.Inventory.reserve")
    def log_after(self, jp: JoinPoint) -> None:
        AuditAspect.calls.append(f"returned:{jp.return_value}")


@aspect
@order(0)
class TimingAspect:
    calls: list[str] = []

    @around("**.Inventory.reserve")
    def timed(self, jp: JoinPoint) -> Any:
        TimingAspect.calls.append("enter")
        result = jp.proceed()
        TimingAspect.calls.append("exit")
        return result


class StockGuard:
    def __init__(self) -> None:
        self.seen: list[str] = []

    def __call__(self, jp: JoinPoint) -> None:
        self.seen.append(f"{jp.method_name}:{jp.args[0]}")


@configuration
class AdviceConfig:
    @bean(name="stockGuard")
    def stock_guard(self) -> StockGuard:
        return StockGuard()


@pytest.fixture(autouse=True)
def reset_calls():
    AuditAspect.calls = []
    TimingAspect.calls = []


def make_context(*classes: type) -> ApplicationContext:
    context = ApplicationContext(classes=classes)
    context.initialize()
    return context


class TestAspectsInContext:
    def test_matched_bean_is_replaced_by_proxy(self):
        context = make_context(Inventory, AuditAspect)
        inventory = context.get_bean("inventory")

        assert is_proxy(inventory)
        assert isinstance(inventory, Inventory)
        assert isinstance(get_proxy_target(inventory), Inventory)
        assert context.get_bean("inventory") is inventory

    def test_matched_method_runs_advice_and_body(self):
        context = make_context(Inventory, AuditAspect)
        inventory = context.get_bean("inventory")

        assert inventory.reserve("apple") == 2
        assert AuditAspect.calls == ["before:reserve:apple", "returned:2"]

    def test_unmatched_method_runs_without_advice(self):
        context = make_context(Inventory, AuditAspect)
        inventory = context.get_bean("inventory")

        assert inventory.count("apple") == 3
        assert AuditAspect.calls == []

    def test_proxy_is_injected_into_dependents(self):
        context = make_context(Checkout, Inventory, AuditAspect)
        checkout = context.get_bean("checkout")

        assert checkout.inventory is context.get_bean("inventory")
        assert checkout.buy("apple") == 2
        assert AuditAspect.calls == ["before:reserve:apple", "returned:2"]

    def test_aspects_are_registered_and_never_proxied(self):
        context = make_context(Inventory, AuditAspect, TimingAspect)
        assert len(context.advisor_registry) == 3
        assert not is_proxy(context.get_bean("auditAspect"))
        assert context.get_component_property(AuditAspect).stereotype == "aspect"

    def test_lower_order_wraps_higher_order(self):
        context = make_context(Inventory, AuditAspect, TimingAspect)
        context.get_bean("inventory").reserve("apple")
        assert TimingAspect.calls == ["enter", "exit"]
        assert [a.order for a in context.advisor_registry.advisors] == [0, 1, 1]

    def test_bean_without_matching_advisor_is_untouched(self):
        context = make_context(Checkout, Inventory, AuditAspect)
        assert not is_proxy(context.get_bean("checkout"))

    def test_no_aspects_no_proxies(self):
        context = make_context(Inventory)
        assert type(context.get_bean("inventory")) is Inventory

    def test_programmatic_advisor(self):
        context = make_context(Inventory)
        seen: list[str] = []

        def doubling(jp: JoinPoint) -> Any:
            seen.append(jp.method_name)
            return jp.proceed() * 2

        context.register_advisor(Advisor.of("**.Inventory.count", AROUND, doubling))
        inventory = context.get_bean("inventory")

        assert inventory.count("apple") == 6
        assert inventory.reserve("apple") == 2
        assert seen == ["count"]

    def test_advice_bean_is_looked_up_when_a_call_is_intercepted(self):
        context = make_context(Inventory, AdviceConfig)
        context.register_advisor(
            Advisor.of("**.Inventory.reserve", BEFORE, advice_bean_name="stockGuard")
        )
        inventory = context.get_bean("inventory")

        assert is_proxy(inventory)
        assert not context.contains_singleton("stockGuard")
        assert inventory.reserve("apple") == 2
        assert context.get_bean("stockGuard").seen == ["reserve:apple"]

    def test_missing_advice_bean_fails_on_call(self):
        context = make_context(Inventory)
        context.register_advisor(
            Advisor.of("**.Inventory.reserve", BEFORE, advice_bean_name="ghostAdvice")
        )
        inventory = context.get_bean("inventory")

        with pytest.raises(NoSuchBeanError):
            inventory.reserve("apple")
