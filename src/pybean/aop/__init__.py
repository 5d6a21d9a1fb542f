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
"""Aspect-oriented programming support for pybean."""

from pybean.aop.advisor import Advice, Advisor
from pybean.aop.decorators import after, after_returning, after_throwing, around, aspect, before
from pybean.aop.pointcut import ExpressionPointcut, Pointcut, matches_pointcut
from pybean.aop.post_processor import AdvisorAutoProxyCreator
from pybean.aop.proxy import AopProxy, DefaultProxyFactory, ProxyFactory, get_proxy_target, is_proxy
from pybean.aop.registry import AdvisorRegistry
from pybean.aop.types import JoinPoint

__all__ = [
    "Advice",
    "Advisor",
    "AdvisorAutoProxyCreator",
    "AdvisorRegistry",
    "AopProxy",
    "DefaultProxyFactory",
    "ExpressionPointcut",
    "JoinPoint",
    "Pointcut",
    "ProxyFactory",
    "after",
    "after_returning",
    "after_throwing",
    "around",
    "aspect",
    "before",
    "get_proxy_target",
    "is_proxy",
    "matches_pointcut",
]
