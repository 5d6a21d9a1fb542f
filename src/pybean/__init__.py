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
"""pybean — a minimal inversion-of-control container with aspect support."""

from pybean.aop import Advice, Advisor, AdvisorAutoProxyCreator, ExpressionPointcut, JoinPoint
from pybean.container import (
    Autowired,
    BeanDefinition,
    BeanFactory,
    BeanReference,
    PropertyValue,
    Qualifier,
    Scope,
    bean,
    component,
    configuration,
    controller,
    repository,
    service,
)
from pybean.context import ApplicationContext, post_construct, pre_destroy
from pybean.core.config import Config
from pybean.core.value import Value

__version__ = "0.1.0"

__all__ = [
    "Advice",
    "Advisor",
    "AdvisorAutoProxyCreator",
    "ApplicationContext",
    "Autowired",
    "BeanDefinition",
    "BeanFactory",
    "BeanReference",
    "Config",
    "ExpressionPointcut",
    "JoinPoint",
    "PropertyValue",
    "Qualifier",
    "Scope",
    "Value",
    "bean",
    "component",
    "configuration",
    "controller",
    "post_construct",
    "pre_destroy",
    "repository",
    "service",
]
