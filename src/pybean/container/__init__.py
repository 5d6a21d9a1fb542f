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
"""pybean container — bean definitions, the bean factory and declarative markers."""

from pybean.container.autowired import Autowired
from pybean.container.bean import Qualifier, bean
from pybean.container.definition import BeanDefinition, BeanReference, PropertyValue
from pybean.container.exceptions import (
    BeanCreationException,
    BeanCurrentlyInCreationError,
    BeanInitializationError,
    DuplicateBeanDefinitionError,
    InvalidBeanDefinitionError,
    MultipleConstructorsError,
    NoMatchingConstructorError,
    NoMatchingFactoryMethodError,
    NoSuchBeanError,
    NoUniqueBeanError,
)
from pybean.container.factory import BeanFactory
from pybean.container.ordering import HIGHEST_PRECEDENCE, LOWEST_PRECEDENCE, get_order, order
from pybean.container.post_processor import BeanPostProcessor
from pybean.container.stereotypes import (
    component,
    configuration,
    controller,
    repository,
    service,
)
from pybean.container.types import Scope, canonical_bean_name

__all__ = [
    "HIGHEST_PRECEDENCE",
    "LOWEST_PRECEDENCE",
    "Autowired",
    "BeanCreationException",
    "BeanCurrentlyInCreationError",
    "BeanDefinition",
    "BeanFactory",
    "BeanInitializationError",
    "BeanPostProcessor",
    "BeanReference",
    "DuplicateBeanDefinitionError",
    "InvalidBeanDefinitionError",
    "MultipleConstructorsError",
    "NoMatchingConstructorError",
    "NoMatchingFactoryMethodError",
    "NoSuchBeanError",
    "NoUniqueBeanError",
    "PropertyValue",
    "Qualifier",
    "Scope",
    "bean",
    "canonical_bean_name",
    "component",
    "configuration",
    "controller",
    "get_order",
    "order",
    "repository",
    "service",
]
