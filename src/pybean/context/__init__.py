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
"""Declarative application context: discovery, two-pass registration and lifecycle hooks."""

from pybean.container.post_processor import BeanPostProcessor
from pybean.context.application_context import ApplicationContext, component_name, is_interface
from pybean.context.component import (
    Ambiguous,
    ComponentProperty,
    NoCandidate,
    TypeResolution,
    Unique,
)
from pybean.context.lifecycle import post_construct, pre_destroy
from pybean.context.scanner import ClassScanner, PackageScanner, scan_module_classes, scan_package

__all__ = [
    "Ambiguous",
    "ApplicationContext",
    "BeanPostProcessor",
    "ClassScanner",
    "ComponentProperty",
    "NoCandidate",
    "PackageScanner",
    "TypeResolution",
    "Unique",
    "component_name",
    "is_interface",
    "post_construct",
    "pre_destroy",
    "scan_module_classes",
    "scan_package",
]
