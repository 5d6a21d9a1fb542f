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
"""Unified exception hierarchy for pybean.

All container exceptions inherit from PyBeanException, enabling unified
error handling by the embedding application.

Categories:
- InfrastructureException: failures while building or wiring beans
- ConfigurationException: unreadable or unresolvable configuration
"""

from __future__ import annotations


class PyBeanException(Exception):
    """Base exception for all pybean errors.

    Carries an optional error code and context dict for structured error data.
    Catch PyBeanException to handle every container error, or catch specific
    subclasses for targeted handling.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "BEAN_CREATION_RESOLUTION").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


class InfrastructureException(PyBeanException):
    """Container infrastructure failures: bean creation, wiring, proxying."""


class ConfigurationException(PyBeanException):
    """Configuration could not be loaded or a placeholder could not be resolved."""
