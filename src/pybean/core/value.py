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
"""Value marker for injecting configuration values into beans.

Usage::

    @service
    class MyService:
        app_name: str = Value("${app.name}")
        timeout: int = Value("${app.timeout:30}")

        def __init__(self, region: Annotated[str, Value("${app.region:eu}")]) -> None:
            ...
"""

from __future__ import annotations

import re
from typing import Any

from pybean.core.config import Config
from pybean.kernel.exceptions import ConfigurationException

_PLACEHOLDER_RE = re.compile(r"^\$\{([^}]+)\}$")


class Value:
    """Expression resolved against the Config while the context wires beans.

    Expressions:
        ``${key}`` — resolve from Config, raise if missing.
        ``${key:default}`` — resolve from Config, use default if missing.
        ``literal`` — return the string as-is (no ``${}`` wrapper).
    """

    __slots__ = ("_expression",)

    def __init__(self, expression: str) -> None:
        self._expression = expression

    @property
    def expression(self) -> str:
        return self._expression

    def resolve(self, config: Config) -> Any:
        """Resolve the expression against the given Config."""
        match = _PLACEHOLDER_RE.match(self._expression)
        if not match:
            return self._expression

        inner = match.group(1)

        if ":" in inner:
            key, default = inner.split(":", 1)
            result = config.get(key)
            return default if result is None else result

        result = config.get(inner)
        if result is None:
            raise ConfigurationException(
                f"Configuration key '{inner}' not found and no default provided "
                f"in Value expression '{self._expression}'",
                code="CONFIG_VALUE",
                context={"key": inner},
            )
        return result

    def __repr__(self) -> str:
        return f"Value({self._expression!r})"
