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
"""LoggingPort — how an application context hands its configuration to a logging backend."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from pybean.core.config import Config


@runtime_checkable
class LoggingPort(Protocol):
    """Logging backend a context configures before any bean is registered.

    :meth:`ApplicationContext.from_config_file` calls :meth:`configure` with
    the loaded :class:`Config`; the ``pybean.logging`` section selects levels
    and output format. Container modules keep logging through stdlib
    ``logging.getLogger(__name__)``, so a port must route those records too.
    """

    def configure(self, config: Config) -> None:
        """Apply ``pybean.logging.*`` settings from *config*."""
        ...

    def get_logger(self, name: str) -> Any:
        """Return the backend's logger for *name*."""
        ...

    def set_level(self, name: str, level: str) -> None:
        """Change the level of one logger, e.g. ``pybean.container.factory``."""
        ...
