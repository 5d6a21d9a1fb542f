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
"""Container types and enums."""

from enum import Enum


class Scope(Enum):
    """Bean lifecycle scope."""

    SINGLETON = "singleton"
    PROTOTYPE = "prototype"


def canonical_bean_name(name: str) -> str:
    """Derive the default bean name from a simple type name (``OrderService`` -> ``orderService``)."""
    if not name:
        return ""
    return name[0].lower() + name[1:]
