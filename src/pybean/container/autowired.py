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
"""Autowired descriptor for field-level dependency injection."""

from __future__ import annotations


class Autowired:
    """Marks a class attribute for field injection by the ApplicationContext.

    Usage::

        @service
        class OrderService:
            repo: OrderRepository = Autowired()
            cache: CacheAdapter = Autowired(qualifier="redisCache")

    During wiring the context records a property value referencing the
    target bean; the factory assigns it with ``setattr`` after construction.

    Args:
        qualifier: If set, inject the bean with this name instead of
            resolving one from the annotated type.
    """

    __slots__ = ("qualifier",)

    def __init__(self, *, qualifier: str | None = None) -> None:
        self.qualifier = qualifier

    def __repr__(self) -> str:
        if self.qualifier:
            return f"Autowired(qualifier={self.qualifier!r})"
        return "Autowired()"
