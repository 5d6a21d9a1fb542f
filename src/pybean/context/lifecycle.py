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
"""Lifecycle hooks: @post_construct and @pre_destroy.

The context turns a marked method into the bean definition's init or destroy
method name. The factory calls it without arguments, so a hook may take
nothing but ``self``. At most one method per class may carry each marker.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import TypeVar

F = TypeVar("F", bound=Callable)


def _require_no_arguments(func: Callable, marker: str) -> None:
    params = list(inspect.signature(func).parameters.values())[1:]
    required = [
        p.name
        for p in params
        if p.default is p.empty and p.kind not in (p.VAR_POSITIONAL, p.VAR_KEYWORD)
    ]
    if required:
        raise TypeError(
            f"@{marker} method {func.__qualname__} must not require arguments, got {required}"
        )


def post_construct(func: F) -> F:
    """Run *func* after property injection, before after-init post-processors."""
    _require_no_arguments(func, "post_construct")
    func.__pybean_post_construct__ = True  # type: ignore[attr-defined]
    return func


def pre_destroy(func: F) -> F:
    """Run *func* when the context closes; singletons only."""
    _require_no_arguments(func, "pre_destroy")
    func.__pybean_pre_destroy__ = True  # type: ignore[attr-defined]
    return func
