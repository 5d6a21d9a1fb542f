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
"""Package scanner for discovering stereotype-decorated classes."""

from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil
import types
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from pybean.container.stereotypes import is_component

logger = logging.getLogger(__name__)


@runtime_checkable
class ClassScanner(Protocol):
    """Discovers candidate classes in the given packages."""

    def scan(self, package_names: Iterable[str]) -> set[type]: ...


class PackageScanner:
    """Imports packages (and all their submodules) and collects component classes."""

    def scan(self, package_names: Iterable[str]) -> set[type]:
        found: set[type] = set()
        for package_name in package_names:
            classes = scan_package(package_name)
            logger.debug("Scanned package '%s': %d component(s)", package_name, len(classes))
            found |= classes
        return found


def scan_package(package_name: str) -> set[type]:
    """Scan a package for stereotype-decorated classes.

    Args:
        package_name: Dotted package or module name (e.g. "myapp.services").

    Returns:
        The component classes defined in the package and its submodules.
    """
    module = importlib.import_module(package_name)
    classes = set(scan_module_classes(module))

    if hasattr(module, "__path__"):
        for _importer, modname, _ispkg in pkgutil.walk_packages(module.__path__, prefix=module.__name__ + "."):
            try:
                submodule = importlib.import_module(modname)
            except ImportError:
                logger.warning("Skipping module '%s': import failed", modname, exc_info=True)
                continue
            classes.update(scan_module_classes(submodule))

    return classes


def scan_module_classes(module: types.ModuleType) -> list[type]:
    """Extract the component classes defined in (not imported into) a module."""
    classes: list[type] = []
    for _name, obj in inspect.getmembers(module, inspect.isclass):
        if is_component(obj) and obj.__module__ == module.__name__:
            classes.append(obj)
    return classes
