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
"""Tests for StructlogAdapter — default LoggingPort implementation."""

from __future__ import annotations

import logging

import pytest
import structlog

from pybean.core.config import Config
from pybean.logging.port import LoggingPort
from pybean.logging.structlog_adapter import StructlogAdapter


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()


class TestStructlogAdapterConformance:
    def test_implements_logging_port(self):
        assert isinstance(StructlogAdapter(), LoggingPort)


class TestStructlogAdapterConfigure:
    def test_configure_with_defaults(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        assert adapter._root_level == "INFO"
        assert adapter._format == "console"
        assert logging.getLogger().level == logging.INFO

    def test_configure_reads_root_level(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"pybean": {"logging": {"level": {"root": "debug"}}}}))
        assert adapter._root_level == "DEBUG"
        assert logging.getLogger().level == logging.DEBUG

    def test_configure_reads_format(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"pybean": {"logging": {"format": "json"}}}))
        assert adapter._format == "json"

    def test_configure_reads_per_module_levels(self):
        adapter = StructlogAdapter()
        config = Config({"pybean": {"logging": {"level": {"root": "INFO", "pybean.container": "DEBUG"}}}})
        adapter.configure(config)
        assert adapter._module_levels == {"pybean.container": "DEBUG"}
        assert logging.getLogger("pybean.container").level == logging.DEBUG

    def test_installs_a_single_root_handler(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        adapter.configure(Config({}))
        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0].formatter, structlog.stdlib.ProcessorFormatter)

    def test_json_output_for_stdlib_records(self, capsys):
        adapter = StructlogAdapter()
        adapter.configure(Config({"pybean": {"logging": {"format": "json"}}}))
        logging.getLogger("pybean.test").warning("bean %s ready", "greeter")
        out = capsys.readouterr().out
        assert '"event": "bean greeter ready"' in out
        assert '"logger": "pybean.test"' in out


class TestStructlogAdapterLoggers:
    def test_get_logger_returns_bound_logger(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        logger = adapter.get_logger("myapp.test")
        assert callable(getattr(logger, "info", None))
        assert callable(getattr(logger, "debug", None))

    def test_set_level_updates_module_level(self):
        adapter = StructlogAdapter()
        adapter.set_level("myapp.services", "warning")
        assert logging.getLogger("myapp.services").level == logging.WARNING
