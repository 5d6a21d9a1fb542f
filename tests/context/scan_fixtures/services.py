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
from __future__ import annotations

from pybean.container.autowired import Autowired
from pybean.container.stereotypes import service
from pybean.core.value import Value
from tests.context.scan_fixtures.nested.repos import GreetingRepository


@service
class GreetingService:
    repo: GreetingRepository = Autowired()
    punctuation: str = Value("${greeting.punctuation:!}")

    def greet(self, name: str) -> str:
        return f"{self.repo.prefix()} {name}{self.punctuation}"
