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
"""Container exceptions — fatal errors during bean registration and creation."""

from __future__ import annotations

from collections.abc import Sequence

from pybean.kernel.exceptions import InfrastructureException


def _type_name(value: object) -> str:
    return getattr(value, "__qualname__", None) or getattr(value, "__name__", repr(value))


class BeanCreationException(InfrastructureException):
    """Fatal error while registering or building a bean.

    Subclasses render a multi-line message (headline plus hints) and keep the
    structured fields as attributes.
    """

    def __init__(self, subsystem: str, provider: str, reason: str) -> None:
        self.subsystem = subsystem
        self.provider = provider
        self.reason = reason
        message = f"Failed to create bean in {subsystem} for '{provider}': {reason}"
        super().__init__(message=message, code=f"BEAN_CREATION_{subsystem.upper()}")

    def _render(self, error_name: str, headline: str, details: Sequence[str]) -> None:
        lines = [f"{error_name}: {headline}"]
        if details:
            lines.append("")
            lines.extend(details)
        self.args = ("\n".join(lines),)

    def __str__(self) -> str:
        return self.args[0] if self.args else ""


class InvalidBeanDefinitionError(BeanCreationException):
    """A definition has no return type or does not select exactly one build strategy."""

    def __init__(self, *, bean_name: str, reason: str) -> None:
        self.bean_name = bean_name
        headline = f"Bean definition '{bean_name}' is invalid: {reason}"
        BeanCreationException.__init__(
            self, subsystem="registration", provider=bean_name or "<blank>", reason=headline
        )
        self._render(
            "InvalidBeanDefinitionError",
            headline,
            [
                "  Fix: set return_type, and either bean_class or both",
                "       factory_bean_name and factory_method_name (not bean_class and factory_bean_name)",
            ],
        )


class DuplicateBeanDefinitionError(BeanCreationException):
    """A bean name is registered twice."""

    def __init__(self, *, bean_name: str) -> None:
        self.bean_name = bean_name
        headline = f"A bean named '{bean_name}' is already registered"
        BeanCreationException.__init__(
            self, subsystem="registration", provider=bean_name, reason=headline
        )
        self._render(
            "DuplicateBeanDefinitionError",
            headline,
            ["  Fix: give one of the components or @bean methods an explicit name"],
        )


class NoSuchBeanError(BeanCreationException):
    """No bean found for the requested type or name."""

    def __init__(
        self,
        *,
        bean_type: type | None = None,
        bean_name: str | None = None,
        required_by: str | None = None,
        suggestions: list[str] | None = None,
    ) -> None:
        self.bean_type = bean_type
        self.bean_name = bean_name
        self.required_by = required_by
        self.suggestions = suggestions or []

        if bean_type is not None:
            headline = f"No bean of type '{_type_name(bean_type)}' is registered"
        elif bean_name:
            headline = f"No bean named '{bean_name}' is registered"
        else:
            headline = "No matching bean is registered"

        details: list[str] = []
        if required_by:
            details.append(f"  Required by: {required_by}")
            details.append("")
        details.append("  Suggestions:")
        details.append("    - Add @component, @service or @bean to a class that produces this type")
        details.append("    - Check that the module is listed in pybean.scan.packages")
        if self.suggestions:
            details.append("")
            details.append(f"  Similar registered names: {', '.join(self.suggestions)}")

        BeanCreationException.__init__(
            self,
            subsystem="resolution",
            provider=required_by or "container",
            reason=headline,
        )
        self._render("NoSuchBeanError", headline, details)


class NoUniqueBeanError(BeanCreationException):
    """Several beans implement the requested type and no explicit name was given."""

    def __init__(
        self,
        *,
        bean_type: type,
        candidates: list[str],
        required_by: str | None = None,
    ) -> None:
        self.bean_type = bean_type
        self.candidates = candidates
        self.required_by = required_by

        headline = (
            f"Multiple beans implement '{_type_name(bean_type)}' and no bean name was given"
        )
        details = [f"  Candidates: {candidates}"]
        if required_by:
            details.append("")
            details.append(f"  Required by: {required_by}")
        details.append("")
        details.append("  Fix: use Autowired(qualifier='name') or Annotated[T, Qualifier('name')]")

        BeanCreationException.__init__(
            self,
            subsystem="resolution",
            provider=required_by or "container",
            reason=headline,
        )
        self._render("NoUniqueBeanError", headline, details)


class NoMatchingConstructorError(BeanCreationException):
    """Resolved arguments do not fit the constructor's arity or parameter types."""

    def __init__(self, *, bean_class: type, bean_name: str, reason: str) -> None:
        self.bean_class = bean_class
        self.bean_name = bean_name
        headline = f"No constructor of '{_type_name(bean_class)}' accepts the arguments of bean '{bean_name}'"
        BeanCreationException.__init__(
            self, subsystem="instantiation", provider=bean_name, reason=headline
        )
        self._render("NoMatchingConstructorError", headline, [f"  Cause: {reason}"])


class NoMatchingFactoryMethodError(BeanCreationException):
    """The named factory method is missing or no overload accepts the arguments."""

    def __init__(self, *, owner: object, method_name: str, bean_name: str, reason: str) -> None:
        self.owner = owner
        self.method_name = method_name
        self.bean_name = bean_name
        headline = (
            f"No factory method '{method_name}' on '{_type_name(owner)}' "
            f"accepts the arguments of bean '{bean_name}'"
        )
        BeanCreationException.__init__(
            self, subsystem="instantiation", provider=bean_name, reason=headline
        )
        self._render("NoMatchingFactoryMethodError", headline, [f"  Cause: {reason}"])


class MultipleConstructorsError(BeanCreationException):
    """A class declares more than one constructor (overloaded ``__init__``)."""

    def __init__(self, *, bean_class: type, count: int) -> None:
        self.bean_class = bean_class
        self.count = count
        headline = f"'{_type_name(bean_class)}' declares {count} constructors; only one is supported"
        BeanCreationException.__init__(
            self, subsystem="instantiation", provider=_type_name(bean_class), reason=headline
        )
        self._render(
            "MultipleConstructorsError",
            headline,
            ["  Fix: remove the @overload variants of __init__ or use a @bean factory method"],
        )


class BeanInitializationError(BeanCreationException):
    """The named init hook is missing or raised."""

    def __init__(self, *, bean_name: str, method_name: str, reason: str) -> None:
        self.bean_name = bean_name
        self.method_name = method_name
        headline = f"Init method '{method_name}' of bean '{bean_name}' failed: {reason}"
        BeanCreationException.__init__(
            self, subsystem="initialization", provider=bean_name, reason=headline
        )
        self._render("BeanInitializationError", headline, [])


class BeanCurrentlyInCreationError(BeanCreationException):
    """Circular dependency detected during bean resolution.

    The ``chain`` attribute lists the bean names being built, outermost first.
    """

    def __init__(self, *, chain: list[str], current: str) -> None:
        self.chain = chain
        self.current = current

        chain_str = " -> ".join([*chain, current])
        headline = f"Circular dependency: {chain_str}"

        BeanCreationException.__init__(
            self,
            subsystem="resolution",
            provider=current,
            reason=headline,
        )
        self._render(
            "BeanCurrentlyInCreationError",
            headline,
            ["  Suggestion: break the cycle by looking one bean up lazily through the factory"],
        )
