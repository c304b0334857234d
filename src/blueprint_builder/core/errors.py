from __future__ import annotations

"""Errors raised while configuring builders and constructing targets."""

from typing import Any, Iterable, Optional, Sequence

from pydantic import ValidationError


def _type_name(tp: Any) -> str:
    if isinstance(tp, type):
        return f"{tp.__module__}.{tp.__qualname__}"
    return repr(tp)


class BlueprintError(RuntimeError):
    """Base class for every builder failure."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class ConfigurationError(BlueprintError):
    """The builder cannot build anything (no blueprints, no target type)."""


class BlueprintNotFoundError(BlueprintError, KeyError):
    """A requested blueprint key is not registered."""

    def __init__(self, key: str, available: Sequence[str]):
        self.key = key
        self.available = list(available)
        super().__init__(f"Blueprint '{key}' not found. Available blueprints: {', '.join(self.available)}")


class BlueprintIndexError(BlueprintError, IndexError):
    """A requested blueprint index is outside the registered range."""

    def __init__(self, index: int, size: int):
        self.index = index
        self.size = size
        super().__init__(f"Blueprint index {index} is out of range; {size} blueprint(s) registered.")


class KeyIndexMismatchError(BlueprintError, ValueError):
    """A key and an index were both given but point at different blueprints."""

    def __init__(self, key: str, index: int, key_position: int):
        self.key = key
        self.index = index
        self.key_position = key_position
        super().__init__(
            f"The provided index {index} does not match blueprint '{key}' (registered at position {key_position})."
        )


class InstantiationError(BlueprintError, TypeError):
    """No constructor of the target is satisfied by the blueprint."""

    def __init__(self, target_type: Any, blueprint_type: Any, *, cause: Exception | None = None):
        self.target_type = target_type
        self.blueprint_type = blueprint_type
        self.cause = cause
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        base = (
            f"No suitable constructor found on {_type_name(self.target_type)} "
            f"matching blueprint members of type {_type_name(self.blueprint_type)}"
        )
        if self.cause:
            return f"{base}: {self.cause}"
        return f"{base}."


class MemberSelectorError(BlueprintError, ValueError):
    """A member selector does not denote a single, simple member access."""

    def __init__(self, selector: Any, reason: str):
        self.selector = selector
        self.reason = reason
        super().__init__(f"Invalid member selector {selector!r}: {reason}")


class ConversionError(BlueprintError, TypeError):
    """An override value cannot be converted to the member's declared type."""

    def __init__(self, member: str, value: Any, declared_type: Any, *, cause: Optional[Exception] = None):
        self.member = member
        self.value = value
        self.declared_type = declared_type
        self.cause = cause
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        base = f"Cannot convert {self.value!r} to {_type_name(self.declared_type)} for member '{self.member}'"
        if isinstance(self.cause, ValidationError):
            return f"{base}: {self._format_validation_errors(self.cause.errors())}"
        if self.cause:
            return f"{base}: {self.cause}"
        return base

    @staticmethod
    def _format_validation_errors(errors: Iterable[dict]) -> str:
        error_list = list(errors)
        snippets = []
        for err in error_list:
            loc = ".".join(str(entry) for entry in err.get("loc", [])) or "<value>"
            msg = err.get("msg") or err.get("type") or "validation error"
            snippets.append(f"{loc}: {msg}")
            if len(snippets) >= 3:
                break
        remaining = len(error_list) - len(snippets)
        if remaining > 0:
            snippets.append(f"... ({remaining} more)")
        return "; ".join(snippets)


__all__ = [
    "BlueprintError",
    "BlueprintIndexError",
    "BlueprintNotFoundError",
    "ConfigurationError",
    "ConversionError",
    "InstantiationError",
    "KeyIndexMismatchError",
    "MemberSelectorError",
]
