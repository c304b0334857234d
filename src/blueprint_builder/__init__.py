"""Build test fixtures and seed objects from named blueprints."""

from blueprint_builder.core import (
    BlueprintBuilder,
    BlueprintError,
    BlueprintIndexError,
    BlueprintNotFoundError,
    BlueprintSource,
    ConfigurationError,
    ConversionError,
    InstantiationError,
    KeyIndexMismatchError,
    MemberSelectorError,
    OrderedMap,
    TargetInstantiator,
    constructor,
    create_builder,
)

__version__ = "0.1.0"

__all__ = [
    "BlueprintBuilder",
    "BlueprintError",
    "BlueprintIndexError",
    "BlueprintNotFoundError",
    "BlueprintSource",
    "ConfigurationError",
    "ConversionError",
    "InstantiationError",
    "KeyIndexMismatchError",
    "MemberSelectorError",
    "OrderedMap",
    "TargetInstantiator",
    "constructor",
    "create_builder",
]
