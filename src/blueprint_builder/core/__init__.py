from .builder import BlueprintBuilder, BlueprintSource, create_builder
from .errors import (
    BlueprintError,
    BlueprintIndexError,
    BlueprintNotFoundError,
    ConfigurationError,
    ConversionError,
    InstantiationError,
    KeyIndexMismatchError,
    MemberSelectorError,
)
from .instantiator import TargetInstantiator
from .introspection import constructor
from .ordered_map import OrderedMap
from .overrides import Override, OverrideChain
from .registry import BlueprintRegistry
from .selectors import MemberSelector

__all__ = [
    "BlueprintBuilder",
    "BlueprintError",
    "BlueprintIndexError",
    "BlueprintNotFoundError",
    "BlueprintRegistry",
    "BlueprintSource",
    "ConfigurationError",
    "ConversionError",
    "InstantiationError",
    "KeyIndexMismatchError",
    "MemberSelector",
    "MemberSelectorError",
    "OrderedMap",
    "Override",
    "OverrideChain",
    "TargetInstantiator",
    "constructor",
    "create_builder",
]
