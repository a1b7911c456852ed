"""Indicator registry and JSON codec.

Usage:
    @register_indicator("sma")
    class SMA(WindowIndicator):
        ...

    sma = create_indicator("sma", length=3)
    payload = to_json(sma)            # '{"name":"sma","length":3,"offset":0}'
    assert from_json(payload) == sma

Decoding looks the "name" discriminator up in the registry and hands the
remaining fields to the class's `from_config`, which decodes nested sources
through `from_dict` again. The registry is filled when `indicator_engine`
is imported and is not modified afterwards.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

import orjson
from pydantic import ValidationError

from indicator_engine.errors import DecodeError, UnknownIndicatorError
from indicator_engine.protocol import Indicator

logger = logging.getLogger(__name__)

# Global registry: indicator_name -> indicator_class
_REGISTRY: dict[str, type] = {}


def register_indicator(name: str):
    """Decorator to register an indicator class under a given name.

    Args:
        name: Unique discriminator (e.g., 'sma').

    Returns:
        Decorator that registers the class and returns it unchanged.

    Raises:
        ValueError: If an indicator with the same name is already registered.
    """

    def decorator(cls):
        if name in _REGISTRY:
            raise ValueError(
                f"Indicator '{name}' is already registered by {_REGISTRY[name].__name__}"
            )
        _REGISTRY[name] = cls
        logger.debug("Registered indicator: %s -> %s", name, cls.__name__)
        return cls

    return decorator


def get_indicator_class(name: str) -> type:
    """Get the indicator class by name (without instantiating).

    Raises:
        UnknownIndicatorError: If no indicator is registered under the given name.
    """
    cls = _REGISTRY.get(name)
    if cls is None:
        raise UnknownIndicatorError(name, list_indicators())
    return cls


def create_indicator(name: str, **kwargs: Any) -> Indicator:
    """Create a validated indicator instance by name.

    Args:
        name: Registered indicator name.
        **kwargs: Arguments passed to the indicator constructor.

    Raises:
        UnknownIndicatorError: If no indicator is registered under the given name.
        InvalidConfigurationError: If the arguments fail validation.
    """
    return get_indicator_class(name)(**kwargs)


def list_indicators() -> list[str]:
    """Return a sorted list of registered indicator names."""
    return sorted(_REGISTRY.keys())


def from_dict(payload: Any) -> Indicator:
    """Decode a named indicator payload.

    Args:
        payload: Mapping holding the "name" discriminator and the
            indicator's configuration fields.

    Returns:
        A validated indicator.

    Raises:
        DecodeError: If the payload is not a mapping, has no usable name,
            or holds malformed fields or nested sources.
        InvalidConfigurationError: If the decoded parameters fail validation.
    """
    if not isinstance(payload, Mapping):
        raise DecodeError(
            f"indicator payload must be an object, got {type(payload).__name__}"
        )

    fields = dict(payload)
    name = fields.pop("name", None)
    if not isinstance(name, str):
        raise DecodeError("indicator payload has no 'name'")

    cls = _REGISTRY.get(name)
    if cls is None:
        raise UnknownIndicatorError(name, list_indicators())

    logger.debug("Decoding indicator: %s", name)

    try:
        return cls.from_config(fields)
    except ValidationError as e:
        raise DecodeError(f"malformed '{name}' payload: {e}") from e


def from_json(data: str | bytes) -> Indicator:
    """Decode a named indicator from JSON.

    Raises:
        DecodeError: If the data is not valid JSON or cannot be decoded.
        InvalidConfigurationError: If the decoded parameters fail validation.
    """
    try:
        payload = orjson.loads(data)
    except orjson.JSONDecodeError as e:
        raise DecodeError(f"invalid JSON: {e}") from e

    return from_dict(payload)


def to_dict(indicator: Indicator) -> dict[str, Any]:
    """Encode an indicator with its name."""
    return indicator.to_dict()


def to_json(indicator: Indicator) -> str:
    """Encode an indicator with its name as a JSON string."""
    return orjson.dumps(indicator.to_dict()).decode("utf-8")
