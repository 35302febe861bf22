"""Encoding and decoding of event-channel payloads.

``encode`` always produces canonical JSON (sorted keys, compact separators),
so equal payloads are byte-identical. ``decode`` accepts JSON text or an
already-parsed mapping, ignores unknown fields, and raises ``SchemaError``
when a required field is missing or has the wrong JSON type.
"""

import logging
from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import ValidationError

from .core.errors import SchemaError
from .core.serialization import canonical_json, schema_error_from_validation
from .events import EVENT_PAYLOADS, Event, payload_type
from .schemas.base import DocumentModel, WireModel
from .schemas.messages import KingConfigUpdate


logger = logging.getLogger(__name__)

M = TypeVar("M", bound=WireModel)

Payload = str | bytes | bytearray | Mapping[str, Any]


def encode(message: WireModel) -> str:
    """Canonical JSON text of a payload."""
    return message.to_json()


def decode(model: type[M], payload: Payload) -> M:
    """Decode a payload into ``model``.

    Args:
        model: Payload model to decode into
        payload: JSON text/bytes, or a mapping already parsed by the transport

    Returns:
        Validated payload

    Raises:
        SchemaError: If a required field is missing or mistyped, or the
            payload is not valid JSON

    """
    if isinstance(payload, Mapping):
        # Mappings follow the same wire rules as text.
        try:
            payload = canonical_json(payload)
        except (TypeError, ValueError) as e:
            raise SchemaError(
                f"{model.__name__} payload is not JSON data: {e}", model=model.__name__
            ) from e
    if not isinstance(payload, str | bytes | bytearray):
        raise SchemaError(
            f"cannot decode {model.__name__} from {type(payload).__name__}",
            model=model.__name__,
        )
    try:
        return model.model_validate_json(payload)
    except ValidationError as e:
        raise schema_error_from_validation(e, model.__name__) from e


def decode_event(event: str, payload: Payload) -> WireModel:
    """Decode the payload of a named event into its registered model.

    Raises:
        SchemaError: If the event is unknown, has no typed payload, or the
            payload does not match

    """
    try:
        model = payload_type(event)
    except ValueError as e:
        raise SchemaError(f"unknown event '{event}'") from e
    if model is None:
        raise SchemaError(f"event '{event}' has no typed payload")
    return decode(model, payload)


def encode_event(message: WireModel) -> tuple[Event, str]:
    """Event name and canonical JSON for a payload with a registered event.

    Raises:
        ValueError: If no event carries payloads of this type

    """
    for event, model in EVENT_PAYLOADS.items():
        if type(message) is model:
            return event, encode(message)
    raise ValueError(f"No event carries {type(message).__name__} payloads")


def config_update(config_type: str, config: DocumentModel) -> KingConfigUpdate:
    """Announcement for a newly loaded configuration document."""
    config_hash = config.config_hash()
    logger.debug(f"Announcing {config_type} config {config_hash[:12]}")
    return KingConfigUpdate(config_type=config_type, new_config_hash=config_hash)
