"""
Business Event Schema
=====================

Bounded Context: Domain Event Records

Payload written under ``data.event`` by ``SukiLogger.event``.

Design:
- Event data is frozen to text when the event is built, so later
  mutation of the caller's object never changes the record
- Serialization failures degrade to empty data instead of raising
"""

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Union

from .common import json_default

logger = logging.getLogger(__name__)


class EventAction(str, Enum):
    """What happened to the entity."""
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class EventResult(str, Enum):
    """Outcome of the action."""
    SUCCESS = "success"
    COMPENSATE = "compensate"


@dataclass(frozen=True)
class EventLog:
    """
    One business event.

    Attributes:
        entity: Entity name (e.g., "order")
        action: EventAction (or a custom action string)
        result: EventResult (or a custom result string)
        reference_id: Identifier of the affected entity
        data: Entity snapshot as text (JSON unless given as a string)

    Example:
        >>> ev = with_event("order", EventAction.CREATE, EventResult.SUCCESS,
        ...                 {"a": 1}, "ref-1")
        >>> ev.data
        '{"a":1}'
    """
    entity: str
    action: Union[EventAction, str]
    result: Union[EventResult, str]
    reference_id: str = ""
    data: str = ""

    def to_dict(self) -> Dict[str, str]:
        """Serialize to JSON-compatible dict."""
        return {
            'entity': self.entity,
            'action': _enum_value(self.action),
            'result': _enum_value(self.result),
            'reference_id': self.reference_id,
            'data': self.data,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EventLog':
        """Deserialize from dict.

        Raises:
            ValueError: If entity, action or result is missing
        """
        try:
            return cls(
                entity=str(data['entity']),
                action=_coerce(EventAction, data['action']),
                result=_coerce(EventResult, data['result']),
                reference_id=str(data.get('reference_id', '')),
                data=str(data.get('data', '')),
            )
        except KeyError as e:
            raise ValueError(f"Missing required EventLog field: {e}")


def _enum_value(value: Union[Enum, str]) -> str:
    if isinstance(value, Enum):
        return value.value
    return value


def _coerce(enum_cls, value):
    # Unknown values are kept as plain strings
    try:
        return enum_cls(value)
    except ValueError:
        return value


def serialize_event_data(data: Any) -> str:
    """
    Render event data as text.

    None becomes "", strings are used verbatim, anything else is
    compact JSON with sorted keys. Returns "" when the value cannot be
    serialized.
    """
    if data is None:
        return ""
    if isinstance(data, str):
        return data
    try:
        return json.dumps(
            data,
            default=json_default,
            separators=(",", ":"),
            sort_keys=True,
            allow_nan=False,
        )
    except Exception as e:
        # to_dict() of caller objects may raise anything
        logger.debug("Dropping unserializable event data: %s", e)
        return ""


def with_event(
    entity: str,
    action: Union[EventAction, str],
    result: Union[EventResult, str],
    data: Any,
    ref_id: str,
) -> EventLog:
    return EventLog(
        entity=entity,
        action=_coerce(EventAction, action),
        result=_coerce(EventResult, result),
        reference_id=ref_id,
        data=serialize_event_data(data),
    )
