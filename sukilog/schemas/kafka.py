"""
Kafka Transaction Schema
========================

Bounded Context: Broker Handler Records

Consumed message envelope and processing outcome written under
``data.kafka_message`` and ``data.kafka_result`` by
``SukiLogger.request_kafka``.

Record Flow:
    Consumer → with_kafka_message/with_kafka_result → request_kafka → sink
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from .common import (
    ErrorInfo,
    first_error,
    format_timestamp,
    parse_timestamp,
    string_map,
)


@dataclass(frozen=True)
class KafkaMessage:
    """
    Broker message envelope.

    Attributes:
        topic: Topic name
        partition: Partition number
        offset: Offset within the partition
        headers: Message headers (never None)
        key: Message key
        payload: Message value as text
        timestamp: Broker timestamp, written as ISO 8601

    Example:
        >>> msg = with_kafka_message("orders", 0, 42, None, "order-1",
        ...                          '{"id": 1}', datetime.now(timezone.utc))
        >>> msg.headers
        {}
    """
    topic: str
    partition: int = 0
    offset: int = 0
    headers: Dict[str, str] = field(default_factory=dict)
    key: str = ""
    payload: str = ""
    timestamp: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {
            'topic': self.topic,
            'partition': self.partition,
            'offset': self.offset,
            'headers': dict(self.headers),
            'key': self.key,
            'payload': self.payload,
            'timestamp': format_timestamp(self.timestamp),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'KafkaMessage':
        """Deserialize from dict.

        Raises:
            ValueError: If topic is missing or values are invalid
        """
        try:
            return cls(
                topic=str(data['topic']),
                partition=int(data.get('partition', 0)),
                offset=int(data.get('offset', 0)),
                headers=string_map(data.get('headers')),
                key=str(data.get('key', '')),
                payload=str(data.get('payload', '')),
                timestamp=parse_timestamp(data.get('timestamp')),
            )
        except KeyError as e:
            raise ValueError(f"Missing required KafkaMessage field: {e}")
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid KafkaMessage data: {e}")


@dataclass(frozen=True)
class KafkaResult:
    """
    Outcome of handling one broker message.

    Attributes:
        duration: Handling time
        error: Error details, empty on success
    """
    duration: float = 0.0
    error: ErrorInfo = field(default_factory=ErrorInfo)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {
            'duration': self.duration,
            'error': self.error.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'KafkaResult':
        """Deserialize from dict."""
        try:
            return cls(
                duration=float(data.get('duration', 0.0)),
                error=ErrorInfo.from_dict(data.get('error')),
            )
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid KafkaResult data: {e}")


def with_kafka_message(
    topic: str,
    partition: int,
    offset: int,
    headers: Optional[Dict[str, str]],
    key: str,
    payload: str,
    timestamp: Optional[datetime],
) -> KafkaMessage:
    return KafkaMessage(
        topic=topic,
        partition=partition,
        offset=offset,
        headers=string_map(headers),
        key=key,
        payload=payload,
        timestamp=timestamp,
    )


def with_kafka_result(duration: float, *error: ErrorInfo) -> KafkaResult:
    """Build a result payload; only the first error argument is used."""
    return KafkaResult(duration=duration, error=first_error(error))
