"""Decode log-cache JSON responses into Envelope records."""

import base64
import binascii
import json
from typing import Any, Dict, List, Union

from ..core.envelopes import (
    Counter,
    Envelope,
    Event,
    Gauge,
    GaugeValue,
    Log,
    LogLevel,
    Payload,
    Timer,
    Unknown,
)
from ..core.exceptions import MalformedResponseError
from .logger import get_logger

logger = get_logger("envelope_decoder")


class EnvelopeDecoder:
    """Decode ``/v1/read`` response bodies.

    Bodies look like ``{"envelopes": {"batch": [...]}}``. int64 fields are
    accepted both as JSON numbers and as strings, the way protobuf JSON
    encodes them.
    """

    @classmethod
    def decode(cls, body: Union[str, bytes, None]) -> List[Envelope]:
        """Decode a response body into envelopes in server order.

        Args:
            body: Raw response body

        Returns:
            Envelopes in the order the server sent them; empty when the body
            or the batch is empty

        Raises:
            MalformedResponseError: If the body is not the expected structure
        """
        data = cls.load_json(body)
        if data is None:
            return []
        if not isinstance(data, dict):
            raise MalformedResponseError("expected a JSON object")

        envelopes = data.get("envelopes")
        if envelopes is None:
            return []
        if not isinstance(envelopes, dict):
            raise MalformedResponseError("'envelopes' is not an object")

        batch = envelopes.get("batch")
        if batch is None:
            return []
        if not isinstance(batch, list):
            raise MalformedResponseError("'envelopes.batch' is not a list")

        return [cls.decode_envelope(record, index) for index, record in enumerate(batch)]

    @staticmethod
    def load_json(body: Union[str, bytes, None]) -> Any:
        """Parse a body as JSON; blank bodies parse to None."""
        if body is None:
            return None
        if isinstance(body, bytes):
            try:
                body = body.decode("utf-8")
            except UnicodeDecodeError as e:
                raise MalformedResponseError(f"body is not UTF-8: {e}") from e
        if not body.strip():
            return None
        try:
            return json.loads(body)
        except json.JSONDecodeError as e:
            raise MalformedResponseError(f"invalid JSON: {e}", body=body) from e

    @classmethod
    def decode_envelope(cls, record: Any, index: int = 0) -> Envelope:
        """Decode a single envelope record.

        Args:
            record: One element of ``envelopes.batch``
            index: Position in the batch, used in error messages

        Returns:
            Decoded envelope
        """
        if not isinstance(record, dict):
            raise MalformedResponseError(f"envelope {index} is not an object")

        try:
            return Envelope(
                source_id=str(record.get("source_id", "")),
                instance_id=str(record.get("instance_id", "")),
                timestamp=parse_int(record.get("timestamp", 0)),
                payload=cls._decode_payload(record),
            )
        except (TypeError, ValueError, AttributeError, binascii.Error) as e:
            raise MalformedResponseError(f"envelope {index}: {e}") from e

    @classmethod
    def _decode_payload(cls, record: Dict[str, Any]) -> Payload:
        """Pick the payload builder for the populated variant field."""
        if record.get("log") is not None:
            return cls._build_log(record["log"])
        elif record.get("counter") is not None:
            return cls._build_counter(record["counter"])
        elif record.get("gauge") is not None:
            return cls._build_gauge(record["gauge"])
        elif record.get("timer") is not None:
            return cls._build_timer(record["timer"])
        elif record.get("event") is not None:
            return cls._build_event(record["event"])

        tags = record.get("tags") or {}
        logger.debug(f"Envelope without known payload, tags: {tags}")
        return Unknown.from_mapping({str(k): str(v) for k, v in tags.items()})

    @staticmethod
    def _build_log(data: Dict[str, Any]) -> Log:
        payload = data.get("payload") or ""
        level = LogLevel.ERR if data.get("type") == "ERR" else LogLevel.OUT
        return Log(body=base64.b64decode(payload, validate=True), level=level)

    @staticmethod
    def _build_counter(data: Dict[str, Any]) -> Counter:
        return Counter(
            name=parse_str(data.get("name", "")),
            total=parse_int(data.get("total", 0)),
        )

    @staticmethod
    def _build_gauge(data: Dict[str, Any]) -> Gauge:
        metrics = data.get("metrics") or {}
        return Gauge.from_mapping(
            {
                name: GaugeValue(
                    value=float(metric.get("value", 0.0)),
                    unit=parse_str(metric.get("unit", "")),
                )
                for name, metric in metrics.items()
            }
        )

    @staticmethod
    def _build_timer(data: Dict[str, Any]) -> Timer:
        return Timer(
            name=parse_str(data.get("name", "")),
            start=parse_int(data.get("start", 0)),
            stop=parse_int(data.get("stop", 0)),
        )

    @staticmethod
    def _build_event(data: Dict[str, Any]) -> Event:
        return Event(
            title=parse_str(data.get("title", "")),
            body=parse_str(data.get("body", "")),
        )


def parse_int(value: Any) -> int:
    """Parse an int64 that may be encoded as a JSON string."""
    if isinstance(value, bool):
        raise ValueError(f"expected an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return int(value)
    raise ValueError(f"expected an integer, got {value!r}")


def parse_str(value: Any) -> str:
    """Require a JSON string; payload fields are hashed for deduplication."""
    if not isinstance(value, str):
        raise ValueError(f"expected a string, got {value!r}")
    return value
