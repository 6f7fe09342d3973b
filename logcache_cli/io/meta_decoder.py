"""Decode log-cache ``/v1/meta`` responses."""

from typing import Any, Dict, Union

from ..core.exceptions import MalformedResponseError
from ..core.types import MetaInfo
from .envelope_decoder import EnvelopeDecoder, parse_int


def decode_meta(body: Union[str, bytes, None]) -> Dict[str, MetaInfo]:
    """Decode a meta response into MetaInfo keyed by source id.

    An empty body, ``{}`` or a missing ``meta`` key yields an empty mapping.

    Raises:
        MalformedResponseError: If the body is not the expected structure
    """
    data = EnvelopeDecoder.load_json(body)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MalformedResponseError("expected a JSON object")

    meta = data.get("meta")
    if meta is None:
        return {}
    if not isinstance(meta, dict):
        raise MalformedResponseError("'meta' is not an object")

    return {
        source_id: _decode_meta_info(source_id, info)
        for source_id, info in meta.items()
    }


def _decode_meta_info(source_id: str, info: Any) -> MetaInfo:
    if not isinstance(info, dict):
        raise MalformedResponseError(f"meta for {source_id!r} is not an object")
    try:
        return MetaInfo(
            source_id=source_id,
            count=parse_int(info.get("count", 0)),
            expired=parse_int(info.get("expired", 0)),
            oldest_timestamp=parse_int(info.get("oldestTimestamp", 0)),
            newest_timestamp=parse_int(info.get("newestTimestamp", 0)),
        )
    except ValueError as e:
        raise MalformedResponseError(f"meta for {source_id!r}: {e}") from e
