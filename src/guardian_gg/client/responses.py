from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from guardian_gg.client.errors import ApiError, GuardianError, HttpError, ParseError
from guardian_gg.client.types import RawResponse, RequestOptions

logger = logging.getLogger(__name__)

STATUS_FIELD = "statusCode"
DATA_FIELD = "data"
SUCCESS_CODES = (0, 200)

NormalizedResult = tuple[GuardianError | None, Any]


@dataclass(frozen=True)
class RecordList:
    """Bare JSON array of records."""

    items: list[Any]


@dataclass(frozen=True)
class Envelope:
    """Object carrying `statusCode`, with the real payload under `data` (if any)."""

    status_code: Any
    raw: dict[str, Any]

    @property
    def has_data(self) -> bool:
        return DATA_FIELD in self.raw

    @property
    def failed(self) -> bool:
        # A falsy statusCode counts as "not set".
        return bool(self.status_code) and self.status_code not in SUCCESS_CODES


@dataclass(frozen=True)
class KeyedObject:
    """Plain object, e.g. a map from membership id to record."""

    raw: dict[str, Any]


ResponseEnvelope = RecordList | Envelope | KeyedObject


def classify(value: Any) -> ResponseEnvelope | None:
    """Resolve a parsed body into one of the supported wire shapes."""

    if isinstance(value, list):
        return RecordList(items=value)
    if isinstance(value, dict):
        if STATUS_FIELD in value:
            return Envelope(status_code=value[STATUS_FIELD], raw=value)
        return KeyedObject(raw=value)
    return None


def resolve_path(value: Any, path: str) -> Any:
    """
    Walk a dotted path (`"players"`, `"a.b.c"`, `"items.0"`).

    Missing segments yield None instead of raising.
    """

    current = value
    for segment in path.split("."):
        if isinstance(current, dict):
            if segment not in current:
                return None
            current = current[segment]
        elif isinstance(current, list):
            try:
                current = current[int(segment)]
            except (ValueError, IndexError):
                return None
        else:
            return None
    return current


def _decode(raw: RawResponse) -> Any:
    if raw.body is not None and not isinstance(raw.body, (str, bytes)):
        return raw.body
    return json.loads(raw.body if raw.body is not None else raw.text)


def normalize(
    raw: RawResponse,
    *,
    request: RequestOptions | None = None,
    url: str | None = None,
    filter_path: str | None = None,
) -> NormalizedResult:
    """
    Turn one transport result into the `(error, payload)` pair handed to waiters.

    The API is inconsistent: it answers with bare arrays, with objects
    wrapping the payload as `{"statusCode": ..., "data": ...}`, or with plain
    keyed objects. Both 0 and 200 are accepted as a successful statusCode.
    """

    if raw.status_code != 200:
        return (
            HttpError(
                "There seems to be a problem with the guardian.gg API",
                code=raw.status_code,
                text=raw.text,
                body="",
                request=request,
                url=url,
                action="retry",
            ),
            None,
        )

    try:
        data = _decode(raw)
    except (ValueError, RecursionError):
        return (
            ParseError(
                "Unable to parse the JSON response from the guardian.gg API",
                code=raw.status_code,
                text=raw.text,
                body=raw.body if raw.body is not None else raw.text,
                request=request,
                url=url,
                action="retry",
            ),
            None,
        )

    shape = classify(data)
    if shape is None:
        return (
            ParseError(
                f"Unsupported response shape from the guardian.gg API: {type(data).__name__}",
                code=raw.status_code,
                text=raw.text,
                body=data,
                request=request,
                url=url,
                action="retry",
            ),
            None,
        )

    if isinstance(shape, Envelope):
        if shape.failed:
            logger.debug(
                "received statusCode %s from the guardian.gg API for %s", shape.status_code, url
            )
            code = shape.status_code if isinstance(shape.status_code, int) else None
            return (
                ApiError(
                    f"Received incorrect statusCode {shape.status_code}",
                    code=code,
                    text=raw.text,
                    body=data,
                    request=request,
                    url=url,
                ),
                None,
            )
        payload = shape.raw[DATA_FIELD] if shape.has_data else shape.raw
    elif isinstance(shape, RecordList):
        payload = shape.items
    else:
        payload = shape.raw

    if filter_path:
        payload = resolve_path(payload, filter_path)

    return None, payload
