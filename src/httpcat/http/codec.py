"""Content-Type driven encoding and decoding of message bodies."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional
from urllib.parse import parse_qs, urlencode

from pydantic import TypeAdapter, ValidationError
from pydantic_core import from_json, to_json, to_jsonable_python

from ..errors import CodecError

logger = logging.getLogger(__name__)

SCALAR_TYPES = (str, int, float, bool)


@dataclass(frozen=True)
class Codec:
    """
    Encoder/decoder pair registered for a family of content types.

    Attributes:
        name: Short name used in error messages
        matches: Predicate over the Content-Type header value
        encode: value -> bytes
        decode: (bytes, target type or None) -> value
    """

    name: str
    matches: Callable[[str], bool]
    encode: Callable[[Any], bytes]
    decode: Callable[[bytes, Any], Any]


def flatten(value: Any) -> dict[str, str]:
    """
    Flatten a record into a string map.

    Accepts dicts, dataclasses and pydantic models. None fields are dropped,
    booleans are rendered as JSON literals.

    Raises:
        CodecError: If the value is not a record or holds a non-scalar field
    """
    try:
        data = to_jsonable_python(value, by_alias=True)
    except Exception as err:
        raise CodecError(f"cannot flatten {type(value).__name__}: {err}") from err

    if not isinstance(data, dict):
        raise CodecError(f"cannot flatten {type(value).__name__}: not a record")

    flat: dict[str, str] = {}
    for key, val in data.items():
        if val is None:
            continue
        if isinstance(val, bool):
            flat[str(key)] = "true" if val else "false"
        elif isinstance(val, SCALAR_TYPES):
            flat[str(key)] = str(val)
        else:
            raise CodecError(f"field {key!r} is not a scalar: {type(val).__name__}")
    return flat


def _validate(data: Any, into: Any) -> Any:
    if into is None:
        return data
    try:
        return TypeAdapter(into).validate_python(data)
    except ValidationError as err:
        raise CodecError(str(err)) from err


def _encode_json(value: Any) -> bytes:
    try:
        return to_json(value, by_alias=True)
    except Exception as err:
        raise CodecError(f"encode application/json: {err}") from err


def _decode_json(data: bytes, into: Any) -> Any:
    try:
        if into is None:
            return from_json(data)
        return TypeAdapter(into).validate_json(data)
    except (ValueError, ValidationError) as err:
        raise CodecError(f"decode application/json: {err}") from err


def _encode_form(value: Any) -> bytes:
    pairs = sorted(flatten(value).items())
    return urlencode(pairs).encode("ascii")


def _decode_form(data: bytes, into: Any) -> Any:
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as err:
        raise CodecError(f"decode application/x-www-form-urlencoded: {err}") from err

    parsed = parse_qs(text, keep_blank_values=True)
    record = {key: vals[0] if len(vals) == 1 else vals for key, vals in parsed.items()}
    return _validate(record, into)


JSON = Codec(
    name="json",
    matches=lambda content_type: "json" in content_type,
    encode=_encode_json,
    decode=_decode_json,
)

FORM = Codec(
    name="www-form",
    matches=lambda content_type: "www-form" in content_type,
    encode=_encode_form,
    decode=_decode_form,
)

_registry: list[Codec] = [JSON, FORM]


def register(codec: Codec) -> None:
    """Register a codec; it takes precedence over previously registered ones."""
    _registry.insert(0, codec)
    logger.debug(f"Registered codec {codec.name}")


def unregister(codec: Codec) -> None:
    """Remove a previously registered codec."""
    _registry.remove(codec)


def lookup(content_type: Optional[str]) -> Optional[Codec]:
    """Find the codec handling a Content-Type, None if unsupported."""
    if not content_type:
        return None
    content_type = content_type.lower()
    for codec in _registry:
        if codec.matches(content_type):
            return codec
    return None


def supported() -> list[str]:
    """Names of registered codecs, highest precedence first."""
    return [codec.name for codec in _registry]


def encode(content_type: Optional[str], value: Any) -> bytes:
    """
    Encode a value using the codec selected by the Content-Type.

    Raises:
        CodecError: If the content type is unsupported or encoding fails
    """
    codec = lookup(content_type)
    if codec is None:
        raise CodecError(f"unsupported Content-Type {content_type}")
    return codec.encode(value)


def decode(content_type: Optional[str], data: bytes, into: Any = None) -> Any:
    """
    Decode a body using the codec selected by the Content-Type.

    Args:
        content_type: Content-Type header value
        data: Raw body
        into: Target type validated with pydantic, None for plain JSON-like data

    Raises:
        CodecError: If the content type is unsupported or decoding fails
    """
    codec = lookup(content_type)
    if codec is None:
        raise CodecError(f"unsupported Content-Type {content_type}")
    return codec.decode(data, into)
