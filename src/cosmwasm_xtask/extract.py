"""
Result extraction from node binary output.

Output formats drift between chain binary releases, so each extractor is
a plain ``(stdout) -> value`` function that callers can swap out.
Absence of the expected field is always a ``ResultParseError``.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Iterable, Iterator, Optional, TypeVar

from .errors import ResultParseError

T = TypeVar("T")

Extractor = Callable[[str], T]

CONTRACT_ADDRESS_KEYS = ("_contract_address", "contract_address")


_DECODER = json.JSONDecoder()


def _decode_embedded(line: str) -> Any:
    """Decode the JSON document that ends ``line``; raise ValueError if there is none."""
    line = line.rstrip()
    for start, char in enumerate(line):
        if char not in "{[":
            continue
        try:
            payload, end = _DECODER.raw_decode(line, start)
        except json.JSONDecodeError:
            continue
        if end == len(line):
            return payload
    raise ValueError("no JSON document ends the line")


def find_json_payload(output: str, field: str = "JSON payload") -> Any:
    """Locate the JSON document in ``output``.

    Either the whole output is JSON, or one of its lines ends with it,
    possibly behind a log prefix (binaries may print gas estimates or log
    lines around it). The last such line wins.
    """
    text = output.strip()
    if not text:
        raise ResultParseError(field, output, "empty output")
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass
    for line in reversed(text.splitlines()):
        try:
            return _decode_embedded(line)
        except ValueError:
            continue
    raise ResultParseError(field, output, "no well-formed JSON found")


def iter_events(payload: Any) -> Iterator[dict[str, Any]]:
    if not isinstance(payload, dict):
        return
    for log in payload.get("logs") or []:
        for event in (log or {}).get("events") or []:
            yield event
    for event in payload.get("events") or []:
        yield event


def find_attribute(
    payload: Any,
    keys: Iterable[str],
    event_type: Optional[str] = None,
) -> Optional[str]:
    """Return the first event attribute value whose key is in ``keys``."""
    wanted = tuple(keys)
    for event in iter_events(payload):
        if event_type is not None and event.get("type") != event_type:
            continue
        for attribute in event.get("attributes") or []:
            if attribute.get("key") in wanted and attribute.get("value"):
                return str(attribute["value"])
    if isinstance(payload, dict):
        for key in wanted:
            value = payload.get(key)
            if value not in (None, ""):
                return str(value)
    return None


def extract_code_id(output: str) -> int:
    payload = find_json_payload(output, "code id")
    value = find_attribute(payload, ("code_id",), "store_code")
    if value is None:
        value = find_attribute(payload, ("code_id",))
    if value is None:
        raise ResultParseError("code id", output, "no code_id attribute")
    try:
        return int(value)
    except ValueError:
        raise ResultParseError("code id", output, f"not an integer: {value!r}") from None


def extract_contract_address(output: str) -> str:
    payload = find_json_payload(output, "contract address")
    value = find_attribute(payload, CONTRACT_ADDRESS_KEYS, "instantiate")
    if value is None:
        value = find_attribute(payload, CONTRACT_ADDRESS_KEYS)
    if value is None:
        raise ResultParseError("contract address", output, "no contract address attribute")
    return value


def extract_tx(output: str) -> dict[str, Any]:
    payload = find_json_payload(output, "transaction result")
    if not isinstance(payload, dict):
        raise ResultParseError("transaction result", output, "expected a JSON object")
    return payload


def extract_query_data(output: str) -> Any:
    payload = find_json_payload(output, "query response")
    if isinstance(payload, dict) and "data" in payload:
        return payload["data"]
    return payload


def extract_txhash(payload: Any) -> Optional[str]:
    if isinstance(payload, dict):
        txhash = payload.get("txhash")
        if txhash:
            return str(txhash)
    return None
