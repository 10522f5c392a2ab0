"""Sequential batch driver mapping input items to output records."""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

import requests

from weatherbatch.core.abstractions import ErrorRecord, OutputRecord
from weatherbatch.core.providers.openweather import DEFAULT_BASE_URL
from weatherbatch.core.services.processor import WeatherRecordProcessor


logger = logging.getLogger(__name__)

ENVELOPE_KEY = "json"


def unwrap_item(item: Any) -> Mapping[str, Any]:
    """Return the record carried by a workflow item.

    Items arrive either bare (``{"city": "Paris"}``) or inside the engine's
    envelope (``{"json": {"city": "Paris"}, ...}``). Anything else yields an
    empty record, which then fails validation like a missing city.
    """
    if not isinstance(item, Mapping):
        return {}
    inner = item.get(ENVELOPE_KEY)
    if isinstance(inner, Mapping):
        return inner
    return item


def process_items(
    processor: WeatherRecordProcessor, items: Iterable[Any]
) -> List[OutputRecord]:
    """Run ``processor`` over ``items`` one at a time, isolating failures per item."""
    results: List[OutputRecord] = []
    for item in items:
        record = unwrap_item(item)
        try:
            results.append(processor.process(record))
        except Exception as exc:  # noqa: BLE001 - one bad city must not abort the batch
            city = record.get("city")
            logger.warning("Error processing city %r: %s", city, exc)
            results.append(ErrorRecord(error=str(exc), city=city))
    return results


def run_batch(
    items: Iterable[Any],
    api_key: Optional[str],
    *,
    base_url: str = DEFAULT_BASE_URL,
    session: Optional[requests.Session] = None,
    timeout: Optional[float] = 10.0,
) -> List[OutputRecord]:
    """Process a whole invocation.

    A failure outside per-item processing, such as a missing API key or an
    item source that cannot be iterated, collapses the output to a single
    :class:`ErrorRecord` without a city.
    """
    try:
        with WeatherRecordProcessor(
            api_key, base_url=base_url, session=session, timeout=timeout
        ) as processor:
            return process_items(processor, items)
    except Exception as exc:  # noqa: BLE001 - the caller always gets output records
        logger.error("A critical error occurred: %s", exc)
        return [ErrorRecord(error=str(exc))]


def serialize_results(
    results: Iterable[OutputRecord], *, envelope: bool = False
) -> List[Dict[str, Any]]:
    payloads = [result.to_dict() for result in results]
    if envelope:
        return [{ENVELOPE_KEY: payload} for payload in payloads]
    return payloads


__all__ = ["run_batch", "process_items", "unwrap_item", "serialize_results"]
