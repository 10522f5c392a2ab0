"""Management command running the weather batch over a JSON list of items."""
from __future__ import annotations

import json
import sys
from typing import Any

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from weatherbatch.core.services.batch import run_batch, serialize_results


class Command(BaseCommand):
    help = "Fetch, normalize and annotate current weather for a JSON list of city items"

    def add_arguments(self, parser) -> None:  # noqa: D401
        parser.add_argument(
            "--input",
            default="-",
            help="Path to a JSON file holding the list of items ('-' reads stdin)",
        )
        parser.add_argument("--api-key", dest="api_key", help="Override OPENWEATHERMAP_API_KEY")
        parser.add_argument(
            "--envelope",
            action="store_true",
            help='Wrap each output record as {"json": record}',
        )
        parser.add_argument("--indent", type=int, default=None, help="Indent the JSON output")

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: D401
        items = self._load_items(options["input"])
        api_key = options.get("api_key") or settings.OPENWEATHERMAP_API_KEY

        results = run_batch(
            items,
            api_key,
            base_url=settings.OPENWEATHERMAP_BASE_URL,
            timeout=settings.WEATHER_REQUEST_TIMEOUT,
        )
        payload = serialize_results(results, envelope=options["envelope"])
        self.stdout.write(json.dumps(payload, indent=options["indent"], ensure_ascii=False))

    def _load_items(self, source: str) -> list:
        try:
            if source == "-":
                items = json.load(sys.stdin)
            else:
                with open(source, encoding="utf-8") as handle:
                    items = json.load(handle)
        except OSError as exc:
            raise CommandError(f"Cannot read items from {source}: {exc}") from exc
        except ValueError as exc:
            raise CommandError(f"Items in {source} are not valid JSON: {exc}") from exc
        if not isinstance(items, list):
            raise CommandError("Items must be a JSON list")
        return items
