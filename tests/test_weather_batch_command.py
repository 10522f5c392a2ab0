from __future__ import annotations

import json
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import override_settings


BASE_URL = "https://openweather.test/data/2.5/weather"


@pytest.fixture()
def items_file(tmp_path):
    def _write(items) -> str:
        path = tmp_path / "items.json"
        path.write_text(json.dumps(items), encoding="utf-8")
        return str(path)

    return _write


def run_command(*args: str) -> list:
    out = StringIO()
    call_command("weather_batch", *args, stdout=out)
    return json.loads(out.getvalue())


def test_command_emits_one_record_per_item(requests_mock, payload_factory, items_file):
    requests_mock.get(f"{BASE_URL}?q=Paris", json=payload_factory(name="Paris", condition="Snow", temp=-2))
    path = items_file([{"city": "Paris"}, {"city": ""}])

    payload = run_command("--input", path)

    assert len(payload) == 2
    assert payload[0]["city"] == "Paris"
    assert payload[0]["alert_type"] == "Precipitation Alert"
    assert payload[0]["summary"].startswith("Daily Weather - Paris: Temp: -2°C / 28.40°F")
    assert payload[1] == {"error": 'Input item must have a "city" property.', "city": ""}
    assert requests_mock.last_request.qs["appid"] == ["test-key"]


def test_command_wraps_records_in_envelopes(requests_mock, payload_factory, items_file):
    requests_mock.get(BASE_URL, json=payload_factory(name="Tokyo"))
    path = items_file([{"json": {"city": "Tokyo"}}])

    payload = run_command("--input", path, "--envelope")

    assert payload[0]["json"]["city"] == "Tokyo"


def test_command_api_key_override(requests_mock, payload_factory, items_file):
    requests_mock.get(BASE_URL, json=payload_factory())
    path = items_file([{"city": "Paris"}])

    run_command("--input", path, "--api-key", "other-key")

    assert requests_mock.last_request.qs["appid"] == ["other-key"]


@override_settings(OPENWEATHERMAP_API_KEY="")
def test_command_without_api_key_reports_single_error(requests_mock, items_file):
    path = items_file([{"city": "Paris"}, {"city": "Tokyo"}])

    payload = run_command("--input", path)

    assert payload == [{"error": "OpenWeatherMap API key is required."}]
    assert requests_mock.call_count == 0


def test_command_rejects_invalid_json(tmp_path):
    path = tmp_path / "items.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(CommandError, match="not valid JSON"):
        call_command("weather_batch", "--input", str(path), stdout=StringIO())


def test_command_rejects_non_list_input(items_file):
    with pytest.raises(CommandError, match="JSON list"):
        call_command("weather_batch", "--input", items_file({"city": "Paris"}), stdout=StringIO())


def test_command_reads_items_from_stdin_by_default(requests_mock, payload_factory, monkeypatch):
    requests_mock.get(BASE_URL, json=payload_factory(name="Madrid", temp=35))
    monkeypatch.setattr("sys.stdin", StringIO(json.dumps([{"city": "Madrid"}])))

    payload = run_command()

    assert payload[0]["city"] == "Madrid"
    assert payload[0]["alert_type"] == "Heat Alert"
