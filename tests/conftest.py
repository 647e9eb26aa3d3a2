import pytest

AREA = "Perth Coast: Two Rocks to Dawesville"

MARINE_XML = f"""<?xml version="1.0" encoding="UTF-8"?>
<product>
  <forecast>
    <area aac="WA_MW009" description="Geraldton Coast" type="coast">
      <forecast-period index="0" start-time-local="2024-04-05T05:00:00+08:00">
        <text type="forecast_winds">Not this one.</text>
      </forecast-period>
    </area>
    <area aac="WA_MW008" description="{AREA}" type="coast">
      <forecast-period index="0" start-time-local="2024-04-05T05:00:00+08:00">
        <text type="forecast_winds">Southerly 10 to 15 knots.</text>
        <text type="forecast_seas">Below 1 metre.</text>
        <text type="forecast_swell1">Southwesterly 1 to 1.5 metres.</text>
        <text type="forecast_weather">Sunny.</text>
      </forecast-period>
      <forecast-period index="1" start-time-local="2024-04-06T00:00:00+08:00">
        <text type="forecast_winds">Easterly 15 knots.</text>
        <text type="forecast_seas">1 metre.</text>
      </forecast-period>
    </area>
  </forecast>
</product>
"""


def forecast_payload(kind, days):
    return {"location": {"id": 14576, "name": "Perth"}, "forecasts": {kind: {"days": days}}}


@pytest.fixture
def marine_xml():
    return MARINE_XML


@pytest.fixture
def tide_json():
    return forecast_payload("tides", [
        {
            "dateTime": "2024-04-05 00:00:00",
            "entries": [
                {"dateTime": "2024-04-05 03:12:00", "height": 0.9, "type": "high"},
                {"dateTime": "2024-04-05 15:40:00", "height": 0.4, "type": "low"},
            ],
        },
    ])


@pytest.fixture
def closest_json():
    return {
        "swell": [{"id": 20870, "name": "Cottesloe Beach", "distance": 11.2}],
        "tides": [{"id": 14576, "name": "Fremantle", "distance": 0}],
        "general": [],
    }


@pytest.fixture
def swell_json():
    return forecast_payload("swell", [
        {
            "dateTime": "2024-04-05 00:00:00",
            "entries": [
                {"dateTime": "2024-04-05 06:00:00", "height": 1.5, "period": 12.0, "directionText": "SW"},
                {"dateTime": "2024-04-05 12:00:00", "height": 1.25, "period": 11.5, "directionText": "WSW"},
            ],
        },
    ])


@pytest.fixture
def wind_json():
    return forecast_payload("wind", [
        {
            "dateTime": "2024-04-05 00:00:00",
            "entries": [
                {"dateTime": "2024-04-05 00:00:00", "speed": 10, "direction": 180, "directionText": "S"},
                {"dateTime": "2024-04-05 03:00:00", "speed": 4, "direction": 170, "directionText": "S"},
                {"dateTime": "2024-04-05 06:00:00", "speed": 9, "direction": 160, "directionText": "SSE"},
            ],
        },
        {
            "dateTime": "2024-04-06 00:00:00",
            "entries": [
                {"dateTime": "2024-04-06 00:00:00", "speed": 20, "direction": 90, "directionText": "E"},
                {"dateTime": "2024-04-06 03:00:00", "speed": 2, "direction": 90, "directionText": "E"},
                {"dateTime": "2024-04-06 06:00:00", "speed": 20, "direction": 90, "directionText": "E"},
                {"dateTime": "2024-04-06 09:00:00", "speed": 2, "direction": 90, "directionText": "E"},
                {"dateTime": "2024-04-06 12:00:00", "speed": 20, "direction": 90, "directionText": "E"},
            ],
        },
    ])


@pytest.fixture
def rainfall_json():
    return forecast_payload("rainfall", [
        {
            "dateTime": "2024-04-05 00:00:00",
            "entries": [
                {"rangeCode": "0", "probability": 0, "startRange": None, "endRange": None, "rangeDivide": "-"},
            ],
        },
        {
            "dateTime": "2024-04-06 00:00:00",
            "entries": [
                {"rangeCode": "1-5", "probability": 40, "startRange": 1, "endRange": 5, "rangeDivide": "-"},
                {"rangeCode": "10+", "probability": 10, "startRange": 10, "endRange": None, "rangeDivide": "-"},
                {"rangeCode": "<1", "probability": 50, "startRange": None, "endRange": 1, "rangeDivide": "-"},
            ],
        },
    ])


@pytest.fixture
def dry_rainfall_json():
    return forecast_payload("rainfall", [
        {
            "dateTime": "2024-04-05 00:00:00",
            "entries": [{"rangeCode": "0", "probability": 0, "startRange": None, "endRange": None}],
        },
    ])


@pytest.fixture
def rainfall_probability_json():
    return forecast_payload("rainfallprobability", [
        {
            "dateTime": "2024-04-06 00:00:00",
            "entries": [
                {"dateTime": "2024-04-06 09:00:00", "probability": 20},
                {"dateTime": "2024-04-06 12:00:00", "probability": 45},
            ],
        },
    ])


@pytest.fixture
def settings():
    return {
        "api_key": "test-key",
        "location_id": 14576,
        "days": 3,
        "base_url": "https://api.willyweather.com.au/v2/",
        "bom_host": "ftp.bom.gov.au",
        "bom_path": "/anon/gen/fwo/IDW11160.xml",
        "area_description": AREA,
        "closest_weather_types": ["swell", "tides", "general"],
        "minima_window": 2,
        "timeout": 20,
        "reports_dir": "reports",
        "database": None,
    }
