import os
from datetime import datetime

from openpyxl import load_workbook

from coast_forecast.extraction import extract_rainfall, extract_tides, extract_wind, wind_frame_with_minima
from coast_forecast.report import save_excel_report


def test_report_has_every_sheet(tmp_path, wind_json, tide_json, rainfall_json):
    combined = {}
    extract_tides(tide_json, combined)
    extract_rainfall(rainfall_json, combined)
    wind_detail = wind_frame_with_minima(extract_wind(wind_json, combined))

    path = save_excel_report(combined, wind_detail, str(tmp_path / "reports"), now=datetime(2024, 4, 5, 6, 30))

    assert os.path.basename(path) == "Coast_Forecast_Report_20240405_0630.xlsx"
    wb = load_workbook(path)
    assert wb.sheetnames == ["Daily Summary", "Wind Minima", "Wind Detail"]

    minima = list(wb["Wind Minima"].iter_rows(values_only=True))
    assert minima[0] == ("Date", "Time", "Wind Speed (km/h)", "Average Change (km/h)")
    assert [row[1] for row in minima[1:]] == ["03:00 AM", "03:00 AM", "09:00 AM"]

    detail_header = next(wb["Wind Detail"].iter_rows(values_only=True))
    assert "Local Minimum" in detail_header
    assert wb["Daily Summary"].column_dimensions["B"].width <= 50


def test_report_without_wind(tmp_path, tide_json):
    combined = {}
    extract_tides(tide_json, combined)

    path = save_excel_report(combined, None, str(tmp_path))

    assert load_workbook(path).sheetnames == ["Daily Summary", "Wind Minima"]
