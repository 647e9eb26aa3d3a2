"""Excel report of the daily summary and the wind analysis."""

import logging
import os
from datetime import date, datetime
from typing import Dict, Optional

import pandas as pd
from openpyxl.utils import get_column_letter

from coast_forecast.summary import DayInfo, summary_frame, minima_frame

logger = logging.getLogger(__name__)

MAX_COLUMN_WIDTH = 50


def _autosize_columns(worksheet):
    for idx, col in enumerate(worksheet.columns, 1):
        max_length = max((len(str(cell.value)) for cell in col if cell.value is not None), default=0)
        worksheet.column_dimensions[get_column_letter(idx)].width = min(max_length + 2, MAX_COLUMN_WIDTH)


def save_excel_report(
    combined: Dict[date, DayInfo],
    wind_detail: Optional[pd.DataFrame],
    reports_dir: str,
    now: Optional[datetime] = None,
) -> str:
    """
    Write the summary workbook.

    Args:
        combined (dict): date -> DayInfo
        wind_detail (pd.DataFrame): Output of wind_frame_with_minima, may be None
        reports_dir (str): Directory to write into (created if missing)
        now (datetime): Timestamp used in the file name, defaults to now

    Returns:
        str: Path of the written workbook
    """
    os.makedirs(reports_dir, exist_ok=True)
    stamp = (now or datetime.now()).strftime("%Y%m%d_%H%M")
    xlsx_path = os.path.join(reports_dir, f"Coast_Forecast_Report_{stamp}.xlsx")

    daily = summary_frame(combined)
    minima = minima_frame(combined)
    if not minima.empty:
        minima["Time"] = pd.to_datetime(minima["Time"]).dt.strftime("%I:%M %p")

    with pd.ExcelWriter(xlsx_path, engine="openpyxl") as writer:
        daily.to_excel(writer, index=False, sheet_name="Daily Summary")
        minima.to_excel(writer, index=False, sheet_name="Wind Minima")

        if wind_detail is not None and not wind_detail.empty:
            detail = wind_detail.copy()
            detail["Time"] = pd.to_datetime(detail["Time"]).dt.strftime("%I:%M %p")
            detail = detail.rename(columns={
                "mean_speed": "Day Mean (km/h)",
                "local_minimum": "Local Minimum",
                "volatility": "Average Change (km/h)",
            })
            detail.to_excel(writer, index=False, sheet_name="Wind Detail")

        for sheet_name in writer.sheets:
            _autosize_columns(writer.sheets[sheet_name])

    logger.info("Excel report saved: %s", xlsx_path)
    return xlsx_path
