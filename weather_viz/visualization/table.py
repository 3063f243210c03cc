"""
Table Renderer: the record set restated as a Date / Temperature / Humidity grid.
"""

import html
from typing import Iterable, Optional

import pandas as pd

from ..core.config import TABLE_HEADERS, TABLE_HEADER_COLOR
from ..data.fetcher import records_to_frame
from ..models.data_models import WeatherRecord


def build_table(records: Optional[Iterable[WeatherRecord]]) -> pd.DataFrame:
    """Header row ``Date, Temperature (°C), Humidity (%)`` plus one row per record."""
    df = records_to_frame(records)
    df.columns = list(TABLE_HEADERS)
    return df


class TableView:
    """
    The table container.  Every ``render`` replaces the previous content.

    Attributes:
        frame (pd.DataFrame): Rows currently shown.
    """

    def __init__(self):
        self.frame = build_table(())

    def render(self, records: Optional[Iterable[WeatherRecord]]) -> pd.DataFrame:
        self.frame = build_table(records)
        return self.frame

    def to_html(self) -> str:
        """Standalone HTML table styled like the page's header color."""
        header_style = (f"border: 1px solid #ddd; padding: 8px; "
                        f"background-color: {TABLE_HEADER_COLOR}; color: white;")
        cell_style = "border: 1px solid black; padding: 8px;"

        head = ''.join(f'<th style="{header_style}">{html.escape(str(c))}</th>'
                       for c in self.frame.columns)
        rows = []
        for row in self.frame.itertuples(index=False):
            cells = ''.join(f'<td style="{cell_style}">{html.escape(_cell(v))}</td>' for v in row)
            rows.append(f'<tr>{cells}</tr>')
        return ('<table style="width: 100%; border-collapse: collapse;">'
                f'<tr>{head}</tr>{"".join(rows)}</table>')


def _cell(value) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
