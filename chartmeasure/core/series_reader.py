"""
Time series input for the chart.

Reads ``date,value`` CSV files and generates sample data for the demo.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import List, Optional, Tuple
import csv
import logging
import os

import numpy as np

logger = logging.getLogger(__name__)

DATE_COLUMNS = ('date', 'time', 'timestamp', 'datetime')
VALUE_COLUMNS = ('value', 'close', 'price')


class SeriesReadError(Exception):
    """Raised when a file does not contain a usable time series."""


@dataclass
class TimeSeries:
    """A named series of (epoch seconds, value) samples, sorted by time."""
    name: str
    timestamps: np.ndarray = field(default_factory=lambda: np.empty(0))
    values: np.ndarray = field(default_factory=lambda: np.empty(0))

    def __len__(self):
        return len(self.timestamps)

    def value_at(self, timestamp: float) -> Optional[Tuple[float, float]]:
        """Nearest sample to ``timestamp`` as (timestamp, value)."""
        if len(self) == 0:
            return None
        idx = int(np.searchsorted(self.timestamps, timestamp))
        if idx >= len(self):
            idx = len(self) - 1
        elif idx > 0 and timestamp - self.timestamps[idx - 1] < self.timestamps[idx] - timestamp:
            idx -= 1
        return float(self.timestamps[idx]), float(self.values[idx])


def parse_timestamp(text: str) -> float:
    """Epoch seconds from an ISO date, an ISO date-time or a plain number."""
    text = text.strip()
    try:
        return float(text)
    except ValueError:
        pass
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        parsed = datetime.combine(date.fromisoformat(text), time())
    return parsed.timestamp()


def _pick_column(header: List[str], candidates, fallback: Optional[int]) -> Optional[int]:
    lowered = [name.strip().lower() for name in header]
    for candidate in candidates:
        if candidate in lowered:
            return lowered.index(candidate)
    return fallback


def read_time_series(path, name: Optional[str] = None) -> TimeSeries:
    """Load a time series from a CSV file."""
    path = os.fspath(path)
    if name is None:
        name = os.path.splitext(os.path.basename(path))[0]

    try:
        with open(path, 'r', encoding='utf-8', newline='') as f:
            # Skip comment lines (starting with #)
            lines = [line for line in f if line.strip() and not line.lstrip().startswith('#')]
    except OSError as e:
        raise SeriesReadError(f"Cannot read {path}: {e}") from e

    rows = list(csv.reader(lines))
    if not rows:
        raise SeriesReadError(f"{path} is empty")

    header, body = rows[0], rows[1:]
    date_col = _pick_column(header, DATE_COLUMNS, None)
    if date_col is None:
        raise SeriesReadError(f"{path} has no date column (expected one of {', '.join(DATE_COLUMNS)})")
    value_col = _pick_column(header, VALUE_COLUMNS, 1 if date_col == 0 else 0)

    timestamps = []
    values = []
    for line_no, row in enumerate(body, start=2):
        try:
            timestamps.append(parse_timestamp(row[date_col]))
            values.append(float(row[value_col]))
        except (ValueError, IndexError) as e:
            logger.warning("Skipping row %d of %s: %s", line_no, path, e)
            # keep both lists aligned
            del timestamps[len(values):]

    if not values:
        raise SeriesReadError(f"{path} contains no valid rows")

    ts = np.asarray(timestamps, dtype=float)
    vs = np.asarray(values, dtype=float)
    order = np.argsort(ts, kind='stable')
    logger.info("Loaded %d samples from %s", len(vs), path)
    return TimeSeries(name=name, timestamps=ts[order], values=vs[order])


def sample_series(days: int = 365, start: Optional[date] = None, seed: int = 7,
                  initial: float = 100.0, name: str = "Sample") -> TimeSeries:
    """Deterministic daily random walk, useful for trying the tool out."""
    if start is None:
        start = date.today() - timedelta(days=days - 1)
    rng = np.random.default_rng(seed)
    steps = rng.normal(loc=0.0005, scale=0.012, size=days)
    steps[0] = 0.0
    values = initial * np.exp(np.cumsum(steps))
    first = datetime.combine(start, time()).timestamp()
    timestamps = first + np.arange(days) * 86400.0
    return TimeSeries(name=name, timestamps=timestamps, values=values)
