"""Point input and result export for the cell generator.

Missing cells are written as ``null`` in JSON and as an explicit ``NA``
token in CSV and line-oriented output, never as an empty string.
"""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

__all__ = [
    "read_points_csv",
    "export_json",
    "export_csv",
    "export_wkt_lines",
    "export_records",
]

Records = Sequence[Optional[str]]


def read_points_csv(path: Path | str) -> Tuple[List[float], List[float], List[float]]:
    """Read ``x``, ``y`` and ``z`` columns (case-insensitive header) from a CSV file."""

    csv_path = Path(path)
    with csv_path.open(newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if reader.fieldnames is None:
            raise ValueError(f"{csv_path} has no header row")
        columns = {name.strip().lower(): name for name in reader.fieldnames}
        missing = [axis for axis in ("x", "y", "z") if axis not in columns]
        if missing:
            raise ValueError(f"{csv_path} is missing column(s): {', '.join(missing)}")
        xs: List[float] = []
        ys: List[float] = []
        zs: List[float] = []
        for line_no, row in enumerate(reader, start=2):
            try:
                xs.append(float(row[columns["x"]]))
                ys.append(float(row[columns["y"]]))
                zs.append(float(row[columns["z"]]))
            except (TypeError, ValueError) as exc:
                raise ValueError(f"{csv_path}:{line_no}: invalid coordinate ({exc})") from exc
    logging.info("Read %d points from %s", len(xs), csv_path)
    return xs, ys, zs


def export_json(
    x: Sequence[float],
    y: Sequence[float],
    z: Sequence[float],
    records: Records,
    destination: Path,
) -> None:
    """Write per-point results as a JSON list."""
    payload = [
        {"index": i, "x": float(x[i]), "y": float(y[i]), "z": float(z[i]), "wkt": record}
        for i, record in enumerate(records)
    ]
    destination.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    logging.info("Wrote %s", destination)


def export_csv(
    x: Sequence[float],
    y: Sequence[float],
    z: Sequence[float],
    records: Records,
    destination: Path,
    na: str = "NA",
) -> None:
    with destination.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow(["index", "x", "y", "z", "wkt"])
        for i, record in enumerate(records):
            writer.writerow(
                [
                    i,
                    repr(float(x[i])),
                    repr(float(y[i])),
                    repr(float(z[i])),
                    na if record is None else record,
                ]
            )
    logging.info("Wrote %s", destination)


def export_wkt_lines(records: Records, destination: Path, na: str = "NA") -> None:
    lines = [na if record is None else record for record in records]
    destination.write_text("\n".join(lines) + "\n", encoding="utf-8")
    logging.info("Wrote %s", destination)


def export_records(
    x: Sequence[float],
    y: Sequence[float],
    z: Sequence[float],
    records: Records,
    destination: Path,
) -> None:
    """Pick the writer from the destination suffix."""
    suffix = destination.suffix.lower()
    if suffix == ".json":
        export_json(x, y, z, records, destination)
    elif suffix == ".csv":
        export_csv(x, y, z, records, destination)
    else:
        export_wkt_lines(records, destination)
