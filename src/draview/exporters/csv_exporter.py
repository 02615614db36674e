import csv
import io
import os
from typing import Any, Dict, List

import aiofiles

from .base_exporter import BaseExporter


class CSVExporter(BaseExporter):
    DEFAULT_FILENAME = "draview-nodes.csv"

    async def export(self, data: List[Dict[str, Any]], path: str | None = None) -> str:
        """Export flat rows to a CSV file. Returns the path written.

        An empty list produces an empty file.
        """
        out_path = path or self.DEFAULT_FILENAME
        rows = list(data or [])
        os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)

        if not rows:
            async with aiofiles.open(out_path, "w", encoding="utf-8"):
                pass
            return out_path

        # Union of keys, in first-seen order
        headers = []
        for r in rows:
            for k in r.keys():
                if k not in headers:
                    headers.append(k)

        # csv.DictWriter needs a sync file object: render in memory, write once.
        output = io.StringIO()
        writer = csv.DictWriter(output, fieldnames=headers)
        writer.writeheader()
        for r in rows:
            writer.writerow({k: self._sanitize_cell(v) for k, v in r.items()})

        async with aiofiles.open(out_path, "w", encoding="utf-8", newline="") as fh:
            await fh.write(output.getvalue())

        return out_path

    def _sanitize_cell(self, value: Any) -> Any:
        """
        Prefix strings starting with =, +, -, or @ with a single quote so
        spreadsheets do not evaluate them as formulas.
        """
        if isinstance(value, str) and value.startswith(("=", "+", "-", "@")):
            return f"'{value}"
        return value
