"""
Export interaction logs to XLSX format.
"""

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Optional

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from src.config import settings
from src.db.models import MessageLog
from src.db.repository import to_display_time

logger = logging.getLogger(__name__)


class LogExporter:
    """Export message logs to XLSX format."""

    HEADER_FONT = Font(bold=True, size=14)
    HEADER_FILL = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
    HEADER_FONT_WHITE = Font(bold=True, size=11, color="FFFFFF")
    ALT_ROW_FILL = PatternFill(start_color="D9E2F3", end_color="D9E2F3", fill_type="solid")

    THIN_BORDER = Border(
        left=Side(style="thin"),
        right=Side(style="thin"),
        top=Side(style="thin"),
        bottom=Side(style="thin"),
    )

    CENTER_ALIGN = Alignment(horizontal="center", vertical="center")
    WRAP_ALIGN = Alignment(horizontal="left", vertical="top", wrap_text=True)

    COLUMNS = [
        ("Time (IST)", 22),
        ("Chat ID", 16),
        ("Name", 20),
        ("Username", 20),
        ("Message", 70),
    ]

    def export(
        self,
        logs: list[MessageLog],
        title: str,
        output_dir: Optional[Path] = None,
    ) -> Path:
        """
        Export logs to an XLSX file.

        Args:
            logs: Log rows, already ordered
            title: Date or chat id the logs were selected by
            output_dir: Directory for output file (default: data/exports/)

        Returns:
            Path to created XLSX file
        """
        output_dir = output_dir or settings.exports_dir
        output_dir.mkdir(parents=True, exist_ok=True)

        safe_title = re.sub(r"[^\w-]", "_", title)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = output_dir / f"logs_{safe_title}_{timestamp}.xlsx"

        wb = Workbook()
        ws = wb.active
        ws.title = "Logs"

        ws.merge_cells(start_row=1, start_column=1, end_row=1, end_column=len(self.COLUMNS))
        cell = ws.cell(row=1, column=1, value=f"Logs: {title} ({len(logs)} messages)")
        cell.font = self.HEADER_FONT
        cell.alignment = self.CENTER_ALIGN

        for col, (header, width) in enumerate(self.COLUMNS, 1):
            ws.column_dimensions[get_column_letter(col)].width = width
            cell = ws.cell(row=3, column=col, value=header)
            cell.font = self.HEADER_FONT_WHITE
            cell.fill = self.HEADER_FILL
            cell.border = self.THIN_BORDER
            cell.alignment = self.CENTER_ALIGN

        for i, log in enumerate(logs, 1):
            row = 3 + i
            values = [
                to_display_time(log.created_at).strftime("%d/%m/%Y %I:%M:%S %p"),
                log.chat_id,
                log.first_name or "",
                f"@{log.username}" if log.username else "",
                log.text,
            ]
            for col, value in enumerate(values, 1):
                cell = ws.cell(row=row, column=col, value=value)
                cell.border = self.THIN_BORDER
                cell.alignment = self.WRAP_ALIGN
                if i % 2 == 0:
                    cell.fill = self.ALT_ROW_FILL

        ws.freeze_panes = "A4"

        wb.save(filepath)
        logger.info(f"Logs exported to {filepath}")

        return filepath


# Singleton instance
log_exporter = LogExporter()
