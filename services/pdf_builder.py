# services/pdf_builder.py
from __future__ import annotations
import calendar
import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

from fpdf import FPDF

from services import config
from services.ranking import Comparison, RankingEntry, Status

logger = logging.getLogger(__name__)

MONTHLY_TITLE = "Monthly Energy Consumption Report"
COMPARISON_TITLE = "Energy Consumption Comparison Report"

COLOR_TEXT = (0, 0, 0)
COLOR_DIM = (128, 128, 128)
COLOR_WARN = (200, 0, 0)

STATUS_PHRASE = {
    Status.INCREASE: "Increase",
    Status.DECREASE: "Decrease",
    Status.NO_CHANGE: "No change",
}

# (text, is_warning)
Line = Tuple[str, bool]


def kwh(value: float) -> str:
    return f"{value:.2f} kWh"


def stamp(ts: datetime) -> str:
    return ts.strftime("%Y-%m-%d %H:%M:%S")


def month_label(month: str) -> str:
    """'2026-01' -> 'January 2026'"""
    year, mon = month.split("-")
    return f"{calendar.month_name[int(mon)]} {year}"


class ReportPDF(FPDF):
    """A4 report with a branded header on the first page and a footer on every page."""

    def __init__(self, title: str, generated_at: datetime):
        super().__init__(orientation="P", unit="mm", format="A4")
        self._title = title
        self._generated_at = generated_at
        self._unicode = self._load_fonts()
        self.set_auto_page_break(auto=True, margin=20)
        self.set_margins(20, 20, 20)

    def _load_fonts(self) -> bool:
        """Register the configured TTF fonts; False means Helvetica is used instead."""
        regular = Path(config.FONT_PATH)
        bold = Path(config.FONT_BOLD_PATH)
        if not regular.is_file():
            logger.debug(f"[report] no font at {regular}, using Helvetica")
            return False
        self.add_font("ReportSans", "", str(regular))
        self.add_font("ReportSans", "B", str(bold if bold.is_file() else regular))
        return True

    def _font(self, style: str = "", size: int = 12):
        self.set_font("ReportSans" if self._unicode else "Helvetica", style, size)

    def _text(self, text: str) -> str:
        # core fonts only cover Latin-1
        if self._unicode:
            return text
        return text.encode("latin-1", "replace").decode("latin-1")

    def header(self):
        if self.page_no() != 1:
            return
        logo = Path(config.LOGO_PATH)
        if logo.exists():
            self.image(str(logo), 20, 14, w=28)
        self.set_text_color(*COLOR_TEXT)
        self._font("B", 16)
        self.set_xy(55, 16)
        self.cell(0, 8, self._text(config.COMPANY_NAME), new_x="LMARGIN", new_y="NEXT")
        self._font("", 13)
        self.set_x(55)
        self.cell(0, 8, self._text(self._title), new_x="LMARGIN", new_y="NEXT")
        self.line(20, 37, 190, 37)
        self.set_y(45)

    def footer(self):
        self.set_y(-15)
        self._font("", 9)
        self.set_text_color(*COLOR_DIM)
        self.cell(0, 10, f"Confidential - internal use | Generated at {stamp(self._generated_at)}", align="L")
        self.set_x(self.l_margin)
        self.cell(0, 10, f"Page {self.page_no()}", align="R")
        self.set_text_color(*COLOR_TEXT)

    def write_lines(self, lines: List[Line]):
        self._font("", 12)
        for text, warn in lines:
            if not text:
                self.ln(5)
                continue
            self.set_text_color(*(COLOR_WARN if warn else COLOR_TEXT))
            self.multi_cell(0, 7, self._text(text), new_x="LMARGIN", new_y="NEXT")
        self.set_text_color(*COLOR_TEXT)


def _render(title: str, lines: List[Line], generated_at: datetime) -> bytes:
    pdf = ReportPDF(title, generated_at)
    pdf.add_page()
    pdf.write_lines(lines)
    return bytes(pdf.output())


# ---------- monthly ranking ----------

def monthly_report_lines(month: str, entries: List[RankingEntry]) -> List[Line]:
    grand_total = round(sum(e.total for e in entries), 2)
    lines: List[Line] = [(f"Month: {month_label(month)}", False), ("", False)]
    for e in entries:
        lines.append((f"{e.position}. {e.name} - {kwh(e.total)}", False))
    lines += [("", False), (f"Grand total: {kwh(grand_total)}", False)]
    return lines


def build_monthly_report(
    month: str,
    entries: List[RankingEntry],
    generated_at: Optional[datetime] = None,
) -> bytes:
    generated_at = generated_at or datetime.now()
    lines = monthly_report_lines(month, entries)
    lines += [("", False), (f"Generated at: {stamp(generated_at)}", False)]
    return _render(MONTHLY_TITLE, lines, generated_at)


# ---------- two-month comparison ----------

def comparison_report_lines(cmp: Comparison) -> List[Line]:
    lines: List[Line] = [
        (f"Device: {cmp.device.name}", False),
        ("", False),
        (f"Month {cmp.month_a}: {kwh(cmp.total_a)}", False),
        (f"Month {cmp.month_b}: {kwh(cmp.total_b)}", False),
        ("", False),
        (f"Difference: {kwh(cmp.difference)} ({STATUS_PHRASE[cmp.status]})", False),
        ("", False),
    ]
    if cmp.missing_a:
        lines.append((f"Warning: no data for {cmp.month_a}", True))
    if cmp.missing_b:
        lines.append((f"Warning: no data for {cmp.month_b}", True))
    return lines


def build_comparison_report(cmp: Comparison, generated_at: Optional[datetime] = None) -> bytes:
    generated_at = generated_at or datetime.now()
    lines = comparison_report_lines(cmp)
    lines += [("", False), (f"Generated at: {stamp(generated_at)}", False)]
    return _render(COMPARISON_TITLE, lines, generated_at)


# ---------- durable copy ----------

def report_filename(prefix: str, *parts: str, now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    millis = int(now.timestamp() * 1000)
    return "_".join([prefix, *parts, str(millis)]) + ".pdf"


def save_copy(pdf_bytes: bytes, filename: str, reports_dir: Optional[str] = None) -> Path:
    folder = Path(reports_dir or config.REPORTS_DIR)
    folder.mkdir(parents=True, exist_ok=True)
    path = folder / filename
    path.write_bytes(pdf_bytes)
    logger.info(f"[report] saved {path} ({len(pdf_bytes)} bytes)")
    return path
