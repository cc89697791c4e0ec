"""
Schedule report rendering.

Usage:
    renderer = PdfReportRenderer()
    pdf_bytes = renderer.render("schedule_report.txt", model)

Templates are plain-text files in vaccination/templates/. Placeholders
({{from_date}}, {{to_date}}, {{total}}, {{generated_at}}) are replaced in
place; a line holding only {{rows}} expands to one line per schedule. The
resulting lines are drawn onto A4 pages with Pillow and saved as a PDF.
"""

import io
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Protocol

from PIL import Image, ImageDraw, ImageFont

from ..models import VaccinationSchedules

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"

# A4 at 100 dpi
PAGE_WIDTH = 827
PAGE_HEIGHT = 1169
PAGE_DPI = 100.0
MARGIN = 48
LINE_HEIGHT = 16
ROWS_PLACEHOLDER = "{{rows}}"


@dataclass
class ScheduleReportModel:
    """Data handed to the renderer. Absent date bounds are empty strings."""
    from_date: str
    to_date: str
    schedules: List[VaccinationSchedules] = field(default_factory=list)


class ReportRenderer(Protocol):
    def render(self, template_id: str, model: ScheduleReportModel) -> bytes:
        """Return the raw document bytes."""


# ──────────────────────────────────────────────────────────────────────────────
# Text layout
# ──────────────────────────────────────────────────────────────────────────────

def format_schedule_row(schedule: VaccinationSchedules) -> str:
    slot = schedule.time_slot
    return (
        f"{schedule.code:<36}  "
        f"{schedule.schedule_date.isoformat():<10}  "
        f"{slot.start_time}-{slot.end_time}  "
        f"{schedule.branch_code:<8}  "
        f"{schedule.vaccine_code:<8}  "
        f"{schedule.customer.name:<20.20}  "
        f"{'yes' if schedule.confirmed else 'no':<9}  "
        f"{'yes' if schedule.applied else 'no'}"
    )


def render_report_lines(template: str, model: ScheduleReportModel, now: datetime | None = None) -> List[str]:
    """Fill a text template and expand the rows placeholder."""
    now = now or datetime.now()

    replacements = {
        "{{from_date}}": model.from_date,
        "{{to_date}}": model.to_date,
        "{{total}}": str(len(model.schedules)),
        "{{generated_at}}": now.strftime("%Y-%m-%d %H:%M"),
    }

    lines: List[str] = []
    for raw_line in template.splitlines():
        if raw_line.strip() == ROWS_PLACEHOLDER:
            lines.extend(format_schedule_row(s) for s in model.schedules)
            continue

        line = raw_line
        for placeholder, value in replacements.items():
            line = line.replace(placeholder, value)
        lines.append(line)

    return lines


# ──────────────────────────────────────────────────────────────────────────────
# PDF output
# ──────────────────────────────────────────────────────────────────────────────

class PdfReportRenderer:
    """Render report templates into multi-page PDF documents."""

    def __init__(self, templates_dir: Path = TEMPLATES_DIR):
        self.templates_dir = templates_dir
        self.font = ImageFont.load_default()

    @property
    def lines_per_page(self) -> int:
        return (PAGE_HEIGHT - 2 * MARGIN) // LINE_HEIGHT

    def load_template(self, template_id: str) -> str:
        path = self.templates_dir / template_id
        if not path.is_file():
            raise FileNotFoundError(f"Report template not found: {path}")
        return path.read_text(encoding="utf-8")

    def render(self, template_id: str, model: ScheduleReportModel) -> bytes:
        template = self.load_template(template_id)
        lines = render_report_lines(template, model)

        per_page = self.lines_per_page
        chunks = [lines[i:i + per_page] for i in range(0, len(lines), per_page)] or [[]]
        pages = [self._draw_page(chunk) for chunk in chunks]

        buffer = io.BytesIO()
        pages[0].save(
            buffer,
            format="PDF",
            save_all=True,
            append_images=pages[1:],
            resolution=PAGE_DPI,
        )

        logger.info(f"Report rendered: {template_id}, {len(model.schedules)} schedule(s), {len(pages)} page(s)")
        return buffer.getvalue()

    def _draw_page(self, lines: List[str]) -> Image.Image:
        page = Image.new("RGB", (PAGE_WIDTH, PAGE_HEIGHT), "white")
        draw = ImageDraw.Draw(page)

        y = MARGIN
        for line in lines:
            draw.text((MARGIN, y), line, fill="black", font=self.font)
            y += LINE_HEIGHT

        return page
