import datetime
import logging
import os

from reportlab.lib.pagesizes import letter
from reportlab.lib.units import inch
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfgen import canvas

from fuzzplot.util import ensure_parent

log = logging.getLogger(__name__)

PAGE_W, PAGE_H = letter
MARGIN = 1*inch


def draw_text(c, text, y, font="Helvetica", size=10.5, leading=13):
    """Draw ``text`` from the left margin down, wrapped to the page width; returns the next free y."""
    c.setFont(font, size)
    for para in text.split("\n"):
        for line in simpleSplit(para, font, size, PAGE_W - 2*MARGIN) or [""]:
            c.drawString(MARGIN, y, line)
            y -= leading
    return y


def fit_size(iw, ih, box_w, box_h):
    """Largest (w, h) with the image's aspect ratio that fits the box, never upscaled."""
    scale = min(box_w/iw, box_h/ih, 1.0)
    return iw*scale, ih*scale


def draw_chart_page(c, image_path, heading):
    c.setFont("Helvetica-Bold", 14)
    c.drawString(MARGIN, PAGE_H - MARGIN, heading)

    img = ImageReader(os.fspath(image_path))
    w, h = fit_size(*img.getSize(), PAGE_W - 2*MARGIN, PAGE_H - 2*MARGIN - 0.4*inch)
    top = PAGE_H - MARGIN - 0.3*inch
    c.drawImage(img, (PAGE_W - w)/2, top - h, width=w, height=h, mask='auto')
    c.showPage()


def series_listing(chart):
    if not chart.series:
        return "(no series)"
    lines = []
    for i, s in enumerate(chart.series, start=1):
        lines.append(f"{i:2d}. {s.name}: {len(s)} point(s)")
        if s.label is not None and s.label != s.source:
            lines.append(f"    source: {s.source}")
    return "\n".join(lines)


def write_report(pdf_path, chart, image_path):
    """
    Two pages: a summary (title, timestamp, config, series sources) and the chart image.
    ``image_path`` must already exist (see ``Chart.save``).
    """
    if not os.path.exists(image_path):
        raise FileNotFoundError(f"Missing figure {image_path}")
    ensure_parent(pdf_path)
    cfg = chart.config
    heading = cfg.title or f"{cfg.ylabel or 'y'} vs {cfg.xlabel or 'x'}"
    c = canvas.Canvas(os.fspath(pdf_path), pagesize=letter)

    y = draw_text(c, heading, PAGE_H - MARGIN, font="Helvetica-Bold", size=16, leading=20)
    y = draw_text(c, f"Generated: {datetime.datetime.now().strftime('%Y-%m-%d %H:%M:%S')}", y, size=11)
    summary = (
        f"x axis: {cfg.xlabel or '(unlabelled)'} [{cfg.x_scale.value}]\n"
        f"y axis: {cfg.ylabel or '(unlabelled)'}\n"
        f"legend: {cfg.legend.value}"
    )
    y = draw_text(c, summary, y - 8)
    y = draw_text(c, "Series", y - 10, font="Helvetica-Bold", size=12, leading=14)
    draw_text(c, series_listing(chart), y, font="Courier", size=8.5, leading=10)
    c.showPage()

    draw_chart_page(c, image_path, heading)
    c.save()
    log.info("wrote %s", pdf_path)
    return pdf_path
