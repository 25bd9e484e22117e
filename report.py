from __future__ import annotations

import textwrap
from typing import Optional
from io import BytesIO
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

# The standard Helvetica font only covers WinAnsi; emoji would render as boxes.
def _winansi(s: str) -> str:
    return s.encode("cp1252", errors="ignore").decode("cp1252")


def summary_lines(analysis: dict) -> list:
    h = analysis["hashtags"]
    m = analysis["mentions"]
    cta = analysis["call_to_action"]
    ln = analysis["length"]
    rd = analysis["readability"]
    se = analysis["sentiment"]
    em = analysis["emojis"]
    return [
        f"Hashtags: {h['found']} found (recommended {h['recommended']})",
        f"Mentions: {m['found']} found (recommended {m['recommended']})",
        f"Call-to-action: {cta['strength']} ({cta['count']} phrase(s))",
        f"Length: {ln['characters']} chars, {ln['words']} words - {ln['status']} for {ln['platform']} (optimal {ln['optimal']})",
        f"Readability: {rd['score']}/100 ({rd['level']}), avg {rd['avg_words_per_sentence']:.1f} words/sentence",
        f"Sentiment: {se['tone']} tone, {se['engagement']} engagement",
        f"Emojis: {em['found']} found",
    ]


def build_pdf(result: dict, meta: dict, breakdown: Optional[dict] = None) -> bytes:
    """
    Creates a simple PDF engagement report.
    result: AnalysisResult.to_dict()
    meta: {"filename":..., "content_type":...}
    breakdown: optional per-dimension score adjustments
    """
    buf = BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    width, height = A4
    top = height/mm - 20

    def text(x_mm, y_mm, s, size=10, bold=False):
        c.setFont("Helvetica-Bold" if bold else "Helvetica", size)
        c.drawString(x_mm*mm, y_mm*mm, _winansi(s))

    def wrapped(y, s, indent=22, width_chars=95, prefix=""):
        c.setFont("Helvetica", 10)
        for i, ln in enumerate(textwrap.wrap(_winansi(s), width_chars) or [""]):
            c.drawString(indent*mm, y*mm, (prefix if i == 0 else "  ") + ln)
            y -= 5
            if y < 20:
                c.showPage()
                y = top
                c.setFont("Helvetica", 10)
        return y

    # Header
    text(18, top, "Social Content Engagement Report", size=18, bold=True)
    text(18, top-6, f"File: {meta.get('filename','')}   Source: {meta.get('content_type','')}", size=10)

    # Score
    y = top - 20
    text(18, y, f"Engagement score: {result['score']}/100   Grade: {result['grade']}", size=14, bold=True); y -= 8
    text(18, y, "Guide: 90+ A+ • 80+ A • 70+ B • 60+ C • 50+ D • below 50 F", size=9); y -= 8

    if breakdown:
        text(18, y, "Score breakdown (base 50)", size=12, bold=True); y -= 6
        for name, pts in breakdown.items():
            text(22, y, f"{name.replace('_', ' ').title()}: {pts:+d}"); y -= 5
        y -= 4

    text(18, y, "Analysis", size=12, bold=True); y -= 6
    for ln in summary_lines(result["analysis"]):
        y = wrapped(y, ln, prefix="• ")
    y -= 4

    text(18, y, "Suggestions", size=12, bold=True); y -= 6
    for s in result.get("suggestions", []):
        y = wrapped(y, f"[{s['priority']}] {s['title']}: {s['description']} (e.g. {s['example']})", prefix="• ")

    optimized = result.get("optimized_content")
    if optimized:
        y -= 4
        if y < 30:
            c.showPage()
            y = top
        text(18, y, "Optimized content", size=12, bold=True); y -= 6
        for para in optimized.split("\n"):
            y = wrapped(y, para)

    c.showPage()
    c.save()
    return buf.getvalue()
