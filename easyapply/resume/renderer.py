"""Resume YAML to HTML to PDF."""
import logging
import re
from html import escape
from pathlib import Path
from typing import Any

from playwright.sync_api import sync_playwright

logger = logging.getLogger(__name__)

PDF_MARGIN = {"top": "0.5in", "right": "0.5in", "bottom": "0.5in", "left": "0.5in"}
MAX_SKILL_KEYWORDS = 12
MAX_PROJECTS = 6
MAX_CERTIFICATES = 4
PROJECT_DESCRIPTION_CHARS = 150

RESUME_CSS = """
body { font-family: Helvetica, Arial, sans-serif; font-size: 10.5pt; color: #1f2937; margin: 0; }
.resume { display: flex; gap: 24px; }
.sidebar { width: 30%; }
.main { width: 70%; }
h1 { font-size: 22pt; margin: 0; }
.headline { color: #4b5563; margin-bottom: 12px; }
h2 { font-size: 12pt; border-bottom: 1px solid #d1d5db; padding-bottom: 2px; margin-top: 16px; }
h3 { font-size: 10.5pt; margin: 8px 0 2px; }
.meta { color: #6b7280; font-size: 9pt; }
.tag { display: inline-block; background: #eef2ff; border-radius: 3px; padding: 1px 5px; margin: 1px; font-size: 8.5pt; }
ul { margin: 4px 0; padding-left: 16px; }
"""


def sanitize_filename(name: str) -> str:
    """Keep letters, digits, spaces, dashes and underscores; spaces become underscores."""
    cleaned = re.sub(r"[^a-zA-Z0-9 \-_]", "", name).strip()
    return re.sub(r"\s+", "_", cleaned)


def _text(value: Any) -> str:
    return escape(str(value)) if value else ""


def _truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[:limit].strip() + "..."


def _date_range(start: Any, end: Any) -> str:
    start_text = str(start) if start else "Present"
    end_text = str(end) if end else "Present"
    if start_text == end_text:
        return start_text
    return f"{start_text} - {end_text}"


def _section(title: str, body: str) -> str:
    if not body:
        return ""
    return f"<section><h2>{escape(title)}</h2>{body}</section>"


def render_resume_html(config: dict, company: str = "", job_title: str = "") -> str:
    """Render a JSON-Resume style mapping (or the older plain-resume keys) to HTML."""
    basics = config.get("basics") or config.get("personal_information") or {}
    work = config.get("work") or config.get("experience_details") or []
    education = config.get("education") or config.get("education_details") or []
    projects = config.get("projects") or []
    skills = config.get("skills") or []
    certificates = config.get("certificates") or []

    languages: list = []
    skill_groups = []
    for group in skills:
        if not isinstance(group, dict):
            continue
        if group.get("name") == "Languages":
            languages = group.get("keywords") or []
        else:
            skill_groups.append(group)

    contact = []
    if basics.get("email"):
        contact.append(f'<div><a href="mailto:{_text(basics["email"])}">{_text(basics["email"])}</a></div>')
    if basics.get("phone"):
        contact.append(f"<div>{_text(basics['phone'])}</div>")
    location = basics.get("location")
    if isinstance(location, dict) and location.get("city"):
        contact.append(f"<div>{_text(location['city'])}</div>")
    for profile in basics.get("profiles") or []:
        contact.append(f'<div><a href="{_text(profile.get("url"))}">{_text(profile.get("network"))}</a></div>')

    skills_html = "".join(
        f"<h3>{_text(group.get('name') or 'Technical Skills')}</h3>"
        + "".join(f'<span class="tag">{_text(k)}</span>' for k in group.get("keywords", [])[:MAX_SKILL_KEYWORDS])
        for group in skill_groups
        if group.get("keywords")
    )
    languages_html = "".join(f"<div>{_text(lang)}</div>" for lang in languages)
    certificates_html = "".join(
        f"<div>{_text(cert.get('name') or cert.get('title'))}"
        + (f'<div class="meta">{_text(cert["issuer"])}</div>' if cert.get("issuer") else "")
        + "</div>"
        for cert in certificates[:MAX_CERTIFICATES]
    )

    work_html = ""
    for job in work:
        highlights = "".join(f"<li>{_text(h)}</li>" for h in job.get("highlights") or [])
        summary = job.get("summary") or job.get("description")
        work_html += (
            f"<h3>{_text(job.get('position') or job.get('title'))}</h3>"
            f'<div class="meta">{_text(job.get("company") or job.get("name"))} | '
            f"{escape(_date_range(job.get('startDate'), job.get('endDate')))}</div>"
            + (f"<p>{_text(summary)}</p>" if summary else "")
            + (f"<ul>{highlights}</ul>" if highlights else "")
        )

    education_html = "".join(
        f"<h3>{_text(edu.get('area') or edu.get('studyType'))}</h3>"
        f'<div class="meta">{_text(edu.get("institution"))} | '
        f"{escape(_date_range(edu.get('startDate'), edu.get('endDate')))}</div>"
        + (f'<div class="meta">GPA: {_text(edu["score"])}</div>' if edu.get("score") else "")
        for edu in education
    )

    projects_html = "".join(
        f"<h3>{_text(project.get('name'))}</h3>"
        f"<p>{escape(_truncate(str(project.get('description') or ''), PROJECT_DESCRIPTION_CHARS))}</p>"
        for project in projects[:MAX_PROJECTS]
    )

    headline = basics.get("label") or job_title
    summary = basics.get("summary")
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<title>Resume - {_text(basics.get("name"))} - {escape(company)}</title>
<style>{RESUME_CSS}</style>
</head>
<body>
<div class="resume">
<aside class="sidebar">
{_section("Contact", "".join(contact))}
{_section("Skills", skills_html)}
{_section("Languages", languages_html)}
{_section("Certifications", certificates_html)}
</aside>
<main class="main">
<h1>{_text(basics.get("name"))}</h1>
{f'<div class="headline">{escape(str(headline))}</div>' if headline else ""}
{_section("Professional Summary", f"<p>{_text(summary)}</p>" if summary else "")}
{_section("Experience", work_html)}
{_section("Education", education_html)}
{_section("Projects", projects_html)}
</main>
</div>
</body>
</html>"""


class PdfRenderer:
    """Prints HTML to PDF in a private headless Chromium.

    Each call starts and stops its own Playwright driver, so it can run on
    a worker thread without touching the browser that drives the job tab.
    """

    def __init__(self, headless: bool = True) -> None:
        self._headless = headless

    def render(self, html: str, output_path: Path) -> Path:
        """Write ``html`` as an A4 PDF to ``output_path``.

        Raises:
            RuntimeError: If the PDF file was not created.
        """
        with sync_playwright() as playwright:
            browser = playwright.chromium.launch(headless=self._headless)
            try:
                page = browser.new_page()
                page.set_content(html, wait_until="networkidle")
                page.pdf(path=str(output_path), format="A4", print_background=True, margin=PDF_MARGIN)
            finally:
                browser.close()

        if not output_path.exists():
            raise RuntimeError(f"PDF file was not created at {output_path}")
        logger.debug(f"PDF size: {output_path.stat().st_size} bytes")
        return output_path
