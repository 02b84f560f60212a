"""
WeasyPrint PDF renderer.

Translates PdfOptions into page CSS and header markup, then lets WeasyPrint
lay the document out. The translation is pure and testable without
WeasyPrint's native libraries.

Key behaviors:
- Numeric page numbers go in the bottom-right margin box
- A first-page-only header is placed once at the top of the body
- An all-pages header becomes a running element in the top margin box
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from src.components.application_document.models import HeaderRepeat, PageNumbers, PdfOptions

RUNNING_HEADER_NAME = "documentHeader"

_BODY_OPEN_RE = re.compile(r"<body\b[^>]*>", re.IGNORECASE)

BASE_PAGE_CSS = """
@page {
    size: A4;
    margin: 25mm 18mm 22mm 18mm;
}
"""

NUMERIC_PAGE_CSS = """
@page {
    @bottom-right {
        content: counter(page) " / " counter(pages);
        font-size: 8pt;
        color: #64748b;
    }
}
"""

RUNNING_HEADER_CSS = f"""
.pdf-running-header {{
    position: running({RUNNING_HEADER_NAME});
}}
@page {{
    @top-center {{
        content: element({RUNNING_HEADER_NAME});
        width: 100%;
    }}
}}
"""


def build_page_css(options: PdfOptions) -> str:
    """Page stylesheet for the given options."""
    parts = [BASE_PAGE_CSS]
    if options.page_numbers == PageNumbers.NUMERIC:
        parts.append(NUMERIC_PAGE_CSS)
    if options.header.repeat == HeaderRepeat.ALL_PAGES and options.header.html:
        parts.append(RUNNING_HEADER_CSS)
    return "".join(parts)


def inject_header(html: str, options: PdfOptions) -> str:
    """Insert the header markup right after <body>, or at the start if there is none."""
    header_html = options.header.html
    if not header_html:
        return html

    if options.header.repeat == HeaderRepeat.ALL_PAGES:
        block = f'<div class="pdf-running-header">{header_html}</div>'
    else:
        block = f'<div class="pdf-first-page-header">{header_html}</div>'

    match = _BODY_OPEN_RE.search(html)
    if match is None:
        return block + html
    return html[: match.end()] + block + html[match.end() :]


@dataclass(frozen=True)
class WeasyPrintPdf:
    """Rendered PDF bytes."""

    data: bytes

    def to_bytes(self) -> bytes:
        return self.data


class WeasyPrintPdfRenderer:
    def __init__(self, base_url: str | None = None):
        """
        Args:
            base_url: Used by WeasyPrint to resolve relative stylesheet and
                image links in the markup.
        """
        self.base_url = base_url

    def render_from_html(self, html: str, options: PdfOptions) -> WeasyPrintPdf:
        # Lazy import so importing the adapter does not need cairo/pango
        from weasyprint import CSS, HTML

        document = HTML(string=inject_header(html, options), base_url=self.base_url)
        data = document.write_pdf(stylesheets=[CSS(string=build_page_css(options))])
        return WeasyPrintPdf(data=data)
