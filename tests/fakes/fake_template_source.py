"""In-process template source for tests; no real network calls.

Usage::

    source = FakeTemplateSource({SS4_URL: fillable_template(["f1"])})
    fetcher = TemplateFetcher(FetchConfig(), transport=source.transport)

    assert source.requests[0].headers["User-Agent"]
"""

from __future__ import annotations

from io import BytesIO
from typing import Mapping, Sequence

import httpx
from reportlab.pdfgen import canvas


class FakeTemplateSource:
    """Serves canned responses keyed by URL; anything else is a 404.

    Values may be PDF bytes (served as 200), an ``int`` status code, or an
    ``httpx`` exception instance to raise.
    """

    def __init__(self, routes: Mapping[str, bytes | int | Exception] | None = None) -> None:
        self._routes = dict(routes or {})
        self.requests: list[httpx.Request] = []
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        entry = self._routes.get(str(request.url), 404)
        if isinstance(entry, Exception):
            raise entry
        if isinstance(entry, int):
            return httpx.Response(entry, content=b"<html>unavailable</html>")
        return httpx.Response(200, content=entry, headers={"Content-Type": "application/pdf"})

    @classmethod
    def unavailable(cls) -> FakeTemplateSource:
        """A source where every template is missing."""
        return cls()


def fillable_template(field_names: Sequence[str], pagesize: tuple[float, float] = (612, 792)) -> bytes:
    """A one-page PDF with an empty AcroForm text field per name."""
    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=pagesize)
    c.drawString(40, pagesize[1] - 40, "Official Form")
    y = pagesize[1] - 100
    for name in field_names:
        c.acroForm.textfield(name=name, x=150, y=y, width=300, height=18, value="")
        y -= 30
    c.showPage()
    c.save()
    return buffer.getvalue()


def flat_template(pagesize: tuple[float, float] = (500, 700), pages: int = 1) -> bytes:
    """A PDF with printed content but no interactive fields."""
    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=pagesize)
    for number in range(pages):
        c.rect(20, 20, pagesize[0] - 40, pagesize[1] - 40)
        c.drawString(40, pagesize[1] - 40, f"Official Form page {number + 1}")
        c.showPage()
    c.save()
    return buffer.getvalue()
