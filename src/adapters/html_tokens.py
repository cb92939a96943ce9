"""Extracción de tokens y del código PPS desde HTML.

Cada página del asistente embebe:
- `<meta name="csrf-token" content="...">`
- `<input name="authenticity_token" value="...">`

La página final incluye un botón `data-clipboard-text="<código>"`.

Solo se considera el primer elemento que coincide; los siguientes se ignoran.
"""

from __future__ import annotations

from bs4 import BeautifulSoup, ParserRejectedMarkup

from core.domain.errors import CodeNotFound, HtmlParseError, TokenKind, TokenNotFound
from core.domain.models import SessionTokens

CSRF_SELECTOR = "meta[name=csrf-token]"
AUTHENTICITY_SELECTOR = "input[name=authenticity_token]"
CODE_SELECTOR = "button[data-clipboard-text]"
CODE_ATTRIBUTE = "data-clipboard-text"


def parse_html(html: str) -> BeautifulSoup:
    if not isinstance(html, str):
        raise HtmlParseError(f"expected text, got {type(html).__name__}")
    try:
        return BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup as exc:
        raise HtmlParseError(str(exc)) from exc


def _first_attr(soup: BeautifulSoup, selector: str, attribute: str) -> str | None:
    element = soup.select_one(selector)
    if element is None:
        return None
    value = element.get(attribute)
    if isinstance(value, list):  # multi-valued attributes (class, rel...)
        value = " ".join(value)
    if not value or not value.strip():
        return None
    return value


def _csrf_from(soup: BeautifulSoup) -> str:
    token = _first_attr(soup, CSRF_SELECTOR, "content")
    if token is None:
        raise TokenNotFound(TokenKind.CSRF)
    return token


def _authenticity_from(soup: BeautifulSoup) -> str:
    token = _first_attr(soup, AUTHENTICITY_SELECTOR, "value")
    if token is None:
        raise TokenNotFound(TokenKind.AUTHENTICITY)
    return token


def extract_csrf_token(html: str) -> str:
    return _csrf_from(parse_html(html))


def extract_authenticity_token(html: str) -> str:
    return _authenticity_from(parse_html(html))


def extract_session_tokens(html: str) -> SessionTokens:
    """Extrae ambos tokens con un único parseo (CSRF primero)."""

    soup = parse_html(html)
    return SessionTokens(
        csrf_token=_csrf_from(soup),
        authenticity_token=_authenticity_from(soup),
    )


def extract_final_code(html: str) -> str:
    code = _first_attr(parse_html(html), CODE_SELECTOR, CODE_ATTRIBUTE)
    if code is None:
        raise CodeNotFound()
    return code
