"""Shared test fixtures for the PPS wizard."""

from datetime import date

import pytest

from core.config import AppSettings
from core.domain.gender import Gender
from core.domain.models import SessionTokens, UserInput, WizardRequest

PPS_CODE = "PPS-ABC123"


def wizard_page(csrf: str | None, authenticity: str | None) -> str:
    """HTML shaped like an intermediate wizard page."""
    meta = f'<meta name="csrf-token" content="{csrf}" />' if csrf is not None else ""
    field = (
        f'<input type="hidden" name="authenticity_token" value="{authenticity}" autocomplete="off" />'
        if authenticity is not None
        else ""
    )
    return f"""<!DOCTYPE html>
<html lang="fr">
<head>
  <meta name="csrf-param" content="authenticity_token" />
  {meta}
  <title>Parcours de Prévention Santé</title>
</head>
<body>
  <form action="/courses/wizards/next" method="post">
    <input type="hidden" name="_method" value="patch" />
    {field}
    <button name="button" type="submit">Suivant</button>
  </form>
</body>
</html>"""


def final_page(code: str | None = PPS_CODE) -> str:
    button = (
        f'<button type="button" class="btn" data-clipboard-text="{code}">Copier</button>'
        if code is not None
        else ""
    )
    return f"""<!DOCTYPE html>
<html><head><meta name="csrf-token" content="csrf-final" /></head>
<body><div class="pps"><p>Votre code PPS : <strong>{code}</strong></p>{button}</div></body>
</html>"""


class FakeTransport:
    """Transport returning canned pages in order and recording every request."""

    def __init__(self, responses):
        self._responses = list(responses)
        self.requests: list[WizardRequest] = []

    async def send(self, request: WizardRequest) -> str:
        self.requests.append(request)
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        base_url="https://pps.athle.fr/",
        user_agent="Mozilla/5.0 (test)",
        http_timeout_seconds=5.0,
    )


@pytest.fixture
def user_input() -> UserInput:
    return UserInput(
        race_date=date(2025, 9, 1),
        gender=Gender.MALE,
        last_name="Doe",
        first_name="John",
        birthdate=date(2000, 1, 1),
        email="john@doe.test",
    )


@pytest.fixture
def tokens() -> SessionTokens:
    return SessionTokens(csrf_token="csrf-1", authenticity_token="auth-1")


@pytest.fixture
def chained_pages() -> list[str]:
    """Entry page, five intermediate pages, then the final page."""
    pages = [wizard_page(f"csrf-{i}", f"auth-{i}") for i in range(1, 7)]
    pages.append(final_page())
    return pages
