"""Tests for domain models, steps and error formatting."""

from datetime import date

import pytest
from pydantic import ValidationError

from core.domain.errors import CodeNotFound, InvalidTarget, TokenKind, TokenNotFound
from core.domain.gender import Gender
from core.domain.models import SessionTokens, UserInput, WizardResult
from core.domain.steps import WizardStep


class TestUserInput:

    def test_date_parts_are_zero_padded(self):
        data = UserInput(
            race_date=date(2025, 9, 1),
            gender=Gender.FEMALE,
            last_name="Doe",
            first_name="Jane",
            birthdate=date(1990, 3, 7),
            email="jane@doe.test",
        )
        assert data.race_date_value == "2025-09-01"
        assert (data.birth_day, data.birth_month, data.birth_year) == ("07", "03", "1990")

    def test_is_frozen(self, user_input):
        with pytest.raises(ValidationError):
            user_input.email = "other@doe.test"


class TestSessionTokens:

    def test_empty_token_rejected(self):
        with pytest.raises(ValidationError):
            SessionTokens(csrf_token="", authenticity_token="auth")


class TestGender:

    @pytest.mark.parametrize("raw", ["male", "Male", " MALE "])
    def test_parse(self, raw):
        assert Gender.parse(raw) is Gender.MALE

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            Gender.parse("other")


class TestWizardStep:

    def test_order(self):
        assert [s.value for s in WizardStep.ordered()] == [
            "entry",
            "race_date",
            "personal_infos",
            "cardiovascular_risks",
            "risk_factors",
            "precautions",
            "finalization",
        ]

    def test_methods_and_paths(self):
        assert WizardStep.ENTRY.method == "GET"
        assert WizardStep.ENTRY.path == ""
        assert WizardStep.RISK_FACTORS.method == "POST"
        assert WizardStep.RISK_FACTORS.path == "courses/wizards/risk_factors"

    def test_only_finalization_is_terminal(self):
        assert [s for s in WizardStep if s.is_terminal] == [WizardStep.FINALIZATION]


class TestErrors:

    def test_message_includes_step(self):
        error = TokenNotFound(TokenKind.AUTHENTICITY).with_step(WizardStep.PRECAUTIONS)
        assert str(error) == "[precautions] Authenticity Token not found"
        assert error.kind == "token_not_found"

    def test_with_step_binds_in_place(self):
        error = CodeNotFound()
        assert error.with_step(WizardStep.FINALIZATION) is error
        assert error.step is WizardStep.FINALIZATION

    def test_with_step_keeps_existing_step(self):
        error = InvalidTarget("x", step=WizardStep.ENTRY).with_step(WizardStep.RACE_DATE)
        assert error.step is WizardStep.ENTRY

    def test_without_step(self):
        assert str(CodeNotFound()) == "PPS Code not found"


class TestWizardResult:

    def test_json_dump(self):
        result = WizardResult(code="PPS-ABC123", race_date=date(2025, 9, 1))
        payload = result.model_dump(mode="json")
        assert payload["code"] == "PPS-ABC123"
        assert payload["race_date"] == "2025-09-01"
        assert payload["generated_at"].endswith("Z")
