"""Unit tests for JoinCodeGenerator."""

from unittest.mock import patch

import pytest

from studysync.domain.services.join_code_generator import (
    JoinCodeExhaustedError,
    JoinCodeGenerator,
)


class TestValidation:
    """Test join code format validation."""

    def test_validate_valid_codes(self):
        for code in ["AB12CD34", "ZZZZZZZZ", "00000000", "K7Q2ZB0M"]:
            assert JoinCodeGenerator.validate(code) is True

    def test_validate_invalid_codes(self):
        invalid = [
            "ab12cd34",  # lowercase
            "AB12CD3",  # too short
            "AB12CD345",  # too long
            "AB12-D34",
            "",
        ]
        for code in invalid:
            assert JoinCodeGenerator.validate(code) is False

    def test_validate_non_string(self):
        assert JoinCodeGenerator.validate(None) is False
        assert JoinCodeGenerator.validate(12345678) is False


class TestGeneration:
    """Test join code generation."""

    def test_generated_codes_are_valid(self):
        for _ in range(50):
            assert JoinCodeGenerator.validate(JoinCodeGenerator.generate())

    def test_generated_codes_vary(self):
        codes = {JoinCodeGenerator.generate() for _ in range(50)}
        assert len(codes) > 1

    def test_collision_is_redrawn(self):
        draws = iter("AAAAAAAA" + "BBBBBBBB")
        with patch(
            "studysync.domain.services.join_code_generator.secrets.choice",
            side_effect=lambda alphabet: next(draws),
        ):
            code = JoinCodeGenerator.generate(existing_codes=["AAAAAAAA"])
        assert code == "BBBBBBBB"

    def test_exhaustion_raises(self):
        with patch(
            "studysync.domain.services.join_code_generator.secrets.choice",
            return_value="A",
        ):
            with pytest.raises(JoinCodeExhaustedError):
                JoinCodeGenerator.generate(existing_codes={"AAAAAAAA"})
