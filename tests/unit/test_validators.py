"""
test_validators.py
------------------
Unit tests for DataValidator normalization and validation helpers.
"""
import pytest

from datanest.core.exceptions import ValidationError
from datanest.core.validators import DataValidator


class TestNormalizeTagName:
    """Test DataValidator.normalize_tag_name()."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("React Hooks", "react-hooks"),
            ("  Python  ", "python"),
            ("async   await\tpatterns", "async-await-patterns"),
            ("already-canonical", "already-canonical"),
            ("C++", "c++"),
        ],
    )
    def test_canonical_form(self, raw, expected):
        """Tags are trimmed, lowercased and whitespace runs become hyphens."""
        assert DataValidator.normalize_tag_name(raw) == expected

    @pytest.mark.parametrize("raw", ["React Hooks", " A  b ", "x", "Ünïcode Tag"])
    def test_idempotent(self, raw):
        """Normalizing a normalized name changes nothing."""
        once = DataValidator.normalize_tag_name(raw)
        assert DataValidator.normalize_tag_name(once) == once

    @pytest.mark.parametrize("raw", [None, "", "   ", "\n\t"])
    def test_blank_returns_none(self, raw):
        """Nothing left after trimming means no name."""
        assert DataValidator.normalize_tag_name(raw) is None


class TestValidateRequiredFields:
    """Test DataValidator.validate_required_fields()."""

    def test_accepts_complete_payload(self):
        """All fields present and non-empty pass silently."""
        DataValidator.validate_required_fields(
            {"title": "Debounce", "code": "x", "language": "js"},
            ["title", "code", "language"],
        )

    @pytest.mark.parametrize(
        "payload",
        [{}, {"title": None}, {"title": ""}, {"title": "   "}],
    )
    def test_rejects_missing_or_blank(self, payload):
        """Missing, None, empty and whitespace-only values are rejected."""
        with pytest.raises(ValidationError, match="title"):
            DataValidator.validate_required_fields(payload, ["title"])

    def test_allow_falsy_keeps_zero(self):
        """allow_falsy accepts 0 but still rejects None."""
        DataValidator.validate_required_fields({"size": 0}, ["size"], allow_falsy=True)
        with pytest.raises(ValidationError):
            DataValidator.validate_required_fields({"size": None}, ["size"], allow_falsy=True)


class TestNormalizeScalars:
    """Test string and integer normalization."""

    def test_normalize_string(self):
        """Strings are stripped; empty becomes None."""
        assert DataValidator.normalize_string("  hi ") == "hi"
        assert DataValidator.normalize_string("   ") is None
        assert DataValidator.normalize_string(None) is None

    def test_non_blank_text_keeps_whitespace(self):
        """Text is returned as given; blank becomes None."""
        assert DataValidator.non_blank_text("  hi ") == "  hi "
        assert DataValidator.non_blank_text(" \t") is None
        assert DataValidator.non_blank_text(None) is None

    def test_normalize_int(self):
        """Integers and numeric strings convert; blanks are None."""
        assert DataValidator.normalize_int("14") == 14
        assert DataValidator.normalize_int(3) == 3
        assert DataValidator.normalize_int("") is None
        assert DataValidator.normalize_int(None) is None

    @pytest.mark.parametrize("value", ["big", True, 1.5j])
    def test_normalize_int_rejects_non_integers(self, value):
        """Non-numeric values and booleans are rejected."""
        with pytest.raises(ValidationError):
            DataValidator.normalize_int(value)


class TestNormalizeIdList:
    """Test DataValidator.normalize_id_list()."""

    def test_dedupes_preserving_order(self):
        """First occurrence wins and order is kept."""
        assert DataValidator.normalize_id_list([3, "1", 3, None, 2]) == [3, 1, 2]

    def test_none_is_empty(self):
        """No list means no ids."""
        assert DataValidator.normalize_id_list(None) == []

    @pytest.mark.parametrize("value", ["1,2", 5])
    def test_rejects_non_lists(self, value):
        """Strings and scalars are not id lists."""
        with pytest.raises(ValidationError):
            DataValidator.normalize_id_list(value)

    def test_non_integer_raises_by_default(self):
        """Strict parsing rejects the whole list."""
        with pytest.raises(ValidationError):
            DataValidator.normalize_id_list([1, "abc"])

    def test_skip_invalid_drops_non_integers(self):
        """Lenient parsing keeps only the usable ids."""
        assert DataValidator.normalize_id_list(
            [1, "abc", "2", True], skip_invalid=True
        ) == [1, 2]
