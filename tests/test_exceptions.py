"""Tests for the exception hierarchy."""

from pathlib import Path

from jilb_insight.exceptions import (
    AnalysisError,
    ConfigurationError,
    FileAccessError,
    InvalidConfigError,
    JilbInsightError,
)


class TestJilbInsightError:
    def test_message_only(self):
        error = JilbInsightError("something broke")
        assert str(error) == "something broke"
        assert error.details == {}

    def test_details_rendered(self):
        error = JilbInsightError("something broke", details={"file": "a.fs"})
        assert str(error) == "something broke (file=a.fs)"


class TestFileAccessError:
    def test_attributes(self):
        error = FileAccessError(Path("Program.fs"), "permission denied")
        assert isinstance(error, AnalysisError)
        assert isinstance(error, JilbInsightError)
        assert error.filepath == Path("Program.fs")
        assert error.reason == "permission denied"
        assert "Program.fs" in str(error)
        assert "permission denied" in str(error)


class TestInvalidConfigError:
    def test_attributes(self):
        error = InvalidConfigError("metric_variant", "halstead", "unknown variant")
        assert isinstance(error, ConfigurationError)
        assert error.key == "metric_variant"
        assert error.value == "halstead"
        assert str(error).startswith("Invalid configuration for metric_variant: halstead")
        assert "reason=unknown variant" in str(error)


class TestToDict:
    def test_plain_error(self):
        assert JilbInsightError("boom").to_dict() == {
            "error": "JilbInsightError",
            "message": "boom",
            "details": {},
        }

    def test_details_stringified(self):
        data = InvalidConfigError("weights", 3, "[weights] must be a table").to_dict()
        assert data["error"] == "InvalidConfigError"
        assert data["details"] == {
            "key": "weights",
            "value": "3",
            "reason": "[weights] must be a table",
        }
