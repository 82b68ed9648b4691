"""Tests for rush.errors: exception hierarchy."""

from rush.errors import ConfigurationError, RushError


class TestHierarchy:
    def test_rush_error_is_exception(self) -> None:
        assert issubclass(RushError, Exception)

    def test_configuration_error_is_rush_error(self) -> None:
        assert issubclass(ConfigurationError, RushError)

    def test_message(self) -> None:
        err = ConfigurationError("bad route")
        assert str(err) == "bad route"
