"""
Unit tests for consistency validation.
"""

import pytest

from forkserver.config.errors import InvalidConfigError
from forkserver.config.errors import MissingHostError
from forkserver.config.settings import ServerConfigBuilder
from forkserver.config.validation import validate_consistency


@pytest.mark.unit
class TestValidateConsistency:
    """Test host and port checks."""

    def test_missing_host_raises(self) -> None:
        """Test an unset host fails."""
        with pytest.raises(MissingHostError, match="host"):
            validate_consistency(ServerConfigBuilder(host=None))

    def test_missing_host_is_invalid_config(self) -> None:
        """Test MissingHostError is reported as an invalid configuration."""
        assert issubclass(MissingHostError, InvalidConfigError)

    def test_numeric_port_string_overwrites_port(self) -> None:
        """Test a parseable port string wins over the numeric port."""
        builder = ServerConfigBuilder(port=1, port_string="9999")

        validate_consistency(builder)

        assert builder.port == 9999

    def test_non_numeric_port_string_ignored(self) -> None:
        """Test an unparseable port string leaves the port alone."""
        builder = ServerConfigBuilder(port=1234, port_string="notanumber")

        validate_consistency(builder)

        assert builder.port == 1234
        assert builder.port_string == "notanumber"

    @pytest.mark.parametrize("port_string", ["9_999", "٩٩٩٩", " 9999 ", "9999.0"])
    def test_loosely_numeric_port_string_ignored(self, port_string: str) -> None:
        """Test only plain decimal port strings replace the port."""
        builder = ServerConfigBuilder(port=9998, port_string=port_string)

        validate_consistency(builder)

        assert builder.port == 9998
        assert builder.port_string == port_string

    @pytest.mark.parametrize("port_string", [None, "", "   "])
    def test_blank_port_string_ignored(self, port_string: str | None) -> None:
        """Test missing or blank port strings are skipped."""
        builder = ServerConfigBuilder(port=1234, port_string=port_string)

        validate_consistency(builder)

        assert builder.port == 1234
