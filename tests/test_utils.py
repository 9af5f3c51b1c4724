"""
Tests for utility functions.
"""

import logging

import pytest

from centapi.utils import (
    load_json_file,
    parse_json_value,
    print_error,
    print_info,
    print_json,
    print_success,
    print_table,
    print_warning,
    setup_logging,
    truncate_string,
)


class TestParseJsonValue:
    """Tests for parse_json_value function."""

    def test_object(self):
        """Test parsing JSON object."""
        assert parse_json_value('{"input": "test"}') == {"input": "test"}

    def test_number(self):
        """Test parsing number."""
        assert parse_json_value("42") == 42

    def test_plain_text(self):
        """Test non-JSON text is kept as string."""
        assert parse_json_value("hello world") == "hello world"


class TestLoadJsonFile:
    """Tests for load_json_file function."""

    def test_load_valid_json(self, tmp_path):
        """Test loading valid JSON file."""
        json_file = tmp_path / "test.json"
        json_file.write_text('[{"method": "stats"}]')

        result = load_json_file(json_file)

        assert result == [{"method": "stats"}]

    def test_load_invalid_json(self, tmp_path):
        """Test loading invalid JSON file."""
        json_file = tmp_path / "invalid.json"
        json_file.write_text("not valid json")

        with pytest.raises(ValueError) as exc_info:
            load_json_file(json_file)

        assert "Invalid JSON" in str(exc_info.value)

    def test_load_nonexistent_file(self, tmp_path):
        """Test loading nonexistent file."""
        with pytest.raises(ValueError) as exc_info:
            load_json_file(tmp_path / "nonexistent.json")

        assert "Cannot read file" in str(exc_info.value)


class TestTruncateString:
    """Tests for truncate_string function."""

    def test_no_truncation_needed(self):
        """Test string shorter than max length."""
        assert truncate_string("Hello", 10) == "Hello"

    def test_truncation(self):
        """Test string truncation."""
        result = truncate_string("Hello World!", 8)
        assert len(result) == 8
        assert result.endswith("...")


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_verbose(self):
        """Test verbose enables debug."""
        setup_logging(verbose=True)
        assert logging.getLogger().level == logging.DEBUG

    def test_quiet(self):
        """Test quiet shows errors only."""
        setup_logging(quiet=True)
        assert logging.getLogger().level == logging.ERROR

    def test_default(self):
        """Test default level."""
        setup_logging()
        assert logging.getLogger().level == logging.WARNING


class TestPrintFunctions:
    """Tests for print_* utility functions."""

    def test_print_success(self, capsys):
        """Test print_success output."""
        print_success("Operation completed")
        captured = capsys.readouterr()
        assert "Operation completed" in captured.out

    def test_print_error_simple(self, capsys):
        """Test print_error without details."""
        print_error("Something went wrong")
        captured = capsys.readouterr()
        assert "Something went wrong" in captured.err

    def test_print_error_with_details(self, capsys):
        """Test print_error with details."""
        print_error("Error occurred", details="Additional info here")
        captured = capsys.readouterr()
        assert "Error occurred" in captured.err
        assert "Additional info here" in captured.err

    def test_print_warning(self, capsys):
        """Test print_warning output."""
        print_warning("Watch out!")
        captured = capsys.readouterr()
        assert "Watch out!" in captured.out

    def test_print_info(self, capsys):
        """Test print_info output."""
        print_info("Just so you know")
        captured = capsys.readouterr()
        assert "Just so you know" in captured.out


class TestPrintTable:
    """Tests for print_table function."""

    def test_print_basic_table(self, capsys):
        """Test basic table output."""
        print_table(["Client", "User"], [["c1", "42"], ["c2", "43"]])
        captured = capsys.readouterr()
        assert "Client" in captured.out
        assert "c1" in captured.out
        assert "43" in captured.out

    def test_print_empty_table(self, capsys):
        """Test table with no rows."""
        print_table(["X", "Y"], [])
        captured = capsys.readouterr()
        assert "X" in captured.out
        assert "Y" in captured.out


class TestPrintJson:
    """Tests for print_json function."""

    def test_print_dict(self, capsys):
        """Test printing dictionary as JSON."""
        print_json({"name": "Test", "count": 42})
        captured = capsys.readouterr()
        assert '"name"' in captured.out
        assert "42" in captured.out

    def test_print_with_custom_indent(self, capsys):
        """Test printing JSON with custom indentation."""
        print_json({"key": "value"}, indent=4)
        captured = capsys.readouterr()
        assert '    "key"' in captured.out
