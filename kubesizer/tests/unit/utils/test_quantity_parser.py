"""Tests for resource quantity parsing."""

from __future__ import annotations

import pytest

from kubesizer.utils.resource_parser import (
    memory_str_to_bytes,
    parse_cpu,
    parse_memory_gb,
    parse_whole_cores,
    parse_whole_gb,
)


class TestParseCpu:
    """Tests for parse_cpu function."""

    def test_parse_cpu_millicores(self) -> None:
        """Test parsing CPU in millicores."""
        assert parse_cpu("100m") == 0.1
        assert parse_cpu("500m") == 0.5
        assert parse_cpu("1000m") == 1.0

    def test_parse_cpu_micro_and_nano_cores(self) -> None:
        assert parse_cpu("500000u") == 0.5
        assert parse_cpu("500000000n") == 0.5

    def test_parse_cpu_decimal(self) -> None:
        assert parse_cpu("1.5") == 1.5
        assert parse_cpu("2") == 2.0

    def test_parse_cpu_numbers_pass_through(self) -> None:
        assert parse_cpu(4) == 4.0
        assert parse_cpu(0.25) == 0.25

    def test_parse_cpu_with_whitespace(self) -> None:
        assert parse_cpu(" 100m ") == 0.1

    @pytest.mark.parametrize("value", ["", "   ", "invalid", True])
    def test_parse_cpu_rejects(self, value) -> None:
        """Malformed quantities raise instead of reading as zero."""
        with pytest.raises(ValueError):
            parse_cpu(value)


class TestMemoryStrToBytes:
    """Tests for memory_str_to_bytes function."""

    def test_mebibytes(self) -> None:
        assert memory_str_to_bytes("512Mi") == 512 * 1024 * 1024

    def test_gibibytes(self) -> None:
        assert memory_str_to_bytes("1Gi") == 1024 * 1024 * 1024

    def test_kibibytes(self) -> None:
        assert memory_str_to_bytes("1024Ki") == 1024 * 1024

    def test_plain_bytes(self) -> None:
        assert memory_str_to_bytes("2048") == 2048.0

    def test_empty(self) -> None:
        with pytest.raises(ValueError):
            memory_str_to_bytes("")


class TestParseMemoryGb:
    def test_numbers_are_gb(self) -> None:
        assert parse_memory_gb(16) == 16.0
        assert parse_memory_gb("32") == 32.0

    def test_binary_suffixes(self) -> None:
        assert parse_memory_gb("16Gi") == 16.0
        assert parse_memory_gb("512Mi") == 0.5
        assert parse_memory_gb("1Ti") == 1024.0

    def test_rejects_garbage(self) -> None:
        with pytest.raises(ValueError):
            parse_memory_gb("lots")


class TestWholeUnits:
    def test_whole_gb(self) -> None:
        assert parse_whole_gb("64Gi") == 64
        assert parse_whole_gb(100) == 100

    def test_fractional_gb_rejected(self) -> None:
        with pytest.raises(ValueError, match="whole number of GB"):
            parse_whole_gb("512Mi")

    def test_whole_cores(self) -> None:
        assert parse_whole_cores("8") == 8
        assert parse_whole_cores("4000m") == 4

    def test_fractional_cores_rejected(self) -> None:
        with pytest.raises(ValueError, match="whole number of cores"):
            parse_whole_cores("1500m")
