"""Tests for payload.py module."""

import pytest

from src.payload import SLICE_SIZE, make_payload


class TestMakePayload:
    """Tests for make_payload function."""

    @pytest.mark.parametrize("size", [0, 1, 1024, SLICE_SIZE, SLICE_SIZE + 7])
    def test_exact_size(self, size):
        """Should return exactly the requested number of bytes."""
        assert len(make_payload(size)) == size

    def test_random_data(self):
        """Buffer should contain random data (not all zeros)."""
        data = make_payload(1024)

        assert len(set(data)) > 10

    def test_negative_size(self):
        """Should reject negative sizes."""
        with pytest.raises(ValueError):
            make_payload(-1)
