"""Tests for the TokenSource cursor."""

import pytest

from optspec.token_source import TokenSource


class TestTokenSourceUnit:
    """Unit tests for the TokenSource class."""

    def test_peek_and_advance(self):
        source = TokenSource(["-a", "file"])
        assert source.peek() == "-a"
        assert source.advance() == "-a"
        assert source.index == 1
        assert source.advance() == "file"
        assert source.exhausted
        assert source.peek() is None

    def test_advance_past_end(self):
        source = TokenSource([])
        with pytest.raises(IndexError):
            source.advance()

    @pytest.mark.parametrize("index", [-1, 3])
    def test_seek_out_of_range(self, index):
        source = TokenSource(["a", "b"])
        with pytest.raises(IndexError):
            source.seek(index)

    def test_seek_to_end_is_allowed(self):
        source = TokenSource(["a", "b"])
        source.seek(2)
        assert source.exhausted
        assert source.remaining() == []

    def test_remaining(self):
        source = TokenSource(["-a", "x", "y"], index=1)
        assert source.remaining() == ["x", "y"]
        assert len(source) == 3
        assert source[0] == "-a"

    def test_from_argv_skips_program_name(self):
        source = TokenSource.from_argv(["prog", "-a"])
        assert len(source) == 1
        assert source.peek() == "-a"

    def test_tokens_are_copied(self):
        argv = ["-a"]
        source = TokenSource(argv)
        argv.append("-b")
        assert len(source) == 1
