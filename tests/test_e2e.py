"""End-to-end parsing scenarios."""

import pytest

from optspec.application import main
from optspec.matcher import End, Matched, MissingValue, Unmatched
from optspec.option_parser import OptionParser

TAR_LIKE = [
    "c|create",
    "x|extract",
    "v|verbose",
    "f:file ARCHIVE",
    "C:directory DIR",
    "X*exclude PATTERN",
    "z?compress LEVEL",
    " |checkpoint",
    "-T|trace",
]


class TestE2EParsing:
    """Whole command lines through OptionParser."""

    def test_mixed_command_line(self):
        parser = OptionParser("tar", TAR_LIKE)
        result = parser.parse_argv(
            [
                "tar",
                "-cvf",
                "out.tar",
                "--dir=/tmp",
                "--exclude",
                "*.o",
                "*.pyc",
                "-z9",
                "--check",
                "src",
                "-v",
            ]
        )

        assert result.ok
        assert result.options == [
            ("c", None),
            ("v", None),
            ("f", "out.tar"),
            ("C", "/tmp"),
            ("X", "*.o"),
            ("X", "*.pyc"),
            ("z", "9"),
            (" ", None),
        ]
        assert result.has("checkpoint")
        assert result.positionals == ["src", "-v"]

    def test_multi_value_swallows_words_until_separator(self):
        parser = OptionParser("tar", TAR_LIKE)
        result = parser.parse(["-X", "a", "b", "--", "src"])
        assert result.values("exclude") == ["a", "b"]
        assert result.positionals == ["src"]

    def test_stream_with_errors_continues(self):
        parser = OptionParser("tar", TAR_LIKE)
        stream = list(parser.matches(["-cq", "--bogus", "-f", "-v", "rest"]))

        assert stream[0] == Matched("c")
        assert stream[1] == Unmatched("-q")
        assert isinstance(stream[2], Unmatched)
        assert isinstance(stream[3], MissingValue)
        assert stream[4:] == [Matched("v"), End(4)]

    def test_hidden_option_parses(self):
        parser = OptionParser("tar", TAR_LIKE)
        assert parser.parse(["--trace"]).options == [("T", None)]
        assert all(d.short_char != "T" for d in parser.table.visible())


class TestE2EMain:
    """The optspec command from argv to stdout."""

    @pytest.mark.parametrize(
        "tokens",
        [
            ["-g", "a", "b", "-x"],
            ["-ga", "b", "-x"],
            ["--groups=a", "b", "-x"],
        ],
    )
    def test_multi_value_forms_print_the_same(self, mocker, capsys, tokens):
        mocker.patch(
            "sys.argv", ["optspec", "-d", "g+groups", "x|extra", "--", *tokens]
        )
        assert main() == 0
        assert capsys.readouterr().out.splitlines() == ["-g a", "-g b", "-x", "--"]
