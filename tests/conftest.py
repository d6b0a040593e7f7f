import pytest


def pytest_configure():
    """Add the src directory to the Python path before any tests run."""
    import sys
    from pathlib import Path

    # Add src directory to Python path
    src_dir = Path(__file__).parent.parent / "src"
    if str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))


SAMPLE_DESCRIPTORS = [
    "a|alpha",
    "b|beta",
    "c:count N",
    "g+groups GROUP",
    "z*zeros",
    "s?style",
    "x|extra",
    "v|verbose",
    "V|version",
    " |long-only",
    "-D|debug",
]


@pytest.fixture
def sample_descriptors():
    """Descriptor list covering every policy, a hidden option and a long-only one."""
    return list(SAMPLE_DESCRIPTORS)


@pytest.fixture
def sample_table(sample_descriptors):
    """Compiled OptionTable for ``sample_descriptors``."""
    from optspec.option_table import OptionTable

    return OptionTable.compile(sample_descriptors)


@pytest.fixture
def run_matcher(sample_table):
    """
    Fixture returning a helper that runs the matcher to completion.

    Usage:
        def test_cluster(run_matcher):
            results = run_matcher(["-ab"])
            assert results[-1] == End(1)
    """
    from optspec.matcher import Matcher

    def _run(tokens, table=None):
        matcher = Matcher(table if table is not None else sample_table)
        return list(matcher.iter_matches(tokens))

    return _run


@pytest.fixture
def debug_disabled(monkeypatch):
    """Make sure OPTSPEC_DEBUG is not set for the test."""
    monkeypatch.delenv("OPTSPEC_DEBUG", raising=False)


@pytest.fixture
def descriptor_file(tmp_path):
    """Fixture writing descriptor file content and returning its path."""

    def _create(content, name="options.tbl"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _create
