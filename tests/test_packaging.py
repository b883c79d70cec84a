"""Packaging regression tests.

Tests that verify the package structure and version metadata.
"""

from pathlib import Path


def test_source_layout():
    """Package lives under src/ with kernel and _internal subpackages."""
    here = Path(__file__).resolve().parent
    repo_root = here.parent
    src_pkg = repo_root / "src" / "stringview"

    assert src_pkg.exists(), "stringview package should exist in src/"
    assert (src_pkg / "kernel" / "__init__.py").exists(), "stringview.kernel should be a package"
    assert (src_pkg / "_internal" / "__init__.py").exists(), "stringview._internal should exist"
    assert (src_pkg / "_internal" / "io" / "__init__.py").exists()


def test_version():
    """In dev mode the version is "dev", in installed mode it's "1.0.0"."""
    import stringview
    import stringview.kernel  # noqa: F401

    assert stringview.__version__ in ("1.0.0", "dev")
