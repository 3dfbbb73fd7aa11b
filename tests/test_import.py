"""Verify package imports work correctly."""


def test_import_richblok() -> None:
    """Test that richblok can be imported and version matches pyproject."""
    import tomllib
    from pathlib import Path

    import richblok

    with (Path(__file__).resolve().parent.parent / "pyproject.toml").open("rb") as f:
        expected = tomllib.load(f)["project"]["version"]
    assert richblok.__version__ == expected


def test_version_format() -> None:
    """Test version string format."""
    from richblok import __version__

    parts = __version__.split(".")
    assert len(parts) == 3
    assert all(part.isdigit() for part in parts)


def test_public_api_exports() -> None:
    """Everything in __all__ is importable from the package root."""
    import richblok

    for name in richblok.__all__:
        assert hasattr(richblok, name), name
