"""Example tests for ram."""

from pdum import ram


def test_version():
    """Test that the package has a version."""
    assert hasattr(ram, "__version__")
    assert isinstance(ram.__version__, str)
    assert len(ram.__version__) > 0


def test_import():
    """Test that the package can be imported."""
    assert ram is not None
    assert callable(ram.ensure_role)
    assert callable(ram.grant)
