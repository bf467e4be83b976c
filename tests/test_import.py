"""Test basic imports and setup."""


def test_import():
    """Test that the package can be imported."""
    import protein_match
    assert protein_match.__version__ == "1.0.0"
    assert protein_match.lcs_length_dp("MEOW", "MOVE") == 2


def test_dependencies():
    """Test that core dependencies are available."""
    import Bio
    import click
    import numpy
    import pandas

    assert Bio.__version__
    assert click.echo
    assert numpy.__version__
    assert pandas.__version__
