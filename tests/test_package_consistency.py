"""
Package consistency tests.

Verify that the top-level and subpackage imports expose the same objects.
"""
import crosshmm
import crosshmm.core


class TestPackageImports:
    """Verify all expected symbols are importable from package."""

    def test_version(self):
        assert crosshmm.__version__ == "1.0.0"

    def test_core_cross_imports(self):
        from crosshmm.core.cross import (
            Cross,
            InvalidGenotypeError,
            available_crosstypes,
            create_cross,
            register_cross,
        )
        assert issubclass(InvalidGenotypeError, ValueError)
        assert callable(create_cross)
        assert callable(register_cross)
        assert callable(available_crosstypes)
        assert Cross is not None

    def test_core_model_io_imports(self):
        from crosshmm.core.model_io import load_model, save_model, load_model_with_metadata
        assert callable(load_model)
        assert callable(save_model)
        assert callable(load_model_with_metadata)

    def test_top_level_reexports(self):
        assert crosshmm.RISelf is crosshmm.core.RISelf
        assert crosshmm.create_cross is crosshmm.core.create_cross
        assert crosshmm.Cross is crosshmm.core.Cross

    def test_riself_registered_on_import(self):
        assert 'riself' in crosshmm.available_crosstypes()
