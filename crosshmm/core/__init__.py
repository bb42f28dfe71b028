"""Cross contract, mating-design models and parameter I/O."""

from crosshmm.core.cross import (
    Cross,
    InvalidGenotypeError,
    available_crosstypes,
    create_cross,
    register_cross,
)
from crosshmm.core.riself import RISelf
from crosshmm.core.model_io import load_model, save_model, load_model_with_metadata
