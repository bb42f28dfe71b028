"""
crosshmm - genotype probability models for HMM analysis of experimental
crosses (initial, emission and transition probabilities per mating design).
"""

__version__ = "1.0.0"

from crosshmm.core.cross import Cross, InvalidGenotypeError, create_cross, available_crosstypes
from crosshmm.core.riself import RISelf
from crosshmm.core.model_io import load_model, save_model, load_model_with_metadata
