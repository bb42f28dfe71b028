"""
crosshmm cross module

Provides:
1. The Cross contract shared by every mating design (init/emit/step/...)
2. InvalidGenotypeError, the single error raised by genotype validation
3. A registry mapping crosstype names to shared Cross instances

A Cross is stateless. The HMM driver picks one per analysis run and calls
it per marker, individual and state pair without knowing the genetics
behind it. Arguments that a given design ignores (X chromosome, sex,
cross_info) are still part of every signature so designs stay
interchangeable.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence, Type

import numpy as np

logger = logging.getLogger(__name__)


class InvalidGenotypeError(ValueError):
    """Raised when a genotype code is not valid for the mating design."""

    def __init__(self, genotype: int, is_observed_value: bool = False):
        self.genotype = genotype
        self.is_observed_value = is_observed_value
        kind = 'observed' if is_observed_value else 'true'
        super().__init__(f"invalid genotype: {genotype!r} ({kind})")


def _log(p: float) -> float:
    """Natural log that maps 0 to -inf instead of raising."""
    with np.errstate(divide='ignore'):
        return float(np.log(p))


# =============================================================================
# Cross contract
# =============================================================================

class Cross(ABC):
    """
    Genotype probability model for one mating design.

    All probabilities are natural logs. Genotype codes are 1..ngen for true
    genotypes; observed genotypes may also be 0 (missing).
    """

    crosstype: str = ''

    # -------------------------------------------------------------------------
    # Operations every design must provide
    # -------------------------------------------------------------------------

    @abstractmethod
    def check_geno(self, gen: int, is_observed_value: bool,
                   is_x_chr: bool = False, is_female: bool = False,
                   cross_info: Sequence[int] = ()) -> bool:
        """
        Validate a genotype code.

        Returns True for a valid code; raises InvalidGenotypeError otherwise.
        """

    @abstractmethod
    def init(self, true_gen: int, is_x_chr: bool = False,
             is_female: bool = False, cross_info: Sequence[int] = ()) -> float:
        """Log probability of a true genotype at the first marker."""

    @abstractmethod
    def emit(self, obs_gen: int, true_gen: int, error_prob: float,
             founder_geno: Sequence[int] = (), is_x_chr: bool = False,
             is_female: bool = False, cross_info: Sequence[int] = ()) -> float:
        """Log probability of an observed genotype given the true one."""

    @abstractmethod
    def step(self, gen_left: int, gen_right: int, rec_frac: float,
             is_x_chr: bool = False, is_female: bool = False,
             cross_info: Sequence[int] = ()) -> float:
        """Log transition probability between adjacent markers."""

    @abstractmethod
    def ngen(self, is_x_chr: bool = False) -> int:
        """Number of possible true genotypes."""

    @abstractmethod
    def nrec(self, gen_left: int, gen_right: int, is_x_chr: bool = False,
             is_female: bool = False, cross_info: Sequence[int] = ()) -> float:
        """Number of recombination events implied by a genotype pair."""

    @abstractmethod
    def est_rec_frac(self, gamma: np.ndarray, is_x_chr: bool = False) -> float:
        """Re-estimate a recombination fraction from posterior occupancy."""

    # -------------------------------------------------------------------------
    # Design-level queries with defaults
    # -------------------------------------------------------------------------

    def possible_gen(self, is_x_chr: bool = False, is_female: bool = False,
                     cross_info: Sequence[int] = ()) -> List[int]:
        """True genotype codes the driver should enumerate."""
        return list(range(1, self.ngen(is_x_chr) + 1))

    def nalleles(self) -> int:
        """Number of founder alleles."""
        return 2

    def geno_names(self, alleles: Sequence[str],
                   is_x_chr: bool = False) -> List[str]:
        """
        Genotype labels built from founder allele letters.

        Default: one homozygous label per allele, e.g. ['AA', 'BB'].
        """
        if len(alleles) != self.nalleles():
            raise ValueError(
                f"{self.crosstype} expects {self.nalleles()} alleles, got {len(alleles)}"
            )
        return [a + a for a in alleles]

    def is_het(self, true_gen: int) -> bool:
        """Whether a true genotype is heterozygous."""
        self.check_geno(true_gen, False)
        return False

    def need_founder_geno(self) -> bool:
        """Whether emit() needs founder genotypes."""
        return False

    def check_handle_x_chr(self, any_x_chr: bool) -> bool:
        """Whether the design can model the X chromosome, if any is present."""
        return True

    def check_is_female_vector(self, is_female: Sequence[bool],
                               any_x_chr: bool) -> bool:
        """Validate per-individual sex flags."""
        return True

    def check_crosstype_info(self, cross_info: np.ndarray,
                             is_female: Sequence[bool]) -> bool:
        """Validate the cross_info matrix (individuals x columns)."""
        return True

    # -------------------------------------------------------------------------
    # Array forms for vectorised drivers
    # -------------------------------------------------------------------------

    def init_vector(self, is_x_chr: bool = False, is_female: bool = False,
                    cross_info: Sequence[int] = ()) -> np.ndarray:
        """
        Log initial probabilities for all true genotypes.

        Returns:
            (ngen,) array, index i holds init(i + 1)
        """
        gens = self.possible_gen(is_x_chr, is_female, cross_info)
        return np.array([self.init(g, is_x_chr, is_female, cross_info)
                         for g in gens])

    def emit_matrix(self, error_prob: float, founder_geno: Sequence[int] = (),
                    is_x_chr: bool = False, is_female: bool = False,
                    cross_info: Sequence[int] = ()) -> np.ndarray:
        """
        Log emission probabilities for every observed/true pair.

        Returns:
            (ngen + 1, ngen) array; row 0 is the missing observation,
            row o and column t hold emit(o, t + 1)
        """
        gens = self.possible_gen(is_x_chr, is_female, cross_info)
        observed = [0] + gens
        return np.array([[self.emit(o, t, error_prob, founder_geno,
                                    is_x_chr, is_female, cross_info)
                          for t in gens] for o in observed])

    def step_matrix(self, rec_frac: float, is_x_chr: bool = False,
                    is_female: bool = False,
                    cross_info: Sequence[int] = ()) -> np.ndarray:
        """
        Log transition matrix for one marker interval.

        Returns:
            (ngen, ngen) array, [i, j] holds step(i + 1, j + 1)
        """
        gens = self.possible_gen(is_x_chr, is_female, cross_info)
        return np.array([[self.step(left, right, rec_frac,
                                    is_x_chr, is_female, cross_info)
                          for right in gens] for left in gens])

    def nrec_matrix(self, is_x_chr: bool = False, is_female: bool = False,
                    cross_info: Sequence[int] = ()) -> np.ndarray:
        """Recombination counts for every genotype pair, (ngen, ngen)."""
        gens = self.possible_gen(is_x_chr, is_female, cross_info)
        return np.array([[self.nrec(left, right, is_x_chr, is_female, cross_info)
                          for right in gens] for left in gens])

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


# =============================================================================
# Registry
# =============================================================================

_REGISTRY: Dict[str, Cross] = {}

_ALIASES = {
    'ri': 'riself',
    'ri_self': 'riself',
    'riself2': 'riself',
}


def register_cross(cls: Type[Cross]) -> Type[Cross]:
    """Class decorator registering a Cross subclass under its crosstype."""
    if not cls.crosstype:
        raise ValueError(f"{cls.__name__} has no crosstype")
    _REGISTRY[cls.crosstype] = cls()
    logger.debug("Registered crosstype %s -> %s", cls.crosstype, cls.__name__)
    return cls


def available_crosstypes() -> List[str]:
    """Sorted names of registered crosstypes."""
    return sorted(_REGISTRY)


def create_cross(crosstype: str) -> Cross:
    """
    Look up the shared Cross for a mating design.

    Args:
        crosstype: Registered name or alias (case-insensitive)

    Returns:
        The shared, stateless Cross instance
    """
    key = crosstype.strip().lower()
    key = _ALIASES.get(key, key)
    cross: Optional[Cross] = _REGISTRY.get(key)
    if cross is None:
        raise ValueError(
            f"Unknown crosstype '{crosstype}'. "
            f"Available: {', '.join(available_crosstypes())}"
        )
    logger.debug("Using crosstype %s", key)
    return cross
