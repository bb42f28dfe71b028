"""
Recombinant inbred lines by selfing (RI-self).

Two true genotypes, AA and BB. Repeated selfing accumulates crossovers, so
the chance that adjacent markers differ in the final line is the expanded
fraction R = 2r / (1 + 2r) for a single-meiosis recombination fraction r.
"""

import logging
from typing import Sequence

import numpy as np

from crosshmm.core.cross import Cross, InvalidGenotypeError, _log, register_cross

logger = logging.getLogger(__name__)

MISSING = 0
AA = 1
BB = 2


def expand_rec_frac(rec_frac: float) -> float:
    """Map a single-meiosis recombination fraction to the RI-self fraction."""
    return 2.0 * rec_frac / (1.0 + 2.0 * rec_frac)


def contract_rec_frac(R: float) -> float:
    """Inverse of expand_rec_frac."""
    return 0.5 * R / (1.0 - R)


@register_cross
class RISelf(Cross):
    """
    RI-self genotype model.

    Sex, X chromosome and cross_info arguments are accepted for
    interchangeability with other designs and ignored.
    """

    crosstype = 'riself'

    def check_geno(self, gen: int, is_observed_value: bool,
                   is_x_chr: bool = False, is_female: bool = False,
                   cross_info: Sequence[int] = ()) -> bool:
        if isinstance(gen, (int, np.integer)) and not isinstance(gen, bool):
            if is_observed_value and gen == MISSING:
                return True
            if gen == AA or gen == BB:
                return True
        raise InvalidGenotypeError(gen, is_observed_value)

    def init(self, true_gen: int, is_x_chr: bool = False,
             is_female: bool = False, cross_info: Sequence[int] = ()) -> float:
        self.check_geno(true_gen, False, is_x_chr, is_female, cross_info)
        return -_log(self.ngen(is_x_chr))

    def emit(self, obs_gen: int, true_gen: int, error_prob: float,
             founder_geno: Sequence[int] = (), is_x_chr: bool = False,
             is_female: bool = False, cross_info: Sequence[int] = ()) -> float:
        self.check_geno(obs_gen, True, is_x_chr, is_female, cross_info)
        self.check_geno(true_gen, False, is_x_chr, is_female, cross_info)

        if obs_gen == MISSING:
            return 0.0

        if obs_gen == true_gen:
            return _log(1.0 - error_prob)
        return _log(error_prob)

    def step(self, gen_left: int, gen_right: int, rec_frac: float,
             is_x_chr: bool = False, is_female: bool = False,
             cross_info: Sequence[int] = ()) -> float:
        self.check_geno(gen_left, False, is_x_chr, is_female, cross_info)
        self.check_geno(gen_right, False, is_x_chr, is_female, cross_info)

        R = expand_rec_frac(rec_frac)

        if gen_left == gen_right:
            return _log(1.0 - R)
        return _log(R)

    def ngen(self, is_x_chr: bool = False) -> int:
        return 2

    def nrec(self, gen_left: int, gen_right: int, is_x_chr: bool = False,
             is_female: bool = False, cross_info: Sequence[int] = ()) -> float:
        self.check_geno(gen_left, False, is_x_chr, is_female, cross_info)
        self.check_geno(gen_right, False, is_x_chr, is_female, cross_info)

        if gen_left == gen_right:
            return 0.0
        return 1.0

    def est_rec_frac(self, gamma: np.ndarray, is_x_chr: bool = False) -> float:
        """
        M-step for the recombination fraction of one marker interval.

        The off-diagonal share of posterior mass estimates R; inverting the
        expansion gives r. No clamping: an all-zero gamma gives nan and an
        all-off-diagonal gamma gives inf (numpy emits a RuntimeWarning).

        Args:
            gamma: (ngen, ngen) expected counts of (left, right) genotype
                pairs, summed over individuals

        Returns:
            Re-estimated recombination fraction
        """
        gamma = np.asarray(gamma, dtype=np.float64)

        denom = gamma.sum()
        diagsum = np.trace(gamma)

        R = 1.0 - diagsum / denom

        return float(contract_rec_frac(R))

    # Design-level queries

    def check_handle_x_chr(self, any_x_chr: bool) -> bool:
        if not any_x_chr:
            return True
        logger.warning("X chromosome markers are not handled by %s",
                       self.crosstype)
        return False

    def check_is_female_vector(self, is_female: Sequence[bool],
                               any_x_chr: bool) -> bool:
        if np.any(np.asarray(is_female, dtype=bool)):
            logger.warning("is_female is ignored for %s", self.crosstype)
        return True

    def check_crosstype_info(self, cross_info: np.ndarray,
                             is_female: Sequence[bool]) -> bool:
        cross_info = np.asarray(cross_info)
        if cross_info.ndim == 2 and cross_info.shape[1] > 0:
            logger.warning("cross_info is ignored for %s (%d columns given)",
                           self.crosstype, cross_info.shape[1])
        return True
