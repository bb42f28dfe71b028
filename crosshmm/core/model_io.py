"""
crosshmm model I/O module

Saves and loads fitted genetic-map parameters for one chromosome:
- crosstype: which mating design the parameters were fitted under
- rec_frac: recombination fraction for each marker interval
- error_prob: genotyping error probability

JSON only. The Cross itself is stateless, so only its crosstype name is
stored and the shared instance is looked up again on load.
"""

import json
import logging
import os
import warnings
from typing import List, Optional, Sequence, Tuple

import numpy as np

from crosshmm.core.cross import Cross, create_cross

logger = logging.getLogger(__name__)

MODEL_TYPE = 'crosshmm'
FORMAT_VERSION = '1.0'


# =============================================================================
# Saving
# =============================================================================

def save_model(cross: Cross, filepath: str, rec_frac: Sequence[float],
               error_prob: float,
               marker_names: Optional[Sequence[str]] = None) -> str:
    """
    Save fitted map parameters in JSON format.

    If the filepath does not end in .json, the extension is replaced with
    .json and a warning is issued.

    Args:
        cross: Cross the parameters were fitted under
        filepath: Output path (.json)
        rec_frac: One recombination fraction per marker interval
        error_prob: Genotyping error probability
        marker_names: Optional marker names, one more than rec_frac

    Returns:
        Path actually written
    """
    rec_frac = np.asarray(rec_frac, dtype=np.float64)
    _validate_params(rec_frac, error_prob, marker_names)

    if not filepath.endswith('.json'):
        old_path = filepath
        base, _ = os.path.splitext(filepath)
        filepath = base + '.json'
        warnings.warn(
            f"Only JSON format is supported for saving. "
            f"Saving to '{filepath}' instead of '{old_path}'."
        )

    data = {
        'model_type': MODEL_TYPE,
        'version': FORMAT_VERSION,
        'crosstype': cross.crosstype,
        'n_gen': cross.ngen(),
        'error_prob': float(error_prob),
        'rec_frac': rec_frac.tolist(),
        'marker_names': list(marker_names) if marker_names is not None else None,
    }
    with open(filepath, 'w') as f:
        json.dump(data, f, indent=2)

    logger.debug("Saved %s parameters for %d intervals to %s",
                 cross.crosstype, len(rec_frac), filepath)
    return filepath


def _validate_params(rec_frac: np.ndarray, error_prob: float,
                     marker_names: Optional[Sequence[str]]) -> None:
    if rec_frac.ndim != 1:
        raise ValueError(f"rec_frac must be 1-dimensional, got shape {rec_frac.shape}")
    if not np.all(np.isfinite(rec_frac)):
        raise ValueError("rec_frac contains non-finite values")
    if np.any((rec_frac < 0) | (rec_frac >= 0.5)):
        raise ValueError("rec_frac values must be in [0, 0.5)")
    if not 0.0 <= error_prob < 1.0:
        raise ValueError(f"error_prob must be in [0, 1), got {error_prob}")
    if marker_names is not None and len(marker_names) != len(rec_frac) + 1:
        raise ValueError(
            f"Expected {len(rec_frac) + 1} marker names for {len(rec_frac)} "
            f"intervals, got {len(marker_names)}"
        )


# =============================================================================
# Loading
# =============================================================================

def load_model(filepath: str) -> Cross:
    """
    Load the Cross a parameter file was fitted under.

    Args:
        filepath: Path to a JSON parameter file

    Returns:
        Shared Cross instance
    """
    cross, _, _, _ = load_model_with_metadata(filepath)
    return cross


def load_model_with_metadata(
        filepath: str) -> Tuple[Cross, np.ndarray, float, Optional[List[str]]]:
    """
    Load a parameter file.

    Args:
        filepath: Path to a JSON parameter file

    Returns:
        (cross, rec_frac, error_prob, marker_names)
    """
    with open(filepath, 'r') as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(
            f"{filepath} is not a {MODEL_TYPE} parameter file "
            f"(top level is {type(data).__name__}, expected an object)"
        )

    if data.get('model_type') != MODEL_TYPE:
        raise ValueError(
            f"{filepath} is not a {MODEL_TYPE} parameter file "
            f"(model_type={data.get('model_type')!r})"
        )

    missing = [k for k in ('crosstype', 'rec_frac', 'error_prob') if k not in data]
    if missing:
        raise ValueError(f"{filepath} missing keys: {missing}")

    if not isinstance(data['crosstype'], str):
        raise ValueError(f"{filepath} crosstype must be a string, got {data['crosstype']!r}")

    cross = create_cross(data['crosstype'])
    n_gen = data.get('n_gen')
    if n_gen is not None and n_gen != cross.ngen():
        raise ValueError(
            f"{filepath} declares {n_gen} genotypes but {cross.crosstype} "
            f"has {cross.ngen()}"
        )

    try:
        rec_frac = np.array(data['rec_frac'], dtype=np.float64)
        error_prob = float(data['error_prob'])
    except (TypeError, ValueError) as e:
        raise ValueError(f"{filepath} has malformed parameters: {e}") from e
    marker_names = data.get('marker_names')
    if marker_names is not None and not isinstance(marker_names, list):
        raise ValueError(f"{filepath} marker_names must be a list, got {marker_names!r}")

    _validate_params(rec_frac, error_prob, marker_names)

    logger.debug("Loaded %s parameters for %d intervals from %s",
                 cross.crosstype, len(rec_frac), filepath)
    return cross, rec_frac, error_prob, marker_names
