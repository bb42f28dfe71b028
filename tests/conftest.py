"""
Shared pytest fixtures for crosshmm tests.
"""
import pytest
import numpy as np


@pytest.fixture
def riself():
    """Shared RI-self cross."""
    from crosshmm.core.cross import create_cross
    return create_cross('riself')


@pytest.fixture
def true_genotypes():
    """Valid true genotype codes for RI-self (AA, BB)."""
    return [1, 2]


@pytest.fixture
def example_gamma():
    """
    Posterior occupancy for one interval: 16 of 20 units on the diagonal,
    so R = 0.2 and r = 0.125.
    """
    return np.array([[8.0, 2.0],
                     [2.0, 8.0]])


@pytest.fixture
def sample_rec_frac():
    """Recombination fractions for a 5-marker chromosome."""
    return np.array([0.01, 0.05, 0.1, 0.25])


@pytest.fixture
def sample_marker_names():
    """Marker names matching sample_rec_frac."""
    return ['m1', 'm2', 'm3', 'm4', 'm5']
