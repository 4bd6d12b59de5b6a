import logging

import numpy as np
import scipy.stats

from tumhet.exceptions import StructuralValidationError
from tumhet.math_utils import log_normalize
from tumhet.models import TumorHeterogeneityState, VariantProfile

logger = logging.getLogger(__name__)


def initialize_state(data, priors, num_populations, num_cells, concentration=None, do_metropolis_step=False):
    """ Draw an initial state of the chain from the priors.

    An invalid initial state is fatal, so StructuralValidationError propagates to the caller.

    Parameters
    ----------
    data: TumorHeterogeneityData
        Segments the state is defined over.
    priors: TumorHeterogeneityPriorCollection
        Hyperparameters of the model.
    num_populations: int
        Total number of populations, the normal population included.
    num_cells: int
        Number of population indicators.
    concentration: float
        Concentration of the population fractions. Drawn from its Gamma prior if None.
    """
    if concentration is None:
        concentration = scipy.stats.gamma.rvs(
            priors.concentration_prior_alpha, scale=(1 / priors.concentration_prior_beta)
        )

    population_fractions = symmetric_dirichlet_rvs(concentration, num_populations)

    population_indicators = np.random.choice(num_populations, size=num_cells, p=population_fractions)

    variant_profiles = []

    for _ in range(num_populations - 1):
        variant_segment_fraction = scipy.stats.beta.rvs(
            priors.variant_segment_fraction_prior_alpha, priors.variant_segment_fraction_prior_beta
        )

        variant_indicators = np.random.random(data.num_segments) < variant_segment_fraction

        variant_ploidy_state_indicators = priors.variant_ploidy_state_prior.rvs(size=data.num_segments)

        variant_profiles.append(
            VariantProfile(variant_segment_fraction, variant_indicators, variant_ploidy_state_indicators)
        )

    state = TumorHeterogeneityState(
        do_metropolis_step,
        concentration,
        population_fractions,
        population_indicators,
        variant_profiles,
        priors
    )

    logger.info(
        'Initialized state with %d populations, %d cells and %d segments (concentration %.3f).',
        state.num_populations,
        state.num_cells,
        state.num_segments,
        state.concentration
    )

    return state


def propose_state(state, **changes):
    """ Copy a state with the given fields replaced.

    Returns None if the candidate is structurally invalid, in which case the sampler keeps the current state.
    """
    try:
        return state.copy(**changes)

    except StructuralValidationError as e:
        logger.debug('Rejected structurally invalid proposal: %s', e)

        return None


def symmetric_dirichlet_rvs(concentration, size):
    """ Draw from a symmetric Dirichlet on the log scale.

    Uses Gamma(a) = Gamma(a + 1) * U^(1 / a), so small concentrations do not underflow every Gamma draw to zero.
    """
    log_g = np.log(np.random.gamma(concentration + 1, size=size))

    # U in (0, 1] so the log stays finite
    log_g += np.log(1 - np.random.random(size)) / concentration

    return np.exp(log_normalize(log_g))
