import itertools

import numpy as np

from tumhet.ploidy_states import PloidyState, PloidyStatePrior


class TumorHeterogeneityPriorCollection(object):
    """ Read-only bundle of the hyperparameters shared by every state of a chain.

    Parameters
    ----------
    metropolis_iteration_fraction: float
        Fraction of iterations which use a Metropolis step, in [0, 1].
    normal_ploidy_state: PloidyState
        Ploidy state of the normal population and of unaltered segments in variant populations.
    variant_ploidy_state_prior: PloidyStatePrior
        Prior over the ploidy states of altered segments.
    concentration_prior_alpha, concentration_prior_beta: float
        Shape and rate of the Gamma prior on the concentration of the population fractions.
    variant_segment_fraction_prior_alpha, variant_segment_fraction_prior_beta: float
        Parameters of the Beta prior on the variant-segment fractions.
    """

    def __init__(
            self,
            metropolis_iteration_fraction,
            normal_ploidy_state,
            variant_ploidy_state_prior,
            concentration_prior_alpha,
            concentration_prior_beta,
            variant_segment_fraction_prior_alpha,
            variant_segment_fraction_prior_beta):

        self._metropolis_iteration_fraction = float(metropolis_iteration_fraction)

        if not (0 <= self._metropolis_iteration_fraction <= 1):
            raise ValueError('Metropolis iteration fraction must be in [0, 1].')

        if not isinstance(normal_ploidy_state, PloidyState):
            normal_ploidy_state = PloidyState(*normal_ploidy_state)

        self._normal_ploidy_state = normal_ploidy_state

        if not isinstance(variant_ploidy_state_prior, PloidyStatePrior):
            raise ValueError('Variant ploidy-state prior must be a PloidyStatePrior.')

        self._variant_ploidy_state_prior = variant_ploidy_state_prior

        hyperparameters = [
            concentration_prior_alpha,
            concentration_prior_beta,
            variant_segment_fraction_prior_alpha,
            variant_segment_fraction_prior_beta
        ]

        hyperparameters = [float(x) for x in hyperparameters]

        if not all(np.isfinite(x) and (x > 0) for x in hyperparameters):
            raise ValueError('Hyperparameters must be positive and finite.')

        self._concentration_prior_alpha, \
            self._concentration_prior_beta, \
            self._variant_segment_fraction_prior_alpha, \
            self._variant_segment_fraction_prior_beta = hyperparameters

    @staticmethod
    def get_default_priors(
            max_allelic_copy_number=5,
            metropolis_iteration_fraction=0.5,
            normal_ploidy_state=PloidyState(1, 1),
            concentration_prior_alpha=1.0,
            concentration_prior_beta=1.0,
            variant_segment_fraction_prior_alpha=1.0,
            variant_segment_fraction_prior_beta=10.0):
        """ Priors with a uniform variant prior over all (major, minor) states with minor <= major up to a maximum
        allelic copy number, excluding the normal ploidy state.
        """
        unnormalized_log_p = {}

        for m, n in itertools.product(range(max_allelic_copy_number + 1), repeat=2):
            state = PloidyState(m, n)

            if (n <= m) and (state != normal_ploidy_state):
                unnormalized_log_p[state] = 0.0

        return TumorHeterogeneityPriorCollection(
            metropolis_iteration_fraction,
            normal_ploidy_state,
            PloidyStatePrior(unnormalized_log_p),
            concentration_prior_alpha,
            concentration_prior_beta,
            variant_segment_fraction_prior_alpha,
            variant_segment_fraction_prior_beta
        )

    def __repr__(self):
        return (
            'TumorHeterogeneityPriorCollection(metropolis_iteration_fraction={}, normal_ploidy_state={}, '
            'num_variant_ploidy_states={}, concentration_prior=({}, {}), variant_segment_fraction_prior=({}, {}))'
        ).format(
            self._metropolis_iteration_fraction,
            self._normal_ploidy_state,
            self._variant_ploidy_state_prior.num_ploidy_states,
            self._concentration_prior_alpha,
            self._concentration_prior_beta,
            self._variant_segment_fraction_prior_alpha,
            self._variant_segment_fraction_prior_beta
        )

    @property
    def concentration_prior_alpha(self):
        return self._concentration_prior_alpha

    @property
    def concentration_prior_beta(self):
        return self._concentration_prior_beta

    @property
    def metropolis_iteration_fraction(self):
        return self._metropolis_iteration_fraction

    @property
    def normal_ploidy_state(self):
        return self._normal_ploidy_state

    @property
    def variant_ploidy_state_prior(self):
        return self._variant_ploidy_state_prior

    @property
    def variant_segment_fraction_prior_alpha(self):
        return self._variant_segment_fraction_prior_alpha

    @property
    def variant_segment_fraction_prior_beta(self):
        return self._variant_segment_fraction_prior_beta
