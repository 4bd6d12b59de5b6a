import numba
import numpy as np

from tumhet.models.base import Rule, coerce_float, validate
from tumhet.models.populations import PopulationFractions, PopulationIndicators
from tumhet.models.variant_profiles import VariantProfileCollection
from tumhet.priors import TumorHeterogeneityPriorCollection
from tumhet.utils import check_index, read_only_array


POPULATION_FRACTION_EPSILON = 1e-6

FIELDS = (
    'do_metropolis_step',
    'concentration',
    'population_fractions',
    'population_indicators',
    'variant_profiles',
    'priors'
)


class TumorHeterogeneityState(object):
    """ A single point in the parameter space of the tumour heterogeneity model.

    States are immutable. The sampler proposes a new state by copying the current one with some fields replaced,
    which revalidates the candidate.

    Parameters
    ----------
    do_metropolis_step: bool
        Whether the iteration which produced this state used a Metropolis step.
    concentration: float
        Concentration of the Dirichlet prior on the population fractions.
    population_fractions: PopulationFractions or sequence of float
        Weight of each population; the last population is the normal population.
    population_indicators: PopulationIndicators or sequence of int
        Population of each cell.
    variant_profiles: VariantProfileCollection or sequence of VariantProfile
        Profile of each variant population, in population order.
    priors: TumorHeterogeneityPriorCollection
        Hyperparameters shared by every state of the chain.

    Raises
    ------
    StructuralValidationError
        If any structural invariant of the state is violated.
    """

    def __init__(
            self,
            do_metropolis_step,
            concentration,
            population_fractions,
            population_indicators,
            variant_profiles,
            priors):

        self._do_metropolis_step = bool(do_metropolis_step)

        self._concentration = coerce_float(concentration, 'Concentration')

        if not isinstance(population_fractions, PopulationFractions):
            population_fractions = PopulationFractions(population_fractions)

        self._population_fractions = population_fractions

        if not isinstance(population_indicators, PopulationIndicators):
            population_indicators = PopulationIndicators(population_indicators)

        self._population_indicators = population_indicators

        if not isinstance(variant_profiles, VariantProfileCollection):
            variant_profiles = VariantProfileCollection(variant_profiles)

        self._variant_profiles = variant_profiles

        self._priors = priors

        self._population_counts = None

        validate(self, _RULES)

    @property
    def concentration(self):
        return self._concentration

    @property
    def do_metropolis_step(self):
        return self._do_metropolis_step

    @property
    def normal_population_index(self):
        return self.num_populations - 1

    @property
    def num_cells(self):
        return len(self._population_indicators)

    @property
    def num_populations(self):
        return len(self._population_fractions)

    @property
    def num_segments(self):
        return self._variant_profiles.num_segments

    @property
    def population_counts(self):
        """ Number of cells assigned to each population.
        """
        if self._population_counts is None:
            self._population_counts = read_only_array(self._population_indicators.get_counts(self.num_populations))

        return self._population_counts

    @property
    def population_fractions(self):
        return self._population_fractions

    @property
    def population_indicators(self):
        return self._population_indicators

    @property
    def priors(self):
        return self._priors

    @property
    def variant_profiles(self):
        return self._variant_profiles

    def copy(self, **changes):
        """ Build a new state with the given fields replaced. Unchanged fields are shared with this state.
        """
        unknown = set(changes) - set(FIELDS)

        if unknown:
            raise TypeError('Unknown state fields: {}'.format(', '.join(sorted(unknown))))

        kwargs = dict((name, getattr(self, name)) for name in FIELDS)

        kwargs.update(changes)

        return TumorHeterogeneityState(**kwargs)

    def get_ploidy_state(self, population_idx, segment_idx):
        """ Ploidy state of a segment in any population, the normal population included.
        """
        check_index(population_idx, self.num_populations, 'Population index')

        check_index(segment_idx, self.num_segments, 'Segment index')

        if population_idx == self.normal_population_index:
            return self._priors.normal_ploidy_state

        profile = self._variant_profiles[population_idx]

        if not profile.is_variant(segment_idx):
            return self._priors.normal_ploidy_state

        return self._priors.variant_ploidy_state_prior.get_ploidy_state(
            profile.get_variant_ploidy_state_index(segment_idx)
        )

    def get_population_index(self, cell_idx):
        check_index(cell_idx, self.num_cells, 'Cell index')

        return self._population_indicators[cell_idx]

    def get_population_fraction(self, population_idx):
        check_index(population_idx, self.num_populations, 'Population index')

        return self._population_fractions[population_idx]

    def get_variant_ploidy_state_index(self, population_idx, segment_idx):
        return self.get_variant_profile(population_idx).get_variant_ploidy_state_index(segment_idx)

    def get_variant_profile(self, population_idx):
        return self._variant_profiles[population_idx]

    def is_segment_variant(self, population_idx, segment_idx):
        return self.get_variant_profile(population_idx).is_variant(segment_idx)

    #=========================================================================
    # Derived statistics
    #=========================================================================
    def calculate_fractional_length(self, data, segment_idx):
        """ Length of a segment divided by the total length of all segments.
        """
        self._check_data(data)

        return data.calculate_fractional_length(segment_idx)

    def calculate_population_and_genomic_averaged_ploidy(self, data):
        """ Ploidy averaged over segments, weighted by fractional length, and over populations, weighted by the
        population fractions.
        """
        self._check_data(data)

        return _get_population_and_genomic_averaged_ploidy(
            self._population_fractions.values,
            data.fractional_lengths,
            self._variant_profiles.variant_indicators,
            self._variant_profiles.variant_ploidy_state_indicators,
            self._priors.variant_ploidy_state_prior.total_copy_numbers,
            self._priors.normal_ploidy_state.total_copy_number
        )

    def calculate_population_fraction_from_counts(self, population_idx):
        """ Fraction of cells assigned to a population by the population indicators.
        """
        check_index(population_idx, self.num_populations, 'Population index')

        return float(self.population_counts[population_idx] / self.num_cells)

    def _check_data(self, data):
        if data.num_segments != self.num_segments:
            raise ValueError(
                'Data has {} segments but the state has {}.'.format(data.num_segments, self.num_segments)
            )


_RULES = (
    Rule(
        lambda x: isinstance(x.priors, TumorHeterogeneityPriorCollection),
        'Priors must be a TumorHeterogeneityPriorCollection.'
    ),
    Rule(
        lambda x: np.isfinite(x.concentration) and (x.concentration > 0),
        'Concentration must be positive and finite.'
    ),
    Rule(
        lambda x: x.num_populations >= 2,
        'There must be at least two populations (at least one variant and one normal).'
    ),
    Rule(
        lambda x: np.all(x.population_fractions.values >= 0),
        'Population fractions must be non-negative.'
    ),
    Rule(
        lambda x: abs(np.sum(x.population_fractions.values) - 1) <= POPULATION_FRACTION_EPSILON,
        'Population fractions must be normalized to unity.'
    ),
    Rule(
        lambda x: x.num_cells >= 1,
        'There must be at least one population indicator.'
    ),
    Rule(
        lambda x: np.all(x.population_indicators.values >= 0),
        'Population indicators must be non-negative.'
    ),
    Rule(
        lambda x: np.max(x.population_indicators.values) < x.num_populations,
        'Population indicators are inconsistent with the number of populations.'
    ),
    Rule(
        lambda x: len(x.variant_profiles) >= 1,
        'There must be at least one variant profile.'
    ),
    Rule(
        lambda x: np.all((x.variant_profiles.variant_segment_fractions >= 0) &
                         (x.variant_profiles.variant_segment_fractions <= 1)),
        'Variant-segment fractions must be in [0, 1].'
    ),
    Rule(
        lambda x: len(x.variant_profiles) + 1 == x.num_populations,
        'Number of variant profiles must be one less than the number of populations.'
    ),
    Rule(
        lambda x: x.priors.variant_ploidy_state_prior.is_valid_index(x.variant_profiles.variant_ploidy_state_indicators),
        'Variant ploidy-state indicators are inconsistent with the number of states in the variant ploidy-state prior.'
    ),
)


@numba.njit(cache=True)
def _get_population_and_genomic_averaged_ploidy(
        population_fractions,
        fractional_lengths,
        variant_indicators,
        variant_ploidy_state_indicators,
        total_copy_numbers,
        normal_total_copy_number):

    K = variant_indicators.shape[0]

    S = fractional_lengths.shape[0]

    ploidy = 0.0

    for k in range(K):
        genomic_ploidy = 0.0

        for s in range(S):
            if variant_indicators[k, s]:
                c = total_copy_numbers[variant_ploidy_state_indicators[k, s]]

            else:
                c = normal_total_copy_number

            genomic_ploidy += fractional_lengths[s] * c

        ploidy += population_fractions[k] * genomic_ploidy

    normal_genomic_ploidy = 0.0

    for s in range(S):
        normal_genomic_ploidy += fractional_lengths[s] * normal_total_copy_number

    ploidy += population_fractions[K] * normal_genomic_ploidy

    return ploidy
