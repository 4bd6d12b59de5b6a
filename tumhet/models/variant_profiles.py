import numpy as np

from tumhet.exceptions import StructuralValidationError
from tumhet.models.base import AbstractVector, Rule, coerce_boolean_array, coerce_float, coerce_integer_array, validate
from tumhet.utils import check_index, read_only_array


class VariantIndicators(AbstractVector):
    """ Whether each segment is altered in a variant population.
    """

    def _coerce(self, values):
        return coerce_boolean_array(values, 'Variant indicators')


class VariantPloidyStateIndicators(AbstractVector):
    """ Index into the variant ploidy-state prior's support for each segment of a variant population.
    """

    def _coerce(self, values):
        return coerce_integer_array(values, 'Variant ploidy-state indicators')


class VariantProfile(object):
    """ Genomic profile of a single variant population.

    Parameters
    ----------
    variant_segment_fraction: float
        Fraction of the population's segments expected to be altered.
    variant_indicators: VariantIndicators or sequence of bool
        Whether each segment is altered.
    variant_ploidy_state_indicators: VariantPloidyStateIndicators or sequence of int
        Ploidy state of each segment when altered.
    """

    _rules = (
        Rule(
            lambda x: len(x.variant_indicators) == len(x.variant_ploidy_state_indicators),
            'Variant indicators and variant ploidy-state indicators must cover the same number of segments.'
        ),
        Rule(
            lambda x: x.num_segments >= 1,
            'Variant profiles must cover at least one segment.'
        ),
    )

    def __init__(self, variant_segment_fraction, variant_indicators, variant_ploidy_state_indicators):
        self._variant_segment_fraction = coerce_float(variant_segment_fraction, 'Variant-segment fraction')

        if not isinstance(variant_indicators, VariantIndicators):
            variant_indicators = VariantIndicators(variant_indicators)

        self._variant_indicators = variant_indicators

        if not isinstance(variant_ploidy_state_indicators, VariantPloidyStateIndicators):
            variant_ploidy_state_indicators = VariantPloidyStateIndicators(variant_ploidy_state_indicators)

        self._variant_ploidy_state_indicators = variant_ploidy_state_indicators

        validate(self, self._rules)

    def __eq__(self, other):
        if not isinstance(other, VariantProfile):
            return NotImplemented

        return (self._variant_segment_fraction == other._variant_segment_fraction) and \
            (self._variant_indicators == other._variant_indicators) and \
            (self._variant_ploidy_state_indicators == other._variant_ploidy_state_indicators)

    __hash__ = None

    def __repr__(self):
        return 'VariantProfile({}, {}, {})'.format(
            self._variant_segment_fraction,
            self._variant_indicators,
            self._variant_ploidy_state_indicators
        )

    @property
    def num_segments(self):
        return len(self._variant_indicators)

    @property
    def variant_indicators(self):
        return self._variant_indicators

    @property
    def variant_ploidy_state_indicators(self):
        return self._variant_ploidy_state_indicators

    @property
    def variant_segment_fraction(self):
        return self._variant_segment_fraction

    def get_variant_ploidy_state_index(self, segment_idx):
        check_index(segment_idx, self.num_segments, 'Segment index')

        return self._variant_ploidy_state_indicators[segment_idx]

    def is_variant(self, segment_idx):
        check_index(segment_idx, self.num_segments, 'Segment index')

        return self._variant_indicators[segment_idx]


class VariantProfileCollection(object):
    """ Variant profiles of all variant populations, which must share a common number of segments.

    The profiles are also stacked into (num variant populations, num segments) arrays for the derived statistics.
    """

    def __init__(self, variant_profiles):
        self._variant_profiles = tuple(variant_profiles)

        if not all(isinstance(x, VariantProfile) for x in self._variant_profiles):
            raise StructuralValidationError('Variant profile collections must contain VariantProfile objects.')

        if len(set(x.num_segments for x in self._variant_profiles)) > 1:
            raise StructuralValidationError('All variant profiles must cover the same number of segments.')

        if len(self._variant_profiles) == 0:
            self._variant_indicators = np.zeros((0, 0), dtype=np.bool_)

            self._variant_ploidy_state_indicators = np.zeros((0, 0), dtype=np.int64)

        else:
            self._variant_indicators = np.vstack([x.variant_indicators.values for x in self._variant_profiles])

            self._variant_ploidy_state_indicators = np.vstack(
                [x.variant_ploidy_state_indicators.values for x in self._variant_profiles]
            )

        self._variant_segment_fractions = np.array(
            [x.variant_segment_fraction for x in self._variant_profiles], dtype=np.float64
        )

        read_only_array(self._variant_indicators)

        read_only_array(self._variant_ploidy_state_indicators)

        read_only_array(self._variant_segment_fractions)

    def __eq__(self, other):
        if not isinstance(other, VariantProfileCollection):
            return NotImplemented

        return self._variant_profiles == other._variant_profiles

    __hash__ = None

    def __getitem__(self, idx):
        check_index(idx, len(self), 'Variant population index')

        return self._variant_profiles[idx]

    def __iter__(self):
        return iter(self._variant_profiles)

    def __len__(self):
        return len(self._variant_profiles)

    def __repr__(self):
        return 'VariantProfileCollection({})'.format(list(self._variant_profiles))

    @property
    def num_segments(self):
        """ Number of segments shared by all profiles, zero for an empty collection.
        """
        return self._variant_indicators.shape[1]

    @property
    def variant_indicators(self):
        return self._variant_indicators

    @property
    def variant_ploidy_state_indicators(self):
        return self._variant_ploidy_state_indicators

    @property
    def variant_segment_fractions(self):
        return self._variant_segment_fractions
