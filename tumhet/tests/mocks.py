from tumhet.data import ModeledSegment, PosteriorSummary, TumorHeterogeneityData
from tumhet.models import TumorHeterogeneityState, VariantProfile, VariantProfileCollection
from tumhet.ploidy_states import PloidyState, PloidyStatePrior
from tumhet.priors import TumorHeterogeneityPriorCollection

METROPOLIS_ITERATION_FRACTION = 0.5

NORMAL_PLOIDY_STATE = PloidyState(1, 1)

DUMMY_HYPERPARAMETER = 1.0


def get_variant_ploidy_state_prior():
    return PloidyStatePrior({
        PloidyState(0, 0): 0.0,
        PloidyState(0, 1): 0.0,
        PloidyState(1, 2): 0.0
    })


def get_priors():
    return TumorHeterogeneityPriorCollection(
        METROPOLIS_ITERATION_FRACTION,
        NORMAL_PLOIDY_STATE,
        get_variant_ploidy_state_prior(),
        DUMMY_HYPERPARAMETER,
        DUMMY_HYPERPARAMETER,
        DUMMY_HYPERPARAMETER,
        DUMMY_HYPERPARAMETER
    )


def get_data():
    """ Two segments on one contig, of length 25 and 75.
    """
    summary = PosteriorSummary(0.0, -0.1, 0.1)

    return TumorHeterogeneityData([
        ModeledSegment('1', 1, 25, summary, summary),
        ModeledSegment('1', 26, 100, summary, summary)
    ])


def get_variant_profiles():
    return VariantProfileCollection([
        VariantProfile(0.1, [True, True], [0, 1]),
        VariantProfile(0.3, [True, False], [2, 0])
    ])


def get_state(priors=None):
    """ Three populations, ten cells and two segments.
    """
    if priors is None:
        priors = get_priors()

    return TumorHeterogeneityState(
        False,
        1.0,
        [0.1, 0.2, 0.7],
        [0, 1, 1, 2, 2, 2, 2, 2, 2, 2],
        get_variant_profiles(),
        priors
    )
