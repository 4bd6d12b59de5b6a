from .populations import PopulationFractions, PopulationIndicators
from .state import POPULATION_FRACTION_EPSILON, TumorHeterogeneityState
from .variant_profiles import VariantIndicators, VariantPloidyStateIndicators, VariantProfile, VariantProfileCollection

__all__ = [
    'POPULATION_FRACTION_EPSILON',
    'PopulationFractions',
    'PopulationIndicators',
    'TumorHeterogeneityState',
    'VariantIndicators',
    'VariantPloidyStateIndicators',
    'VariantProfile',
    'VariantProfileCollection'
]
