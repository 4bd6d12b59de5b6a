import numpy as np

from tumhet.models.base import AbstractVector, coerce_float_array, coerce_integer_array


class PopulationFractions(AbstractVector):
    """ Continuous weight of each population. The last population is the normal population.

    Values are stored as given; normalization is checked by the state and never corrected here.
    """

    def _coerce(self, values):
        return coerce_float_array(values, 'Population fractions')

    @property
    def normal_population_index(self):
        return len(self) - 1

    @property
    def num_populations(self):
        return len(self)


class PopulationIndicators(AbstractVector):
    """ Population assigned to each cell.
    """

    def _coerce(self, values):
        return coerce_integer_array(values, 'Population indicators')

    @property
    def num_cells(self):
        return len(self)

    def get_counts(self, num_populations):
        """ Number of cells assigned to each population. Assumes all indicators are in [0, num_populations).
        """
        return np.bincount(self._values, minlength=num_populations)
