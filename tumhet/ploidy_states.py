from collections import namedtuple

import numpy as np

from tumhet.math_utils import discrete_rvs, log_normalize
from tumhet.utils import check_index, read_only_array


class PloidyState(namedtuple('PloidyState', ['major_count', 'minor_count'])):
    """ Allelic copy-number state of a segment, i.e. the number of copies of each of the two alleles.
    """

    __slots__ = ()

    def __new__(cls, major_count, minor_count):
        for count in (major_count, minor_count):
            if isinstance(count, (bool, np.bool_)) or int(count) != count or count < 0:
                raise ValueError('Allelic copy numbers must be non-negative integers, got {}.'.format(count))

        return super(PloidyState, cls).__new__(cls, int(major_count), int(minor_count))

    @property
    def total_copy_number(self):
        return self.major_count + self.minor_count


class PloidyStatePrior(object):
    """ Unnormalized log prior over a finite set of ploidy states.

    The insertion order of the states defines the ordered support, so integer indices into the support are stable for
    the lifetime of the prior.

    Parameters
    ----------
    unnormalized_log_p: mapping
        Map from ploidy states (or (major, minor) pairs) to unnormalized log probabilities.
    """

    def __init__(self, unnormalized_log_p):
        items = list(dict(unnormalized_log_p).items())

        if len(items) == 0:
            raise ValueError('Ploidy-state prior must contain at least one ploidy state.')

        self._ploidy_states = tuple(PloidyState(*state) for state, _ in items)

        self._indices = dict((state, idx) for idx, state in enumerate(self._ploidy_states))

        self._unnormalized_log_p = read_only_array(np.array([log_p for _, log_p in items], dtype=np.float64))

        if not np.all(np.isfinite(self._unnormalized_log_p)):
            raise ValueError('Unnormalized log probabilities of ploidy states must be finite.')

        self._total_copy_numbers = read_only_array(
            np.array([state.total_copy_number for state in self._ploidy_states], dtype=np.int64)
        )

        self._log_pmf = None

    def __contains__(self, ploidy_state):
        return ploidy_state in self._indices

    def __iter__(self):
        return iter(self._ploidy_states)

    def __len__(self):
        return len(self._ploidy_states)

    def __repr__(self):
        return 'PloidyStatePrior({})'.format(dict(zip(self._ploidy_states, self._unnormalized_log_p.tolist())))

    @property
    def log_pmf(self):
        """ Normalized log probability of each ploidy state, in support order.
        """
        if self._log_pmf is None:
            self._log_pmf = read_only_array(log_normalize(self._unnormalized_log_p.copy()))

        return self._log_pmf

    @property
    def num_ploidy_states(self):
        return len(self._ploidy_states)

    @property
    def ploidy_states(self):
        return self._ploidy_states

    @property
    def total_copy_numbers(self):
        """ Total copy number of each ploidy state, in support order.
        """
        return self._total_copy_numbers

    @property
    def unnormalized_log_p(self):
        return self._unnormalized_log_p

    def get_index(self, ploidy_state):
        try:
            return self._indices[ploidy_state]

        except KeyError:
            raise KeyError('Ploidy state {} is not in the support of the prior.'.format(ploidy_state))

    def get_ploidy_state(self, index):
        check_index(index, self.num_ploidy_states, 'Ploidy-state index')

        return self._ploidy_states[index]

    def get_unnormalized_log_p(self, ploidy_state):
        return float(self._unnormalized_log_p[self.get_index(ploidy_state)])

    def is_valid_index(self, index):
        """ Check whether an index, or every entry of an array of indices, addresses a state in the support.
        """
        index = np.asarray(index)

        if index.dtype == np.bool_ or not np.issubdtype(index.dtype, np.integer):
            return False

        return bool(np.all((index >= 0) & (index < self.num_ploidy_states)))

    def rvs(self, size=None):
        """ Sample ploidy-state indices from the normalized prior.
        """
        p = np.exp(self.log_pmf)

        if size is None:
            return int(discrete_rvs(p))

        return np.array([discrete_rvs(p) for _ in range(size)], dtype=np.int64)
