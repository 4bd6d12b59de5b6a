from collections import namedtuple

import numpy as np

from tumhet.exceptions import StructuralValidationError
from tumhet.utils import check_index, read_only_array


Rule = namedtuple('Rule', ['predicate', 'message'])


def validate(obj, rules):
    """ Evaluate rules in order and raise on the first violated one.

    Predicates may assume that every preceding rule held.
    """
    for rule in rules:
        if not rule.predicate(obj):
            raise StructuralValidationError(rule.message)


class AbstractVector(object):
    """ Immutable one-dimensional container backed by a read-only numpy array.
    """

    def _coerce(self, values):
        """ Return a new numpy array of the container's dtype holding values.
        """
        raise NotImplementedError

    def __init__(self, values):
        values = self._coerce(values)

        if values.ndim != 1:
            raise StructuralValidationError('{} must be one-dimensional.'.format(type(self).__name__))

        self._values = read_only_array(values)

    def __eq__(self, other):
        if not isinstance(other, type(self)):
            return NotImplemented

        return np.array_equal(self._values, other._values)

    __hash__ = None

    def __getitem__(self, idx):
        check_index(idx, len(self), 'Index')

        return self._values[idx].item()

    def __iter__(self):
        return iter(self._values.tolist())

    def __len__(self):
        return self._values.shape[0]

    def __repr__(self):
        return '{}({})'.format(type(self).__name__, self._values.tolist())

    @property
    def values(self):
        return self._values


def coerce_boolean_array(values, name):
    values = _to_array(values, name)

    if values.size == 0:
        return values.astype(np.bool_)

    if values.dtype != np.bool_:
        raise StructuralValidationError('{} must be booleans.'.format(name))

    return values


def coerce_float(value, name):
    if isinstance(value, (bool, np.bool_)):
        raise StructuralValidationError('{} must be a number.'.format(name))

    try:
        return float(value)

    except (TypeError, ValueError):
        raise StructuralValidationError('{} must be a number, got {!r}.'.format(name, value))


def coerce_float_array(values, name):
    values = _to_array(values, name)

    if values.size == 0:
        return values.astype(np.float64)

    if (values.dtype == np.bool_) or (not np.issubdtype(values.dtype, np.number)):
        raise StructuralValidationError('{} must be numbers.'.format(name))

    if np.issubdtype(values.dtype, np.complexfloating):
        raise StructuralValidationError('{} must be real numbers.'.format(name))

    return values.astype(np.float64)


def coerce_integer_array(values, name):
    values = _to_array(values, name)

    if values.size == 0:
        return values.astype(np.int64)

    if (values.dtype == np.bool_) or (not np.issubdtype(values.dtype, np.integer)):
        raise StructuralValidationError('{} must be integers.'.format(name))

    return values.astype(np.int64)


def _to_array(values, name):
    # Ragged nesting raises ValueError on current numpy
    try:
        return np.array(values)

    except (TypeError, ValueError):
        raise StructuralValidationError('{} must be a flat sequence.'.format(name))
