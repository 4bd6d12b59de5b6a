import time

import numba
import numpy as np


def set_seed(seed):
    """ Seed both the numpy and numba random number generators.
    """
    if seed is not None:
        np.random.seed(seed)

        set_numba_seed(seed)


@numba.njit
def set_numba_seed(seed):
    np.random.seed(seed)


def read_only_array(x):
    """ Mark a freshly allocated array as immutable and return it.
    """
    x.setflags(write=False)

    return x


def check_index(idx, size, name='Index'):
    """ Raise IndexError unless idx is in [0, size); negative indices are not wrapped.
    """
    if not (0 <= idx < size):
        raise IndexError('{} {} is outside of [0, {}).'.format(name, idx, size))


class Timer:
    """ Taken from https://www.safaribooksonline.com/library/view/python-cookbook-3rd/9781449357337/ch13s13.html
    """

    def __init__(self, func=time.time):
        self.elapsed = 0.0

        self._func = func

        self._start = None

    @property
    def running(self):
        return self._start is not None

    def reset(self):
        self.elapsed = 0.0

    def start(self):
        if self._start is not None:
            raise RuntimeError('Already started')

        self._start = self._func()

    def stop(self):
        if self._start is None:
            raise RuntimeError('Not started')

        end = self._func()

        self.elapsed += end - self._start

        self._start = None

    def __enter__(self):
        self.start()

        return self

    def __exit__(self, *args):
        self.stop()
