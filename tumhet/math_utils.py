import numba
import numpy as np


@numba.njit(cache=True)
def discrete_rvs(p):
    p = p / np.sum(p)
    return np.random.multinomial(1, p).argmax()


@numba.njit(cache=True)
def log_sum_exp(log_X):
    max_exp = np.max(log_X)

    if np.isinf(max_exp):
        return max_exp

    total = 0

    for x in log_X:
        total += np.exp(x - max_exp)

    return np.log(total) + max_exp


@numba.njit(cache=True)
def log_normalize(log_p):
    return log_p - log_sum_exp(log_p)
