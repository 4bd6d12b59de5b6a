import logging

import numpy as np

from tumhet.data import ModeledSegment, TumorHeterogeneityData
from tumhet.mcmc_utils import initialize_state, propose_state
from tumhet.models import VariantProfile, VariantProfileCollection
from tumhet.priors import TumorHeterogeneityPriorCollection
from tumhet.utils import set_seed, Timer


def main():
    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    set_seed(0)

    num_iters = 1000

    data = simulate_data(num_segments=50)

    priors = TumorHeterogeneityPriorCollection.get_default_priors()

    state = initialize_state(data, priors, num_populations=4, num_cells=100)

    num_rejected = 0

    timer = Timer()

    with timer:
        for i in range(num_iters):
            candidate = propose_state(state, **get_random_perturbation(state))

            # No likelihood here, every structurally valid candidate is kept
            if candidate is None:
                num_rejected += 1

            else:
                state = candidate

            if i % 100 == 0:
                print(
                    i,
                    np.round(state.population_fractions.values, 3),
                    state.calculate_population_and_genomic_averaged_ploidy(data)
                )

    print('Structurally rejected {} of {} proposals in {:.2f}s'.format(num_rejected, num_iters, timer.elapsed))


def get_random_perturbation(state, step_size=0.05):
    field = np.random.choice(['population_fractions', 'population_indicators', 'variant_profiles'])

    if field == 'population_fractions':
        # Unnormalized random walk, so most proposals are rejected
        value = state.population_fractions.values + np.random.normal(0, step_size, size=state.num_populations)

        if np.random.random() < 0.5:
            value = value / np.sum(value)

    elif field == 'population_indicators':
        value = state.population_indicators.values.copy()

        value[np.random.randint(state.num_cells)] = np.random.randint(state.num_populations)

    else:
        k = np.random.randint(len(state.variant_profiles))

        profiles = list(state.variant_profiles)

        profile = profiles[k]

        profiles[k] = VariantProfile(
            profile.variant_segment_fraction + np.random.normal(0, step_size),
            profile.variant_indicators,
            profile.variant_ploidy_state_indicators
        )

        value = VariantProfileCollection(profiles)

    return {field: value}


def simulate_data(num_segments=50):
    breakpoints = np.unique(np.random.randint(2, int(1e8), size=num_segments - 1))

    starts = np.concatenate([[1], breakpoints])

    ends = np.concatenate([breakpoints - 1, [int(1e8)]])

    return TumorHeterogeneityData([ModeledSegment('1', int(s), int(e)) for s, e in zip(starts, ends)])


if __name__ == '__main__':
    main()
