import unittest

import numpy as np

from tumhet.exceptions import StructuralValidationError
from tumhet.mcmc_utils import initialize_state, propose_state, symmetric_dirichlet_rvs
from tumhet.models import POPULATION_FRACTION_EPSILON, TumorHeterogeneityState
from tumhet.priors import TumorHeterogeneityPriorCollection
from tumhet.utils import set_seed

from tumhet.tests.mocks import get_data, get_priors, get_state


class TestProposeState(unittest.TestCase):

    def setUp(self):
        self.state = get_state()

    def test_valid_proposal(self):
        state = propose_state(self.state, population_fractions=[0.2, 0.2, 0.6])

        self.assertIsInstance(state, TumorHeterogeneityState)

        self.assertEqual(list(state.population_fractions), [0.2, 0.2, 0.6])

        self.assertIs(state.population_indicators, self.state.population_indicators)

    def test_invalid_proposal(self):
        with self.assertLogs('tumhet.mcmc_utils', level='DEBUG') as logs:
            state = propose_state(self.state, population_fractions=[0.2, 0.2, 0.2])

        self.assertIsNone(state)

        self.assertIn('normalized to unity', logs.output[0])

    def test_malformed_proposal(self):
        changes = [
            {'population_indicators': [[0], [1, 2]]},
            {'population_fractions': ['a', 'b', 'c']},
            {'concentration': 'x'},
            {'priors': None},
        ]

        for kwargs in changes:
            self.assertIsNone(propose_state(self.state, **kwargs))

    def test_unknown_field_is_not_a_rejection(self):
        with self.assertRaises(TypeError):
            propose_state(self.state, foo=1)


class TestInitializeState(unittest.TestCase):

    def setUp(self):
        self.data = get_data()

    def test_initial_state_is_valid(self):
        set_seed(0)

        priors = TumorHeterogeneityPriorCollection.get_default_priors()

        state = initialize_state(self.data, priors, 4, 100)

        self.assertEqual(state.num_populations, 4)

        self.assertEqual(state.num_cells, 100)

        self.assertEqual(state.num_segments, self.data.num_segments)

        self.assertFalse(state.do_metropolis_step)

        self.assertGreater(state.concentration, 0)

        self.assertLessEqual(abs(np.sum(state.population_fractions.values) - 1), POPULATION_FRACTION_EPSILON)

        ploidy = state.calculate_population_and_genomic_averaged_ploidy(self.data)

        self.assertGreaterEqual(ploidy, 0)

        self.assertLessEqual(ploidy, 10)

    def test_fixed_concentration(self):
        state = initialize_state(self.data, get_priors(), 3, 10, concentration=2.5, do_metropolis_step=True)

        self.assertEqual(state.concentration, 2.5)

        self.assertTrue(state.do_metropolis_step)

    def test_reproducible(self):
        priors = get_priors()

        set_seed(1)

        state_1 = initialize_state(self.data, priors, 3, 20)

        set_seed(1)

        state_2 = initialize_state(self.data, priors, 3, 20)

        self.assertEqual(state_1.population_fractions, state_2.population_fractions)

        self.assertEqual(state_1.population_indicators, state_2.population_indicators)

        self.assertEqual(state_1.variant_profiles, state_2.variant_profiles)

    def test_small_concentration(self):
        priors = get_priors()

        for seed in range(50):
            set_seed(seed)

            state = initialize_state(self.data, priors, 4, 20, concentration=1e-3)

            fractions = state.population_fractions.values

            self.assertTrue(np.all(np.isfinite(fractions)))

            self.assertLessEqual(abs(np.sum(fractions) - 1), POPULATION_FRACTION_EPSILON)

    def test_symmetric_dirichlet_rvs(self):
        set_seed(0)

        samples = np.array([symmetric_dirichlet_rvs(2.0, 3) for _ in range(2000)])

        np.testing.assert_allclose(np.sum(samples, axis=1), 1)

        np.testing.assert_allclose(np.mean(samples, axis=0), [1 / 3] * 3, atol=0.03)

    def test_single_population_is_fatal(self):
        with self.assertRaises(StructuralValidationError):
            initialize_state(self.data, get_priors(), 1, 10, concentration=1.0)


if __name__ == "__main__":
    unittest.main()
