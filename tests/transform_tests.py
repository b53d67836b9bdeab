"""
Unit tests for Transform subclasses & ChannelTransform
"""
import unittest
import warnings
import numpy as np

import flowgate as fg
from flowgate import transforms
from flowgate.exceptions import OutOfDomainError, ChannelNotFoundError, InsufficientDataError, FlowGateWarning

from tests.test_config import (
    test_data_range1,
    logicle_xform,
    asinh_xform,
    log_xform,
    linear_xform,
    scatter_xform,
    table_medium,
    collection
)


class TransformsTestCase(unittest.TestCase):
    """Tests for individual Transform classes"""
    def test_linear_transform_scale(self):
        xform = transforms.LinearTransform(param_t=1000.0, param_a=0.0)
        xform_values = xform.apply(np.array([0.0, 500.0, 1000.0]))

        self.assertIsInstance(xform_values, np.ndarray)
        np.testing.assert_array_almost_equal(xform_values, [0.0, 0.5, 1.0])

    def test_scalar_in_scalar_out(self):
        value = linear_xform.apply(262144.0)

        self.assertIsInstance(value, float)
        self.assertEqual(value, 1.0)

    def test_zero_dim_array_in_scalar_out(self):
        for xform in [linear_xform, log_xform, logicle_xform, asinh_xform]:
            value = xform.apply(np.float64(100000.0))
            self.assertIsInstance(value, float)

            raw_value = xform.inverse(np.array(value))
            self.assertIsInstance(raw_value, float)
            self.assertAlmostEqual(raw_value, 100000.0, delta=1e-3)

    def test_log_transform_top_of_scale(self):
        self.assertAlmostEqual(log_xform.apply(262144.0), 1.0)

    def test_logicle_transform_top_of_scale(self):
        self.assertAlmostEqual(logicle_xform.apply(262144.0), 1.0)

    def test_inverse_round_trip(self):
        for xform in [logicle_xform, asinh_xform, linear_xform]:
            round_trip = xform.inverse(xform.apply(test_data_range1))

            np.testing.assert_allclose(round_trip, test_data_range1, rtol=1e-9, atol=1e-6)

    def test_log_inverse_round_trip_positive_values(self):
        values = np.linspace(1.0, 262144.0, 500)
        round_trip = log_xform.inverse(log_xform.apply(values))

        np.testing.assert_allclose(round_trip, values, rtol=1e-9)

    def test_log_transform_non_positive_raises(self):
        self.assertRaises(OutOfDomainError, log_xform.apply, np.array([10.0, 0.0]))
        self.assertRaises(OutOfDomainError, log_xform.apply, np.array([-5.0]))

    def test_non_finite_input_passes_through(self):
        values = log_xform.apply(np.array([np.nan, 100.0]))

        self.assertTrue(np.isnan(values[0]))
        self.assertTrue(np.isfinite(values[1]))

    def test_logicle_invalid_width_raises(self):
        self.assertRaises(
            ValueError,
            transforms.LogicleTransform,
            param_t=262144,
            param_w=3.0,
            param_m=4.5
        )

    def test_transform_equality(self):
        xform = transforms.LogicleTransform(param_t=262144, param_w=0.5, param_m=4.5)

        self.assertEqual(xform, logicle_xform)
        self.assertNotEqual(xform, asinh_xform)
        self.assertEqual(hash(xform), hash(logicle_xform))

    def test_get_params(self):
        params = asinh_xform.get_params()

        self.assertDictEqual(params, {'param_t': 262144.0, 'param_m': 4.5, 'param_a': 0.0})


class ChannelTransformTestCase(unittest.TestCase):
    """Tests for ChannelTransform"""
    def test_channels(self):
        self.assertListEqual(scatter_xform.channels, ['FSC-A', 'FSC-H', 'SSC-A'])
        self.assertIn('FSC-A', scatter_xform)
        self.assertNotIn('FL1-A', scatter_xform)

    def test_empty_raises(self):
        self.assertRaises(ValueError, fg.ChannelTransform, {})

    def test_non_transform_raises(self):
        self.assertRaises(TypeError, fg.ChannelTransform, {'FSC-A': 'logicle'})

    def test_forward_inverse(self):
        values = np.array([100.0, 1000.0, 10000.0])
        xform_values = scatter_xform.forward('FSC-A', values)

        np.testing.assert_array_equal(xform_values, logicle_xform.apply(values))
        np.testing.assert_allclose(scatter_xform.inverse('FSC-A', xform_values), values, rtol=1e-9)

    def test_unknown_channel_raises(self):
        self.assertRaises(ChannelNotFoundError, scatter_xform.forward, 'FL1-A', 1.0)
        self.assertRaises(ChannelNotFoundError, scatter_xform.get_transform, 'FL1-A')

    def test_channel_not_found_is_key_error(self):
        self.assertRaises(KeyError, scatter_xform.inverse, 'FL1-A', 1.0)

    def test_equality(self):
        other = fg.ChannelTransform(
            {
                'FSC-A': logicle_xform,
                'FSC-H': logicle_xform,
                'SSC-A': logicle_xform
            }
        )
        different = fg.ChannelTransform({'FSC-A': asinh_xform})

        self.assertEqual(scatter_xform, other)
        self.assertNotEqual(scatter_xform, different)
        self.assertNotEqual(scatter_xform, None)

    def test_transform_points_skips_uncovered_channels(self):
        points = np.array([[1000.0, 5.0], [2000.0, 6.0]])
        new_points = scatter_xform.transform_points(['FSC-A', 'FL1-A'], points)

        np.testing.assert_array_equal(new_points[:, 1], points[:, 1])
        np.testing.assert_array_equal(new_points[:, 0], logicle_xform.apply(points[:, 0]))

    def test_dict_round_trip(self):
        xform_dict = scatter_xform.to_dict()
        new_xform = fg.ChannelTransform.from_dict(xform_dict)

        self.assertEqual(xform_dict['FSC-A']['transform_type'], 'LogicleTransform')
        self.assertEqual(new_xform, scatter_xform)

    def test_from_dict_unknown_type_raises(self):
        xform_dict = {'FSC-A': {'transform_type': 'HyperlogTransform', 'params': {}}}

        self.assertRaises(ValueError, fg.ChannelTransform.from_dict, xform_dict)


class EstimateTransformTestCase(unittest.TestCase):
    """Tests for estimating a ChannelTransform from event data"""
    def test_estimate_logicle_top_is_channel_max(self):
        xform = fg.ChannelTransform.estimate(table_medium, ['FSC-A', 'SSC-A'])

        fsc_xform = xform.get_transform('FSC-A')

        self.assertIsInstance(fsc_xform, transforms.LogicleTransform)
        self.assertEqual(fsc_xform.param_t, table_medium.get_channel_events('FSC-A').max())
        self.assertEqual(fsc_xform.param_m, 4.5)
        self.assertEqual(fsc_xform.param_a, 0.0)

    def test_estimate_logicle_no_negative_values(self):
        # scatter channels are clipped to positive values
        xform = fg.ChannelTransform.estimate(table_medium, ['FSC-A'])

        self.assertEqual(xform.get_transform('FSC-A').param_w, 0.0)

    def test_estimate_logicle_width_from_negative_values(self):
        values = table_medium.get_channel_events('FL1-A')
        top = values.max()
        r = np.quantile(values[values < 0], 0.05)
        expected_w = (4.5 - np.log10(top / abs(r))) / 2.0
        expected_w = min(max(expected_w, 0.0), 2.25)

        with warnings.catch_warnings():
            warnings.simplefilter("ignore", FlowGateWarning)
            xform = fg.ChannelTransform.estimate(table_medium, ['FL1-A'])

        self.assertAlmostEqual(xform.get_transform('FL1-A').param_w, expected_w)

    def test_estimate_logicle_width_clipped_with_warning(self):
        values = np.array([-100000.0, -50000.0, 10.0, 100.0])
        table = fg.EventTable(values.reshape(-1, 1), channel_labels=['FL1-A'])

        with self.assertWarns(FlowGateWarning):
            xform = fg.ChannelTransform.estimate(table, ['FL1-A'])

        # few positive decades, W is limited to M / 2
        self.assertEqual(xform.get_transform('FL1-A').param_w, 2.25)

    def test_estimate_from_collection_pools_samples(self):
        xform = fg.ChannelTransform.estimate(collection, ['SSC-A'])

        pooled_max = max(t.get_channel_events('SSC-A').max() for _, t in collection)

        self.assertEqual(xform.get_transform('SSC-A').param_t, pooled_max)

    def test_estimate_asinh(self):
        xform = fg.ChannelTransform.estimate(table_medium, ['FSC-H'], transform_class=transforms.AsinhTransform)

        self.assertIsInstance(xform.get_transform('FSC-H'), transforms.AsinhTransform)

    def test_estimate_empty_channel_raises(self):
        empty_table = table_medium.subset(np.zeros(table_medium.event_count, dtype=bool))

        self.assertRaises(InsufficientDataError, fg.ChannelTransform.estimate, empty_table, ['FSC-A'])

    def test_estimate_missing_channel_raises(self):
        self.assertRaises(ChannelNotFoundError, fg.ChannelTransform.estimate, table_medium, ['PE-A'])
