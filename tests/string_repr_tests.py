"""
Unit tests for string representations
"""

import unittest
import flowgate as fg

from tests.test_config import (
    table_small,
    collection,
    scatter_xform,
    logicle_xform,
    asinh_xform,
    fsc_quantile_gate,
    population_gate,
    band_boundary
)


class StringReprTestCase(unittest.TestCase):
    """Tests related to string representations of FlowGate classes"""

    def test_event_table_repr(self):
        self.assertEqual(repr(table_small), "EventTable(4 channels, 100 events, raw)")

    def test_event_table_transformed_repr(self):
        xform_table = table_small.apply_transform(scatter_xform)

        self.assertEqual(repr(xform_table), "EventTable(4 channels, 100 events, transformed)")

    def test_logicle_xform_repr(self):
        self.assertEqual(repr(logicle_xform), "LogicleTransform(t: 262144.0, w: 0.5, m: 4.5, a: 0.0)")

    def test_asinh_xform_repr(self):
        self.assertEqual(repr(asinh_xform), "AsinhTransform(t: 262144.0, m: 4.5, a: 0.0)")

    def test_channel_xform_repr(self):
        self.assertEqual(repr(scatter_xform), "ChannelTransform(3 channels)")

    def test_quantile_gate_repr(self):
        self.assertEqual(repr(fsc_quantile_gate), "QuantileGate(fsc_debris, FSC-A <= 100000.0)")

    def test_region_gate_repr(self):
        self.assertEqual(repr(population_gate), "RegionGate(population, EllipseBoundary)")

    def test_band_boundary_repr(self):
        self.assertEqual(
            repr(band_boundary),
            "BandBoundary(slope: 1.1, intercept: 0.0, half_width: 5000.0)"
        )

    def test_quantile_config_repr(self):
        config = fg.QuantileGateConfig('SSC-A', probability=0.99)

        self.assertEqual(repr(config), "QuantileGateConfig(SSC-A, probability: 0.99)")

    def test_region_config_repr(self):
        config = fg.RegionGateConfig(['FSC-H', 'FSC-A'], method='band')

        self.assertEqual(repr(config), "RegionGateConfig(FSC-H vs FSC-A, method: band)")

    def test_gate_set_repr(self):
        gate_set = fg.GateSet('scatter', transform=scatter_xform)
        gate_set.add_gate(population_gate)

        self.assertEqual(repr(gate_set), "GateSet(scatter, 1 gates, transformed)")

    def test_pipeline_repr(self):
        gate_set = fg.GateSet('scatter')
        gate_set.add_gate(population_gate)

        self.assertEqual(repr(fg.GatingPipeline(gate_set)), "GatingPipeline(scatter, 1 gates)")

    def test_gating_results_repr(self):
        gate_set = fg.GateSet('scatter')
        gate_set.add_gate(fsc_quantile_gate)
        results = fg.GatingPipeline(gate_set).apply(collection)

        self.assertEqual(repr(results), "GatingResults(3 samples, 0 diagnostics)")

    def test_collection_repr(self):
        self.assertEqual(repr(collection), "EventCollection(3 samples, 4 channels)")
