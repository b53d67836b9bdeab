"""
FlowGate Test Suites
"""
import unittest

from tests.transform_tests import TransformsTestCase, ChannelTransformTestCase, EstimateTransformTestCase
from tests.event_table_tests import EventTableTestCase, EventTableTransformTestCase
from tests.event_collection_tests import EventCollectionTestCase
from tests.gate_tests import QuantileGateTestCase, RegionGateTestCase, RegionGateTransformTestCase
from tests.gate_set_tests import GateSetTestCase, GateSetExportTestCase
from tests.gating_pipeline_tests import GatingPipelineTestCase, GatingResultsTestCase
from tests.sample_utils_tests import SampleUtilsTestCase
from tests.string_repr_tests import StringReprTestCase
from tests.plot_tests import PlotTestCase

if __name__ == "__main__":
    unittest.main()
