"""
Defines the public API for FlowGate
"""
from ._models.event_table import EventTable
from ._models.event_collection import EventCollection
from ._models import transforms
from ._models import gates
from ._models.transforms import ChannelTransform
from ._models.gates import QuantileGate, RegionGate, QuantileGateConfig, RegionGateConfig
from ._models.gate_set import GateSet
from ._models.gating_pipeline import GatingPipeline
from ._models.gating_results import GatingResults
from ._utils.sample_utils import read_fcs, load_collection
from ._utils.gate_set_utils import export_gate_set, load_gate_set
from ._utils.boundary_utils import \
    estimate_quantile_threshold, \
    estimate_cluster_ellipse, \
    estimate_regression_band
from ._utils.plot_utils import plot_gate, plot_scatter, plot_histogram
from . import exceptions

from ._version import __version__

__all__ = [
    'EventTable',
    'EventCollection',
    'ChannelTransform',
    'QuantileGate',
    'RegionGate',
    'QuantileGateConfig',
    'RegionGateConfig',
    'GateSet',
    'GatingPipeline',
    'GatingResults',
    'gates',
    'transforms',
    'read_fcs',
    'load_collection',
    'export_gate_set',
    'load_gate_set',
    'estimate_quantile_threshold',
    'estimate_cluster_ellipse',
    'estimate_regression_band',
    'plot_gate',
    'plot_scatter',
    'plot_histogram',
    'exceptions'
]
