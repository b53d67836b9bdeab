""" gates module """
from ._boundaries import EllipseBoundary, BandBoundary
from ._configs import QuantileGateConfig, RegionGateConfig
from ._gates import QuantileGate, RegionGate

__all__ = [
    'QuantileGate',
    'RegionGate',
    'EllipseBoundary',
    'BandBoundary',
    'QuantileGateConfig',
    'RegionGateConfig'
]
