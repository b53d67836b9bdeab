"""
gates Module
"""
import numpy as np
from ._base_gate import Gate
from ._boundaries import boundary_from_dict
from ._configs import QuantileGateConfig, RegionGateConfig
from ..transforms._channel_transform import ChannelTransform
from ..._utils import boundary_utils, transform_utils


_OPPOSITE_DIRECTION = {'forward': 'inverse', 'inverse': 'forward'}


def _check_direction(direction):
    if direction not in _OPPOSITE_DIRECTION:
        raise ValueError("direction must be 'forward' or 'inverse'")


def _pool_reference_events(reference, channels):
    # an EventTable, or the events of all samples of an EventCollection
    if hasattr(reference, 'get_events'):
        return reference.get_events(channels)

    events = [table.get_events(channels) for _, table in reference]

    if len(events) == 0:
        return np.empty((0, len(channels)), dtype=np.float64)

    return np.vstack(events)


class QuantileGate(Gate):
    """
    Represents a 1-D gate keeping events at or below a threshold value. The
    threshold is typically fitted as a quantile of reference data to exclude
    debris or junk events at the top of a scatter channel.

    :param gate_name: text string for the name of the gate
    :param channel: channel label used for the gate
    :param threshold: events with a channel value at or below the threshold are inside the gate
    :param probability: the probability the threshold was fitted for (informational only)
    """
    def __init__(
            self,
            gate_name,
            channel,
            threshold,
            probability=None
    ):
        super().__init__(
            gate_name,
            [channel]
        )
        self.gate_type = "QuantileGate"
        self.channel = channel
        self.threshold = float(threshold)
        self.probability = probability

    def __repr__(self):
        return (
            f'{self.__class__.__name__}('
            f'{self.gate_name}, {self.channel} <= {self.threshold})'
        )

    @classmethod
    def fit(cls, gate_name, reference, config):
        """
        Fit a QuantileGate to reference data. The threshold is the `config.probability`
        quantile of the channel values, using linear interpolation between order
        statistics.

        :param gate_name: text string for the name of the gate
        :param reference: EventTable, or EventCollection (events of all samples are pooled)
        :param config: QuantileGateConfig instance
        :return: QuantileGate instance in the coordinates of the reference data
        :raises ChannelNotFoundError: if the channel is missing from the reference data
        :raises InsufficientDataError: if the reference data has no events
        """
        if not isinstance(config, QuantileGateConfig):
            raise TypeError("config must be a QuantileGateConfig instance")

        values = transform_utils.pool_channel_events(reference, config.channel)
        threshold = boundary_utils.estimate_quantile_threshold(values, config.probability)

        return cls(gate_name, config.channel, threshold, probability=config.probability)

    def apply(self, events):
        """
        Apply gate to events in an EventTable or pandas DataFrame.

        :param events: EventTable or pandas DataFrame with a column for the gate channel
        :return: NumPy array of boolean values for each event (True is inside gate)
        """
        values = self._get_gate_events(events)[:, 0]

        return values <= self.threshold

    def transform(self, channel_transform, direction='forward'):
        """
        Re-express the gate in another coordinate system. The threshold is mapped
        through the transform, which preserves membership for the monotonically
        increasing transforms in the `transforms` module up to floating point
        rounding. Values within a few ulps above the threshold may map onto the
        transformed threshold and so become members.

        :param channel_transform: ChannelTransform instance
        :param direction: 'forward' or 'inverse'
        :return: new QuantileGate instance
        """
        _check_direction(direction)

        threshold = self.threshold

        if self.channel in channel_transform:
            if direction == 'forward':
                threshold = channel_transform.forward(self.channel, threshold)
            else:
                threshold = channel_transform.inverse(self.channel, threshold)

        return QuantileGate(self.gate_name, self.channel, threshold, probability=self.probability)

    def get_boundary(self):
        """
        Retrieve the gate threshold.

        :return: float threshold value
        """
        return self.threshold

    def to_dict(self):
        return {
            'gate_type': self.gate_type,
            'gate_name': self.gate_name,
            'channel': self.channel,
            'threshold': self.threshold,
            'probability': self.probability
        }


class RegionGate(Gate):
    """
    Represents a 2-D gate where events inside a closed boundary are kept. The
    boundary is an EllipseBoundary (e.g. a cell population found by clustering)
    or a BandBoundary (e.g. a singlet gate around a regression line).

    The boundary geometry is stored in the coordinates it was fitted in. When a
    RegionGate is re-expressed in another coordinate system, the geometry is kept
    and the coordinate chain is recorded instead: events given to `apply` are
    mapped back through the chain before testing them against the boundary. This
    gives the same membership in every coordinate system.

    :param gate_name: text string for the name of the gate
    :param channels: list of 2 channel labels (x, y)
    :param boundary: EllipseBoundary or BandBoundary instance
    :param coordinate_chain: sequence of (ChannelTransform, direction) tuples leading
        from the boundary coordinates to the gate coordinates. Empty by default.
    """
    def __init__(
            self,
            gate_name,
            channels,
            boundary,
            coordinate_chain=None
    ):
        super().__init__(
            gate_name,
            channels
        )
        self.gate_type = "RegionGate"

        if len(self.channels) != 2:
            raise ValueError('Region gates must have exactly 2 channels')

        self.boundary = boundary

        if coordinate_chain is None:
            coordinate_chain = ()

        for xform, direction in coordinate_chain:
            if not isinstance(xform, ChannelTransform):
                raise TypeError("Coordinate chain entries must contain a ChannelTransform instance")
            _check_direction(direction)

        self.coordinate_chain = tuple(coordinate_chain)

    def __repr__(self):
        return (
            f'{self.__class__.__name__}('
            f'{self.gate_name}, {self.boundary.__class__.__name__})'
        )

    @classmethod
    def fit(cls, gate_name, reference, config, estimator=None):
        """
        Fit a RegionGate to reference data. Events with non-finite values, or values
        below `config.min_bound`, are excluded before fitting. The boundary is located
        by the estimator, which defaults to the estimator for `config.method`.

        :param gate_name: text string for the name of the gate
        :param reference: EventTable, or EventCollection (events of all samples are pooled)
        :param config: RegionGateConfig instance
        :param estimator: optional function taking a 2-D NumPy array of events & the
            config and returning a boundary instance
        :return: RegionGate instance in the coordinates of the reference data
        :raises ChannelNotFoundError: if a channel is missing from the reference data
        :raises InsufficientDataError: if there are too few events for the estimator
        """
        if not isinstance(config, RegionGateConfig):
            raise TypeError("config must be a RegionGateConfig instance")

        points = _pool_reference_events(reference, config.channels)
        keep = np.all(np.isfinite(points), axis=1)

        if config.min_bound is not None:
            for i, bound in enumerate(config.min_bound):
                if bound is not None:
                    keep &= points[:, i] >= bound

        points = points[keep]

        if estimator is None:
            estimator = boundary_utils.get_default_estimator(config.method)

        boundary = estimator(points, config)

        return cls(gate_name, config.channels, boundary)

    def _to_boundary_coordinates(self, points):
        for xform, direction in reversed(self.coordinate_chain):
            points = xform.transform_points(self.channels, points, direction=_OPPOSITE_DIRECTION[direction])

        return points

    def _from_boundary_coordinates(self, points):
        for xform, direction in self.coordinate_chain:
            points = xform.transform_points(self.channels, points, direction=direction)

        return points

    def apply(self, events):
        """
        Apply gate to events in an EventTable or pandas DataFrame.

        :param events: EventTable or pandas DataFrame with columns for the gate channels
        :return: NumPy array of boolean values for each event (True is inside gate)
        :raises OutOfDomainError: if events cannot be mapped back to the boundary coordinates
        """
        points = self._get_gate_events(events)

        if points.shape[0] == 0:
            return np.zeros(0, dtype=bool)

        points = self._to_boundary_coordinates(points)

        return np.asarray(self.boundary.contains(points), dtype=bool)

    def transform(self, channel_transform, direction='forward'):
        """
        Re-express the gate in another coordinate system. A transform that cancels
        the last step of the coordinate chain removes that step.

        :param channel_transform: ChannelTransform instance
        :param direction: 'forward' or 'inverse'
        :return: new RegionGate instance
        """
        _check_direction(direction)

        chain = list(self.coordinate_chain)

        if not any(c in channel_transform for c in self.channels):
            # gate channels are unaffected
            pass
        elif len(chain) > 0 and chain[-1] == (channel_transform, _OPPOSITE_DIRECTION[direction]):
            chain.pop()
        else:
            chain.append((channel_transform, direction))

        return RegionGate(self.gate_name, self.channels, self.boundary, coordinate_chain=chain)

    def get_boundary(self, point_count=100):
        """
        Retrieve vertices along the gate boundary, in the gate's coordinates.

        :param point_count: number of vertices
        :return: 2-D NumPy array of vertices (x, y)
        """
        vertices = self.boundary.get_vertices(point_count)

        return self._from_boundary_coordinates(vertices)

    def to_dict(self):
        return {
            'gate_type': self.gate_type,
            'gate_name': self.gate_name,
            'channels': list(self.channels),
            'boundary': self.boundary.to_dict(),
            'coordinate_chain': [
                {'transform': xform.to_dict(), 'direction': direction}
                for xform, direction in self.coordinate_chain
            ]
        }


def gate_from_dict(gate_dict):
    """
    Create a Gate instance from a dictionary created by a gate's `to_dict` method.

    :param gate_dict: dictionary describing the gate
    :return: QuantileGate or RegionGate instance
    """
    gate_type = gate_dict['gate_type']

    if gate_type == 'QuantileGate':
        return QuantileGate(
            gate_dict['gate_name'],
            gate_dict['channel'],
            gate_dict['threshold'],
            probability=gate_dict.get('probability')
        )
    elif gate_type == 'RegionGate':
        chain = [
            (ChannelTransform.from_dict(step['transform']), step['direction'])
            for step in gate_dict.get('coordinate_chain', [])
        ]
        return RegionGate(
            gate_dict['gate_name'],
            gate_dict['channels'],
            boundary_from_dict(gate_dict['boundary']),
            coordinate_chain=chain
        )
    else:
        raise ValueError("Unsupported gate type: %s" % gate_type)
