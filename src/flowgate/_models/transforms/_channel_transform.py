"""
ChannelTransform class
"""
import copy
import numpy as np
from ._base_transform import Transform
from . import _transforms
from ..._utils import transform_utils
from ...exceptions import ChannelNotFoundError

_TRANSFORM_CLASSES = {
    'LinearTransform': _transforms.LinearTransform,
    'LogTransform': _transforms.LogTransform,
    'LogicleTransform': _transforms.LogicleTransform,
    'AsinhTransform': _transforms.AsinhTransform
}


class ChannelTransform(object):
    """
    A ChannelTransform maps channel labels to Transform instances. It is the
    coordinate context shared by EventTable, Gate, and GateSet instances: event
    values and gate boundaries are either raw (no ChannelTransform) or expressed
    in exactly one ChannelTransform.

    Channels without a Transform are left unchanged when the ChannelTransform is
    applied to an EventTable.

    :param transform_lut: dictionary where keys are channel labels and values are
        Transform instances. Each channel receives its own copy of the Transform.
    """
    def __init__(self, transform_lut):
        if len(transform_lut) == 0:
            raise ValueError("A ChannelTransform requires at least one channel")

        self._transform_lut = {}

        for channel, xform in transform_lut.items():
            if not isinstance(xform, Transform):
                raise TypeError("Transform for channel %s must be a sub-class of the Transform class" % channel)

            self._transform_lut[channel] = copy.deepcopy(xform)

    def __repr__(self):
        return (
            f'{self.__class__.__name__}('
            f'{len(self._transform_lut)} channels)'
        )

    def __contains__(self, channel):
        return channel in self._transform_lut

    def __len__(self):
        return len(self._transform_lut)

    def __eq__(self, other):
        if not isinstance(other, ChannelTransform):
            return False

        return self._transform_lut == other._transform_lut

    def __hash__(self):
        return hash(tuple(sorted((c, hash(x)) for c, x in self._transform_lut.items())))

    @property
    def channels(self):
        """List of channel labels covered by the ChannelTransform"""
        return list(self._transform_lut.keys())

    def get_transform(self, channel):
        """
        Retrieve the Transform instance for a channel.

        :param channel: channel label
        :return: Transform instance
        :raises ChannelNotFoundError: if the channel has no transform
        """
        try:
            return self._transform_lut[channel]
        except KeyError:
            raise ChannelNotFoundError("Channel %s is not defined in the ChannelTransform" % channel)

    def forward(self, channel, values):
        """
        Transform values for the given channel.

        :param channel: channel label
        :param values: scalar or NumPy array of raw values
        :return: transformed values (scalar or NumPy array matching the input)
        :raises OutOfDomainError: if values are outside the transform domain
        """
        return self.get_transform(channel).apply(values)

    def inverse(self, channel, values):
        """
        Map transformed values for the given channel back to raw values.

        :param channel: channel label
        :param values: scalar or NumPy array of transformed values
        :return: raw values (scalar or NumPy array matching the input)
        :raises OutOfDomainError: if values are outside the inverse transform domain
        """
        return self.get_transform(channel).inverse(values)

    def transform_points(self, channels, points, direction='forward'):
        """
        Transform a 2-D array of points whose columns correspond to the given
        channels. Columns for channels not covered by the ChannelTransform are
        returned unchanged.

        :param channels: list of channel labels, one per column of points
        :param points: 2-D NumPy array of points
        :param direction: 'forward' or 'inverse'
        :return: new 2-D NumPy array
        """
        if direction not in ['forward', 'inverse']:
            raise ValueError("direction must be 'forward' or 'inverse'")

        points = np.array(points, dtype=np.float64, copy=True)

        for i, channel in enumerate(channels):
            if channel not in self._transform_lut:
                continue

            if direction == 'forward':
                points[:, i] = self.forward(channel, points[:, i])
            else:
                points[:, i] = self.inverse(channel, points[:, i])

        return points

    def to_dict(self):
        """
        Retrieve a JSON compatible dictionary describing the ChannelTransform.

        :return: dictionary where keys are channel labels
        """
        return {
            channel: {
                'transform_type': xform.__class__.__name__,
                'params': xform.get_params()
            } for channel, xform in self._transform_lut.items()
        }

    @classmethod
    def from_dict(cls, transform_dict):
        """
        Create a ChannelTransform from a dictionary created by `to_dict`.

        :param transform_dict: dictionary where keys are channel labels
        :return: ChannelTransform instance
        """
        transform_lut = {}

        for channel, xform_info in transform_dict.items():
            try:
                xform_class = _TRANSFORM_CLASSES[xform_info['transform_type']]
            except KeyError:
                raise ValueError("Unsupported transform type: %s" % xform_info['transform_type'])

            transform_lut[channel] = xform_class(**xform_info['params'])

        return cls(transform_lut)

    @classmethod
    def estimate(
            cls,
            reference,
            channels,
            transform_class=_transforms.LogicleTransform,
            param_m=4.5,
            param_a=0.0,
            neg_quantile=0.05
    ):
        """
        Estimate a ChannelTransform from representative event data. For the
        LogicleTransform, parameters are estimated per channel as follows:

        - T: the maximum channel value
        - W: (M - log10(T / |r|)) / 2, where r is the `neg_quantile` quantile of
          the negative channel values (W is 0 when there are no negative values
          and is clipped to the [0, M / 2] interval)
        - M & A: fixed at the given values

        Other Transform classes use the channel maximum as their top of scale
        parameter together with the given param_m & param_a where applicable.

        :param reference: EventTable or EventCollection. A collection's events
            are pooled across its samples.
        :param channels: list of channel labels to estimate transforms for
        :param transform_class: Transform sub-class to estimate
        :param param_m: number of decades (logicle, log & asinh)
        :param param_a: additional negative decades (logicle & asinh)
        :param neg_quantile: quantile of negative values used for estimating logicle W
        :return: ChannelTransform instance
        :raises ChannelNotFoundError: if a channel is not found in the reference data
        :raises InsufficientDataError: if the reference data has no events
        """
        transform_lut = {}

        for channel in channels:
            values = transform_utils.pool_channel_events(reference, channel)
            transform_lut[channel] = transform_utils.estimate_channel_transform(
                values,
                transform_class,
                param_m=param_m,
                param_a=param_a,
                neg_quantile=neg_quantile,
                channel=channel
            )

        return cls(transform_lut)
