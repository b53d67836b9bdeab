"""
Utility functions related to estimating transforms from event data.
"""
import warnings
import numpy as np
from .._models.transforms._transforms import \
    LinearTransform, \
    LogTransform, \
    LogicleTransform, \
    AsinhTransform
from ..exceptions import InsufficientDataError, FlowGateWarning


def pool_channel_events(reference, channel):
    """
    Retrieve the values of a channel from an EventTable, or pooled across all
    samples of an EventCollection (in sample order).

    :param reference: EventTable or EventCollection
    :param channel: channel label
    :return: 1-D NumPy array of channel values
    """
    if hasattr(reference, 'get_channel_events'):
        return reference.get_channel_events(channel)

    values = [table.get_channel_events(channel) for _, table in reference]

    if len(values) == 0:
        return np.array([], dtype=np.float64)

    return np.concatenate(values)


def estimate_logicle_width(values, top, param_m, neg_quantile=0.05, channel=None):
    """
    Estimate the logicle W parameter from the negative values of a channel.

    :param values: 1-D NumPy array of channel values
    :param top: the logicle T parameter
    :param param_m: the logicle M parameter
    :param neg_quantile: quantile of the negative values used as the reference point
    :param channel: channel label, used only for warning messages
    :return: W value in the interval [0, M / 2]
    """
    negative_values = values[values < 0]

    if len(negative_values) == 0:
        return 0.0

    r = np.quantile(negative_values, neg_quantile)
    param_w = (param_m - np.log10(top / abs(r))) / 2.0

    if param_w < 0:
        warnings.warn(
            "Estimated logicle width for channel %s is negative (%.4f), using 0" % (channel, param_w),
            FlowGateWarning
        )
        param_w = 0.0
    elif param_w > param_m / 2.0:
        warnings.warn(
            "Estimated logicle width for channel %s exceeds M / 2 (%.4f), using M / 2" % (channel, param_w),
            FlowGateWarning
        )
        param_w = param_m / 2.0

    return float(param_w)


def estimate_channel_transform(
        values,
        transform_class,
        param_m=4.5,
        param_a=0.0,
        neg_quantile=0.05,
        channel=None
):
    """
    Estimate a single Transform instance from the values of one channel. The top
    of scale parameter is the maximum channel value for every transform type.

    :param values: 1-D NumPy array of channel values
    :param transform_class: Transform sub-class reference
    :param param_m: number of decades (logicle, log & asinh)
    :param param_a: additional negative decades (logicle & asinh)
    :param neg_quantile: quantile of negative values used for estimating logicle W
    :param channel: channel label, used only for error messages
    :return: Transform instance
    """
    values = np.asarray(values, dtype=np.float64)
    values = values[np.isfinite(values)]

    if len(values) == 0:
        raise InsufficientDataError("Cannot estimate a transform for channel %s without events" % channel)

    top = float(values.max())

    if top <= 0:
        raise InsufficientDataError(
            "Cannot estimate a transform for channel %s, it has no positive values" % channel
        )

    if transform_class == LinearTransform:
        xform = LinearTransform(param_t=top, param_a=0.0)
    elif transform_class == LogTransform:
        xform = LogTransform(param_t=top, param_m=param_m)
    elif transform_class == LogicleTransform:
        param_w = estimate_logicle_width(values, top, param_m, neg_quantile=neg_quantile, channel=channel)
        xform = LogicleTransform(param_t=top, param_w=param_w, param_m=param_m, param_a=param_a)
    elif transform_class == AsinhTransform:
        xform = AsinhTransform(param_t=top, param_m=param_m, param_a=param_a)
    else:
        raise NotImplementedError("Estimating %s instances is not yet supported." % transform_class.__name__)

    return xform
