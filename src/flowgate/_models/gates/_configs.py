"""
Configuration classes for fitting gates
"""
from ...exceptions import InvalidProbabilityError

# minimum events required for fitting region gates, unless given in the config
MIN_EVENTS_PER_CLUSTER = 10
MIN_EVENTS_BAND = 10


class QuantileGateConfig(object):
    """
    Options for fitting a QuantileGate.

    :param channel: channel label used for the gate
    :param probability: probability in the interval (0, 1]. Events at or below the
        probability quantile of the reference data are kept, e.g. 0.99 keeps events
        at or below the 99th percentile.
    :raises InvalidProbabilityError: if probability is not in (0, 1]
    """
    def __init__(self, channel, probability=0.99):
        try:
            probability = float(probability)
        except (TypeError, ValueError):
            raise InvalidProbabilityError("Probability must be a number, received %r" % (probability,))

        if not 0.0 < probability <= 1.0:
            raise InvalidProbabilityError("Probability must be in the interval (0, 1], received %r" % probability)

        self.channel = channel
        self.probability = probability

    def __repr__(self):
        return (
            f'{self.__class__.__name__}('
            f'{self.channel}, probability: {self.probability})'
        )


class RegionGateConfig(object):
    """
    Options for fitting a RegionGate.

    Two fitting methods are supported:

    - 'ellipse': a mixture of `cluster_count` bivariate Gaussian clusters is fitted and
      the ellipse covering `confidence_level` of the selected cluster is used.
    - 'band': a robust linear regression of the 2nd channel on the 1st channel is fitted
      and the band around the line covering `prediction_level` of the residuals is used
      (a singlet gate, e.g. channels=['FSC-H', 'FSC-A']).

    :param channels: list of 2 channel labels (x, y)
    :param method: 'ellipse' or 'band'
    :param cluster_count: number of clusters for the 'ellipse' method
    :param confidence_level: fraction of the selected cluster inside the ellipse, in (0, 1)
    :param min_bound: optional list of 2 lower bounds (or None), events with values below
        a bound are excluded before fitting
    :param target: optional 2-D location, the cluster with its mean closest to target is
        selected. By default, the cluster with the largest weight is selected.
    :param prediction_level: fraction of residuals inside the band for the 'band' method, in (0, 1)
    :param min_events: minimum number of events required for fitting. Defaults to
        10 per cluster for 'ellipse' and 10 for 'band'.
    :param random_seed: random seed for the cluster fitting
    """
    def __init__(
            self,
            channels,
            method='ellipse',
            cluster_count=1,
            confidence_level=0.95,
            min_bound=None,
            target=None,
            prediction_level=0.99,
            min_events=None,
            random_seed=1
    ):
        channels = list(channels)
        if len(channels) != 2:
            raise ValueError("RegionGateConfig requires exactly 2 channels")

        if method not in ['ellipse', 'band']:
            raise ValueError("method must be 'ellipse' or 'band'")

        if int(cluster_count) != cluster_count or cluster_count < 1:
            raise ValueError("cluster_count must be a positive integer")

        for level_name, level in [('confidence_level', confidence_level), ('prediction_level', prediction_level)]:
            if not 0.0 < level < 1.0:
                raise ValueError("%s must be in the interval (0, 1)" % level_name)

        if min_bound is not None:
            min_bound = list(min_bound)
            if len(min_bound) != 2:
                raise ValueError("min_bound must have a value (or None) for each channel")

        if target is not None:
            target = [float(t) for t in target]
            if len(target) != 2:
                raise ValueError("target must be a 2-D location")

        if min_events is None:
            if method == 'ellipse':
                min_events = MIN_EVENTS_PER_CLUSTER * int(cluster_count)
            else:
                min_events = MIN_EVENTS_BAND

        self.channels = channels
        self.method = method
        self.cluster_count = int(cluster_count)
        self.confidence_level = float(confidence_level)
        self.min_bound = min_bound
        self.target = target
        self.prediction_level = float(prediction_level)
        self.min_events = int(min_events)
        self.random_seed = random_seed

    def __repr__(self):
        return (
            f'{self.__class__.__name__}('
            f'{self.channels[0]} vs {self.channels[1]}, method: {self.method})'
        )
