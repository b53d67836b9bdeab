"""
flowgate.exceptions
~~~~~~~~~~~~~~~~~~~
This module contains the set of FlowGate exceptions and warnings.
"""


class FlowGateWarning(Warning):
    """A generic FlowGate warning"""
    pass


class UnmatchedSampleWarning(FlowGateWarning):
    """A sample in a gating summary has no matching row in the sample metadata."""
    pass


class FlowGateException(Exception):
    """A generic FlowGate exception"""
    pass


class ChannelNotFoundError(FlowGateException, KeyError):
    """A referenced channel does not exist in an EventTable or ChannelTransform."""
    pass


class InvalidProbabilityError(FlowGateException, ValueError):
    """A quantile probability outside of the (0, 1] interval was given."""
    pass


class InsufficientDataError(FlowGateException):
    """Too few events were available to fit a gate boundary or transform."""
    pass


class OutOfDomainError(FlowGateException):
    """A transform was evaluated outside the range where it is defined."""
    pass


class GateReferenceError(FlowGateException):
    """An error referencing a Gate instance in a GateSet occurred."""
    pass
