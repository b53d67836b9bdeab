"""
Abstract base class for Transform classes
"""

from abc import ABC, abstractmethod
from copy import copy
import numpy as np
from ...exceptions import OutOfDomainError


class Transform(ABC):
    """
    Abstract base class for all transformation classes.

    Sub-classes implement `_apply` and `_inverse`. The public `apply` and
    `inverse` methods wrap these and raise an OutOfDomainError when finite
    input values produce non-finite results.
    """
    def __init__(self):
        self.transform_type = self.__class__.__name__

    @abstractmethod
    def _apply(self, events):
        """
        Abstract method for applying the transform to an array of event values.

        :param events: NumPy array of event data
        """
        return

    @abstractmethod
    def _inverse(self, events):
        """
        Abstract method for applying the inverse transform to an array of event values.

        :param events: NumPy array of transformed event data
        """
        return

    @staticmethod
    def _prepare(events):
        # ascontiguousarray promotes 0-d input to 1-d
        is_scalar = np.ndim(events) == 0
        events = np.ascontiguousarray(events, dtype=np.float64)

        if is_scalar:
            events = events.reshape(1)

        return events, is_scalar

    @staticmethod
    def _check_domain(events, new_events, direction):
        bad_values = np.logical_and(np.isfinite(events), ~np.isfinite(new_events))

        if bad_values.any():
            raise OutOfDomainError(
                "%d value(s) are outside the domain of the %s transform (first: %r)"
                % (bad_values.sum(), direction, events[bad_values].flat[0])
            )

    def apply(self, events):
        """
        Apply transform to given events.

        :param events: NumPy array of event data
        :return: NumPy array of transformed events
        :raises OutOfDomainError: if any finite event value maps to a non-finite value
        """
        events, is_scalar = self._prepare(events)

        with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
            new_events = np.asarray(self._apply(events), dtype=np.float64)

        self._check_domain(events, new_events, 'forward')

        if is_scalar:
            return float(new_events[0])

        return new_events

    def inverse(self, events):
        """
        Apply the inverse transform to given events.

        :param events: NumPy array of transformed event data
        :return: NumPy array of inversely transformed events
        :raises OutOfDomainError: if any finite event value maps to a non-finite value
        """
        events, is_scalar = self._prepare(events)

        with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
            new_events = np.asarray(self._inverse(events), dtype=np.float64)

        self._check_domain(events, new_events, 'inverse')

        if is_scalar:
            return float(new_events[0])

        return new_events

    def get_params(self):
        """
        Retrieve the transform parameters.

        :return: dictionary of parameter names & values
        """
        return {k: v for k, v in self.__dict__.items() if k.startswith('param_')}

    def __eq__(self, other):
        """Tests where 2 transforms share the same attributes."""
        if self.__class__ == other.__class__:
            this_attr = copy(self.__dict__)
            other_attr = copy(other.__dict__)

            # also ignore 'private' attributes
            this_delete = [k for k in this_attr.keys() if k.startswith('_')]
            other_delete = [k for k in other_attr.keys() if k.startswith('_')]
            for k in this_delete:
                del this_attr[k]
            for k in other_delete:
                del other_attr[k]

            return this_attr == other_attr
        else:
            return False

    def __hash__(self):
        return hash((self.__class__.__name__, tuple(sorted(self.get_params().items()))))
