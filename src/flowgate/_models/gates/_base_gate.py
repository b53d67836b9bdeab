"""
Module for the Gate abstract base class
"""
from abc import ABC, abstractmethod
import numpy as np
import pandas as pd
from ...exceptions import ChannelNotFoundError


class Gate(ABC):
    """
    Represents a single gate: a membership predicate over one or two channels.
    Gates are not modified after creation, re-expressing a gate in another
    coordinate system returns a new gate.
    """
    def __init__(
            self,
            gate_name,
            channels
    ):
        self.gate_name = gate_name
        self.channels = list(channels)
        self.gate_type = None

    def get_channel_names(self):
        """
        Retrieve all gate channel labels in order

        :return: list of channel label strings
        """
        return list(self.channels)

    def _get_gate_events(self, events):
        """
        Extract the gate channels from an EventTable or a pandas DataFrame.

        :param events: EventTable or pandas DataFrame
        :return: 2-D NumPy array with one column per gate channel
        :raises ChannelNotFoundError: if a gate channel is missing
        """
        if isinstance(events, pd.DataFrame):
            for channel in self.channels:
                if channel not in events.columns:
                    raise ChannelNotFoundError(
                        "Channel %s required by gate %s was not found" % (channel, self.gate_name)
                    )
            return events[self.channels].to_numpy(dtype=np.float64)

        if not hasattr(events, "has_channel"):
            raise TypeError("Gate events must be an EventTable or a pandas DataFrame")

        for channel in self.channels:
            if not events.has_channel(channel):
                raise ChannelNotFoundError(
                    "Channel %s required by gate %s was not found" % (channel, self.gate_name)
                )

        return events.get_events(self.channels)

    @abstractmethod
    def apply(self, events):
        """
        Abstract method to apply gate to given events

        :param events: EventTable or pandas DataFrame containing event data
        :return: NumPy array of boolean values for each event (True is inside gate)
        """
        pass

    @abstractmethod
    def transform(self, channel_transform, direction='forward'):
        """
        Abstract method to re-express the gate in another coordinate system

        :param channel_transform: ChannelTransform instance
        :param direction: 'forward' to move the gate into the coordinates of
            channel_transform, 'inverse' to move it out of them
        :return: new Gate instance
        """
        pass

    @abstractmethod
    def get_boundary(self):
        """
        Abstract method to retrieve the gate boundary in the gate's coordinates
        """
        pass

    @abstractmethod
    def to_dict(self):
        """
        Abstract method to retrieve a JSON compatible dictionary describing the gate
        """
        pass
