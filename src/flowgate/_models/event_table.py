"""
EventTable class
"""
import numpy as np
import pandas as pd
from .transforms._channel_transform import ChannelTransform
from ..exceptions import ChannelNotFoundError


class EventTable(object):
    """
    Represents the events of a single acquisition as an immutable table of
    float64 values, one row per event and one column per channel.

    An EventTable records the coordinate context of its values: the `transform`
    property is None for raw values, or the ChannelTransform the values were
    transformed with. Transforming or subsetting an EventTable always returns a
    new instance, the original is never modified.

    :param data: pandas DataFrame (column labels are used as channel labels) or a
        2-D NumPy array of event data
    :param channel_labels: list of channel labels, required if data is a NumPy array.
        If given with a DataFrame, the columns are re-labelled.
    :param transform: ChannelTransform instance the values are expressed in, None for raw values
    :param metadata: dictionary of acquisition metadata (e.g. FCS keywords)
    """
    def __init__(self, data, channel_labels=None, transform=None, metadata=None):
        if isinstance(data, pd.DataFrame):
            events = data.to_numpy(dtype=np.float64, copy=True)
            if channel_labels is None:
                channel_labels = [str(c) for c in data.columns]
        elif isinstance(data, np.ndarray):
            if channel_labels is None:
                raise ValueError("'channel_labels' is required for a NumPy array")
            events = np.array(data, dtype=np.float64, copy=True)
            if events.ndim == 1 and len(channel_labels) == 1:
                events = events.reshape(-1, 1)
        else:
            raise TypeError("'data' must be a pandas DataFrame or a NumPy array")

        if events.ndim != 2:
            raise ValueError("Event data must be 2-dimensional")

        channel_labels = list(channel_labels)

        if len(channel_labels) != events.shape[1]:
            raise ValueError(
                "Found %d channel labels for %d channels of event data" % (len(channel_labels), events.shape[1])
            )

        if len(set(channel_labels)) != len(channel_labels):
            raise ValueError("Channel labels must be unique")

        if transform is not None and not isinstance(transform, ChannelTransform):
            raise TypeError("'transform' must be a ChannelTransform instance or None")

        events.setflags(write=False)

        self._events = events
        self._channel_lut = {label: i for i, label in enumerate(channel_labels)}
        self._channels = channel_labels
        self._transform = transform

        if metadata is None:
            self._metadata = {}
        else:
            self._metadata = dict(metadata)

    def __repr__(self):
        if self.transform is None:
            coords = 'raw'
        else:
            coords = 'transformed'

        return (
            f'{self.__class__.__name__}('
            f'{len(self.channels)} channels, {self.event_count} events, {coords})'
        )

    def __len__(self):
        return self.event_count

    @property
    def channels(self):
        """Copy of the list of channel labels, in column order"""
        return list(self._channels)

    @property
    def transform(self):
        """ChannelTransform the values are expressed in, None for raw values"""
        return self._transform

    @property
    def metadata(self):
        """Copy of the acquisition metadata dictionary"""
        return dict(self._metadata)

    @property
    def event_count(self):
        """Number of events in the table"""
        return self._events.shape[0]

    def _get_channel_index(self, channel):
        try:
            return self._channel_lut[channel]
        except KeyError:
            raise ChannelNotFoundError("Channel %s was not found in the EventTable" % channel)

    def has_channel(self, channel):
        """
        Test whether a channel exists in the EventTable.

        :param channel: channel label
        :return: True if the channel exists
        """
        return channel in self._channel_lut

    def get_channel_events(self, channel):
        """
        Returns a copy of the event values for a single channel.

        :param channel: channel label
        :return: 1-D NumPy array of channel values
        :raises ChannelNotFoundError: if the channel does not exist
        """
        return self._events[:, self._get_channel_index(channel)].copy()

    def get_events(self, channels=None):
        """
        Returns a copy of the event data.

        :param channels: optional list of channel labels for the columns and their order
        :return: 2-D NumPy array of event data
        :raises ChannelNotFoundError: if any channel does not exist
        """
        if channels is None:
            return self._events.copy()

        col_indices = [self._get_channel_index(c) for c in channels]

        return self._events[:, col_indices]

    def as_dataframe(self, channels=None):
        """
        Returns a copy of the event data as a pandas DataFrame with channel labels as columns.

        :param channels: optional list of channel labels for the columns and their order
        :return: pandas DataFrame
        """
        if channels is None:
            channels = self.channels

        return pd.DataFrame(self.get_events(channels), columns=list(channels))

    def iter_events(self):
        """
        Iterate over events, yielding one 1-D array of values (in channel order) per event.
        """
        for row in self._events:
            yield row.copy()

    def _copy_with_events(self, events, transform):
        new_table = EventTable.__new__(EventTable)
        events.setflags(write=False)
        new_table._events = events
        new_table._channel_lut = dict(self._channel_lut)
        new_table._channels = list(self._channels)
        new_table._transform = transform
        new_table._metadata = dict(self._metadata)

        return new_table

    def subset(self, mask_or_predicate):
        """
        Returns a new EventTable containing the events selected by a Boolean mask.

        :param mask_or_predicate: Boolean array with one value per event, or a callable
            taking the table's DataFrame and returning such an array
        :return: new EventTable with the same channels and coordinate context
        """
        if callable(mask_or_predicate):
            mask = mask_or_predicate(self.as_dataframe())
        else:
            mask = mask_or_predicate

        mask = np.asarray(mask)

        if mask.dtype != bool or mask.shape != (self.event_count,):
            raise ValueError("Event mask must be a Boolean array with one value per event")

        return self._copy_with_events(self._events[mask], self.transform)

    def apply_transform(self, channel_transform, strict=False):
        """
        Returns a new EventTable with channel values transformed. Channels of the table
        that are not covered by the ChannelTransform are left unchanged.

        :param channel_transform: ChannelTransform instance
        :param strict: if True, a ChannelTransform channel missing from the table raises
            a ChannelNotFoundError. If False (default), such channels are skipped.
        :return: new EventTable in the coordinate context of channel_transform
        :raises OutOfDomainError: if any event value is outside a transform's domain
        """
        if not isinstance(channel_transform, ChannelTransform):
            raise TypeError("'channel_transform' must be a ChannelTransform instance")

        if self.transform is not None:
            raise ValueError("EventTable is already transformed, call inverse_transform first")

        events = self._events.copy()

        for channel in channel_transform.channels:
            if channel not in self._channel_lut:
                if strict:
                    raise ChannelNotFoundError("Channel %s was not found in the EventTable" % channel)
                continue

            idx = self._channel_lut[channel]
            events[:, idx] = channel_transform.forward(channel, events[:, idx])

        return self._copy_with_events(events, channel_transform)

    def inverse_transform(self):
        """
        Returns a new EventTable with values mapped back to raw coordinates.

        :return: new EventTable with no transform
        """
        if self.transform is None:
            raise ValueError("EventTable has no transform to invert")

        events = self._events.copy()

        for channel in self.transform.channels:
            if channel not in self._channel_lut:
                continue

            idx = self._channel_lut[channel]
            events[:, idx] = self.transform.inverse(channel, events[:, idx])

        return self._copy_with_events(events, None)
