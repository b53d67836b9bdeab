"""
EventCollection class
"""
import pandas as pd
from .event_table import EventTable


class EventCollection(object):
    """
    An ordered collection of named EventTable instances, one per sample, with
    an optional table of per-sample metadata (e.g. strain, timepoint, replicate).

    All EventTables in a collection share the same channel set and coordinate
    context. EventCollection instances are never modified, filtering or
    transforming returns a new collection.

    :param tables: dictionary of sample name -> EventTable, or a list of
        (sample name, EventTable) tuples. Sample order is preserved.
    :param metadata: optional pandas DataFrame of sample metadata, either with a
        'sample' column or indexed by sample name
    """
    def __init__(self, tables, metadata=None):
        if isinstance(tables, dict):
            tables = list(tables.items())

        self._tables = {}

        for sample_name, table in tables:
            if not isinstance(table, EventTable):
                raise TypeError("Sample %s must be an EventTable instance" % sample_name)
            if sample_name in self._tables:
                raise ValueError("Sample name %s is not unique" % sample_name)

            self._tables[sample_name] = table

        channel_set = None
        transform = None

        for i, (sample_name, table) in enumerate(self._tables.items()):
            if i == 0:
                channel_set = set(table.channels)
                transform = table.transform
                continue

            if set(table.channels) != channel_set:
                raise ValueError("Sample %s does not share the channel set of the collection" % sample_name)
            if table.transform != transform:
                raise ValueError("Sample %s is not in the coordinate context of the collection" % sample_name)

        self.transform = transform
        self._metadata = self.parse_metadata(metadata)

    @staticmethod
    def parse_metadata(metadata):
        """
        Validate a sample metadata DataFrame and index it by sample name.

        :param metadata: pandas DataFrame with a 'sample' column or indexed by sample name
        :return: pandas DataFrame indexed by sample name, or None
        """
        if metadata is None:
            return None

        if not isinstance(metadata, pd.DataFrame):
            raise TypeError("'metadata' must be a pandas DataFrame")

        if 'sample' in metadata.columns:
            metadata = metadata.set_index('sample')
        else:
            metadata = metadata.copy()

        metadata.index.name = 'sample'

        if not metadata.index.is_unique:
            raise ValueError("Sample names in metadata must be unique")

        return metadata

    def __repr__(self):
        return (
            f'{self.__class__.__name__}('
            f'{len(self._tables)} samples, {len(self.channels)} channels)'
        )

    def __len__(self):
        return len(self._tables)

    def __iter__(self):
        return iter(list(self._tables.items()))

    def __contains__(self, sample_name):
        return sample_name in self._tables

    @property
    def sample_names(self):
        """List of sample names in collection order"""
        return list(self._tables.keys())

    @property
    def channels(self):
        """List of channel labels (in the order of the first sample)"""
        if len(self._tables) == 0:
            return []

        return list(next(iter(self._tables.values())).channels)

    @property
    def metadata(self):
        """Copy of the sample metadata DataFrame (indexed by sample name), or None"""
        if self._metadata is None:
            return None

        return self._metadata.copy()

    def get_table(self, sample_name):
        """
        Retrieve the EventTable for a sample.

        :param sample_name: text string of a sample name
        :return: EventTable instance
        """
        try:
            return self._tables[sample_name]
        except KeyError:
            raise KeyError("Sample %s was not found in the EventCollection" % sample_name)

    def get_event_counts(self):
        """
        Retrieve the event count of every sample.

        :return: pandas Series of event counts indexed by sample name
        """
        return pd.Series(
            [t.event_count for t in self._tables.values()],
            index=pd.Index(self.sample_names, name='sample'),
            name='event_count'
        )

    def _new_collection(self, tables):
        if self._metadata is None:
            metadata = None
        else:
            keep = [name for name, _ in tables if name in self._metadata.index]
            metadata = self._metadata.loc[keep]

        return EventCollection(tables, metadata=metadata)

    def filter(self, sample_names=None, predicate=None):
        """
        Returns a new EventCollection with a subset of the samples. Sample order
        of this collection is kept.

        :param sample_names: list of sample names to keep
        :param predicate: callable receiving a sample's metadata row (pandas Series)
            and returning True to keep the sample. Requires sample metadata.
        :return: new EventCollection
        """
        if sample_names is not None:
            for name in sample_names:
                if name not in self._tables:
                    raise KeyError("Sample %s was not found in the EventCollection" % name)
            keep = set(sample_names)
        else:
            keep = set(self._tables.keys())

        if predicate is not None:
            if self._metadata is None:
                raise ValueError("Filtering by predicate requires sample metadata")

            keep = {
                name for name in keep
                if name in self._metadata.index and predicate(self._metadata.loc[name])
            }

        return self._new_collection([(n, t) for n, t in self._tables.items() if n in keep])

    def subset(self, masks):
        """
        Returns a new EventCollection where each sample's events are subset by a Boolean mask.

        :param masks: dictionary of sample name -> Boolean event mask. Every sample
            in the collection must have a mask.
        :return: new EventCollection
        """
        tables = []

        for name, table in self._tables.items():
            if name not in masks:
                raise KeyError("No event mask was given for sample %s" % name)

            tables.append((name, table.subset(masks[name])))

        return self._new_collection(tables)

    def apply_transform(self, channel_transform, strict=False):
        """
        Returns a new EventCollection with every EventTable transformed.

        :param channel_transform: ChannelTransform instance
        :param strict: see EventTable.apply_transform
        :return: new EventCollection
        """
        return self._new_collection(
            [(n, t.apply_transform(channel_transform, strict=strict)) for n, t in self._tables.items()]
        )

    def inverse_transform(self):
        """
        Returns a new EventCollection with every EventTable mapped back to raw coordinates.

        :return: new EventCollection
        """
        return self._new_collection([(n, t.inverse_transform()) for n, t in self._tables.items()])
