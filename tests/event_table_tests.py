"""
Unit tests for EventTable class
"""
import unittest
import numpy as np
import pandas as pd

import flowgate as fg
from flowgate.exceptions import ChannelNotFoundError, OutOfDomainError

from tests.test_config import (
    table_small,
    table_medium,
    scatter_channels,
    scatter_xform,
    fl1_xform,
    log_xform
)


class EventTableTestCase(unittest.TestCase):
    """Tests for creating & accessing EventTable objects"""
    def test_create_from_numpy(self):
        events = np.array([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]])
        table = fg.EventTable(events, channel_labels=['a', 'b'])

        self.assertEqual(table.event_count, 3)
        self.assertEqual(len(table), 3)
        self.assertListEqual(table.channels, ['a', 'b'])
        self.assertIsNone(table.transform)

    def test_create_from_dataframe(self):
        df = pd.DataFrame({'FSC-A': [1.0, 2.0], 'SSC-A': [3.0, 4.0]})
        table = fg.EventTable(df)

        self.assertListEqual(table.channels, ['FSC-A', 'SSC-A'])
        np.testing.assert_array_equal(table.get_channel_events('SSC-A'), [3.0, 4.0])

    def test_attributes_are_read_only(self):
        table = fg.EventTable(np.zeros((2, 2)), channel_labels=['a', 'b'], metadata={'$CYT': 'test'})

        table.channels.append('c')
        table.metadata['$CYT'] = 'changed'

        self.assertListEqual(table.channels, ['a', 'b'])
        self.assertEqual(table.metadata['$CYT'], 'test')
        self.assertFalse(table.has_channel('c'))

        with self.assertRaises(AttributeError):
            table.channels = ['x', 'y']
        with self.assertRaises(AttributeError):
            table.transform = scatter_xform

    def test_numpy_without_labels_raises(self):
        self.assertRaises(ValueError, fg.EventTable, np.zeros((2, 2)))

    def test_duplicate_labels_raises(self):
        self.assertRaises(ValueError, fg.EventTable, np.zeros((2, 2)), channel_labels=['a', 'a'])

    def test_label_count_mismatch_raises(self):
        self.assertRaises(ValueError, fg.EventTable, np.zeros((2, 3)), channel_labels=['a', 'b'])

    def test_source_data_is_copied(self):
        events = np.array([[1.0, 2.0], [3.0, 4.0]])
        table = fg.EventTable(events, channel_labels=['a', 'b'])
        events[0, 0] = 100.0

        self.assertEqual(table.get_channel_events('a')[0], 1.0)

    def test_returned_events_are_copies(self):
        values = table_small.get_channel_events('FSC-A')
        values[:] = -1.0

        self.assertFalse(np.any(table_small.get_channel_events('FSC-A') == -1.0))

    def test_get_events_column_order(self):
        events = table_small.get_events(['SSC-A', 'FSC-A'])

        np.testing.assert_array_equal(events[:, 0], table_small.get_channel_events('SSC-A'))
        np.testing.assert_array_equal(events[:, 1], table_small.get_channel_events('FSC-A'))

    def test_missing_channel_raises(self):
        self.assertRaises(ChannelNotFoundError, table_small.get_channel_events, 'PE-A')
        self.assertRaises(ChannelNotFoundError, table_small.get_events, ['FSC-A', 'PE-A'])

    def test_as_dataframe(self):
        df = table_small.as_dataframe()

        self.assertIsInstance(df, pd.DataFrame)
        self.assertListEqual(list(df.columns), scatter_channels)
        self.assertEqual(len(df), table_small.event_count)

    def test_iter_events(self):
        rows = list(table_small.iter_events())

        self.assertEqual(len(rows), table_small.event_count)
        np.testing.assert_array_equal(rows[5], table_small.get_events()[5])

    def test_subset_with_mask(self):
        mask = table_small.get_channel_events('FSC-A') > 50000
        sub_table = table_small.subset(mask)

        self.assertEqual(sub_table.event_count, mask.sum())
        self.assertListEqual(sub_table.channels, table_small.channels)
        self.assertDictEqual(sub_table.metadata, table_small.metadata)

    def test_subset_with_predicate(self):
        sub_table = table_small.subset(lambda df: (df['SSC-A'] > 10000).values)
        mask = table_small.get_channel_events('SSC-A') > 10000

        np.testing.assert_array_equal(sub_table.get_events(), table_small.get_events()[mask])

    def test_subset_bad_mask_raises(self):
        self.assertRaises(ValueError, table_small.subset, np.ones(3, dtype=bool))
        self.assertRaises(ValueError, table_small.subset, np.ones(table_small.event_count))

    def test_subset_empty(self):
        sub_table = table_small.subset(np.zeros(table_small.event_count, dtype=bool))

        self.assertEqual(sub_table.event_count, 0)
        self.assertEqual(sub_table.get_events().shape, (0, len(scatter_channels)))


class EventTableTransformTestCase(unittest.TestCase):
    """Tests for transforming EventTable objects"""
    def test_apply_transform_covered_channels(self):
        xform_table = table_medium.apply_transform(scatter_xform)

        self.assertEqual(xform_table.transform, scatter_xform)
        np.testing.assert_array_equal(
            xform_table.get_channel_events('FSC-A'),
            scatter_xform.forward('FSC-A', table_medium.get_channel_events('FSC-A'))
        )
        # FL1-A is not in the ChannelTransform
        np.testing.assert_array_equal(
            xform_table.get_channel_events('FL1-A'),
            table_medium.get_channel_events('FL1-A')
        )

    def test_original_table_unchanged(self):
        raw_events = table_medium.get_events()
        _ = table_medium.apply_transform(scatter_xform)

        self.assertIsNone(table_medium.transform)
        np.testing.assert_array_equal(table_medium.get_events(), raw_events)

    def test_apply_transform_skips_missing_channels(self):
        xform = fg.ChannelTransform({'FSC-A': log_xform, 'PE-A': log_xform})
        xform_table = table_medium.apply_transform(xform)

        self.assertEqual(xform_table.transform, xform)

    def test_apply_transform_strict_raises(self):
        xform = fg.ChannelTransform({'FSC-A': log_xform, 'PE-A': log_xform})

        self.assertRaises(ChannelNotFoundError, table_medium.apply_transform, xform, strict=True)

    def test_transform_twice_raises(self):
        xform_table = table_medium.apply_transform(scatter_xform)

        self.assertRaises(ValueError, xform_table.apply_transform, fl1_xform)

    def test_out_of_domain_raises(self):
        # FL1-A has negative values
        xform = fg.ChannelTransform({'FL1-A': log_xform})

        self.assertRaises(OutOfDomainError, table_medium.apply_transform, xform)

    def test_inverse_transform(self):
        xform_table = table_medium.apply_transform(scatter_xform)
        raw_table = xform_table.inverse_transform()

        self.assertIsNone(raw_table.transform)
        np.testing.assert_allclose(raw_table.get_events(), table_medium.get_events(), rtol=1e-9, atol=1e-6)

    def test_inverse_transform_raw_raises(self):
        self.assertRaises(ValueError, table_medium.inverse_transform)

    def test_subset_keeps_transform(self):
        xform_table = table_medium.apply_transform(scatter_xform)
        sub_table = xform_table.subset(np.ones(xform_table.event_count, dtype=bool))

        self.assertEqual(sub_table.transform, scatter_xform)
