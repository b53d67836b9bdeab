'''
Unit tests for plotting functions
'''
import unittest

import numpy as np
from bokeh.plotting import figure as bk_Figure
import flowgate as fg

from tests.test_config import (
    table_medium,
    table_large,
    scatter_xform,
    fsc_quantile_gate,
    population_gate,
    singlet_gate
)


class PlotTestCase(unittest.TestCase):
    '''
    Tests for plot functions

    NOTE: Due to the difficulty of introspecting figures and images at a
          pixel-level, this TestCase only tests that plots are returned
          from plotting functions.
    '''
    def test_plot_scatter_zero_points(self):
        arr = np.array([], float)
        p = fg.plot_scatter(arr, arr)

        self.assertIsInstance(p, bk_Figure)

    def test_plot_scatter_one_point(self):
        arr = np.array([1., ], float)
        p = fg.plot_scatter(arr, arr)

        self.assertIsInstance(p, bk_Figure)

    def test_plot_scatter_highlight(self):
        x = table_medium.get_channel_events('FSC-A')
        y = table_medium.get_channel_events('SSC-A')
        p = fg.plot_scatter(x, y, x_label='FSC-A', y_label='SSC-A', highlight_mask=x > 50000)

        self.assertIsInstance(p, bk_Figure)

    def test_plot_histogram(self):
        p = fg.plot_histogram(table_medium.get_channel_events('FSC-A'), x_label='FSC-A')

        self.assertIsInstance(p, bk_Figure)

    def test_plot_quantile_gate(self):
        p = fg.plot_gate(table_medium, fsc_quantile_gate)

        self.assertIsInstance(p, bk_Figure)
        self.assertEqual(p.title.text, 'fsc_debris')

    def test_plot_ellipse_gate_transformed(self):
        xform_table = table_medium.apply_transform(scatter_xform)
        xform_gate = population_gate.transform(scatter_xform)

        p = fg.plot_gate(xform_table, xform_gate)

        self.assertIsInstance(p, bk_Figure)

    def test_plot_band_gate_subsampled(self):
        p = fg.plot_gate(table_large, singlet_gate, subsample_count=1000)

        self.assertIsInstance(p, bk_Figure)
