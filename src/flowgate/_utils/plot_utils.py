"""
Bokeh plotting of events and gate boundaries
"""
import numpy as np
from scipy.interpolate import interpn
from bokeh.plotting import figure
from bokeh.models import Patch, Span, ColumnDataSource
from bokeh.palettes import Turbo256
from .._models.gates._gates import QuantileGate, RegionGate


LINE_COLOR_DEFAULT = "#1F77B4"
LINE_COLOR_CONTRAST = "#73D587"
LINE_WIDTH_DEFAULT = 3
FILL_COLOR_DEFAULT = 'lime'
FILL_ALPHA_DEFAULT = 0.08
EXCLUDED_COLOR = "#d3d3d3"

_TOOLS = "crosshair,hover,pan,zoom_in,zoom_out,box_zoom,undo,redo,reset,save,"


def _calculate_extent(data_1d, d_min=None, d_max=None, pad=0.0):
    data_min = np.min(data_1d)
    data_max = np.max(data_1d)

    # determine padding to keep min/max events off the edge
    pad_d = max(abs(data_min), abs(data_max)) * pad

    if d_min is None:
        d_min = data_min - pad_d
    if d_max is None:
        d_max = data_max + pad_d

    return d_min, d_max


def _calculate_point_density(x, y, bin_count):
    # estimate density at each event from a 2-D histogram, interpolated between bin centers
    x_pad = (x.max() - x.min()) / bin_count
    y_pad = (y.max() - y.min()) / bin_count

    hist_data, x_edges, y_edges = np.histogram2d(
        x,
        y,
        bins=bin_count,
        range=[[x.min() - x_pad, x.max() + x_pad], [y.min() - y_pad, y.max() + y_pad]]
    )
    z = interpn(
        (0.5 * (x_edges[1:] + x_edges[:-1]), 0.5 * (y_edges[1:] + y_edges[:-1])),
        hist_data,
        np.vstack([x, y]).T,
        method="linear",  # spline tends to overshoot into negative values
        bounds_error=False
    )
    z[np.isnan(z)] = 0

    if z.max() - z.min() == 0:
        return np.zeros(len(x))

    return (z - z.min()) / (z.max() - z.min())


def render_polygon(
        vertices,
        line_color=LINE_COLOR_CONTRAST,
        line_width=LINE_WIDTH_DEFAULT,
        fill_color=FILL_COLOR_DEFAULT,
        fill_alpha=FILL_ALPHA_DEFAULT
):
    """
    Build the Bokeh glyph for a closed gate boundary.

    :param vertices: (N, 2) array of boundary vertices
    :return: tuple of (ColumnDataSource, Patch)
    """
    vertices = np.asarray(vertices)

    source = ColumnDataSource(dict(x=vertices[:, 0].tolist(), y=vertices[:, 1].tolist()))

    poly = Patch(
        x='x',
        y='y',
        fill_color=fill_color,
        fill_alpha=fill_alpha,
        line_width=line_width,
        line_color=line_color
    )

    return source, poly


def render_threshold(threshold, line_color=LINE_COLOR_CONTRAST, line_width=LINE_WIDTH_DEFAULT):
    """
    Renders a vertical Bokeh Span at a gate threshold.

    :param threshold: x location of the threshold
    :param line_color: Color for the line (as RGB hex string or CSS color name)
    :param line_width: Line width in pixels
    :return: Bokeh Span object
    """
    return Span(
        location=threshold,
        dimension='height',
        line_color=line_color,
        line_width=line_width
    )


def plot_histogram(x, x_label='x', bins=None, width=600, height=600):
    """
    Histogram of a 1-D array of values. Non-finite values are dropped.

    :param x: 1-D array of values
    :param x_label: x-axis label
    :param bins: bin count, or any bin rule accepted by numpy.histogram. Defaults to 'sqrt'.
    :param width: figure width in pixels
    :param height: figure height in pixels
    :return: Bokeh figure
    """
    if bins is None:
        bins = 'sqrt'

    x = np.asarray(x)
    x = x[np.isfinite(x)]

    hist, edges = np.histogram(x, density=False, bins=bins)

    p = figure(tools=_TOOLS, width=width, height=height)
    p.title.align = 'center'
    p.quad(
        top=hist,
        bottom=0,
        left=edges[:-1],
        right=edges[1:],
        alpha=0.5
    )

    p.y_range.start = 0
    p.xaxis.axis_label = x_label
    p.yaxis.axis_label = 'Event Count'
    p.x_range.range_padding = 0.04

    return p


def plot_scatter(
        x,
        y,
        x_label=None,
        y_label=None,
        highlight_mask=None,
        x_min=None,
        x_max=None,
        y_min=None,
        y_max=None,
        color_density=True,
        bin_count=200,
        height=600,
        width=600
):
    """
    Scatter plot of two 1-D arrays, optionally colored by local event density.
    Events outside `highlight_mask` are drawn in grey underneath the others.
    Axis limits left as None follow the data with a small margin.

    :param x: 1-D array for the x-axis
    :param y: 1-D array for the y-axis
    :param x_label: x-axis label
    :param y_label: y-axis label
    :param highlight_mask: optional Boolean array, e.g. gate membership
    :param x_min: x-axis lower limit
    :param x_max: x-axis upper limit
    :param y_min: y-axis lower limit
    :param y_max: y-axis upper limit
    :param color_density: color events by density with the Turbo palette
    :param bin_count: bins per axis for the density estimate
    :param height: figure height in pixels
    :param width: figure width in pixels
    :return: Bokeh figure
    """
    x = np.asarray(x)
    y = np.asarray(y)

    # non-finite events can't be placed on the plot
    is_finite = np.isfinite(x) & np.isfinite(y)
    x = x[is_finite]
    y = y[is_finite]
    if highlight_mask is not None:
        highlight_mask = np.asarray(highlight_mask)[is_finite]

    if len(x) > 0:
        x_min, x_max = _calculate_extent(x, d_min=x_min, d_max=x_max, pad=0.02)
        y_min, y_max = _calculate_extent(y, d_min=y_min, d_max=y_max, pad=0.02)
    else:
        # empty array, set extents to 0 to avoid errors
        x_min = x_max = y_min = y_max = 0
        color_density = False

    if color_density:
        z_norm = _calculate_point_density(x, y, bin_count)

        # sort by density so the more dense points are on top
        idx = z_norm.argsort()
        x, y, z_norm = x[idx], y[idx], z_norm[idx]
        if highlight_mask is not None:
            highlight_mask = highlight_mask[idx]
    else:
        z_norm = np.zeros(len(x))

    colors = np.array([Turbo256[int(z * 255)] for z in z_norm], dtype=object)
    fill_alpha = np.full(len(x), 0.4)

    if highlight_mask is not None:
        colors[~highlight_mask] = EXCLUDED_COLOR
        fill_alpha[~highlight_mask] = 0.3

        # draw excluded events first, below the highlighted ones
        final_idx = np.concatenate([np.flatnonzero(~highlight_mask), np.flatnonzero(highlight_mask)])
        x = x[final_idx]
        y = y[final_idx]
        colors = colors[final_idx]
        fill_alpha = fill_alpha[final_idx]

    p = figure(
        tools=_TOOLS,
        x_range=(x_min, x_max),
        y_range=(y_min, y_max),
        width=width,
        height=height
    )

    p.xaxis.axis_label = x_label
    p.yaxis.axis_label = y_label

    if len(x) > 0:
        p.scatter(
            x,
            y,
            size=3,
            fill_color=colors.tolist(),
            fill_alpha=fill_alpha,
            line_color=None
        )

    return p


def plot_gate(
        table,
        gate,
        subsample_count=10000,
        random_seed=1,
        color_density=True,
        hist_bins=None,
        width=600,
        height=600
):
    """
    Returns an interactive plot of a gate over the events of an EventTable. QuantileGates are
    drawn as a histogram with the threshold marked, RegionGates as a scatter plot with gate
    members highlighted and the gate boundary drawn. The events must be in the coordinates
    the gate is expressed in.

    :param table: EventTable instance
    :param gate: QuantileGate or RegionGate instance
    :param subsample_count: Maximum number of events to plot. Events are randomly sampled
        when the table has more events.
    :param random_seed: seed for choosing the subsampled events
    :param color_density: Whether to color the events by density (RegionGate only)
    :param hist_bins: Number of bins for the histogram (QuantileGate only), see `plot_histogram`
    :param height: figure height in pixels
    :param width: figure width in pixels
    :return: A Bokeh Figure object
    """
    membership = gate.apply(table)
    events = table.get_events(gate.get_channel_names())

    if table.event_count > subsample_count:
        rng = np.random.default_rng(random_seed)
        idx = np.sort(rng.choice(table.event_count, subsample_count, replace=False))
        events = events[idx]
        membership = membership[idx]

    if isinstance(gate, QuantileGate):
        p = plot_histogram(events[:, 0], x_label=gate.channel, bins=hist_bins, width=width, height=height)
        p.add_layout(render_threshold(gate.get_boundary()))
    elif isinstance(gate, RegionGate):
        x_label, y_label = gate.get_channel_names()
        p = plot_scatter(
            events[:, 0],
            events[:, 1],
            x_label=x_label,
            y_label=y_label,
            highlight_mask=membership,
            color_density=color_density,
            width=width,
            height=height
        )
        source, glyph = render_polygon(gate.get_boundary())
        p.add_glyph(source, glyph)
    else:
        raise TypeError("Plotting is not supported for gate type %s" % gate.__class__.__name__)

    p.title.text = gate.gate_name
    p.title.align = 'center'

    return p
