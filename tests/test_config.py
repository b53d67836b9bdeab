"""
Configuration of test data
"""
import numpy as np
import pandas as pd
import flowgate as fg

scatter_channels = ['FSC-A', 'FSC-H', 'SSC-A', 'FL1-A']


def make_scatter_events(event_count, seed, doublet_fraction=0.05, debris_fraction=0.1):
    """
    Synthetic scatter data with a cell population, doublets (FSC-A ~ 2x FSC-H)
    and low scatter debris. FL1-A is a fluorescence channel with negative values.
    """
    rng = np.random.default_rng(seed)

    debris_count = int(event_count * debris_fraction)
    doublet_count = int(event_count * doublet_fraction)
    cell_count = event_count - debris_count - doublet_count

    fsc_h = np.concatenate(
        [
            rng.normal(60000, 8000, cell_count),
            rng.normal(60000, 8000, doublet_count),
            rng.uniform(500, 8000, debris_count)
        ]
    )
    ratio = np.concatenate(
        [
            np.full(cell_count, 1.1),
            np.full(doublet_count, 2.0),
            np.full(debris_count, 1.1)
        ]
    )
    fsc_a = ratio * fsc_h + rng.normal(0, 1500, event_count)
    ssc_a = np.concatenate(
        [
            rng.normal(40000, 6000, cell_count),
            rng.normal(45000, 6000, doublet_count),
            rng.uniform(500, 6000, debris_count)
        ]
    )
    fl1_a = rng.normal(200, 400, event_count)

    events = np.column_stack([fsc_a, fsc_h, ssc_a, fl1_a])

    # scatter values are positive
    events[:, :3] = np.clip(events[:, :3], 1.0, None)

    return events


def make_table(event_count, seed):
    return fg.EventTable(
        make_scatter_events(event_count, seed),
        channel_labels=scatter_channels,
        metadata={'tot': str(event_count)}
    )


# EventTables
table_small = make_table(100, 1)
table_medium = make_table(2000, 2)
table_large = make_table(5000, 3)

# a 1-D table with values 0, 1, ..., 999
uniform_values = np.arange(1000, dtype=np.float64)
uniform_table = fg.EventTable(uniform_values.reshape(-1, 1), channel_labels=['FSC-A'])

# EventCollection with sample metadata
sample_names = ['wt_t0_r1.fcs', 'wt_t1_r1.fcs', 'ko_t0_r1.fcs']
sample_metadata = pd.DataFrame(
    {
        'sample': sample_names,
        'strain': ['wt', 'wt', 'ko'],
        'timepoint': [0, 1, 0],
        'replicate': [1, 1, 1]
    }
)
collection = fg.EventCollection(
    [
        (sample_names[0], make_table(1000, 10)),
        (sample_names[1], make_table(1500, 11)),
        (sample_names[2], make_table(800, 12))
    ],
    metadata=sample_metadata
)

# two well separated clusters in 2-D
cluster_rng = np.random.default_rng(7)
cluster_a_center = [2.0, 2.0]
cluster_b_center = [8.0, 8.0]
cluster_events = np.vstack(
    [
        cluster_rng.multivariate_normal(cluster_a_center, [[0.5, 0.2], [0.2, 0.5]], 700),
        cluster_rng.multivariate_normal(cluster_b_center, [[0.4, 0.0], [0.0, 0.4]], 300)
    ]
)
cluster_table = fg.EventTable(cluster_events, channel_labels=['x', 'y'])

# Transforms
logicle_xform = fg.transforms.LogicleTransform(param_t=262144, param_w=0.5, param_m=4.5, param_a=0)
asinh_xform = fg.transforms.AsinhTransform(param_t=262144, param_m=4.5, param_a=0)
log_xform = fg.transforms.LogTransform(param_t=262144, param_m=4.5)
linear_xform = fg.transforms.LinearTransform(param_t=262144, param_a=0)

scatter_xform = fg.ChannelTransform(
    {
        'FSC-A': logicle_xform,
        'FSC-H': logicle_xform,
        'SSC-A': logicle_xform
    }
)
fl1_xform = fg.ChannelTransform({'FL1-A': asinh_xform})

test_data_range1 = np.linspace(-1000.0, 262144.0, 1001)

# Gates
fsc_quantile_gate = fg.QuantileGate('fsc_debris', 'FSC-A', 100000.0)
ssc_quantile_gate = fg.QuantileGate('ssc_debris', 'SSC-A', 60000.0)

ellipse_boundary = fg.gates.EllipseBoundary(
    center=[60000.0, 40000.0],
    covariance_matrix=[[1.0e8, 0.0], [0.0, 6.0e7]],
    distance_square=5.991
)
population_gate = fg.RegionGate('population', ['FSC-A', 'SSC-A'], ellipse_boundary)

band_boundary = fg.gates.BandBoundary(
    slope=1.1,
    intercept=0.0,
    half_width=5000.0,
    x_min=0.0,
    x_max=120000.0
)
singlet_gate = fg.RegionGate('singlets', ['FSC-H', 'FSC-A'], band_boundary)
