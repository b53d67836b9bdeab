import pandas as pd
import flowgate as fg
from bokeh.plotting import show

# directory of FCS files, one per sample, and a CSV of per-sample metadata
# with columns: sample, strain, timepoint, replicate
fcs_dir = "data/timecourse"
metadata = pd.read_csv("data/timecourse_metadata.csv")

collection = fg.load_collection(fcs_dir, metadata=metadata)

# estimate a logicle transform for the scatter channels from all samples
xform = fg.ChannelTransform.estimate(collection, ['FSC-A', 'FSC-H', 'SSC-A'])
xform_collection = collection.apply_transform(xform)

# fit the gates in transformed coordinates, using the first timepoint as reference
reference = xform_collection.filter(predicate=lambda row: row['timepoint'] == 0)

debris_gate = fg.QuantileGate.fit(
    'debris',
    reference,
    fg.QuantileGateConfig('SSC-A', probability=0.99)
)
population_gate = fg.RegionGate.fit(
    'population',
    reference,
    fg.RegionGateConfig(['FSC-A', 'SSC-A'], method='ellipse', cluster_count=2, confidence_level=0.95)
)
singlet_gate = fg.RegionGate.fit(
    'singlets',
    reference,
    fg.RegionGateConfig(['FSC-H', 'FSC-A'], method='band', prediction_level=0.99)
)

gate_set = fg.GateSet('scatter', transform=xform)
gate_set.add_gate(debris_gate)
gate_set.add_gate(population_gate)
gate_set.add_gate(singlet_gate)

# save the gate set to re-use on another experiment
with open("scatter_gates.json", "w") as fh:
    fg.export_gate_set(gate_set, fh)

pipeline = fg.GatingPipeline(gate_set)
results = pipeline.apply(xform_collection, verbose=True)

print(results.summary)
print(results.report)
print(results.diagnostics)

# review the singlet gate on the first sample
sample_name = xform_collection.sample_names[0]
fig = fg.plot_gate(xform_collection.get_table(sample_name), singlet_gate)

show(fig)
