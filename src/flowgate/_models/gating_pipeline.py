"""
GatingPipeline class
"""
import warnings
import numpy as np
from .event_collection import EventCollection
from .gate_set import GateSet
from .gating_results import GatingResults
from .._conf import debug
from .._utils import gating_utils
from ..exceptions import FlowGateWarning, UnmatchedSampleWarning, \
    OutOfDomainError, InsufficientDataError


class GatingPipeline(object):
    """
    Applies the gates of a GateSet to every sample of an EventCollection. Gates are
    combined by logical AND: an event is retained only if it is inside every gate.

    :param gate_set: GateSet instance
    :param gate_order: optional list of gate roles, in the order the gates are applied
        and reported. Defaults to all gate roles in the order they were added to the
        gate set. The retained events do not depend on the order.
    """
    def __init__(self, gate_set, gate_order=None):
        if not isinstance(gate_set, GateSet):
            raise TypeError("gate_set must be a GateSet instance")

        if gate_order is None:
            gate_order = gate_set.roles
        else:
            gate_order = list(gate_order)

            if len(set(gate_order)) != len(gate_order):
                raise ValueError("Gate roles in gate_order must be unique")

            # get_gate raises GateReferenceError for unknown roles
            for role in gate_order:
                gate_set.get_gate(role)

        self.gate_set = gate_set
        self.gate_order = gate_order

    def __repr__(self):
        return (
            f'{self.__class__.__name__}('
            f'{self.gate_set.name}, {len(self.gate_order)} gates)'
        )

    def _check_context(self, transform):
        if transform is None or transform == self.gate_set.transform:
            return

        raise ValueError(
            "Events are not in the coordinate context of gate set %s, "
            "only raw events or events in the gate set context can be gated" % self.gate_set.name
        )

    def gate_table(self, sample_name, table, verbose=False):
        """
        Apply the gates to the events of a single sample. Data dependent errors
        are caught & returned in the results, so the sample can be skipped.

        :param sample_name: text string of the sample name
        :param table: EventTable instance, raw or in the gate set coordinate context
        :param verbose: If True, print a line for each gate processed
        :return: dictionary of sample results with keys 'sample', 'total_count',
            'gates' (list of (role, gate type, membership) tuples, memberships are
            cumulative) & 'error' ((kind, message) tuple or None)
        """
        self._check_context(table.transform)

        sample_results = {
            'sample': sample_name,
            'total_count': table.event_count,
            'gates': [],
            'error': None
        }

        try:
            if table.transform is None and self.gate_set.transform is not None:
                table = table.apply_transform(self.gate_set.transform)

            retained = np.ones(table.event_count, dtype=bool)

            for role in self.gate_order:
                gate = self.gate_set.get_gate(role)

                if verbose:
                    print("%s: processing gate %s" % (sample_name, role))

                retained = np.logical_and(retained, gate.apply(table))
                sample_results['gates'].append((role, gate.gate_type, retained))
        except (OutOfDomainError, InsufficientDataError) as ex:
            sample_results['gates'] = []
            sample_results['error'] = (ex.__class__.__name__, str(ex))

        return sample_results

    def apply(self, collection, metadata=None, use_mp=False, verbose=False):
        """
        Apply the gates to every sample of an EventCollection.

        Samples failing with data dependent errors (OutOfDomainError, InsufficientDataError)
        do not stop the batch. They are skipped, recorded in the diagnostics of the results
        and a FlowGateWarning is issued.

        :param collection: EventCollection instance, raw or in the gate set coordinate context
        :param metadata: optional pandas DataFrame of sample metadata, with a 'sample'
            column or indexed by sample name. Defaults to the collection metadata.
        :param use_mp: Controls whether multiprocessing is used to gate samples. Default is False.
        :param verbose: If True, print a line for each sample & gate processed
        :return: GatingResults instance
        """
        if not isinstance(collection, EventCollection):
            raise TypeError("collection must be an EventCollection instance")

        # structural problems are raised before any sample is processed
        self._check_context(collection.transform)

        if metadata is None:
            metadata = collection.metadata
        else:
            metadata = EventCollection.parse_metadata(metadata)

        all_results = gating_utils.gate_samples(
            self,
            list(collection),
            verbose,
            use_mp=False if debug else use_mp
        )

        diagnostics = []
        sample_results = []

        for res in all_results:
            if res['error'] is not None:
                kind, message = res['error']
                warnings.warn(
                    "Sample %s was skipped (%s): %s" % (res['sample'], kind, message),
                    FlowGateWarning
                )
                diagnostics.append({'sample': res['sample'], 'kind': kind, 'message': message})
            else:
                sample_results.append(res)

        if metadata is not None:
            for res in sample_results:
                if res['sample'] not in metadata.index:
                    message = "Sample %s was not found in the sample metadata" % res['sample']
                    warnings.warn(message, UnmatchedSampleWarning)
                    diagnostics.append({'sample': res['sample'], 'kind': 'UnmatchedSample', 'message': message})

        gated_collection = collection.filter(
            sample_names=[res['sample'] for res in sample_results]
        )
        gated_collection = gated_collection.subset(
            {res['sample']: GatingResults.get_retained_mask(res) for res in sample_results}
        )

        return GatingResults(
            sample_results,
            gated_collection,
            metadata=metadata,
            diagnostics=diagnostics
        )
