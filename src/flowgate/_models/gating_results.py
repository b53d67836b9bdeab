"""
GatingResults class
"""
import numpy as np
import pandas as pd


class GatingResults(object):
    """
    A GatingResults instance is returned from the GatingPipeline `apply` method.
    End users will never create an instance of GatingResults directly. However,
    there are several GatingResults methods to retrieve the results.

    :ivar collection: EventCollection of the retained events of every gated sample,
        in the coordinates of the gated collection
    :ivar summary: pandas DataFrame with one row per gated sample
    :ivar report: pandas DataFrame of per-sample, per-gate event counts & percentages
    :ivar diagnostics: pandas DataFrame of skipped & unmatched samples
    """
    def __init__(self, sample_results, collection, metadata=None, diagnostics=None):
        self._raw_results = {res['sample']: res for res in sample_results}
        self._sample_order = [res['sample'] for res in sample_results]
        self.collection = collection
        self.summary = None
        self.report = None

        if diagnostics is None:
            diagnostics = []

        self.diagnostics = pd.DataFrame(diagnostics, columns=['sample', 'kind', 'message'])

        self._process_results(metadata)

    def __repr__(self):
        return (
            f'{self.__class__.__name__}('
            f'{len(self._sample_order)} samples, {len(self.diagnostics)} diagnostics)'
        )

    @staticmethod
    def get_retained_mask(sample_result):
        """
        Retrieve the events retained by all gates from a sample result dictionary.

        :param sample_result: sample result dictionary, see GatingPipeline.gate_table
        :return: NumPy boolean array
        """
        if len(sample_result['gates']) == 0:
            return np.ones(sample_result['total_count'], dtype=bool)

        return sample_result['gates'][-1][2]

    @staticmethod
    def _get_fraction(count, total):
        # check total to avoid div by zero
        if total == 0:
            return 0.0

        return count / float(total)

    def _process_results(self, metadata):
        summary_list = []
        report_list = []

        for sample_name in self._sample_order:
            res = self._raw_results[sample_name]
            total_count = res['total_count']
            retained_count = int(self.get_retained_mask(res).sum())

            summary_list.append(
                {
                    'sample': sample_name,
                    'total_count': total_count,
                    'retained_count': retained_count,
                    'retained_fraction': self._get_fraction(retained_count, total_count)
                }
            )

            parent = 'root'
            parent_count = total_count

            for role, gate_type, membership in res['gates']:
                count = int(membership.sum())

                report_list.append(
                    {
                        'sample': sample_name,
                        'gate_name': role,
                        'gate_type': gate_type,
                        'parent': parent,
                        'count': count,
                        'absolute_percent': self._get_fraction(count, total_count) * 100.0,
                        'relative_percent': self._get_fraction(count, parent_count) * 100.0
                    }
                )

                parent = role
                parent_count = count

        summary = pd.DataFrame(
            summary_list,
            columns=['sample', 'total_count', 'retained_count', 'retained_fraction']
        )

        if metadata is not None:
            # left join keeps samples missing from the metadata
            summary = summary.merge(metadata, how='left', left_on='sample', right_index=True)
            summary = summary.reset_index(drop=True)

        self.summary = summary
        self.report = pd.DataFrame(
            report_list,
            columns=[
                'sample',
                'gate_name',
                'gate_type',
                'parent',
                'count',
                'absolute_percent',
                'relative_percent'
            ]
        )

    def _get_sample_results(self, sample_name):
        try:
            return self._raw_results[sample_name]
        except KeyError:
            raise KeyError("Sample %s has no gating results" % sample_name)

    def get_gate_membership(self, sample_name, gate_name=None):
        """
        Retrieve a boolean array indicating gate membership for the events of a sample.
        Memberships are cumulative: an event is a member of a gate if it is inside the
        gate and every gate applied before it.

        :param sample_name: text string of a sample name
        :param gate_name: text string of a gate role. If None, the events retained
            by all gates are returned.
        :return: NumPy boolean array (length of sample event count)
        """
        res = self._get_sample_results(sample_name)

        if gate_name is None:
            return self.get_retained_mask(res).copy()

        for role, _, membership in res['gates']:
            if role == gate_name:
                return membership.copy()

        raise KeyError("Gate %s was not applied to sample %s" % (gate_name, sample_name))

    def get_gate_count(self, sample_name, gate_name=None):
        """
        Retrieve event count of a gate for a sample.

        :param sample_name: text string of a sample name
        :param gate_name: text string of a gate role. If None, the count of events
            retained by all gates is returned.
        :return: integer count of events
        """
        return int(self.get_gate_membership(sample_name, gate_name=gate_name).sum())

    def get_retained_fraction(self, sample_name):
        """
        Retrieve the fraction of events of a sample retained by all gates.

        :param sample_name: text string of a sample name
        :return: floating point fraction, 0.0 for a sample without events
        """
        res = self._get_sample_results(sample_name)

        return self._get_fraction(self.get_gate_count(sample_name), res['total_count'])
