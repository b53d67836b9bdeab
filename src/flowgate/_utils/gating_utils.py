"""
Utility functions for gating the samples of an EventCollection.
"""
import gc
import math
import psutil
from .._conf import multi_proc, mp, mp_context, mp_min_event_count


# Module level so the pool can pickle it by reference
def _gate_sample(data):
    pipeline = data[0]
    sample_name = data[1]
    table = data[2]
    verbose = data[3]

    sample_results = pipeline.gate_table(sample_name, table, verbose=verbose)

    gc.collect()

    return sample_results


def _estimate_cpu_count_for_workload(sample_count, total_data_size):
    """
    Estimate how many worker processes fit in the available memory. Each data value
    is a float64, held about 4 times over during gating (the copy sent to the worker,
    the transformed copy and the Boolean masks).

    :param sample_count: number of samples to gate
    :param total_data_size: total number of event values across all samples
    :return: number of worker processes
    """
    # leave one cpu for the parent process
    max_proc_count = max(mp.cpu_count() - 1, 1)

    bytes_per_sample = (total_data_size * 8 * 4) / sample_count

    if bytes_per_sample == 0:
        return max_proc_count

    # stay under 80% of the available memory
    mem_budget = psutil.virtual_memory().available * 0.8
    fitting_sample_count = math.floor(mem_budget / bytes_per_sample)

    if fitting_sample_count <= 2:
        return 1

    return min(max_proc_count, fitting_sample_count - 1)


def gate_samples(pipeline, sample_data, verbose, use_mp=False):
    """
    Apply a GatingPipeline to multiple EventTable instances. Attempts to use
    multiprocessing to optimize analysis. Results are returned in the order of
    the given sample data regardless of the order in which workers finish.

    :param pipeline: GatingPipeline instance
    :param sample_data: list of (sample name, EventTable) tuples
    :param verbose: enables printing of progress status
    :param use_mp: enables multiprocessing
    :return: list of sample result dictionaries, see GatingPipeline.gate_table
    """
    sample_count = len(sample_data)

    # get total number of data values for all samples
    total_event_count = sum([table.event_count for _, table in sample_data])
    total_data_size = sum([table.event_count * len(table.channels) for _, table in sample_data])

    if multi_proc and use_mp and sample_count > 1 and total_event_count >= mp_min_event_count:
        proc_count = _estimate_cpu_count_for_workload(sample_count, total_data_size)
    else:
        proc_count = 1

    if proc_count > 1:
        if sample_count < proc_count:
            proc_count = sample_count

        with mp.get_context(mp_context).Pool(processes=proc_count, maxtasksperchild=1) as pool:
            if verbose:
                # flush so this line comes before the workers' output
                print(
                    '#### Processing gates for %d samples (multiprocessing is enabled - %d cpus) ####'
                    % (sample_count, proc_count),
                    flush=True
                )
            data = [(pipeline, sample_name, table, verbose) for sample_name, table in sample_data]

            async_results = [pool.apply_async(_gate_sample, args=(d,)) for d in data]

            pool.close()
            pool.join()

            all_results = [result.get() for result in async_results]
    else:
        if verbose:
            print(
                '#### Processing gates for %d samples (multiprocessing is disabled) ####' % sample_count,
                flush=True
            )

        all_results = []
        for sample_name, table in sample_data:
            results = pipeline.gate_table(sample_name, table, verbose=verbose)
            all_results.append(results)

    return all_results
