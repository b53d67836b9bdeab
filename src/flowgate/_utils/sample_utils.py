"""
Utilities for loading FCS files as EventTable & EventCollection instances
"""
import io
import os
from glob import glob
from pathlib import Path
import flowio
from .._models.event_table import EventTable
from .._models.event_collection import EventCollection


def read_fcs(
        fcs_path_or_handle,
        ignore_offset_error=False,
        ignore_offset_discrepancy=False,
        use_header_offsets=False,
        preprocess=True,
        use_pns_labels=False
):
    """
    Read the event data of an FCS file into an EventTable. The table is in raw
    coordinates and carries the FCS TEXT keywords as its metadata.

    :param fcs_path_or_handle: a file path string, Path instance, or file handle to an FCS file
    :param ignore_offset_error: option to ignore data offset error, default is False
    :param ignore_offset_discrepancy: option to ignore discrepancy between the HEADER
        and TEXT values for the DATA byte offset location, default is False
    :param use_header_offsets: use the HEADER section for the data offset locations, default is False.
        Setting this option to True also suppresses an error in cases of an offset discrepancy.
    :param preprocess: Controls whether events are scaled according to channel gain, corrected
        for proper lin/log display & whether the time channel is scaled by the 'timestep' keyword
        value (if present). Unprocessed event data is typically not useful for analysis, so the
        default is True.
    :param use_pns_labels: use the PnS labels (e.g. marker names) as channel labels where
        present instead of the PnN labels. Default is False.
    :return: EventTable instance
    """
    if isinstance(fcs_path_or_handle, Path):
        fcs_path_or_handle = str(fcs_path_or_handle)

    if not isinstance(fcs_path_or_handle, (str, io.IOBase)):
        raise ValueError("'fcs_path_or_handle' is not a supported type")

    flow_data = flowio.FlowData(
        fcs_path_or_handle,
        ignore_offset_error=ignore_offset_error,
        ignore_offset_discrepancy=ignore_offset_discrepancy,
        use_header_offsets=use_header_offsets
    )

    channel_labels = list(flow_data.pnn_labels)

    if use_pns_labels:
        channel_labels = [
            pns if pns not in (None, '') else pnn
            for pnn, pns in zip(flow_data.pnn_labels, flow_data.pns_labels)
        ]

    # event data is stored with double precision for accurate gating
    events = flow_data.as_array(preprocess=preprocess)

    return EventTable(
        events,
        channel_labels=channel_labels,
        metadata=flow_data.text
    )


def _get_fcs_paths(paths_or_dir):
    if isinstance(paths_or_dir, (str, Path)):
        # a str or Path to either a single FCS file or a directory
        # If directory, search non-recursively for files w/ .fcs extension
        if os.path.isdir(paths_or_dir):
            return sorted(glob(os.path.join(paths_or_dir, '*.fcs')))

        return [paths_or_dir]

    if isinstance(paths_or_dir, (list, tuple)):
        return list(paths_or_dir)

    raise ValueError("'paths_or_dir' must be a file path, directory path, or list of file paths")


def load_collection(
        paths_or_dir,
        metadata=None,
        preprocess=True,
        use_pns_labels=False
):
    """
    Load FCS files into an EventCollection. Sample names are the file names (as they exist
    on the filesystem), samples are ordered as the given paths or, for a directory, sorted
    by file name.

    :param paths_or_dir: a directory path, FCS file path, or a list of FCS file paths. If a
        directory, any .fcs files in the directory will be loaded.
    :param metadata: optional pandas DataFrame of sample metadata, either with a 'sample'
        column or indexed by sample (file) name
    :param preprocess: Controls whether preprocessing is applied to the event data, see `read_fcs`
    :param use_pns_labels: use the PnS labels as channel labels where present, see `read_fcs`
    :return: EventCollection instance
    """
    fcs_paths = _get_fcs_paths(paths_or_dir)

    tables = []
    for path in fcs_paths:
        table = read_fcs(path, preprocess=preprocess, use_pns_labels=use_pns_labels)
        tables.append((os.path.basename(str(path)), table))

    return EventCollection(tables, metadata=metadata)
