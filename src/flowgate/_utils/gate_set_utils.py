"""
Utility functions for saving & loading GateSet instances as JSON documents
"""
import json
from pathlib import Path
from .._models.gate_set import GateSet

FORMAT_VERSION = 1


def export_gate_set(gate_set, file_handle):
    """
    Exports a GateSet, including its coordinate context, as a JSON document.

    :param gate_set: A GateSet instance
    :param file_handle: text mode file handle for the exported JSON document
    :return: None
    """
    doc = {
        'format_version': FORMAT_VERSION,
        'gate_set': gate_set.to_dict()
    }

    json.dump(doc, file_handle, indent=2)


def load_gate_set(path_or_handle):
    """
    Load a GateSet from a JSON document created by `export_gate_set`.

    :param path_or_handle: file handle or file path to a JSON document
    :return: GateSet instance
    """
    if isinstance(path_or_handle, (str, Path)):
        with open(path_or_handle, 'r') as f:
            doc = json.load(f)
    else:
        doc = json.load(path_or_handle)

    if doc.get('format_version') != FORMAT_VERSION:
        raise ValueError("Unsupported gate set document version: %r" % doc.get('format_version'))

    return GateSet.from_dict(doc['gate_set'])
