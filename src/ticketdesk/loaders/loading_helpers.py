from __future__ import annotations
import chardet
import logging
import pyarrow as pa
import pyarrow.compute as pc

logger = logging.getLogger(__name__)

"""
Loader Helper Functions
=======================

Utility functions supporting legacy ticket import.

Includes helpers for:
- delimiter and encoding detection
- duplicate detection in columnar data

These helpers are intentionally low-level and stateless.
"""

def infer_encoding(file):
    with open(file, 'rb') as infile:
        encoding = chardet.detect(infile.read(10000))
    if encoding['encoding'] in (None, 'ascii'):
        encoding['encoding'] = 'utf-8' # utf-8 valid superset of ascii
    return encoding

def infer_delim(file, encoding: str = 'utf-8'):
    with open(file, 'r', encoding=encoding) as infile:
        line = infile.readline()
        tabs = line.count('\t')
        commas = line.count(',')
        semicolons = line.count(';')
        if tabs > commas and tabs >= semicolons:
            return '\t'
        if semicolons > commas:
            return ';'
        return ','

def arrow_drop_duplicates(
    table: pa.Table,
    key_names: list[str],
) -> pa.Table:
    """
    Keep the first row (in key order) for each distinct key. Rows are
    returned sorted by key.
    """
    if table.num_rows == 0:
        return table

    sort_keys = [(name, "ascending") for name in key_names]
    sorted_idx = pc.sort_indices(table, sort_keys=sort_keys)    # type: ignore
    sorted_table = table.take(sorted_idx)
    diffs = []
    for name in key_names:
        col = sorted_table[name]
        previous_arr = col[:-1]
        this_arr = col[1:]
        diffs.append(
            pc.not_equal(previous_arr, this_arr)                # type: ignore
        )
    keep_tail = diffs[0]
    for d in diffs[1:]:
        keep_tail = pc.or_(keep_tail, d)                        # type: ignore
    keep = pc.fill_null(keep_tail, True)
    if isinstance(keep, pa.ChunkedArray):
        keep = keep.combine_chunks()
    keep = pa.concat_arrays([
        pa.array([True], type=pa.bool_()),
        keep,
    ])
    deduped = sorted_table.filter(keep)
    
    return deduped
