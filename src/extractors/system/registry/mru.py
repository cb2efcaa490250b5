from __future__ import annotations

from typing import Iterable, List, Mapping, Union


def normalize_mru_entries(entries: Union[Mapping[str, str], Iterable[str]]) -> List[str]:
    """
    Reduce MRU value data to a deduplicated, ordinal-sorted filename list.

    Office MRU values look like ``[F00000000][T01D9...][O00000000]*C:\\doc.docx``;
    the filename is everything after the first ``*``. Values without a ``*``
    are taken as-is.

    Args:
        entries: Mapping of value name to decoded text, or the texts alone

    Returns:
        Sorted list of unique filenames
    """
    values = entries.values() if isinstance(entries, Mapping) else entries

    filenames = set()
    for value in values:
        if "*" in value:
            value = value.split("*", 1)[1]
        filenames.add(value)
    return sorted(filenames)
