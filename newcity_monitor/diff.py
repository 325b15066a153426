# diff.py
from typing import Dict, List, Sequence, Tuple

from .models import Item


def diff_items(
    latest: Sequence[Item], previous: Sequence[Item]
) -> Tuple[List[Item], List[Item]]:
    """
    Compute the flavors added and removed between two lists of one category.
    - latest: flavors seen on this run
    - previous: flavors from the cached run
    Returns:
      (added_items, removed_items)

    Flavors are matched by name only; a changed description or code list on
    a flavor with the same name is not a change.  If `previous` repeats a
    name, the last occurrence is the one reported when it is removed.
    Removed flavors come back in the order they appear in `previous`.
    """
    if not latest or not previous:
        added = list(latest) if not previous else []
        removed = list(previous) if not latest else []
        return added, removed

    old_map: Dict[str, Item] = {it.name: it for it in previous}

    added: List[Item] = []
    for it in latest:
        if it.name in old_map:
            del old_map[it.name]
        else:
            added.append(it)

    removed = list(old_map.values())
    return added, removed


__all__ = ["diff_items"]
