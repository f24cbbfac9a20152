"""Order-preserving structural merge used to fold composition keywords."""

import copy


def deep_merge(target: dict, *sources: dict) -> dict:
    """Merge ``sources`` into a copy of ``target`` and return it.

    Sources are applied left to right. When both sides hold a mapping under
    the same key the two are merged recursively; any other value (lists
    included) from a later source replaces the earlier one. Keys keep the
    order in which they were first seen. No argument is modified.
    """
    result = dict(target)
    for source in sources:
        for key, value in source.items():
            current = result.get(key)
            if isinstance(current, dict) and isinstance(value, dict):
                result[key] = deep_merge(current, value)
            else:
                result[key] = copy.deepcopy(value)
    return result
