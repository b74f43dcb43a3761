"""Deep merge of translation trees in priority order."""

from typing import Any, Sequence

from infrastructure.i18n.models import TranslationTree


def deep_merge(base: TranslationTree, overlay: TranslationTree) -> TranslationTree:
    """Merge overlay on top of base without mutating either.

    Keys present in both as dicts are merged recursively. Any other
    overlay value replaces the base value.

    Args:
        base: Lower priority tree.
        overlay: Higher priority tree.

    Returns:
        New merged tree.
    """
    result: TranslationTree = dict(base)
    for key, value in overlay.items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = deep_merge(current, value)
        else:
            result[key] = _copy_tree(value)
    return result


def _copy_tree(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _copy_tree(child) for key, child in value.items()}
    return value


def merge(
    trees: Sequence[TranslationTree], priority_ascending: bool = True
) -> TranslationTree:
    """Merge loaded trees so higher priority entries win key by key.

    The merge is right-biased: with the default ordering later trees
    overwrite earlier ones. Active source paths are listed highest
    priority first, so they are merged with priority_ascending=False.

    Example:
        >>> merge([{"a": {"x": 1, "y": 2}}, {"a": {"x": 9}}])
        {'a': {'x': 9, 'y': 2}}
        >>> merge([{"a": {"x": 9}}, {"a": {"x": 1, "y": 2}}], priority_ascending=False)
        {'a': {'x': 9, 'y': 2}}

    Args:
        trees: Trees to merge.
        priority_ascending: True if trees are ordered lowest priority
            first, False if index 0 has the highest priority.

    Returns:
        Merged tree.
    """
    ordered = list(trees) if priority_ascending else list(reversed(trees))
    merged: TranslationTree = {}
    for tree in ordered:
        merged = deep_merge(merged, tree)
    return merged
