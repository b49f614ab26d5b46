"""This module describes the ``tree()`` function, which renders the hierarchy of
scientific types as text.
"""
from __future__ import annotations

from scitypes.types import Found, ScitypeMeta, check_scitype


def tree(root: ScitypeMeta = Found) -> str:
    """Render the subtypes of a scientific type as an indented tree.

    Parameters
    ----------
    root : ScitypeMeta, default Found
        The scientific type at the top of the tree.

    Returns
    -------
    str
        A multi-line string listing every (unparametrized) subtype of
        ``root``.

    Examples
    --------
    .. doctest::

        >>> print(tree())
        Found
        ├── Known
        │   ├── Finite
        │   │   ├── Multiclass
        │   │   └── OrderedFactor
        │   ├── Image
        │   │   ├── ColorImage
        │   │   └── GrayImage
        │   ├── Infinite
        │   │   ├── Continuous
        │   │   └── Count
        │   └── Table
        └── Unknown
    """
    root = check_scitype(root)
    if not isinstance(root, ScitypeMeta):
        raise TypeError(f"tree() requires a scientific type tag, not {repr(root)}")

    lines = [repr(root)]
    render(root, "", lines)
    return "\n".join(lines)


def render(typ: ScitypeMeta, prefix: str, lines: list[str]) -> None:
    """Append the subtree rooted at ``typ`` to ``lines``."""
    children = sorted(
        (sub for sub in typ.__subclasses__() if not sub.args),
        key=lambda sub: sub.__name__
    )
    for index, child in enumerate(children):
        last = index == len(children) - 1
        lines.append(f"{prefix}{'└── ' if last else '├── '}{repr(child)}")
        render(child, prefix + ("    " if last else "│   "), lines)
