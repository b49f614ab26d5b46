"""This package describes classification conventions, which map the
convention-specific kinds of the trait registry (numbers, categorical values,
images) to scientific types, and define how columns are coerced to realize a
given scientific type.

Exactly one convention is active at a time.  Every classification and coercion
entry point also accepts an explicit ``convention`` argument, which overrides
the active one for the duration of the call.

Conventions
-----------
unspecified
    A convention without rules.  Every convention-specific kind is
    classified as ``Unknown``, and nothing can be coerced.
mlj
    The default convention, following the `MLJ
    <https://alan-turing-institute.github.io/MLJ.jl/dev/>`_ scientific types.
"""
from __future__ import annotations
from typing import Any, Callable, Iterator

from scitypes.types import ScitypeMeta, Unknown
from scitypes.util.error import InvalidScitypeError
from scitypes.util.type_hints import scitype_like


######################
####    PUBLIC    ####
######################


class Convention:
    """A named bundle of classification and coercion rules.

    Parameters
    ----------
    name : str
        A unique name for this convention.

    Notes
    -----
    Rules are attached with the :meth:`rule`, :meth:`vector_rule` and
    :meth:`coercion` decorators:

    .. code:: python

        example = Convention("example")

        @example.rule("number")
        def classify_number(value):
            return Continuous
    """

    def __init__(self, name: str):
        self.name = name
        self.rules: dict[str, Callable[[Any], scitype_like]] = {}
        self.vector_rules: list[Callable[[Any], scitype_like | None]] = []
        self.coercions: dict[ScitypeMeta, Callable] = {}

    def rule(self, kind: str) -> Callable:
        """A decorator that registers a scalar classification rule for the
        given kind.
        """
        def decorator(func: Callable) -> Callable:
            if kind in self.rules:
                raise KeyError(
                    f"convention {repr(self.name)} already has a rule for "
                    f"kind {repr(kind)}"
                )
            self.rules[kind] = func
            return func

        return decorator

    def vector_rule(self, func: Callable) -> Callable:
        """A decorator that registers a vectorized classification rule.

        Vectorized rules accept a non-empty array and return the union of the
        scientific types of its elements, or ``None`` if they do not apply.
        Their result must be identical to that of the elementwise fold.
        """
        self.vector_rules.append(func)
        return func

    def coercion(self, target: ScitypeMeta) -> Callable:
        """A decorator that registers a coercion routine for ``target`` and
        all of its subtypes.

        Coercion routines have the following signature:

        .. code:: python

            def routine(series: pd.Series, target: ScitypeMeta, missing: bool):
                ...

        Where ``target`` is the requested (non-missing) scientific type and
        ``missing`` indicates whether the result should use a missing-aware
        representation.
        """
        def decorator(func: Callable) -> Callable:
            self.coercions[target] = func
            return func

        return decorator

    def classify(self, kind: str, value: Any) -> scitype_like:
        """Apply the scalar rule for ``kind``, or return ``Unknown`` if there
        is none.
        """
        func = self.rules.get(kind)
        if func is None:
            return Unknown
        return func(value)

    def classify_vector(self, values: Any) -> scitype_like | None:
        """Apply the vectorized rules in order, returning the first result
        that is not ``None``.
        """
        for func in self.vector_rules:
            result = func(values)
            if result is not None:
                return result
        return None

    def find_coercion(self, target: Any) -> Callable:
        """Get the coercion routine that realizes ``target``.

        Raises
        ------
        InvalidScitypeError
            If ``target`` is not a scientific type tag, or if this convention
            cannot realize it.
        """
        if isinstance(target, ScitypeMeta):
            for parent in target.__mro__:
                if parent in self.coercions:
                    return self.coercions[parent]

        raise InvalidScitypeError(
            f"convention {repr(self.name)} cannot coerce to {repr(target)}"
        )

    def __repr__(self) -> str:
        return f"Convention({repr(self.name)})"


def register_convention(conv: Convention) -> Convention:
    """Make a convention available by name."""
    if conv.name in registry:
        raise KeyError(f"convention {repr(conv.name)} is already registered")
    registry[conv.name] = conv
    return conv


def available() -> Iterator[str]:
    """Iterate over the names of every registered convention."""
    return iter(registry)


def activate(name: str) -> Convention:
    """Switch the active convention.

    Parameters
    ----------
    name : str
        The name of a registered convention.

    Returns
    -------
    Convention
        The newly-activated convention.

    Raises
    ------
    ValueError
        If no convention is registered under ``name``.
    """
    global _active
    _active = resolve(name)
    return _active


def convention() -> Convention:
    """Get the active convention."""
    return _active


def mlj() -> Convention:
    """Activate the ``mlj`` convention."""
    return activate("mlj")


def resolve(conv: str | Convention | None) -> Convention:
    """Interpret a ``convention`` argument.

    ``None`` refers to the active convention, strings are looked up by name
    and :class:`Convention` objects are returned as-is.
    """
    if conv is None:
        return _active
    if isinstance(conv, Convention):
        return conv
    if isinstance(conv, str):
        try:
            return registry[conv]
        except KeyError as err:
            raise ValueError(
                f"unknown convention {repr(conv)}; must be one of "
                f"{list(registry)}"
            ) from err
    raise TypeError(
        f"convention must be a string or Convention object, not {repr(conv)}"
    )


#######################
####    PRIVATE    ####
#######################


registry: dict[str, Convention] = {}
unspecified = register_convention(Convention("unspecified"))


from .default import MLJ  # pylint: disable=wrong-import-position


_active = register_convention(MLJ)
