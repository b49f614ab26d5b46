"""This module contains the internal machinery of the ``scitypes`` type
system, including the metaclass that builds scientific type tags, the
``Union`` composite, and the subtype relation that ties them together.

Scientific types are never instantiated.  They are classes that are compared
with :func:`issubtype` (or the ``<=`` family of operators) and combined with
:func:`union` (or the ``|`` operator).  Parametrized tags like
``Multiclass[3]`` are created on demand and cached as flyweights, so that
identical parameters always yield the identical class.  The cache is
never evicted, so it grows with each distinct parametrization (including
every ``Table[K]`` seen).
"""
from __future__ import annotations
from typing import Any, Iterable, Iterator

from scitypes.util.error import InvalidScitypeError


#######################
####    PRIVATE    ####
#######################


class ScitypeOps:
    """Operator overloads shared by scientific type tags and composites."""

    __slots__ = ()

    def __or__(self, other: Any) -> Any:
        return union(self, other)

    def __ror__(self, other: Any) -> Any:
        return union(other, self)

    def __le__(self, other: Any) -> bool:
        return issubtype(self, other)

    def __lt__(self, other: Any) -> bool:
        return self != other and issubtype(self, other)

    def __ge__(self, other: Any) -> bool:
        return issubtype(other, self)

    def __gt__(self, other: Any) -> bool:
        return self != other and issubtype(other, self)


class ScitypeMeta(ScitypeOps, type):
    """Metaclass for all scientific type tags.

    Every class created by this metaclass is a scientific type.  Subclassing
    expresses the subtype relation, while parametrized variants are built
    lazily by :meth:`Found.flyweight` and cached on this metaclass.
    """

    flyweights: dict[tuple[Any, ...], ScitypeMeta] = {}

    def __repr__(cls) -> str:
        return cls.__qualname__

    @property
    def is_parametrized(cls) -> bool:
        """Indicates whether every parameter of this tag has been bound."""
        return bool(cls.params) and len(cls.args) == len(cls.params)


######################
####    PUBLIC    ####
######################


class Found(metaclass=ScitypeMeta):
    """Abstract root of every non-missing scientific type.

    Attributes
    ----------
    params : tuple[str, ...]
        The names of the parameters this tag accepts, e.g. ``("N",)`` for
        :class:`Finite`.  Empty for tags that cannot be parametrized.
    args : tuple[Any, ...]
        The values bound to ``params``.  Empty unless the tag was produced by
        indexing, e.g. ``Multiclass[3].args == (3,)``.
    """

    params: tuple[str, ...] = ()
    args: tuple[Any, ...] = ()

    def __new__(cls, *args, **kwargs):
        raise TypeError(f"scientific types cannot be instantiated: {repr(cls)}")

    def __class_getitem__(cls, key: Any) -> ScitypeMeta:
        if not cls.params:
            raise TypeError(f"{repr(cls)} does not accept parameters")
        if cls.args:
            raise TypeError(f"{repr(cls)} is already parametrized")

        key = key if isinstance(key, tuple) else (key,)
        if len(key) != len(cls.params):
            raise TypeError(
                f"{cls.__name__}[{', '.join(cls.params)}] takes "
                f"{len(cls.params)} parameter(s), but {len(key)} were given"
            )

        return cls.flyweight(*cls.validate(*key))

    @classmethod
    def validate(cls, *args: Any) -> tuple[Any, ...]:
        """Check the parameters passed to ``cls[...]``.  Parametrizable tags
        override this to reject malformed arguments.
        """
        return args

    @classmethod
    def flyweight(cls, *args: Any) -> ScitypeMeta:
        """Get the cached tag for the given (already validated) parameters,
        creating it if it does not exist.

        The new class derives from ``cls`` as well as from the equally
        parametrized version of any parent that shares its parameters, which
        makes ``Multiclass[3]`` a subclass of both ``Multiclass`` and
        ``Finite[3]``.
        """
        key = (cls, args)
        result = ScitypeMeta.flyweights.get(key)
        if result is not None:
            return result

        bases = [cls]
        for parent in cls.__bases__:
            if parent.params and parent.params == cls.params and not parent.args:
                bases.append(parent.flyweight(*args))

        name = f"{cls.__name__}[{', '.join(repr(a) for a in args)}]"
        result = ScitypeMeta(
            name,
            tuple(bases),
            {
                "args": args,
                "__module__": cls.__module__,
                "__qualname__": name,
                "__doc__": cls.__doc__,
            }
        )
        ScitypeMeta.flyweights[key] = result
        return result


class Known(Found):
    """Abstract parent of every scientific type that carries meaning."""


class Unknown(Found):
    """Fallback scientific type, assigned when no classification rule
    matches.
    """


class CompositeType(ScitypeOps):
    """Base class for scientific types that are immutable values rather than
    tags, such as :class:`Union` or ``ArrayOf``.

    Subclasses participate in :func:`issubtype` by overriding
    :meth:`includes` and :meth:`within`.
    """

    __slots__ = ()

    def includes(self, other: Any) -> bool:
        """Check whether ``other <= self``, where ``other`` is a non-union
        scientific type that differs from ``self``.
        """
        return False

    def within(self, other: ScitypeMeta) -> bool:
        """Check whether ``self <= other``, where ``other`` is a tag."""
        return False


class Union(CompositeType):
    """A set of scientific types, expressing "any one of these".

    Parameters
    ----------
    *types : scitype
        The scientific types to combine.

    Returns
    -------
    Union | scitype
        Nested unions are flattened, and members that are subtypes of another
        member are absorbed into it.  If exactly one member remains, it is
        returned as-is rather than wrapped.  An empty union is the bottom
        type, which is a subtype of every other type.

    Raises
    ------
    InvalidScitypeError
        If any of ``types`` is not a scientific type.

    Examples
    --------
    .. doctest::

        >>> Union(Continuous, Missing)
        Union(Continuous, Missing)
        >>> Union(Multiclass[3], Finite)
        Finite
        >>> Continuous | Count | Continuous
        Union(Continuous, Count)
    """

    __slots__ = ("members",)

    def __new__(cls, *types: Any):
        flat = []
        for typ in types:
            typ = check_scitype(typ)
            if isinstance(typ, Union):
                flat.extend(typ.members)
            else:
                flat.append(typ)

        unique = list(dict.fromkeys(flat))  # preserves first occurrence
        members = [
            typ for typ in unique
            if not any(other != typ and _issubtype(typ, other) for other in unique)
        ]
        if len(members) == 1:
            return members[0]

        self = super().__new__(cls)
        object.__setattr__(self, "members", frozenset(members))
        return self

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} objects are immutable")

    def __iter__(self) -> Iterator[Any]:
        return iter(sorted(self.members, key=repr))

    def __len__(self) -> int:
        return len(self.members)

    def __contains__(self, item: Any) -> bool:
        return item in self.members

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Union):
            return self.members == other.members
        return NotImplemented

    def __hash__(self) -> int:
        return hash((Union, self.members))

    def __repr__(self) -> str:
        return f"Union({', '.join(repr(m) for m in self)})"


def union(*types: Any) -> Any:
    """Combine scientific types into their (simplified) union.

    This is equivalent to ``Union(*types)`` and the ``|`` operator.
    """
    return Union(*types)


def is_scitype(value: Any) -> bool:
    """Check whether ``value`` is a recognized scientific type."""
    return isinstance(value, (ScitypeMeta, CompositeType))


def check_scitype(value: Any) -> Any:
    """Return ``value`` if it is a scientific type, or raise an
    ``InvalidScitypeError`` otherwise.
    """
    if not is_scitype(value):
        raise InvalidScitypeError(f"not a scientific type: {repr(value)}")
    return value


def issubtype(sub: Any, sup: Any) -> bool:
    """Check whether ``sub`` is a subtype of ``sup``.

    Parameters
    ----------
    sub : scitype
        The candidate subtype.
    sup : scitype
        The candidate supertype.

    Returns
    -------
    bool
        ``True`` if every value of scientific type ``sub`` is also of
        scientific type ``sup``.  Tags follow the class hierarchy, unions are
        checked member-wise, and composite types apply their own rules.

    Raises
    ------
    InvalidScitypeError
        If either argument is not a scientific type.

    Examples
    --------
    .. doctest::

        >>> issubtype(Multiclass[3], Finite)
        True
        >>> issubtype(Count | Missing, Count)
        False
        >>> issubtype(Count, Count | Missing)
        True
    """
    return _issubtype(check_scitype(sub), check_scitype(sup))


def _issubtype(sub: Any, sup: Any) -> bool:
    """Unchecked version of :func:`issubtype`."""
    if sub is sup or sub == sup:
        return True
    if isinstance(sub, Union):
        return all(_issubtype(member, sup) for member in sub.members)
    if isinstance(sup, Union):
        return any(_issubtype(sub, member) for member in sup.members)
    if isinstance(sup, CompositeType):
        return sup.includes(sub)
    if isinstance(sub, CompositeType):
        return sub.within(sup)
    return issubclass(sub, sup)


def iter_members(typ: Any) -> Iterable[Any]:
    """Iterate over the members of a union, or yield a single type."""
    if isinstance(typ, Union):
        return iter(typ)
    return iter((typ,))
