"""This module holds the base class shared by the decorators that wrap
``coerce()``, together with a small mutable view of a function signature.

Decorators built on :class:`FunctionDecorator` can be stacked freely.  Any
attribute that a layer does not define itself is looked up on the layer below
it, so settings like ``coerce.verbosity`` reach the managed-argument layer no
matter how many ``columnwise``-style wrappers sit on top.
"""
from __future__ import annotations
from functools import update_wrapper, WRAPPER_ASSIGNMENTS
import inspect
from types import MappingProxyType
from typing import Any, Callable, Mapping


EMPTY = inspect.Parameter.empty


class FunctionDecorator:
    """A transparent wrapper around a callable.

    Parameters
    ----------
    func : Callable
        The callable to wrap.  It is stored as ``__wrapped__``, and attribute
        lookups, assignments and deletions that this wrapper does not handle
        are forwarded to it.
    **kwargs : dict
        Passed on to the next class in the MRO, which lets subclasses mix in
        :class:`threading.local <python:threading.local>`.

    Notes
    -----
    Names listed in ``_reserved`` (plus anything defined on the wrapper's own
    class) are stored on the wrapper instead of being forwarded.
    """

    _reserved = set(WRAPPER_ASSIGNMENTS) | {"__wrapped__"}

    def __init__(self, func: Callable, **kwargs):
        super().__init__(**kwargs)
        update_wrapper(self, func)

    def __getattr__(self, name: str) -> Any:
        return getattr(self.__wrapped__, name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in self._reserved or hasattr(type(self), name):
            super().__setattr__(name, value)
        else:
            setattr(self.__wrapped__, name, value)

    def __delattr__(self, name: str) -> None:
        # hasattr() would also see attributes of the wrapped layers
        try:
            object.__getattribute__(self, name)
        except AttributeError:
            delattr(self.__wrapped__, name)
        else:
            super().__delattr__(name)

    def __call__(self, *args, **kwargs):
        return self.__wrapped__(*args, **kwargs)

    def __dir__(self) -> list:
        names = set(dir(type(self))) | set(self.__dict__)
        return sorted(names | set(dir(self.__wrapped__)))

    def __str__(self) -> str:
        return str(self.__wrapped__)

    def __repr__(self) -> str:
        return repr(self.__wrapped__)


class Signature:
    """A mutable view of a callable's :class:`inspect.Signature
    <python:inspect.Signature>`.

    ``inspect.Signature`` objects are immutable.  This class swaps in an
    updated copy every time a parameter changes, which is how managed
    arguments store their current defaults.

    Parameters
    ----------
    func : Callable
        The callable to introspect.
    """

    def __init__(self, func: Callable):
        self.func_name = func.__qualname__
        self.signature = inspect.signature(func)

    @property
    def parameter_map(self) -> Mapping[str, inspect.Parameter]:
        """The current parameters, keyed by name."""
        return self.signature.parameters

    @property
    def parameters(self) -> tuple[inspect.Parameter, ...]:
        """The current parameters, in order.  Assigning a new tuple replaces
        them all at once.
        """
        return tuple(self.signature.parameters.values())

    @parameters.setter
    def parameters(self, val: tuple[inspect.Parameter, ...]) -> None:
        self.signature = self.signature.replace(parameters=val)

    def add_keyword(
        self,
        name: str,
        default: Any = EMPTY,
        annotation: Any = EMPTY
    ) -> None:
        """Insert a keyword-only parameter just before ``**kwargs`` (or at the
        end, if there is no variadic keyword parameter).

        Raises
        ------
        ValueError
            If a parameter of the same name already exists.
        """
        if name in self.parameter_map:
            raise ValueError(f"'{self.func_name}()' already has a parameter '{name}'")

        new = inspect.Parameter(
            name,
            inspect.Parameter.KEYWORD_ONLY,
            default=default,
            annotation=annotation
        )
        pars = list(self.parameters)
        index = next(
            (i for i, par in enumerate(pars) if par.kind == par.VAR_KEYWORD),
            len(pars)
        )
        pars.insert(index, new)
        self.parameters = tuple(pars)

    def set_parameter(self, _name: str, **kwargs) -> None:
        """Replace attributes of the named parameter.

        ``kwargs`` are forwarded to :meth:`inspect.Parameter.replace()
        <python:inspect.Parameter.replace>`.

        Raises
        ------
        KeyError
            If the signature has no parameter called ``_name``.
        """
        if _name not in self.parameter_map:
            raise KeyError(_name)

        self.parameters = tuple(
            par.replace(**kwargs) if par.name == _name else par
            for par in self.parameters
        )

    def reconstruct(self, annotations: bool = True) -> str:
        """Render the function name followed by its current signature."""
        pars = self.parameters
        if not annotations:
            pars = tuple(par.replace(annotation=EMPTY) for par in pars)
        sig = self.signature.replace(parameters=pars, return_annotation=EMPTY)
        return f"{self.func_name}{sig}"

    def __repr__(self) -> str:
        return repr(self.signature)


class Arguments:
    """The arguments of a single call, bound against a :class:`Signature`.

    Parameters
    ----------
    bound : inspect.BoundArguments
        The result of binding the call's arguments.
    signature : Signature
        The signature they were bound against.
    """

    def __init__(self, bound: inspect.BoundArguments, signature: Signature):
        self.bound = bound
        self.signature = signature

    @property
    def arguments(self) -> dict[str, Any]:
        """Name → value for every bound argument.  Edits are visible through
        :attr:`args` and :attr:`kwargs`.
        """
        return self.bound.arguments

    @property
    def args(self) -> tuple[Any, ...]:
        return self.bound.args

    @property
    def kwargs(self) -> Mapping[str, Any]:
        return MappingProxyType(self.bound.kwargs)

    def apply_defaults(self) -> None:
        """Fill in every unbound argument from the signature's current
        defaults.
        """
        self.bound.apply_defaults()

    def __repr__(self) -> str:
        return repr(self.bound)
