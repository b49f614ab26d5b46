"""This module describes the ``@extension_func`` decorator, which gives a
function a set of *managed arguments*: keyword arguments whose defaults can be
read, changed and reset at runtime, and whose values always pass through a
validator before the function sees them.

``coerce()`` uses this for its ``verbosity``, ``tight`` and ``convention``
options.
"""
from __future__ import annotations
from functools import wraps
import inspect
import threading
from types import MappingProxyType
from typing import Any, Callable, Mapping

from .base import EMPTY, Arguments, FunctionDecorator, Signature


######################
####    PUBLIC    ####
######################


def extension_func(func: Callable) -> Callable:
    """Wrap a function so that it can accept managed arguments.

    Parameters
    ----------
    func : Callable
        The function to wrap.  Managed arguments must either appear in its
        signature or be absorbed by a ``**kwargs`` parameter.

    Returns
    -------
    ExtensionFunc
        A transparent wrapper around ``func``.  Validators are attached to it
        with :meth:`ExtensionFunc.argument`.

    Notes
    -----
    Defaults are stored per thread.  A thread that touches the function for
    the first time starts from the main thread's current defaults, and any
    changes it makes stay local to it.

    Examples
    --------
    .. doctest::

        >>> @extension_func
        ... def scale(values, factor=2, **kwargs):
        ...     return [v * factor for v in values]

        >>> @scale.argument
        ... def factor(val, context: dict) -> int:
        ...     if val < 0:
        ...         raise ValueError("factor must be non-negative")
        ...     return int(val)

        >>> scale([1, 2])
        [2, 4]
        >>> scale.factor = 3
        >>> scale([1, 2])
        [3, 6]
        >>> del scale.factor
        >>> scale.factor
        2
    """
    seed = []  # the main thread's signature, once it exists

    class _ExtensionFunc(ExtensionFunc):
        """Per-function subclass, so that managed properties attached to one
        function do not leak onto others.
        """

        def __init__(self, _func: Callable):
            super().__init__(_func)
            if threading.current_thread() is threading.main_thread():
                seed.append(self._signature)
            elif seed:
                self._signature.copy_settings(seed[0])

    return _ExtensionFunc(func)


class ExtensionFunc(FunctionDecorator, threading.local):
    """A function wrapper that owns a set of managed arguments.

    Each managed argument is exposed as a :class:`property
    <python:property>` on this object.  Reading it gives the current default,
    assigning to it validates and stores a new default, and deleting it
    restores the default the argument was registered with.

    Parameters
    ----------
    func : Callable
        The wrapped function.
    """

    _reserved = FunctionDecorator._reserved | {"_signature"}

    def __init__(self, func: Callable):
        super().__init__(func=func)
        self._signature = ManagedSignature(func)

    @property
    def arguments(self) -> MappingProxyType:
        """Managed argument name → validator."""
        return MappingProxyType(self._signature.validators)

    @property
    def settings(self) -> MappingProxyType:
        """Managed argument name → current default.

        Examples
        --------
        .. doctest::

            >>> coerce.settings
            mappingproxy({'verbosity': 1, 'tight': False, 'convention': None})
            >>> coerce.verbosity = 0
            >>> coerce.settings
            mappingproxy({'verbosity': 0, 'tight': False, 'convention': None})
            >>> coerce.reset_defaults()
        """
        return self._signature.settings

    def argument(
        self,
        func: Callable = None,
        *,
        name: str | None = None,
        default: Any = EMPTY
    ) -> Callable:
        """Register a validator as a managed argument of this function.

        Can be used bare (``@f.argument``) or with options
        (``@f.argument(default=1)``).

        Parameters
        ----------
        name : str | None, default None
            The argument to manage.  Defaults to the validator's own name.
        default : Any, default EMPTY
            The initial default.  If omitted, the default declared in the
            function's signature is used, if any.  Either way it is passed
            through the validator first.

        Returns
        -------
        Callable
            The validator, wrapped so that its ``context`` argument may be
            omitted.  When it is, the current settings are supplied instead.

        Raises
        ------
        TypeError
            If the validator takes fewer than two arguments, if ``name`` clashes
            with an attribute of this object, or if the function neither
            declares ``name`` nor accepts ``**kwargs``.
        KeyError
            If ``name`` is already managed.

        Notes
        -----
        Validators are called as ``validator(val, context)``, where ``context``
        maps every argument of the current call to its (not yet validated)
        value.  They return the normalized value or raise.
        """

        def decorator(validator: Callable) -> Callable:
            check_validator(validator)
            arg = validator.__name__ if name is None else name
            if not isinstance(arg, str):
                raise TypeError(f"name must be a string, not {type(arg)}")
            if arg in self._signature.validators:
                raise KeyError(f"argument '{arg}' already exists")
            if arg in dir(self):
                raise TypeError(f"'{arg}' is a reserved attribute")

            @wraps(validator)
            def validate(val, context=None, **kwargs):
                if context is None:
                    context = dict(self.settings)
                return validator(val, context, **kwargs)

            self._signature.manage(
                arg,
                validate,
                default=default,
                annotation=inspect.signature(validator).return_annotation
            )
            setattr(type(self), arg, managed_property(arg, validate))
            return validate

        if func is None:
            return decorator
        return decorator(func)

    def reset_defaults(self) -> None:
        """Restore every managed argument to its registered default."""
        self._signature.reset_defaults()

    def __call__(self, *args, **kwargs) -> Any:
        """Call the wrapped function, validating explicit managed arguments
        and filling the rest from the current defaults.
        """
        bound = self._signature(*args, **kwargs)
        bound.validate()
        return self.__wrapped__(*bound.args, **bound.kwargs)

    def __repr__(self) -> str:
        return self._signature.reconstruct(annotations=False)


#######################
####    PRIVATE    ####
#######################


def check_validator(validator: Callable) -> None:
    """Raise a ``TypeError`` unless ``validator`` is a callable taking at
    least ``(val, context)``.
    """
    if not callable(validator):
        raise TypeError(f"validator must be callable: {validator}")
    if len(inspect.signature(validator).parameters) < 2:
        raise TypeError(f"validator must accept at least 2 arguments: {validator}")


def managed_property(name: str, validate: Callable) -> property:
    """Build the ``property`` that exposes a managed argument's default."""

    def fget(self) -> Any:
        value = self._signature.parameter_map[name].default
        if value is EMPTY:
            raise TypeError(f"'{name}' has no default value")
        return value

    def fset(self, val: Any) -> None:
        self._signature.set_parameter(name, default=validate(val))

    def fdel(self) -> None:
        original = self._signature.defaults.get(name, EMPTY)
        self._signature.set_parameter(name, default=original)

    return property(fget, fset, fdel, doc=validate.__doc__)


class ManagedSignature(Signature):
    """A :class:`Signature` that remembers which arguments are managed, their
    validators, and the defaults they were registered with.
    """

    def __init__(self, func: Callable):
        super().__init__(func)
        self.accepts_kwargs = any(
            par.kind == par.VAR_KEYWORD for par in self.parameters
        )
        self.validators: dict[str, Callable] = {}
        self.defaults: dict[str, Any] = {}

    @property
    def settings(self) -> Mapping[str, Any]:
        """Current defaults of the managed arguments that have one."""
        return MappingProxyType({
            par.name: par.default for par in self.parameters
            if par.name in self.validators and par.default is not EMPTY
        })

    def manage(
        self,
        name: str,
        validate: Callable,
        default: Any = EMPTY,
        annotation: Any = EMPTY
    ) -> None:
        """Start managing ``name``, adding it to the signature as a
        keyword-only parameter if it is not already there.
        """
        declared = self.parameter_map.get(name)
        if default is EMPTY and declared is not None:
            default = declared.default
        if default is not EMPTY:
            default = validate(default)

        if declared is not None:
            self.set_parameter(name, default=default, annotation=annotation)
        elif self.accepts_kwargs:
            self.add_keyword(name, default=default, annotation=annotation)
        else:
            raise TypeError(f"'{self.func_name}()' has no argument '{name}'")

        self.validators[name] = validate
        if default is not EMPTY:
            self.defaults[name] = default

    def copy_settings(self, other: ManagedSignature) -> None:
        """Adopt the parameters, validators and registered defaults of
        another signature.
        """
        self.signature = other.signature
        self.validators = other.validators.copy()
        self.defaults = other.defaults.copy()

    def reset_defaults(self) -> None:
        self.parameters = tuple(
            par.replace(default=self.defaults.get(par.name, EMPTY))
            if par.name in self.validators else par
            for par in self.parameters
        )

    # pylint: disable=no-self-argument
    def __call__(__self, *args, **kwargs) -> ManagedArguments:
        """Bind a call's arguments without applying defaults yet."""
        bound = __self.signature.bind_partial(*args, **kwargs)
        return ManagedArguments(bound, __self)


class ManagedArguments(Arguments):
    """The bound arguments of one call to an :class:`ExtensionFunc`."""

    def validate(self) -> None:
        """Run the validators of the managed arguments that were passed
        explicitly, then fill in the rest from the current defaults, which
        were validated when they were set.
        """
        explicit = list(self.arguments)
        self.apply_defaults()

        context = dict(self.arguments)
        validators = self.signature.validators
        for name in explicit:
            if name in validators:
                self.arguments[name] = validators[name](self.arguments[name], context)
