"""This module contains the exception types raised by ``scitypes`` internals,
as well as utility functions to help format their messages.
"""
import inspect

from .type_hints import list_like


######################
####    ERRORS    ####
######################


class NotTabularError(TypeError):
    """Raised when a table-only operation is invoked on a value that does not
    satisfy the tabular capability contract.
    """


class InvalidScitypeError(TypeError):
    """Raised when an argument is expected to be a scientific type (or one
    that can be realized by a coercion), but is not.
    """


class UnsupportedOperationError(TypeError):
    """Raised when in-place coercion is requested on a container that can only
    be rebuilt.
    """


class EmptySequenceError(ValueError):
    """Raised when a union of scientific types is requested over zero
    elements.
    """


class InconsistentLengthError(ValueError):
    """Raised when the columns of a table disagree on their length."""


########################
####    WARNINGS    ####
########################


class MissingLiftWarning(UserWarning):
    """Emitted when a coercion target is widened to its missing-aware form."""


#######################
####    HELPERS    ####
#######################


def shorten_list(seq: list_like, max_length: int = 5) -> str:
    """Converts a list-like into an abridged string for use in error messages.
    """
    seq = list(seq)
    if len(seq) <= max_length:
        return str(seq)
    shortened = ", ".join(str(i) for i in seq[:max_length])
    return f"[{shortened}, ...] ({len(seq)})"



def external_stacklevel() -> int:
    """Get the ``stacklevel`` that points ``warnings.warn()`` at the first
    frame outside of ``scitypes``, counted from the function that calls this
    one.
    """
    frame = inspect.currentframe().f_back
    level = 1
    try:
        while frame is not None and is_internal(frame):
            frame = frame.f_back
            level += 1
    finally:
        del frame  # avoid reference cycles
    return level


def is_internal(frame) -> bool:
    """Check whether a stack frame belongs to the ``scitypes`` package."""
    module = frame.f_globals.get("__name__", "")
    return module == "scitypes" or module.startswith("scitypes.")
