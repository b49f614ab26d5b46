import pandas as pd


def make_parameters(*args) -> list[tuple]:
    """Build the argument list for ``pytest.mark.parametrize`` from parallel
    columns of test values.

    List arguments are zipped together and must share a length.  Any other
    argument is repeated on every row.  Tuples inside a list are spliced into
    the row rather than nested.
    """
    lengths = {len(a) for a in args if isinstance(a, list)}
    if len(lengths) > 1:
        raise RuntimeError(
            f"parameter lists must have the same length, not {sorted(lengths)}"
        )
    length = lengths.pop() if lengths else 1

    rows = [()] * length
    for a in args:
        column = a if isinstance(a, list) else [a] * length
        rows = [
            row + (value if isinstance(value, tuple) else (value,))
            for row, value in zip(rows, column)
        ]
    return rows


def series_message(name: str, test_input, expected, result) -> str:
    """Format a failure message comparing two series."""
    return (
        f"{name} failed with input:\n"
        f"{test_input}\n"
        f"expected:\n"
        f"{expected}\n"
        f"received:\n"
        f"{result}"
    )


def assert_series_equal(name: str, test_input, expected: pd.Series, result) -> None:
    """Check that ``result`` matches ``expected`` exactly, including dtype."""
    assert isinstance(result, pd.Series), f"{name} did not return a Series"
    assert result.dtype == expected.dtype, series_message(
        name, test_input, expected, result
    )
    assert result.equals(expected), series_message(
        name, test_input, expected, result
    )
