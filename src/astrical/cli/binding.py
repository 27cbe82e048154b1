"""Positional argument binding.

Turns the positional values of an invocation into named entries of the
options object, following the order of the descriptor's argument specs.
"""

from __future__ import annotations

from typing import Any, Sequence

from astrical.cli.descriptor import ArgumentSpec


def normalize_positionals(values: Sequence[Any] | None) -> list[Any]:
    """Return positional values as one flat list.

    The parsing layer hands over either a flat list of values or a list
    whose only element is the list of values.
    """
    if not values:
        return []
    values = list(values)
    if len(values) == 1 and isinstance(values[0], (list, tuple)):
        return list(values[0])
    return values


def bind_arguments(
    specs: Sequence[ArgumentSpec],
    positionals: Sequence[Any],
    options: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Bind positional values onto argument specs by index.

    A spec without a corresponding value is left unset: its key is absent
    from the result. Required-ness is not checked here. A variadic spec
    takes the remaining slice of values as a list. Values are not coerced.

    Args:
        specs: Declared arguments, in order
        positionals: Positional values, in order
        options: Options object to write into (a new dict if omitted)

    Returns:
        The options object
    """
    if options is None:
        options = {}

    for index, spec in enumerate(specs):
        if index >= len(positionals):
            break
        if spec.variadic:
            options[spec.name] = list(positionals[index:])
        else:
            options[spec.name] = positionals[index]

    return options


__all__ = ["bind_arguments", "normalize_positionals"]
