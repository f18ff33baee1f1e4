"""
Parameter helpers: default-parameter merge and header-parameter upkeep.
"""
import logging
from typing import Iterable, List, Optional

from .config import ordinal, ordinal_ignore_case
from .types import NameComparer, Parameter, ParameterType

logger = logging.getLogger("rest_client.parameters")


def is_same_parameter(left: Parameter, right: Parameter, comparer: NameComparer = ordinal) -> bool:
    """Two parameters are equivalent when kind matches and names compare equal."""
    return left.kind == right.kind and comparer(left.name, right.name)


def contains_parameter(
    parameters: Iterable[Parameter], parameter: Parameter, comparer: NameComparer = ordinal
) -> bool:
    return any(is_same_parameter(existing, parameter, comparer) for existing in parameters)


def merge_default_parameters(
    parameters: List[Parameter],
    defaults: Iterable[Parameter],
    comparer: NameComparer = ordinal,
) -> List[Parameter]:
    """Overlay client defaults onto a request's parameter list, in place.

    Header defaults are skipped; they are applied when the wire message is
    built and always win there. A request parameter equivalent to a default
    suppresses that default. The remaining defaults are inserted at the front
    in declaration order, ahead of the request's own parameters.
    """
    insert_at = 0
    for default in defaults:
        if default.kind == ParameterType.HTTP_HEADER:
            continue
        if contains_parameter(parameters, default, comparer):
            logger.debug(f"merge_default_parameters: request overrides default {default.name!r}")
            continue
        parameters.insert(insert_at, default)
        insert_at += 1
    return parameters


def find_parameter(
    parameters: Iterable[Parameter],
    name: str,
    kind: Optional[ParameterType] = None,
    comparer: NameComparer = ordinal,
) -> Optional[Parameter]:
    """Return the first parameter matching name (and kind, when given)."""
    for parameter in parameters:
        if kind is not None and parameter.kind != kind:
            continue
        name_comparer = ordinal_ignore_case if parameter.kind == ParameterType.HTTP_HEADER else comparer
        if name_comparer(parameter.name, name):
            return parameter
    return None


def remove_parameters(
    parameters: List[Parameter],
    name: str,
    kind: Optional[ParameterType] = None,
    comparer: NameComparer = ordinal,
) -> int:
    """Remove every matching parameter in place; header names ignore case.

    Returns the number of parameters removed.
    """
    kept = []
    for parameter in parameters:
        name_comparer = ordinal_ignore_case if parameter.kind == ParameterType.HTTP_HEADER else comparer
        if (kind is None or parameter.kind == kind) and name_comparer(parameter.name, name):
            continue
        kept.append(parameter)
    removed = len(parameters) - len(kept)
    parameters[:] = kept
    return removed


def replace_parameter(
    parameters: List[Parameter],
    parameter: Parameter,
    comparer: NameComparer = ordinal,
) -> None:
    """Replace the first equivalent parameter in place, or append."""
    name_comparer = ordinal_ignore_case if parameter.kind == ParameterType.HTTP_HEADER else comparer
    for index, existing in enumerate(parameters):
        if is_same_parameter(existing, parameter, name_comparer):
            parameters[index] = parameter
            del_indexes = [
                i for i in range(index + 1, len(parameters))
                if is_same_parameter(parameters[i], parameter, name_comparer)
            ]
            for i in reversed(del_indexes):
                del parameters[i]
            return
    parameters.append(parameter)


def validate_header_parameter(parameter: Parameter) -> None:
    """Reject header names or values that would split the header block."""
    for part in (parameter.name, str(parameter.value)):
        if "\r" in part or "\n" in part:
            raise ValueError(f"Invalid header {parameter.name!r}: CR/LF characters are not allowed")
