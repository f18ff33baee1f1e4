"""
Projection of registered handler identifiers into negotiation headers.
"""
import logging
from typing import List, Optional, Sequence

from ..parameters import remove_parameters
from ..types import Parameter, ParameterType

logger = logging.getLogger("rest_client.accept_header")

ACCEPT = "Accept"
ACCEPT_ENCODING = "Accept-Encoding"


def format_accept_header(ordered_ids: Sequence[str]) -> Optional[str]:
    """Join identifiers in order; no identifiers means no header at all."""
    if not ordered_ids:
        return None
    return ", ".join(ordered_ids)


def project_accept_header(
    default_parameters: List[Parameter],
    header_name: str,
    ordered_ids: Sequence[str],
) -> Optional[str]:
    """Rewrite the header default parameter from the ordered identifiers.

    Any previous value for header_name is dropped first, so repeated
    projections of the same list leave the same single parameter behind.
    """
    remove_parameters(default_parameters, header_name, ParameterType.HTTP_HEADER)
    value = format_accept_header(ordered_ids)
    if value is None:
        logger.debug(f"project_accept_header: {header_name} removed")
        return None
    default_parameters.append(
        Parameter(
            name=header_name,
            value=value,
            kind=ParameterType.HTTP_HEADER,
            validate_on_add=True,
        )
    )
    logger.debug(f"project_accept_header: {header_name}={value}")
    return value
