"""
Request body unwrapping for write endpoints.
Accepts either {"<root>": {...attributes}} or the bare attributes.
"""

from typing import Any, Dict, Iterable

from listing_api.utils.exceptions import MissingParameterError


def require_params(body: Any, root: str, permitted: Iterable[str]) -> Dict[str, Any]:
    """
    Extract the permitted attributes for a resource from a JSON body.

    Args:
        body: Decoded JSON request body
        root: Name of the wrapping key, e.g. "property"
        permitted: Attribute names accepted for the resource

    Returns:
        Dictionary containing only permitted attributes

    Raises:
        MissingParameterError: If the root key is absent/empty and no bare
            attribute was supplied either
    """
    permitted = list(permitted)

    if not isinstance(body, dict):
        raise MissingParameterError(root)

    if root in body:
        params = body[root]
        if not isinstance(params, dict) or not params:
            raise MissingParameterError(root)
    else:
        params = {key: value for key, value in body.items() if key in permitted}
        if not params:
            raise MissingParameterError(root)

    return {key: value for key, value in params.items() if key in permitted}
