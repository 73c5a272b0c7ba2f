"""Name derivation for resource types."""

import re
from typing import Any

_ACRONYM_BOUNDARY = re.compile(r'([A-Z\d]+)([A-Z][a-z])')
_WORD_BOUNDARY = re.compile(r'([a-z\d])([A-Z])')


def underscore(name: str) -> str:
    """
    Convert a CamelCase identifier to lowercase snake_case.

    >>> underscore('WasteTransport')
    'waste_transport'
    >>> underscore('HTTPRequest')
    'http_request'
    """
    name = _ACRONYM_BOUNDARY.sub(r'\1_\2', name)
    name = _WORD_BOUNDARY.sub(r'\1_\2', name)
    return name.replace('-', '_').lower()


def resource_name(obj: Any) -> str:
    """Get the type-derived name of a resource object.

    Uses ``__resource_name__`` when the class defines one, otherwise the
    underscored class name.
    """
    resource_type = type(obj)
    explicit = getattr(resource_type, '__resource_name__', None)
    if explicit:
        return explicit
    return underscore(resource_type.__name__)
