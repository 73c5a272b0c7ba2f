"""
Validator interface consumed by the graph walker.

Validation itself happens elsewhere; the walker only needs to ask an object
for its current field -> messages mapping.
"""

from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Protocol


class Validator(Protocol):
    """Anything that can report the validation errors of an object."""

    def errors_for(self, obj: Any) -> Mapping:
        """Return a mapping of field name to ordered list of messages."""
        ...


class AttributeErrorsValidator:
    """
    Default validator reading an ``errors`` mapping off the object itself.

    Objects without an ``errors`` attribute, or whose ``errors`` is not a
    mapping, have no errors. Fields with an empty message list are dropped.
    """

    attribute_name = 'errors'

    def errors_for(self, obj: Any) -> Dict[str, List[str]]:
        if obj is None:
            return {}
        errors = getattr(obj, self.attribute_name, None)
        if not isinstance(errors, Mapping):
            return {}
        return {
            str(field_name): list(messages)
            for field_name, messages in errors.items()
            if messages
        }


DEFAULT_VALIDATOR = AttributeErrorsValidator()


def errors_present(obj: Any, validator: Optional[Validator] = None) -> bool:
    """Check if ``obj`` itself carries at least one error message."""
    if obj is None:
        return False
    validator = validator or DEFAULT_VALIDATOR
    return any(validator.errors_for(obj).values())
