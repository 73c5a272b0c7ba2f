"""
Validation-message helpers for the form layer.

Validation runs elsewhere; this module only reads the messages a
:class:`~resourcegraph.errors.Validator` reports and turns them into the
full sentences shown next to fields and in the error summary.
"""

from typing import Any, List, Optional, Union

from markupsafe import Markup, escape

from resourcegraph.errors import DEFAULT_VALIDATOR, AttributeErrorsValidator, Validator

# A message starting with this marker is a complete sentence; the label is not prepended
CUSTOM_MESSAGE_MARKER = '^'


def messages_for(obj: Any, attribute: str, validator: Optional[Validator] = None) -> List[str]:
    """Messages reported for one attribute of ``obj`` (empty when none)."""
    validator = validator or DEFAULT_VALIDATOR
    return list(validator.errors_for(obj).get(str(attribute), []) or [])


def error_for(obj: Any, attribute: str, validator: Optional[Validator] = None) -> bool:
    """Check if ``attribute`` of ``obj`` has at least one message."""
    return bool(messages_for(obj, attribute, validator))


def full_message(label: Union[str, Markup], message: str) -> Markup:
    """
    Build the sentence shown to the user: ``"Full name is required"``.

    ``label`` may be trusted Markup (an ``_html`` translation); ``message``
    is always escaped.
    """
    message = str(message)
    if message.startswith(CUSTOM_MESSAGE_MARKER):
        return escape(message[len(CUSTOM_MESSAGE_MARKER):])
    return Markup('{0} {1}').format(label, message)


__all__ = [
    'AttributeErrorsValidator',
    'CUSTOM_MESSAGE_MARKER',
    'Validator',
    'error_for',
    'full_message',
    'messages_for',
]
