"""
Current-fieldset state for revealing panels.

``radio_input`` and ``check_box_input`` render inside a fieldset and need the
fieldset's attribute name to build panel ids. The attribute lives in a
ContextVar for the dynamic extent of the fieldset call, so concurrent renders
(threads or asyncio tasks) never see each other's value and nested fieldsets
restore the outer value when they finish.
"""

import contextvars
from contextlib import contextmanager
from typing import Any, Iterator, Optional


PANEL_SUFFIX = 'panel'

_current_fieldset_attribute: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    'current_fieldset_attribute', default=None
)


def begin_fieldset(attribute: Any) -> contextvars.Token:
    """Set the current fieldset attribute. Pass the returned token to :func:`end_fieldset`."""
    return _current_fieldset_attribute.set(str(attribute))


def end_fieldset(token: contextvars.Token) -> None:
    """Restore the fieldset attribute that was current before :func:`begin_fieldset`."""
    _current_fieldset_attribute.reset(token)


def current_fieldset_attribute() -> Optional[str]:
    """Attribute of the fieldset being rendered, or None outside any fieldset."""
    return _current_fieldset_attribute.get()


@contextmanager
def fieldset_scope(attribute: Any) -> Iterator[str]:
    """
    Make ``attribute`` the current fieldset attribute inside the block.

    Usage:
        with fieldset_scope('location'):
            builder.radio_input('other', block=...)  # panel id: location_other_panel
    """
    token = begin_fieldset(attribute)
    try:
        yield str(attribute)
    finally:
        end_fieldset(token)


def panel_id(attribute: Any, choice: Any = None, override: Optional[str] = None) -> str:
    """
    Id of the revealing panel tied to a choice.

    ``panel_id('location', 'other') -> 'location_other_panel'``;
    without a choice (check boxes) ``panel_id('mines') -> 'mines_panel'``.
    An explicit ``override`` is returned unchanged.
    """
    if override is not None:
        return str(override)
    parts = [str(attribute)]
    if choice is not None:
        parts.append(str(choice))
    parts.append(PANEL_SUFFIX)
    return '_'.join(parts)
