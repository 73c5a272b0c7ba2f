"""
BlockBuffer: accumulate markup rendered inside a block.

Builder methods that take a ``block`` call it with a BlockBuffer wrapping the
builder. Every buffered operation forwards to the builder and appends the
result, so a block can render several fields without concatenating by hand::

    def location_panel(panel):
        panel.text_field('location_other')
        panel.text_field('address')

    builder.radio_button_fieldset('location', block=lambda fieldset: (
        fieldset.radio_input('england'),
        fieldset.radio_input('other', block=location_panel),
    ))

Only the operations listed in BUFFERED_OPERATIONS are forwarded. Use
``buffer.builder`` to reach anything else without buffering it.
"""

from typing import TYPE_CHECKING, Any, Callable, List, Optional

from markupsafe import Markup

if TYPE_CHECKING:
    from govukform.form_builder import FormBuilder

BUFFERED_OPERATIONS = (
    'text_field',
    'email_field',
    'number_field',
    'password_field',
    'phone_field',
    'telephone_field',
    'range_field',
    'search_field',
    'url_field',
    'text_area',
    'text_area_with_maxwords',
    'pounds_field',
    'date_field',
    'label',
    'submit',
    'radio_button_fieldset',
    'check_box_fieldset',
    'radio_input',
    'check_box_input',
    'revealing_panel',
    'collection_select',
    'collection_check_boxes',
    'collection_radio_buttons',
)


class BlockBuffer:
    """Proxy for a FormBuilder that collects everything rendered through it."""

    def __init__(self, builder: 'FormBuilder'):
        self._builder = builder
        self._fragments: List[Markup] = []

    @property
    def builder(self) -> 'FormBuilder':
        return self._builder

    @property
    def fragments(self) -> List[Markup]:
        return list(self._fragments)

    def concat(self, fragment: Any) -> Any:
        """Append a rendered fragment (plain strings are escaped) and return it."""
        if fragment is not None:
            self._fragments.append(self._builder.markup.join([fragment]))
        return fragment

    def collect(self) -> Markup:
        """Everything buffered so far, joined in order."""
        return self._builder.markup.join(self._fragments)

    def fields_for(self, record_name: str, record_object: Any = None,
                   *, block: Optional[Callable[['BlockBuffer'], Any]] = None) -> Any:
        """Nested builder; with a block, its collected markup is buffered here."""
        result = self._builder.fields_for(record_name, record_object, block=block)
        if block is None:
            return result
        return self.concat(result)

    def __repr__(self) -> str:
        return f"BlockBuffer({self._builder.object_name!r}, fragments={len(self._fragments)})"


def _buffered(name: str) -> Callable[..., Markup]:
    def operation(self: BlockBuffer, *args: Any, **kwargs: Any) -> Markup:
        return self.concat(getattr(self._builder, name)(*args, **kwargs))
    operation.__name__ = name
    operation.__qualname__ = f"BlockBuffer.{name}"
    operation.__doc__ = f"Render ``FormBuilder.{name}`` and buffer the result."
    return operation


for _name in BUFFERED_OPERATIONS:
    setattr(BlockBuffer, _name, _buffered(_name))
