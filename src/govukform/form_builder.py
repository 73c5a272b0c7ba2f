"""
GOV.UK Design System form builder.

Renders labelled inputs, radio and check box fieldsets with revealing panels,
date inputs and select boxes for one resource object, with ids, names and
translation keys derived from the object name::

    builder = FormBuilder('person', person)
    builder.text_field('name')
    # <div class="govuk-form-group" id="person_name_container">
    #   <label class="govuk-label" for="person_name">Full name</label>
    #   <input class="govuk-input" type="text" name="person[name]" id="person_name">
    # </div>

    builder.fields_for('address', block=lambda address: address.text_field('postcode'))
    # ... name="person[address_attributes][postcode]" id="person_address_attributes_postcode"

Error annotation is composed into the attribute maps before serialization:
a field with an error gets its form group id ``error_{field_id}`` (the target
of the error summary links), an error span inside its label with id
``error_message_{field_id}``, and ``aria-describedby`` pointing at that span.
A check box fieldset holds several attributes, so its form group id comes
from the legend and each erroring check box item carries its own
``error_{field_id}``.

Blocks are callables receiving a :class:`~govukform.block_buffer.BlockBuffer`.
"""

import logging
import re
from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Union

from markupsafe import Markup

from govukform import fieldset_state
from govukform.block_buffer import BlockBuffer
from govukform.config import FormConfig, get_form_config
from govukform.localization import Translator, humanize, localized
from govukform.markup import MarkupRenderer
from govukform.validation import full_message, messages_for
from resourcegraph.errors import Validator
from resourcegraph.path_resolver import NESTED_ATTRIBUTES_SUFFIX

logger = logging.getLogger(__name__)

Block = Callable[[BlockBuffer], Any]

WIDTH_CLASSES = {
    # fixed (character) widths
    20: 'govuk-input--width-20',
    10: 'govuk-input--width-10',
    5: 'govuk-input--width-5',
    4: 'govuk-input--width-4',
    3: 'govuk-input--width-3',
    2: 'govuk-input--width-2',
    # fluid widths
    'full': 'govuk-!-width-full',
    'three-quarters': 'govuk-!-width-three-quarters',
    'two-thirds': 'govuk-!-width-two-thirds',
    'one-half': 'govuk-!-width-one-half',
    'one-third': 'govuk-!-width-one-third',
    'one-quarter': 'govuk-!-width-one-quarter',
}
DEFAULT_WIDTH_CLASS = 'govuk-input--width-20'

# Multi-parameter date naming: day -> attr(3i), month -> attr(2i), year -> attr(1i)
DATE_SEGMENTS = {'day': '3i', 'month': '2i', 'year': '1i'}
AUTOCOMPLETE_SEGMENTS = {
    'day': 'bday bday-day',
    'month': 'bday bday-month',
    'year': 'bday bday-year',
}

REVEALING_PANEL_TYPES = ('radios', 'checkboxes')

_UNSET = object()


def attribute_prefix(object_name: str) -> str:
    """``person[address_attributes]`` -> ``person_address_attributes``."""
    prefix = re.sub(r'[\[\]]', '_', str(object_name))
    prefix = re.sub(r'_+', '_', prefix)
    return prefix[:-1] if prefix.endswith('_') else prefix


def sanitized_value(value: Any) -> str:
    """Id-safe form of a choice value: ``"Isle of Man" -> "isle_of_man"``."""
    text = re.sub(r'[\s.]', '_', str(value))
    return re.sub(r'[^-\w]', '', text).lower()


def width_class(width: Any) -> str:
    return WIDTH_CLASSES.get(width, DEFAULT_WIDTH_CLASS)


def _as_list(value: Any) -> list:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _pop_classes(options: Dict[str, Any]) -> list:
    """Remove and return user classes given as ``class`` or ``class_``."""
    return _as_list(options.pop('class', None)) + _as_list(options.pop('class_', None))


def merge_attributes(attributes: Optional[Mapping], default: Mapping) -> Dict[str, Any]:
    """
    Merge default attributes into a user attribute map.

    Keys present in both become lists with the defaults first, so
    ``{'class': 'custom'}`` merged with ``{'class': 'govuk-label'}`` renders
    ``class="govuk-label custom"``. Other user keys keep their position.
    """
    merged = dict(attributes or {})
    if 'class_' in merged:
        merged['class'] = _as_list(merged.pop('class')) if 'class' in merged else []
        merged['class'] = merged['class'] + _as_list(merged.pop('class_'))
    for key, value in default.items():
        if key in merged:
            merged[key] = _as_list(value) + _as_list(merged[key])
        else:
            merged[key] = value
    return merged


def _read(item: Any, method: Union[None, str, Callable[[Any], Any]]) -> Any:
    """Read a value/text from a collection item by attribute name, key or callable."""
    if method is None:
        return item
    if callable(method):
        return method(item)
    if isinstance(item, Mapping):
        return item[method]
    value = getattr(item, method)
    return value() if callable(value) else value


def _is_checked(value: Any) -> bool:
    return value not in (None, False, 0, '0', '', 'false')


class FormBuilder:
    """
    Form builder for one resource object.

    Args:
        object_name: Name used for ids, field names and translation keys
                     (``'person'``, or ``'person[address_attributes]'`` for nested builders)
        resource: The bound object (may be None)
        markup: Markup builder (defaults to the configured one)
        translator: Translator (defaults to the configured one)
        validator: Validator (defaults to the configured one)
        config: FormConfig (defaults to the active configuration)
    """

    def __init__(
        self,
        object_name: str,
        resource: Any = None,
        *,
        markup: Optional[MarkupRenderer] = None,
        translator: Optional[Translator] = None,
        validator: Optional[Validator] = None,
        config: Optional[FormConfig] = None,
    ):
        self.object_name = str(object_name)
        self.resource = resource
        self.config = config or get_form_config()
        self.markup = markup or self.config.markup
        self.translator = translator or self.config.translator
        self.validator = validator or self.config.validator

    def __repr__(self) -> str:
        return f"FormBuilder({self.object_name!r}, {type(self.resource).__name__})"

    # ==================== NAMING ====================

    @property
    def attribute_prefix(self) -> str:
        return attribute_prefix(self.object_name)

    def field_id(self, attribute: Any, *suffixes: Any) -> str:
        return '_'.join([self.attribute_prefix, str(attribute), *(str(s) for s in suffixes)])

    def field_name(self, attribute: Any) -> str:
        return f"{self.object_name}[{attribute}]"

    def error_message_id(self, attribute: Any) -> str:
        return f"error_message_{self.field_id(attribute)}"

    def hint_id(self, attribute: Any) -> str:
        return f"{self.field_id(attribute)}_hint"

    def form_group_id(self, attribute: Any) -> str:
        """``error_{field_id}`` when the attribute has an error, else ``{field_id}_container``."""
        if self.error_for(attribute):
            return f"error_{self.field_id(attribute)}"
        return f"{self.field_id(attribute)}_container"

    @property
    def current_fieldset_attribute(self) -> Optional[str]:
        return fieldset_state.current_fieldset_attribute()

    # ==================== ERRORS AND LOOKUPS ====================

    def error_for(self, attribute: Any) -> bool:
        return bool(messages_for(self.resource, attribute, self.validator))

    def error_full_message_for(self, attribute: Any) -> Optional[Markup]:
        """First error of ``attribute`` as a full sentence, or None."""
        messages = messages_for(self.resource, attribute, self.validator)
        if not messages:
            return None
        return full_message(self.localized_label(attribute), messages[0])

    def _localized(self, scope: str, attribute: Any, default: str) -> Union[str, Markup]:
        return localized(self.translator, scope, f"{self.object_name}.{attribute}", default)

    def localized_label(self, attribute: Any) -> Union[str, Markup]:
        return self._localized(self.config.label_scope, attribute, humanize(attribute))

    def hint_text(self, attribute: Any) -> Union[str, Markup]:
        return self._localized(self.config.hint_scope, attribute, '')

    def fieldset_text(self, attribute: Any) -> Union[str, Markup]:
        return self._localized(self.config.fieldset_scope, attribute, humanize(attribute))

    def _value(self, attribute: Any) -> Any:
        if self.resource is None:
            return None
        if isinstance(self.resource, Mapping):
            return self.resource.get(attribute)
        return getattr(self.resource, str(attribute), None)

    # ==================== BLOCKS ====================

    def capture(self, block: Optional[Block]) -> Markup:
        """
        Run a block against a fresh BlockBuffer and return what it rendered.

        If the block buffered nothing, its return value is used instead.
        """
        if block is None:
            return Markup('')
        if not callable(block):
            raise TypeError(f"block must be callable, got {type(block).__name__}")
        buffer = BlockBuffer(self)
        result = block(buffer)
        if buffer.fragments:
            return buffer.collect()
        if result is None:
            return Markup('')
        if isinstance(result, (list, tuple)):
            return self.markup.join(result)
        return self.markup.join([result])

    def fields_for(self, record_name: str, record_object: Any = None, *, block: Optional[Block] = None) -> Any:
        """
        Builder for a nested resource, named ``{object_name}[{record_name}_attributes]``.

        Args:
            record_name: Attribute holding the nested resource
            record_object: Nested resource (defaults to ``resource.<record_name>``)
            block: Optional block rendering the nested fields

        Returns:
            The block's markup when a block is given, otherwise the nested builder.
        """
        if record_object is None:
            record_object = self._value(record_name)
        nested = FormBuilder(
            f"{self.object_name}[{record_name}{NESTED_ATTRIBUTES_SUFFIX}]",
            record_object,
            markup=self.markup,
            translator=self.translator,
            validator=self.validator,
            config=self.config,
        )
        if block is None:
            return nested
        return nested.capture(block)

    # ==================== TEXT-LIKE INPUTS ====================

    def text_field(self, attribute: str, *, block: Optional[Block] = None, **options: Any) -> Markup:
        return self._input_field(attribute, 'text', block, options)

    def email_field(self, attribute: str, *, block: Optional[Block] = None, **options: Any) -> Markup:
        return self._input_field(attribute, 'email', block, options)

    def number_field(self, attribute: str, *, block: Optional[Block] = None, **options: Any) -> Markup:
        return self._input_field(attribute, 'number', block, options)

    def password_field(self, attribute: str, *, block: Optional[Block] = None, **options: Any) -> Markup:
        return self._input_field(attribute, 'password', block, options)

    def phone_field(self, attribute: str, *, block: Optional[Block] = None, **options: Any) -> Markup:
        return self._input_field(attribute, 'tel', block, options)

    def telephone_field(self, attribute: str, *, block: Optional[Block] = None, **options: Any) -> Markup:
        return self._input_field(attribute, 'tel', block, options)

    def range_field(self, attribute: str, *, block: Optional[Block] = None, **options: Any) -> Markup:
        return self._input_field(attribute, 'range', block, options)

    def search_field(self, attribute: str, *, block: Optional[Block] = None, **options: Any) -> Markup:
        return self._input_field(attribute, 'search', block, options)

    def url_field(self, attribute: str, *, block: Optional[Block] = None, **options: Any) -> Markup:
        return self._input_field(attribute, 'url', block, options)

    def text_area(self, attribute: str, *, block: Optional[Block] = None, **options: Any) -> Markup:
        return self._input_field(attribute, None, block, options, tag='textarea', default_class='govuk-textarea')

    def _input_field(
        self,
        attribute: str,
        input_type: Optional[str],
        block: Optional[Block],
        options: Dict[str, Any],
        *,
        tag: str = 'input',
        default_class: str = 'govuk-input',
    ) -> Markup:
        """Form group with label (text, hints, error), optional block markup, then the control."""
        options = dict(options)
        label_options = options.pop('label_options', None)
        width = options.pop('width', None)

        label = self._field_label(attribute, label_options)
        after_hint_markup = self.capture(block)

        value = self._value(attribute)
        if tag == 'textarea':
            attributes = self._control_attributes(attribute, default_class, options, width=width)
            control = self.markup.render_tag('textarea', attributes, '' if value is None else str(value))
        else:
            attributes = self._control_attributes(
                attribute, default_class, options, input_type=input_type, value=value, width=width
            )
            control = self.markup.render_tag('input', attributes)

        return self._form_group([attribute], [label, after_hint_markup, control])

    def pounds_field(self, attribute: str, *, label_options: Optional[Mapping] = None,
                     width: Any = None, **options: Any) -> Markup:
        """Number input prefixed with the currency symbol."""
        label = self._field_label(attribute, label_options)
        attributes = self._control_attributes(
            attribute, 'govuk-input', options, input_type='number', value=self._value(attribute), width=width
        )
        symbol = self.markup.render_tag('div', {'class': 'govuk-currency-input__symbol'}, self.config.currency_symbol)
        container = self.markup.render_tag(
            'div', {'class': 'govuk-currency-input'}, [symbol, self.markup.render_tag('input', attributes)]
        )
        return self._form_group([attribute], [label, container])

    def text_area_with_maxwords(self, attribute: str, *, maxwords: int = 50, **options: Any) -> Markup:
        """Text area wrapped for the character-count component."""
        options = dict(options)
        options['class'] = _pop_classes(options) + ['govuk-js-character-count']
        return self.markup.render_tag(
            'div',
            {
                'class': 'govuk-character-count',
                'data-module': 'govuk-character-count',
                'data-maxwords': maxwords,
            },
            self.text_area(attribute, **options),
        )

    def label(self, attribute: str, text: Optional[str] = None, **options: Any) -> Markup:
        """Standalone label (error message included, no hints)."""
        label_options = dict(options)
        if text is not None:
            label_options['text'] = text
        return self._field_label(attribute, label_options, hints=False)

    def submit(self, value: str = 'Continue', **options: Any) -> Markup:
        options = dict(options)
        attributes = {
            'type': 'submit',
            'value': value,
            'class': ['govuk-button'] + _pop_classes(options),
            'data-module': 'govuk-button',
        }
        attributes.update(options)
        return self.markup.render_tag('input', attributes)

    # ==================== FIELDSETS ====================

    def radio_button_fieldset(
        self,
        attribute: str,
        *,
        choices: Optional[Iterable[Any]] = None,
        inline: bool = False,
        small: bool = False,
        legend_options: Optional[Mapping] = None,
        heading: bool = True,
        page_heading: bool = False,
        value_method: Any = None,
        text_method: Any = None,
        block: Optional[Block] = None,
        **options: Any,
    ) -> Markup:
        """
        Fieldset of radio buttons for one attribute.

        Without a block, renders one radio per choice (``yes``/``no`` by
        default). With a block, the block renders the items, typically via
        ``fieldset.radio_input(choice, block=...)`` for revealing panels.
        """
        classes = ['govuk-radios', 'govuk-radios--small' if small else 'govuk-radios--conditional']
        if inline:
            classes.append('govuk-radios--inline')

        with fieldset_state.fieldset_scope(attribute):
            if block is not None:
                items = self.capture(block)
            else:
                items = self._radio_inputs(
                    attribute, choices, value_method=value_method, text_method=text_method, **options
                )
            radios = self.markup.render_tag('div', {'class': classes, 'data-module': 'govuk-radios'}, items)
            fieldset = self._fieldset(
                attribute, radios,
                legend_options=legend_options, heading=heading, page_heading=page_heading, inline=inline,
            )
        return self._form_group([attribute], fieldset)

    def check_box_fieldset(
        self,
        legend_key: str,
        attributes: Sequence[str],
        *,
        legend_options: Optional[Mapping] = None,
        heading: bool = True,
        page_heading: bool = False,
        inline: bool = False,
        block: Optional[Block] = None,
        **options: Any,
    ) -> Markup:
        """Fieldset of check boxes, one per boolean attribute, legend from ``legend_key``."""
        attributes = list(attributes)
        with fieldset_state.fieldset_scope(legend_key):
            if block is not None:
                items = self.capture(block)
            else:
                items = self._check_box_inputs(attributes, **options)
            boxes = self.markup.render_tag(
                'div', {'class': 'govuk-checkboxes', 'data-module': 'govuk-checkboxes'}, items
            )
            fieldset = self._fieldset(
                legend_key, boxes,
                error_attributes=attributes, legend_options=legend_options,
                heading=heading, page_heading=page_heading, inline=inline,
            )
        return self._form_group(attributes, fieldset, group_attribute=legend_key)

    def radio_input(self, choice: Any, *, panel_id: Optional[str] = None,
                    block: Optional[Block] = None, **options: Any) -> Markup:
        """
        One radio (plus its revealing panel) inside ``radio_button_fieldset``.

        The attribute comes from the enclosing fieldset. With a block or an
        explicit ``panel_id``, the radio controls the panel
        ``{attribute}_{choice}_panel`` via ``data-aria-controls``.

        Raises:
            ValueError: When called outside a radio fieldset
        """
        fieldset_attribute = fieldset_state.current_fieldset_attribute()
        if fieldset_attribute is None:
            raise ValueError("radio_input must be called inside radio_button_fieldset")

        panel = None
        if block is not None or panel_id is not None:
            panel_id = fieldset_state.panel_id(fieldset_attribute, choice, override=panel_id)
            options['data-aria-controls'] = panel_id
            if block is not None:
                panel = self.revealing_panel(panel_id, 'radios', block=block)

        option = self._radio_inputs(fieldset_attribute, [choice], **options)[0]
        return self.markup.join([option, panel])

    def check_box_input(self, attribute: str, *, panel_id: Optional[str] = None,
                        block: Optional[Block] = None, **options: Any) -> Markup:
        """One check box (plus its revealing panel ``{attribute}_panel``) inside ``check_box_fieldset``."""
        panel = None
        if block is not None or panel_id is not None:
            panel_id = fieldset_state.panel_id(attribute, override=panel_id)
            options['data-aria-controls'] = panel_id
            if block is not None:
                panel = self.revealing_panel(panel_id, 'checkboxes', block=block)

        checkbox = self._check_box_inputs([attribute], **options)[0]
        return self.markup.join([checkbox, panel])

    def revealing_panel(self, panel_id: str, element_type: str = 'checkboxes', *,
                        block: Optional[Block] = None) -> Markup:
        """Conditionally revealed container for the fields rendered by ``block``."""
        if element_type not in REVEALING_PANEL_TYPES:
            logger.warning("Revealing panels only work for radios and checkboxes")

        return self.markup.render_tag(
            'div',
            {
                'class': [
                    f"govuk-{element_type}__conditional",
                    f"govuk-{element_type}__conditional--hidden",
                ],
                'id': panel_id,
            },
            self.capture(block),
        )

    def date_field(
        self,
        attribute: str,
        *,
        date_of_birth: bool = False,
        readonly: bool = False,
        disabled: bool = False,
        legend_options: Optional[Mapping] = None,
        heading: bool = False,
        page_heading: bool = False,
    ) -> Markup:
        """
        Day / month / year inputs in a fieldset.

        Inputs are named ``{object_name}[{attribute}(3i)]`` (day), ``(2i)``
        (month) and ``(1i)`` (year), and read their values from the
        ``day``/``month``/``year`` of the bound date.
        """
        with fieldset_state.fieldset_scope(attribute):
            items = [
                self._date_input_item(attribute, 'day', date_of_birth=date_of_birth,
                                      readonly=readonly, disabled=disabled),
                self._date_input_item(attribute, 'month', date_of_birth=date_of_birth,
                                      readonly=readonly, disabled=disabled),
                self._date_input_item(attribute, 'year', width=4, date_of_birth=date_of_birth,
                                      readonly=readonly, disabled=disabled),
            ]
            date_inputs = self.markup.render_tag(
                'div', {'class': 'govuk-date-input', 'id': self.field_id(attribute)}, items
            )
            fieldset = self._fieldset(
                attribute, date_inputs,
                legend_options=legend_options, heading=heading, page_heading=page_heading, role='group',
            )
        return self._form_group([attribute], fieldset)

    # ==================== COLLECTIONS ====================

    def collection_select(
        self,
        method: str,
        collection: Iterable[Any],
        value_method: Any = None,
        text_method: Any = None,
        *,
        include_blank: Union[bool, str, None] = None,
        label_options: Optional[Mapping] = None,
        block: Optional[Block] = None,
        **options: Any,
    ) -> Markup:
        """Labelled select box with one option per collection item."""
        label = self._field_label(method, label_options)
        after_hint_markup = self.capture(block)

        current = self._value(method)
        option_tags = []
        if include_blank not in (None, False):
            blank_text = '' if include_blank is True else include_blank
            option_tags.append(self.markup.render_tag('option', {'value': ''}, blank_text))
        for item in collection:
            value = _read(item, value_method)
            option_tags.append(self.markup.render_tag(
                'option',
                {'value': value, 'selected': current is not None and str(current) == str(value)},
                _read(item, text_method),
            ))

        attributes = self._control_attributes(method, 'govuk-select', options)
        select = self.markup.render_tag('select', attributes, option_tags)
        return self._form_group([method], [label, after_hint_markup, select])

    def collection_check_boxes(self, method: str, collection: Iterable[Any], value_method: Any = None,
                               text_method: Any = None, *, legend_options: Optional[Mapping] = None,
                               heading: bool = False, **options: Any) -> Markup:
        """Fieldset of check boxes submitting ``{object_name}[{method}][]``."""
        current = self._value(method)
        if isinstance(current, (list, tuple, set, frozenset)):
            selected = {str(v) for v in current}
        else:
            selected = set() if current is None else {str(current)}

        items = self._collection_items(
            method, collection, value_method, text_method,
            input_type='checkbox', element_type='checkboxes',
            name=f"{self.field_name(method)}[]", is_checked=lambda value: str(value) in selected,
            options=options,
        )
        hidden = self.markup.render_tag(
            'input', {'type': 'hidden', 'name': f"{self.field_name(method)}[]", 'value': '', 'autocomplete': 'off'}
        )
        boxes = self.markup.render_tag(
            'div', {'class': 'govuk-checkboxes', 'data-module': 'govuk-checkboxes'}, [hidden, *items]
        )
        with fieldset_state.fieldset_scope(method):
            fieldset = self._fieldset(method, boxes, legend_options=legend_options, heading=heading)
        return self._form_group([method], fieldset)

    def collection_radio_buttons(self, method: str, collection: Iterable[Any], value_method: Any = None,
                                 text_method: Any = None, *, legend_options: Optional[Mapping] = None,
                                 heading: bool = False, **options: Any) -> Markup:
        """Fieldset of radio buttons, one per collection item."""
        current = self._value(method)
        items = self._collection_items(
            method, collection, value_method, text_method,
            input_type='radio', element_type='radios',
            name=self.field_name(method),
            is_checked=lambda value: current is not None and str(current) == str(value),
            options=options,
        )
        radios = self.markup.render_tag('div', {'class': 'govuk-radios', 'data-module': 'govuk-radios'}, items)
        with fieldset_state.fieldset_scope(method):
            fieldset = self._fieldset(method, radios, legend_options=legend_options, heading=heading)
        return self._form_group([method], fieldset)

    # ==================== BUILDING BLOCKS ====================

    def _described_by(self, attribute: Any, field_id: str) -> Optional[str]:
        ids = []
        if self.hint_text(attribute):
            ids.append(f"{field_id}_hint")
        if self.error_for(attribute):
            ids.append(f"error_message_{field_id}")
        return ' '.join(ids) or None

    def _control_attributes(
        self,
        attribute: Any,
        default_class: str,
        options: Mapping,
        *,
        input_type: Optional[str] = None,
        value: Any = _UNSET,
        width: Any = None,
    ) -> Dict[str, Any]:
        """Attributes of an input/textarea/select, error annotations included."""
        options = dict(options)
        field_id = self.field_id(attribute)

        classes = [default_class]
        if self.error_for(attribute):
            classes.append(f"{default_class}--error")
        if width is not None:
            classes.append(width_class(width))
        classes.extend(_pop_classes(options))

        attributes: Dict[str, Any] = {}
        described_by = self._described_by(attribute, field_id)
        if described_by:
            attributes['aria-describedby'] = described_by
        attributes['class'] = classes
        if input_type is not None:
            attributes['type'] = input_type
        attributes['name'] = self.field_name(attribute)
        attributes['id'] = field_id
        if value is not _UNSET:
            attributes['value'] = value
        attributes.update(options)
        return attributes

    def _hint_tags(self, attribute: Any) -> List[Markup]:
        hint = self.hint_text(attribute)
        if not hint:
            return []
        return [self.markup.render_tag('span', {'class': 'govuk-hint', 'id': self.hint_id(attribute)}, hint)]

    def _error_tags(self, attributes: Iterable[Any]) -> List[Markup]:
        tags = []
        for attribute in attributes:
            message = self.error_full_message_for(attribute)
            if message:
                tags.append(self.markup.render_tag(
                    'span', {'class': 'govuk-error-message', 'id': self.error_message_id(attribute)}, message
                ))
        return tags

    def _field_label(self, attribute: Any, label_options: Optional[Mapping] = None, *, hints: bool = True) -> Markup:
        """Label holding the text, then hints, then the error message."""
        options = dict(label_options or {})
        text = options.pop('text', None) or self.localized_label(attribute)
        if options.pop('overwrite_defaults', False):
            options = merge_attributes(options, {})
        else:
            options = merge_attributes(options, {'class': 'govuk-label'})
        options['for'] = self.field_id(attribute)

        content: List[Any] = [text]
        if hints:
            content.extend(self._hint_tags(attribute))
        content.extend(self._error_tags([attribute]))
        return self.markup.render_tag('label', options, content)

    def _fieldset_legend(self, attribute: Any, legend_options: Optional[Mapping] = None, *,
                         heading: bool = False, page_heading: bool = False) -> Markup:
        legend_classes = ['govuk-fieldset__legend']
        text = self.fieldset_text(attribute)

        if page_heading:
            legend_classes.append('govuk-fieldset__legend--l')
            inner = self.markup.render_tag(
                'h1', merge_attributes(legend_options, {'class': 'govuk-fieldset__heading'}), text
            )
        elif heading:
            legend_classes.append('govuk-fieldset__legend--m')
            inner = self.markup.render_tag(
                'h2', merge_attributes(legend_options, {'class': 'govuk-fieldset__heading'}), text
            )
        else:
            inner = self.markup.render_tag(
                'span', merge_attributes(legend_options, {'class': 'govuk-label'}), text
            )
        return self.markup.render_tag('legend', {'class': legend_classes}, inner)

    def _fieldset(
        self,
        legend_key: Any,
        body: Any,
        *,
        error_attributes: Optional[Sequence[Any]] = None,
        legend_options: Optional[Mapping] = None,
        heading: bool = False,
        page_heading: bool = False,
        inline: bool = False,
        role: Optional[str] = None,
    ) -> Markup:
        """Fieldset with legend, hint and error messages, described-by wired to both."""
        error_attributes = list(error_attributes) if error_attributes is not None else [legend_key]
        legend = self._fieldset_legend(legend_key, legend_options, heading=heading, page_heading=page_heading)
        hint_tags = self._hint_tags(legend_key)
        error_tags = self._error_tags(error_attributes)

        described_by = []
        if hint_tags:
            described_by.append(self.hint_id(legend_key))
        described_by.extend(
            self.error_message_id(attribute) for attribute in error_attributes if self.error_for(attribute)
        )

        classes = ['govuk-fieldset']
        if inline:
            classes.append('inline')
        attributes: Dict[str, Any] = {'class': classes}
        if role:
            attributes['role'] = role
        if described_by:
            attributes['aria-describedby'] = ' '.join(described_by)
        return self.markup.render_tag('fieldset', attributes, [legend, *hint_tags, *error_tags, body])

    def _form_group(self, attributes: Sequence[Any], content: Any,
                    *, group_attribute: Any = None) -> Markup:
        """
        Form group wrapper; error styling when any attribute has an error.

        The id comes from ``group_attribute`` (default: the first attribute).
        Groups holding several attributes anchor each attribute's errors on
        its own item instead.
        """
        classes = ['govuk-form-group']
        if any(self.error_for(attribute) for attribute in attributes):
            classes.append('govuk-form-group--error')
        group_id = self.form_group_id(group_attribute if group_attribute is not None else attributes[0])
        return self.markup.render_tag('div', {'class': classes, 'id': group_id}, content)

    def _radio_inputs(self, attribute: Any, choices: Optional[Iterable[Any]] = None, *,
                      value_method: Any = None, text_method: Any = None, **options: Any) -> List[Markup]:
        if choices is None:
            choices = self.config.default_choices
        current = self._value(attribute)

        items = []
        for choice in choices:
            value = _read(choice, value_method)
            input_id = self.field_id(attribute, sanitized_value(value))

            input_options = dict(options)
            input_attributes = {
                'class': ['govuk-radios__input'] + _pop_classes(input_options),
                'type': 'radio',
                'value': value,
                'name': self.field_name(attribute),
                'id': input_id,
                'checked': current is not None and str(current) == str(value),
            }
            input_attributes.update(input_options)

            if text_method is not None:
                text = _read(choice, text_method)
            else:
                text = self._localized(
                    self.config.label_scope, f"{attribute}.{sanitized_value(value)}", humanize(value)
                )

            label = self.markup.render_tag(
                'label', {'class': ['govuk-label', 'govuk-radios__label'], 'for': input_id}, text
            )
            items.append(self.markup.render_tag(
                'div', {'class': 'govuk-radios__item'}, [self.markup.render_tag('input', input_attributes), label]
            ))
        return items

    def _check_box_inputs(self, attributes: Iterable[Any], *, label_options: Optional[Mapping] = None,
                          **options: Any) -> List[Markup]:
        label_text = (label_options or {}).get('text')

        items = []
        for attribute in attributes:
            input_id = self.field_id(attribute)
            input_options = dict(options)
            hidden = self.markup.render_tag(
                'input', {'type': 'hidden', 'name': self.field_name(attribute), 'value': '0', 'autocomplete': 'off'}
            )
            checkbox_attributes = {
                'class': ['govuk-checkboxes__input'] + _pop_classes(input_options),
                'type': 'checkbox',
                'value': '1',
                'name': self.field_name(attribute),
                'id': input_id,
                'checked': _is_checked(self._value(attribute)),
            }
            checkbox_attributes.update(input_options)

            label = self.markup.render_tag(
                'label',
                {'class': ['govuk-label', 'govuk-checkboxes__label'], 'for': input_id},
                label_text or self.localized_label(attribute),
            )
            # error summary links land on the item of each erroring check box
            item_id = f"error_{input_id}" if self.error_for(attribute) else None
            items.append(self.markup.render_tag(
                'div',
                {'class': 'govuk-checkboxes__item', 'id': item_id},
                [hidden, self.markup.render_tag('input', checkbox_attributes), label],
            ))
        return items

    def _collection_items(self, method: str, collection: Iterable[Any], value_method: Any, text_method: Any, *,
                          input_type: str, element_type: str, name: str,
                          is_checked: Callable[[Any], bool], options: Mapping) -> List[Markup]:
        items = []
        for item in collection:
            value = _read(item, value_method)
            input_id = self.field_id(method, sanitized_value(value))
            input_options = dict(options)
            input_attributes = {
                'class': [f"govuk-{element_type}__input"] + _pop_classes(input_options),
                'type': input_type,
                'value': value,
                'name': name,
                'id': input_id,
                'checked': is_checked(value),
            }
            input_attributes.update(input_options)
            label = self.markup.render_tag(
                'label', {'class': ['govuk-label', f"govuk-{element_type}__label"], 'for': input_id},
                _read(item, text_method),
            )
            items.append(self.markup.render_tag(
                'div', {'class': f"govuk-{element_type}__item"},
                [self.markup.render_tag('input', input_attributes), label],
            ))
        return items

    def _date_input_item(self, attribute: str, segment: str, *, width: Any = 2, date_of_birth: bool = False,
                         readonly: bool = False, disabled: bool = False) -> Markup:
        if segment not in DATE_SEGMENTS:
            raise ValueError(f"Unknown date segment {segment!r}; expected one of {sorted(DATE_SEGMENTS)}")
        code = DATE_SEGMENTS[segment]
        input_id = self.field_id(attribute, code)

        classes = ['govuk-input', 'govuk-date-input__input', width_class(width)]
        if self.error_for(attribute):
            classes.append('govuk-input--error')

        input_attributes: Dict[str, Any] = {'class': classes, 'type': 'number', 'pattern': '[0-9]*'}
        if date_of_birth:
            input_attributes['autocomplete'] = AUTOCOMPLETE_SEGMENTS[segment]
        input_attributes.update({
            'name': f"{self.object_name}[{attribute}({code})]",
            'value': getattr(self._value(attribute), segment, None),
            'id': input_id,
            'readonly': readonly,
            'disabled': disabled,
        })

        label = self.markup.render_tag(
            'label', {'class': ['govuk-label', 'govuk-date-input__label'], 'for': input_id}, segment.capitalize()
        )
        return self.markup.render_tag(
            'div', {'class': 'govuk-date-input__item'}, [label, self.markup.render_tag('input', input_attributes)]
        )
