"""
GOV.UK Design System form rendering for nested resources.

Renders labelled inputs, radio and check box groups with revealing panels,
date inputs, select boxes and a consolidated error summary, all
cross-referenced by ids derived from each resource's position in the tree.

Key Features:
- Form builder emitting govuk-frontend markup
- Error annotation composed into labels and inputs (no string patching)
- Error summary linking every message to its field
- Contextvars-based fieldset state and configuration overrides
- Pluggable markup builder, translator and validator

Quick Start:
    >>> from govukform import CatalogTranslator, FormBuilder, error_summary, form_config_context
    >>> translator = CatalogTranslator.from_yaml('locales/en.yml', locale='en')
    >>>
    >>> with form_config_context(translator=translator):
    ...     summary = error_summary(person, 'There is a problem', 'Check the following')
    ...     builder = FormBuilder('person', person)
    ...     name = builder.text_field('name')
    ...     address = builder.fields_for('address', block=lambda a: a.text_field('postcode'))

Modules:
    - markup: tag serialization (markupsafe)
    - localization: translator protocol, YAML catalogs, label lookups
    - validation: error messages and full sentences
    - fieldset_state: current fieldset attribute and panel ids
    - block_buffer: markup accumulation inside blocks
    - form_builder: the form builder
    - error_summary: consolidated error summary
    - config: process default and context-scoped configuration
"""

from govukform.markup import MarkupBuilder, MarkupRenderer, flatten_classes
from govukform.localization import (
    CatalogTranslator,
    Translator,
    humanize,
    localized,
    split_key,
)
from govukform.validation import (
    AttributeErrorsValidator,
    Validator,
    error_for,
    full_message,
    messages_for,
)
from govukform.fieldset_state import (
    begin_fieldset,
    current_fieldset_attribute,
    end_fieldset,
    fieldset_scope,
    panel_id,
)
from govukform.config import (
    FormConfig,
    form_config_context,
    get_form_config,
    reset_form_config,
    set_form_config,
)
from govukform.block_buffer import BUFFERED_OPERATIONS, BlockBuffer
from govukform.form_builder import FormBuilder, attribute_prefix, merge_attributes, sanitized_value, width_class
from govukform.error_summary import ErrorSummaryEntry, error_summary, error_summary_entries

__all__ = [
    # Markup
    'MarkupBuilder',
    'MarkupRenderer',
    'flatten_classes',
    # Localization
    'CatalogTranslator',
    'Translator',
    'humanize',
    'localized',
    'split_key',
    # Validation
    'AttributeErrorsValidator',
    'Validator',
    'error_for',
    'full_message',
    'messages_for',
    # Fieldset state
    'begin_fieldset',
    'current_fieldset_attribute',
    'end_fieldset',
    'fieldset_scope',
    'panel_id',
    # Configuration
    'FormConfig',
    'form_config_context',
    'get_form_config',
    'reset_form_config',
    'set_form_config',
    # Form builder
    'BUFFERED_OPERATIONS',
    'BlockBuffer',
    'FormBuilder',
    'attribute_prefix',
    'merge_attributes',
    'sanitized_value',
    'width_class',
    # Error summary
    'ErrorSummaryEntry',
    'error_summary',
    'error_summary_entries',
]

__version__ = '1.0.0'
