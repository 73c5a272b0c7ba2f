"""
Consolidated error summary for a resource tree.

Lists every validation message of the root and of every nested resource,
each linking to the form group of the offending field::

    error_summary(person, 'There is a problem', 'Check the following')

renders (without the whitespace)::

    <div class="govuk-error-summary" aria-labelledby="error-summary-title"
         role="alert" tabindex="-1" data-module="govuk-error-summary">
      <h2 class="govuk-error-summary__title" id="error-summary-title">There is a problem</h2>
      <div class="govuk-error-summary__body">
        <p>Check the following</p>
        <ul class="govuk-list govuk-error-summary__list">
          <li><a href="#error_person_name">Full name is required</a></li>
          <li><a href="#error_person_address_attributes_postcode">Postcode is invalid</a></li>
        </ul>
      </div>
    </div>
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from markupsafe import Markup

from govukform.config import get_form_config
from govukform.localization import Translator, humanize, localized
from govukform.markup import MarkupRenderer
from govukform.validation import full_message
from resourcegraph.errors import Validator
from resourcegraph.path_resolver import ResourcePaths
from resourcegraph.walker import has_errors, objects_with_errors

logger = logging.getLogger(__name__)

SUMMARY_TITLE_ID = 'error-summary-title'
ERROR_ANCHOR_PREFIX = 'error_'


@dataclass(frozen=True)
class ErrorSummaryEntry:
    """One summary line: the anchor of the field's form group and the message shown."""
    href: str
    text: Markup


def error_summary_entries(
    obj: Any,
    *,
    translator: Optional[Translator] = None,
    validator: Optional[Validator] = None,
) -> List[ErrorSummaryEntry]:
    """
    Flat list of summary entries for ``obj`` and everything reachable from it.

    Root messages come first, then descendants in traversal order; within an
    object, fields follow the validator's mapping order and every message
    gets its own entry.
    """
    if obj is None:
        return []
    config = get_form_config()
    translator = translator or config.translator
    validator = validator or config.validator

    paths = ResourcePaths.for_root(obj)
    entries = []
    for errored in [obj, *objects_with_errors(obj, validator)]:
        prefixes = paths.prefixes(errored)
        for field_name, messages in validator.errors_for(errored).items():
            label = localized(
                translator,
                config.label_scope,
                paths.localization_key(errored, field_name),
                humanize(field_name),
            )
            href = f"#{ERROR_ANCHOR_PREFIX}{paths.dom_id(errored, field_name)}"
            for message in messages:
                entries.append(ErrorSummaryEntry(href=href, text=full_message(label, message)))
        logger.debug(f"Summarised errors of {type(errored).__name__} at {'.'.join(prefixes)}")
    return entries


def error_summary(
    obj: Any,
    heading: str,
    description: str,
    *,
    markup: Optional[MarkupRenderer] = None,
    translator: Optional[Translator] = None,
    validator: Optional[Validator] = None,
) -> Markup:
    """
    Render the error summary block for ``obj``.

    Args:
        obj: Root resource (may be None)
        heading: Summary title
        description: Paragraph shown above the list
        markup: Markup builder (defaults to the configured one)
        translator: Translator for field labels (defaults to the configured one)
        validator: Validator (defaults to the configured one)

    Returns:
        The summary markup, or an empty Markup when nothing in the tree has errors.
    """
    config = get_form_config()
    markup = markup or config.markup
    validator = validator or config.validator

    if not has_errors(obj, validator):
        return Markup('')

    items = [
        markup.render_tag('li', None, markup.render_tag('a', {'href': entry.href}, entry.text))
        for entry in error_summary_entries(obj, translator=translator, validator=validator)
    ]

    title = markup.render_tag('h2', {'class': 'govuk-error-summary__title', 'id': SUMMARY_TITLE_ID}, heading)
    body = markup.render_tag('div', {'class': 'govuk-error-summary__body'}, [
        markup.render_tag('p', None, description),
        markup.render_tag('ul', {'class': ['govuk-list', 'govuk-error-summary__list']}, items),
    ])
    return markup.render_tag(
        'div',
        {
            'class': 'govuk-error-summary',
            'aria-labelledby': SUMMARY_TITLE_ID,
            'role': 'alert',
            'tabindex': '-1',
            'data-module': 'govuk-error-summary',
        },
        [title, body],
    )
