"""
Resource dataclasses and form rendering for a waste exemption application.

Shows the pieces working together: a nested resource tree, a YAML label
catalog, the error summary and a form built with nested builders and a
revealing panel.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional

from govukform import CatalogTranslator, FormBuilder, error_summary, form_config_context

logger = logging.getLogger(__name__)

LOCALE_FILE = Path(__file__).with_name("en.yml")


@dataclass
class Address:
    """Postal address of the operator."""
    premises: str = ""
    postcode: str = ""
    errors: Dict[str, List[str]] = field(default_factory=dict)


@dataclass
class Operator:
    """Person or company applying for the exemption."""
    name: str = ""
    date_of_birth: Optional[date] = None
    location: Optional[str] = None
    location_other: str = ""
    address: Optional[Address] = None
    errors: Dict[str, List[str]] = field(default_factory=dict)


def render_operator_form(operator: Operator) -> str:
    """Render the error summary followed by the operator form."""
    translator = CatalogTranslator.from_yaml(LOCALE_FILE, locale="en") if LOCALE_FILE.exists() else None

    with form_config_context(**({"translator": translator} if translator else {})):
        builder = FormBuilder("operator", operator)
        parts = [
            error_summary(operator, "There is a problem", "Check the following"),
            builder.text_field("name", width="two-thirds"),
            builder.date_field("date_of_birth", date_of_birth=True),
            builder.radio_button_fieldset("location", block=lambda fieldset: (
                fieldset.radio_input("england"),
                fieldset.radio_input("other", block=lambda panel: panel.text_field("location_other")),
            )),
            builder.fields_for("address", block=lambda address: (
                address.text_field("premises"),
                address.text_field("postcode", width=10),
            )),
            builder.submit(),
        ]
    return "\n".join(parts)


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    operator = Operator(
        name="",
        address=Address(postcode="not a postcode", errors={"postcode": ["is not a valid postcode"]}),
        errors={"name": ["can't be blank"]},
    )
    print(render_operator_form(operator))
