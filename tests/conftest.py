"""Pytest configuration and shared fixtures."""
import pytest
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional

from govukform import CatalogTranslator, reset_form_config
from resourcegraph import clear_schema_cache


@dataclass
class Country:
    """Leaf resource."""
    name: str = ""
    errors: Dict[str, List[str]] = field(default_factory=dict)


@dataclass
class Address:
    """Nested resource holding a country."""
    postcode: str = ""
    country: Optional[Country] = None
    errors: Dict[str, List[str]] = field(default_factory=dict)


@dataclass
class Person:
    """Root resource used by most form tests."""
    name: str = ""
    ni_number: str = ""
    location: Optional[str] = None
    gender: Optional[str] = None
    date_of_birth: Optional[date] = None
    address: Optional[Address] = None
    errors: Dict[str, List[str]] = field(default_factory=dict)


@dataclass
class WasteTransport:
    """Resource with boolean check box attributes."""
    animal_carcasses: str = "0"
    mines: str = "0"
    errors: Dict[str, List[str]] = field(default_factory=dict)


CATALOG = {
    "helpers": {
        "label": {
            "person": {
                "name": "Full name",
                "location": {
                    "england": "England",
                    "other": "Somewhere else",
                },
            },
            "person[address_attributes]": {
                "postcode": "Postcode",
            },
            "person[address_attributes][country_attributes]": {
                "name": "Country",
            },
            "waste_transport": {
                "mines": "Mining waste",
            },
        },
        "hint": {
            "person": {
                "ni_number": "It is on your last payslip.",
            },
            "waste_transport": {
                "waste_types": "Select all that apply.",
            },
        },
        "fieldset": {
            "person": {
                "location": "Where do you live?",
            },
            "waste_transport": {
                "waste_types": "Which waste do you transport?",
            },
        },
    }
}


@pytest.fixture(autouse=True)
def reset_config():
    """Restore the default form configuration and schema cache around each test."""
    reset_form_config()
    clear_schema_cache()

    yield

    reset_form_config()
    clear_schema_cache()


@pytest.fixture
def catalog():
    """Provide the test translation catalog."""
    return CATALOG


@pytest.fixture
def translator(catalog):
    """Provide a translator over the test catalog."""
    return CatalogTranslator(catalog)


@pytest.fixture
def country():
    return Country(name="Wales")


@pytest.fixture
def address(country):
    return Address(postcode="CF10 1AA", country=country)


@pytest.fixture
def person(address):
    """Provide a person with a nested address and country, no errors."""
    return Person(name="Ann", address=address)


@pytest.fixture
def waste_transport():
    return WasteTransport()
