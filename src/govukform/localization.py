"""
Translation lookups for labels, hints and fieldset legends.

The form builder consumes a :class:`Translator`; :class:`CatalogTranslator`
is the default, backed by a nested dict that can be loaded from YAML::

    helpers:
      label:
        person:
          name: Full name
        person[address_attributes]:
          postcode: Postcode
      hint:
        person:
          ni_number: It'll be on your last payslip.

Keys are split on ``.`` but bracketed segments stay intact, so
``person[address_attributes].postcode`` is looked up as
``["person[address_attributes]", "postcode"]``.

A key suffixed ``_html`` holds trusted markup and is returned as ``Markup``.
"""

import logging
import re
from pathlib import Path
from typing import Any, Mapping, Optional, Protocol, Union

import yaml
from markupsafe import Markup

logger = logging.getLogger(__name__)

_KEY_SEGMENT = re.compile(r'[^.\[\]]+(?:\[[^\]]*\])*')

HTML_SUFFIX = '_html'


class Translator(Protocol):
    """Anything that can look up a localized string."""

    def translate(self, key: str, default: str = '', scope: Optional[str] = None) -> str:
        """Return the translation for ``key`` under ``scope``, or ``default``."""
        ...


def split_key(key: str) -> list:
    """Split a dotted translation key, keeping bracketed segments whole."""
    return _KEY_SEGMENT.findall(str(key))


class CatalogTranslator:
    """Translator backed by a nested mapping."""

    def __init__(self, catalog: Optional[Mapping[str, Any]] = None):
        self.catalog = dict(catalog or {})

    @classmethod
    def from_yaml(cls, path: Union[str, Path], locale: Optional[str] = None) -> 'CatalogTranslator':
        """
        Load a catalog from a YAML file.

        Args:
            path: YAML file path
            locale: Optional top-level locale key to select (e.g. ``'en'``)
        """
        with open(path, 'r', encoding='utf-8') as f:
            catalog = yaml.safe_load(f) or {}
        if locale is not None:
            catalog = catalog.get(locale) or {}
        logger.debug(f"Loaded translation catalog from {path} (locale={locale})")
        return cls(catalog)

    def lookup(self, key: str, scope: Optional[str] = None) -> Any:
        """Raw catalog value at ``scope`` + ``key``, or None when any segment is missing."""
        segments = (split_key(scope) if scope else []) + split_key(key)
        node: Any = self.catalog
        for segment in segments:
            if not isinstance(node, Mapping) or segment not in node:
                return None
            node = node[segment]
        return node

    def translate(self, key: str, default: str = '', scope: Optional[str] = None) -> str:
        value = self.lookup(key, scope)
        if isinstance(value, str) and value:
            return value
        return default


def humanize(attribute: Any) -> str:
    """
    Default human-readable label for an attribute name or choice value.

    Drops a trailing ``_id``, turns underscores into spaces and capitalizes
    only the first letter: ``ni_number -> "Ni number"``, ``case_id -> "Case"``,
    ``1.5 -> "1.5"``.
    """
    text = str(attribute)
    if text.endswith('_id') and len(text) > 3:
        text = text[:-3]
    text = text.replace('_', ' ').strip().lower()
    return text[:1].upper() + text[1:]


def localized(translator: Translator, scope: str, key: str, default: str = '') -> Union[str, Markup]:
    """
    Two-step lookup: the plain key, then the trusted ``_html`` variant, then ``default``.

    Returns:
        Plain translation (str), trusted markup (Markup) or the default.
    """
    value = translator.translate(key, default='', scope=scope)
    if value:
        return value
    html_value = translator.translate(f"{key}{HTML_SUFFIX}", default='', scope=scope)
    if html_value:
        return Markup(html_value)
    if default:
        logger.debug(f"No translation for {scope}.{key}; using default {default!r}")
    return default
