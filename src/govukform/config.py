"""
Form configuration: collaborators and lookup scopes.

PROCESS DEFAULT + CONTEXT OVERRIDE PATTERN:
- set_form_config(): process-wide default, set once at application startup
- form_config_context(): ContextVar-scoped override for one render (or test),
  nestable, invisible to other threads and asyncio tasks

Explicit arguments to FormBuilder / error_summary always win over both.
"""

import contextvars
import dataclasses
import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional, Tuple

from govukform.localization import CatalogTranslator, Translator
from govukform.markup import MarkupBuilder, MarkupRenderer
from resourcegraph.errors import AttributeErrorsValidator, Validator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormConfig:
    """Collaborators and conventions used when rendering forms."""
    markup: MarkupRenderer = field(default_factory=MarkupBuilder)
    translator: Translator = field(default_factory=CatalogTranslator)
    validator: Validator = field(default_factory=AttributeErrorsValidator)
    label_scope: str = 'helpers.label'
    hint_scope: str = 'helpers.hint'
    fieldset_scope: str = 'helpers.fieldset'
    default_choices: Tuple[Any, ...] = ('yes', 'no')
    currency_symbol: str = '£'


_default_config = FormConfig()

_config_override: contextvars.ContextVar[Optional[FormConfig]] = contextvars.ContextVar(
    'form_config_override', default=None
)


def get_form_config() -> FormConfig:
    """Active configuration: the innermost form_config_context(), else the process default."""
    override = _config_override.get()
    return override if override is not None else _default_config


def set_form_config(config: FormConfig) -> None:
    """Replace the process-wide default configuration (application startup)."""
    global _default_config
    if not isinstance(config, FormConfig):
        raise TypeError(f"Expected FormConfig, got {type(config).__name__}")
    _default_config = config
    logger.debug(f"Default form config set: translator={type(config.translator).__name__}")


def reset_form_config() -> None:
    """Restore the built-in default configuration."""
    set_form_config(FormConfig())


@contextmanager
def form_config_context(config: Optional[FormConfig] = None, **overrides: Any) -> Iterator[FormConfig]:
    """
    Override the active configuration inside the block.

    Args:
        config: Base configuration (defaults to the currently active one)
        **overrides: FormConfig fields to replace on top of ``config``

    Usage:
        with form_config_context(translator=CatalogTranslator(catalog)):
            html = error_summary(person, 'There is a problem', 'Fix the following')
    """
    base = config if config is not None else get_form_config()
    if overrides:
        base = dataclasses.replace(base, **overrides)
    token = _config_override.set(base)
    try:
        yield base
    finally:
        _config_override.reset(token)
