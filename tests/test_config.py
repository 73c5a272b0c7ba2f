"""Tests for form configuration."""
import threading

import pytest

from govukform import (
    CatalogTranslator,
    FormBuilder,
    FormConfig,
    MarkupBuilder,
    form_config_context,
    get_form_config,
    set_form_config,
)


def test_defaults():
    config = get_form_config()

    assert isinstance(config.markup, MarkupBuilder)
    assert config.label_scope == "helpers.label"
    assert config.hint_scope == "helpers.hint"
    assert config.fieldset_scope == "helpers.fieldset"
    assert config.default_choices == ("yes", "no")
    assert config.currency_symbol == "£"


def test_set_form_config(translator):
    config = FormConfig(translator=translator)
    set_form_config(config)
    assert get_form_config() is config


def test_set_form_config_rejects_other_types():
    with pytest.raises(TypeError):
        set_form_config({"translator": None})


def test_context_overrides_and_restores(translator):
    default = get_form_config()

    with form_config_context(translator=translator) as config:
        assert get_form_config() is config
        assert config.translator is translator
        assert config.label_scope == default.label_scope

    assert get_form_config() is default


def test_nested_contexts():
    with form_config_context(currency_symbol="€"):
        with form_config_context(default_choices=("a", "b")) as inner:
            assert inner.currency_symbol == "€"
            assert inner.default_choices == ("a", "b")
        assert get_form_config().default_choices == ("yes", "no")


def test_context_with_explicit_config():
    base = FormConfig(currency_symbol="$")
    with form_config_context(base, label_scope="labels") as config:
        assert config.currency_symbol == "$"
        assert config.label_scope == "labels"


def test_context_is_not_shared_with_other_threads():
    default = get_form_config()
    seen = []

    with form_config_context(currency_symbol="€"):
        thread = threading.Thread(target=lambda: seen.append(get_form_config()))
        thread.start()
        thread.join(timeout=5)

    assert seen[0] is default


def test_builder_uses_active_config(translator, person):
    with form_config_context(translator=translator):
        builder = FormBuilder("person", person)
    assert "Full name" in builder.text_field("name")


def test_explicit_arguments_win(translator, person):
    other = CatalogTranslator({"helpers": {"label": {"person": {"name": "Your name"}}}})
    with form_config_context(translator=translator):
        builder = FormBuilder("person", person, translator=other)
        assert "Your name" in builder.text_field("name")
