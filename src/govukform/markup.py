"""
Markup builder: tag name + attribute map + content -> safe HTML.

The form builder and error summary only talk to a :class:`MarkupRenderer`;
:class:`MarkupBuilder` is the default implementation, escaping text with
``markupsafe`` and passing ``Markup`` fragments through untouched.

Attribute conventions:
- ``class`` takes a string or a (possibly nested) list of strings
- ``aria`` and ``data`` take dicts, expanded to ``aria-*`` / ``data-*``
- ``for_`` / ``class_`` style keys lose their trailing underscore, and
  ``aria_describedby`` style keys become ``aria-describedby``
- ``None`` and ``False`` drop the attribute; ``True`` renders it bare
- anything else passes through verbatim
"""

from typing import Any, Dict, Iterable, Mapping, Optional, Protocol

from markupsafe import Markup, escape

VOID_ELEMENTS = frozenset({
    'area', 'base', 'br', 'col', 'embed', 'hr', 'img', 'input',
    'link', 'meta', 'source', 'track', 'wbr',
})

_PREFIXED_GROUPS = ('aria', 'data')


class MarkupRenderer(Protocol):
    """Anything that can serialize a single tag."""

    def render_tag(self, name: str, attributes: Optional[Mapping[str, Any]] = None, content: Any = None) -> Markup:
        ...

    def join(self, fragments: Iterable[Any], separator: str = '') -> Markup:
        ...


def flatten_classes(value: Any) -> list:
    """Flatten a class value (string, list, nested lists) into a list of class names."""
    if value is None or value is False:
        return []
    if isinstance(value, (list, tuple)):
        result = []
        for item in value:
            result.extend(flatten_classes(item))
        return result
    return [part for part in str(value).split() if part]


class MarkupBuilder:
    """Default markup builder."""

    def render_tag(self, name: str, attributes: Optional[Mapping[str, Any]] = None, content: Any = None) -> Markup:
        """
        Serialize one element.

        Args:
            name: Tag name
            attributes: Attribute map (see module docstring for conventions)
            content: String (escaped unless Markup), list of fragments, or None.
                     Ignored for void elements.

        Returns:
            The element as Markup
        """
        rendered_attributes = self.render_attributes(attributes or {})
        opening = Markup(f"<{name}") + rendered_attributes + Markup(">")
        if name in VOID_ELEMENTS:
            return opening
        return opening + self.render_content(content) + Markup(f"</{name}>")

    def render_content(self, content: Any) -> Markup:
        if content is None:
            return Markup('')
        if isinstance(content, (list, tuple)):
            return self.join(content)
        return escape(content)

    def join(self, fragments: Iterable[Any], separator: str = '') -> Markup:
        """Join fragments, escaping any that are not already Markup. None entries are skipped."""
        return Markup(separator).join(fragment for fragment in fragments if fragment is not None)

    def render_attributes(self, attributes: Mapping[str, Any]) -> Markup:
        pieces = []
        for key, value in self.normalize_attributes(attributes).items():
            if value is None or value is False:
                continue
            if value is True:
                pieces.append(Markup(' ') + escape(key))
                continue
            if key == 'class':
                classes = flatten_classes(value)
                if not classes:
                    continue
                value = ' '.join(classes)
            elif isinstance(value, (list, tuple)):
                value = ' '.join(str(item) for item in value if item is not None)
            pieces.append(Markup(' {0}="{1}"').format(key, value))
        return Markup('').join(pieces)

    def normalize_attributes(self, attributes: Mapping[str, Any]) -> Dict[str, Any]:
        """Expand ``aria``/``data`` groups and normalize Python-style keys, keeping order."""
        normalized: Dict[str, Any] = {}
        for key, value in attributes.items():
            key = str(key)
            if key in _PREFIXED_GROUPS and isinstance(value, Mapping):
                for sub_key, sub_value in value.items():
                    normalized[f"{key}-{str(sub_key).replace('_', '-')}"] = sub_value
                continue
            normalized[self.normalize_key(key)] = value
        return normalized

    @staticmethod
    def normalize_key(key: str) -> str:
        if key.endswith('_') and len(key) > 1:
            key = key[:-1]
        if key.startswith(('aria_', 'data_')):
            key = key.replace('_', '-')
        return key
