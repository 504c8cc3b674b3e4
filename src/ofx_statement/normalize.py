"""Conversion of legacy SGML OFX markup into a well-formed XML tree."""

from __future__ import annotations

import logging
import re
import sys
import xml.etree.ElementTree as ET

from ofx_statement.errors import NormalizationFailure
from ofxtools.Parser import ParseError, TreeBuilder

LOGGER = logging.getLogger(__name__)

NAMED_ENTITIES = {'amp': '&', 'lt': '<', 'gt': '>', 'quot': '"', 'apos': "'"}
ENTITY_PATTERN = re.compile(r'&(?:#x(?P<hex>[0-9A-Fa-f]+)|#(?P<dec>[0-9]+)|(?P<name>amp|lt|gt|quot|apos));')


def _replace_entity(match: re.Match[str]) -> str:
    if match.group('name') is not None:
        return NAMED_ENTITIES[match.group('name')]
    if match.group('hex') is not None:
        code = int(match.group('hex'), 16)
    else:
        code = int(match.group('dec'))
    if code > sys.maxunicode:
        raise ParseError(f'Invalid character reference {match.group(0)}')
    return chr(code)


def decode_entities(text: str) -> str:
    """Replace XML character entities and numeric references in leaf text."""

    return ENTITY_PATTERN.sub(_replace_entity, text)


class LegacyTreeBuilder(TreeBuilder):
    """``ofxtools`` tree builder that closes implicit SGML tags.

    A start tag without text is opened as an aggregate. When a close tag for an
    enclosing element arrives while it is still open, it was an empty leaf: it
    is closed and anything nested under it moves back to its parent.
    """

    def __init__(self) -> None:
        super().__init__()
        self._open: list[ET.Element] = []
        self._root: ET.Element | None = None

    def start(self, tag: str, attrs: dict[str, str], /) -> ET.Element:
        if self._root is not None and not self._open:
            raise ParseError(f'Element <{tag}> found after the root element was closed')
        element = super().start(tag, attrs)
        if self._root is None:
            self._root = element
        self._open.append(element)
        return element

    def data(self, data: str, /) -> None:
        super().data(decode_entities(data))

    def end(self, tag: str, /) -> ET.Element:
        if not any(element.tag == tag for element in self._open):
            raise ParseError(f'Close tag </{tag}> does not match any open element')
        while self._open[-1].tag != tag:
            self._close_implicit()
        self._open.pop()
        return super().end(tag)

    def close(self) -> ET.Element:
        if self._root is None:
            raise ParseError('Legacy OFX markup contains no elements')
        while len(self._open) > 1:
            self._close_implicit()
        if self._open:
            super().end(self._open.pop().tag)
        return super().close()

    def _close_implicit(self) -> None:
        element = self._open.pop()
        super().end(element.tag)
        LOGGER.debug('Closing empty element <%s>', element.tag)
        parent = self._open[-1]
        position = list(parent).index(element) + 1
        children = list(element)
        for child in children:
            element.remove(child)
        parent[position:position] = children


def strip_header(raw_text: str) -> str:
    """Remove the colon-delimited OFX 1.x header and return the markup body.

    The header ends at the first ``<``; the body keeps the character right
    before it (usually the line break closing the header).
    """
    index = raw_text.find('<')
    if index == -1:
        raise NormalizationFailure('No markup found after the OFX header')
    return raw_text[max(index - 1, 0) :]


def to_tree(body: str) -> str:
    """Close the implicit SGML tags in ``body`` and return a single-line XML serialization.

    Leaf elements end at the next tag; surrounding whitespace is dropped from
    their text, so blank lines never produce extra elements.
    """
    builder = LegacyTreeBuilder()
    try:
        builder.feed(body)
        root = builder.close()
    except ParseError as exc:
        raise NormalizationFailure(f'Failed to normalize legacy OFX markup: {exc}') from exc
    return ET.tostring(root, encoding='unicode')


def sgml_to_xml(raw_text: str) -> str:
    """Strip the legacy header from ``raw_text`` and return the body as XML."""

    LOGGER.debug('Converting legacy OFX markup to XML')
    return to_tree(strip_header(raw_text))


def load_tree(xml_text: str) -> ET.Element:
    """Parse XML OFX content into an element tree rooted at ``<OFX>``."""

    try:
        return ET.fromstring(xml_text.lstrip('\ufeff \t\r\n'))
    except ET.ParseError as exc:
        raise NormalizationFailure(f'OFX content is not well-formed XML: {exc}') from exc
