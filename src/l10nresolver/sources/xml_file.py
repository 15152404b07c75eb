"""Localization source backed by an XML document.

Document layout (tag names configurable, defaults in constants):

    <localization>
      <culture name="en-US">
        <hw>Hello World!</hw>
      </culture>
      <culture name="de-DE">
        <hw>Hallo Welt!</hw>
      </culture>
    </localization>

Each un-namespaced ``culture`` element directly below the root is a locale
group. Inside a group, every child element's local tag name (namespace
stripped) is a localization code and its text content is the localized
string. The whole document is validated while it is read; any defect aborts
construction with MalformedSourceError and no source object is produced.

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, NoReturn, Protocol, Self
from xml.etree.ElementTree import Element, ParseError, XMLPullParser

from l10nresolver.constants import (
    DEFAULT_GROUP_TAG,
    DEFAULT_NAME_ATTRIBUTE,
    DEFAULT_READ_CHUNK_SIZE,
    MAX_SOURCE_SIZE,
)
from l10nresolver.diagnostics import (
    ErrorTemplate,
    LocalizedStringNotFoundError,
    MalformedSourceError,
)

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Awaitable

    from l10nresolver.diagnostics import Diagnostic
    from l10nresolver.types import LocaleCode, LocalizationCode, LocalizedString

__all__ = ["SupportsRead", "XmlFileLocalizationSource"]

logger = logging.getLogger(__name__)


class SupportsRead(Protocol):
    """Anything with ``read(size)`` returning text/bytes, directly or awaitably.

    Covers open text and binary files, ``io.StringIO``/``io.BytesIO`` and
    ``asyncio.StreamReader``.
    """

    def read(self, size: int, /) -> str | bytes | Awaitable[str | bytes]: ...


def _local_name(tag: str) -> str:
    """Strip an ElementTree ``{namespace}`` prefix from a tag."""
    return tag.rpartition("}")[2]


class _TableBuilder:
    """Incremental parser producing the locale -> code -> string table.

    Groups are validated as soon as their closing tag is parsed, then cleared
    so memory stays proportional to the table rather than the document.
    Every failure surfaces as MalformedSourceError.
    """

    __slots__ = (
        "_depth",
        "_group_tag",
        "_mode",
        "_name_attribute",
        "_parser",
        "_size",
        "_table",
        "max_source_size",
        "source_path",
    )

    def __init__(
        self,
        group_tag: str,
        name_attribute: str,
        max_source_size: int,
        source_path: str | None,
    ) -> None:
        self._group_tag = group_tag
        self._name_attribute = name_attribute
        self.max_source_size = max_source_size
        self.source_path = source_path
        self._parser = XMLPullParser(events=("start", "end"))
        self._table: dict[str, dict[str, str]] = {}
        self._depth = 0
        self._size = 0
        self._mode: type | None = None

    def feed(self, chunk: object) -> None:
        if not isinstance(chunk, (str, bytes)):
            self._fail(
                ErrorTemplate.source_undecodable(f"expected str or bytes, got {type(chunk).__name__}")
            )
        if self._mode is None:
            self._mode = type(chunk)
        elif not isinstance(chunk, self._mode):
            self._fail(ErrorTemplate.source_undecodable("mixed str and bytes chunks"))

        self._size += len(chunk)
        if self._size > self.max_source_size:
            self._fail(ErrorTemplate.source_too_large(self._size, self.max_source_size))

        try:
            self._parser.feed(chunk)
            self._drain()
        except ParseError as e:
            self._fail_syntax(e)

    def close(self) -> dict[str, dict[str, str]]:
        try:
            self._parser.close()
            self._drain()
        except ParseError as e:
            self._fail_syntax(e)
        return self._table

    def _drain(self) -> None:
        for event, elem in self._parser.read_events():
            if event == "start":
                self._depth += 1
                continue
            self._depth -= 1
            # depth 1 == direct child of the root; group tags match including namespace
            if self._depth == 1 and elem.tag == self._group_tag:
                self._add_group(elem)
                elem.clear()

    def _add_group(self, group: Element) -> None:
        locale = group.get(self._name_attribute)
        if locale is None:
            self._fail(ErrorTemplate.locale_name_missing(self._group_tag, self._name_attribute))

        strings: dict[str, str] = {}
        for child in group:
            code = _local_name(child.tag)
            if code in strings:
                self._fail(ErrorTemplate.duplicate_code(code, locale))
            strings[code] = "".join(child.itertext())

        if locale in self._table:
            self._fail(ErrorTemplate.duplicate_locale(locale, self._group_tag))
        self._table[locale] = strings

    def _fail(self, diagnostic: Diagnostic) -> NoReturn:
        logger.error("Rejected XML document %s: %s", self.source_path or "<stream>", diagnostic)
        raise MalformedSourceError(diagnostic, source_path=self.source_path)

    def _fail_syntax(self, error: ParseError) -> NoReturn:
        position = getattr(error, "position", None)
        diagnostic = ErrorTemplate.xml_syntax_error(str(error), self.source_path, position)
        logger.error("Rejected XML document %s: %s", self.source_path or "<stream>", diagnostic)
        raise MalformedSourceError(diagnostic, source_path=self.source_path) from error


class XmlFileLocalizationSource:
    """Immutable two-level table (locale -> code -> string) built from XML.

    Instances are normally obtained from the ``create`` coroutine or the
    ``from_string`` helper, both of which validate the document first.

    Example:
        >>> with open("Localization.xml", encoding="utf-8") as f:
        ...     source = await XmlFileLocalizationSource.create(f)
        >>> source.try_get_localized_string("hw", "en-US")
        (True, 'Hello World!')
        >>> source.try_get_localized_string("hw", "es-ES")
        (False, None)

    Attributes:
        locales: Locale names in document order
    """

    __slots__ = ("_table",)

    def __init__(self, table: Mapping[LocaleCode, Mapping[LocalizationCode, LocalizedString]]) -> None:
        """Freeze an already-validated table.

        Args:
            table: Mapping of locale to mapping of code to string. Copied.
        """
        self._table: Mapping[LocaleCode, Mapping[LocalizationCode, LocalizedString]] = (
            MappingProxyType({locale: MappingProxyType(dict(strings)) for locale, strings in table.items()})
        )

    @classmethod
    async def create(
        cls,
        stream: SupportsRead,
        *,
        group_tag: str = DEFAULT_GROUP_TAG,
        name_attribute: str = DEFAULT_NAME_ATTRIBUTE,
        chunk_size: int = DEFAULT_READ_CHUNK_SIZE,
        max_source_size: int = MAX_SOURCE_SIZE,
        source_path: str | None = None,
    ) -> Self:
        """Read an XML document from a stream and build a source from it.

        The stream is read exactly once, in chunks. Coroutine ``read``
        methods are awaited; blocking ones run in a worker thread.
        Cancelling the coroutine abandons construction.

        Args:
            stream: Text or binary stream (sync or async ``read``)
            group_tag: Tag of locale group elements
            name_attribute: Attribute carrying the locale name
            chunk_size: Size passed to each ``read`` call
            max_source_size: Maximum total input size
            source_path: Optional document description for diagnostics

        Returns:
            Fully-built, immutable source

        Raises:
            MalformedSourceError: If the document is invalid in any way
        """
        if chunk_size <= 0:
            msg = f"chunk_size must be positive, got {chunk_size}"
            raise ValueError(msg)

        builder = _TableBuilder(group_tag, name_attribute, max_source_size, source_path)
        async for chunk in _read_chunks(stream, chunk_size):
            builder.feed(chunk)
        return cls._finish(builder)

    @classmethod
    def from_string(
        cls,
        text: str | bytes,
        *,
        group_tag: str = DEFAULT_GROUP_TAG,
        name_attribute: str = DEFAULT_NAME_ATTRIBUTE,
        max_source_size: int = MAX_SOURCE_SIZE,
        source_path: str | None = None,
    ) -> Self:
        """Build a source from an in-memory document.

        Same validation as ``create``.

        Raises:
            MalformedSourceError: If the document is invalid in any way
        """
        builder = _TableBuilder(group_tag, name_attribute, max_source_size, source_path)
        if text:
            builder.feed(text)
        return cls._finish(builder)

    @classmethod
    def _finish(cls, builder: _TableBuilder) -> Self:
        table = builder.close()
        source = cls(table)
        logger.info(
            "XmlFileLocalizationSource built from %s: %d locale(s), %d string(s)",
            builder.source_path or "<stream>",
            len(table),
            sum(len(strings) for strings in table.values()),
        )
        return source

    @property
    def locales(self) -> tuple[LocaleCode, ...]:
        """Locale names in document order."""
        return tuple(self._table)

    def codes(self, locale: LocaleCode) -> tuple[LocalizationCode, ...]:
        """Localization codes defined for a locale (empty for unknown locales)."""
        strings = self._table.get(locale)
        return tuple(strings) if strings is not None else ()

    def __contains__(self, key: object) -> bool:
        """Support ``(code, locale) in source``."""
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        code, locale = key
        strings = self._table.get(locale)
        return strings is not None and code in strings

    def __len__(self) -> int:
        """Number of locales."""
        return len(self._table)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"XmlFileLocalizationSource(locales={list(self._table)!r})"

    def try_get_localized_string(
        self, code: LocalizationCode, locale: LocaleCode
    ) -> tuple[bool, LocalizedString | None]:
        """Exact two-level lookup; a miss at either level is absence."""
        strings = self._table.get(locale)
        if strings is None:
            return False, None
        value = strings.get(code)
        if value is None:
            return False, None
        return True, value

    def get_localized_string(self, code: LocalizationCode, locale: LocaleCode) -> LocalizedString:
        """Exact two-level lookup.

        Raises:
            LocalizedStringNotFoundError: If the locale or the code is missing
        """
        found, value = self.try_get_localized_string(code, locale)
        if not found:
            raise LocalizedStringNotFoundError(
                ErrorTemplate.string_not_in_source(code, locale, type(self).__name__),
                code=code,
                locale=locale,
                sources_tried=1,
            )
        return value  # type: ignore[return-value]


async def _read_chunks(stream: SupportsRead, chunk_size: int) -> AsyncIterator[str | bytes]:
    """Yield chunks until ``read`` returns an empty chunk."""
    read = stream.read
    is_async = inspect.iscoroutinefunction(read)
    while True:
        if is_async:
            chunk = await read(chunk_size)  # type: ignore[misc]
        else:
            chunk = await asyncio.to_thread(read, chunk_size)
            if inspect.isawaitable(chunk):
                chunk = await chunk
        if not chunk:
            return
        yield chunk
