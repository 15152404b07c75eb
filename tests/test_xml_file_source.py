"""Tests for XmlFileLocalizationSource construction and lookup.

Construction is a coroutine; tests drive it with asyncio.run().

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import io
from xml.etree.ElementTree import ParseError

import pytest

from l10nresolver import (
    LocalizationSource,
    LocalizedStringNotFoundError,
    MalformedSourceError,
    XmlFileLocalizationSource,
)
from l10nresolver.diagnostics import DiagnosticCode

SIMPLE_XML = """<?xml version="1.0" encoding="UTF-8"?>
<localization>
   <culture name="en-US">
      <hw>Hello World!</hw>
   </culture>
</localization>
"""

TWO_LOCALES_XML = """<localization>
   <culture name="en-US">
      <hw>Hello World!</hw>
      <bye>Goodbye!</bye>
   </culture>
   <culture name="de-DE">
      <hw>Hallo Welt!</hw>
   </culture>
</localization>
"""


def build(text: str, **options: object) -> XmlFileLocalizationSource:
    """Run the async factory over an in-memory text stream."""
    return asyncio.run(XmlFileLocalizationSource.create(io.StringIO(text), **options))  # type: ignore[arg-type]


class ChunkedAsyncStream:
    """Async stream serving pre-split chunks, counting read() calls."""

    def __init__(self, chunks: list[str] | list[bytes]) -> None:
        self._chunks = list(chunks)
        self.reads = 0

    async def read(self, size: int) -> str | bytes:
        self.reads += 1
        await asyncio.sleep(0)
        if not self._chunks:
            return ""
        return self._chunks.pop(0)


class TestCreate:
    """Building a source from a valid document."""

    def test_creates_source_from_text_stream(self) -> None:
        """Valid document produces a source implementing the protocol."""
        source = build(SIMPLE_XML)

        assert isinstance(source, XmlFileLocalizationSource)
        assert isinstance(source, LocalizationSource)

    def test_multiple_locales(self) -> None:
        """Every locale group becomes a table entry."""
        source = build(TWO_LOCALES_XML)

        assert source.locales == ("en-US", "de-DE")
        assert source.codes("en-US") == ("hw", "bye")
        assert source.codes("de-DE") == ("hw",)
        assert len(source) == 2

    def test_binary_stream(self) -> None:
        """Encoded bytes are accepted and decoded by the parser."""
        data = SIMPLE_XML.encode("utf-8")
        source = asyncio.run(XmlFileLocalizationSource.create(io.BytesIO(data)))

        assert source.get_localized_string("hw", "en-US") == "Hello World!"

    def test_small_chunks(self) -> None:
        """Documents split across many reads parse identically."""
        source = build(TWO_LOCALES_XML, chunk_size=3)

        assert source.get_localized_string("bye", "en-US") == "Goodbye!"

    def test_async_stream_read_exactly_once(self) -> None:
        """Async read() is awaited until the first empty chunk, then never again."""
        chunks = [SIMPLE_XML[:20], SIMPLE_XML[20:60], SIMPLE_XML[60:]]
        stream = ChunkedAsyncStream(chunks)

        source = asyncio.run(XmlFileLocalizationSource.create(stream))

        assert source.get_localized_string("hw", "en-US") == "Hello World!"
        assert stream.reads == len(chunks) + 1

    def test_asyncio_stream_reader(self) -> None:
        """asyncio.StreamReader works as an input stream."""

        async def run() -> XmlFileLocalizationSource:
            reader = asyncio.StreamReader()
            reader.feed_data(SIMPLE_XML.encode("utf-8"))
            reader.feed_eof()
            return await XmlFileLocalizationSource.create(reader)

        source = asyncio.run(run())

        assert source.try_get_localized_string("hw", "en-US") == (True, "Hello World!")

    def test_unicode_values(self) -> None:
        """Non-ASCII text survives parsing."""
        source = build('<l><culture name="ru-RU"><hw>Привет, мир!</hw></culture></l>')

        assert source.get_localized_string("hw", "ru-RU") == "Привет, мир!"

    def test_entities_are_unescaped(self) -> None:
        """Markup escapes are resolved; no further escaping rules apply."""
        source = build('<l><culture name="en-US"><fc>Fish &amp; Chips &lt;3</fc></culture></l>')

        assert source.get_localized_string("fc", "en-US") == "Fish & Chips <3"

    def test_nested_markup_text_is_concatenated(self) -> None:
        """Text content includes text of nested elements."""
        source = build('<l><culture name="en-US"><hw>Hello <b>bold</b> world</hw></culture></l>')

        assert source.get_localized_string("hw", "en-US") == "Hello bold world"

    def test_empty_element_is_empty_string(self) -> None:
        """An empty code element maps to the empty string."""
        source = build('<l><culture name="en-US"><blank/></culture></l>')

        assert source.try_get_localized_string("blank", "en-US") == (True, "")

    def test_empty_locale_group(self) -> None:
        """A locale group with no children is a known locale with no codes."""
        source = build('<l><culture name="en-US"/></l>')

        assert source.locales == ("en-US",)
        assert source.codes("en-US") == ()

    def test_root_without_groups(self) -> None:
        """A lone root element yields an empty, valid source."""
        source = build("<localization/>")

        assert source.locales == ()

    def test_namespaced_code_tags_use_local_names(self) -> None:
        """Code tags resolve by local name whatever their namespace."""
        xml = (
            '<localization xmlns:c="urn:example:codes">'
            '<culture name="en-US"><c:hw>Hi</c:hw><bye>Bye</bye></culture>'
            "</localization>"
        )
        source = build(xml)

        assert source.get_localized_string("hw", "en-US") == "Hi"
        assert source.codes("en-US") == ("hw", "bye")

    def test_namespaced_group_ignored(self) -> None:
        """A group tag in another namespace is not a locale group."""
        xml = (
            '<localization xmlns:o="urn:other">'
            '<o:culture name="en-US"><hw>Foreign</hw></o:culture>'
            '<culture name="de-DE"><o:hw>Hallo</o:hw></culture>'
            "</localization>"
        )
        source = build(xml)

        assert source.locales == ("de-DE",)
        assert source.try_get_localized_string("hw", "en-US") == (False, None)
        assert source.get_localized_string("hw", "de-DE") == "Hallo"

    def test_default_namespace_hides_groups(self) -> None:
        """Under a default namespace no element matches the plain group tag."""
        xml = '<localization xmlns="urn:example:l10n"><culture name="en-US"><hw>Hi</hw></culture></localization>'

        assert build(xml).locales == ()

    def test_non_group_root_children_ignored(self) -> None:
        """Only direct group children of the root are locale groups."""
        xml = (
            "<localization>"
            "<meta>generated</meta>"
            '<section><culture name="fr-FR"><hw>Bonjour</hw></culture></section>'
            '<culture name="en-US"><hw>Hello</hw></culture>'
            "</localization>"
        )
        source = build(xml)

        assert source.locales == ("en-US",)

    def test_custom_group_tag_and_name_attribute(self) -> None:
        """Tag and attribute names are configurable."""
        xml = '<strings><locale id="en-US"><hw>Hello</hw></locale></strings>'
        source = build(xml, group_tag="locale", name_attribute="id")

        assert source.get_localized_string("hw", "en-US") == "Hello"

    def test_invalid_chunk_size(self) -> None:
        """Non-positive chunk_size is a caller error, not malformed input."""
        with pytest.raises(ValueError, match="chunk_size must be positive"):
            build(SIMPLE_XML, chunk_size=0)


class TestMalformed:
    """Every structural or syntactic defect fails construction."""

    @staticmethod
    def code_of(error: MalformedSourceError) -> DiagnosticCode:
        assert error.diagnostic is not None
        return error.diagnostic.code

    def test_empty_document(self) -> None:
        """Empty input is malformed."""
        with pytest.raises(MalformedSourceError) as exc_info:
            build("")

        assert self.code_of(exc_info.value) == DiagnosticCode.XML_SYNTAX_ERROR

    def test_whitespace_only_document(self) -> None:
        """Whitespace without a root element is malformed."""
        with pytest.raises(MalformedSourceError):
            build("   \n  ")

    def test_group_without_name(self) -> None:
        """A locale group missing its name attribute is malformed."""
        xml = """<localization>
   <culture>
      <hw>Hello World!</hw>
   </culture>
</localization>
"""
        with pytest.raises(MalformedSourceError) as exc_info:
            build(xml)

        assert self.code_of(exc_info.value) == DiagnosticCode.LOCALE_NAME_MISSING

    def test_duplicate_code_in_locale(self) -> None:
        """Two children with the same tag in one group are malformed."""
        xml = """<localization>
   <culture name="en-US">
      <hw>Hello World!</hw>
      <hw>Hello another World!</hw>
   </culture>
</localization>
"""
        with pytest.raises(MalformedSourceError) as exc_info:
            build(xml)

        error = exc_info.value
        assert self.code_of(error) == DiagnosticCode.DUPLICATE_CODE
        assert "'hw'" in str(error)
        assert "'en-US'" in str(error)

    def test_same_code_in_different_locales_is_valid(self) -> None:
        """Duplicate detection is per locale."""
        source = build(TWO_LOCALES_XML)

        assert source.get_localized_string("hw", "de-DE") == "Hallo Welt!"

    def test_duplicate_locale(self) -> None:
        """Two groups with the same name are malformed."""
        xml = (
            "<localization>"
            '<culture name="en-US"><hw>Hello</hw></culture>'
            '<culture name="en-US"><bye>Bye</bye></culture>'
            "</localization>"
        )
        with pytest.raises(MalformedSourceError) as exc_info:
            build(xml)

        assert self.code_of(exc_info.value) == DiagnosticCode.DUPLICATE_LOCALE

    def test_syntax_error_keeps_cause(self) -> None:
        """Markup errors chain the parser's exception and report position."""
        with pytest.raises(MalformedSourceError) as exc_info:
            build('<localization><culture name="en-US"><hw>Hi</culture></localization>')

        error = exc_info.value
        assert isinstance(error.__cause__, ParseError)
        assert error.diagnostic is not None
        assert error.diagnostic.code == DiagnosticCode.XML_SYNTAX_ERROR
        assert error.diagnostic.line == 1

    def test_unclosed_root(self) -> None:
        """Truncated documents fail when the stream ends."""
        with pytest.raises(MalformedSourceError):
            build('<localization><culture name="en-US"><hw>Hi</hw></culture>')

    def test_source_too_large(self) -> None:
        """Input beyond max_source_size is rejected."""
        with pytest.raises(MalformedSourceError) as exc_info:
            build(SIMPLE_XML, max_source_size=10)

        assert self.code_of(exc_info.value) == DiagnosticCode.SOURCE_TOO_LARGE

    def test_mixed_chunk_types(self) -> None:
        """A stream switching between str and bytes is rejected."""

        class Mixed:
            def __init__(self) -> None:
                self._chunks: list[str | bytes] = ["<l>", b"</l>"]

            def read(self, size: int) -> str | bytes:
                return self._chunks.pop(0) if self._chunks else ""

        with pytest.raises(MalformedSourceError) as exc_info:
            asyncio.run(XmlFileLocalizationSource.create(Mixed()))

        assert self.code_of(exc_info.value) == DiagnosticCode.SOURCE_UNDECODABLE

    def test_source_path_reported(self) -> None:
        """source_path is attached to the error for diagnostics."""
        with pytest.raises(MalformedSourceError) as exc_info:
            build("", source_path="Localization.xml")

        assert exc_info.value.source_path == "Localization.xml"
        assert "Localization.xml" in str(exc_info.value)

    def test_cancellation_produces_no_source(self) -> None:
        """Cancelling construction propagates CancelledError."""

        class Stalled:
            async def read(self, size: int) -> str:
                await asyncio.Event().wait()
                return ""

        async def run() -> None:
            task = asyncio.create_task(XmlFileLocalizationSource.create(Stalled()))
            await asyncio.sleep(0)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        asyncio.run(run())


class TestFromString:
    """Synchronous construction from an in-memory document."""

    def test_from_string(self) -> None:
        """from_string() builds the same table as create()."""
        source = XmlFileLocalizationSource.from_string(TWO_LOCALES_XML)

        assert source.locales == build(TWO_LOCALES_XML).locales
        assert source.get_localized_string("hw", "de-DE") == "Hallo Welt!"

    def test_from_bytes(self) -> None:
        """from_string() accepts encoded bytes."""
        source = XmlFileLocalizationSource.from_string(SIMPLE_XML.encode("utf-8"))

        assert source.get_localized_string("hw", "en-US") == "Hello World!"

    def test_from_empty_string(self) -> None:
        """Empty text is malformed."""
        with pytest.raises(MalformedSourceError):
            XmlFileLocalizationSource.from_string("")


class TestLookup:
    """Two-level exact lookups on a built source."""

    @pytest.fixture
    def source(self) -> XmlFileLocalizationSource:
        return build(SIMPLE_XML)

    def test_try_get_found(self, source: XmlFileLocalizationSource) -> None:
        """Existing code and locale return (True, value)."""
        assert source.try_get_localized_string("hw", "en-US") == (True, "Hello World!")

    def test_try_get_unknown_locale(self, source: XmlFileLocalizationSource) -> None:
        """Unknown locale returns (False, None)."""
        assert source.try_get_localized_string("hw", "de-DE") == (False, None)

    def test_try_get_unknown_code(self, source: XmlFileLocalizationSource) -> None:
        """Unknown code returns (False, None)."""
        assert source.try_get_localized_string("hwAnother", "en-US") == (False, None)

    def test_get_found(self, source: XmlFileLocalizationSource) -> None:
        """Strict form returns the value."""
        assert source.get_localized_string("hw", "en-US") == "Hello World!"

    def test_get_unknown_locale_raises(self, source: XmlFileLocalizationSource) -> None:
        """Strict form raises for an unknown locale."""
        with pytest.raises(LocalizedStringNotFoundError):
            source.get_localized_string("hw", "de-DE")

    def test_get_unknown_code_raises(self, source: XmlFileLocalizationSource) -> None:
        """Strict form raises for an unknown code."""
        with pytest.raises(LocalizedStringNotFoundError) as exc_info:
            source.get_localized_string("hwAnother", "en-US")

        assert exc_info.value.code == "hwAnother"

    def test_locale_is_case_sensitive(self, source: XmlFileLocalizationSource) -> None:
        """Locale comparison is exact."""
        assert source.try_get_localized_string("hw", "en-us") == (False, None)

    def test_contains(self, source: XmlFileLocalizationSource) -> None:
        """(code, locale) membership mirrors lookup."""
        assert ("hw", "en-US") in source
        assert ("hw", "de-DE") not in source
        assert "hw" not in source

    def test_codes_for_unknown_locale(self, source: XmlFileLocalizationSource) -> None:
        """codes() of an unknown locale is empty."""
        assert source.codes("xx-XX") == ()

    def test_repr(self, source: XmlFileLocalizationSource) -> None:
        """repr lists locales."""
        assert repr(source) == "XmlFileLocalizationSource(locales=['en-US'])"


class TestImmutability:
    """The table cannot change after construction."""

    def test_input_mapping_is_copied(self) -> None:
        """Mutating the mapping passed to __init__ does not affect the source."""
        table = {"en-US": {"hw": "Hello"}}
        source = XmlFileLocalizationSource(table)

        table["en-US"]["hw"] = "Changed"
        table["de-DE"] = {"hw": "Hallo"}

        assert source.get_localized_string("hw", "en-US") == "Hello"
        assert source.locales == ("en-US",)

    def test_no_attribute_assignment(self) -> None:
        """Slots prevent attaching new state."""
        source = XmlFileLocalizationSource({})

        with pytest.raises(AttributeError):
            source.extra = 1  # type: ignore[attr-defined]
