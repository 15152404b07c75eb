"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    Keeps every user-visible message testable and documented in one place.
    """

    @staticmethod
    def string_not_found(code: str, locale: str, sources_tried: int) -> Diagnostic:
        """No registered source produced a value.

        Args:
            code: The localization code that was requested
            locale: The locale that was requested
            sources_tried: Number of registered sources consulted

        Returns:
            Diagnostic for STRING_NOT_FOUND
        """
        msg = (
            f"Localized string '{code}' for locale '{locale}' "
            f"was not found in any of {sources_tried} registered source(s)"
        )
        hint = (
            "Register a source before looking up strings"
            if sources_tried == 0
            else "Check that the code and locale are defined in one of the sources"
        )
        return Diagnostic(
            code=DiagnosticCode.STRING_NOT_FOUND,
            message=msg,
            hint=hint,
            localization_code=code,
            locale=locale,
        )

    @staticmethod
    def string_not_in_source(code: str, locale: str, source_name: str) -> Diagnostic:
        """A single source has no value for the pair.

        Args:
            code: The localization code that was requested
            locale: The locale that was requested
            source_name: Class name of the source that was queried

        Returns:
            Diagnostic for STRING_NOT_IN_SOURCE
        """
        msg = f"{source_name} has no localized string '{code}' for locale '{locale}'"
        return Diagnostic(
            code=DiagnosticCode.STRING_NOT_IN_SOURCE,
            message=msg,
            localization_code=code,
            locale=locale,
        )

    @staticmethod
    def xml_syntax_error(
        reason: str,
        source_path: str | None = None,
        position: tuple[int, int] | None = None,
    ) -> Diagnostic:
        """Document is not well-formed XML (includes the empty document).

        Args:
            reason: Parser's description of the problem
            source_path: Optional document description
            position: Optional (line, column) reported by the parser

        Returns:
            Diagnostic for XML_SYNTAX_ERROR
        """
        line, column = position if position is not None else (None, None)
        return Diagnostic(
            code=DiagnosticCode.XML_SYNTAX_ERROR,
            message=f"The XML document has wrong content: {reason}",
            hint="The document must contain exactly one well-formed root element",
            source_path=source_path,
            line=line,
            column=column,
        )

    @staticmethod
    def locale_name_missing(group_tag: str, name_attribute: str) -> Diagnostic:
        """Locale group element without its identifying attribute.

        Args:
            group_tag: Tag name of locale group elements
            name_attribute: Required attribute name

        Returns:
            Diagnostic for LOCALE_NAME_MISSING
        """
        msg = f"<{group_tag}> element is missing the required '{name_attribute}' attribute"
        return Diagnostic(
            code=DiagnosticCode.LOCALE_NAME_MISSING,
            message=msg,
            hint=f'Add {name_attribute}="<locale>" to every <{group_tag}> element',
        )

    @staticmethod
    def duplicate_code(code: str, locale: str) -> Diagnostic:
        """Localization code appears twice inside one locale group.

        Args:
            code: The duplicated localization code
            locale: The locale group containing both elements

        Returns:
            Diagnostic for DUPLICATE_CODE
        """
        msg = f"Localization code '{code}' is defined twice for locale '{locale}'"
        return Diagnostic(
            code=DiagnosticCode.DUPLICATE_CODE,
            message=msg,
            hint="Remove or rename one of the duplicate elements",
            localization_code=code,
            locale=locale,
        )

    @staticmethod
    def duplicate_locale(locale: str, group_tag: str) -> Diagnostic:
        """Two locale groups share the same name.

        Args:
            locale: The duplicated locale name
            group_tag: Tag name of locale group elements

        Returns:
            Diagnostic for DUPLICATE_LOCALE
        """
        msg = f"Locale '{locale}' is declared by more than one <{group_tag}> element"
        return Diagnostic(
            code=DiagnosticCode.DUPLICATE_LOCALE,
            message=msg,
            hint=f"Merge the <{group_tag}> elements into one",
            locale=locale,
        )

    @staticmethod
    def source_too_large(size: int, limit: int) -> Diagnostic:
        """Input exceeded the configured size limit.

        Args:
            size: Amount of input read when the limit was crossed
            limit: Configured maximum

        Returns:
            Diagnostic for SOURCE_TOO_LARGE
        """
        return Diagnostic(
            code=DiagnosticCode.SOURCE_TOO_LARGE,
            message=f"Source exceeds maximum size ({size} > {limit})",
            hint="Split the document or raise max_source_size",
        )

    @staticmethod
    def source_undecodable(reason: str) -> Diagnostic:
        """Stream produced data that is neither str nor bytes, or mixed both.

        Args:
            reason: Description of the offending chunk

        Returns:
            Diagnostic for SOURCE_UNDECODABLE
        """
        return Diagnostic(
            code=DiagnosticCode.SOURCE_UNDECODABLE,
            message=f"Source stream produced unusable data: {reason}",
            hint="Pass a text stream or a binary stream of encoded XML",
        )

    @staticmethod
    def catalog_missing(locale: str, domain: str, directory: str) -> Diagnostic:
        """No compiled catalog exists for a locale that requires one.

        Args:
            locale: Locale being looked up
            domain: gettext domain
            directory: Catalog root directory

        Returns:
            Diagnostic for CATALOG_MISSING
        """
        msg = f"Locale '{locale}' does not have the required catalog '{domain}.mo' in {directory}"
        return Diagnostic(
            code=DiagnosticCode.CATALOG_MISSING,
            message=msg,
            hint="Compile the catalog for this locale or disable require_catalog",
            locale=locale,
            source_path=directory,
        )

    @staticmethod
    def catalog_unreadable(locale: str, path: str, reason: str) -> Diagnostic:
        """Compiled catalog exists but cannot be read or decoded.

        Args:
            locale: Locale being looked up
            path: Catalog file path
            reason: Underlying error text

        Returns:
            Diagnostic for CATALOG_UNREADABLE
        """
        return Diagnostic(
            code=DiagnosticCode.CATALOG_UNREADABLE,
            message=f"Catalog '{path}' for locale '{locale}' cannot be read: {reason}",
            hint="Recompile the catalog",
            locale=locale,
            source_path=path,
        )
