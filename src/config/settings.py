"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use TURF_ prefix (e.g., TURF_PARTIAL_PREFIX=_).

Settings can also be loaded from a .env file in the project root. List
settings are given as JSON (e.g., TURF_TEMPLATE_EXTENSIONS='[".kit", ".html"]').
"""

import os
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use TURF_ prefix.

    Examples:
        TURF_TEMPLATE_EXTENSIONS='[".kit", ".html"]'
        TURF_NIL_SENTINEL=none
        TURF_OUTPUT_EXTENSION=.htm
    """

    model_config = SettingsConfigDict(
        env_prefix="TURF_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Include configuration
    template_extensions: List[str] = Field(
        default=[".kit", ".turf", ".html", ".htm"],
        description="Extensions that are compiled on include, in candidate lookup order",
    )

    partial_prefix: str = Field(
        default="_",
        description="Prefix of partial include candidates, tried after the bare name",
    )

    # Variable configuration
    nil_sentinel: str = Field(
        default="nil",
        description="Value that clears a variable to the empty string",
    )

    # I/O configuration
    encoding: str = Field(
        default="utf-8",
        description="Text encoding of source and included files",
    )

    output_extension: str = Field(
        default=".html",
        description="Extension of the file written by the CLI",
    )

    @field_validator("template_extensions")
    @classmethod
    def extensions_normalize(cls, value: List[str]) -> List[str]:
        """Ensure every extension carries its leading dot"""
        return [ext if ext.startswith(".") else f".{ext}" for ext in value]

    def template_is(self, path: str) -> bool:
        """
        Check whether an included file is compiled or spliced raw.

        Args:
            path: File identity of the include target

        Returns:
            True if the file's extension is a recognized template extension

        Example:
            >>> AppSettings().template_is("/site/_header.kit")
            True
            >>> AppSettings().template_is("/site/style.css")
            False
        """
        return os.path.splitext(path)[1] in self.template_extensions

    def candidates_make(self, name: str) -> List[str]:
        """
        Generate include candidate names for a bare name, in lookup order.

        Args:
            name: Bare file name from an include spec

        Returns:
            Names to try: the bare name, then each extension appended, then
            the same for the partial (prefixed) name

        Example:
            >>> AppSettings(template_extensions=[".kit"]).candidates_make("foo")
            ['foo', 'foo.kit', '_foo', '_foo.kit']
        """
        candidates: List[str] = []
        for variant in (name, f"{self.partial_prefix}{name}"):
            candidates.append(variant)
            candidates.extend(f"{variant}{ext}" for ext in self.template_extensions)
        return candidates


# Singleton instance - import this in your code
appsettings = AppSettings()
