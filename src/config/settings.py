"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use UNLIT_ prefix (e.g., UNLIT_SOURCE_STYLE=markdown).

Settings can also be loaded from a .env file in the working directory.
These values are the defaults of the corresponding command line flags.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use UNLIT_ prefix.

    Examples:
        UNLIT_SOURCE_STYLE=markdown
        UNLIT_WHITESPACE_MODE=all
        UNLIT_INPUT_PATTERN=**/*.md
        UNLIT_STRICT_MODE=true
    """

    model_config = SettingsConfigDict(
        env_prefix="UNLIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Recognition configuration
    source_style: str = Field(
        default="infer",
        description="Style recognized in input documents (infer locks onto the first block's family)",
    )

    whitespace_mode: str = Field(
        default="indent",
        description="Extraction whitespace mode: 'indent' drops markup lines, 'all' blanks them",
    )

    strict_mode: bool = Field(
        default=False,
        description="Strict mode: closing delimiters outside any block are errors",
    )

    # File selection and output
    input_pattern: str = Field(
        default="**/*.lhs",
        description="Glob (relative to inputdir) selecting documents when no input file is given",
    )

    output_suffix: str = Field(
        default="",
        description="Suffix given to output files (e.g. '.hs'); empty keeps the input name",
    )

    encoding: str = Field(
        default="utf-8",
        description="Text encoding for reading and writing documents",
    )

    @field_validator("whitespace_mode")
    @classmethod
    def whitespaceMode_check(cls, value: str) -> str:
        if value.lower() not in ("indent", "all"):
            raise ValueError(f"whitespace_mode must be 'indent' or 'all', not '{value}'")
        return value.lower()

    def outputName_make(self, name: Path, suffix: str | None = None) -> Path:
        """
        Derive an output filename from an input filename.

        Args:
            name: Input path (relative to inputdir)
            suffix: Suffix override; defaults to output_suffix

        Returns:
            Path with the suffix replaced, or unchanged for an empty suffix

        Example:
            >>> settings = AppSettings(output_suffix=".hs")
            >>> settings.outputName_make(Path("src/Main.lhs"))
            PosixPath('src/Main.hs')
        """
        suffix = self.output_suffix if suffix is None else suffix
        if not suffix:
            return name
        return name.with_suffix(suffix)


# Singleton instance - import this in your code
appsettings = AppSettings()
