"""Pydantic schemas for conversion options and results."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ConversionOptions(BaseModel):
    """Immutable conversion configuration.

    Overrides are merged with the defaults once, when the model is built.
    Only types are checked here; a malformed ``size`` string is reported by
    the rasterizer when a page is rendered.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    quality: int = Field(default=0, ge=0)
    format: str = "png"
    size: str = "768x512"
    density: int = Field(default=72, gt=0)
    # None or "" means "derive from the input file name"
    save_directory: Optional[str] = "./"
    save_name: Optional[str] = "untitled"
    compression: str = "jpeg"


class ConversionResult(BaseModel):
    """A page written to disk."""

    model_config = ConfigDict(frozen=True)

    name: str
    size: float  # kilobytes
    path: str
    page: int = Field(ge=1)


class Base64Result(BaseModel):
    """A page encoded in memory."""

    model_config = ConfigDict(frozen=True)

    base64: str
    page: int = Field(ge=1)
