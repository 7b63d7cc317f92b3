"""Configuration management using Pydantic Settings."""

from pathlib import Path
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Default diagram style (Graphviz colour and arrow-shape names)
    font: str = Field("Helvetica", description="Font for text in each box")
    title_colour: str = Field("Goldenrod1", description="Colour of the new-studies header box")
    greybox_colour: str = Field("Gainsboro", description="Colour of the previous/other column boxes")
    main_colour: str = Field("Black", description="Border colour of the main boxes")
    arrow_colour: str = Field("Black", description="Colour of the connecting lines")
    arrow_head: str = Field("normal", description="Head shape of the line connectors")
    arrow_tail: str = Field("none", description="Tail shape of the line connectors")

    # Rendering
    layout_engine: str = Field("neato", description="Graphviz engine honouring fixed positions")
    label_font_size: float = Field(14.0, gt=0)

    # Export
    rasterize_timeout: float = Field(60.0, gt=0, description="Seconds before PDF/PNG export is abandoned")
    png_scale: float = Field(2.0, gt=0)

    # Directories
    output_dir: Path = Field(Path("output"))

    # Logging
    log_level: str = Field("INFO")
    log_format: str = Field("json", pattern="^(json|text)$")


# Instantiate global settings
settings = Settings()
