"""Pydantic configuration model for wetm."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field


class TranslatorConfig(BaseModel):
    """
    Options consulted while translating post content.

    The model is frozen: one instance can be shared by every post in a run.

    Example:
        config = TranslatorConfig(save_scraped_images=True)

    YAML format:
        saveScrapedImages: true
        add_frontmatter: false
        log_level: INFO
    """

    save_scraped_images: bool = Field(
        False,
        alias="saveScrapedImages",
        description="Point local <img> references at the relative images/ folder",
    )
    add_frontmatter: bool = Field(False, description="Prepend YAML frontmatter to translated posts")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "INFO",
        description="Logging level",
    )
    log_file: Optional[Path] = Field(None, description="Log file path")

    model_config = {"extra": "forbid", "frozen": True, "populate_by_name": True}

    def to_yaml(self) -> str:
        """Serialize config to YAML string."""
        import yaml

        return yaml.dump(
            self.model_dump(mode="json", by_alias=True, exclude_none=True),
            default_flow_style=False,
        )

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "TranslatorConfig":
        """Load config from YAML string."""
        import yaml

        data = yaml.safe_load(yaml_str) or {}
        return cls.model_validate(data)

    @classmethod
    def from_yaml_file(cls, path: Path) -> "TranslatorConfig":
        """Load config from YAML file."""
        return cls.from_yaml(Path(path).read_text(encoding="utf-8"))
