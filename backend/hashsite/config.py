"""Configuration from environment."""

from pathlib import Path
from typing import Dict, List

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Fixed-key pages: URL path -> file relative to site_root
DEFAULT_PAGES: Dict[str, str] = {
    "/bec5d5040b7df76f319de5e40a82ad1335d9ab3d23f4f6ff1ab6597c72819333": "html/about.html",
    "/61c1878564b8b4ad1e616452ef28ed927f6723d1d5ced2f39fd842a1839d7ea4": "html/curvedmail.html",
    "/c40fbc15b206edccd7b21b63c5379d9b049598fadd81544e26de27e501572da9": "html/forum.html",
    "/395b46de6c56b0518e08b07182c1ff4a340e0bb6ca7b315a8967a4d02b44b76d": "html/gallery.html",
    "/fc7aec81e8f347c64317ac296f5e723ddc8e65c5633084edc33f41d69e620e44": "html/ITSNOTME.html",
    "/a15c2ab34008389122288d06521382beb04dde0f0e7eae4f0e025e73838feecc": "html/projectunveil.html",
    "/4b3c126cf6c073a2d6f962afd5f072b52b1432119602644c43308ca79ff4e08e": "html/unveil.html",
    "/e5f0df71d19f1cb40304a4524042f0feb4f1769fb967ce269922f8721bc3e917": "data/eyeascii.json",
    "/0a04702c2d3c4ce70f0b876f70ab37ce13108c79c756fcbbdda8e4e927207869": "html/ENTER_THE_MIRROR.html",
}


class Settings(BaseSettings):
    """Server settings from env."""

    model_config = SettingsConfigDict(
        env_prefix="HASHSITE_", extra="ignore", populate_by_name=True
    )

    # Server (plain PORT is honoured for hosting platforms)
    host: str = "0.0.0.0"
    port: int = Field(default=3000, validation_alias=AliasChoices("HASHSITE_PORT", "PORT", "port"))

    # Site layout, relative paths resolve against site_root
    site_root: Path = Path(".")
    html_dir: Path = Path("html")
    ads_dir: Path = Path("ads")
    ads_meta_file: str = "ads.json"
    mail_file: Path = Path("data/mail.json")
    db_path: Path = Path("database.sqlite")

    # Directories published as /<category>/<sha256><ext>. Comma-separated in env.
    asset_categories: str = "images,fonts,css,sounds"

    # JSON object in env, e.g. HASHSITE_PAGES='{"/abc": "html/about.html"}'
    pages: Dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_PAGES))

    ads_per_request: int = 2

    # Logging (empty log_file = stderr only; level DEBUG|INFO|WARNING|ERROR)
    log_level: str = "INFO"
    log_file: str = ""

    @property
    def asset_categories_list(self) -> List[str]:
        """Asset categories as a list (split on comma)."""
        return [c.strip().strip("/") for c in self.asset_categories.split(",") if c.strip()]

    def resolve(self, path: Path) -> Path:
        """Resolve a configured path against site_root (absolute paths are kept)."""
        path = Path(path)
        if path.is_absolute():
            return path
        return (self.site_root / path).resolve()


def get_settings() -> Settings:
    """Return application settings."""
    return Settings()
