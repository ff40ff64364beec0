"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (SHADCN_MCP__SERVER__TRANSPORT=http)
  2. shadcn-mcp.yaml        (searched in cwd, then platform config dir)
  3. Hardcoded defaults

The config file is optional; all fields have sensible defaults. The scraper
selector table lives here so upstream markup changes are a config update.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)


def _find_config_file() -> str | None:
    """Return the path of the first shadcn-mcp.yaml found, or None."""
    candidates = [
        Path("shadcn-mcp.yaml"),
        Path(platformdirs.user_config_dir("shadcn-mcp")) / "shadcn-mcp.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class ServerSettings(BaseModel):
    transport: Literal["stdio", "http"] = "stdio"
    host: str = "127.0.0.1"
    port: int = 8080


class FetcherSettings(BaseModel):
    retry_attempts: int = 3
    retry_delay_ms: int = 500
    timeout_seconds: float = 30.0
    user_agent: str = "shadcn-mcp/1.0"


class SourceSettings(BaseModel):
    base_url: str = "https://ui.shadcn.com"
    raw_docs_url: str = "https://raw.githubusercontent.com/shadcn-ui/ui/refs/heads/main/apps"
    component_docs_path: str = "www/content/docs/components"
    components_page: str = "/components"
    block_pages: list[str] = ["/blocks/sidebar", "/blocks/authentication"]

    def component_doc_url(self, component: str) -> str:
        return f"{self.raw_docs_url}/{self.component_docs_path}/{component}.mdx"

    def page_url(self, path: str) -> str:
        return f"{self.base_url}{path}"


_BLOCK_TOOLBAR = r"div.flex.w-full.items-center.gap-2.md\:pr-\[14px\]"


class ScraperSettings(BaseModel):
    """Selector table for the rendered-page scraper.

    Selectors are CSS (soupsieve dialect). ``block_label`` and ``block_command``
    are evaluated relative to each block element.
    """

    component_href_prefix: str = "/docs/components/"
    block_container: str = ".container-wrapper.flex-1"
    block_element: str = "div[id]"
    ignored_id_prefixes: list[str] = ["radix-"]
    block_label: str = f"{_BLOCK_TOOLBAR} > a"
    block_command: str = (
        f"{_BLOCK_TOOLBAR} > div.ml-auto.hidden.items-center.gap-2.md\\:flex"
        r" > div.flex.h-7.items-center.gap-1.rounded-md.border.p-\[2px\] > button > span"
    )
    block_code: str = "code"


class BlockSettings(BaseModel):
    # all_or_nothing: one failed page fails the whole listing.
    # partial: failed pages are logged and skipped.
    aggregate_policy: Literal["all_or_nothing", "partial"] = "all_or_nothing"


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: SHADCN_MCP__SERVER__PORT=9090
        env_prefix="SHADCN_MCP__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    server: ServerSettings = ServerSettings()
    fetcher: FetcherSettings = FetcherSettings()
    sources: SourceSettings = SourceSettings()
    scraper: ScraperSettings = ScraperSettings()
    blocks: BlockSettings = BlockSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )
