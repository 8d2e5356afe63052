# src/settings.py
import os
from pathlib import Path
from typing import Any, Dict, Tuple, Type

from pydantic import Field
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from src.chat.errors import ConfigurationError
from src.chat.types import DEFAULT_API_URL, Credential

PROPERTIES_FILE = "config.properties"

# config.properties key -> Settings field
PROPERTY_KEYS = {
    "openai.api.key": "OPENAI_API_KEY",
    "openai.api.url": "OPENAI_API_URL",
}


def read_properties(path: Path) -> Dict[str, str]:
    """Parse a Java-style .properties file (key=value or key: value)."""
    props: Dict[str, str] = {}
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line[0] in "#!":
                continue
            sep = min((i for i in (line.find("="), line.find(":")) if i >= 0), default=-1)
            if sep < 0:
                props[line] = ""
                continue
            props[line[:sep].strip()] = line[sep + 1:].strip()
    return props


class PropertiesFileSource(PydanticBaseSettingsSource):
    """Lowest-priority source: values from config.properties, if present."""

    def __init__(self, settings_cls: Type[BaseSettings]):
        super().__init__(settings_cls)
        path = Path(os.getenv("CHAT_PROPERTIES_FILE", PROPERTIES_FILE))
        self._values: Dict[str, Any] = {}
        if path.is_file():
            try:
                raw = read_properties(path)
            except OSError as e:
                raise ConfigurationError(f"Failed to load properties file {path}") from e
            self._values = {
                field: raw[key] for key, field in PROPERTY_KEYS.items() if raw.get(key)
            }

    def get_field_value(self, field: FieldInfo, field_name: str) -> Tuple[Any, str, bool]:
        return self._values.get(field_name), field_name, False

    def __call__(self) -> Dict[str, Any]:
        return dict(self._values)


class Settings(BaseSettings):
    # core
    APP_NAME: str = Field(default="Chat Client")
    ENV: str = Field(default=os.getenv("APP_ENV", "dev"))
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: str = Field(default="INFO")

    # provider
    OPENAI_API_KEY: str | None = None
    OPENAI_API_URL: str = Field(default=DEFAULT_API_URL)
    CHAT_MODEL: str | None = None

    model_config = SettingsConfigDict(
        env_file=".env.dev",
        env_ignore_empty=True,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        # environment beats the properties file
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            file_secret_settings,
            PropertiesFileSource(settings_cls),
        )

    @property
    def app_name(self) -> str:
        return self.APP_NAME


def load_credential(s: Settings) -> Credential:
    """Resolve the credential once at startup; a missing key is fatal."""
    if not s.OPENAI_API_KEY:
        raise ConfigurationError(
            "API key not found. Please set it in environment variable OPENAI_API_KEY "
            f"or in properties file {PROPERTIES_FILE} (openai.api.key)"
        )
    return Credential(api_key=s.OPENAI_API_KEY, endpoint_url=s.OPENAI_API_URL)


def get_settings() -> Settings:
    return Settings()
