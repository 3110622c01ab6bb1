from typing import Optional
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

class ApiConfig(BaseModel):
    title: str = Field(default="Video Downloader API", description="API title")
    version: str = Field(default="1.0.0", description="API version")
    cors_origins: list = Field(default=["*"], description="CORS allowed origins")
    debug: bool = Field(default=False, description="Enable debug mode")

class ServerConfig(BaseModel):
    host: str = Field(default="0.0.0.0", description="Listen address")

class YtDlpConfig(BaseModel):
    binary: str = Field(default="yt-dlp", description="yt-dlp executable")
    info_timeout_seconds: float = Field(default=30.0, gt=0, description="Metadata extraction timeout")
    socket_timeout: int = Field(default=10, ge=1, description="Socket timeout for yt-dlp")
    retries: int = Field(default=3, ge=0, description="Number of retries inside yt-dlp")
    js_runtime: Optional[str] = Field(default=None, description="JS runtime path (e.g., deno:/usr/local/bin/deno)")
    cookies_file: Optional[str] = Field(default=None, description="Netscape cookies file passed to yt-dlp")

class RelayConfig(BaseModel):
    connect_timeout: float = Field(default=10.0, gt=0, description="Upstream connect timeout")
    read_timeout: Optional[float] = Field(default=None, description="Upstream read timeout (None waits indefinitely)")
    chunk_size: int = Field(default=1024 * 1024, ge=1024, description="Relay chunk size in bytes")

class SecurityConfig(BaseModel):
    enable_ssrf_protection: bool = Field(default=True, description="Enable SSRF protection")
    allow_private_ips: bool = Field(default=False, description="Allow private IP ranges")
    allow_localhost: bool = Field(default=False, description="Allow localhost access")

class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="%(message)s", description="Log format")
    enable_rich: bool = Field(default=True, description="Enable rich console logging")

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()

class I18nConfig(BaseModel):
    default_locale: str = Field(default="en", description="Default locale")
    supported_locales: list = Field(default=["en", "ja"], description="Supported locales")

class Config(BaseSettings):
    model_config = SettingsConfigDict(env_nested_delimiter="__", extra="ignore")

    port: int = Field(default=3000, validation_alias="PORT", description="Listen port")
    api: ApiConfig = Field(default_factory=ApiConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    ytdlp: YtDlpConfig = Field(default_factory=YtDlpConfig)
    relay: RelayConfig = Field(default_factory=RelayConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    i18n: I18nConfig = Field(default_factory=I18nConfig)

config = Config()
