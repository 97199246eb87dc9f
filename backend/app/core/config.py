from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List
import os

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=os.getenv("ENV_FILE", ".env"), extra="ignore")

    APP_NAME: str = "panel-stats"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    SECRET_KEY: str = "please-change-me"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7  # 7 days

    DATABASE_URL: str

    REDIS_URL: str = "redis://localhost:6379/0"

    CORS_ORIGINS: str = ""  # comma separated

    # layout
    LAYOUT_COLORS: str = "black,blue,green,red,yellow"  # comma separated
    DEFAULT_LAYOUT_COLOR: str = "black"
    LOGO_DIR: str = "/var/lib/panel-stats/logos"
    LOGO_URL_PREFIX: str = "/ispLogos/"
    LOGO_MAX_BYTES: int = 512 * 1024
    DEFAULT_LOGO_URL: str = "/themes/default/assets/images/logo.png"

    @property
    def cors_origins_list(self) -> List[str]:
        if not self.CORS_ORIGINS:
            return []
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def layout_colors_list(self) -> List[str]:
        return [c.strip() for c in self.LAYOUT_COLORS.split(",") if c.strip()]

settings = Settings()
