from typing import Dict, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str = Field(..., alias="DATABASE_URL")

    jwt_secret_key: str = Field(..., alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field("HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(60, alias="ACCESS_TOKEN_EXPIRE_MINUTES")
    refresh_token_expire_days: int = Field(7, alias="REFRESH_TOKEN_EXPIRE_DAYS")

    # School calendar: fixed UTC offset (no DST), academic year start and length in weeks
    org_utc_offset_hours: int = Field(7, alias="ORG_UTC_OFFSET_HOURS")
    term_start_month: int = Field(9, alias="TERM_START_MONTH", ge=1, le=12)
    term_start_day: int = Field(8, alias="TERM_START_DAY", ge=1, le=31)
    total_weeks: int = Field(35, alias="TOTAL_WEEKS", ge=1)

    # Base score used per manual category (study, discipline, hygiene) when staff left it blank
    manual_score_default: int = Field(340, alias="MANUAL_SCORE_DEFAULT")
    manual_score_grade_overrides: Dict[int, int] = Field(
        default_factory=lambda: {9: 330}, alias="MANUAL_SCORE_GRADE_OVERRIDES"
    )

    progressive_demerits: bool = Field(False, alias="PROGRESSIVE_DEMERITS")

    log_level: str = Field("INFO", alias="LOG_LEVEL")

    admin_email: Optional[str] = Field(None, alias="ADMIN_EMAIL")
    admin_password: Optional[str] = Field(None, alias="ADMIN_PASSWORD")
    admin_display_name: str = Field("Administrator", alias="ADMIN_DISPLAY_NAME")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"
        populate_by_name = True


settings = Settings()
