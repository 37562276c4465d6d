"""
전역 설정 관리 (Pydantic BaseSettings with Singleton)
환경변수 기반 설정 (prefix: LAZYINIT_)
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from pathlib import Path
from typing import Optional
from lazyinit.core.accessor import FailurePolicy, Strategy
from lazyinit.core.patterns.singleton import Singleton


class SettingsMeta(Singleton, type(BaseSettings)):
    """
    Metaclass combining Singleton and BaseSettings
    Ensures Settings is a singleton
    """
    pass


class Settings(BaseSettings, metaclass=SettingsMeta):
    """애플리케이션 전역 설정"""

    model_config = SettingsConfigDict(
        env_prefix="LAZYINIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False
    )

    # ===== Registry =====
    # registry key 앞에 붙는 환경 이름 (예: "prod" → "prod:db")
    environment: str = Field(default="")

    # ===== Accessor Defaults =====
    default_strategy: Strategy = Field(default=Strategy.DOUBLE_CHECKED)
    failure_policy: FailurePolicy = Field(default=FailurePolicy.RETRY)

    # ===== Construction Retry =====
    construction_retries: int = Field(default=0, ge=0)
    retry_delay: float = Field(default=0.1, ge=0.0)
    retry_backoff: float = Field(default=2.0, ge=1.0)

    # ===== Error States =====
    error_states_path: Optional[Path] = Field(default=None)

    # ===== Logging =====
    log_level: str = Field(default="INFO")
    logs_path: Optional[Path] = Field(default=None)

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {value}")
        return level


def get_settings() -> Settings:
    """
    설정 싱글톤 반환

    Settings는 Singleton metaclass를 사용하므로
    직접 인스턴스화해도 항상 같은 객체 반환
    """
    return Settings()
