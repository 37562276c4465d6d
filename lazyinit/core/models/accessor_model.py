"""
Accessor 설정 및 상태 스냅샷 모델
"""
from pathlib import Path
from typing import Optional

from lazyinit.core.patterns.base_model import ImmutableModel, Field


class AccessorConfig(ImmutableModel):
    """
    Immutable Accessor Configuration

    Resolved by ``create_accessor`` from explicit arguments and Settings
    """

    name: Optional[str] = None  # accessor 이름 (None이면 factory 이름)
    strategy: str = "double_checked"  # locked / double_checked / eager
    policy: str = "retry"  # retry / permanent
    retries: int = Field(default=0, ge=0)  # 한 번의 생성 시도 안에서의 재시도 횟수
    retry_delay: float = Field(default=0.1, ge=0.0)
    retry_backoff: float = Field(default=2.0, ge=1.0)
    error_dump_dir: Optional[Path] = None  # 실패 시 state 덤프 위치

    def accessor_options(self) -> dict:
        """Keyword arguments for the accessor constructor"""
        options = self.model_dump(exclude={"strategy"})
        return options

    def __repr__(self) -> str:
        return (
            f"AccessorConfig(name={self.name}, "
            f"strategy={self.strategy}, "
            f"policy={self.policy}, "
            f"retries={self.retries})"
        )


class AccessorStats(ImmutableModel):
    """Point-in-time snapshot of one accessor"""

    name: str
    strategy: str
    policy: str
    state: str
    attempts: int = 0  # 생성 시도 횟수 (재시도 포함 1회로 계산)
    constructions: int = 0  # 성공한 생성 횟수, 항상 0 또는 1
    failures: int = 0
    last_error: Optional[str] = None
