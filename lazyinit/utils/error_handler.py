# Error handler utility
"""
에러 처리 및 State 덤프

Features:
- State 덤프: 생성 실패 시 accessor 스냅샷과 traceback을 JSON으로 저장
- 재시도 데코레이터: factory 자동 재시도 (지수 백오프)
- 에러 컨텍스트: 에러 발생 위치 추적
"""
import json
import re
import traceback
from pathlib import Path
from datetime import datetime
from typing import Any, Callable, Dict, Union, TypeVar
from functools import wraps
import time

from lazyinit.utils.logger import default_logger

T = TypeVar('T')


def dump_state_on_error(
    state: Dict[str, Any],
    error: BaseException,
    stage: str,
    output_dir: Union[str, Path] = "data/logs/error_states"
) -> Path:
    """
    에러 발생 시 State를 JSON으로 저장

    Args:
        state: 저장할 상태 (accessor 스냅샷 등)
        error: 발생한 예외
        stage: 에러 발생 단계 (accessor 이름 등)
        output_dir: 저장 디렉토리

    Returns:
        저장된 파일 Path
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")

    error_dump = {
        "timestamp": timestamp,
        "stage": stage,
        "error": {
            "type": type(error).__name__,
            "message": str(error),
            "traceback": "".join(
                traceback.format_exception(type(error), error, error.__traceback__)
            )
        },
        "state": _serialize_state(state)
    }

    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    # accessor 이름에는 ':' '<' 등이 들어갈 수 있음
    safe_stage = re.sub(r"[^\w.-]", "_", stage)
    file_path = output_path / f"error_{safe_stage}_{timestamp}.json"

    with open(file_path, 'w', encoding='utf-8') as f:
        json.dump(error_dump, f, indent=2, ensure_ascii=False)

    default_logger.error(
        f"State dumped to {file_path}",
        extra={'context': {'stage': stage, 'error_type': type(error).__name__}}
    )

    return file_path


def _serialize_state(state: Dict[str, Any]) -> Dict[str, Any]:
    """
    State를 JSON 직렬화 가능한 형태로 변환

    Args:
        state: 원본 State

    Returns:
        직렬화 가능한 State
    """
    serialized = {}

    for key, value in state.items():
        try:
            json.dumps(value)
            serialized[key] = value
        except (TypeError, ValueError):
            # 직렬화 불가능하면 문자열로 변환
            serialized[key] = str(value)

    return serialized


def retry_on_failure(
    max_retries: int = 3,
    delay: float = 1.0,
    backoff: float = 2.0,
    exceptions: tuple = (Exception,)
):
    """
    재시도 데코레이터

    Args:
        max_retries: 최대 재시도 횟수
        delay: 초기 대기 시간 (초)
        backoff: 대기 시간 배수 (지수 백오프)
        exceptions: 재시도할 예외 타입들

    Example:
        @retry_on_failure(max_retries=3, delay=0.5, backoff=2.0)
        def connect():
            return Connection(...)
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            current_delay = delay
            last_exception = None

            for attempt in range(max_retries + 1):
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    last_exception = e

                    if attempt < max_retries:
                        default_logger.warning(
                            f"Retry {attempt + 1}/{max_retries} after {current_delay}s",
                            extra={
                                'context': {
                                    'function': getattr(func, '__name__', repr(func)),
                                    'error': str(e)
                                }
                            }
                        )
                        time.sleep(current_delay)
                        current_delay *= backoff
                    else:
                        default_logger.error(
                            f"All retries failed for {getattr(func, '__name__', repr(func))}",
                            extra={'context': {'error': str(e)}}
                        )

            # 모든 재시도 실패
            raise last_exception

        return wrapper
    return decorator


class ErrorContext:
    """
    에러 컨텍스트 관리자 (with문 사용)

    Example:
        with ErrorContext(accessor_snapshot, stage="prod:db", output_dir=dump_dir):
            instance = factory()
    """

    def __init__(
        self,
        state: Dict[str, Any],
        stage: str,
        dump_on_error: bool = True,
        output_dir: Union[str, Path] = "data/logs/error_states"
    ):
        self.state = state
        self.stage = stage
        self.dump_on_error = dump_on_error
        self.output_dir = output_dir
        self.dump_path = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None and self.dump_on_error and isinstance(exc_val, Exception):
            try:
                self.dump_path = dump_state_on_error(
                    self.state, exc_val, self.stage, self.output_dir
                )
            except OSError as dump_error:
                # 덤프 실패가 원래 예외를 가리면 안 됨
                default_logger.error(
                    f"Could not dump state for {self.stage}",
                    extra={'context': {'output_dir': str(self.output_dir), 'error': str(dump_error)}}
                )

        # 예외 전파 (False 반환 → 예외 계속 발생)
        return False
