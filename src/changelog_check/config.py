"""
Configuration Management

시스템 설정 관리
"""

import os
import yaml
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List, Mapping
from pathlib import Path, PurePosixPath
import logging

from .exceptions import ConfigurationError


DEFAULT_EXEMPTION_LABEL = "allow-no-changelog"
DEFAULT_CHANGELOG_PATH = "CHANGELOG.md"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_TRUE_VALUES = {'true', '1', 'yes', 'on'}
_FALSE_VALUES = {'false', '0', 'no', 'off'}


def parse_bool(value: Any, name: str = "value") -> bool:
    """환경 변수/YAML 값을 bool로 변환"""
    if isinstance(value, bool):
        return value
    normalized = str(value).strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid boolean for {name}: {value!r}")


@dataclass(frozen=True)
class PolicyConfig:
    """CHANGELOG 정책 설정"""
    required_by_default: bool = True
    exemption_label: str = DEFAULT_EXEMPTION_LABEL
    changelog_path: str = DEFAULT_CHANGELOG_PATH


@dataclass
class GitHubConfig:
    """GitHub API 설정"""
    token: Optional[str] = None
    api_base_url: str = "https://api.github.com"
    timeout_seconds: int = 30


@dataclass
class LoggingConfig:
    """로깅 설정"""
    level: str = "INFO"
    format: str = DEFAULT_LOG_FORMAT
    file_path: Optional[str] = None
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5


@dataclass
class AppConfig:
    """전체 애플리케이션 설정"""
    policy: PolicyConfig = field(default_factory=PolicyConfig)
    github: GitHubConfig = field(default_factory=GitHubConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    debug: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """환경 변수에서 설정 로드"""
        env = os.environ if environ is None else environ
        try:
            return cls(
                policy=PolicyConfig(
                    required_by_default=parse_bool(env.get("CHANGELOG_REQUIRED", "true"), "CHANGELOG_REQUIRED"),
                    exemption_label=env.get("IGNORE_CHECK_LABEL", DEFAULT_EXEMPTION_LABEL),
                    changelog_path=env.get("CHANGELOG_PATH", DEFAULT_CHANGELOG_PATH),
                ),
                github=GitHubConfig(
                    token=env.get("GITHUB_TOKEN") or None,
                    api_base_url=env.get("GITHUB_API_URL", "https://api.github.com"),
                    timeout_seconds=int(env.get("GITHUB_TIMEOUT", "30")),
                ),
                logging=LoggingConfig(
                    level=env.get("LOG_LEVEL", "INFO"),
                    format=env.get("LOG_FORMAT", DEFAULT_LOG_FORMAT),
                    file_path=env.get("LOG_FILE") or None,
                    max_file_size=int(env.get("LOG_MAX_SIZE", str(10 * 1024 * 1024))),
                    backup_count=int(env.get("LOG_BACKUP_COUNT", "5")),
                ),
                debug=parse_bool(env.get("DEBUG", "false"), "DEBUG"),
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid configuration value: {e}") from e

    @classmethod
    def from_yaml(cls, config_path: str) -> "AppConfig":
        """YAML 파일에서 설정 로드"""
        config_file = Path(config_path)
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_path}")

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f) or {}
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Cannot read config file {config_path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

        if not isinstance(config_data, dict):
            raise ConfigurationError(f"Config file must contain a mapping: {config_path}")
        for section in ('policy', 'github', 'logging'):
            if not isinstance(config_data.get(section) or {}, dict):
                raise ConfigurationError(f"Config section '{section}' must be a mapping: {config_path}")

        policy_data = dict(config_data.get('policy') or {})
        if 'required_by_default' in policy_data:
            policy_data['required_by_default'] = parse_bool(
                policy_data['required_by_default'], 'policy.required_by_default'
            )

        try:
            return cls(
                policy=PolicyConfig(**policy_data),
                github=GitHubConfig(**(config_data.get('github') or {})),
                logging=LoggingConfig(**(config_data.get('logging') or {})),
                debug=parse_bool(config_data.get('debug', False), 'debug'),
            )
        except TypeError as e:
            raise ConfigurationError(f"Unknown configuration key in {config_path}: {e}") from e

    def validate(self) -> None:
        """설정 유효성 검사"""
        errors = self._type_errors()
        if errors:
            raise ConfigurationError(f"Configuration validation failed: {'; '.join(errors)}")

        # 예외 라벨 확인
        if not self.policy.exemption_label or not self.policy.exemption_label.strip():
            errors.append("Exemption label must not be empty")

        # CHANGELOG 경로는 저장소 기준 상대 경로
        changelog_path = self.policy.changelog_path
        if not changelog_path or not changelog_path.strip():
            errors.append("Changelog path must not be empty")
        elif PurePosixPath(changelog_path).is_absolute():
            errors.append(f"Changelog path must be repository-relative: {changelog_path}")

        if self.github.timeout_seconds <= 0:
            errors.append("GitHub timeout must be positive")

        # 로그 레벨 검증
        valid_log_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        if self.logging.level.upper() not in valid_log_levels:
            errors.append(f"Invalid log level: {self.logging.level}")

        if errors:
            raise ConfigurationError(f"Configuration validation failed: {'; '.join(errors)}")

    def _type_errors(self) -> List[str]:
        """YAML에서 읽은 값의 타입 검사"""
        expected = [
            ('policy.required_by_default', self.policy.required_by_default, bool),
            ('policy.exemption_label', self.policy.exemption_label, str),
            ('policy.changelog_path', self.policy.changelog_path, str),
            ('github.token', self.github.token, (str, type(None))),
            ('github.api_base_url', self.github.api_base_url, str),
            ('github.timeout_seconds', self.github.timeout_seconds, int),
            ('logging.level', self.logging.level, str),
            ('logging.format', self.logging.format, str),
            ('logging.file_path', self.logging.file_path, (str, type(None))),
            ('logging.max_file_size', self.logging.max_file_size, int),
            ('logging.backup_count', self.logging.backup_count, int),
            ('debug', self.debug, bool),
        ]

        errors = []
        for name, value, types in expected:
            # bool is an int subclass
            if not isinstance(value, types) or (types is int and isinstance(value, bool)):
                errors.append(f"{name} has invalid type {type(value).__name__}")
        return errors

    def to_dict(self) -> Dict[str, Any]:
        """설정을 딕셔너리로 변환"""
        return {
            'policy': {
                'required_by_default': self.policy.required_by_default,
                'exemption_label': self.policy.exemption_label,
                'changelog_path': self.policy.changelog_path,
            },
            'github': {
                'api_base_url': self.github.api_base_url,
                'timeout_seconds': self.github.timeout_seconds,
                # 보안상 토큰은 제외
            },
            'logging': {
                'level': self.logging.level,
                'format': self.logging.format,
                'file_path': self.logging.file_path,
                'max_file_size': self.logging.max_file_size,
                'backup_count': self.logging.backup_count,
            },
            'debug': self.debug,
        }


class ConfigManager:
    """설정 관리자"""

    def __init__(self, config: Optional[AppConfig] = None):
        self._config = config or AppConfig.from_env()
        self._config.validate()
        self._setup_logging()

    @property
    def config(self) -> AppConfig:
        """현재 설정 반환"""
        return self._config

    def _setup_logging(self) -> None:
        """로깅 설정"""
        level = "DEBUG" if self._config.debug else self._config.logging.level.upper()
        try:
            formatter = logging.Formatter(self._config.logging.format)
        except ValueError as e:
            raise ConfigurationError(f"Invalid log format: {e}") from e

        logging.basicConfig(
            level=getattr(logging, level),
            format=self._config.logging.format,
        )

        # 파일 로깅이 설정된 경우 로테이션 설정
        if self._config.logging.file_path:
            from logging.handlers import RotatingFileHandler

            try:
                handler = RotatingFileHandler(
                    self._config.logging.file_path,
                    maxBytes=self._config.logging.max_file_size,
                    backupCount=self._config.logging.backup_count,
                )
            except OSError as e:
                raise ConfigurationError(f"Cannot open log file {self._config.logging.file_path}: {e}") from e
            handler.setFormatter(formatter)

            # 루트 로거에 핸들러 추가
            root_logger = logging.getLogger()
            root_logger.addHandler(handler)


_config_manager: Optional[ConfigManager] = None


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """설정 파일 또는 환경 변수에서 설정을 한 번 로드"""
    global _config_manager
    config = AppConfig.from_yaml(config_path) if config_path else AppConfig.from_env()
    _config_manager = ConfigManager(config)
    return _config_manager.config


def get_config() -> AppConfig:
    """현재 설정 반환"""
    if _config_manager is None:
        return load_config()
    return _config_manager.config
