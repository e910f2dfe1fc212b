"""
Configuration Management

Settings for the deploy summarizer and the pull request checklist tool.
"""

import os
import yaml
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List
from pathlib import Path
import logging


class ConfigurationError(ValueError):
    """Raised when required settings are missing or invalid."""
    def __init__(self, errors: List[str]):
        super().__init__(f"Configuration validation failed: {'; '.join(errors)}")
        self.errors = errors


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


@dataclass
class GitHubConfig:
    """GitHub API settings"""
    token: Optional[str] = None
    api_base_url: str = "https://api.github.com"
    web_url: str = "https://github.com"
    timeout_seconds: int = 30


@dataclass
class ChecklistConfig:
    """pr-checklist settings"""
    org: str = "NoRedInk"
    repo: str = "NoRedInk"
    branch: Optional[str] = None
    git_dir: Optional[str] = None
    dry_run: bool = False
    custom_checklists: List[str] = field(default_factory=list)
    use_api_files: bool = False


@dataclass
class DeployConfig:
    """deploy-complexity settings"""
    branch: str = "production"
    gh_url: Optional[str] = None
    git_dir: Optional[str] = None
    dirstat: bool = False
    stat: bool = False


@dataclass
class LoggingConfig:
    """Logging settings"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: Optional[str] = None
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5


@dataclass
class AppConfig:
    """Application settings"""
    github: GitHubConfig = field(default_factory=GitHubConfig)
    checklist: ChecklistConfig = field(default_factory=ChecklistConfig)
    deploy: DeployConfig = field(default_factory=DeployConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls, base: Optional["AppConfig"] = None) -> "AppConfig":
        """
        Load settings from environment variables.

        Args:
            base: Settings to fall back on for variables that are not set

        Returns:
            New AppConfig
        """
        base = base or cls()
        custom = os.getenv("PR_CHECKLIST_CUSTOM")
        return cls(
            github=GitHubConfig(
                token=os.getenv("GITHUB_TOKEN", base.github.token),
                api_base_url=os.getenv("GITHUB_API_URL", base.github.api_base_url),
                web_url=os.getenv("GITHUB_WEB_URL", base.github.web_url),
                timeout_seconds=int(os.getenv("GITHUB_TIMEOUT", str(base.github.timeout_seconds))),
            ),
            checklist=ChecklistConfig(
                org=os.getenv("PR_CHECKLIST_ORG", base.checklist.org),
                repo=os.getenv("PR_CHECKLIST_REPO", base.checklist.repo),
                branch=os.getenv("GIT_BRANCH", base.checklist.branch),
                git_dir=os.getenv("PR_CHECKLIST_GIT_DIR", base.checklist.git_dir),
                dry_run=_env_flag("PR_CHECKLIST_DRY_RUN", str(base.checklist.dry_run)),
                custom_checklists=custom.split(os.pathsep) if custom else list(base.checklist.custom_checklists),
                use_api_files=base.checklist.use_api_files,
            ),
            deploy=DeployConfig(
                branch=os.getenv("DEPLOY_BRANCH", base.deploy.branch),
                gh_url=os.getenv("DEPLOY_GH_URL", base.deploy.gh_url),
                git_dir=base.deploy.git_dir,
                dirstat=base.deploy.dirstat,
                stat=base.deploy.stat,
            ),
            logging=LoggingConfig(
                level=os.getenv("LOG_LEVEL", base.logging.level),
                format=os.getenv("LOG_FORMAT", base.logging.format),
                file_path=os.getenv("LOG_FILE", base.logging.file_path),
                max_file_size=int(os.getenv("LOG_MAX_SIZE", str(base.logging.max_file_size))),
                backup_count=int(os.getenv("LOG_BACKUP_COUNT", str(base.logging.backup_count))),
            ),
        )

    @classmethod
    def from_yaml(cls, config_path: str) -> "AppConfig":
        """Load settings from a YAML file."""
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_file, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f) or {}

        if not isinstance(config_data, dict):
            raise ConfigurationError([f"{config_path} must contain a mapping"])

        try:
            return cls(
                github=GitHubConfig(**config_data.get('github', {})),
                checklist=ChecklistConfig(**config_data.get('checklist', {})),
                deploy=DeployConfig(**config_data.get('deploy', {})),
                logging=LoggingConfig(**config_data.get('logging', {})),
            )
        except TypeError as e:
            raise ConfigurationError([f"{config_path}: {e}"]) from e

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> "AppConfig":
        """YAML file first (when given), environment variables on top."""
        base = cls.from_yaml(config_path) if config_path else None
        return cls.from_env(base)

    def validate_for_checklist(self) -> None:
        """Check the settings pr-checklist cannot run without."""
        errors = []

        if not self.checklist.branch:
            errors.append("--branch must be set")

        if not self.github.token:
            errors.append("--token or GITHUB_TOKEN must be set")

        errors.extend(self._common_errors())

        if errors:
            raise ConfigurationError(errors)

    def validate(self) -> None:
        """Check settings shared by both tools."""
        errors = self._common_errors()
        if errors:
            raise ConfigurationError(errors)

    def _common_errors(self) -> List[str]:
        errors = []

        valid_log_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        if self.logging.level.upper() not in valid_log_levels:
            errors.append(f"Invalid log level: {self.logging.level}")

        if self.github.timeout_seconds <= 0:
            errors.append("GitHub timeout must be positive")

        return errors

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to a dictionary (the token is left out)."""
        return {
            'github': {
                'api_base_url': self.github.api_base_url,
                'web_url': self.github.web_url,
                'timeout_seconds': self.github.timeout_seconds,
            },
            'checklist': {
                'org': self.checklist.org,
                'repo': self.checklist.repo,
                'branch': self.checklist.branch,
                'git_dir': self.checklist.git_dir,
                'dry_run': self.checklist.dry_run,
                'custom_checklists': list(self.checklist.custom_checklists),
                'use_api_files': self.checklist.use_api_files,
            },
            'deploy': {
                'branch': self.deploy.branch,
                'gh_url': self.deploy.gh_url,
                'git_dir': self.deploy.git_dir,
                'dirstat': self.deploy.dirstat,
                'stat': self.deploy.stat,
            },
            'logging': {
                'level': self.logging.level,
                'format': self.logging.format,
                'file_path': self.logging.file_path,
                'max_file_size': self.logging.max_file_size,
                'backup_count': self.logging.backup_count,
            },
        }


def setup_logging(config: LoggingConfig) -> None:
    """Configure the root logger, with a rotating file handler when a file is set."""
    logging.basicConfig(
        level=getattr(logging, config.level.upper()),
        format=config.format,
    )

    if config.file_path:
        from logging.handlers import RotatingFileHandler

        handler = RotatingFileHandler(
            config.file_path,
            maxBytes=config.max_file_size,
            backupCount=config.backup_count,
        )
        handler.setFormatter(logging.Formatter(config.format))
        logging.getLogger().addHandler(handler)
