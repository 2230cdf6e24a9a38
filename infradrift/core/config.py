"""Configuration classes. Only the [infra] and [infra.scan] sections of standards.toml
are read here, every other section is ignored."""
from pathlib import Path
from typing import Any, Dict, Type, TypeVar

from pydantic import ConfigDict, Field, ValidationError
import toml

from infradrift.core.base_model import BaseImmutableModel
from infradrift.core.exceptions import InfradriftException
from infradrift.core.log import Logger
from infradrift.core.log_events import LogEvent

DEFAULT_CONFIG_NAME = "standards.toml"
DEFAULT_MANIFEST_NAME = "infra-manifest.json"


class InvalidConfigException(InfradriftException):
    """Indicates an invalid configuration"""


class ScanSettings(BaseImmutableModel):
    """Scan concurrency and per-call timeout settings"""

    concurrency: int = Field(default=10, ge=1)
    connect_timeout: float = Field(default=10.0, gt=0)
    read_timeout: float = Field(default=20.0, gt=0)
    max_attempts: int = Field(default=3, ge=1)


class InfraConfig(BaseImmutableModel):
    """The [infra] section of standards.toml"""

    enabled: bool = False
    manifest: str = DEFAULT_MANIFEST_NAME
    scan: ScanSettings = Field(default_factory=ScanSettings)


GenericConfig = TypeVar("GenericConfig", bound="StandardsConfig")


class StandardsConfig(BaseImmutableModel):
    """Top level configuration class. `config_path` is set by from_file and is used to
    resolve relative paths such as infra.manifest."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    infra: InfraConfig = Field(default_factory=InfraConfig)
    config_path: Path = Path(DEFAULT_CONFIG_NAME)

    @property
    def project_root(self) -> Path:
        return self.config_path.resolve().parent

    def resolve_manifest_path(self) -> Path:
        """Absolute path of the configured manifest, relative to the config's directory"""
        manifest_path = Path(self.infra.manifest)
        if manifest_path.is_absolute():
            return manifest_path
        return self.project_root / manifest_path

    @classmethod
    def from_dict(
        cls: Type[GenericConfig], config_dict: Dict[str, Any], config_path: Path
    ) -> GenericConfig:
        try:
            return cls(**config_dict, config_path=config_path)
        except ValidationError as v_e:
            raise InvalidConfigException(f"Error in conf file {config_path}: {v_e}") from v_e

    @classmethod
    def from_file(cls: Type[GenericConfig], filepath: Path) -> GenericConfig:
        """Load a StandardsConfig from a toml file"""
        logger = Logger()
        with logger.bind(config_path=str(filepath)):
            logger.debug(event=LogEvent.LoadConfigStart)
            try:
                with open(filepath, "r") as fp:
                    config_str = fp.read()
            except OSError as os_e:
                raise InvalidConfigException(
                    f"Unable to read conf file {filepath}: {os_e}"
                ) from os_e
            try:
                config_dict = dict(toml.loads(config_str))
            except toml.TomlDecodeError as t_e:
                raise InvalidConfigException(f"Invalid toml in conf file {filepath}: {t_e}") from t_e
            config = cls.from_dict(config_dict, config_path=Path(filepath))
            logger.debug(event=LogEvent.LoadConfigEnd, infra_enabled=config.infra.enabled)
            return config
