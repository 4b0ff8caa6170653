#!/usr/bin/env python3
"""
Pydantic models for the configuration file.

The file is the YAML shared with the VM creation wizard; only the blocks the
VM manager needs are modelled here, everything else is ignored.
"""

import os
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from kvmconfigurator.errors import ConfigError
from kvmconfigurator.logging import LOG_LEVELS

CONFIG_FILE_NAME = "oslist.yaml"
XML_DIR_ENV = "KVMCONF_XML_DIR"


def default_xml_dir() -> str:
    return str(Path.home() / ".local/share/kvm-configurator/xml")


def default_config_locations() -> List[Path]:
    return [
        Path.cwd() / CONFIG_FILE_NAME,
        Path.home() / ".config/kvm-configurator" / CONFIG_FILE_NAME,
    ]


class FilePaths(BaseModel):
    """Directory settings."""

    input_dir: Optional[str] = Field(default=None, description="Directory scanned for ISO files")
    xml_dir: str = Field(default_factory=default_xml_dir, description="Directory of saved XML definitions")
    max_lines: int = Field(default=10, ge=1, description="Rows shown per page in file pickers")

    @field_validator("xml_dir", mode="before")
    @classmethod
    def blank_xml_dir_uses_default(cls, v):
        if v is None or not str(v).strip():
            return default_xml_dir()
        return str(Path(str(v).strip()).expanduser())


class ToolSettings(BaseModel):
    """External executables."""

    virsh: str = Field(default="virsh")
    qemu_img: str = Field(default="qemu-img")
    connect_uri: Optional[str] = Field(default=None, description="libvirt URI passed as virsh -c")


class LoggingSettings(BaseModel):
    level: str = Field(default="WARNING")
    json_output: bool = Field(default=False)
    log_file: Optional[str] = Field(default=None)

    @field_validator("level")
    @classmethod
    def level_must_be_valid(cls, v: str) -> str:
        v = v.upper()
        if v not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}")
        return v


class AppConfig(BaseModel):
    """Complete configuration with validation."""

    filepaths: FilePaths = Field(default_factory=FilePaths)
    tools: ToolSettings = Field(default_factory=ToolSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    source: Optional[str] = Field(default=None, exclude=True)

    @property
    def xml_dir(self) -> Path:
        return Path(self.filepaths.xml_dir)

    @classmethod
    def from_file(cls, path: Path) -> "AppConfig":
        """Load configuration from a YAML file."""
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        try:
            data = yaml.safe_load(path.read_text()) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse config file {path}: {e}")
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must be a YAML mapping")
        try:
            config = cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid config file {path}: {e}")
        config.source = str(path)
        return config


def load_config(path: Optional[Path] = None, xml_dir: Optional[str] = None) -> AppConfig:
    """
    Resolve the effective configuration.

    An explicit ``path`` must exist. Without one the default locations are
    searched and built-in defaults used if none exists. ``KVMCONF_XML_DIR``
    overrides the file; the ``xml_dir`` argument overrides both.
    """
    if path is not None:
        config = AppConfig.from_file(Path(path).expanduser())
    else:
        config = AppConfig()
        for candidate in default_config_locations():
            if candidate.is_file():
                config = AppConfig.from_file(candidate)
                break

    override = xml_dir or os.getenv(XML_DIR_ENV)
    if override:
        config.filepaths.xml_dir = str(Path(override).expanduser())
    return config
