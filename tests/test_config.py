#!/usr/bin/env python3
"""Tests for configuration loading."""

from pathlib import Path

import pytest

from kvmconfigurator.config import XML_DIR_ENV, AppConfig, load_config
from kvmconfigurator.errors import ConfigError


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    monkeypatch.delenv(XML_DIR_ENV, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))


class TestAppConfig:
    def test_defaults(self):
        config = AppConfig()
        assert config.filepaths.max_lines == 10
        assert config.tools.virsh == "virsh"
        assert config.tools.qemu_img == "qemu-img"
        assert config.logging.level == "WARNING"
        assert str(config.xml_dir).endswith("kvm-configurator/xml")

    def test_from_file(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text(
            "filepaths:\n"
            "  xml_dir: /srv/xml\n"
            "  max_lines: 20\n"
            "tools:\n"
            "  connect_uri: qemu:///system\n"
            "logging:\n"
            "  level: debug\n"
            "distributions:\n"
            "  - debian\n"
        )
        config = AppConfig.from_file(path)
        assert config.xml_dir == Path("/srv/xml")
        assert config.filepaths.max_lines == 20
        assert config.tools.connect_uri == "qemu:///system"
        assert config.logging.level == "DEBUG"
        assert config.source == str(path)

    def test_blank_xml_dir_uses_default(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text("filepaths:\n  xml_dir: ''\n")
        assert str(AppConfig.from_file(path).xml_dir).endswith("kvm-configurator/xml")

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AppConfig.from_file(tmp_path / "nope.yaml")

    @pytest.mark.parametrize(
        "content",
        ["filepaths: [unclosed\n", "- just\n- a list\n", "filepaths:\n  max_lines: 0\n", "logging:\n  level: LOUD\n"],
    )
    def test_invalid_file(self, tmp_path, content):
        path = tmp_path / "bad.yaml"
        path.write_text(content)
        with pytest.raises(ConfigError):
            AppConfig.from_file(path)


class TestLoadConfig:
    def test_no_file_gives_defaults(self):
        config = load_config()
        assert config.source is None

    def test_file_in_working_directory(self, tmp_path):
        (tmp_path / "oslist.yaml").write_text("filepaths:\n  xml_dir: /from/cwd\n")
        config = load_config()
        assert config.xml_dir == Path("/from/cwd")

    def test_user_config_directory(self, tmp_path):
        user_dir = tmp_path / "home" / ".config" / "kvm-configurator"
        user_dir.mkdir(parents=True)
        (user_dir / "oslist.yaml").write_text("filepaths:\n  xml_dir: /from/home\n")
        assert load_config().xml_dir == Path("/from/home")

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        (tmp_path / "oslist.yaml").write_text("filepaths:\n  xml_dir: /from/cwd\n")
        monkeypatch.setenv(XML_DIR_ENV, "/from/env")
        assert load_config().xml_dir == Path("/from/env")

    def test_argument_overrides_env(self, monkeypatch):
        monkeypatch.setenv(XML_DIR_ENV, "/from/env")
        assert load_config(xml_dir="/from/arg").xml_dir == Path("/from/arg")

    def test_explicit_path_must_exist(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")
