#!/usr/bin/env python3
"""設定クラスのテスト"""
import dataclasses
import json

import pytest

from s3_publisher.errors import ConfigError
from s3_publisher.models.config import AWSConfig, Config, UploadConfig


def write_config(tmp_path, data):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


class TestUploadConfig:

    def test_defaults(self):
        config = UploadConfig(bucket="artifacts")
        assert config.acl == "private"
        assert config.encryption == ""
        assert config.parallel == 0
        assert config.dry_run is False
        assert config.checksum is False

    def test_is_immutable(self):
        config = UploadConfig(bucket="artifacts")
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.bucket = "other"

    def test_target_leading_slash_normalized(self):
        assert UploadConfig(bucket="artifacts", target="/latest/app.zip").target == \
            "latest/app.zip"

    @pytest.mark.parametrize("kwargs", [
        {"bucket": ""},
        {"bucket": "artifacts", "encryption": "DES"},
        {"bucket": "artifacts", "acl": "world-writable"},
        {"bucket": "artifacts", "parallel": -2},
    ])
    def test_validation(self, kwargs):
        with pytest.raises(ConfigError):
            UploadConfig(**kwargs)

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            UploadConfig(bucket="")


class TestFromFile:

    def test_config_loading(self, tmp_path):
        path = write_config(tmp_path, {
            "logging": {"level": "DEBUG"},
            "aws": {"region": "eu-west-1", "endpoint": "http://minio:9000", "path_style": True},
            "upload": {"bucket": "artifacts", "strip_prefix": "dist/", "parallel": 4},
            "source": "dist/**/*",
            "exclude": ["dist/**/*.map"],
        })
        config = Config.from_file(path)

        assert config.logging.level == "DEBUG"
        assert config.aws.region == "eu-west-1"
        assert config.aws.path_style is True
        assert config.upload.bucket == "artifacts"
        assert config.upload.parallel == 4
        assert config.source == "dist/**/*"
        assert config.exclude == ["dist/**/*.map"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Config.from_file(str(tmp_path / "nope.json"))

    def test_bad_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError):
            Config.from_file(str(path))

    def test_unknown_key(self, tmp_path):
        path = write_config(tmp_path, {"upload": {"bucket": "b", "colour": "red"}, "source": "*"})
        with pytest.raises(ConfigError):
            Config.from_file(path)

    def test_missing_source(self, tmp_path):
        path = write_config(tmp_path, {"upload": {"bucket": "b"}})
        with pytest.raises(ConfigError):
            Config.from_file(path)


class TestFromEnv:

    def test_reads_plugin_variables(self):
        config = Config.from_env({
            "PLUGIN_ENDPOINT": "https://s3.example.com",
            "PLUGIN_ACCESS_KEY": "AKIA",
            "PLUGIN_SECRET_KEY": "secret",
            "PLUGIN_BUCKET": "artifacts",
            "PLUGIN_REGION": "ap-northeast-1",
            "PLUGIN_ENCRYPTION": "AES256",
            "PLUGIN_ACCESS": "public-read",
            "PLUGIN_CACHE_CONTROL": "max-age=60",
            "PLUGIN_PARALLEL": "8",
            "PLUGIN_SOURCE": "dist/**/*",
            "PLUGIN_TARGET": "/release",
            "PLUGIN_STRIP_PREFIX": "dist/",
            "PLUGIN_EXCLUDE": "dist/*.map, dist/tmp/**",
            "PLUGIN_PATH_STYLE": "true",
            "PLUGIN_DRY_RUN": "1",
            "PLUGIN_MD5SHA": "T",
        })

        assert config.aws.endpoint == "https://s3.example.com"
        assert config.aws.has_static_credentials
        assert config.aws.region == "ap-northeast-1"
        assert config.aws.path_style is True
        assert config.upload.bucket == "artifacts"
        assert config.upload.acl == "public-read"
        assert config.upload.encryption == "AES256"
        assert config.upload.cache_control == "max-age=60"
        assert config.upload.parallel == 8
        assert config.upload.target == "release"
        assert config.upload.strip_prefix == "dist/"
        assert config.upload.dry_run is True
        assert config.upload.checksum is True
        assert config.exclude == ["dist/*.map", "dist/tmp/**"]
        assert config.source == "dist/**/*"

    def test_defaults(self):
        config = Config.from_env({"PLUGIN_BUCKET": "b", "PLUGIN_SOURCE": "*.txt"})
        assert config.aws.region == "us-east-1"
        assert config.aws.endpoint is None
        assert not config.aws.has_static_credentials
        assert config.upload.acl == "private"
        assert config.upload.parallel == 0
        assert config.exclude == []

    @pytest.mark.parametrize("name,value", [
        ("PLUGIN_DRY_RUN", "maybe"),
        ("PLUGIN_PARALLEL", "many"),
    ])
    def test_invalid_values(self, name, value):
        with pytest.raises(ConfigError):
            Config.from_env({"PLUGIN_BUCKET": "b", "PLUGIN_SOURCE": "*", name: value})

    def test_custom_prefix(self):
        config = Config.from_env({"S3_BUCKET": "b", "S3_SOURCE": "*"}, prefix="S3_")
        assert config.upload.bucket == "b"


def test_aws_config_empty_region():
    assert AWSConfig(region="").region == "us-east-1"
