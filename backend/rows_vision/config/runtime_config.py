"""
运行期配置 - 读取 config/runtime.yaml

职责：
- 加载文件限制/接口地址/编码器参数
- 提供环境变量覆盖机制
- 类型安全的配置访问
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

MIB = 1024 * 1024

DEFAULT_ALLOWED_FILE_TYPES = [
    "png", "jpg", "jpeg", "webp", "pdf", "heic", "csv", "tsv", "xls", "xlsx",
]


class VisionLimits(BaseModel):
    """Vision 导入文件限制"""

    allowed_file_types: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ALLOWED_FILE_TYPES)
    )
    max_file_size: int = 80 * MIB
    max_total_size: int = 80 * MIB
    max_files: int = 50


class EndpointConfig(BaseModel):
    """接口配置"""

    url: str = "https://api.rows.com/v1/vision/import"
    accept: str = "application/json"


class MultipartConfig(BaseModel):
    """multipart 编码配置"""

    boundary_prefix: str = "----rows-vision-"
    check_collision: bool = False
    max_boundary_attempts: int = 5


class AggregationConfig(BaseModel):
    """聚合配置"""

    default_binary_property: str = "data"
    auto_discover_extra_properties: bool = True


class LoggingConfig(BaseModel):
    """日志配置"""

    log_level: str = "INFO"


class RuntimeConfig(BaseSettings):
    """运行期配置（支持环境变量覆盖）"""

    limits: VisionLimits = Field(default_factory=VisionLimits)
    endpoint: EndpointConfig = Field(default_factory=EndpointConfig)
    multipart: MultipartConfig = Field(default_factory=MultipartConfig)
    aggregation: AggregationConfig = Field(default_factory=AggregationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {
        "env_prefix": "ROWS_VISION_",
        "env_nested_delimiter": "__",
    }

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> RuntimeConfig:
        """从YAML文件加载配置"""
        path = Path(yaml_path)
        if not path.exists():
            return cls()

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        runtime_opts = data.get("runtime_options", {})

        return cls(
            limits=VisionLimits(**cls._extract(runtime_opts, "limits")),
            endpoint=EndpointConfig(**cls._extract(runtime_opts, "endpoint")),
            multipart=MultipartConfig(**cls._extract(runtime_opts, "multipart")),
            aggregation=AggregationConfig(**cls._extract(runtime_opts, "aggregation")),
            logging=LoggingConfig(**cls._extract(runtime_opts, "logging")),
        )

    @staticmethod
    def _extract(data: dict[str, Any], key: str) -> dict[str, Any]:
        """提取并展平配置（支持 {default: x} 叶子）"""
        section = data.get(key) or {}
        result = {}
        for k, v in section.items():
            if isinstance(v, dict) and "default" in v:
                result[k] = v["default"]
            elif not isinstance(v, dict):
                result[k] = v
        return result


def configure_logging(config: RuntimeConfig) -> None:
    """按配置设置 rows_vision 日志级别"""
    level = logging.getLevelName(config.logging.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.getLogger("rows_vision").setLevel(level)


# 全局配置实例
_config: RuntimeConfig | None = None

DEFAULT_CONFIG_PATH = Path("config/runtime.yaml")


def get_config() -> RuntimeConfig:
    """获取全局配置（惰性加载）"""
    global _config
    if _config is None:
        _config = RuntimeConfig.from_yaml(DEFAULT_CONFIG_PATH)
    return _config


def reload_config(yaml_path: str | Path | None = None) -> RuntimeConfig:
    """重新加载配置"""
    global _config
    path = yaml_path or DEFAULT_CONFIG_PATH
    _config = RuntimeConfig.from_yaml(path)
    return _config
