"""
流水线模块 - 文件聚合与请求编排

子模块：
- validation: 文件类型/大小/数量与跨字段校验
- sources: 数据项来源实现
- aggregator: 单项/全量文件聚合
- request_builder: 参数字段与请求体组装
- stages: 流水线各阶段定义
- executor: 流水线执行器
"""

from .aggregator import FileAggregator, normalize_property_names
from .executor import VisionImportExecutor
from .request_builder import RequestBuilder, build_form_fields
from .sources import InMemoryItemSource, LocalFileItemSource
from .stages import IMPORT_STAGES, PipelineStage, StageEnum

__all__ = [
    "FileAggregator",
    "normalize_property_names",
    "VisionImportExecutor",
    "RequestBuilder",
    "build_form_fields",
    "InMemoryItemSource",
    "LocalFileItemSource",
    "IMPORT_STAGES",
    "PipelineStage",
    "StageEnum",
]
