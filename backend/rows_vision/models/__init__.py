"""
数据模型层 - 定义系统核心数据结构

所有模块通过这些模型交互，实现解耦：
- MultipartField/MultipartFile/EncodedBody: 编码器输入输出
- InputItem/BinaryData: 上游数据项
- VisionImportParams/AggregationResult: 聚合结果
- VisionImportRequest/ItemResult: 请求与执行结果
"""

from .binary import BinaryData, InputItem
from .multipart import DEFAULT_CONTENT_TYPE, EncodedBody, MultipartField, MultipartFile
from .vision import (
    AggregationResult,
    CollectMode,
    ItemResult,
    VisionImportParams,
    VisionImportRequest,
    VisionMode,
)

__all__ = [
    "BinaryData",
    "InputItem",
    "DEFAULT_CONTENT_TYPE",
    "EncodedBody",
    "MultipartField",
    "MultipartFile",
    "AggregationResult",
    "CollectMode",
    "ItemResult",
    "VisionImportParams",
    "VisionImportRequest",
    "VisionMode",
]
