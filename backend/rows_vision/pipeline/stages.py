"""
流水线阶段定义

职责：
1. 定义单次导入请求的各阶段名称
2. 阶段顺序即执行顺序：校验 → 聚合 → 编码 → 发送
3. 任一阶段失败即中断，发送阶段之前的错误不会产生网络请求
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class StageEnum(str, Enum):
    """流水线阶段枚举"""
    VALIDATE_PARAMS = "VALIDATE_PARAMS"
    AGGREGATE_FILES = "AGGREGATE_FILES"
    ENCODE_BODY = "ENCODE_BODY"
    SEND_REQUEST = "SEND_REQUEST"


@dataclass(frozen=True)
class PipelineStage:
    """流水线阶段"""
    name: str
    description: str = ""


# 单次 Vision 导入请求的阶段配置
IMPORT_STAGES: list[PipelineStage] = [
    PipelineStage(StageEnum.VALIDATE_PARAMS.value, "参数与跨字段校验"),
    PipelineStage(StageEnum.AGGREGATE_FILES.value, "收集并校验文件"),
    PipelineStage(StageEnum.ENCODE_BODY.value, "multipart 编码"),
    PipelineStage(StageEnum.SEND_REQUEST.value, "发送请求"),
]
