"""
文件校验 - 类型/大小/数量/跨字段规则

所有检查函数在违规时抛出 ImportPolicyError 子类，
限制值通过 VisionLimits 注入，不读取全局配置。
"""

from __future__ import annotations

from ..config import VisionLimits
from ..interfaces import (
    FileTooLarge,
    MissingRequiredParameter,
    TooManyFiles,
    TotalSizeExceeded,
    UnsupportedFileType,
)
from ..models import VisionImportParams


def get_file_extension(filename: str) -> str:
    """最后一个 . 之后的小写扩展名，无 . 时返回空串"""
    parts = filename.split(".")
    return parts[-1].lower() if len(parts) > 1 else ""


def validate_file_type(filename: str, limits: VisionLimits) -> bool:
    allowed = {ext.lower() for ext in limits.allowed_file_types}
    return get_file_extension(filename) in allowed


def check_file_type(filename: str, limits: VisionLimits) -> None:
    if not validate_file_type(filename, limits):
        raise UnsupportedFileType(
            filename, get_file_extension(filename), limits.allowed_file_types
        )


def check_file_size(filename: str, size: int, limits: VisionLimits) -> None:
    if size > limits.max_file_size:
        raise FileTooLarge(filename, size, limits.max_file_size)


def check_total_size(total: int, limits: VisionLimits) -> None:
    if total > limits.max_total_size:
        raise TotalSizeExceeded(total, limits.max_total_size)


def check_file_count(count: int, limits: VisionLimits) -> None:
    if count > limits.max_files:
        raise TooManyFiles(count, limits.max_files)


def check_params(params: VisionImportParams) -> None:
    """跨字段规则：提供 table_id 时必须提供 app_id"""
    if params.table_id and not params.app_id:
        raise MissingRequiredParameter("app_id", required_by="table_id")
