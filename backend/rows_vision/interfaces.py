"""
模块接口契约 - 定义外部协作方接口与异常

设计原则：
1. 数据项来源与 HTTP 传输由宿主提供，本包只依赖接口
2. 每个接口定义清晰的输入输出类型
3. 便于单元测试和mock替换

使用方式：
    from rows_vision.interfaces import ITransport

    class MyTransport(ITransport):
        def post(self, url: str, body: bytes, headers: dict[str, str]) -> dict:
            ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .models import InputItem


# ============================================================================
# 外部协作方接口
# ============================================================================

class IItemSource(ABC):
    """数据项来源接口 - 宿主工作流的输入序列"""

    @abstractmethod
    def get_items(self) -> list[InputItem]:
        """返回有序的数据项列表"""
        ...

    @abstractmethod
    def read_binary(self, item_index: int, property_name: str) -> bytes:
        """
        读取指定数据项的二进制内容

        Args:
            item_index: 数据项序号
            property_name: 二进制属性名

        Returns:
            文件字节

        Raises:
            BinaryReadFailure: 属性存在但读取失败
        """
        ...


class ITransport(ABC):
    """HTTP 传输接口 - 鉴权/重试/网络错误由实现负责"""

    @abstractmethod
    def post(self, url: str, body: bytes, headers: dict[str, str]) -> dict[str, Any]:
        """
        发送 POST 请求

        Args:
            url: 接口地址
            body: 请求体
            headers: 请求头（含 Content-Type）

        Returns:
            解析后的 JSON 响应

        Raises:
            TransportError: 请求失败
        """
        ...


# ============================================================================
# 异常定义
# ============================================================================

class RowsVisionError(Exception):
    """基础异常"""
    pass


class InvalidParameter(RowsVisionError):
    """参数非法"""
    pass


class TransportError(RowsVisionError):
    """传输错误"""
    pass


class MissingBinaryData(RowsVisionError):
    """目标数据项缺少指定的二进制属性"""

    def __init__(self, property_name: str, available: list[str] | None = None):
        self.property_name = property_name
        self.available = list(available or [])
        available_text = ", ".join(self.available) or "none"
        super().__init__(
            f'未找到二进制属性 "{property_name}"（可用属性: {available_text}），'
            f"请确认上游节点输出了二进制数据"
        )


class BinaryReadFailure(RowsVisionError):
    """二进制属性存在但读取失败"""

    def __init__(self, property_name: str, item_index: int, reason: str = ""):
        self.property_name = property_name
        self.item_index = item_index
        message = f'读取二进制属性 "{property_name}" 失败（item {item_index}）'
        if reason:
            message += f": {reason}"
        super().__init__(message)


class ImportPolicyError(RowsVisionError):
    """文件策略违规"""
    pass


class UnsupportedFileType(ImportPolicyError):
    """文件类型不在允许列表"""

    def __init__(self, filename: str, extension: str, allowed: list[str]):
        self.filename = filename
        self.extension = extension
        self.allowed = list(allowed)
        super().__init__(
            f'文件 "{filename}" 类型 "{extension}" 不受支持，允许类型: {", ".join(self.allowed)}'
        )


class FileTooLarge(ImportPolicyError):
    """单文件超限"""

    def __init__(self, filename: str, size: int, limit: int):
        self.filename = filename
        self.size = size
        self.limit = limit
        super().__init__(
            f'文件 "{filename}" 大小 ({_mb(size)}MB) 超过上限 {_mb(limit)}MB'
        )


class TotalSizeExceeded(ImportPolicyError):
    """总大小超限"""

    def __init__(self, total: int, limit: int):
        self.total = total
        self.limit = limit
        super().__init__(f"文件总大小 ({_mb(total)}MB) 超过上限 {_mb(limit)}MB")


class TooManyFiles(ImportPolicyError):
    """文件数超限"""

    def __init__(self, count: int, limit: int):
        self.count = count
        self.limit = limit
        super().__init__(f"文件过多 ({count})，单次请求最多 {limit} 个")


class MissingRequiredParameter(ImportPolicyError):
    """跨字段依赖缺失"""

    def __init__(self, parameter: str, required_by: str):
        self.parameter = parameter
        self.required_by = required_by
        super().__init__(f"提供 {required_by} 时必须同时提供 {parameter}")


class NoFilesProvided(ImportPolicyError):
    """聚合后没有任何文件"""

    def __init__(self, property_names: list[str]):
        self.property_names = list(property_names)
        names = ", ".join(f'"{n}"' for n in self.property_names)
        super().__init__(f"所有数据项中均未找到二进制属性 {names} 的数据")


def _mb(size: int) -> str:
    return f"{size / 1024 / 1024:.2f}"
