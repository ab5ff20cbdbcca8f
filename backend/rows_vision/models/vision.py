"""
Vision 导入模型 - 参数/聚合结果/请求/单项结果

对应 Rows /v1/vision/import 接口的表单参数
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from .multipart import MultipartFile


class VisionMode(str, Enum):
    """处理模式"""
    CREATE = "create"                    # 创建表格
    READ = "read"                        # 返回带单元格对象的数据
    READ_SIMPLIFIED = "read_simplified"  # 返回纯字符串数据


class CollectMode(str, Enum):
    """聚合模式"""
    SINGLE_ITEM = "single_item"   # 每个 item 一次请求
    ALL_ITEMS = "all_items"       # 所有 item 合并为一次请求


class VisionImportParams(BaseModel):
    """用户选择的标量参数"""
    mode: VisionMode = VisionMode.CREATE
    merge: bool = False
    folder_id: str = ""
    app_id: str = Field("", description="目标表格(spreadsheet) ID")
    table_id: str = ""
    instructions: str = ""


class AggregationResult(BaseModel):
    """聚合结果（一次逻辑请求）"""
    files: list[MultipartFile] = Field(default_factory=list)
    params: VisionImportParams = Field(default_factory=VisionImportParams)
    property_names: list[str] = Field(default_factory=list)
    item_indexes: list[int] = Field(default_factory=list, description="贡献文件的 item 序号")

    @property
    def total_size(self) -> int:
        return sum(f.size for f in self.files)

    @property
    def file_count(self) -> int:
        return len(self.files)


class VisionImportRequest(BaseModel):
    """待发送的 HTTP 请求"""
    url: str
    method: str = "POST"
    body: bytes
    headers: dict[str, str] = Field(default_factory=dict)

    model_config = {"frozen": True}

    def to_transport_kwargs(self) -> dict[str, Any]:
        return {
            "method": self.method,
            "url": self.url,
            "body": self.body,
            "headers": dict(self.headers),
        }


class ItemResult(BaseModel):
    """单项执行结果"""
    item_index: int
    response: dict[str, Any] | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
