"""
上游数据项模型

对应宿主工作流中的一个 item：可携带若干命名二进制属性。
二进制内容本身由 IItemSource.read_binary 读取，模型只描述元数据。
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class BinaryData(BaseModel):
    """二进制属性元数据"""
    file_name: str | None = None
    mime_type: str | None = None
    data: bytes | None = Field(None, description="内存中的内容（可选，由数据源决定是否使用）")

    def display_name(self, fallback: str = "file") -> str:
        """文件名，缺省时使用 fallback"""
        return self.file_name or fallback


class InputItem(BaseModel):
    """上游数据项"""
    binary: dict[str, BinaryData] = Field(default_factory=dict)

    def has_binary(self, property_name: str) -> bool:
        return self.binary.get(property_name) is not None

    def binary_property_names(self) -> list[str]:
        """按插入顺序返回二进制属性名"""
        return list(self.binary)
