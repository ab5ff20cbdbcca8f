"""
multipart 模型 - 编码器的输入与输出

- MultipartField: 文本字段
- MultipartFile: 文件附件
- EncodedBody: 编码结果（不可变，一次编码一个实例）
"""

from __future__ import annotations

from pydantic import BaseModel, Field

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class MultipartField(BaseModel):
    """文本字段"""
    name: str = Field(..., min_length=1)
    value: str = ""


class MultipartFile(BaseModel):
    """文件附件"""
    name: str = Field(..., min_length=1, description="表单字段名")
    filename: str
    data: bytes = b""
    content_type: str | None = Field(None, description="缺省为 application/octet-stream")

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def effective_content_type(self) -> str:
        return self.content_type or DEFAULT_CONTENT_TYPE


class EncodedBody(BaseModel):
    """编码结果"""
    body: bytes
    content_type: str
    boundary: str

    model_config = {"frozen": True}

    @property
    def headers(self) -> dict[str, str]:
        return {"Content-Type": self.content_type}

    def __len__(self) -> int:
        return len(self.body)
