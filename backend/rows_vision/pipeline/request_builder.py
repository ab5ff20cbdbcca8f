"""
请求组装 - 标量参数转表单字段，与文件一起编码为 HTTP 请求

字段顺序：folder_id, app_id, table_id, mode, merge, instructions
空的可选参数不发送；merge 始终以 "true"/"false" 发送。
"""

from __future__ import annotations

import logging

from ..config import RuntimeConfig
from ..models import (
    AggregationResult,
    EncodedBody,
    MultipartField,
    VisionImportParams,
    VisionImportRequest,
)
from ..multipart import build_multipart_form_data

logger = logging.getLogger(__name__)


def build_form_fields(params: VisionImportParams) -> list[MultipartField]:
    """按固定顺序生成表单字段，忽略空的可选参数"""
    fields: list[MultipartField] = []

    for name in ("folder_id", "app_id", "table_id"):
        value = getattr(params, name)
        if value:
            fields.append(MultipartField(name=name, value=value))

    fields.append(MultipartField(name="mode", value=params.mode.value))
    fields.append(MultipartField(name="merge", value="true" if params.merge else "false"))

    if params.instructions:
        fields.append(MultipartField(name="instructions", value=params.instructions))

    return fields


class RequestBuilder:
    """聚合结果 → VisionImportRequest"""

    def __init__(self, config: RuntimeConfig | None = None):
        self.config = config or RuntimeConfig()

    def encode(self, result: AggregationResult) -> EncodedBody:
        multipart = self.config.multipart
        return build_multipart_form_data(
            build_form_fields(result.params),
            result.files,
            boundary_prefix=multipart.boundary_prefix,
            check_collision=multipart.check_collision,
            max_attempts=multipart.max_boundary_attempts,
        )

    def build(self, result: AggregationResult) -> VisionImportRequest:
        encoded = self.encode(result)
        logger.info(
            f"请求体编码完成: {result.file_count} 个文件, {len(encoded)} 字节"
        )
        return VisionImportRequest(
            url=self.config.endpoint.url,
            body=encoded.body,
            headers={
                **encoded.headers,
                "Accept": self.config.endpoint.accept,
            },
        )
