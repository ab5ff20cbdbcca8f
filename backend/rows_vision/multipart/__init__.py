"""
multipart 编码模块

子模块：
- encoder: boundary 生成/转义/请求体拼接
"""

from .encoder import (
    build_multipart_form_data,
    encode,
    encode_filename,
    escape_quoted_string,
    generate_boundary,
)

__all__ = [
    "build_multipart_form_data",
    "encode",
    "encode_filename",
    "escape_quoted_string",
    "generate_boundary",
]
