"""
multipart/form-data 编码器 - 不依赖HTTP客户端库，逐字节构造请求体

职责：
1. 生成每次请求独立的 boundary（前缀+纳秒时间戳+随机数）
2. 按 RFC 2388 quoted-string 规则转义字段名/文件名
3. 非ASCII文件名回退 RFC 2231 编码（UTF-8''...）
4. 先字段后文件，按输入顺序拼接，最后写结束分隔符

测试要点：
- test_fixed_boundary_deterministic: 固定boundary输出逐字节一致
- test_round_trip: 标准解析器可还原字段与文件
- test_non_ascii_filename: café.png 走 UTF-8'' 编码
"""

from __future__ import annotations

import re
import secrets
import time
from typing import Iterable
from urllib.parse import quote

from ..interfaces import RowsVisionError
from ..models import EncodedBody, MultipartField, MultipartFile

CRLF = "\r\n"
DEFAULT_BOUNDARY_PREFIX = "----rows-vision-"

# 可直接放入 quoted-string 的可打印ASCII（不含 " 与 \）
_SAFE_FILENAME_RE = re.compile(r"[\x20-\x21\x23-\x5B\x5D-\x7E]+")

# 与 encodeURIComponent 一致的非保留字符；' 不在其中，会被编码为 %27
_RFC2231_SAFE = "-_.!~*()"


def generate_boundary(prefix: str = DEFAULT_BOUNDARY_PREFIX) -> str:
    """生成 boundary：{prefix}{纳秒时间戳}-{随机hex}"""
    return f"{prefix}{time.time_ns()}-{secrets.token_hex(8)}"


def escape_quoted_string(value: str) -> str:
    """quoted-string 转义：反斜杠与双引号前加反斜杠"""
    return value.replace("\\", "\\\\").replace('"', '\\"')


def encode_filename(filename: str) -> str:
    """编码 Content-Disposition 中的文件名"""
    if _SAFE_FILENAME_RE.fullmatch(filename):
        return escape_quoted_string(filename)
    return "UTF-8''" + quote(filename, safe=_RFC2231_SAFE, encoding="utf-8")


def _field_part(boundary: str, field: MultipartField) -> list[bytes]:
    name = escape_quoted_string(field.name)
    return [
        f"--{boundary}{CRLF}".encode("utf-8"),
        f'Content-Disposition: form-data; name="{name}"{CRLF}{CRLF}'.encode("utf-8"),
        field.value.encode("utf-8"),
        CRLF.encode("ascii"),
    ]


def _file_part(boundary: str, file: MultipartFile) -> list[bytes]:
    name = escape_quoted_string(file.name)
    filename = encode_filename(file.filename)
    return [
        f"--{boundary}{CRLF}".encode("utf-8"),
        (
            f'Content-Disposition: form-data; name="{name}"; filename="{filename}"{CRLF}'
        ).encode("utf-8"),
        f"Content-Type: {file.effective_content_type}{CRLF}{CRLF}".encode("utf-8"),
        file.data,
        CRLF.encode("ascii"),
    ]


def boundary_collides(
    boundary: str,
    fields: Iterable[MultipartField],
    files: Iterable[MultipartFile],
) -> bool:
    """boundary 是否出现在任一字段值或文件内容中"""
    token = boundary.encode("utf-8")
    if any(token in f.value.encode("utf-8") for f in fields):
        return True
    return any(token in f.data for f in files)


def build_multipart_form_data(
    fields: list[MultipartField] | None = None,
    files: list[MultipartFile] | None = None,
    *,
    boundary: str | None = None,
    boundary_prefix: str = DEFAULT_BOUNDARY_PREFIX,
    check_collision: bool = False,
    max_attempts: int = 5,
) -> EncodedBody:
    """
    构造 multipart/form-data 请求体

    Args:
        fields: 文本字段（按顺序输出）
        files: 文件附件（字段之后按顺序输出）
        boundary: 指定 boundary（仅用于可复现输出），缺省时每次随机生成
        boundary_prefix: 随机 boundary 前缀
        check_collision: 扫描内容并在冲突时重新生成 boundary
        max_attempts: 冲突重试上限

    Returns:
        EncodedBody(body, content_type, boundary)
    """
    fields = list(fields or [])
    files = list(files or [])

    if boundary is None:
        boundary = generate_boundary(boundary_prefix)
        if check_collision:
            attempts = 1
            while boundary_collides(boundary, fields, files):
                if attempts >= max_attempts:
                    raise RowsVisionError(f"{max_attempts} 次尝试后仍无法生成不冲突的 boundary")
                boundary = generate_boundary(boundary_prefix)
                attempts += 1
    elif check_collision and boundary_collides(boundary, fields, files):
        raise RowsVisionError(f"指定的 boundary 出现在请求内容中: {boundary}")

    parts: list[bytes] = []
    for field in fields:
        parts.extend(_field_part(boundary, field))
    for file in files:
        parts.extend(_file_part(boundary, file))

    # 结束分隔符（末尾多两个 -）
    parts.append(f"--{boundary}--{CRLF}".encode("utf-8"))

    return EncodedBody(
        body=b"".join(parts),
        content_type=f"multipart/form-data; boundary={boundary}",
        boundary=boundary,
    )


encode = build_multipart_form_data
