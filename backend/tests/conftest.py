"""
pytest 配置与公共 fixtures

使用方式：
    def test_something(make_item, item_source):
        source = item_source([make_item(data=("a.pdf", b"%PDF"))])
"""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Any, Callable, Generator

import pytest

from rows_vision.config import RuntimeConfig, VisionLimits
from rows_vision.interfaces import ITransport
from rows_vision.models import BinaryData, InputItem, VisionImportParams
from rows_vision.pipeline import InMemoryItemSource


# ============================================================================
# 配置 Fixtures
# ============================================================================

@pytest.fixture
def runtime_config() -> RuntimeConfig:
    """运行期配置（默认值）"""
    return RuntimeConfig()


@pytest.fixture
def limits() -> VisionLimits:
    """默认文件限制"""
    return VisionLimits()


@pytest.fixture
def small_limits() -> VisionLimits:
    """缩小的大小限制（避免测试分配大内存）"""
    return VisionLimits(max_file_size=100, max_total_size=250, max_files=5)


# ============================================================================
# 数据项 Fixtures
# ============================================================================

@pytest.fixture
def make_item() -> Callable[..., InputItem]:
    """
    构造数据项

    make_item(data=("a.pdf", b"..."), extra=("b.png", b"...", "image/png"))
    值为 None 表示属性存在但内容不可读。
    """

    def _make(**binaries: Any) -> InputItem:
        item = InputItem()
        for name, entry in binaries.items():
            if entry is None:
                item.binary[name] = BinaryData(file_name=f"{name}.pdf")
                continue
            file_name, content, *rest = entry
            item.binary[name] = BinaryData(
                file_name=file_name,
                data=content,
                mime_type=rest[0] if rest else None,
            )
        return item

    return _make


@pytest.fixture
def item_source() -> Callable[[list[InputItem]], InMemoryItemSource]:
    """内存数据项来源工厂"""
    return InMemoryItemSource


@pytest.fixture
def default_params() -> VisionImportParams:
    """默认导入参数"""
    return VisionImportParams()


# ============================================================================
# 传输 Fixtures
# ============================================================================

class FakeTransport(ITransport):
    """记录请求的假传输"""

    def __init__(self, response: dict[str, Any] | None = None):
        self.response = response or {"status": "ok"}
        self.calls: list[dict[str, Any]] = []

    def post(self, url: str, body: bytes, headers: dict[str, str]) -> dict[str, Any]:
        self.calls.append({"url": url, "body": body, "headers": headers})
        return dict(self.response)


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


# ============================================================================
# 文件 Fixtures
# ============================================================================

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """临时目录"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)
