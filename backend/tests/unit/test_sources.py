"""
数据项来源单元测试

每个模块完成后必须运行：pytest backend/tests/unit/test_sources.py -v
"""

from pathlib import Path

import pytest

from rows_vision.interfaces import BinaryReadFailure
from rows_vision.models import BinaryData, InputItem
from rows_vision.pipeline import InMemoryItemSource, LocalFileItemSource


class TestInMemoryItemSource:
    """内存来源测试"""

    def test_read_binary(self):
        source = InMemoryItemSource([InputItem(binary={"data": BinaryData(file_name="a.pdf", data=b"1")})])
        assert source.read_binary(0, "data") == b"1"

    def test_read_without_data(self):
        source = InMemoryItemSource([InputItem(binary={"data": BinaryData(file_name="a.pdf")})])
        with pytest.raises(BinaryReadFailure) as exc_info:
            source.read_binary(0, "data")
        assert exc_info.value.item_index == 0
        assert exc_info.value.property_name == "data"

    def test_read_unknown_property(self):
        source = InMemoryItemSource([InputItem()])
        with pytest.raises(BinaryReadFailure):
            source.read_binary(0, "data")


class TestLocalFileItemSource:
    """本地文件来源测试"""

    def test_one_item_per_file(self, temp_dir: Path):
        """测试每个文件一个item"""
        a = temp_dir / "a.pdf"
        b = temp_dir / "b.png"
        a.write_bytes(b"%PDF")
        b.write_bytes(b"PNG")

        source = LocalFileItemSource([a, b])
        items = source.get_items()
        assert len(items) == 2
        assert items[0].binary["data"].file_name == "a.pdf"
        assert items[0].binary["data"].mime_type == "application/pdf"
        assert items[1].binary["data"].mime_type == "image/png"
        assert source.read_binary(1, "data") == b"PNG"

    def test_single_item(self, temp_dir: Path):
        """测试所有文件放入同一item"""
        paths = []
        for name in ("a.pdf", "b.csv", "c.xlsx"):
            path = temp_dir / name
            path.write_bytes(name.encode())
            paths.append(path)

        source = LocalFileItemSource(paths, single_item=True)
        items = source.get_items()
        assert len(items) == 1
        assert items[0].binary_property_names() == ["data", "data_1", "data_2"]
        assert source.read_binary(0, "data_2") == b"c.xlsx"

    def test_missing_file(self, temp_dir: Path):
        """测试文件读取失败"""
        source = LocalFileItemSource([temp_dir / "gone.pdf"])
        with pytest.raises(BinaryReadFailure) as exc_info:
            source.read_binary(0, "data")
        assert isinstance(exc_info.value.__cause__, OSError)
