"""
数据项来源实现

- InMemoryItemSource: 内容已在内存中的数据项（测试/嵌入调用）
- LocalFileItemSource: 本地文件，每个文件一个 item 或全部放在同一 item
"""

from __future__ import annotations

import mimetypes
from pathlib import Path

from ..interfaces import BinaryReadFailure, IItemSource
from ..models import BinaryData, InputItem


class InMemoryItemSource(IItemSource):
    """内存数据项来源"""

    def __init__(self, items: list[InputItem]):
        self._items = list(items)

    def get_items(self) -> list[InputItem]:
        return self._items

    def read_binary(self, item_index: int, property_name: str) -> bytes:
        try:
            binary = self._items[item_index].binary[property_name]
        except (IndexError, KeyError) as e:
            raise BinaryReadFailure(property_name, item_index, "属性不存在") from e
        if binary.data is None:
            raise BinaryReadFailure(property_name, item_index, "无内存数据")
        return binary.data


class LocalFileItemSource(IItemSource):
    """本地文件数据项来源"""

    def __init__(
        self,
        paths: list[Path],
        property_name: str = "data",
        single_item: bool = False,
    ):
        self._paths: dict[tuple[int, str], Path] = {}
        self._items: list[InputItem] = []

        if single_item:
            item = InputItem()
            for i, path in enumerate(paths):
                name = property_name if i == 0 else f"{property_name}_{i}"
                item.binary[name] = self._describe(path)
                self._paths[(0, name)] = path
            self._items.append(item)
        else:
            for i, path in enumerate(paths):
                item = InputItem(binary={property_name: self._describe(path)})
                self._paths[(i, property_name)] = path
                self._items.append(item)

    @staticmethod
    def _describe(path: Path) -> BinaryData:
        mime_type, _ = mimetypes.guess_type(path.name)
        return BinaryData(file_name=path.name, mime_type=mime_type)

    def get_items(self) -> list[InputItem]:
        return self._items

    def read_binary(self, item_index: int, property_name: str) -> bytes:
        path = self._paths.get((item_index, property_name))
        if path is None:
            raise BinaryReadFailure(property_name, item_index, "属性不存在")
        try:
            return path.read_bytes()
        except OSError as e:
            raise BinaryReadFailure(property_name, item_index, str(e)) from e
