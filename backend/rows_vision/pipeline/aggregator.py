"""
文件聚合器 - 从一个或全部数据项收集待上传文件

职责：
1. 单项模式：读取指定 item 的目标二进制属性（缺失即失败）
2. 全量模式：遍历所有 item，缺少目标属性的 item 跳过
3. 附加属性：显式列出的属性 / 自动发现同一 item 上的其余属性
4. 逐文件执行类型/大小/累计大小校验，全量模式校验文件数

测试要点：
- test_collect_all_skips_missing: 3个item只有1、3有数据 → 2个文件且保持顺序
- test_extra_read_failure_skipped: 自动发现属性读取失败被跳过
- test_extra_policy_violation_aborts: 自动发现属性类型非法仍中断
"""

from __future__ import annotations

import logging
from typing import Any

from ..config import VisionLimits
from ..interfaces import (
    BinaryReadFailure,
    IItemSource,
    InvalidParameter,
    MissingBinaryData,
    NoFilesProvided,
)
from ..models import AggregationResult, InputItem, MultipartFile, VisionImportParams
from .validation import (
    check_file_count,
    check_file_size,
    check_file_type,
    check_params,
    check_total_size,
)

logger = logging.getLogger(__name__)

FILES_FIELD_NAME = "files"


def normalize_property_names(value: Any, default: str = "data") -> list[str]:
    """
    规范化二进制属性名参数

    支持：字符串 / 逗号分隔字符串 / 字符串列表 /
    {name|value|propertyName|key} 字典或其列表。None 时返回 [default]。
    """
    if value is None:
        return [default]

    raw: list[Any] = value if isinstance(value, list) else [value]
    names: list[str] = []
    for entry in raw:
        if isinstance(entry, dict):
            entry = next(
                (entry[k] for k in ("name", "value", "propertyName", "key") if entry.get(k)),
                None,
            )
        if entry is None:
            continue
        for part in str(entry).split(","):
            part = part.strip()
            if part and part not in names:
                names.append(part)

    if not names:
        raise InvalidParameter(f"未找到有效的二进制属性名: {value!r}")
    return names


class _Collector:
    """单次聚合调用的累计状态"""

    def __init__(self, limits: VisionLimits):
        self.limits = limits
        self.files: list[MultipartFile] = []
        self.item_indexes: list[int] = []
        self.total_size = 0

    def add(self, item_index: int, filename: str, data: bytes, mime_type: str | None) -> None:
        check_file_size(filename, len(data), self.limits)
        self.total_size += len(data)
        check_total_size(self.total_size, self.limits)

        self.files.append(
            MultipartFile(
                name=FILES_FIELD_NAME,
                filename=filename,
                data=data,
                content_type=mime_type,
            )
        )
        if item_index not in self.item_indexes:
            self.item_indexes.append(item_index)


class FileAggregator:
    """文件聚合器"""

    def __init__(self, limits: VisionLimits | None = None, auto_discover: bool = True):
        self.limits = limits or VisionLimits()
        self.auto_discover = auto_discover

    def collect_single_item(
        self,
        source: IItemSource,
        item_index: int,
        params: VisionImportParams,
        property_names: list[str],
    ) -> AggregationResult:
        """单项模式：只处理 item_index 对应的数据项"""
        check_params(params)
        designated, explicit_extras = self._split(property_names)

        items = source.get_items()
        if not 0 <= item_index < len(items):
            raise MissingBinaryData(designated)
        item = items[item_index]
        if not item.has_binary(designated):
            raise MissingBinaryData(designated, item.binary_property_names())

        collector = _Collector(self.limits)
        self._collect_item(source, item_index, item, designated, explicit_extras,
                           collector, strict_extras=True)

        return self._finish(collector, params, property_names)

    def collect_all_items(
        self,
        source: IItemSource,
        params: VisionImportParams,
        property_names: list[str],
    ) -> AggregationResult:
        """全量模式：所有数据项的文件合并为一个列表"""
        check_params(params)
        designated, explicit_extras = self._split(property_names)

        collector = _Collector(self.limits)
        for index, item in enumerate(source.get_items()):
            if not item.has_binary(designated):
                logger.debug(f"item {index} 缺少属性 {designated}，跳过")
                continue
            self._collect_item(source, index, item, designated, explicit_extras,
                               collector, strict_extras=False)

        result = self._finish(collector, params, property_names)
        check_file_count(result.file_count, self.limits)
        return result

    def _collect_item(
        self,
        source: IItemSource,
        index: int,
        item: InputItem,
        designated: str,
        explicit_extras: list[str],
        collector: _Collector,
        strict_extras: bool,
    ) -> None:
        """收集单个数据项：目标属性 + 附加属性"""
        self._add_property(source, index, item, designated, collector, fallback="file")

        if explicit_extras:
            for name in explicit_extras:
                if name == designated:
                    continue
                if not item.has_binary(name):
                    if strict_extras:
                        raise MissingBinaryData(name, item.binary_property_names())
                    logger.debug(f"item {index} 缺少附加属性 {name}，跳过")
                    continue
                self._add_property(source, index, item, name, collector, fallback=name)
            return

        if not self.auto_discover:
            return

        for name in item.binary_property_names():
            if name == designated:
                continue
            try:
                self._add_property(source, index, item, name, collector, fallback=name)
            except BinaryReadFailure as e:
                logger.warning(f"跳过无法读取的附加属性: {e}")

    def _add_property(
        self,
        source: IItemSource,
        index: int,
        item: InputItem,
        name: str,
        collector: _Collector,
        fallback: str,
    ) -> None:
        binary = item.binary[name]
        filename = binary.display_name(fallback)
        check_file_type(filename, self.limits)
        data = source.read_binary(index, name)
        collector.add(index, filename, data, binary.mime_type)

    @staticmethod
    def _split(property_names: list[str]) -> tuple[str, list[str]]:
        if not property_names:
            raise InvalidParameter("至少需要一个二进制属性名")
        return property_names[0], property_names[1:]

    @staticmethod
    def _finish(
        collector: _Collector,
        params: VisionImportParams,
        property_names: list[str],
    ) -> AggregationResult:
        if not collector.files:
            raise NoFilesProvided(property_names)
        logger.info(
            f"聚合完成: {len(collector.files)} 个文件, {collector.total_size} 字节, "
            f"来自 item {collector.item_indexes}"
        )
        return AggregationResult(
            files=collector.files,
            params=params,
            property_names=list(property_names),
            item_indexes=collector.item_indexes,
        )
