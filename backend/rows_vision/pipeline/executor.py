"""
流水线执行器 - 编排单次/逐项/全量导入

职责：
1. 按阶段顺序执行：校验 → 聚合 → 编码 → 发送
2. 单项模式逐个 item 发送请求，支持 continue_on_fail
3. 全量模式合并所有 item 为一次请求（参数取自 item 0）
4. 所有校验错误在发送前抛出

测试要点：
- test_single_item_mode_per_item_requests: 每个item一次请求
- test_continue_on_fail: 失败项记录错误后继续
- test_collect_all_continue_on_fail: 全量模式失败记录为 item 0 的错误
- test_policy_error_before_transport: 校验失败不触发网络请求
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Union

from ..config import RuntimeConfig, get_config
from ..interfaces import IItemSource, ITransport, RowsVisionError
from ..models import CollectMode, ItemResult, VisionImportParams
from .aggregator import FileAggregator, normalize_property_names
from .request_builder import RequestBuilder
from .stages import IMPORT_STAGES, PipelineStage, StageEnum
from .validation import check_params

logger = logging.getLogger(__name__)

ParamsProvider = Union[VisionImportParams, Callable[[int], VisionImportParams]]


class VisionImportExecutor:
    """Vision 导入执行器"""

    def __init__(
        self,
        transport: ITransport,
        config: RuntimeConfig | None = None,
    ):
        self.config = config or get_config()
        self.transport = transport
        self.aggregator = FileAggregator(
            self.config.limits,
            auto_discover=self.config.aggregation.auto_discover_extra_properties,
        )
        self.builder = RequestBuilder(self.config)

    def run(
        self,
        source: IItemSource,
        params: ParamsProvider,
        property_names: Any = None,
        collect_mode: CollectMode = CollectMode.SINGLE_ITEM,
        continue_on_fail: bool = False,
    ) -> list[ItemResult]:
        """执行导入，返回每个请求的结果"""
        if collect_mode == CollectMode.ALL_ITEMS:
            try:
                response = self.import_all_items(
                    source, self._params_for(params, 0), property_names
                )
            except RowsVisionError as e:
                if not continue_on_fail:
                    raise
                logger.warning(f"全量导入失败: {e}")
                return [ItemResult(item_index=0, error=str(e))]
            return [ItemResult(item_index=0, response=response)]

        results: list[ItemResult] = []
        for index in range(len(source.get_items())):
            try:
                response = self.import_item(
                    source, index, self._params_for(params, index), property_names
                )
                results.append(ItemResult(item_index=index, response=response))
            except RowsVisionError as e:
                if not continue_on_fail:
                    raise
                logger.warning(f"item {index} 导入失败，继续处理: {e}")
                results.append(ItemResult(item_index=index, error=str(e)))
        return results

    def import_item(
        self,
        source: IItemSource,
        item_index: int,
        params: VisionImportParams,
        property_names: Any = None,
    ) -> dict[str, Any]:
        """单项模式：一个 item 一次请求"""
        context = {
            "collect_mode": CollectMode.SINGLE_ITEM,
            "source": source,
            "item_index": item_index,
            "params": params,
            "property_names": property_names,
        }
        return self._execute(context)

    def import_all_items(
        self,
        source: IItemSource,
        params: VisionImportParams,
        property_names: Any = None,
    ) -> dict[str, Any]:
        """全量模式：所有 item 一次请求"""
        context = {
            "collect_mode": CollectMode.ALL_ITEMS,
            "source": source,
            "item_index": 0,
            "params": params,
            "property_names": property_names,
        }
        return self._execute(context)

    def _execute(self, context: dict[str, Any]) -> dict[str, Any]:
        try:
            for stage in IMPORT_STAGES:
                self._execute_stage(stage, context)
        except RowsVisionError:
            raise
        except Exception:
            logger.exception(f"导入执行失败: item {context['item_index']}")
            raise
        return context["response"]

    def _execute_stage(self, stage: PipelineStage, context: dict[str, Any]) -> None:
        """执行单个阶段"""
        logger.info(
            f"[item {context['item_index']}] 开始阶段: {stage.name} ({stage.description})"
        )

        if stage.name == StageEnum.VALIDATE_PARAMS.value:
            context["property_names"] = normalize_property_names(
                context["property_names"],
                default=self.config.aggregation.default_binary_property,
            )
            check_params(context["params"])

        elif stage.name == StageEnum.AGGREGATE_FILES.value:
            if context["collect_mode"] == CollectMode.ALL_ITEMS:
                context["result"] = self.aggregator.collect_all_items(
                    context["source"], context["params"], context["property_names"]
                )
            else:
                context["result"] = self.aggregator.collect_single_item(
                    context["source"],
                    context["item_index"],
                    context["params"],
                    context["property_names"],
                )

        elif stage.name == StageEnum.ENCODE_BODY.value:
            context["request"] = self.builder.build(context["result"])

        elif stage.name == StageEnum.SEND_REQUEST.value:
            request = context["request"]
            context["response"] = self.transport.post(
                request.url, request.body, request.headers
            )

    @staticmethod
    def _params_for(params: ParamsProvider, index: int) -> VisionImportParams:
        if isinstance(params, VisionImportParams):
            return params
        return params(index)
