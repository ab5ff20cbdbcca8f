"""
multipart 请求体预览：把本地文件按 Vision 导入规则校验并编码，写入磁盘。

用法：
    python tools/preview_multipart.py a.pdf b.png --mode read --out body.bin

输出的 body.bin 可配合 curl 手工验证：
    curl -H "Content-Type: <打印的content-type>" --data-binary @body.bin ...
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path


def _add_backend_to_path() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    backend_root = repo_root / "backend"
    if str(backend_root) not in sys.path:
        sys.path.insert(0, str(backend_root))


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Encode local files as a Rows Vision import multipart body."
    )
    parser.add_argument("files", nargs="+", help="待上传文件")
    parser.add_argument("--mode", default="create", choices=["create", "read", "read_simplified"])
    parser.add_argument("--merge", action="store_true")
    parser.add_argument("--folder-id", default="")
    parser.add_argument("--app-id", default="", help="目标表格ID")
    parser.add_argument("--table-id", default="")
    parser.add_argument("--instructions", default="")
    parser.add_argument(
        "--single-item",
        action="store_true",
        help="所有文件放入同一个item（单项模式+自动发现）",
    )
    parser.add_argument("--config", default="config/runtime.yaml")
    parser.add_argument("--out", default="multipart_body.bin")
    args = parser.parse_args()

    _add_backend_to_path()
    from rows_vision.config import configure_logging, reload_config  # type: ignore
    from rows_vision.interfaces import RowsVisionError  # type: ignore
    from rows_vision.models import VisionImportParams, VisionMode  # type: ignore
    from rows_vision.pipeline import (  # type: ignore
        FileAggregator,
        LocalFileItemSource,
        RequestBuilder,
    )

    config = reload_config(args.config)
    configure_logging(config)

    params = VisionImportParams(
        mode=VisionMode(args.mode),
        merge=args.merge,
        folder_id=args.folder_id,
        app_id=args.app_id,
        table_id=args.table_id,
        instructions=args.instructions,
    )
    property_name = config.aggregation.default_binary_property
    source = LocalFileItemSource(
        [Path(p) for p in args.files],
        property_name=property_name,
        single_item=args.single_item,
    )
    aggregator = FileAggregator(
        config.limits,
        auto_discover=config.aggregation.auto_discover_extra_properties,
    )

    try:
        if args.single_item:
            result = aggregator.collect_single_item(source, 0, params, [property_name])
        else:
            result = aggregator.collect_all_items(source, params, [property_name])
    except RowsVisionError as exc:
        print(f"校验失败: {exc}")
        return 1

    request = RequestBuilder(config).build(result)
    out_path = Path(args.out)
    out_path.write_bytes(request.body)

    print(f"files={result.file_count} bytes={len(request.body)} -> {out_path}")
    print(f"Content-Type: {request.headers['Content-Type']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
