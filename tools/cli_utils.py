# tools/cli_utils.py
"""run/ 下各脚本共用的输出与退出码处理。"""
from __future__ import annotations

import argparse
import sys
from pprint import pformat
from typing import Any, Callable, Iterable, List, Optional, Sequence

from commons.base_client import ApiResult
from commons.base_logger import BaseLogger
from commons.exceptions import UsageError
from commons.normalizers import to_positive_int_or_none

_logger = BaseLogger(name="cli")


def positive_int_arg(name: str) -> Callable[[str], int]:
    """argparse type：正整数，否则给出带参数名的报错。"""
    def _parse(text: str) -> int:
        v = to_positive_int_or_none(text)
        if v is None:
            raise argparse.ArgumentTypeError(f"{name} must be a positive integer (e.g. 2, 3)")
        return v

    return _parse


class UsageArgumentParser(argparse.ArgumentParser):
    """参数错误不直接 exit(2)，而是抛 UsageError，由 run_cli 统一处理。"""

    def error(self, message: str):
        raise UsageError(f"{message}\n\n{self.format_usage()}")


def report_result(label: str, result: ApiResult, *, show_time: bool = True) -> bool:
    """
    统一输出：
      成功 -> "<label> success" + "API response time: Nms"
      失败 -> stderr 输出 "<label> failed" + {status, statusText, body}
    返回是否成功。
    """
    if not result.ok:
        print(f"{label} failed", file=sys.stderr)
        print(pformat(result.error_info(), sort_dicts=False), file=sys.stderr)
        return False
    print(f"{label} success")
    if show_time:
        print(f"API response time: {result.elapsed_ms}ms")
    return True


def print_item(item: Any, fields: Optional[Sequence[str]] = None) -> None:
    """打印单个模型；fields 指定时只打印这些字段。返回体不是模型（原始文本等）时原样打印。"""
    if hasattr(item, "to_dict"):
        data = item.to_dict()
        if fields is not None:
            data = {k: data.get(k) for k in fields}
        print(pformat(data, sort_dicts=False))
    else:
        print(pformat(item, sort_dicts=False))


def print_items(items: Any, fields: Optional[Sequence[str]] = None) -> None:
    """列表接口：先打印 Count，再逐条打印。"""
    if not isinstance(items, list):
        print_item(items)
        return
    print(f"Count: {len(items)}")
    for item in items:
        print_item(item, fields)


def print_profile_options(title: str, names: Iterable[str]) -> None:
    print(f"{title}:")
    for n in names:
        print(f"- {n}")


def join_rest(parts: Optional[List[str]]) -> str:
    """把剩余参数拼成一个名字（档案名里可以有空格，不必加引号）。"""
    return " ".join(parts or []).strip()


def run_cli(main: Callable[[Optional[List[str]]], int], argv: Optional[List[str]] = None) -> int:
    """
    脚本统一入口：
      - main 返回的退出码原样返回
      - Ctrl+C -> 0
      - 其它任何异常 -> stderr 打印 "Script crashed: ..."，退出码 1
    """
    try:
        return main(argv)
    except KeyboardInterrupt:
        return 0
    except Exception as e:
        _logger.log_debug(f"script crashed: {e!r}", exc_info=True)
        print(f"Script crashed: {e}", file=sys.stderr)
        return 1
