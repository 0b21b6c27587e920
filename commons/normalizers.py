# commons/normalizers.py
"""
normalizers
-----------
通用“字段级转换 / 行级校验”函数库。
转换函数：func(value) -> new_value；校验函数：func(row_dict) -> None（异常表示失败）。
"""
from __future__ import annotations

from typing import Any, List, Optional


def empty_to_none(x: Any) -> Any:
    """将空串（含全空白）转换为 None，其它值保持不变。"""
    return None if isinstance(x, str) and x.strip() == "" else x


def strip_or_none(x: Any) -> Optional[str]:
    """去掉首尾空白；空字符串返回 None；非字符串先 str()。"""
    if x is None:
        return None
    if not isinstance(x, str):
        return str(x)
    s = x.strip()
    return s if s != "" else None


def to_int_or_none(x: Any) -> Optional[int]:
    """
    把值尽量强转为 int；空串/None/非法值返回 None：
    - "123" -> 123
    - 123.0 -> 123
    - "" / "  " / None -> None
    - "abc" -> None
    """
    if isinstance(x, bool):  # bool 是 int 子类，时间戳/计数里不接受
        return None
    try:
        return int(x) if x is not None and str(x).strip() != "" else None
    except (TypeError, ValueError):
        return None


def to_positive_int_or_none(x: Any) -> Optional[int]:
    """
    严格的正整数解析（用于 expire_min / interval_ms 这类命令行参数）：
    - "3000" -> 3000
    - "0" / "-5" -> None
    - "2.5" / "abc" / "" -> None（不做截断）
    """
    if isinstance(x, bool):
        return None
    if isinstance(x, int):
        return x if x >= 1 else None
    s = strip_or_none(x)
    if s is None or not s.lstrip("+").isdigit():
        return None
    v = int(s)
    return v if v >= 1 else None


def to_str_list(x: Any) -> List[str]:
    """
    兴趣列表清洗：
    - None -> []
    - "a" -> ["a"]
    - ["a", " ", None, "b "] -> ["a", "b"]
    """
    if x is None:
        return []
    if isinstance(x, str):
        x = [x]
    out: List[str] = []
    for item in x:
        s = strip_or_none(item)
        if s is not None:
            out.append(s)
    return out


def ensure_required(*keys: str):
    """
    生成行级校验器：要求 keys 对应的值非 None / 非空串。
    用法：VALIDATORS = [ensure_required("name", "lore")]
    """
    def _check(row: dict) -> None:
        missing = [k for k in keys if empty_to_none(row.get(k)) is None]
        if missing:
            raise ValueError(f"missing required field(s): {', '.join(missing)}")

    _check.__name__ = f"ensure_required({', '.join(keys)})"
    return _check
