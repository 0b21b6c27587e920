# -*- coding: utf-8 -*-
"""
BaseDataClass
-------------
接口模型的公共基类：把一段 JSON（dict）清洗成 dataclass 实例，或把请求模型导出成请求体。

接口返回体字段经常缺失、为空串、或者比模型多，这里统一兜底：
- 模型没声明的字段直接丢弃，服务端加字段不会让脚本崩；
- CONVERTERS 逐字段清洗（空串 -> None、数字串 -> int ……），失败时保留原值并告警；
- VALIDATORS 做整行校验，只抛错不改值，失败一定抛出；
- 列表接口里单条坏数据跳过，不影响其它条目。

约定：子类必须用 @dataclass 装饰；CONVERTERS 里的函数必须是纯函数。
"""
from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable as _IterableABC
from typing import Any, Callable, ClassVar, Dict, List, Mapping, Type, TypeVar

from commons.base_logger import BaseLogger

_log: logging.Logger = BaseLogger(name="BaseDataClass").logger

T = TypeVar("T", bound="BaseDataClass")
Converter = Callable[[Any], Any]
RowValidator = Callable[[Dict[str, Any]], None]


class BaseDataClass:
    """
    子类可配置：
    - CONVERTERS: 字段名 -> 转换函数
    - VALIDATORS: 行级校验函数列表（入参是清洗后的 dict）

        npc = NpcInfo.from_dict(result.body)
        npcs = NpcInfo.from_list(result.body)
        payload = req.to_dict(drop_none=True)
    """

    CONVERTERS: ClassVar[Dict[str, Converter]] = {}
    VALIDATORS: ClassVar[List[RowValidator]] = []

    @classmethod
    def _field_names(cls) -> set:
        try:
            return {f.name for f in dataclasses.fields(cls)}
        except TypeError:
            raise TypeError(f"{cls.__name__} 必须使用 @dataclass 装饰")

    @classmethod
    def _clean(cls, data: Mapping[str, Any], strict: bool) -> Dict[str, Any]:
        names = cls._field_names()
        row = {k: v for k, v in data.items() if k in names}

        for key, fn in cls.CONVERTERS.items():
            if key not in row:
                continue
            try:
                row[key] = fn(row[key])
            except Exception as e:
                if strict:
                    raise
                _log.warning("%s.%s 转换失败(%s): %s; 原值=%r",
                             cls.__name__, key, type(e).__name__, e, str(row[key])[:120])
        return row

    # ---------------- 构造 ----------------
    @classmethod
    def from_dict(cls: Type[T], data: Mapping[str, Any], *, strict: bool = False) -> T:
        """
        单条构造：丢弃未知字段 -> 字段转换 -> 行级校验 -> 构造实例。
        data 不是 Mapping 时抛 TypeError；校验失败抛校验器自己的异常（通常是 ValueError）；
        缺必填字段时由 dataclass 构造抛 TypeError。
        """
        if not isinstance(data, Mapping):
            raise TypeError(f"{cls.__name__}.from_dict 需要 Mapping，实际得到: {type(data).__name__}")

        row = cls._clean(data, strict)

        for validate in cls.VALIDATORS:
            try:
                validate(row)
            except Exception as e:
                _log.debug("%s 校验失败 (%s): %s",
                           cls.__name__, getattr(validate, "__name__", validate), e)
                raise

        return cls(**row)  # type: ignore[arg-type]

    @classmethod
    def from_list(cls: Type[T], items: Any, *, strict: bool = False) -> List[T]:
        """列表接口：坏条目跳过并告警（strict=True 时直接抛出）。"""
        if not isinstance(items, _IterableABC) or isinstance(items, (str, bytes, Mapping)):
            raise TypeError(f"{cls.__name__}.from_list 需要列表，实际得到: {type(items).__name__}")

        out: List[T] = []
        for idx, item in enumerate(items, start=1):
            try:
                out.append(cls.from_dict(item, strict=strict))
            except Exception as e:
                if strict:
                    raise
                _log.warning("%s 列表第 %d 条被跳过: %s", cls.__name__, idx, e)
        return out

    # ---------------- 导出 ----------------
    def to_dict(self, *, drop_none: bool = False) -> Dict[str, Any]:
        """导出为 dict；drop_none=True 时去掉值为 None 的键（请求体里可选字段“不传”就靠它）。"""
        d = dataclasses.asdict(self)
        if drop_none:
            d = {k: v for k, v in d.items() if v is not None}
        return d
