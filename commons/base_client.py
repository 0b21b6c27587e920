# commons/base_client.py
from __future__ import annotations

import json
import time
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import requests
from requests import Response, Session
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from commons.base_logger import BaseLogger
from commons.exceptions import ApiRequestError
from tools.config_loader import load_config
from tools.request_utils import _clean_url, build_url


def parse_body(raw: str, empty: Any = None) -> Any:
    """
    响应体解析：
    - 空串 -> empty（默认 {}，列表接口传 []）
    - 合法 JSON -> 解析结果
    - 其它 -> 原始文本（便于排查）
    """
    if not raw:
        return {} if empty is None else empty
    try:
        return json.loads(raw)
    except ValueError:
        return raw


@dataclass
class ApiResult:
    """一次 HTTP 调用的结果。非 2xx 也会正常返回，由调用方决定如何提示。"""

    method: str
    url: str
    status: int
    reason: str
    body: Any
    elapsed_ms: int

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def error_info(self) -> Dict[str, Any]:
        """失败时打印用：{status, statusText, body}"""
        return {"status": self.status, "statusText": self.reason, "body": self.body}


class BaseApiClient:
    """
    API 客户端基类：
    - 统一 _request，get/post/put/delete 是薄封装
    - 鉴权头按请求注入（Bearer + 可选 product），不污染 session 全局 headers
    - 仅对幂等读请求（GET/HEAD/OPTIONS）启用 urllib3 Retry，写请求绝不重试
    - 每次请求计时，返回 ApiResult；传输层异常转成 ApiRequestError
    - 钩子 on_response / on_error 便于扩展
    """

    RETRY_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})
    RETRY_STATUS = (408, 429, 500, 502, 503, 504)

    def __init__(
        self,
        *,
        base_url: str,
        api_key: str,
        product: Optional[str] = None,
        timeout: float | tuple[float, float] | None = None,
        max_retries: int | None = None,
        backoff_factor: float | None = None,
        logger: Optional[BaseLogger] = None,
        config_section: str = "api",
    ):
        cfg = load_config(config_section)

        self.logger = logger or BaseLogger(
            name=self.__class__.__name__, to_file=bool(cfg.get("log_to_file", False))
        )
        self.base_url = _clean_url(base_url)
        self.api_key = api_key
        self.product = product
        self.timeout = timeout if timeout is not None else float(cfg.get("timeout", 15))
        self.max_retries = int(max_retries if max_retries is not None else cfg.get("max_retries", 2))
        self.backoff_factor = float(
            backoff_factor if backoff_factor is not None else cfg.get("backoff_factor", 0.5)
        )

        self.session: Session = self._create_session()

        self.logger.log_debug(
            f"{self.__class__.__name__} ready | base_url={self.base_url} "
            f"| timeout={self.timeout} | retries={self.max_retries} | product={'set' if product else 'none'}"
        )

    # --------------------- Session / Retry ---------------------

    def _create_session(self) -> Session:
        s = requests.Session()
        retry = Retry(
            total=self.max_retries,
            connect=self.max_retries,
            read=self.max_retries,
            status=self.max_retries,
            backoff_factor=self.backoff_factor,
            status_forcelist=self.RETRY_STATUS,
            allowed_methods=self.RETRY_METHODS,
            respect_retry_after_header=True,
            raise_on_status=False,  # 最终状态码交给调用方判断
        )
        adapter = HTTPAdapter(max_retries=retry)
        s.mount("http://", adapter)
        s.mount("https://", adapter)
        return s

    # --------------------- 钩子（子类可覆写） ---------------------

    def on_response(self, response: Response) -> None:
        """每次拿到响应后调用：打印限流余量。"""
        remain = response.headers.get("X-RateLimit-Remaining")
        if remain is not None:
            self.logger.log_debug(f"RateLimit remaining: {remain}")

    def on_error(self, exc: Exception, url: str, method: str) -> None:
        self.logger.log_error(f"{method} {url} 失败: {exc}", exc_info=False)

    # --------------------- 统一请求入口 ---------------------

    def _headers(self, *, auth_key: Optional[str], has_body: bool) -> Dict[str, str]:
        headers: Dict[str, str] = {"authorization": f"Bearer {auth_key or self.api_key}"}
        if has_body:
            headers["content-type"] = "application/json"
        if self.product:
            headers["product"] = self.product
        return headers

    def url(self, *segments: Any, query: Optional[Mapping[str, Any]] = None) -> str:
        return build_url(self.base_url, *segments, query=dict(query) if query else None)

    def _request(
        self,
        method: str,
        url: str,
        *,
        payload: Optional[Any] = None,
        auth_key: Optional[str] = None,
        empty_body: Any = None,
        timeout: Optional[float | tuple[float, float]] = None,
    ) -> ApiResult:
        """
        统一请求入口：
        - payload 非 None 时以 JSON 发送
        - auth_key 为 None 时使用实例默认 key（API_KEY）
        - empty_body：空响应体时的占位值（列表接口传 []）
        """
        method = method.upper()
        headers = self._headers(auth_key=auth_key, has_body=payload is not None)

        self.logger.log_debug(
            f"REQUEST {method} {url} | json={'set' if payload is not None else 'none'}"
        )

        t0 = time.monotonic()
        try:
            resp = self.session.request(
                method=method,
                url=url,
                data=json.dumps(payload) if payload is not None else None,
                headers=headers,
                timeout=timeout or self.timeout,
            )
        except requests.RequestException as e:
            self.on_error(e, url, method)
            raise ApiRequestError(method, url, e) from e
        elapsed_ms = int((time.monotonic() - t0) * 1000)

        try:
            self.on_response(resp)
        except Exception as hook_err:
            self.logger.log_warning(f"on_response 处理异常: {hook_err}", exc_info=True)

        result = ApiResult(
            method=method,
            url=url,
            status=resp.status_code,
            reason=resp.reason or "",
            body=parse_body(resp.text, empty=empty_body),
            elapsed_ms=elapsed_ms,
        )
        if not result.ok:
            self.logger.log_warning(f"BAD_STATUS {method} {url} -> {result.status}")
        else:
            self.logger.log_debug(f"RESPONSE {method} {url} -> {result.status} in {elapsed_ms}ms")
        return result

    # --------------------- 对外方法 ---------------------

    def get(self, url: str, *, auth_key: Optional[str] = None, empty_body: Any = None) -> ApiResult:
        return self._request("GET", url, auth_key=auth_key, empty_body=empty_body)

    def post(self, url: str, payload: Any, *, auth_key: Optional[str] = None) -> ApiResult:
        return self._request("POST", url, payload=payload, auth_key=auth_key)

    def put(self, url: str, payload: Any, *, auth_key: Optional[str] = None) -> ApiResult:
        return self._request("PUT", url, payload=payload, auth_key=auth_key)

    def delete(self, url: str, payload: Any = None, *, auth_key: Optional[str] = None) -> ApiResult:
        return self._request("DELETE", url, payload=payload, auth_key=auth_key)

    # --------------------- 资源管理 ---------------------

    def close(self) -> None:
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


def models_or_raw(model_cls, body: Any, *, many: bool = False) -> Any:
    """
    把返回体转成模型（列表或单个）；返回体不是预期形状时原样返回，便于打印排查。
    """
    if many:
        if isinstance(body, list):
            return model_cls.from_list(body)
        return body
    if isinstance(body, Mapping):
        return model_cls.from_dict(body)
    return body


__all__ = ["ApiResult", "BaseApiClient", "parse_body", "models_or_raw"]
