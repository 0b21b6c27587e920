from typing import Any, Dict, Optional
from urllib.parse import quote, urlencode, urlsplit, urlunsplit


def _clean_url(url: str) -> str:
    """仅折叠 path 中的多余斜杠并去掉末尾斜杠，不影响协议/域名/查询/fragment。"""
    parts = urlsplit(url.strip())
    path = parts.path or ""
    collapsed = "/".join(filter(None, path.split("/")))
    clean_path = ("/" + collapsed) if collapsed else ""
    return urlunsplit((parts.scheme, parts.netloc, clean_path, parts.query, parts.fragment))


def http_to_ws(url: str) -> str:
    """http:// -> ws://，https:// -> wss://；其它 scheme 原样返回。"""
    if url.startswith("https://"):
        return "wss://" + url[len("https://"):]
    if url.startswith("http://"):
        return "ws://" + url[len("http://"):]
    return url


def build_url(base_url: str, *segments: Any, query: Optional[Dict[str, Any]] = None) -> str:
    """
    拼接 API 地址：
      build_url("https://n10s.net/", "user", "player", "p 1", query={"sim_id": "s/1"})
      -> "https://n10s.net/user/player/p%201?sim_id=s%2F1"
    每个 segment 单独转义，None 值的 query 参数会被剔除。
    """
    url = _clean_url(base_url)
    for seg in segments:
        url += "/" + quote(str(seg).strip("/"), safe="")
    if query:
        params = {k: v for k, v in query.items() if v is not None}
        if params:
            url += "?" + urlencode(params)
    return url


def stream_ws_url(base_url: str, sim_id: str, player_id: str) -> str:
    """事件流 WebSocket 地址：{base}/stream/event/ws/{sim_id}/{player_id}"""
    return http_to_ws(build_url(base_url, "stream", "event", "ws", sim_id, player_id))
