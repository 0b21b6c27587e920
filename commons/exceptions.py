# commons/exceptions.py
"""项目内统一异常。脚本入口只需捕获 N10sError 及其子类即可给出友好提示。"""


class N10sError(Exception):
    """所有业务异常的基类"""


class ConfigError(N10sError):
    """缺少必需的环境变量 / 配置段"""


class UsageError(N10sError):
    """命令行参数不合法；message 中通常已附带 usage 文本"""


class ApiRequestError(N10sError):
    """HTTP 请求在传输层失败（连接失败、超时等），不含非 2xx 响应"""

    def __init__(self, method: str, url: str, cause: Exception):
        super().__init__(f"{method} {url} failed: {cause}")
        self.method = method
        self.url = url
        self.cause = cause


class StreamError(N10sError):
    """WebSocket 连接无法建立"""
