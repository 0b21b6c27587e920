import logging
import os
from logging.handlers import TimedRotatingFileHandler

from tools.config_loader import load_env_file


def _level_from_env(default: int = logging.INFO) -> int:
    """读取 LOG_LEVEL 环境变量（DEBUG/INFO/WARNING/...，.env 里的也算），非法值回落到 default。"""
    load_env_file()
    raw = (os.getenv("LOG_LEVEL") or "").strip().upper()
    if not raw:
        return default
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else default


class BaseLogger:
    """
    基础日志类：
    - 控制台输出 + 可选按天轮转的文件日志（logs/<name>.log）
    - 控制台级别默认取 LOG_LEVEL 环境变量
    - 统一格式（时间、logger 名、文件:行号、函数、线程）

    说明：脚本的“结果输出”（success 行、打印的数据对象、统计）直接 print，
    这里只负责诊断日志。
    """

    FORMAT = (
        "%(asctime)s | %(name)s | %(levelname)s | "
        "[%(filename)s:%(lineno)d %(funcName)s] | %(threadName)s | %(message)s"
    )

    def __init__(
        self,
        name: str | None = None,
        level: int | None = None,
        to_file: bool = False,
        file_path: str | None = None,
        file_level: int = logging.ERROR,
    ):
        """
        :param name: logger 名称（默认取当前类名）
        :param level: 控制台日志级别（None 时读 LOG_LEVEL，缺省 INFO）
        :param to_file: 是否启用文件日志
        :param file_path: 日志文件路径（默认 <项目根>/logs/<name>.log）
        :param file_level: 文件日志的最低级别（默认 ERROR）
        """
        if level is None:
            level = _level_from_env()

        self.logger = logging.getLogger(name or self.__class__.__name__)
        self.logger.setLevel(min(level, file_level) if to_file else level)
        self.logger.propagate = False  # 防止重复输出

        # 同名 logger 只配置一次 handler
        if self.logger.handlers:
            return

        formatter = logging.Formatter(self.FORMAT)

        ch = logging.StreamHandler()
        ch.setLevel(level)
        ch.setFormatter(formatter)
        self.logger.addHandler(ch)

        if to_file:
            if file_path is None:
                project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
                log_dir = os.path.join(project_root, "logs")
                os.makedirs(log_dir, exist_ok=True)
                file_path = os.path.join(log_dir, f"{self.logger.name}.log")

            fh = TimedRotatingFileHandler(
                filename=file_path,
                when="midnight",  # 每天轮转
                interval=1,
                backupCount=7,  # 保留 7 天
                encoding="utf-8",
            )
            fh.setLevel(file_level)
            fh.setFormatter(formatter)
            self.logger.addHandler(fh)

    # ------------------ 对外日志接口 ------------------

    def log_info(self, message: str, exc_info: bool = False):
        self.logger.info(message, exc_info=exc_info)

    def log_warning(self, message: str, exc_info: bool = False):
        self.logger.warning(message, exc_info=exc_info)

    def log_error(self, message: str, exc_info: bool = True):
        """记录 ERROR 日志（默认带异常堆栈）"""
        self.logger.error(message, exc_info=exc_info)

    def log_debug(self, message: str, exc_info: bool = False):
        self.logger.debug(message, exc_info=exc_info)
