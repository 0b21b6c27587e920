#  配置 / Settings
from tools.config_loader import load_config

_stream_cfg = load_config("stream")

DEFAULT_INTERVAL_MS   = int(_stream_cfg.get("default_interval_ms", 3000))    # 默认发送间隔（20 条/分钟）
RATE_WARN_INTERVAL_MS = int(_stream_cfg.get("rate_warn_interval_ms", 2000))  # 低于该间隔只告警
MAX_ERROR_PRINTS      = int(_stream_cfg.get("max_error_prints", 5))          # 服务端 err 最多打印前 N 条
