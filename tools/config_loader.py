import os
from functools import lru_cache

import yaml
from dotenv import load_dotenv

from commons.exceptions import ConfigError

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DEFAULT_CONFIG_FILE = os.path.join("config", "settings.yaml")

# 未设置时的内置默认值
ENV_DEFAULTS = {
    "BASE_URL": "https://n10s.net",
}


@lru_cache(maxsize=None)
def _read_yaml(config_file: str) -> dict:
    with open(config_file, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def load_config(section=None, file_path=DEFAULT_CONFIG_FILE):
    """
    加载 YAML 配置文件，并返回指定部分配置
    :param section: 配置块名称，例如 'api' / 'stream'
    :param file_path: 配置文件相对路径（相对项目根目录）
    """
    config_file = os.path.join(PROJECT_ROOT, file_path)
    try:
        config = _read_yaml(config_file)
    except FileNotFoundError:
        raise ConfigError(f"config file not found: {config_file}")
    if section:
        if section not in config:
            raise ConfigError(f"config section '{section}' missing in {file_path}")
        return config[section]
    return config


@lru_cache(maxsize=1)
def load_env_file(path: str | None = None) -> bool:
    """加载项目根目录下的 .env（已存在的环境变量不会被覆盖）。只执行一次。"""
    return load_dotenv(path or os.path.join(PROJECT_ROOT, ".env"), override=False)


def env(name: str, default: str | None = None) -> str:
    """
    读取环境变量：去首尾空白后的值 > default > ENV_DEFAULTS；都没有则抛 ConfigError。
    """
    load_env_file()
    raw = os.environ.get(name)
    value = raw.strip() if raw is not None else None
    if not value:
        value = default if default is not None else ENV_DEFAULTS.get(name)
    if not value:
        raise ConfigError(f"Missing env var: {name}")
    return value


def optional_env(name: str) -> str | None:
    """同 env()，但缺失时返回 None（用于 PRODUCT 这类可选头）。"""
    try:
        return env(name)
    except ConfigError:
        return None
