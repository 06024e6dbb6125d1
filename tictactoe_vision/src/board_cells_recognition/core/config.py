"""
配置管理模块

配置以 DEFAULT_CONFIG 为基础，YAML 或 JSON 文件中的值按节递归覆盖。
"""

import copy
import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import yaml

from .interfaces import DEFAULT_CONFIG, ConfigurationError


logger = logging.getLogger(__name__)

REQUIRED_SECTIONS = ('preprocessing', 'ordering', 'board', 'logging')
ORDERING_STRATEGIES = ('row_bucket', 'scan_order')


def _read_yaml(stream) -> Any:
    return yaml.safe_load(stream) or {}


def _write_yaml(data: Dict[str, Any], stream) -> None:
    yaml.dump(data, stream, default_flow_style=False, allow_unicode=True, indent=2)


def _write_json(data: Dict[str, Any], stream) -> None:
    json.dump(data, stream, ensure_ascii=False, indent=2)


_READERS: Dict[str, Callable] = {'.yaml': _read_yaml, '.yml': _read_yaml, '.json': json.load}
_WRITERS: Dict[str, Callable] = {'.yaml': _write_yaml, '.yml': _write_yaml, '.json': _write_json}


def deep_merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """把 overrides 递归合并进 base (原地修改) 并返回 base"""
    for key, value in overrides.items():
        if isinstance(base.get(key), dict) and isinstance(value, dict):
            deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validation_errors(config: Dict[str, Any]) -> List[str]:
    """
    检查配置并返回全部错误描述

    Args:
        config: 完整配置字典

    Returns:
        错误描述列表，为空表示配置有效
    """
    missing = [section for section in REQUIRED_SECTIONS
               if not isinstance(config.get(section), dict)]
    if missing:
        return [f"缺少配置节或配置节不是字典: {', '.join(missing)}"]

    errors = []

    threshold = config['preprocessing'].get('threshold')
    if not _is_number(threshold) or not 0 <= threshold <= 255:
        errors.append(f"preprocessing.threshold 必须在0-255之间，当前值: {threshold}")

    max_value = config['preprocessing'].get('max_value')
    if not _is_number(max_value) or not 0 < max_value <= 255:
        errors.append(f"preprocessing.max_value 必须在1-255之间，当前值: {max_value}")

    strategy = config['ordering'].get('strategy')
    if strategy not in ORDERING_STRATEGIES:
        errors.append(f"未知的排序策略: {strategy}，可选: {ORDERING_STRATEGIES}")

    tolerance = config['ordering'].get('row_tolerance')
    if not _is_number(tolerance) or tolerance <= 0:
        errors.append(f"ordering.row_tolerance 必须是正数，当前值: {tolerance}")

    redetect = config['board'].get('redetect_on_count_change', False)
    if not isinstance(redetect, bool):
        errors.append(f"board.redetect_on_count_change 必须是布尔值，当前值: {redetect!r}")

    return errors


class ConfigManager:
    """
    配置管理器

    支持 'section.key' 形式的点号键读写，config 属性返回深拷贝，
    外部修改不会影响管理器内部状态。
    """

    def __init__(self, config_file: Optional[str] = None):
        """
        Args:
            config_file: 配置文件路径；为None或文件不存在时使用默认配置

        Raises:
            ConfigurationError: 文件存在但无法解析或验证失败时抛出
        """
        self.config_file = config_file
        self._config = copy.deepcopy(DEFAULT_CONFIG)

        if config_file and Path(config_file).exists():
            self.load_config()

    def load_config(self) -> Dict[str, Any]:
        """
        读取配置文件并合并到当前配置

        Raises:
            ConfigurationError: 文件缺失、格式不支持、内容无法解析或验证失败时抛出
        """
        if not self.config_file:
            return self._config

        path = Path(self.config_file)
        if not path.exists():
            raise ConfigurationError(f"配置文件不存在: {path}")

        reader = _READERS.get(path.suffix.lower())
        if reader is None:
            raise ConfigurationError(f"不支持的配置文件格式: {path.suffix}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                loaded = reader(f)
        except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"加载配置文件失败: {e}") from e

        if not isinstance(loaded, dict):
            raise ConfigurationError(f"配置文件顶层必须是字典: {path}")

        deep_merge(self._config, loaded)

        if not self.validate_config(self._config):
            raise ConfigurationError(f"配置验证失败: {path}")

        logger.info(f"已加载配置文件: {path}")
        return self._config

    def save_config(self, config: Optional[Dict[str, Any]] = None) -> None:
        """
        把配置写入 config_file，父目录不存在时自动创建

        Raises:
            ConfigurationError: 未指定路径、格式不支持或写入失败时抛出
        """
        if not self.config_file:
            raise ConfigurationError("未指定配置文件路径")

        path = Path(self.config_file)
        writer = _WRITERS.get(path.suffix.lower())
        if writer is None:
            raise ConfigurationError(f"不支持的配置文件格式: {path.suffix}")

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding='utf-8') as f:
                writer(self._config if config is None else config, f)
        except OSError as e:
            raise ConfigurationError(f"保存配置文件失败: {e}") from e

    def validate_config(self, config: Dict[str, Any]) -> bool:
        """验证配置，所有错误都会记录到日志"""
        errors = validation_errors(config)
        for error in errors:
            logger.error(error)
        return not errors

    def get_default_config(self) -> Dict[str, Any]:
        return copy.deepcopy(DEFAULT_CONFIG)

    def get(self, key: str, default: Any = None) -> Any:
        """按点号键读取配置值，路径不存在时返回 default"""
        node: Any = self._config
        for part in key.split('.'):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def set(self, key: str, value: Any) -> None:
        """按点号键写入配置值，中间节不存在时自动创建"""
        *parents, leaf = key.split('.')
        node = self._config
        for part in parents:
            node = node.setdefault(part, {})
        node[leaf] = value

    def update(self, updates: Dict[str, Any]) -> None:
        """批量合并配置"""
        deep_merge(self._config, updates)

    @property
    def config(self) -> Dict[str, Any]:
        return copy.deepcopy(self._config)

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)
