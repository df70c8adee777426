from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from .commands import tag_post as tag_post_cmd
from .commands.tag_post import TagResult
from .core.config import ConfigManager, DEFAULT_CONFIG_PATH

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = str(DEFAULT_CONFIG_PATH)

__version__ = "0.1.0"

__all__ = [
    'tag_post',
    'status',
    'TagResult',
]


def tag_post(post_id: int, *, show_terms: bool = False, config_path: Optional[str] = None) -> TagResult:
    """Replace a post's organization and people terms programmatically.

    Args:
        post_id: WordPress post ID.
        show_terms: Print the resulting terms after writing them.
        config_path: Path to main YAML config; defaults to the managed config.
    """
    cfg_path = config_path or _DEFAULT_CONFIG
    return tag_post_cmd.run(cfg_path, post_id, show_terms=show_terms)


def status(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Return configuration and environment status for programmatic use."""
    cfg_path = config_path or _DEFAULT_CONFIG
    info: Dict[str, Any] = {'config_path': cfg_path}
    if not os.path.exists(cfg_path):
        info.update({'valid': False, 'error': f'Config file not found: {cfg_path}'})
        return info
    try:
        cm = ConfigManager(cfg_path)
        valid = cm.validate_config()
        cm.load_env_files()
        info.update({
            'valid': bool(valid),
            'keys': {env_name: cm.has_secret(env_name) for env_name in cm.key_env_names().values()},
        })
        return info
    except Exception as e:
        info.update({'valid': False, 'error': str(e)})
        return info
