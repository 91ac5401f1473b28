import copy
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .crds.const import ADMIN_GLOBAL_ROLE, BOOTSTRAP_LABEL_KEY, BOOTSTRAP_LABEL_VALUE
from .utils.passwords import DEFAULT_ROUNDS

CONFIG_ENV_VAR = "RBAC_BOOTSTRAP_CONFIG"
PASSWORD_ENV_VAR = "RBAC_BOOTSTRAP_ADMIN_PASSWORD"
RESYNC_ENV_VAR = "RBAC_BOOTSTRAP_RESYNC_INTERVAL"

DEFAULT_CONFIG_PATH = Path("/etc/rbac-bootstrap/config.yml")
DEFAULT_CONFIG: Dict[str, Any] = {
    "admin": {
        "username": "admin",
        "display_name": "Default Admin",
        "password": "admin",
        "must_change_password": True,
        # A fixed object name makes concurrent replicas conflict instead of
        # each creating an admin. Empty means the API server generates one.
        "name": "",
        "bcrypt_rounds": DEFAULT_ROUNDS,
    },
    "bootstrap": {
        "label_key": BOOTSTRAP_LABEL_KEY,
        "label_value": BOOTSTRAP_LABEL_VALUE,
        "global_role": ADMIN_GLOBAL_ROLE,
    },
    "operator": {
        "resync_interval": 0,
    },
}


class Configuration:
    def __init__(self, config_data: Dict[str, Any]):
        self._config = config_data
        for section in DEFAULT_CONFIG:
            self._config.setdefault(section, {})

    def _get(self, section: str, key: str) -> Any:
        return self._config[section].get(key, DEFAULT_CONFIG[section][key])

    @property
    def admin_username(self) -> str:
        return str(self._get("admin", "username"))

    @property
    def admin_display_name(self) -> str:
        return str(self._get("admin", "display_name"))

    @property
    def admin_password(self) -> str:
        return str(self._get("admin", "password"))

    @property
    def admin_must_change_password(self) -> bool:
        return bool(self._get("admin", "must_change_password"))

    @property
    def admin_name(self) -> Optional[str]:
        return self._get("admin", "name") or None

    @property
    def bcrypt_rounds(self) -> int:
        return int(self._get("admin", "bcrypt_rounds"))

    @property
    def bootstrap_labels(self) -> Dict[str, str]:
        return {
            str(self._get("bootstrap", "label_key")): str(self._get("bootstrap", "label_value"))
        }

    @property
    def admin_global_role(self) -> str:
        return str(self._get("bootstrap", "global_role"))

    @property
    def resync_interval(self) -> int:
        return int(self._get("operator", "resync_interval"))


def get_default_config_path() -> Path:
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_PATH


def deep_merge(source, destination):
    for key, value in source.items():
        if isinstance(value, dict):
            node = destination.setdefault(key, {})
            deep_merge(value, node)
        else:
            destination[key] = value
    return destination


def _apply_env_overrides(config_data: Dict[str, Any]) -> None:
    password = os.environ.get(PASSWORD_ENV_VAR)
    if password:
        config_data["admin"]["password"] = password
    resync = os.environ.get(RESYNC_ENV_VAR)
    if resync:
        config_data["operator"]["resync_interval"] = int(resync)


def load_config(config_path: Optional[Path] = None) -> Configuration:
    config_data = copy.deepcopy(DEFAULT_CONFIG)
    if config_path and config_path.exists():
        with open(config_path, "r") as f:
            user_config = yaml.safe_load(f)
        if user_config:
            config_data = deep_merge(user_config, config_data)
    _apply_env_overrides(config_data)
    return Configuration(config_data)
