"""設定檔與 components JSON 載入、基本驗證."""

import json
import os
from pathlib import Path
from typing import Any, Optional

TOKEN_ENV_VAR = "FIGMA_ACCESS_TOKEN"

# 工具設定檔已知欄位（用於拼字提示）
_KNOWN_SECTION_KEYS = {
    "figma": {"personalAccessToken"},
}

_KNOWN_COMPONENT_KEYS = {"fileId", "pageName", "mappings"}
_KNOWN_MAPPING_KEYS = {"name", "output"}


class ComponentError(Exception):
    """Run-aborting failure; the message is shown to the user as-is."""


def _warn(msg: str) -> None:
    print(f"   ⚠️  [config] {msg}")


def validate_config(cfg: dict) -> None:
    """對工具設定做基本欄位驗證，印出警告但不拋例外。"""
    if not cfg:
        return

    for key in cfg:
        if key not in _KNOWN_SECTION_KEYS:
            known = ", ".join(sorted(_KNOWN_SECTION_KEYS))
            _warn(f"未知頂層欄位 '{key}'（已知欄位：{known}）")

    for section, known_keys in _KNOWN_SECTION_KEYS.items():
        section_cfg = cfg.get(section, {})
        if not isinstance(section_cfg, dict):
            _warn(f"'{section}' 應為 JSON 物件，目前是 {type(section_cfg).__name__}")
            continue
        for key in section_cfg:
            if key not in known_keys:
                known = ", ".join(sorted(known_keys))
                _warn(f"[{section}] 未知欄位 '{key}'（已知欄位：{known}）")


def load_config(config_path: str = "figma-angular.config.json") -> dict:
    """載入 JSON 設定檔，不存在則回傳空 dict；存在則做基本驗證。"""
    path = Path(config_path)
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        cfg: Any = json.load(f)
    if not isinstance(cfg, dict):
        _warn(f"'{config_path}' 格式錯誤，應為 JSON 物件，回傳空設定。")
        return {}
    validate_config(cfg)
    return cfg


def resolve_access_token(cli_token: Optional[str], config: dict) -> Optional[str]:
    """--access-token → config figma.personalAccessToken → FIGMA_ACCESS_TOKEN."""
    if cli_token:
        return cli_token
    figma_cfg = config.get("figma", {})
    if isinstance(figma_cfg, dict) and figma_cfg.get("personalAccessToken"):
        return figma_cfg["personalAccessToken"]
    return os.environ.get(TOKEN_ENV_VAR) or None


def validate_components_json(data: dict) -> None:
    """Print warnings for unknown keys and duplicate outputs; never raises."""
    for key in data:
        if key not in _KNOWN_COMPONENT_KEYS:
            known = ", ".join(sorted(_KNOWN_COMPONENT_KEYS))
            _warn(f"未知欄位 '{key}'（已知欄位：{known}）")

    outputs = set()
    for i, mapping in enumerate(data.get("mappings", [])):
        for key in mapping:
            if key not in _KNOWN_MAPPING_KEYS:
                _warn(f"mappings[{i}] 未知欄位 '{key}'")
        output = mapping.get("output")
        if output in outputs:
            _warn(f"mappings[{i}] output '{output}' 重複，後者會覆寫前者")
        outputs.add(output)


def load_components_json(input_path: str) -> dict:
    """讀取 components.json；缺檔或格式錯誤時拋出 ComponentError。"""
    path = Path(input_path)
    if not path.exists():
        raise ComponentError(f"No components JSON found at {path.resolve()}")
    with open(path, "r", encoding="utf-8") as f:
        try:
            data: Any = json.load(f)
        except json.JSONDecodeError as e:
            raise ComponentError(f"Invalid components JSON at {path.resolve()}: {e}")

    if not isinstance(data, dict):
        raise ComponentError(f"Components JSON at {path.resolve()} must be a JSON object")
    for key in ("fileId", "pageName"):
        if not isinstance(data.get(key), str) or not data[key]:
            raise ComponentError(f"Components JSON is missing '{key}'")
    mappings = data.get("mappings")
    if not isinstance(mappings, list):
        raise ComponentError("Components JSON is missing 'mappings'")
    for i, mapping in enumerate(mappings):
        if not isinstance(mapping, dict):
            raise ComponentError(f"mappings[{i}] must be a JSON object")
        for key in ("name", "output"):
            if not isinstance(mapping.get(key), str) or not mapping[key]:
                raise ComponentError(f"mappings[{i}] is missing '{key}'")

    validate_components_json(data)
    return data
