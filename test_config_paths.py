import json
import tempfile
from pathlib import Path

import config_paths


def _load_with(cfg_dir, payload=None, raw=None):
    cfg_dir.mkdir(parents=True, exist_ok=True)
    cfg_path = cfg_dir / "config.json"
    if payload is not None:
        cfg_path.write_text(json.dumps(payload))
    elif raw is not None:
        cfg_path.write_text(raw)

    orig_dir = config_paths.CONFIG_DIR
    orig_json = config_paths.CONFIG_JSON
    try:
        config_paths.CONFIG_DIR = str(cfg_dir)
        config_paths.CONFIG_JSON = str(cfg_path)
        return config_paths.load_config()
    finally:
        config_paths.CONFIG_DIR = orig_dir
        config_paths.CONFIG_JSON = orig_json


def test_load_config_defaults_without_json():
    with tempfile.TemporaryDirectory() as tmp:
        cfg = _load_with(Path(tmp) / "parqview")
        assert cfg == {
            "PREVIEW_ROWS": 20,
            "SCROLL_STEP": 3,
            "LOG_LEVEL": "INFO",
        }


def test_load_config_reads_json_overrides():
    with tempfile.TemporaryDirectory() as tmp:
        cfg = _load_with(
            Path(tmp) / "parqview",
            {
                "preview_rows": 0,
                "scroll_step": 5,
                "log_level": "debug",
            },
        )
        assert cfg["PREVIEW_ROWS"] == 0
        assert cfg["SCROLL_STEP"] == 5
        assert cfg["LOG_LEVEL"] == "DEBUG"


def test_load_config_ignores_invalid_values():
    with tempfile.TemporaryDirectory() as tmp:
        cfg = _load_with(
            Path(tmp) / "parqview",
            {
                "preview_rows": "ten",
                "scroll_step": True,
                "log_level": "loud",
            },
        )
        assert cfg["PREVIEW_ROWS"] == 20
        assert cfg["SCROLL_STEP"] == 3
        assert cfg["LOG_LEVEL"] == "INFO"


def test_load_config_survives_broken_json():
    with tempfile.TemporaryDirectory() as tmp:
        cfg = _load_with(Path(tmp) / "parqview", raw="{not json")
        assert cfg["PREVIEW_ROWS"] == 20


def test_ensure_config_dirs_creates_directory():
    with tempfile.TemporaryDirectory() as tmp:
        target = Path(tmp) / "nested" / "parqview"
        orig_dir = config_paths.CONFIG_DIR
        try:
            config_paths.CONFIG_DIR = str(target)
            config_paths.ensure_config_dirs()
            assert target.is_dir()
        finally:
            config_paths.CONFIG_DIR = orig_dir


def test_load_config_ignores_row_height():
    with tempfile.TemporaryDirectory() as tmp:
        cfg = _load_with(Path(tmp) / "parqview", {"row_height": 3})
        assert "ROW_HEIGHT" not in cfg
        assert cfg["PREVIEW_ROWS"] == 20
