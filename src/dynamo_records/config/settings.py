from __future__ import annotations
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import yaml
from dotenv import load_dotenv

load_dotenv()

def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(key, default)

def _env_int(key: str, default: int) -> int:
    val = os.environ.get(key)
    if val is None or not val.strip():
        return int(default)
    return int(val)

def _env_float(key: str, default: float) -> float:
    val = os.environ.get(key)
    if val is None or not val.strip():
        return float(default)
    return float(val)

@dataclass(frozen=True)
class Settings:
    env: str
    log_level: str
    log_file: str

    # ------------------------------------------------------------------
    # Store client (DynamoDB)
    # ------------------------------------------------------------------
    aws_region: str
    aws_profile: str
    # Point at DynamoDB Local / LocalStack when set
    dynamodb_endpoint_url: str

    # Retry policy lives in the botocore client; 1 attempt = no retries
    store_max_attempts: int
    store_retry_mode: str
    connect_timeout: float
    read_timeout: float

    # Records whose marker is absent or equal to the null sentinel are live
    soft_delete_attribute: str

def load_settings(config_dir: str = "config") -> Settings:
    app_env = _env("APP_ENV", "dev")
    cfg_path = Path(config_dir) / f"{app_env}.yaml"
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config not found: {cfg_path}")

    cfg = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}

    app_cfg = cfg.get("app") or {}
    store_cfg = cfg.get("store") or {}
    retry_cfg = store_cfg.get("retries") or {}
    records_cfg = cfg.get("records") or {}

    retry_mode = (_env("STORE_RETRY_MODE", str(retry_cfg.get("mode", "standard"))) or "standard").strip().lower()
    store_max_attempts = _env_int("STORE_MAX_ATTEMPTS", retry_cfg.get("max_attempts", 1))
    if store_max_attempts < 1:
        raise ValueError(f"STORE_MAX_ATTEMPTS must be >= 1, got {store_max_attempts}")

    return Settings(
        env=app_env,
        log_level=_env("LOG_LEVEL", str(app_cfg.get("log_level", "INFO"))) or "INFO",
        log_file=_env("LOG_FILE", str(app_cfg.get("log_file") or "")) or "",
        aws_region=_env("AWS_REGION", str(store_cfg.get("region", ""))) or "",
        aws_profile=_env("AWS_PROFILE", str(store_cfg.get("profile") or "")) or "",
        dynamodb_endpoint_url=_env("DYNAMODB_ENDPOINT_URL", str(store_cfg.get("endpoint_url") or "")) or "",
        store_max_attempts=store_max_attempts,
        store_retry_mode=retry_mode,
        connect_timeout=_env_float("STORE_CONNECT_TIMEOUT", store_cfg.get("connect_timeout", 5)),
        read_timeout=_env_float("STORE_READ_TIMEOUT", store_cfg.get("read_timeout", 10)),
        soft_delete_attribute=(
            _env("SOFT_DELETE_ATTRIBUTE", str(records_cfg.get("soft_delete_attribute", "deleted_at")))
            or "deleted_at"
        ),
    )
