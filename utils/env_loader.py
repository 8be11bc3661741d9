import os
from pathlib import Path
from typing import Dict


def parse_env_file(env_path: str = ".env") -> Dict[str, str]:
    env_file = Path(env_path)
    if not env_file.exists():
        return {}

    values: Dict[str, str] = {}
    for raw_line in env_file.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        if line.startswith("export "):
            line = line[len("export "):]
        key, value = line.split("=", 1)
        key = key.strip()
        if key:
            values[key] = value.strip().strip("'").strip('"')
    return values


def load_environments(env_path: str = ".env", override: bool = False) -> None:
    # Process environment wins unless override is requested.
    for key, value in parse_env_file(env_path).items():
        if override or key not in os.environ:
            os.environ[key] = value
