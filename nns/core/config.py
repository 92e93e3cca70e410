"""
Client configuration parameters for NNS.

Defines name rules and the ledger storage location.
Values can be overridden through NNS_* environment variables or a
.env file in the working directory.
"""

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


@dataclass
class NNSConfig:
    """Client-wide configuration parameters"""

    # Name rules (must agree with the registry contract)
    name_suffix: str = ".ntu"
    min_name_length: int = 5  # Names of 4 characters or fewer are rejected
    max_name_length: int = 40

    # Bid ledger
    ledger_key: str = "nns_bids"
    db_name: str = "nns.db"

    # Paths
    data_dir: Path = field(default_factory=lambda: Path("~/.nns").expanduser())

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


# Global config instance (can be overridden)
config = NNSConfig()


def load_config(env_file: Optional[str] = None) -> NNSConfig:
    """
    Load configuration from the environment.

    A .env file is read first (without overriding variables that are
    already set), then NNS_* variables replace the defaults.

    Args:
        env_file: Optional path to a .env file

    Returns:
        NNSConfig instance
    """
    load_dotenv(env_file)

    cfg = NNSConfig()
    env = os.environ

    if "NNS_NAME_SUFFIX" in env:
        cfg.name_suffix = env["NNS_NAME_SUFFIX"]
    if "NNS_MIN_NAME_LENGTH" in env:
        cfg.min_name_length = int(env["NNS_MIN_NAME_LENGTH"])
    if "NNS_MAX_NAME_LENGTH" in env:
        cfg.max_name_length = int(env["NNS_MAX_NAME_LENGTH"])
    if "NNS_LEDGER_KEY" in env:
        cfg.ledger_key = env["NNS_LEDGER_KEY"]
    if "NNS_DB_NAME" in env:
        cfg.db_name = env["NNS_DB_NAME"]
    if "NNS_DATA_DIR" in env:
        cfg.data_dir = Path(env["NNS_DATA_DIR"]).expanduser()

    return cfg


def apply_config(cfg: NNSConfig) -> NNSConfig:
    """Copy cfg into the global config instance used by the validators."""
    for f in fields(NNSConfig):
        setattr(config, f.name, getattr(cfg, f.name))
    return config
