"""
Configuration

Config is loaded from a TOML file:

[algod]
url = "http://localhost:4001"
token = "aaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa"

[asa]
wait_rounds = 4
flat_fee = false

[logging]
level = "INFO"
"""
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from algotoken.algorand.client.model import DEFAULT_WAIT_ROUNDS
from algotoken.core.logging import log_level


@dataclass(slots=True, frozen=True)
class AlgodConfig:
    """
    Algorand node connection settings
    """

    url: str
    token: str = ""


@dataclass(slots=True, frozen=True)
class Config:
    """
    App config
    """

    algod: AlgodConfig
    # max number of rounds to wait for a transaction to be confirmed
    wait_rounds: int = DEFAULT_WAIT_ROUNDS
    # if True, then transactions pay the min flat fee
    flat_fee: bool = False
    log_level: int = field(default=log_level("WARNING"))

    def __post_init__(self):
        """
        :exception ValueError: if the config is invalid
        """
        if not self.algod.url:
            raise ValueError("algod url is required")
        if self.wait_rounds < 1:
            raise ValueError(f"wait_rounds must be at least 1: {self.wait_rounds}")

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "Config":
        """
        :exception ValueError: if required settings are missing or invalid
        """
        algod = config.get("algod", {})
        if "url" not in algod:
            raise ValueError("[algod] url is required")
        asa = config.get("asa", {})
        logging_config = config.get("logging", {})

        return cls(
            algod=AlgodConfig(url=algod["url"], token=algod.get("token", "")),
            wait_rounds=int(asa.get("wait_rounds", DEFAULT_WAIT_ROUNDS)),
            flat_fee=bool(asa.get("flat_fee", False)),
            log_level=log_level(logging_config.get("level", "WARNING")),
        )

    @classmethod
    def from_config_file(cls, file: Path) -> "Config":
        """
        Loads the config from the specified TOML config file
        """
        with open(file, "rb") as config_file:
            config = tomllib.load(config_file)
        return cls.from_dict(config)
