"""
ASA issuance domain model
"""
import binascii
from base64 import b64decode
from dataclasses import dataclass

from algotoken.algorand.client.model import (
    Address,
    AssetId,
    TxnId,
    is_valid_address,
    MAX_ASSET_TOTAL,
    MAX_ASSET_DECIMALS,
    MAX_ASSET_NAME_BYTES,
    MAX_ASSET_UNIT_NAME_BYTES,
    MAX_ASSET_URL_BYTES,
    ASSET_METADATA_HASH_BYTES,
    MAX_TXN_NOTE_BYTES,
)
from algotoken.asa.error import ConfigurationError


def _check_text(field: str, value: str | None, max_bytes: int, required: bool):
    if value is None:
        if required:
            raise ConfigurationError(f"{field} is required")
        return
    if not isinstance(value, str):
        raise ConfigurationError(f"{field} must be a str")
    if required and not value.strip():
        raise ConfigurationError(f"{field} must not be blank")
    if len(value.encode()) > max_bytes:
        raise ConfigurationError(f"{field} must not exceed {max_bytes} bytes")


def _check_int(field: str, value: int, min_value: int, max_value: int):
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{field} must be an int")
    if not min_value <= value <= max_value:
        raise ConfigurationError(
            f"{field} must be within [{min_value}, {max_value}]: {value}"
        )


@dataclass(slots=True, frozen=True)
class TokenConfig:
    """
    Simplified ASA configuration.

    The asset role addresses default to the creator address when not specified.

    https://developer.algorand.org/docs/get-details/asa/#asset-parameters
    """

    name: str
    unit_name: str
    # total number of base units
    total_supply: int
    decimals: int = 0
    url: str | None = None
    # base64 encoded 32-byte digest
    metadata_hash: str | None = None
    manager: Address | None = None
    reserve: Address | None = None
    freeze: Address | None = None
    clawback: Address | None = None
    default_frozen: bool = False
    note: bytes | None = None

    def __post_init__(self):
        """
        :exception ConfigurationError: if any field is invalid
        """
        _check_text("name", self.name, MAX_ASSET_NAME_BYTES, required=True)
        _check_text(
            "unit_name", self.unit_name, MAX_ASSET_UNIT_NAME_BYTES, required=True
        )
        _check_text("url", self.url, MAX_ASSET_URL_BYTES, required=False)
        _check_int("total_supply", self.total_supply, 1, MAX_ASSET_TOTAL)
        _check_int("decimals", self.decimals, 0, MAX_ASSET_DECIMALS)
        if not isinstance(self.default_frozen, bool):
            raise ConfigurationError("default_frozen must be a bool")
        if self.note is not None and len(self.note) > MAX_TXN_NOTE_BYTES:
            raise ConfigurationError(
                f"note must not exceed {MAX_TXN_NOTE_BYTES} bytes"
            )
        for role in ("manager", "reserve", "freeze", "clawback"):
            address = getattr(self, role)
            if address is not None and not is_valid_address(address):
                raise ConfigurationError(f"invalid {role} address: {address}")
        # fails fast on a malformed hash
        self.metadata_hash_bytes()

    def metadata_hash_bytes(self) -> bytes | None:
        """
        :return: decoded metadata hash
        :exception ConfigurationError: if the hash is not valid base64 or does not decode to 32 bytes
        """
        if self.metadata_hash is None:
            return None
        try:
            digest = b64decode(self.metadata_hash, validate=True)
        except (binascii.Error, TypeError, ValueError) as err:
            raise ConfigurationError("metadata_hash must be base64 encoded") from err
        if len(digest) != ASSET_METADATA_HASH_BYTES:
            raise ConfigurationError(
                f"metadata_hash must decode to {ASSET_METADATA_HASH_BYTES} bytes: {len(digest)}"
            )
        return digest

    def role_addresses(
        self, creator: Address
    ) -> tuple[Address, Address, Address, Address]:
        """
        :return: (manager, reserve, freeze, clawback) - unset roles are assigned to the creator
        """
        return (
            self.manager or creator,
            self.reserve or creator,
            self.freeze or creator,
            self.clawback or creator,
        )


@dataclass(slots=True, frozen=True)
class CreatedAsset:
    """
    ASA that was created on-chain
    """

    # assigned by the network when the asset creation transaction was confirmed
    asset_id: AssetId
    txid: TxnId
    name: str
    unit_name: str
    total_supply: int
    confirmed_round: int = 0
