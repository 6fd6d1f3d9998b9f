"""
Algorand domain model

https://developer.algorand.org/docs/get-details/accounts/
"""

from typing import NewType

import algosdk.encoding

# Algorand account address. The address is 58 characters long
# https://developer.algorand.org/docs/get-details/accounts/#transformation-public-key-to-algorand-address
Address = NewType("Address", str)

AssetId = NewType("AssetId", int)

MicroAlgos = NewType("MicroAlgos", int)

TxnId = NewType("TxnId", str)

# ASA parameter limits
# https://developer.algorand.org/docs/get-details/parameter_tables/#asset-parameters
MAX_ASSET_TOTAL = 2**64 - 1
MAX_ASSET_DECIMALS = 19
MAX_ASSET_NAME_BYTES = 32
MAX_ASSET_UNIT_NAME_BYTES = 8
MAX_ASSET_URL_BYTES = 96
ASSET_METADATA_HASH_BYTES = 32
MAX_TXN_NOTE_BYTES = 1024

# max number of rounds to wait for a submitted transaction to be confirmed
DEFAULT_WAIT_ROUNDS = 4


def is_valid_address(address: str) -> bool:
    """
    :return: True if the address is a well-formed Algorand address, i.e., checksum verified
    """
    return isinstance(address, str) and algosdk.encoding.is_valid_address(address)
