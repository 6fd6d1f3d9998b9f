"""
Provides support to create Algorand transactions and convert them to and from raw bytes.

Raw bytes are the canonical msgpack encoding, i.e., the format that signers consume and
that is posted to the algod `/v2/transactions` endpoint.
"""
from base64 import b64decode, b64encode
from typing import Callable

from algosdk.encoding import msgpack_encode, msgpack_decode
from algosdk.transaction import SuggestedParams, Transaction, SignedTransaction
from ulid import ULID

GetSuggestedParams = Callable[[], SuggestedParams]


def create_lease() -> bytes:
    """
    Generates a unique lease, which can be used to set the transaction lease
    :return:
    """
    return str(ULID().to_uuid()).replace("-", "").encode()


def with_flat_fee(
    suggested_params: SuggestedParams,
    txn_count: int = 1,
) -> SuggestedParams:
    """
    Returns the suggested txn params configured to use the min flat fee.

    :param txn_count: specifies how many transactions to pay for
    """
    suggested_params.fee = suggested_params.min_fee * txn_count  # type: ignore
    suggested_params.flat_fee = True
    return suggested_params


def to_bytes(txn: Transaction | SignedTransaction) -> bytes:
    """
    :return: raw msgpack encoded transaction
    """
    return b64decode(msgpack_encode(txn))


def from_bytes(data: bytes) -> Transaction | SignedTransaction:
    """
    Decodes raw msgpack encoded transaction bytes.

    :exception ValueError: if the bytes do not decode to an unsigned or signed transaction
    """
    txn = msgpack_decode(b64encode(data).decode())
    if not isinstance(txn, (Transaction, SignedTransaction)):
        raise ValueError(f"bytes do not encode a transaction: {type(txn).__name__}")
    return txn
