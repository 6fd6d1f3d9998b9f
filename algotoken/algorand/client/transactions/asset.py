"""
Provides client side support for constructing asset related transactions
"""

from algosdk.transaction import AssetCreateTxn, SuggestedParams

from algotoken.algorand.client.model import Address
from algotoken.algorand.client.transactions import create_lease


def create(
    *,
    sender: Address,
    suggested_params: SuggestedParams,
    unit_name: str,
    asset_name: str,
    total_base_units: int,
    decimals: int = 0,
    manager: Address | None = None,
    reserve: Address | None = None,
    freeze: Address | None = None,
    clawback: Address | None = None,
    default_frozen: bool = False,
    metadata_hash: bytes | None = None,
    url: str = "",
    note: bytes | None = None,
) -> AssetCreateTxn:
    """
    Constructs an asset creation transaction.

    The transaction is configured with a lease to protect against the same asset creation
    transaction being submitted twice.

    https://developer.algorand.org/docs/get-details/asa/#creating-an-asset
    """
    return AssetCreateTxn(
        sender=sender,
        unit_name=unit_name,
        asset_name=asset_name,
        url=url,
        metadata_hash=metadata_hash,
        total=total_base_units,
        decimals=decimals,
        manager=manager,
        reserve=reserve,
        freeze=freeze,
        clawback=clawback,
        default_frozen=default_frozen,
        sp=suggested_params,
        note=note,
        lease=create_lease(),
    )
