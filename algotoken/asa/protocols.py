"""
Capabilities consumed by the token issuer
"""
from typing import Protocol, Any, Callable, Awaitable

from algosdk.transaction import SuggestedParams

from algotoken.algorand.client.model import TxnId

# Signs a batch of raw unsigned transactions.
# Must return the same number of raw signed transactions, in the same order.
TransactionSigner = Callable[[list[bytes]], Awaitable[list[bytes]]]


class NetworkClient(Protocol):
    """
    Algorand network access
    """

    async def suggested_params(self) -> SuggestedParams:
        """
        :return: current network suggested transaction params
        """
        ...

    async def send_raw_transaction(self, signed_txn: bytes) -> TxnId:
        """
        Submits the raw signed transaction to the network.

        :return: transaction ID
        """
        ...

    async def wait_for_confirmation(
        self, txid: TxnId, wait_rounds: int
    ) -> dict[str, Any]:
        """
        Waits for the transaction to be confirmed.

        :return: pending transaction info, which includes 'confirmed-round' and, for asset
                 creation transactions, 'asset-index'
        :exception ConfirmationTimeoutError: if the transaction is not confirmed within `wait_rounds`
        """
        ...
