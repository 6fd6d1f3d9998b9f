"""
Adapts algosdk transaction signers to sign raw transaction bytes.

Token issuance delegates signing to a function that signs a batch of raw unsigned transactions.
This decouples issuance from where the keys are held, e.g., a private key, a KMD wallet, or a remote wallet.
"""
import asyncio
from concurrent.futures import ThreadPoolExecutor

from algosdk import atomic_transaction_composer
from algosdk.atomic_transaction_composer import AccountTransactionSigner
from algosdk.transaction import Transaction, SignedTransaction
from algosdk.wallet import Wallet

from algotoken.algorand.client.transactions import to_bytes, from_bytes
from algotoken.asa.protocols import TransactionSigner


class WalletTransactionSigner(atomic_transaction_composer.TransactionSigner):
    """
    Signs the transactions using a KMD wallet
    """

    def __init__(self, wallet: Wallet):
        super().__init__()
        self.__wallet = wallet

    def sign_transactions(
        self, txn_group: list[Transaction], indexes: list[int]
    ) -> list[SignedTransaction]:
        """
        :param txn_group:
        :param indexes: array of indexes in the transaction group that should be signed
        :return:
        """
        return [self.__wallet.sign_transaction(txn_group[i]) for i in indexes]


def from_transaction_signer(
    signer: atomic_transaction_composer.TransactionSigner,
    executor: ThreadPoolExecutor | None = None,
) -> TransactionSigner:
    """
    Wraps an algosdk TransactionSigner.

    The signer is run on the executor because signers may perform blocking I/O, e.g., KMD.

    :param executor: if None, then the event loop's default executor is used
    """

    async def sign(txns: list[bytes]) -> list[bytes]:
        unsigned_txns: list[Transaction] = []
        for txn_bytes in txns:
            txn = from_bytes(txn_bytes)
            if isinstance(txn, SignedTransaction):
                raise ValueError("transaction is already signed")
            unsigned_txns.append(txn)

        signed_txns = await asyncio.get_event_loop().run_in_executor(
            executor,
            signer.sign_transactions,
            unsigned_txns,
            list(range(len(unsigned_txns))),
        )
        return [to_bytes(signed_txn) for signed_txn in signed_txns]  # type: ignore

    return sign


def private_key_signer(private_key: str) -> TransactionSigner:
    """
    :param private_key: base64 encoded account private key
    """
    return from_transaction_signer(AccountTransactionSigner(private_key))


def kmd_wallet_signer(
    wallet: Wallet,
    executor: ThreadPoolExecutor | None = None,
) -> TransactionSigner:
    """
    Signs transactions using keys that are managed by a KMD wallet
    """
    return from_transaction_signer(WalletTransactionSigner(wallet), executor)
