"""
Issues Algorand Standard Assets (ASA)
"""
import threading
from collections.abc import Sequence
from typing import Any

from algosdk.transaction import AssetCreateTxn, SuggestedParams

from algotoken.algorand.client.model import (
    Address,
    AssetId,
    TxnId,
    is_valid_address,
    DEFAULT_WAIT_ROUNDS,
)
from algotoken.algorand.client.transactions import asset, to_bytes
from algotoken.asa.error import (
    TokenIssuanceError,
    ConfigurationError,
    SignerError,
    NetworkError,
    ConfirmationTimeoutError,
)
from algotoken.asa.model import TokenConfig, CreatedAsset
from algotoken.asa.protocols import NetworkClient, TransactionSigner
from algotoken.core.logging import get_logger


class TokenIssuer:
    """
    Creates ASAs using the creator account as the transaction sender.

    Issuing a token is a sequential pipeline:
    1. fetch the network suggested params
    2. build the asset creation transaction
    3. sign the transaction using the signer
    4. submit the signed transaction
    5. wait for the transaction to be confirmed
    6. lookup the created asset ID from the confirmed transaction info

    If any step fails, then nothing is recorded and the total created count is left unchanged.
    """

    def __init__(
        self,
        network: NetworkClient,
        creator: Address,
        wait_rounds: int = DEFAULT_WAIT_ROUNDS,
    ):
        """
        :param network: used to submit transactions
        :param creator: asset creator account, which is the transaction sender
        :param wait_rounds: max number of rounds to wait for the transaction to be confirmed

        :exception ConfigurationError: if the creator address is invalid or wait_rounds < 1
        """
        if not is_valid_address(creator):
            raise ConfigurationError(f"invalid creator address: {creator}")
        if wait_rounds < 1:
            raise ConfigurationError(f"wait_rounds must be at least 1: {wait_rounds}")

        self.__network = network
        self.__creator = creator
        self.__wait_rounds = wait_rounds
        self.__total_created = 0
        self.__lock = threading.Lock()
        self.__logger = get_logger(self)

    @property
    def creator(self) -> Address:
        return self.__creator

    @property
    def total_created(self) -> int:
        """
        :return: number of ASAs successfully created by this issuer
        """
        return self.__total_created

    @property
    def wait_rounds(self) -> int:
        return self.__wait_rounds

    async def create_token(
        self,
        config: TokenConfig,
        signer: TransactionSigner,
    ) -> CreatedAsset:
        """
        Creates a new ASA.

        :param config: ASA configuration
        :param signer: signs transactions on behalf of the creator account
        :return: created asset
        :exception SignerError: if the signer failed
        :exception NetworkError: if fetching suggested params failed or the transaction was rejected
        :exception ConfirmationTimeoutError: if the transaction was not confirmed within `wait_rounds`
        """
        try:
            suggested_params = await self.__suggested_params()
            txn = self.__asset_create_txn(config, suggested_params)
            signed_txn = await self.__sign(txn, signer)
            txid = await self.__send(signed_txn)
            tx_info = await self.__wait_for_confirmation(txid)
            created_asset = self.__created_asset(config, txid, tx_info)
        except ConfirmationTimeoutError as err:
            self.__logger.warning(
                "ASA creation transaction was submitted but not confirmed within %s rounds - "
                "the transaction may still be confirmed and must be reconciled: "
                "txid=%s asset=%s (%s)",
                err.wait_rounds,
                err.txid,
                config.name,
                config.unit_name,
            )
            raise
        except TokenIssuanceError as err:
            self.__logger.error(
                "failed to create ASA: %s (%s): %s", config.name, config.unit_name, err
            )
            raise

        with self.__lock:
            self.__total_created += 1
        self.__logger.info(
            "ASA created: %s (%s) [asset_id=%s] [txid=%s]",
            created_asset.name,
            created_asset.unit_name,
            created_asset.asset_id,
            created_asset.txid,
        )
        return created_asset

    async def __suggested_params(self) -> SuggestedParams:
        try:
            return await self.__network.suggested_params()
        except TokenIssuanceError:
            raise
        except Exception as err:
            raise NetworkError("failed to fetch suggested params", str(err)) from err

    def __asset_create_txn(
        self,
        config: TokenConfig,
        suggested_params: SuggestedParams,
    ) -> AssetCreateTxn:
        manager, reserve, freeze, clawback = config.role_addresses(self.__creator)
        try:
            return asset.create(
                sender=self.__creator,
                suggested_params=suggested_params,
                unit_name=config.unit_name,
                asset_name=config.name,
                total_base_units=config.total_supply,
                decimals=config.decimals,
                manager=manager,
                reserve=reserve,
                freeze=freeze,
                clawback=clawback,
                default_frozen=config.default_frozen,
                metadata_hash=config.metadata_hash_bytes(),
                url=config.url or "",
                note=config.note,
            )
        except TokenIssuanceError:
            raise
        except Exception as err:
            raise ConfigurationError(
                f"failed to build asset creation transaction: {err}"
            ) from err

    async def __sign(self, txn: AssetCreateTxn, signer: TransactionSigner) -> bytes:
        try:
            signed_txns = await signer([to_bytes(txn)])
        except TokenIssuanceError:
            raise
        except Exception as err:
            raise SignerError(f"signer failed: {err}") from err

        if isinstance(signed_txns, (bytes, bytearray, str)) or not isinstance(
            signed_txns, Sequence
        ):
            raise SignerError(
                f"signer must return a list of signed transactions: {type(signed_txns).__name__}"
            )
        if len(signed_txns) != 1:
            raise SignerError(
                f"signer returned {len(signed_txns)} signed transactions - expected 1"
            )
        signed_txn = signed_txns[0]
        if not isinstance(signed_txn, (bytes, bytearray)) or len(signed_txn) == 0:
            raise SignerError("signer returned an invalid signed transaction")
        return bytes(signed_txn)

    async def __send(self, signed_txn: bytes) -> TxnId:
        try:
            return await self.__network.send_raw_transaction(signed_txn)
        except TokenIssuanceError:
            raise
        except Exception as err:
            raise NetworkError("transaction was rejected", str(err)) from err

    async def __wait_for_confirmation(self, txid: TxnId) -> dict[str, Any]:
        try:
            return await self.__network.wait_for_confirmation(txid, self.__wait_rounds)
        except TokenIssuanceError:
            raise
        except Exception as err:
            raise NetworkError(
                f"failed to confirm transaction: {txid}", str(err)
            ) from err

    @staticmethod
    def __created_asset(
        config: TokenConfig,
        txid: TxnId,
        tx_info: dict[str, Any],
    ) -> CreatedAsset:
        asset_id = tx_info.get("asset-index")
        if not isinstance(asset_id, int) or isinstance(asset_id, bool) or asset_id < 0:
            raise NetworkError(
                f"confirmed transaction did not create an asset: {txid}",
                f"asset-index={asset_id}",
            )
        return CreatedAsset(
            asset_id=AssetId(asset_id),
            txid=txid,
            name=config.name,
            unit_name=config.unit_name,
            total_supply=config.total_supply,
            confirmed_round=tx_info.get("confirmed-round", 0),
        )
