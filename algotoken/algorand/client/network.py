"""
Algorand node backed NetworkClient
"""
import asyncio
from base64 import b64encode
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, TypeVar, cast

from algosdk.error import AlgodHTTPError, ConfirmationTimeoutError as AlgodConfirmationTimeoutError
from algosdk.transaction import SuggestedParams, wait_for_confirmation
from algosdk.v2client.algod import AlgodClient

from algotoken.algorand.client.model import TxnId
from algotoken.algorand.client.transactions import with_flat_fee
from algotoken.asa.error import NetworkError, ConfirmationTimeoutError
from algotoken.config import Config
from algotoken.core.logging import get_logger

_T = TypeVar("_T")


def create_algod_client(config: Config, check_connection: bool = True) -> AlgodClient:
    """
    Creates an AlgodClient using the configured URL and API token.

    :param check_connection: if True, then check that the node is reachable and caught up
    :exception NetworkError: if the node cannot be reached or is not caught up
    """
    algod_client = AlgodClient(
        algod_token=config.algod.token,
        algod_address=config.algod.url,
    )
    if not check_connection:
        return algod_client

    try:
        result = cast(dict[str, Any], algod_client.status())
    except Exception as err:
        raise NetworkError("failed to connect to Algorand node", str(err)) from err

    if (catchup_time := result.get("catchup-time", 0)) > 0:
        raise NetworkError(
            "Algorand node is not caught up", f"catchup_time={catchup_time}"
        )

    return algod_client


class AlgodNetworkClient:
    """
    NetworkClient that submits transactions through an Algorand node.

    AlgodClient is a blocking HTTP client. Its calls are run on the executor to avoid blocking the event loop.
    """

    def __init__(
        self,
        algod_client: AlgodClient,
        executor: ThreadPoolExecutor | None = None,
        flat_fee: bool = False,
    ):
        """
        :param executor: if None, then the event loop's default executor is used
        :param flat_fee: if True, then transactions pay the min flat fee
        """
        self.__algod_client = algod_client
        self.__executor = executor
        self.__flat_fee = flat_fee
        self.__logger = get_logger(self)

    @classmethod
    def from_config(
        cls,
        config: Config,
        executor: ThreadPoolExecutor | None = None,
        check_connection: bool = True,
    ) -> "AlgodNetworkClient":
        return cls(
            algod_client=create_algod_client(config, check_connection),
            executor=executor,
            flat_fee=config.flat_fee,
        )

    @property
    def algod_client(self) -> AlgodClient:
        return self.__algod_client

    async def __run(self, func: Callable[[], _T]) -> _T:
        return await asyncio.get_event_loop().run_in_executor(self.__executor, func)

    async def suggested_params(self) -> SuggestedParams:
        def _suggested_params() -> SuggestedParams:
            try:
                suggested_params = self.__algod_client.suggested_params()
            except AlgodHTTPError as err:
                raise NetworkError(
                    "failed to fetch suggested params", str(err), err.code
                ) from err
            if self.__flat_fee:
                return with_flat_fee(suggested_params)
            return suggested_params

        return await self.__run(_suggested_params)

    async def send_raw_transaction(self, signed_txn: bytes) -> TxnId:
        def _send() -> TxnId:
            try:
                txid = self.__algod_client.send_raw_transaction(b64encode(signed_txn))
            except AlgodHTTPError as err:
                raise NetworkError("transaction was rejected", str(err), err.code) from err
            self.__logger.debug("transaction submitted: %s", txid)
            return TxnId(txid)

        return await self.__run(_send)

    async def wait_for_confirmation(
        self, txid: TxnId, wait_rounds: int
    ) -> dict[str, Any]:
        def _wait_for_confirmation() -> dict[str, Any]:
            try:
                tx_info = wait_for_confirmation(
                    algod_client=self.__algod_client,
                    txid=txid,
                    wait_rounds=wait_rounds,
                )
            except AlgodConfirmationTimeoutError as err:
                raise ConfirmationTimeoutError(txid, wait_rounds) from err
            except AlgodHTTPError as err:
                raise NetworkError(
                    f"failed to confirm transaction: {txid}", str(err), err.code
                ) from err
            self.__logger.debug(
                "transaction confirmed: %s [round=%s]",
                txid,
                tx_info.get("confirmed-round"),
            )
            return cast(dict[str, Any], tx_info)

        return await self.__run(_wait_for_confirmation)
