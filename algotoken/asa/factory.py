"""
Token factory
"""
import threading

from algotoken.algorand.client.model import (
    Address,
    AssetId,
    is_valid_address,
    DEFAULT_WAIT_ROUNDS,
)
from algotoken.asa.error import ConfigurationError
from algotoken.asa.issuer import TokenIssuer
from algotoken.asa.model import TokenConfig, CreatedAsset
from algotoken.asa.protocols import NetworkClient, TransactionSigner
from algotoken.config import Config
from algotoken.core.logging import get_logger


class TokenFactory:
    """
    Deploys ASAs on behalf of the factory owner and keeps a registry of the deployed tokens.

    Notes
    -----
    - The registry is kept in memory and is scoped to the factory instance.
    - Tokens are registered in the order in which they were created.
    """

    def __init__(
        self,
        network: NetworkClient,
        owner: Address,
        wait_rounds: int = DEFAULT_WAIT_ROUNDS,
    ):
        """
        :param owner: creator account for all tokens deployed by this factory
        :param wait_rounds: max number of rounds to wait for each asset creation transaction to be confirmed

        :exception ConfigurationError: if the owner address is invalid or wait_rounds < 1
        """
        if not is_valid_address(owner):
            raise ConfigurationError(f"invalid owner address: {owner}")
        if wait_rounds < 1:
            raise ConfigurationError(f"wait_rounds must be at least 1: {wait_rounds}")

        self.__network = network
        self.__owner = owner
        self.__wait_rounds = wait_rounds
        self.__deployed_tokens: list[CreatedAsset] = []
        self.__lock = threading.Lock()
        self.__logger = get_logger(self)

    @classmethod
    def from_config(
        cls,
        config: Config,
        network: NetworkClient,
        owner: Address,
    ) -> "TokenFactory":
        """
        Constructs a factory that waits up to the configured number of rounds for confirmations
        """
        return cls(network=network, owner=owner, wait_rounds=config.wait_rounds)

    @property
    def owner(self) -> Address:
        return self.__owner

    @property
    def wait_rounds(self) -> int:
        return self.__wait_rounds

    @property
    def token_count(self) -> int:
        return len(self.__deployed_tokens)

    async def deploy_token(
        self,
        config: TokenConfig,
        signer: TransactionSigner,
    ) -> CreatedAsset:
        """
        Creates a new ASA owned by the factory owner and registers it.

        Errors raised by the TokenIssuer are propagated as is, and the token registry is left unchanged.
        """
        issuer = TokenIssuer(
            network=self.__network,
            creator=self.__owner,
            wait_rounds=self.__wait_rounds,
        )
        created_asset = await issuer.create_token(config, signer)

        with self.__lock:
            self.__deployed_tokens.append(created_asset)
            count = len(self.__deployed_tokens)
        self.__logger.debug(
            "registered token: %s [asset_id=%s] [token_count=%s]",
            created_asset.name,
            created_asset.asset_id,
            count,
        )
        return created_asset

    def get_all_tokens(self) -> tuple[CreatedAsset, ...]:
        """
        :return: snapshot of all deployed tokens, in creation order
        """
        with self.__lock:
            return tuple(self.__deployed_tokens)

    def find_token(self, search: int | str) -> CreatedAsset | None:
        """
        Looks up a token by asset ID or by name.

        :param search: if an int, then the token is looked up by asset ID.
                       If a str, then the first token whose name contains `search` is returned (case-insensitive)
        :return: None if no deployed token matches
        """
        if isinstance(search, bool):
            raise TypeError("search must be an int or str: bool")
        if isinstance(search, int):
            return self.find_token_by_id(AssetId(search))
        if isinstance(search, str):
            return self.find_token_by_name(search)
        raise TypeError(f"search must be an int or str: {type(search).__name__}")

    def find_token_by_id(self, asset_id: AssetId) -> CreatedAsset | None:
        for token in self.get_all_tokens():
            if token.asset_id == asset_id:
                return token
        return None

    def find_token_by_name(self, text: str) -> CreatedAsset | None:
        """
        :return: first token whose name contains the text, ignoring case
        """
        text = text.casefold()
        for token in self.get_all_tokens():
            if text in token.name.casefold():
                return token
        return None
