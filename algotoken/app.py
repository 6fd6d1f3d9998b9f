"""
Token issuance app
"""
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from algotoken.algorand.client.model import Address
from algotoken.algorand.client.network import AlgodNetworkClient
from algotoken.asa.factory import TokenFactory
from algotoken.config import Config
from algotoken.core.logging import configure_logging


class App:
    """
    Wires the Algorand network client and token factories from the app config.

    Constructing the app applies the configured log level.
    """

    def __init__(
        self,
        config: Config,
        executor: ThreadPoolExecutor | None = None,
        check_connection: bool = True,
    ):
        """
        :param executor: used to run blocking algod calls. If None, then the event loop's default executor is used
        :param check_connection: if True, then check that the Algorand node is reachable and caught up

        :exception NetworkError: if the Algorand node connection check fails
        """
        configure_logging(config.log_level)

        self.config = config
        self.network = AlgodNetworkClient.from_config(
            config,
            executor=executor,
            check_connection=check_connection,
        )

    @classmethod
    def from_config_file(
        cls,
        file: Path,
        executor: ThreadPoolExecutor | None = None,
        check_connection: bool = True,
    ) -> "App":
        """
        Constructs a new app instance from the specified TOML config file
        """
        return cls(Config.from_config_file(file), executor, check_connection)

    def token_factory(self, owner: Address) -> TokenFactory:
        """
        :param owner: creator account for all tokens deployed by the factory
        :return: new factory that submits transactions through the app's network client
        """
        return TokenFactory.from_config(self.config, self.network, owner)
