"""
ASA issuance errors

Every failure while issuing a token is raised as a TokenIssuanceError subclass, chained to the
underlying cause via `raise ... from err`.
"""

from algotoken.algorand.client.model import TxnId


class TokenIssuanceError(Exception):
    """
    ASA issuance base exception
    """


class ConfigurationError(TokenIssuanceError, ValueError):
    """
    Invalid token configuration, e.g., non-positive total supply or malformed metadata hash
    """


class SignerError(TokenIssuanceError):
    """
    The signer failed or did not return exactly one signed transaction per unsigned transaction
    """


class NetworkError(TokenIssuanceError):
    """
    Failed to fetch the suggested params or the transaction was rejected by the network
    """

    def __init__(self, message: str, reason: str | None = None, code: int | None = None):
        """
        :param reason: the network's rejection reason
        :param code: HTTP status code, if the error came back from the algod REST API
        """
        super().__init__(message if reason is None else f"{message}: {reason}")
        self.reason = reason
        self.code = code


class ConfirmationTimeoutError(TokenIssuanceError):
    """
    The transaction was submitted but was not confirmed within the allotted number of rounds.

    The on-chain outcome is unknown: the transaction may still be confirmed later.
    The transaction ID can be used to reconcile the outcome.
    """

    def __init__(self, txid: TxnId, wait_rounds: int):
        super().__init__(
            f"transaction was not confirmed within {wait_rounds} rounds: {txid}"
        )
        self.txid = txid
        self.wait_rounds = wait_rounds
