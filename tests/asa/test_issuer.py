import hashlib
import unittest
from base64 import b64encode

from algosdk.transaction import AssetConfigTxn

from algotoken.algorand.client.model import DEFAULT_WAIT_ROUNDS
from algotoken.algorand.client.transactions import from_bytes
from algotoken.asa.error import (
    SignerError,
    NetworkError,
    ConfirmationTimeoutError,
    ConfigurationError,
)
from algotoken.asa.issuer import TokenIssuer
from algotoken.asa.model import TokenConfig, CreatedAsset
from tests.asa.stubs import StubNetworkClient, identity_signer, new_address
from tests.test_support import AlgoTokenIsolatedAsyncioTestCase

MY_TOKEN = TokenConfig(
    name="MyToken",
    unit_name="MTK",
    total_supply=1_000_000,
    decimals=0,
)


class TokenIssuerTestCase(AlgoTokenIsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self.creator = new_address()
        self.network = StubNetworkClient(first_asset_id=42, txids=["TX1"])
        self.issuer = TokenIssuer(self.network, self.creator)

    async def test_create_token(self):
        created_asset = await self.issuer.create_token(MY_TOKEN, identity_signer)

        self.assertEqual(
            created_asset,
            CreatedAsset(
                asset_id=42,
                txid="TX1",
                name="MyToken",
                unit_name="MTK",
                total_supply=1_000_000,
                confirmed_round=1001,
            ),
        )
        self.assertEqual(self.issuer.total_created, 1)
        self.assertEqual(self.network.wait_rounds, [DEFAULT_WAIT_ROUNDS])

        # check that the submitted transaction was built from the config
        self.assertEqual(len(self.network.submitted), 1)
        txn = from_bytes(self.network.submitted[0])
        self.assertIsInstance(txn, AssetConfigTxn)
        self.assertEqual(txn.sender, self.creator)
        self.assertEqual(txn.total, 1_000_000)
        self.assertEqual(txn.decimals, 0)
        self.assertEqual(txn.asset_name, "MyToken")
        self.assertEqual(txn.unit_name, "MTK")
        # asset roles default to the creator
        self.assertEqual(txn.manager, self.creator)
        self.assertEqual(txn.reserve, self.creator)
        self.assertEqual(txn.freeze, self.creator)
        self.assertEqual(txn.clawback, self.creator)
        # transaction lease is set
        self.assertEqual(len(txn.lease), 32)

    async def test_create_token_with_full_config(self):
        m = hashlib.sha256()
        m.update(b"asset metadata")
        digest = m.digest()
        manager, reserve, freeze, clawback = (new_address() for _ in range(4))
        config = TokenConfig(
            name="GOLD",
            unit_name="GLD",
            total_supply=1_000_000_000_000_000,
            decimals=6,
            url="https://meld.gold/",
            metadata_hash=b64encode(digest).decode(),
            manager=manager,
            reserve=reserve,
            freeze=freeze,
            clawback=clawback,
        )

        created_asset = await self.issuer.create_token(config, identity_signer)
        self.assertEqual(created_asset.asset_id, 42)
        self.assertEqual(created_asset.total_supply, 1_000_000_000_000_000)

        txn = from_bytes(self.network.submitted[0])
        self.assertEqual(txn.sender, self.creator)
        self.assertEqual(txn.decimals, 6)
        self.assertEqual(txn.url, "https://meld.gold/")
        self.assertEqual(txn.metadata_hash, digest)
        self.assertEqual(txn.manager, manager)
        self.assertEqual(txn.reserve, reserve)
        self.assertEqual(txn.freeze, freeze)
        self.assertEqual(txn.clawback, clawback)

    async def test_total_created_counts_successful_creations(self):
        network = StubNetworkClient(first_asset_id=100)
        issuer = TokenIssuer(network, self.creator)
        asset_ids = [
            (await issuer.create_token(MY_TOKEN, identity_signer)).asset_id
            for _ in range(3)
        ]
        self.assertEqual(asset_ids, [100, 101, 102])
        self.assertEqual(issuer.total_created, 3)

        network.confirm = False
        with self.assertRaises(ConfirmationTimeoutError):
            await issuer.create_token(MY_TOKEN, identity_signer)
        self.assertEqual(issuer.total_created, 3)

    async def test_signer_returns_wrong_number_of_txns(self):
        async def no_txns_signer(txns: list[bytes]) -> list[bytes]:
            return []

        async def too_many_txns_signer(txns: list[bytes]) -> list[bytes]:
            return txns * 2

        for signer in (no_txns_signer, too_many_txns_signer):
            with self.subTest(signer=signer.__name__):
                with self.assertRaises(SignerError):
                    await self.issuer.create_token(MY_TOKEN, signer)
                self.assertEqual(self.issuer.total_created, 0)

        # nothing was submitted
        self.assertEqual(self.network.submitted, [])

    async def test_signer_returns_invalid_txn(self):
        async def bytes_signer(txns: list[bytes]) -> bytes:
            return txns[0]

        async def str_signer(txns: list[bytes]) -> list[str]:
            return ["signed"]

        async def empty_txn_signer(txns: list[bytes]) -> list[bytes]:
            return [b""]

        for signer in (bytes_signer, str_signer, empty_txn_signer):
            with self.subTest(signer=signer.__name__):
                with self.assertRaises(SignerError):
                    await self.issuer.create_token(MY_TOKEN, signer)  # type: ignore
        self.assertEqual(self.issuer.total_created, 0)

    async def test_signer_failure(self):
        async def rejecting_signer(txns: list[bytes]) -> list[bytes]:
            raise PermissionError("user rejected the transaction")

        with self.assertRaises(SignerError) as err:
            await self.issuer.create_token(MY_TOKEN, rejecting_signer)
        self.assertIsInstance(err.exception.__cause__, PermissionError)
        self.assertEqual(self.issuer.total_created, 0)

    async def test_suggested_params_failure(self):
        self.network.suggested_params_error = ConnectionError("node is down")
        with self.assertRaises(NetworkError) as err:
            await self.issuer.create_token(MY_TOKEN, identity_signer)
        self.assertIsInstance(err.exception.__cause__, ConnectionError)
        self.assertEqual(err.exception.reason, "node is down")
        self.assertEqual(self.issuer.total_created, 0)

    async def test_submission_rejected(self):
        self.network.send_error = RuntimeError("overspend")
        with self.assertRaises(NetworkError) as err:
            await self.issuer.create_token(MY_TOKEN, identity_signer)
        self.assertEqual(err.exception.reason, "overspend")
        self.assertEqual(self.issuer.total_created, 0)

    async def test_network_errors_are_propagated_unchanged(self):
        network_error = NetworkError("transaction was rejected", "overspend", 400)
        self.network.send_error = network_error
        with self.assertRaises(NetworkError) as err:
            await self.issuer.create_token(MY_TOKEN, identity_signer)
        self.assertIs(err.exception, network_error)

    async def test_confirmation_timeout(self):
        network = StubNetworkClient(txids=["TX1"], confirm=False)
        issuer = TokenIssuer(network, self.creator, wait_rounds=2)
        with self.assertLogs("TokenIssuer", level="WARNING") as logs:
            with self.assertRaises(ConfirmationTimeoutError) as err:
                await issuer.create_token(MY_TOKEN, identity_signer)
        self.assertEqual(err.exception.txid, "TX1")
        self.assertEqual(err.exception.wait_rounds, 2)
        self.assertEqual(network.wait_rounds, [2])
        self.assertEqual(issuer.total_created, 0)
        # the ambiguous outcome is flagged with the transaction ID
        self.assertTrue(any("TX1" in msg for msg in logs.output))

    async def test_confirmation_failure(self):
        self.network.confirmation_error = RuntimeError("rejected by pool")
        with self.assertRaises(NetworkError):
            await self.issuer.create_token(MY_TOKEN, identity_signer)
        self.assertEqual(self.issuer.total_created, 0)

    async def test_asset_id_zero_is_accepted(self):
        network = StubNetworkClient(first_asset_id=0, txids=["TX1"])
        issuer = TokenIssuer(network, self.creator)
        created_asset = await issuer.create_token(MY_TOKEN, identity_signer)
        self.assertEqual(created_asset.asset_id, 0)
        self.assertEqual(created_asset.txid, "TX1")
        self.assertEqual(issuer.total_created, 1)

    async def test_confirmed_txn_with_invalid_asset_index(self):
        for asset_index in (-1, True, "42", None):
            with self.subTest(asset_index=asset_index):
                self.network.tx_info_override = {
                    "confirmed-round": 1001,
                    "asset-index": asset_index,
                }
                with self.assertRaises(NetworkError):
                    await self.issuer.create_token(MY_TOKEN, identity_signer)
        self.assertEqual(self.issuer.total_created, 0)

    async def test_confirmed_txn_without_asset_index(self):
        self.network.tx_info_override = {"confirmed-round": 1001}
        with self.assertRaises(NetworkError):
            await self.issuer.create_token(MY_TOKEN, identity_signer)
        self.assertEqual(self.issuer.total_created, 0)

    def test_accessors(self):
        self.assertEqual(self.issuer.creator, self.creator)
        self.assertEqual(self.issuer.total_created, 0)
        self.assertEqual(self.issuer.wait_rounds, DEFAULT_WAIT_ROUNDS)

    def test_invalid_creator(self):
        with self.assertRaises(ConfigurationError):
            TokenIssuer(self.network, "INVALID")

    def test_invalid_wait_rounds(self):
        with self.assertRaises(ConfigurationError):
            TokenIssuer(self.network, self.creator, wait_rounds=0)


if __name__ == "__main__":
    unittest.main()
