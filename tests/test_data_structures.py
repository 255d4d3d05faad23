import pytest
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from teeshard.data_structures import (
    AccountId,
    AssetId,
    GraphEdge,
    GraphNode,
    LockInfo,
    TEEIdentity,
    Transaction,
    TxType,
    generate_identity,
)


def _raw(key):
    return key.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw)


def test_account_id_equality_and_hash():
    acc1 = AccountId(1, "addr1")
    acc2 = AccountId(1, "addr1")
    acc3 = AccountId(2, "addr1")
    acc4 = AccountId(1, "addr2")

    assert acc1 == acc2
    assert acc1 != acc3
    assert acc1 != acc4
    assert acc3 != acc4

    accounts = {acc1, acc2, acc3, acc4}
    assert acc1 in accounts
    assert acc2 in accounts
    assert acc3 in accounts
    assert acc4 in accounts
    assert len(accounts) == 3


def test_asset_id_creation():
    asset_eth = AssetId(1, "ETH", "0x...")
    asset_usdc = AssetId(1, "USDC", "0x...")
    asset_matic = AssetId(2, "MATIC", "0x...")

    assert asset_eth.chain_id == 1
    assert asset_usdc.token_symbol == "USDC"
    assert asset_eth != asset_matic


def test_lock_info_creation():
    acc1 = AccountId(1, "addr1")
    asset1 = AssetId(1, "ETH", "0x...")
    lock = LockInfo(account=acc1, asset=asset1, amount=100)
    assert lock.account == acc1
    assert lock.asset == asset1
    assert lock.amount == 100


def test_transaction_creation_with_locks():
    acc_a1 = AccountId(1, "a1")
    acc_a2 = AccountId(1, "a2")
    acc_b1 = AccountId(2, "b1")
    acc_b2 = AccountId(2, "b2")
    asset_a = AssetId(1, "AAA", "0x...")
    asset_b = AssetId(2, "BBB", "0x...")

    lock1 = LockInfo(acc_a1, asset_a, 50)
    lock2 = LockInfo(acc_b1, asset_b, 30)

    tx_cross = Transaction(
        tx_id="tx2",
        tx_type=TxType.CROSS_CHAIN_SWAP,
        accounts=[acc_a1, acc_a2, acc_b1, acc_b2],
        amounts=[50, 30],
        required_locks=[lock1, lock2],
        target_asset=asset_b,
        timeout=0.0,
    )

    assert tx_cross.tx_type == TxType.CROSS_CHAIN_SWAP
    assert len(tx_cross.accounts) == 4
    assert len(tx_cross.required_locks) == 2
    assert tx_cross.required_locks[0] == lock1
    assert tx_cross.required_locks[1] == lock2
    assert tx_cross.target_asset == asset_b


def test_transaction_defaults_are_independent():
    tx1 = Transaction("a", TxType.SINGLE_CHAIN_TRANSFER)
    tx2 = Transaction("b", TxType.SINGLE_CHAIN_TRANSFER)
    tx1.accounts.append(AccountId(1, "x"))
    assert tx2.accounts == []
    assert tx1.target_asset is None


def test_graph_structs_creation():
    acc1 = AccountId(1, "addr1")
    acc2 = AccountId(1, "addr2")

    node1 = GraphNode(account=acc1, node_weight=10.5)
    edge1 = GraphEdge(src=acc1, dst=acc2, edge_weight=5.0)

    assert node1.account == acc1
    assert node1.node_weight == 10.5
    assert edge1.src == acc1
    assert edge1.dst == acc2
    assert edge1.edge_weight == 5.0


def test_tee_identity_creation():
    _, keypair1 = generate_identity(0)
    _, keypair2 = generate_identity(0)
    tee1 = TEEIdentity(1, _raw(keypair1))
    tee2 = TEEIdentity(1, _raw(keypair1))
    tee3 = TEEIdentity(2, _raw(keypair2))
    tee4 = TEEIdentity(1, _raw(keypair2))

    assert tee1 == tee2
    assert tee1 != tee3
    assert tee1 != tee4
    assert tee1.id == 1
    assert tee3.public_key == _raw(keypair2)

    identities = {tee1, tee2, tee3, tee4}
    assert len(identities) == 3
    assert tee1 in identities
    assert tee3 in identities
    assert tee4 in identities


def test_generate_identity_matches_key():
    identity, signing_key = generate_identity(42)
    assert identity.id == 42
    assert identity.public_key == _raw(signing_key)
    assert len(identity.public_key) == 32


def test_tee_identity_rejects_bad_key_length():
    with pytest.raises(ValueError):
        TEEIdentity(1, b"short")