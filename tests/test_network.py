import threading

import pytest

from teeshard.cross_chain.types import LockRequest
from teeshard.data_structures import AccountId, AssetId, LockInfo, generate_identity
from teeshard.liveness.types import NonceChallenge
from teeshard.network import (
    LivenessChallenge,
    MockNetwork,
    NetworkInterface,
    NetworkMessage,
    Placeholder,
    ShardLockRequest,
)


def make_tee(node_id):
    return generate_identity(node_id)[0]


def test_message_variant_creation():
    tee = make_tee(1)
    message = LivenessChallenge(NonceChallenge(target_tee=tee, nonce=7))
    match message:
        case LivenessChallenge(challenge=challenge):
            assert challenge.nonce == 7
            assert challenge.target_tee == tee
        case _:
            pytest.fail("incorrect variant")


def test_network_message_creation():
    sender = make_tee(10)
    receiver = make_tee(20)
    net_msg = NetworkMessage(sender=sender, receiver=receiver, message=Placeholder("ping"))
    assert net_msg.sender == sender
    assert net_msg.receiver == receiver
    assert net_msg.message == Placeholder("ping")


def test_network_interface_is_abstract():
    with pytest.raises(TypeError):
        NetworkInterface()


def test_mock_network_records_and_clears():
    network = MockNetwork()
    a, b = make_tee(1), make_tee(2)
    network.send_message(NetworkMessage(a, b, Placeholder("one")))
    network.send_message(NetworkMessage(b, a, Placeholder("two")))
    sent = network.get_sent_messages()
    assert [m.message.text for m in sent] == ["one", "two"]
    network.clear_sent_messages()
    assert network.get_sent_messages() == []


def test_retrieve_messages_for_removes_only_recipient_messages():
    network = MockNetwork()
    a, b, c = make_tee(1), make_tee(2), make_tee(3)
    lock = LockInfo(
        account=AccountId(1, "acc"),
        asset=AssetId(1, "TOK", "0x01"),
        amount=100,
    )
    request = ShardLockRequest(LockRequest(tx_id="swap", lock_info=lock))
    network.send_message(NetworkMessage(a, b, request))
    network.send_message(NetworkMessage(a, c, Placeholder("for c")))
    network.send_message(NetworkMessage(c, b, Placeholder("also b")))

    for_b = network.retrieve_messages_for(b)
    assert [m.message for m in for_b] == [request, Placeholder("also b")]
    remaining = network.get_sent_messages()
    assert len(remaining) == 1
    assert remaining[0].receiver == c
    assert network.retrieve_messages_for(b) == []


def test_mock_network_is_thread_safe():
    network = MockNetwork()
    a, b = make_tee(1), make_tee(2)

    def send_many():
        for i in range(200):
            network.send_message(NetworkMessage(a, b, Placeholder(str(i))))

    threads = [threading.Thread(target=send_many) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(network.get_sent_messages()) == 800