import pytest

from multitest.bank import (
    AllBalancesQuery,
    AllDenomMetadataQuery,
    BalanceQuery,
    BankKeeper,
    BankMint,
    DenomMetadata,
    DenomMetadataQuery,
    SupplyQuery,
)
from multitest.errors import GenericError, Overflow
from multitest.testing import MemoryStorage, MockApi, mock_block
from multitest.types import Attribute, BankBurn, BankSend, coin, coins, from_json


def _coin_of(item):
    return coin(int(item["amount"]), item["denom"])


def _query_balance(bank, api, store, rcpt):
    raw = bank.query(api, store, None, mock_block(), AllBalancesQuery(rcpt))
    return [_coin_of(item) for item in from_json(raw)["amount"]]


def _query_coin(bank, api, store, request):
    raw = bank.query(api, store, None, mock_block(), request)
    return _coin_of(from_json(raw)["amount"])


def test_get_set_balance():
    api = MockApi()
    store = MemoryStorage()
    block = mock_block()
    owner = "owner"
    rcpt = "receiver"
    init_funds = [coin(100, "eth"), coin(20, "btc")]
    norm = [coin(20, "btc"), coin(100, "eth")]

    bank = BankKeeper()
    bank.init_balance(store, owner, init_funds)

    assert bank.get_balance(store, owner) == norm
    assert bank.get_balance(store, rcpt) == []

    assert _query_balance(bank, api, store, owner) == norm
    assert _query_balance(bank, api, store, rcpt) == []

    assert _query_coin(bank, api, store, BalanceQuery(owner, "eth")) == coin(100, "eth")
    assert _query_coin(bank, api, store, BalanceQuery(owner, "foobar")) == coin(0, "foobar")
    assert _query_coin(bank, api, store, BalanceQuery(rcpt, "eth")) == coin(0, "eth")

    assert _query_coin(bank, api, store, SupplyQuery("eth")) == coin(100, "eth")

    bank.sudo(api, store, None, block, BankMint(rcpt, list(norm)))
    assert _query_balance(bank, api, store, rcpt) == norm

    assert _query_coin(bank, api, store, SupplyQuery("eth")) == coin(200, "eth")


def test_send_emits_transfer_event():
    api = MockApi()
    store = MemoryStorage()
    bank = BankKeeper()
    bank.init_balance(store, "owner", [coin(100, "eth")])
    res = bank.execute(api, store, None, mock_block(), "owner", BankSend("rcpt", coins(30, "eth")))
    assert len(res.events) == 1
    event = res.events[0]
    assert event.ty == "transfer"
    assert event.attributes == [
        Attribute("recipient", "rcpt"),
        Attribute("sender", "owner"),
        Attribute("amount", "30eth"),
    ]
    assert res.data is None


def test_burn_coins():
    api = MockApi()
    store = MemoryStorage()
    block = mock_block()
    owner = "owner"
    rcpt = "recipient"

    bank = BankKeeper()
    bank.init_balance(store, owner, [coin(20, "btc"), coin(100, "eth")])

    res = bank.execute(api, store, None, block, owner, BankBurn([coin(30, "eth"), coin(5, "btc")]))
    assert res.events == []
    assert _query_balance(bank, api, store, owner) == [coin(15, "btc"), coin(70, "eth")]

    with pytest.raises(Overflow):
        bank.execute(api, store, None, block, owner, BankBurn(coins(20, "btc")))

    assert _query_balance(bank, api, store, owner) == [coin(15, "btc"), coin(70, "eth")]

    with pytest.raises(Overflow):
        bank.execute(api, store, None, block, rcpt, BankBurn(coins(1, "btc")))


def test_set_get_denom_metadata_should_work():
    api = MockApi()
    store = MemoryStorage()
    bank = BankKeeper()
    bank.set_denom_metadata(store, "eth", DenomMetadata(name="eth"))
    raw = bank.query(api, store, None, mock_block(), DenomMetadataQuery("eth"))
    assert from_json(raw)["metadata"]["name"] == "eth"


def test_set_get_all_denom_metadata_should_work():
    api = MockApi()
    store = MemoryStorage()
    bank = BankKeeper()
    bank.set_denom_metadata(store, "btc", DenomMetadata(name="btc"))
    bank.set_denom_metadata(store, "eth", DenomMetadata(name="eth"))
    raw = bank.query(api, store, None, mock_block(), AllDenomMetadataQuery())
    metadata = from_json(raw)["metadata"]
    assert metadata[0]["name"] == "btc"
    assert metadata[1]["name"] == "eth"


def test_missing_denom_metadata_is_default():
    api = MockApi()
    store = MemoryStorage()
    raw = BankKeeper().query(api, store, None, mock_block(), DenomMetadataQuery("none"))
    assert DenomMetadata(**from_json(raw)["metadata"]) == DenomMetadata()


def test_fail_on_zero_values():
    api = MockApi()
    store = MemoryStorage()
    block = mock_block()
    owner = "owner"
    rcpt = "recipient"

    bank = BankKeeper()
    bank.init_balance(store, owner, [coin(5000, "atom"), coin(100, "eth")])

    bank.execute(api, store, None, block, owner, BankSend(rcpt, coins(100, "atom")))
    assert bank.get_balance(store, rcpt) == [coin(100, "atom")]

    with pytest.raises(ValueError):
        bank.execute(api, store, None, block, owner, BankSend(rcpt, []))
    with pytest.raises(ValueError):
        bank.execute(api, store, None, block, owner, BankSend(rcpt, coins(0, "atom")))
    with pytest.raises(ValueError):
        bank.execute(api, store, None, block, owner, BankBurn([]))
    with pytest.raises(ValueError):
        bank.execute(api, store, None, block, owner, BankBurn(coins(0, "atom")))

    bank.sudo(api, store, None, block, BankMint(rcpt, coins(4321, "atom")))
    assert bank.get_balance(store, rcpt) == [coin(4421, "atom")]

    with pytest.raises(ValueError):
        bank.sudo(api, store, None, block, BankMint(rcpt, coins(0, "atom")))
    with pytest.raises(ValueError):
        bank.sudo(api, store, None, block, BankMint(rcpt, []))


def test_query_validates_address():
    api = MockApi()
    store = MemoryStorage()
    with pytest.raises(GenericError):
        BankKeeper().query(api, store, None, mock_block(), AllBalancesQuery("Owner"))


def test_unknown_message_and_query_are_rejected():
    api = MockApi()
    store = MemoryStorage()
    bank = BankKeeper()
    with pytest.raises(NotImplementedError):
        bank.execute(api, store, None, mock_block(), "owner", object())
    with pytest.raises(NotImplementedError):
        bank.query(api, store, None, mock_block(), object())
    with pytest.raises(TypeError):
        bank.sudo(api, store, None, mock_block(), object())