# multitest

Building blocks for testing smart contracts on a simulated chain, with no
node to run. The package gives you:

- a bank keeper that holds balances, mints, sends, burns, reports supply and
  keeps denomination metadata (`multitest.bank.BankKeeper`);
- a contract wrapper that turns plain Python functions into contract entry
  points (`multitest.contracts.ContractWrapper`), with `Response`, `SubMsg`,
  `Reply`, `Env`, `MessageInfo` and `Deps`;
- a custom module that records every message and query it is given
  (`multitest.custom_handler.CachingCustomHandler`);
- address generators, both simple and chain-like
  (`multitest.addresses.SimpleAddressGenerator`,
  `multitest.mock_address.MockAddressGenerator`);
- Bech32 and Bech32m encoding (`multitest.bech32.bech32_encode`,
  `multitest.bech32.bech32_decode`) and mock address APIs built on them
  (`multitest.bech32.MockApiBech32`, `multitest.bech32.MockApiBech32m`);
- code checksums (`multitest.checksums.SimpleChecksumGenerator`);
- response helpers and an executor base class (`multitest.executor`);
- in-memory storage, a simple address API and a default block
  (`multitest.testing`).

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Bank keeper

```python
from multitest.bank import BankKeeper, BankMint, AllBalancesQuery
from multitest.testing import MemoryStorage, MockApi, mock_block
from multitest.types import BankSend, coin, from_json

api = MockApi()
storage = MemoryStorage()
block = mock_block()
bank = BankKeeper()

bank.init_balance(storage, "owner", [coin(100, "eth"), coin(20, "btc")])
bank.execute(api, storage, None, block, "owner",
             BankSend(to_address="receiver", amount=[coin(30, "eth")]))

raw = bank.query(api, storage, None, block, AllBalancesQuery(address="receiver"))
print(from_json(raw))  # {'amount': [{'denom': 'eth', 'amount': '30'}]}
```

Balances are kept merged by denomination, sorted, and without zero amounts.
A send, burn or mint with an empty list, or with only zero amounts, raises
`ValueError`. Spending more than an account holds raises
`multitest.errors.Overflow`, and the balance stays as it was. `BankMint` is
handled by `BankKeeper.sudo`; `SupplyQuery`, `BalanceQuery`,
`DenomMetadataQuery` and `AllDenomMetadataQuery` are answered by
`BankKeeper.query`.

## Contracts

```python
from multitest.contracts import ContractWrapper, Response

def instantiate(deps, env, info, msg):
    return Response().add_attribute("action", "instantiate")

def execute(deps, env, info, msg):
    return Response().set_data(b"done")

def query(deps, env, msg):
    return b"{}"

contract = ContractWrapper(execute, instantiate, query)
```

Entry points receive the message already parsed from JSON. Calling `sudo`,
`reply` or `migrate` on a wrapper that was not given that function raises
`NotImplementedError`; add them with `with_sudo`, `with_reply` and
`with_migrate`, or their `_empty` forms, which reject responses carrying a
`CustomMsg`.

## Bech32 addresses

```python
from multitest.bech32 import MockApiBech32

api = MockApiBech32("juno")
addr = api.addr_make("creator")
canonical = api.addr_canonicalize(addr)
assert api.addr_humanize(canonical) == addr
```

`MockApiBech32m` works the same way with the Bech32m checksum. An address
with another prefix or the other checksum variant is rejected with
`multitest.errors.GenericError`.

## Contract addresses

```python
from multitest.bech32 import MockApiBech32
from multitest.mock_address import MockAddressGenerator
from multitest.testing import MemoryStorage

api = MockApiBech32("juno")
generator = MockAddressGenerator()
address = generator.contract_address(api, MemoryStorage(), 1, 1)
```

`SimpleAddressGenerator` gives addresses such as `contract0`, `contract1`, and
so on, numbered by instance.

## Errors

Errors of the simulator derive from `multitest.errors.MultiTestError`
(`InvalidCodeId`, `UnregisteredCodeId`, `DuplicatedContractAddress` and
others). Errors of the standard contract layer derive from
`multitest.errors.StdError`: `GenericError`, `Overflow` and `ParseError`.
Invalid arguments raise Python's own `ValueError`, `TypeError` or
`NotImplementedError`.

## What the package does not do

There is no application that routes messages to the modules, stores contract
code or runs contracts; there are no wasm, staking, distribution, IBC or
governance modules. `multitest.executor.Executor` is an abstract base: its
helpers (`instantiate_contract`, `execute_contract`, `send_tokens` and the
rest) work once a subclass supplies `execute`.