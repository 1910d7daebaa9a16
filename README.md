# cwdaemon

Pure-Python building blocks for tools that work with CosmWasm chains:
Cosmos keys and bech32 addresses, secp256k1 signature checks, a locked JSON
state file, coin and upload-permission helpers, and a small in-memory
environment with reference contracts that run on it.

## Modules

- `cwdaemon.errors`: one exception hierarchy rooted at `DaemonError`, with
  subclasses such as `ConversionError`, `Bech32DecodeError`, `HexError`,
  `Secp256k1Error`, `TxFailedError`, `OpenFileError` and
  `StateAlreadyLockedError`. `DaemonError.ibc_err(msg)` builds an `IbcError`.
- `cwdaemon.env`: `DaemonEnvVars` reads settings from the environment, for
  example `STATE_FILE` (default `state.json`), `CW_ORCH_GAS_BUFFER`,
  `CW_ORCH_MIN_GAS` (default 150000), `CW_ORCH_MAX_TX_QUERY_RETRIES`
  (default 50), `CW_ORCH_MIN_BLOCK_TIME` (default one second),
  `CW_ORCH_MAX_BLOCK_TIME`, `CW_ORCH_WALLET_BALANCE_ASSERTION` and
  `CW_ORCH_LOGS_ACTIVATION_MESSAGE`, plus the `MAIN_MNEMONIC`,
  `TEST_MNEMONIC` and `LOCAL_MNEMONIC` variables. A value that cannot be
  parsed raises `ValueError`. `parse_block_time_duration` turns `"321ms"`,
  `"12s"` or `"42"` (seconds) into a `timedelta`; `default_state_folder()`
  returns `~/.cw-orchestrator`.
- `cwdaemon.json_lock`: `JsonLockedState` creates the file if needed, takes
  an exclusive non-blocking lock on it (raising `StateAlreadyLockedError` if
  someone else holds it), keeps the JSON in memory and writes it back on
  `close()` or at the end of a `with` block. `read(filename)` reads a JSON
  file without locking. `patch_state_if_old` flattens a state keyed by chain
  name into one keyed by chain id.
- `cwdaemon.signature`: `verify(pub_key, signature, blob)` checks a base64
  compact secp256k1 signature of the SHA-256 of `blob` against a base64
  public key. It returns `None` when valid and raises otherwise; high-S
  signatures are rejected.
- `cwdaemon.bech32`: `encode(hrp, data)` and `decode(text)`. Decoding
  accepts bech32 and bech32m checksums; encoding produces lower-case bech32.
  Invalid input raises `ValueError`.
- `cwdaemon.public_key`: the `PublicKey` dataclass, built from a compressed
  secp256k1 key, an account or operator address, a `terravalconspub` key, a
  hex tendermint address or a hex raw address. It derives `account`,
  `operator_address`, `application_public_key`,
  `operator_address_public_key`, `tendermint` and `tendermint_pubkey`
  strings for a given prefix.
- `cwdaemon.coins`: `Coin`, `ProtoCoin`, `AccessType` and `AccessConfig`;
  `parse_cw_coins` validates amounts and denominations,
  `proto_parse_cw_coins` produces string amounts, `access_config_to_cosmrs`
  checks the addresses of an `ANY_OF_ADDRESSES` config, and
  `compress_wasm(path)` returns the gzip-compressed bytes of a file.
- `cwdaemon.contract_env`: `Storage`, `Response`, `MessageInfo`,
  `ContractStdError`, `set_contract_version` and `get_contract_version`.
- `cwdaemon.counter`: a counter contract anyone may increment and only its
  owner may reset (other senders get `Unauthorized`). Messages may be given
  as dataclasses or as JSON such as `{"increment": {}}`.
- `cwdaemon.mock_contract` and `cwdaemon.mock_contract_u64`: a contract with
  many message shapes, with string and with u64 `t` fields.

## Examples

Deriving addresses from a compressed secp256k1 key:

```python
from cwdaemon.public_key import PublicKey

key = PublicKey.from_public_key(bytes.fromhex(
    "02cf7ed0b5832538cd89b55084ce93399b186e381684b31388763801439cbdd20a"
))
print(key.account("terra"))           # terra1jnzv225hwl3uxc5wtnlgr8mwy6nlt0vztv3qqm
print(key.operator_address("terra"))  # terravaloper1...
```

Editing a state file under a lock:

```python
from cwdaemon.json_lock import JsonLockedState

with JsonLockedState("state.json") as state:
    state.prepare("juno-1", "default")
    state.get_mut("juno-1")["code_ids"]["counter_contract"] = 1
# the file is written when the block exits
```

Running the counter contract in memory:

```python
from cwdaemon.contract_env import MessageInfo, Storage
from cwdaemon import counter

storage = Storage()
counter.instantiate(storage, MessageInfo(sender="creator"), counter.InstantiateMsg(count=17))
counter.execute(storage, MessageInfo(sender="anyone"), counter.Increment())
print(counter.count(storage).count)  # 18
```

## What it does not do

The package does not connect to a chain. It has no gRPC client, does not
build, sign, simulate or broadcast transactions, does not derive wallets
from mnemonics (the mnemonic variables are only read), and does not upload
or instantiate contracts anywhere but the in-memory `Storage`. It has no
command-line program.

## Tests

The tests use pytest, which the `test` extra installs.