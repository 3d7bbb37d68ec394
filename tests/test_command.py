"""Unit tests for the command builder."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import pytest

from cosmwasm_xtask.command import (
    Execute,
    Instantiate,
    Query,
    Store,
    build_command,
    code_info_command,
    list_keys_command,
    message_json,
    recover_key_command,
)
from cosmwasm_xtask.errors import ConfigurationError, MessageError
from cosmwasm_xtask.key import KeyRef, KeyringBackend
from cosmwasm_xtask.network.gas import GasConfig, GasPrice

SIGNING_FLAGS = ("--chain-id", "--from", "-y", "--gas-prices", "--gas", "--gas-adjustment", "--keyring-backend")


class TestStore:
    """Store commands: positional layout and signing flags."""

    def test_argument_prefix(self, network) -> None:
        spec = build_command(network, Store("./artifact.wasm"))
        assert list(spec.argv[:12]) == [
            "wasmd", "tx", "wasm", "store", "./artifact.wasm",
            "--chain-id", "localnet-1",
            "--node", "http://localhost:26657",
            "--from", "validator",
            "-y",
        ]

    def test_gas_price_and_json_output(self, network) -> None:
        argv = build_command(network, Store("./artifact.wasm")).argv
        assert argv[argv.index("--gas-prices") + 1] == "0.025stake"
        assert argv[-2:] == ("--output", "json")

    def test_deterministic(self, network) -> None:
        first = build_command(network, Store("./artifact.wasm"))
        second = build_command(network, Store("./artifact.wasm"))
        assert first == second
        assert first.argv == second.argv

    def test_unset_optionals_are_absent(self, network) -> None:
        argv = build_command(network, Store("./artifact.wasm")).argv
        for flag in ("--gas", "--gas-adjustment", "--amount", "--note", "--keyring-backend", "--home"):
            assert flag not in argv


class TestInstantiate:
    def test_without_funds_has_no_amount(self, network) -> None:
        argv = build_command(network, Instantiate(7, {"count": 0}, "counter")).argv
        assert "--amount" not in argv

    def test_with_funds_has_exact_amount(self, network) -> None:
        argv = build_command(network, Instantiate(7, {"count": 0}, "counter", funds="1000stake,5uatom")).argv
        assert argv[argv.index("--amount") + 1] == "1000stake,5uatom"

    def test_positional_layout(self, network) -> None:
        argv = build_command(network, Instantiate(7, '{"count": 0}', "counter")).argv
        assert argv[1:9] == ("tx", "wasm", "instantiate", "7", '{"count": 0}', "--label", "counter", "--no-admin")

    def test_admin(self, network) -> None:
        argv = build_command(network, Instantiate(7, {}, "counter", admin="wasm1admin")).argv
        assert argv[argv.index("--admin") + 1] == "wasm1admin"
        assert "--no-admin" not in argv

    def test_code_id_from_text(self, network) -> None:
        assert Instantiate("12", {}, "x").code_id == 12

    @pytest.mark.parametrize("code_id", [0, -1, "abc", None])
    def test_bad_code_id(self, code_id) -> None:
        with pytest.raises(MessageError):
            Instantiate(code_id, {}, "x")

    def test_empty_label(self) -> None:
        with pytest.raises(MessageError):
            Instantiate(1, {}, "")


class TestExecute:
    def test_layout_and_signing(self, network) -> None:
        argv = build_command(network, Execute("wasm1contract", {"increment": {}})).argv
        assert argv[:6] == ("wasmd", "tx", "wasm", "execute", "wasm1contract", '{"increment":{}}')
        assert "--from" in argv

    def test_gas_adjustment_override(self, network) -> None:
        net = replace(network, gas=GasConfig(GasPrice.of("0.025", "stake"), adjustment=1.3))
        default = build_command(net, Execute("wasm1c", {})).argv
        override = build_command(net, Execute("wasm1c", {}, gas_adjustment=2.0)).argv
        assert default[default.index("--gas-adjustment") + 1] == "1.3"
        assert override[override.index("--gas-adjustment") + 1] == "2.0"

    def test_memo(self, network) -> None:
        argv = build_command(network, Execute("wasm1c", {}, memo="hello")).argv
        assert argv[argv.index("--note") + 1] == "hello"


class TestQuery:
    """Queries are read-only and never carry signing flags."""

    def test_no_signing_flags(self, network) -> None:
        spec = build_command(network, Query("wasm1abc", {"get_config": {}}))
        for flag in SIGNING_FLAGS:
            assert flag not in spec.argv
        assert "wasm1abc" in spec.argv
        assert '{"get_config":{}}' in spec.argv

    def test_layout(self, network) -> None:
        argv = build_command(network, Query("wasm1abc", '{"get_config":{}}')).argv
        assert argv == (
            "wasmd", "query", "wasm", "contract-state", "smart", "wasm1abc", '{"get_config":{}}',
            "--node", "http://localhost:26657",
            "--output", "json",
        )


class TestNetworkFlags:
    def test_keyring_home_and_gas_units(self, network) -> None:
        net = replace(
            network,
            signer_=KeyRef("validator", KeyringBackend.TEST),
            home_=Path("/tmp/wasmd-home"),
            gas=GasConfig(GasPrice.of("0.025", "stake"), units="auto"),
        )
        argv = build_command(net, Store("./artifact.wasm")).argv
        assert argv[argv.index("--keyring-backend") + 1] == "test"
        assert argv[argv.index("--home") + 1] == "/tmp/wasmd-home"
        assert argv[argv.index("--gas") + 1] == "auto"

    def test_query_passes_home(self, network) -> None:
        net = replace(network, home_=Path("/tmp/h"))
        argv = build_command(net, Query("wasm1abc", {})).argv
        assert argv[argv.index("--home") + 1] == "/tmp/h"


class TestMessages:
    def test_text_passes_through(self) -> None:
        assert message_json('{"a": 1}') == '{"a": 1}'

    def test_mapping_is_compact(self) -> None:
        assert message_json({"a": {"b": [1, 2]}}) == '{"a":{"b":[1,2]}}'

    def test_invalid_text(self) -> None:
        with pytest.raises(MessageError):
            Execute("wasm1c", "{not json")

    def test_unserialisable_mapping(self) -> None:
        with pytest.raises(MessageError):
            Query("wasm1c", {"a": object()})

    def test_wrong_type(self) -> None:
        with pytest.raises(MessageError):
            message_json(42)  # type: ignore[arg-type]


class TestAuxiliaryCommands:
    def test_code_info(self, network) -> None:
        argv = code_info_command(network, 7).argv
        assert argv[:5] == ("wasmd", "query", "wasm", "code-info", "7")

    def test_list_keys(self, network) -> None:
        argv = list_keys_command(network, KeyringBackend.TEST).argv
        assert argv == ("wasmd", "keys", "list", "--keyring-backend", "test", "--output", "json")

    def test_recover_key_uses_stdin(self, network) -> None:
        spec = recover_key_command(network, "demo", "word " * 24, KeyringBackend.TEST)
        assert "--recover" in spec.argv
        assert spec.stdin is not None and spec.stdin.endswith("\n")
        assert "word" not in " ".join(spec.argv)

    def test_str_is_shell_quoted(self, network) -> None:
        spec = build_command(network, Query("wasm1abc", {"get_config": {}}))
        assert "'{\"get_config\":{}}'" in str(spec)


class PlainNetwork:
    """A caller-supplied network with only the required accessors."""

    def chain_id(self) -> str:
        return "localnet-1"

    def binary(self) -> str:
        return "wasmd"

    def rpc_endpoint(self) -> str:
        return "http://localhost:26657"

    def gas_config(self) -> GasConfig:
        return GasConfig(GasPrice.of("0.025", "stake"))

    def signer(self) -> KeyRef:
        return KeyRef("validator")


class TestCallerSuppliedNetwork:
    def test_store_without_home(self) -> None:
        argv = build_command(PlainNetwork(), Store("./artifact.wasm")).argv
        assert argv[:12] == (
            "wasmd", "tx", "wasm", "store", "./artifact.wasm",
            "--chain-id", "localnet-1",
            "--node", "http://localhost:26657",
            "--from", "validator",
            "-y",
        )
        assert "--home" not in argv

    def test_query_and_keys_without_home(self) -> None:
        assert "--home" not in build_command(PlainNetwork(), Query("wasm1abc", {})).argv
        assert "--home" not in code_info_command(PlainNetwork(), 7).argv
        assert "--home" not in list_keys_command(PlainNetwork()).argv


class TestOperationValidation:
    @pytest.mark.parametrize("code_id", [True, False])
    def test_bool_code_id(self, code_id: bool) -> None:
        with pytest.raises(MessageError):
            Instantiate(code_id, {}, "x")

    @pytest.mark.parametrize("adjustment", [0, -1, -0.5, float("nan")])
    def test_bad_gas_adjustment(self, adjustment: float) -> None:
        with pytest.raises(ConfigurationError):
            Store("./artifact.wasm", gas_adjustment=adjustment)
        with pytest.raises(ConfigurationError):
            Instantiate(1, {}, "x", gas_adjustment=adjustment)
        with pytest.raises(ConfigurationError):
            Execute("wasm1c", {}, gas_adjustment=adjustment)
