from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from fake_udev import FakeBus, FakeStore, razer_node
from razerctl import cli
from razerctl.core.model import DeviceSignature
from razerctl.core.service import RazerService

runner = CliRunner()


@pytest.fixture
def store(monkeypatch: pytest.MonkeyPatch) -> FakeStore:
    nodes = [
        razer_node("AB12", charge_level="87", poll_rate="500"),
        razer_node(None),
        razer_node("BAD1", charge_level="abc", dpi="800:800"),
    ]
    fake_store = FakeStore(reject={"poll_rate"})

    def build(**kwargs) -> RazerService:
        return RazerService(bus=FakeBus(nodes), store=fake_store, signature=DeviceSignature())

    monkeypatch.setattr(cli, "RazerService", build)
    return fake_store


def test_list_command(store: FakeStore) -> None:
    result = runner.invoke(cli.app, ["list"])
    assert result.exit_code == 0
    assert "1:\nType: Razer DeathAdder V2 Pro\nSerial: AB12" in result.stdout
    assert "2:\nType: Razer DeathAdder V2 Pro\nSerial: BAD1" in result.stdout
    assert "3:" not in result.stdout


def test_list_command_without_devices(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        cli,
        "RazerService",
        lambda **kwargs: RazerService(bus=FakeBus([]), store=FakeStore(), signature=DeviceSignature()),
    )
    result = runner.invoke(cli.app, ["list"])
    assert result.exit_code == 0
    assert "No Razer devices found" in result.stdout


def test_query_command(store: FakeStore) -> None:
    result = runner.invoke(cli.app, ["query", "AB12"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["charge_level"] == 87
    assert payload["dpi"] is None
    assert payload["poll_rate"] == 500
    assert "errors" not in payload


def test_query_command_reports_isolated_errors(store: FakeStore) -> None:
    result = runner.invoke(cli.app, ["query", "BAD1"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["dpi"] == {"x": 800, "y": 800}
    assert payload["errors"]["charge_level"]["kind"] == "invalid_attribute"


def test_get_command(store: FakeStore) -> None:
    result = runner.invoke(cli.app, ["get", "AB12", "charge_level"])
    assert result.exit_code == 0
    assert json.loads(result.stdout) == 87


def test_get_command_error_names_kind_and_attribute(store: FakeStore) -> None:
    result = runner.invoke(cli.app, ["get", "BAD1", "charge_level"])
    assert result.exit_code == 1
    assert "Error: invalid_attribute: charge_level:" in result.stderr
    assert "Traceback" not in result.stderr


def test_info_command(store: FakeStore) -> None:
    result = runner.invoke(cli.app, ["info", "AB12"])
    assert result.exit_code == 0
    assert json.loads(result.stdout) == {
        "device_type": "Razer DeathAdder V2 Pro",
        "serial": "AB12",
        "firmware_version": "v1.02",
    }


def test_unknown_serial_is_clean_error(store: FakeStore) -> None:
    result = runner.invoke(cli.app, ["query", "ZZ99"])
    assert result.exit_code == 1
    assert "Error: device with serial `ZZ99` not found" in result.stderr
    assert "Traceback" not in result.stdout


def test_set_dpi_command(store: FakeStore) -> None:
    result = runner.invoke(cli.app, ["set-dpi", "AB12", "800"])
    assert result.exit_code == 0
    assert "Set dpi=800:800 on AB12" in result.stdout
    assert store.writes[-1][1:] == ("dpi", b"\x03\x20\x03\x20")


def test_set_poll_rate_unsupported(store: FakeStore) -> None:
    result = runner.invoke(cli.app, ["set-poll-rate", "AB12", "250"])
    assert result.exit_code == 1
    assert "Error: unsupported_value: poll_rate:" in result.stderr
    assert store.writes == []


def test_set_poll_rate_rejected_by_device(store: FakeStore) -> None:
    result = runner.invoke(cli.app, ["set-poll-rate", "AB12", "1000"])
    assert result.exit_code == 1
    assert "Error: write_rejected: poll_rate:" in result.stderr
    assert len(store.writes) == 1
