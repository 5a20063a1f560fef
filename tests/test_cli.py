"""CLI behavior tests."""

import json

import pytest

import pokedex.cli as cli
from pokedex.service import PokedexService

from conftest import make_pokemon, pokemon_url


@pytest.fixture
def wired_cli(monkeypatch, service):
    """Route every CLI command to the fake-upstream service."""
    monkeypatch.setattr(cli, "_build_service", lambda _args: service)
    monkeypatch.setattr(cli, "load_config", lambda _path: {})
    monkeypatch.setattr(cli, "configure_logging", lambda _level: None)
    return service


def test_list_json_output(wired_cli, starter_catalog, capsys):
    cli.main(["list", "--limit", "2", "--search", "char", "--format", "json"])

    body = json.loads(capsys.readouterr().out)
    assert [p["name"] for p in body["pokemon"]] == ["charmander", "charmeleon"]
    assert body["totalCount"] == 2


def test_list_text_output(wired_cli, starter_catalog, capsys):
    cli.main(["list", "--type", "electric"])

    out = capsys.readouterr().out
    assert "pikachu" in out
    assert "1 shown, 7 matching by name" in out


def test_show_text_output(wired_cli, upstream, capsys):
    upstream.routes[pokemon_url("snorlax")] = make_pokemon(143, "snorlax", ["normal"])

    cli.main(["show", "Snorlax"])

    out = capsys.readouterr().out
    assert "#143 snorlax" in out
    assert "Evolution: unavailable" in out


def test_show_not_found_exits_nonzero(wired_cli, capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["show", "missingno"])

    assert excinfo.value.code == 1
    assert 'Pokémon "missingno" not found' in capsys.readouterr().err


def test_cache_status_warms_index(wired_cli, starter_catalog, capsys):
    cli.main(["cache", "status"])

    status = json.loads(capsys.readouterr().out)
    assert status["entryCount"] == 7
    assert status["fresh"] is True


def test_no_command_prints_help(capsys):
    cli.main([])

    assert "usage: pokedex" in capsys.readouterr().out


def test_build_service_uses_config(monkeypatch):
    args = type("Args", (), {"config_data": {"list": {"default_limit": 5}}})()

    service = cli._build_service(args)

    assert isinstance(service, PokedexService)
    assert service.default_limit == 5
