from __future__ import annotations

import json

import pytest

from faqbot_cli.cli import main


RECORDS = [
    {"question": "What are the fees?", "answer": "Fees are 50000.", "keywords": ["fees", "admission"]},
    {"question": "Is there a hostel?", "answer": "Yes, on campus.", "keywords": ["hostel"]},
]


@pytest.fixture
def kb(tmp_path):
    p = tmp_path / "faq.json"
    p.write_text(json.dumps(RECORDS), encoding="utf-8")
    return str(p)


@pytest.fixture
def no_config(tmp_path):
    return str(tmp_path / "absent.yaml")


def test_cli_help_top_level(capsys):
    try:
        main(["--help"])
        assert False, "expected SystemExit"
    except SystemExit as e:
        assert e.code == 0

    out = capsys.readouterr().out
    assert "faqbot" in out
    for cmd in ("ask", "chat", "suggest", "vocab"):
        assert cmd in out


def test_cli_parser_errors():
    # Missing subcommand should exit with SystemExit from argparse
    try:
        main([])
        assert False, "expected SystemExit"
    except SystemExit as e:
        assert e.code != 0


def test_ask_prints_answer_and_meta(kb, no_config, capsys):
    rc = main(["--kb", kb, "--config", no_config, "ask", "tell", "me", "about", "fees"])
    assert rc == 0
    out = capsys.readouterr().out
    assert "Fees are 50000." in out
    assert "Match: 70.7% | Q: What are the fees?..." in out


def test_ask_json(kb, no_config, capsys):
    rc = main(["--kb", kb, "--config", no_config, "ask", "--json", "hostel"])
    assert rc == 0
    data = json.loads(capsys.readouterr().out)
    assert data["intent"] == "Is there a hostel?"
    assert data["confidence"] == pytest.approx(1.0)


def test_ask_with_empty_knowledge_base(tmp_path, no_config, capsys):
    rc = main(["--kb", str(tmp_path / "missing.json"), "--config", no_config, "ask", "fees"])
    assert rc == 2
    assert "Knowledge base is empty" in capsys.readouterr().out


def test_vocab_and_suggest(kb, no_config, capsys):
    assert main(["--kb", kb, "--config", no_config, "vocab"]) == 0
    assert capsys.readouterr().out.split() == ["admission", "fees", "hostel"]

    assert main(["--kb", kb, "--config", no_config, "suggest", "host"]) == 0
    assert capsys.readouterr().out.strip() == "Is there a hostel?"


def test_chat_loop(kb, no_config, capsys, monkeypatch):
    lines = iter(["", "fees please", "quit"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))
    rc = main(["--kb", kb, "--config", no_config, "chat"])
    assert rc == 0
    out = capsys.readouterr().out
    assert "FAQ bot ready (2 questions)" in out
    assert out.count("Fees are 50000.") == 1


def test_chat_ends_on_eof(kb, no_config, capsys, monkeypatch):
    def _eof(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", _eof)
    assert main(["--kb", kb, "--config", no_config, "chat"]) == 0
