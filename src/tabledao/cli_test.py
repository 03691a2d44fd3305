"""
Unit tests for the tabledao CLI.

Run with: pytest src/tabledao/cli_test.py -v
"""

import argparse
from unittest.mock import MagicMock, patch

import pytest

from tabledao import cli
from tabledao.entity import Entity


class TestAssignment:
    @pytest.mark.parametrize(
        "pair,expected",
        [
            ("name=alice", ("name", "alice")),
            ("email=", ("email", "")),
            ("email=null", ("email", None)),
            ("note=a=b", ("note", "a=b")),
        ],
    )
    def test_parse(self, pair, expected):
        assert cli.assignment(pair) == expected

    @pytest.mark.parametrize("pair", ["name", "=alice"])
    def test_invalid(self, pair):
        with pytest.raises(argparse.ArgumentTypeError):
            cli.assignment(pair)


class TestParser:
    def test_find_conditions(self):
        args = cli.build_parser().parse_args(["find", "users", "active=true", "name=bob"])

        assert args.command == "find"
        assert args.table == "users"
        assert cli.as_entity(args.where) == {"active": "true", "name": "bob"}

    def test_pk_default_and_override(self):
        parser = cli.build_parser()

        assert parser.parse_args(["get", "users", "1"]).pk == "id"
        assert parser.parse_args(["get", "users", "1", "--pk", "uid"]).pk == "uid"

    def test_add_requires_fields(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["add", "users"])


class TestCommands:
    @pytest.fixture
    def dao(self):
        dao = MagicMock()
        dao.table_name = "users"
        dao.primary_key_field = "id"
        return dao

    def test_delete_with_yes_skips_prompt(self, dao):
        args = cli.build_parser().parse_args(["delete", "users", "5", "--yes"])

        with patch("tabledao.cli.questionary.confirm") as confirm:
            cli.delete_record(dao, args)

        confirm.assert_not_called()
        dao.delete.assert_called_once_with("5")

    def test_delete_cancelled(self, dao):
        args = cli.build_parser().parse_args(["delete", "users", "5"])

        with patch("tabledao.cli.questionary.confirm") as confirm:
            confirm.return_value.ask.return_value = False
            cli.delete_record(dao, args)

        dao.delete.assert_not_called()

    def test_update_passes_fields(self, dao):
        args = cli.build_parser().parse_args(["update", "users", "id=3", "name=x"])

        cli.update_record(dao, args)

        sent = dao.update.call_args.args[0]
        assert isinstance(sent, Entity)
        assert sent == {"id": "3", "name": "x"}

    def test_main_dispatches_to_template(self):
        with patch("tabledao.cli.DaoTemplate") as template_class:
            template_class.return_value.count.return_value = 2
            cli.main(["count", "users", "active=true"])

        template_class.assert_called_once()
        assert template_class.call_args.args[:2] == ("users", "id")
        assert template_class.return_value.count.call_args.args[0] == {"active": "true"}
