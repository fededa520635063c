from pathlib import Path

import pytest

from ddl_formatter.config import LOG_LEVEL_ENV_VAR
from ddl_formatter.main import format_statements, main


CONFIG_FILE = Path(__file__).parent / 'tests_config_schema.yaml'


def test_format_statements():
    assert format_statements(['DROP TABLE a', 'DROP TABLE b']) == 'DROP TABLE a;\nDROP TABLE b;\n'
    assert format_statements([]) == ''


def test_format_statements_pretty():
    result = format_statements(['create table fruit (id integer, name text)'], pretty=True)
    assert result.startswith('CREATE TABLE fruit')
    assert result.endswith(';\n')


def test_main_create(capsys, monkeypatch):
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)

    assert main(['create', '--config', str(CONFIG_FILE)]) == 0

    out = capsys.readouterr().out
    assert out.splitlines() == [
        'CREATE TABLE "fruit" ("id" integer, "name" varchar(32));',
        'CREATE TABLE "orders" ("id" integer, "fruit_id" integer not null);',
        'ALTER TABLE "fruit" ADD PRIMARY KEY ("id");',
        'CREATE UNIQUE INDEX "idx_fruit_name" ON "fruit" ("name");',
        'ALTER TABLE "orders" ADD CONSTRAINT "fk_orders_fruit" FOREIGN KEY ("fruit_id") REFERENCES "fruit" ("id");',
    ]


def test_main_drop(capsys, monkeypatch):
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)

    assert main(['drop', '--config', str(CONFIG_FILE), '--log-level', 'error']) == 0

    out = capsys.readouterr().out
    assert out.splitlines() == [
        'DROP INDEX "idx_fruit_name";',
        'DROP TABLE "orders";',
        'DROP TABLE "fruit";',
    ]


def test_main_missing_config(tmp_path, capsys):
    assert main(['create', '--config', str(tmp_path / 'missing.yaml')]) == 1

    captured = capsys.readouterr()
    assert captured.out == ''
    assert 'failed to load config' in captured.err


def test_main_render_error(tmp_path, capsys, monkeypatch):
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)
    config_file = tmp_path / 'config.yaml'
    config_file.write_text("tables:\n  - name: fruit\n    columns: []\n")

    assert main(['create', '--config', str(config_file)]) == 1

    captured = capsys.readouterr()
    assert captured.out == ''
    assert 'failed to render create statements' in captured.err


def test_main_invalid_yaml(tmp_path, capsys):
    config_file = tmp_path / 'config.yaml'
    config_file.write_text("tables: [\n  - name: fruit\n")

    assert main(['create', '--config', str(config_file)]) == 1

    captured = capsys.readouterr()
    assert captured.out == ''
    assert 'failed to load config' in captured.err


@pytest.mark.parametrize("content", [
    "naming:\n  quoting: '\"'\n",
    "naming: lower_case\n",
    "tables:\n  - name: fruit\n    columns: 5\n",
])
def test_main_bad_config_sections(tmp_path, capsys, monkeypatch, content):
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)
    config_file = tmp_path / 'config.yaml'
    config_file.write_text(content)

    assert main(['create', '--config', str(config_file)]) == 1

    captured = capsys.readouterr()
    assert captured.out == ''
    assert 'failed to load config' in captured.err
