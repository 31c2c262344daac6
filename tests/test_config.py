import logging
import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from minisql.config import DATA_ENV_VAR, configure_logging, resolve_data_root


def test_explicit_directory_wins(tmp_path):
    target = tmp_path / "explicit"
    root = resolve_data_root(str(target), environ={DATA_ENV_VAR: str(tmp_path / "env")})
    assert root == os.path.realpath(str(target))
    assert target.is_dir()
    assert not (tmp_path / "env").exists()


def test_environment_override(tmp_path):
    root = resolve_data_root(environ={DATA_ENV_VAR: str(tmp_path / "env")})
    assert root == os.path.realpath(str(tmp_path / "env"))


def test_default_is_beside_executable(tmp_path):
    exe = tmp_path / "bin" / "minisql"
    root = resolve_data_root(environ={}, executable=str(exe))
    assert root == os.path.realpath(str(tmp_path / "bin" / "data"))
    assert Path(root).is_dir()


def test_configure_logging_reads_environment():
    assert configure_logging(environ={"MINISQL_LOG_LEVEL": "debug"}) == "DEBUG"
    assert configure_logging("info", environ={}) == "INFO"
    assert configure_logging(environ={}) == "WARNING"
    logging.getLogger().setLevel(logging.WARNING)
