# config.py
import logging
import os
import sys

DATA_ENV_VAR = "MINISQL_DATA"
LOG_LEVEL_ENV_VAR = "MINISQL_LOG_LEVEL"
DEFAULT_DATA_SUBDIR = "data"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"


def resolve_data_root(data_dir=None, environ=None, executable=None):
    """
    Détermine le répertoire de données, et le crée s'il n'existe pas.

    Ordre de priorité: argument explicite, variable MINISQL_DATA, puis
    un sous-répertoire "data" à côté de l'exécutable.

    Returns:
        str: Chemin absolu du répertoire
    """
    environ = os.environ if environ is None else environ
    if data_dir:
        root = data_dir
    elif environ.get(DATA_ENV_VAR):
        root = environ[DATA_ENV_VAR]
    else:
        exe_dir = os.path.dirname(os.path.abspath(executable or sys.argv[0]))
        root = os.path.join(exe_dir, DEFAULT_DATA_SUBDIR)

    root = os.path.realpath(os.path.abspath(root))
    if not os.path.exists(root):
        os.makedirs(root)
    return root


def configure_logging(level=None, environ=None):
    environ = os.environ if environ is None else environ
    level = (level or environ.get(LOG_LEVEL_ENV_VAR) or DEFAULT_LOG_LEVEL).upper()
    logging.basicConfig(level=getattr(logging, level, logging.WARNING), format=LOG_FORMAT)
    return level
