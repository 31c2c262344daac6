# main.py
import argparse
import logging

from .cli import MiniSQLShell
from .config import configure_logging, resolve_data_root
from .engine import CommandEngine
from .storage import TableStore

logger = logging.getLogger(__name__)


def main(argv=None):
    parser = argparse.ArgumentParser(description='MiniSQL - Tables stockées dans des fichiers texte délimités')
    parser.add_argument('--data-dir', help='Répertoire des tables (sinon MINISQL_DATA, sinon ./data à côté du programme)')
    parser.add_argument('--exec', help='Exécuter des instructions et quitter')
    parser.add_argument('--file', help='Exécuter un script SQL et quitter')
    parser.add_argument('--log-level', help='Niveau de journalisation (DEBUG, INFO, WARNING, ...)')

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    data_root = resolve_data_root(args.data_dir)
    logger.info("Répertoire de données: %s", data_root)
    shell = MiniSQLShell(CommandEngine(TableStore(data_root)))

    # Exécuter des instructions et quitter
    if args.exec:
        shell.execute_text(args.exec)
        return

    if args.file:
        try:
            with open(args.file, "r", encoding="utf-8") as f:
                script = f.read()
        except OSError as e:
            parser.error(f"Lecture impossible du script '{args.file}': {e}")
        shell.execute_text(script)
        return

    # Démarrer le shell interactif
    shell.intro = f"{MiniSQLShell.intro}\nRépertoire de données: {data_root}"
    shell.cmdloop()


if __name__ == "__main__":
    main()
