# storage.py
import logging
import os
import re
import stat
import tempfile

from . import codec
from .errors import InvalidTableNameError, StorageError

logger = logging.getLogger(__name__)

TABLE_SUFFIX = ".csv"
TABLE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_-]*$")


def validate_table_name(table_name):
    """Refuse les noms qui pourraient sortir du répertoire de données."""
    if not TABLE_NAME_PATTERN.match(table_name or ""):
        raise InvalidTableNameError(f"Nom de table invalide: '{table_name}'")
    return table_name


class TableStore:
    def __init__(self, root_dir="./data"):
        """
        Gestionnaire de stockage des tables: un fichier texte par table.

        Args:
            root_dir (str): Répertoire racine des fichiers de table
        """
        self.root_dir = os.path.abspath(root_dir)
        if not os.path.exists(self.root_dir):
            os.makedirs(self.root_dir)

    def resolve(self, table_name):
        """Renvoie le chemin du fichier d'une table."""
        validate_table_name(table_name)
        return os.path.join(self.root_dir, f"{table_name}{TABLE_SUFFIX}")

    def exists(self, table_name):
        return os.path.exists(self.resolve(table_name))

    def list_tables(self):
        """Liste les tables présentes dans le répertoire de données."""
        names = []
        for entry in os.listdir(self.root_dir):
            name, suffix = os.path.splitext(entry)
            if suffix == TABLE_SUFFIX and TABLE_NAME_PATTERN.match(name):
                names.append(name)
        return sorted(names)

    def load(self, table_name):
        """
        Charge toutes les rangées d'une table (la rangée 0 est l'en-tête).

        Returns:
            list: Les rangées, ou une liste vide si le fichier est absent ou illisible
        """
        path = self.resolve(table_name)
        try:
            with open(path, "r", encoding="utf-8") as f:
                rows = codec.decode(f.read())
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Lecture impossible de %s: %s", path, e)
            return []

        logger.debug("Table '%s' chargée: %d rangée(s)", table_name, len(rows))
        return rows

    def store(self, table_name, rows):
        """
        Réécrit entièrement le fichier d'une table.

        Le contenu est écrit dans un fichier temporaire puis renommé, de sorte
        qu'un échec laisse l'ancienne version intacte.
        """
        path = self.resolve(table_name)
        fd, temp_path = tempfile.mkstemp(prefix=f".{table_name}.", suffix=".tmp", dir=self.root_dir)
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(codec.encode(rows))
                f.flush()
                os.fsync(f.fileno())
            os.chmod(temp_path, self._file_mode(path))
            os.replace(temp_path, path)
        except OSError as e:
            if os.path.exists(temp_path):
                os.remove(temp_path)
            raise StorageError(f"Écriture impossible de '{path}': {e}") from e

        logger.debug("Table '%s' enregistrée: %d rangée(s)", table_name, len(rows))

    @staticmethod
    def _file_mode(path):
        """Droits du fichier existant, sinon ceux d'un fichier neuf selon l'umask."""
        try:
            return stat.S_IMODE(os.stat(path).st_mode)
        except FileNotFoundError:
            umask = os.umask(0)
            os.umask(umask)
            return 0o666 & ~umask

    def drop(self, table_name):
        """Supprime le fichier d'une table."""
        path = self.resolve(table_name)
        try:
            os.remove(path)
        except OSError as e:
            raise StorageError(f"Suppression impossible de '{path}': {e}") from e
        logger.debug("Table '%s' supprimée (%s)", table_name, path)
        return path
